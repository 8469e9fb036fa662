import asyncio
import time

import pytest


class TestControlWithSimulatedDelays:
    async def test_start(self, client):
        started = time.perf_counter()
        response = await client.post("/api/control/start")
        elapsed = time.perf_counter() - started

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Server started successfully"
        assert "timestamp" in data
        assert 0.99 <= elapsed < 1.5

    async def test_stop(self, client):
        response = await client.post("/api/control/stop")
        assert response.status_code == 200
        assert response.json()["message"] == "Server stopped successfully"

    async def test_restart(self, client):
        started = time.perf_counter()
        response = await client.post("/api/control/restart")
        elapsed = time.perf_counter() - started

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Server restarted successfully",
            "timestamp": response.json()["timestamp"],
        }
        assert 1.99 <= elapsed < 2.5

    async def test_delay_does_not_block_other_requests(self, client):
        control = asyncio.create_task(client.post("/api/control/start"))
        await asyncio.sleep(0.05)

        started = time.perf_counter()
        health = await client.get("/api/health")
        assert health.status_code == 200
        assert time.perf_counter() - started < 0.5
        assert not control.done()

        assert (await control).status_code == 200


class TestControlRequestBodies:
    async def test_json_body_accepted(self, fake_client, fake_controller):
        response = await fake_client.post("/api/control/start", json={"test": "data"})
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert fake_controller.actions == ["start"]

    async def test_form_body_accepted(self, fake_client):
        response = await fake_client.post("/api/control/stop", data={"reason": "maintenance"})
        assert response.status_code == 200

    async def test_plain_text_body_ignored(self, fake_client):
        response = await fake_client.post(
            "/api/control/restart", content=b"not json", headers={"Content-Type": "text/plain"}
        )
        assert response.status_code == 200

    @pytest.mark.parametrize("body", [b"a=1&", b"flag", b"a=1&&b=2"])
    async def test_lenient_form_bodies_accepted(self, fake_client, fake_controller, body):
        response = await fake_client.post(
            "/api/control/start",
            content=body,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 200
        assert fake_controller.actions == ["start"]

    @pytest.mark.parametrize("body", [b"42", b'"x"', b"NaN"])
    async def test_non_container_json_rejected(self, fake_client, fake_controller, body):
        response = await fake_client.post(
            "/api/control/start",
            content=body,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert fake_controller.actions == []

    @pytest.mark.parametrize("action", ["start", "stop", "restart"])
    async def test_malformed_json_rejected_before_controller(self, fake_client, fake_controller, action):
        response = await fake_client.post(
            f"/api/control/{action}",
            content=b"{ invalid json }",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"
        assert fake_controller.actions == []


class TestControlDelegation:
    @pytest.mark.parametrize("action", ["start", "stop", "restart"])
    async def test_delegates_to_controller(self, fake_client, fake_controller, action):
        response = await fake_client.post(f"/api/control/{action}")
        assert response.status_code == 200
        assert response.json()["message"] == f"fake {action} ok"
        assert fake_controller.actions == [action]

    async def test_controller_failure_passed_through(self, fake_client, fake_controller):
        fake_controller.success = False
        response = await fake_client.post("/api/control/start")
        assert response.status_code == 200
        assert response.json()["success"] is False

    async def test_get_not_routed(self, fake_client, fake_controller):
        response = await fake_client.get("/api/control/start")
        assert response.status_code == 404
        assert fake_controller.actions == []
