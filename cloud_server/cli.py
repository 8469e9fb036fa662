import signal
from types import FrameType

import httpx
import structlog
import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from cloud_server.config import settings

logger = structlog.get_logger()

console = Console()
cli_app = typer.Typer(name="cloud-server", help="Cloud server status and control CLI")

CONTROL_ACTIONS = ("start", "stop", "restart")


def _default_url() -> str:
    return f"http://localhost:{settings.port}"


class ShutdownLoggingServer(uvicorn.Server):
    """uvicorn server that records which signal triggered shutdown."""

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        try:
            name = signal.Signals(sig).name
        except ValueError:
            name = str(sig)
        logger.info("shutdown_signal_received", signal=name)
        super().handle_exit(sig, frame)
        # uvicorn re-raises captured signals once serving stops; a signalled
        # shutdown is a normal exit (code 0) here.
        captured = getattr(self, "_captured_signals", None)
        if captured is not None:
            captured.clear()


def _get_json(url: str) -> dict:
    try:
        response = httpx.get(url, timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        console.print(f"[bold red]Request failed:[/bold red] {e}")
        raise typer.Exit(code=1)
    return response.json()


@cli_app.command("serve")
def serve(
    host: str = typer.Option(None, "--host", help="Listen address (default: HOST setting)"),
    port: int = typer.Option(None, "--port", help="Listen port (default: PORT setting)"),
):
    """Run the API server."""
    from cloud_server.main import create_app

    bind_host = host or settings.host
    bind_port = port or settings.port

    console.print(f"Server running on port {bind_port}")
    console.print(f"http://localhost:{bind_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    config = uvicorn.Config(
        create_app(settings),
        host=bind_host,
        port=bind_port,
        log_level=settings.log_level.lower(),
        # Requests are logged as structlog JSON by RequestLoggingMiddleware;
        # keep uvicorn from installing its own plain-text handlers.
        log_config=None,
        access_log=False,
    )
    ShutdownLoggingServer(config).run()


@cli_app.command("health")
def health(
    url: str = typer.Option(None, "--url", help="Base URL of a running server"),
):
    """Show the health of a running server."""
    data = _get_json(f"{url or _default_url()}/api/health")

    table = Table(title="Health")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Status", str(data.get("status")))
    table.add_row("Timestamp", str(data.get("timestamp")))
    table.add_row("Uptime (s)", str(data.get("uptime")))
    console.print(table)


@cli_app.command("stats")
def stats(
    url: str = typer.Option(None, "--url", help="Base URL of a running server"),
):
    """Show the resource snapshot of a running server."""
    data = _get_json(f"{url or _default_url()}/api/stats")

    cpu = data.get("cpu", {})
    memory = data.get("memory", {})
    disk = data.get("disk", {})
    network = data.get("network", {})
    uptime = data.get("uptime", {})

    table = Table(title="Server Stats")
    table.add_column("Resource", style="cyan")
    table.add_column("Value")
    table.add_row("CPU", f"{cpu.get('usage')}%")
    table.add_row("Memory", f"{memory.get('free')} MB free of {memory.get('total')} MB ({memory.get('usage')}% used)")
    table.add_row("Disk", f"{disk.get('used')} GB used, {disk.get('free')} GB free of {disk.get('total')} GB")
    table.add_row("Network", f"{network.get('traffic')} Mbps")
    table.add_row("Server uptime", str(uptime.get("server")))
    table.add_row("System uptime", str(uptime.get("system")))
    console.print(table)


@cli_app.command("control")
def control(
    action: str = typer.Argument(help="One of: start, stop, restart"),
    url: str = typer.Option(None, "--url", help="Base URL of a running server"),
):
    """Send a lifecycle action to a running server."""
    if action not in CONTROL_ACTIONS:
        console.print(f"[bold red]Unknown action:[/bold red] {action} (expected one of {', '.join(CONTROL_ACTIONS)})")
        raise typer.Exit(code=2)

    try:
        # Restart waits server-side; allow for it.
        response = httpx.post(f"{url or _default_url()}/api/control/{action}", timeout=30.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        console.print(f"[bold red]Request failed:[/bold red] {e}")
        raise typer.Exit(code=1)

    data = response.json()
    if not data.get("success"):
        console.print(f"[bold red]{data.get('message')}[/bold red]")
        raise typer.Exit(code=1)
    console.print(f"[bold green]{data.get('message')}[/bold green]")


if __name__ == "__main__":
    cli_app()
