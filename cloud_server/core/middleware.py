import time

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = structlog.get_logger()

# Hardening headers applied to every response. No Content-Security-Policy:
# the bundled dashboard uses inline script.
SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request as structured JSON."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = round((time.perf_counter() - start) * 1000, 1)

        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            latency_ms=latency_ms,
        )
        return response


CORS_ALLOW_METHODS = "DELETE, GET, HEAD, OPTIONS, PATCH, POST, PUT"


class AllowAllOriginsMiddleware(BaseHTTPMiddleware):
    """Allow-all CORS for requests CORSMiddleware leaves alone.

    Starlette only answers requests that carry an ``Origin`` header. With an
    allow-all policy every response gets ``Access-Control-Allow-Origin: *``
    and any OPTIONS request is answered directly, not routed.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS" and "access-control-request-method" not in request.headers:
            headers = {
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
            }
            requested = request.headers.get("access-control-request-headers")
            if requested:
                headers["Access-Control-Allow-Headers"] = requested
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the standard hardening headers unless a handler already set them."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class UnhandledErrorMiddleware:
    """Innermost safety net: turns any uncaught exception into a 500 JSON body.

    Plain ASGI rather than BaseHTTPMiddleware, which re-raises app exceptions
    after dispatch returns. In production the raw exception text is replaced
    by a generic message.
    """

    def __init__(self, app: ASGIApp, production: bool = False):
        self.app = app
        self.production = production

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if response_started:
                raise
            request = Request(scope)
            logger.exception(
                "unhandled_error",
                method=request.method,
                path=request.url.path,
                error=str(exc),
            )
            response = JSONResponse(
                status_code=500,
                content={
                    "error": "Something went wrong!",
                    "message": "Server error" if self.production else str(exc),
                },
            )
            await response(scope, receive, send)
