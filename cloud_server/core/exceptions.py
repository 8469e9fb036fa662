from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class CloudServerError(Exception):
    """Base exception for API errors rendered as ``{error, message}``."""

    def __init__(self, error: str, message: str, status: int = 500):
        self.error = error
        self.message = message
        self.status = status
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class NotFoundError(CloudServerError):
    def __init__(self, path: str):
        super().__init__(
            error="Not Found",
            message=f"The requested resource at {path} was not found",
            status=404,
        )
        self.path = path


class MalformedBodyError(CloudServerError):
    def __init__(self, message: str = "Request body could not be parsed."):
        super().__init__(error="Bad Request", message=message, status=400)


class ConfigurationError(Exception):
    """Raised at startup when settings describe an unusable combination."""


async def cloud_error_handler(request: Request, exc: CloudServerError) -> JSONResponse:
    """Global exception handler for CloudServerError and subclasses."""
    return JSONResponse(status_code=exc.status, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing misses (unknown path or unsupported method) as Not Found."""
    if exc.status_code in (404, 405):
        return await cloud_error_handler(request, NotFoundError(request.url.path))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "Request failed", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )
