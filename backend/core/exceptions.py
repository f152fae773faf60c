from fastapi import Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Required configuration is missing or invalid.

    Raised before any Firebase client is constructed, so a process that
    hits it never runs with an unauthenticated client.
    """

    def __init__(self, message: str, variable: str | None = None):
        super().__init__(message)
        self.variable = variable


class FirebaseNotInitializedError(RuntimeError):
    """Firebase services were requested before ``init_firebase()`` ran."""


async def not_found_handler(request: Request, exc):
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "message": f"'{request.url.path}' not found",
            "path": request.url.path,
        },
    )


async def internal_error_handler(request: Request, exc):
    logger.error(f"Internal error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "Check server logs.",
        },
    )


async def config_error_handler(request: Request, exc):
    logger.error(f"Configuration error ({getattr(exc, 'variable', None)}): {exc}")
    return JSONResponse(
        status_code=503,
        content={
            "error": "Service Unavailable",
            "message": "Server is not configured. Check server logs.",
        },
    )
