"""
Exception handlers for the neo-access FastAPI application.

Every ``NeoAccessError`` is rendered through ``create_error_response`` with
the status code from ``HTTP_STATUS_MAP``. Storage faults never leak their
internal detail to the caller.
"""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from ..core.exceptions import (
    NeoAccessError,
    StorageUnavailableError,
    DatabaseError,
    create_error_response,
    get_http_status_code,
)


class ExceptionHandlerRegistry:
    """Registers the error envelope handlers on an application."""

    def __init__(self, is_production: bool = True):
        """
        Initialize exception handler registry.

        Args:
            is_production: Hide messages of unexpected errors when True
        """
        self.is_production = is_production

    def register_handlers(self, app: FastAPI) -> None:
        """Register exception handlers for the application.

        Args:
            app: FastAPI application instance
        """
        @app.exception_handler(NeoAccessError)
        async def neo_access_error_handler(request: Request, exc: NeoAccessError):
            """Handle neo-access exceptions."""
            status_code = get_http_status_code(exc)
            if isinstance(exc, StorageUnavailableError):
                logger.error(f"Storage unavailable while serving {request.url.path}: {exc.message}")
                body = {
                    "error": {
                        "code": exc.error_code,
                        "message": "Service temporarily unavailable",
                        "details": {},
                        "type": exc.__class__.__name__,
                    }
                }
                return JSONResponse(status_code=status_code, content=body)

            if isinstance(exc, DatabaseError):
                logger.error(f"Database error while serving {request.url.path}: {exc.message}")
                body = {
                    "error": {
                        "code": exc.error_code,
                        "message": "Internal server error",
                        "details": {},
                        "type": exc.__class__.__name__,
                    }
                }
                return JSONResponse(status_code=status_code, content=body)

            logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.error_code}")
            return JSONResponse(status_code=status_code, content=create_error_response(exc))

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle unexpected exceptions."""
            logger.exception(f"Unhandled exception while serving {request.url.path}: {exc}")

            message = "An unexpected error occurred" if self.is_production else str(exc)
            body = {
                "error": {
                    "code": "InternalServerError",
                    "message": message,
                    "details": {},
                    "type": exc.__class__.__name__,
                }
            }
            return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def register_exception_handlers(app: FastAPI, is_production: bool = True) -> None:
    """
    Register exception handlers for a FastAPI application.

    Args:
        app: FastAPI application instance
        is_production: Whether running in production mode
    """
    registry = ExceptionHandlerRegistry(is_production)
    registry.register_handlers(app)
