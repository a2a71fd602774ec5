"""Global error handlers: every failure renders as ``{success: false, error}``."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from officing.outcomes import WriteConflictError

logger = structlog.get_logger()

RETRY_AFTER_SECONDS = "1"


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Authorization and routing errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"success": False, "error": "Validation error", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(WriteConflictError)
    async def write_conflict_handler(request: Request, exc: WriteConflictError) -> JSONResponse:
        """Lost a conditional-write race; nothing was committed, so a retry is safe."""
        logger.warning("write_conflict", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=503,
            content={"success": False, "error": "Conflicting concurrent update, please retry"},
            headers={"Retry-After": RETRY_AFTER_SECONDS},
        )

    @app.exception_handler(SQLAlchemyError)
    async def persistence_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Store unavailable or write failed mid-transaction; the session was rolled back."""
        logger.error(
            "persistence_failure",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=503,
            content={"success": False, "error": "Service temporarily unavailable"},
            headers={"Retry-After": RETRY_AFTER_SECONDS},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions: always return JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal server error"},
        )
