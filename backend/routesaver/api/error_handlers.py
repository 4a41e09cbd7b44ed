"""Error Handlers — global exception handlers for the RouteSaver API.

Invariants:
    - RouteSaverError → its http_status with {success: false, message}
    - RequestValidationError → 400, field messages joined with ". "; a missing
      top-level field reads "Preencha todos os campos", a missing nested one is named
    - HTTPException (unknown path, wrong method) → same envelope
    - Exception (catch-all) → 500 generic message; traceback logged, never sent

Design Decisions:
    - Four-layer handler: domain, validation, HTTP, catch-all
    - Domain 4xx logged at warning, 5xx at error: client mistakes are not incidents
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from routesaver.core import messages
from routesaver.core.errors import InternalError, RouteSaverError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RouteSaverError)
    async def domain_error_handler(request: Request, exc: RouteSaverError):
        """Handle all RouteSaver domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={**exc.log_extra(), "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "message": build_validation_message(exc.errors()),
            },
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        error = InternalError()
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def build_validation_message(errors: list[dict]) -> str:
    """One message per failing field, duplicates dropped, joined with '. '."""
    parts: list[str] = []
    for e in errors:
        path = [str(loc) for loc in e["loc"] if loc != "body"]
        # a missing top-level field is a blank form input; nested ones are named
        if e["type"] == "missing" and len(path) <= 1:
            text = messages.FILL_ALL_FIELDS
        else:
            field = ".".join(path)
            text = f"{field}: {e['msg']}" if field else e["msg"]
        if text not in parts:
            parts.append(text)
    return ". ".join(parts) or messages.UNKNOWN_ERROR
