"""
Application exceptions and the FastAPI handlers that render errors
in the same envelope shape as facade results.
"""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class UnknownEntityKindError(ValueError):
    """
    Exception raised when an edit targets an entity kind that cannot be edited
    """
    def __init__(self, kind: object):
        self.kind = kind
        self.message = f"Cannot edit entities of kind {kind!r}"
        super().__init__(self.message)


def _format_validation_error(error: dict) -> str:
    """Render one pydantic error as "'field' message"."""
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location) or "request"
    return f"'{field}' {error.get('msg', 'is invalid')}"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register envelope-producing handlers on the application."""

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            content={"success": False, "message": [str(exc.detail), "error"], "data": None},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        text = "\n".join(_format_validation_error(error) for error in exc.errors())
        logger.debug(f"Rejected {request.method} {request.url.path}: {text}")
        return JSONResponse(
            content={"success": False, "message": [text, "error"], "data": None},
            status_code=422,
        )
