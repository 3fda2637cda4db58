"""
Error taxonomy for the admin API and the boundary that renders it.

Store failures are classified once by translate_store_error; everything that
reaches the boundary is an AdminError and is rendered as
{"detail": {"error": ..., "error_description": ...}}, the same shape as
HTTPException(detail={...}) elsewhere in the API.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

logger = logging.getLogger(__name__)


class AdminError(Exception):
    status_code = 500
    error = "server_error"
    default_description = "Internal error"

    def __init__(self, error_description: str | None = None):
        self.error_description = error_description or self.default_description
        super().__init__(self.error_description)

    def to_detail(self) -> dict:
        return {"error": self.error, "error_description": self.error_description}


class NotFoundError(AdminError):
    """Absent or owned by someone else; the two are deliberately indistinguishable."""
    status_code = 404
    error = "not_found"
    default_description = "Resource server not found"


class ValidationError(AdminError):
    status_code = 400
    error = "invalid_request"
    default_description = "Invalid request body"

    def __init__(self, error_description: str | None = None, fields: list[dict] | None = None):
        super().__init__(error_description)
        self.fields = fields or []

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["fields"] = self.fields
        return detail


class ConflictError(AdminError):
    status_code = 409
    error = "conflict"
    default_description = "Conflicting change; reload and retry"


class TransientStoreError(AdminError):
    status_code = 500
    error = "server_error"
    default_description = "Storage temporarily unavailable"


def translate_store_error(exc: SQLAlchemyError) -> AdminError:
    """Map a SQLAlchemy exception onto the taxonomy. Unique/FK violations and stale versions are conflicts."""
    if isinstance(exc, IntegrityError):
        logger.info("Store constraint violation: %s", exc.orig)
        return ConflictError("Store constraint violated")
    if isinstance(exc, StaleDataError):
        logger.info("Concurrent modification detected: %s", exc)
        return ConflictError("Resource server was modified concurrently")
    logger.warning("Store failure: %s", exc)
    return TransientStoreError()


def _field_name(loc: tuple) -> str:
    # ("body", "scopes", 0) -> "scopes.0"; drop the leading source marker
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def validation_error_from_request(exc: RequestValidationError) -> ValidationError:
    fields = [{"field": _field_name(tuple(e.get("loc", ()))), "message": e.get("msg", "")} for e in exc.errors()]
    return ValidationError("Request validation failed", fields=fields)


async def _admin_error_handler(request: Request, exc: AdminError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = validation_error_from_request(exc)
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, err.fields)
    return JSONResponse(status_code=err.status_code, content={"detail": err.to_detail()})


def install_error_handlers(app: FastAPI) -> None:
    """Register the boundary mapping from AdminError / validation failures to responses."""
    app.add_exception_handler(AdminError, _admin_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
