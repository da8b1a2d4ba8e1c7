"""Application-wide exception handlers.

Route handlers raise HTTPException for not-found and permission cases; the
handlers here cover what escapes them: malformed requests, storage failures
and anything unexpected.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.model.errors import StorageError

logger = logging.getLogger(__name__)

# Path prefix -> message for request validation failures
_VALIDATION_MESSAGES = (
    ("/api/projects", "Invalid project data"),
    ("/api/time-entries", "Invalid time entry data"),
)


def _validation_message(path: str) -> str:
    for prefix, message in _VALIDATION_MESSAGES:
        if path.startswith(prefix):
            return message
    return "Invalid request data"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map request validation failures to 400 with one item per field error."""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.info("Rejected invalid request", extra={"path": request.url.path, "errorCount": len(errors)})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": _validation_message(request.url.path), "errors": errors}),
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", extra={"path": request.url.path}, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
