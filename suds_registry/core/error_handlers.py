"""Translate domain and store exceptions into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from suds_registry.services.errors import (
    DuplicateError,
    InvalidInputError,
    NotFoundError,
    ReorderError,
    ServiceError,
)
from suds_registry.store.errors import DocumentStoreError

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateError, status.HTTP_400_BAD_REQUEST),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (ReorderError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


async def service_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = next(
        (code for error_type, code in _STATUS_BY_ERROR if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    if status_code >= 500:
        logger.warning(f"Write failed: path={request.url.path} error={exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning(f"Store rejected write: path={request.url.path} error={exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "The change could not be saved, please try again"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(DocumentStoreError, store_error_handler)
