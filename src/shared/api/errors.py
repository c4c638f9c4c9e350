"""HTTP mapping for the storefront error taxonomy.

Protean's own handlers are registered first; the storefront errors are
registered on top and, since Starlette resolves handlers by walking the
exception's MRO, the most specific mapping always wins.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from shared.errors import (
    AddressValidationError,
    CheckoutInProgress,
    CheckoutStateError,
    EmptyCart,
    Forbidden,
    InvalidCartOperation,
    PersistenceFailure,
    SessionPending,
    Unauthenticated,
)
from shared.store.port import DocumentStoreError

logger = structlog.get_logger(__name__)

STATUS_CODES: dict[type[Exception], int] = {
    ValidationError: 400,
    InvalidCartOperation: 422,
    AddressValidationError: 422,
    Unauthenticated: 401,
    SessionPending: 503,
    Forbidden: 403,
    EmptyCart: 409,
    CheckoutInProgress: 409,
    CheckoutStateError: 409,
    InvalidOperationError: 409,
    ObjectNotFoundError: 404,
    PersistenceFailure: 503,
    DocumentStoreError: 503,
}


def _error_body(exc: Exception):
    if isinstance(exc, ValidationError):
        return exc.messages
    return str(exc)


def _handler(status_code: int):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        logger.warning(
            "Request failed",
            path=request.url.path,
            status_code=status_code,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return JSONResponse(status_code=status_code, content={"error": _error_body(exc)})

    return handle


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for exc_class, status_code in STATUS_CODES.items():
        app.add_exception_handler(exc_class, _handler(status_code))
