import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)


class StoreError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequired(StoreError):
    status_code = 401
    default_message = "Unauthorized"


class PermissionDenied(StoreError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(StoreError):
    status_code = 404
    default_message = "Not found"


class ValidationFailed(StoreError):
    status_code = 400
    default_message = "Missing required fields"


class Conflict(StoreError):
    status_code = 400
    default_message = "Conflict"


class PaymentRequired(StoreError):
    status_code = 403
    default_message = "Payment required"


class UpstreamUnavailable(StoreError):
    status_code = 503
    default_message = "Service unavailable"


class InternalError(StoreError):
    status_code = 500


async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "Missing required fields",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app):
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
