import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class KasirError(Exception):
    """Base domain error. Subclasses pick the HTTP status the API answers with."""
    status_code = 400
    message = "Request could not be processed"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class NotFound(KasirError):
    status_code = 404
    message = "Resource not found"


class ValidationFailed(KasirError):
    status_code = 422
    message = "Validation error"


class EmptyCart(KasirError):
    message = "Cart is empty"


class AuthError(KasirError):
    status_code = 401
    message = "Authentication required"


class Forbidden(KasirError):
    status_code = 403
    message = "Permission denied"


async def kasir_error_handler(request: Request, exc: KasirError):
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.message,
            "detail": exc.detail,
            "status_code": exc.status_code,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(KasirError, kasir_error_handler)
