from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from starlette.requests import Request
from starlette.status import HTTP_400_BAD_REQUEST

from paystack_relay.core.exceptions.PaymentException import (
    PaymentGatewayException,
    PaymentValidationException,
)
from paystack_relay.core.exceptions.WebhookException import WebhookException


async def payment_validation_exception_handler(request: Request, exc: PaymentValidationException) -> JSONResponse:
    logger.warning(f"[VALIDATION] {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": False, "message": exc.message},
    )


async def payment_gateway_exception_handler(request: Request, exc: PaymentGatewayException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": False, "message": exc.message, "error": exc.error},
    )


async def webhook_exception_handler(request: Request, exc: WebhookException) -> PlainTextResponse:
    logger.warning(f"[WEBHOOK_REJECTED] {exc.message}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters with the same envelope as other client errors"""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        message = error["msg"]
        error_type = error.get("type", "validation_error")

        if error_type == "missing":
            message = f"Field '{field}' is required"
        elif error_type == "json_invalid":
            message = "Request body is not valid JSON"

        errors.append({
            "field": field,
            "message": message,
            "type": error_type
        })

    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "status": False,
            "message": "Validation failed",
            "errors": errors
        }
    )
