from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from paystack_relay import exceptions
from paystack_relay.config import Settings
from paystack_relay.core.auditlogging.service.logservice import APILoggingMiddleware, configure_logging
from paystack_relay.core.exceptions.PaymentException import PaymentGatewayException, PaymentValidationException
from paystack_relay.core.exceptions.WebhookException import WebhookException
from paystack_relay.core.paystack.controller.paystack_controller import paystack_routes
from paystack_relay.core.webhooks.controller.webhookscontroller import webhooks_routes
from paystack_relay.routes import PUBLIC_DIR, base_routes


def create_app(settings: Settings) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown"""
        logger.info(f"[APP_STARTUP] {settings.SERVICE_NAME} starting, Paystack API at {settings.PAYSTACK_BASE_URL}")
        yield
        logger.info("[APP_SHUTDOWN] Application shutting down...")

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="1.0",
        description="""**Paystack Relay** A thin backend over the Paystack API.

    Endpoints:
    - Transaction initialization, verification and listing
    - Paystack webhook receiver
    - Payment callback redirect and health check
    """,
        license_info={
            "name": "MIT",
        },
        lifespan=lifespan
    )
    app.state.settings = settings

    # -----------------------------------------------------------
    # Middleware (CORS, request logging)
    # -----------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(APILoggingMiddleware)

    # Exception Handlers

    app.add_exception_handler(PaymentValidationException, exceptions.payment_validation_exception_handler)
    app.add_exception_handler(PaymentGatewayException, exceptions.payment_gateway_exception_handler)
    app.add_exception_handler(WebhookException, exceptions.webhook_exception_handler)
    app.add_exception_handler(RequestValidationError, exceptions.validation_exception_handler)

    # Routes Registration

    app.include_router(paystack_routes, prefix="/api", tags=["Paystack Routes"])
    app.include_router(webhooks_routes, prefix="/api", tags=["Webhooks Routes"])
    app.include_router(base_routes, tags=["Base Routes"])

    # Remaining files of the entry page (scripts, styles)
    app.mount("/", StaticFiles(directory=PUBLIC_DIR), name="public")

    return app
