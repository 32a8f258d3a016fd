from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from paystack_relay.config import Settings, get_settings
from paystack_relay.core.webhooks.service.webhook_service import WebhookService

webhooks_routes = APIRouter()


def get_webhook_service(settings: Settings = Depends(get_settings)) -> WebhookService:
    return WebhookService(settings)


@webhooks_routes.post("/webhook", response_class=PlainTextResponse)
async def paystack_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    webhook_service: WebhookService = Depends(get_webhook_service)
):
    """
    Receives Paystack event notifications.
    The body is read as raw bytes before any parsing so the signature is
    checked against exactly what Paystack signed.
    """
    body = await request.body()
    signature = request.headers.get(settings.PAYSTACK_SIGNATURE_HEADER)

    webhook_service.process(body, signature)
    return PlainTextResponse("Webhook received", status_code=200)
