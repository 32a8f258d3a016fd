import hashlib
import hmac
import json
from typing import Callable, Dict, Optional

from loguru import logger

from paystack_relay.config import Settings
from paystack_relay.core.exceptions.WebhookException import (
    InvalidSignatureException,
    InvalidWebhookPayloadException,
)
from paystack_relay.core.webhooks.model.webhook_event import WebhookEvent, WebhookEventType


def sign(secret: str, body_bytes: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), body_bytes, hashlib.sha256).hexdigest()


class WebhookVerifier:
    """
    Authenticates Paystack webhook deliveries.

    The HMAC is computed over the raw request body exactly as received.
    Hashing a re-serialized JSON object instead would change key order,
    whitespace or number formatting and reject genuine events.
    """

    def __init__(self, secret: str):
        self.secret = secret

    def is_valid(self, body_bytes: bytes, signature: Optional[str]) -> bool:
        if not signature:
            return False
        expected = sign(self.secret, body_bytes)
        return hmac.compare_digest(expected.encode("utf-8"), signature.strip().encode("utf-8"))

    def verify(self, body_bytes: bytes, signature: Optional[str]) -> WebhookEvent:
        if not self.is_valid(body_bytes, signature):
            raise InvalidSignatureException()

        try:
            payload = json.loads(body_bytes)
        except ValueError:
            raise InvalidWebhookPayloadException()
        if not isinstance(payload, dict):
            raise InvalidWebhookPayloadException()

        return WebhookEvent.model_validate(payload)


class WebhookDispatcher:
    def __init__(self):
        self.handlers: Dict[WebhookEventType, Callable[[WebhookEvent], None]] = {
            WebhookEventType.CHARGE_SUCCESS: self.handle_charge_success,
            WebhookEventType.CHARGE_FAILED: self.handle_charge_failed,
            WebhookEventType.UNKNOWN: self.handle_unknown,
        }
        missing = set(WebhookEventType) - set(self.handlers)
        if missing:
            raise RuntimeError(f"No webhook handler for: {', '.join(sorted(m.value for m in missing))}")

    def dispatch(self, event: WebhookEvent) -> WebhookEventType:
        event_type = event.event_type
        self.handlers[event_type](event)
        return event_type

    def handle_charge_success(self, event: WebhookEvent) -> None:
        logger.info(f"[WEBHOOK_CHARGE_SUCCESS] Payment successful: {self._summary(event)}")

    def handle_charge_failed(self, event: WebhookEvent) -> None:
        logger.info(f"[WEBHOOK_CHARGE_FAILED] Payment failed: {self._summary(event)}")

    def handle_unknown(self, event: WebhookEvent) -> None:
        logger.info(f"[WEBHOOK_UNHANDLED] Unhandled event: {event.event}")

    @staticmethod
    def _summary(event: WebhookEvent) -> str:
        # id and reference are what a persistent handler would deduplicate on
        if isinstance(event.data, dict):
            return f"id={event.data.get('id')} reference={event.data.get('reference')} status={event.data.get('status')}"
        return str(event.data)


class WebhookService:
    def __init__(self, settings: Settings, dispatcher: Optional[WebhookDispatcher] = None):
        self.verifier = WebhookVerifier(settings.PAYSTACK_SECRET_KEY)
        self.dispatcher = dispatcher or WebhookDispatcher()

    def process(self, body_bytes: bytes, signature: Optional[str]) -> WebhookEventType:
        event = self.verifier.verify(body_bytes, signature)
        return self.dispatcher.dispatch(event)
