"""
Tests for POST /api/webhook: signature verification and event routing.
"""

import hashlib
import hmac
import json

import pytest

from paystack_relay.core.webhooks.controller.webhookscontroller import get_webhook_service
from paystack_relay.core.webhooks.model.webhook_event import WebhookEvent, WebhookEventType
from paystack_relay.core.webhooks.service.webhook_service import WebhookDispatcher, WebhookService
from tests.conftest import SECRET_KEY


def signature_for(body: bytes, secret: str = SECRET_KEY) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


class RecordingDispatcher(WebhookDispatcher):
    def __init__(self):
        super().__init__()
        self.routed = []

    def handle_charge_success(self, event: WebhookEvent) -> None:
        self.routed.append(("success", event))

    def handle_charge_failed(self, event: WebhookEvent) -> None:
        self.routed.append(("failed", event))

    def handle_unknown(self, event: WebhookEvent) -> None:
        self.routed.append(("unknown", event))


@pytest.fixture
def dispatcher(app, settings):
    dispatcher = RecordingDispatcher()
    app.dependency_overrides[get_webhook_service] = lambda: WebhookService(settings, dispatcher=dispatcher)
    return dispatcher


def post_webhook(client, body: bytes, signature=None):
    headers = {"Content-Type": "application/json"}
    if signature is not None:
        headers["x-paystack-signature"] = signature
    return client.post("/api/webhook", content=body, headers=headers)


def test_charge_success_is_acknowledged_and_routed(client, dispatcher):
    body = b'{"event":"charge.success","data":{"id":302961,"reference":"ref_1","status":"success"}}'

    response = post_webhook(client, body, signature_for(body))

    assert response.status_code == 200
    assert response.text == "Webhook received"
    assert [kind for kind, _ in dispatcher.routed] == ["success"]
    assert dispatcher.routed[0][1].data["reference"] == "ref_1"


def test_charge_failed_is_routed_to_failure_handler(client, dispatcher):
    body = b'{"event":"charge.failed","data":{"reference":"ref_2"}}'

    response = post_webhook(client, body, signature_for(body))

    assert response.status_code == 200
    assert [kind for kind, _ in dispatcher.routed] == ["failed"]


def test_unknown_event_is_acknowledged_and_routed_to_default(client, dispatcher):
    body = b'{"event":"totally.unknown","data":{}}'

    response = post_webhook(client, body, signature_for(body))

    assert response.status_code == 200
    assert response.text == "Webhook received"
    assert [kind for kind, _ in dispatcher.routed] == ["unknown"]


def test_signature_is_checked_against_raw_bytes(client, dispatcher):
    # Key order, spacing and number formatting that json.dumps would not reproduce
    body = b'{ "data": {"amount": 1.50, "reference": "ref_3"},  "event": "charge.success" }'

    response = post_webhook(client, body, signature_for(body))

    assert response.status_code == 200
    assert [kind for kind, _ in dispatcher.routed] == ["success"]


def test_reserialized_body_is_rejected(client, dispatcher):
    original = b'{ "event": "charge.success", "data": {"amount": 1.50} }'
    reserialized = json.dumps(json.loads(original)).encode()
    assert reserialized != original

    response = post_webhook(client, reserialized, signature_for(original))

    assert response.status_code == 400
    assert response.text == "Invalid signature"
    assert dispatcher.routed == []


def test_tampered_body_is_rejected(client, dispatcher):
    body = b'{"event":"charge.success","data":{"amount":5000}}'
    signature = signature_for(body)
    tampered = body.replace(b"5000", b"9000")

    response = post_webhook(client, tampered, signature)

    assert response.status_code == 400
    assert dispatcher.routed == []


def test_wrong_secret_is_rejected(client, dispatcher):
    body = b'{"event":"charge.success","data":{}}'

    response = post_webhook(client, body, signature_for(body, "sk_test_someone_else"))

    assert response.status_code == 400
    assert response.text == "Invalid signature"
    assert dispatcher.routed == []


def test_missing_signature_is_rejected(client, dispatcher):
    response = post_webhook(client, b'{"event":"charge.success","data":{}}')

    assert response.status_code == 400
    assert dispatcher.routed == []


def test_signed_non_object_payload_is_rejected(client, dispatcher):
    body = b'["charge.success"]'

    response = post_webhook(client, body, signature_for(body))

    assert response.status_code == 400
    assert response.text == "Invalid payload"
    assert dispatcher.routed == []


@pytest.mark.parametrize("tag, expected", [
    ("charge.success", WebhookEventType.CHARGE_SUCCESS),
    ("charge.failed", WebhookEventType.CHARGE_FAILED),
    ("transfer.success", WebhookEventType.UNKNOWN),
    ("CHARGE.SUCCESS", WebhookEventType.UNKNOWN),
    (None, WebhookEventType.UNKNOWN),
    (42, WebhookEventType.UNKNOWN),
])
def test_event_type_from_tag(tag, expected):
    assert WebhookEventType.from_tag(tag) is expected


def test_dispatcher_covers_every_event_type():
    dispatcher = WebhookDispatcher()

    assert set(dispatcher.handlers) == set(WebhookEventType)
    assert dispatcher.dispatch(WebhookEvent(event="charge.success", data={"id": 1})) is WebhookEventType.CHARGE_SUCCESS
    assert dispatcher.dispatch(WebhookEvent(event="refund.processed")) is WebhookEventType.UNKNOWN
