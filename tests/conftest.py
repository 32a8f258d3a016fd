import json
from typing import Callable, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from paystack_relay.app import create_app
from paystack_relay.config import Settings
from paystack_relay.core.paystack.controller.paystack_controller import get_paystack_service
from paystack_relay.core.paystack.service.paystack_service import PaystackService

SECRET_KEY = "sk_test_relay_secret"


class FakePaystack:
    """Stands in for api.paystack.co and records every request it receives."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def respond_with(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is None:
            return httpx.Response(200, json={"status": True, "message": "ok", "data": {}})
        return self.handler(request)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def settings():
    return Settings(PAYSTACK_SECRET_KEY=SECRET_KEY, _env_file=None)


@pytest.fixture
def fake_paystack():
    return FakePaystack()


@pytest.fixture
def app(settings, fake_paystack):
    app = create_app(settings)
    app.dependency_overrides[get_paystack_service] = lambda: PaystackService(
        settings, transport=fake_paystack.transport
    )
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
