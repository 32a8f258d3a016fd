from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from loguru import logger

from paystack_relay.config import Settings
from paystack_relay.core.exceptions.PaymentException import PaymentValidationException
from paystack_relay.core.paystack.dto.request.paystack_request import PaystackInitializeRequest
from paystack_relay.utilities.paystackclient import PaystackClient
from paystack_relay.utilities.uniqueidgenerator import UniqueIdGenerator

MINOR_UNITS_PER_MAJOR = Decimal(100)


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount (naira) to Paystack's minor unit (kobo)"""
    return int((amount * MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class PaystackService:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.client = PaystackClient(settings, transport=transport)

    def build_initialize_payload(self, request: PaystackInitializeRequest, callback_url: str) -> Dict[str, Any]:
        if not request.email or not request.amount:
            raise PaymentValidationException("Email and amount are required")
        if request.amount < 0:
            raise PaymentValidationException("Amount must be greater than zero")

        try:
            amount = to_minor_units(request.amount)
        except InvalidOperation:
            raise PaymentValidationException("Invalid amount")
        if amount < 1:
            raise PaymentValidationException("Amount is smaller than the currency's minor unit")

        return {
            "email": request.email,
            "amount": amount,
            "currency": request.currency,
            "reference": request.reference or UniqueIdGenerator.generate_reference(),
            "callback_url": self.settings.CALLBACK_URL or callback_url,
        }

    async def initialize_transaction(self, request: PaystackInitializeRequest, callback_url: str) -> Any:
        """
        Start a Paystack transaction and return Paystack's `data` as is
        (authorization_url, access_code, reference).
        """
        payload = self.build_initialize_payload(request, callback_url)
        logger.info(f"[PAYSTACK_INITIALIZE] reference={payload['reference']} amount={payload['amount']} {payload['currency']}")

        result = await self.client.post(
            "/transaction/initialize",
            "Failed to initialize payment",
            payload,
        )
        return result.get("data")

    async def verify_transaction(self, reference: str) -> Any:
        logger.info(f"[PAYSTACK_VERIFY] reference={reference}")
        result = await self.client.get(
            f"/transaction/verify/{quote(reference, safe='')}",
            "Failed to verify payment",
        )
        return result.get("data")

    async def list_transactions(self, page: Any = 1, per_page: Any = 10) -> Dict[str, Any]:
        # Paystack validates pagination itself
        result = await self.client.get(
            "/transaction",
            "Failed to fetch transactions",
            params={"page": page, "perPage": per_page},
        )
        return {"data": result.get("data"), "meta": result.get("meta")}

    async def list_banks(self, country: str = "nigeria") -> Any:
        """Get list of banks for Paystack"""
        result = await self.client.get(
            "/bank",
            "Failed to fetch banks",
            params={"country": country},
        )
        return result.get("data", [])
