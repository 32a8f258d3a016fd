from fastapi import APIRouter, Depends, Path, Query, Request

from paystack_relay.config import Settings, get_settings
from paystack_relay.core.paystack.dto.request.paystack_request import PaystackInitializeRequest
from paystack_relay.core.paystack.dto.response.paystack_response import PaystackPagedResponse, PaystackResponse
from paystack_relay.core.paystack.service.paystack_service import PaystackService

paystack_routes = APIRouter()


def get_paystack_service(settings: Settings = Depends(get_settings)) -> PaystackService:
    return PaystackService(settings)


@paystack_routes.post("/initialize-payment", response_model=PaystackResponse)
async def initialize_payment(
    payment: PaystackInitializeRequest,
    request: Request,
    paystack_service: PaystackService = Depends(get_paystack_service)
):
    """
    Initialize a Paystack transaction.
    Returns the authorization_url the client redirects to, with the reference and access_code.
    """
    callback_url = str(request.url_for("payment_callback"))
    data = await paystack_service.initialize_transaction(payment, callback_url)
    return PaystackResponse(status=True, data=data)


@paystack_routes.get("/verify-payment/{reference}", response_model=PaystackResponse)
async def verify_payment(
    reference: str = Path(..., min_length=1, description="Transaction reference"),
    paystack_service: PaystackService = Depends(get_paystack_service)
):
    data = await paystack_service.verify_transaction(reference)
    return PaystackResponse(status=True, data=data)


@paystack_routes.get("/transactions", response_model=PaystackPagedResponse)
async def list_transactions(
    page: str = Query("1", description="Page number"),
    per_page: str = Query("10", alias="perPage", description="Transactions per page"),
    paystack_service: PaystackService = Depends(get_paystack_service)
):
    result = await paystack_service.list_transactions(page, per_page)
    return PaystackPagedResponse(status=True, data=result["data"], meta=result["meta"])


@paystack_routes.get("/banks", response_model=PaystackResponse)
async def list_banks(
    country: str = Query("nigeria", description="Country name (e.g., nigeria, ghana)"),
    paystack_service: PaystackService = Depends(get_paystack_service)
):
    """
    Get list of banks from Paystack
    """
    banks = await paystack_service.list_banks(country)
    return PaystackResponse(status=True, data=banks)
