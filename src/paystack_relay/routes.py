from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Query
from fastapi.responses import FileResponse, RedirectResponse

PUBLIC_DIR = Path(__file__).resolve().parent / "public"

# Router for organizing routes
base_routes = APIRouter()


# ROOT ROUTE
@base_routes.get("/", include_in_schema=False)
def home():
    return FileResponse(PUBLIC_DIR / "index.html")


@base_routes.get("/api/health")
def health():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@base_routes.get("/payment-callback", name="payment_callback")
def payment_callback(
    reference: Optional[str] = Query(None),
    trxref: Optional[str] = Query(None)
):
    """
    Where Paystack sends the customer after checkout. Redirects to the entry
    page with the reference; the payment itself is not verified here, the
    page must call /api/verify-payment for that.
    """
    params = {}
    transaction_reference = reference or trxref
    if transaction_reference:
        params["reference"] = transaction_reference
    params["status"] = "success"
    return RedirectResponse(url=f"/?{urlencode(params)}", status_code=302)
