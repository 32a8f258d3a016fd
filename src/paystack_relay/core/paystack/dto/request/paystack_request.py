from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PaystackInitializeRequest(BaseModel):
    # Presence is checked by PaystackService so missing fields yield the
    # relay's own 400 message rather than a field-level validation error.
    email: Optional[str] = None
    amount: Optional[Decimal] = None  # Major currency unit (naira, not kobo)
    currency: str = "NGN"
    reference: Optional[str] = None
