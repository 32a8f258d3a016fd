from typing import Any, Dict, Optional

from pydantic import BaseModel


class PaystackResponse(BaseModel):
    status: bool
    data: Any = None


class PaystackPagedResponse(PaystackResponse):
    meta: Optional[Dict[str, Any]] = None
