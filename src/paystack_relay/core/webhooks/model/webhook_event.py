from enum import Enum
from typing import Any

from pydantic import BaseModel


class WebhookEventType(str, Enum):
    CHARGE_SUCCESS = "charge.success"
    CHARGE_FAILED = "charge.failed"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: Any) -> "WebhookEventType":
        for member in cls:
            if member is not cls.UNKNOWN and member.value == tag:
                return member
        return cls.UNKNOWN


class WebhookEvent(BaseModel):
    event: Any = None
    data: Any = None

    @property
    def event_type(self) -> WebhookEventType:
        return WebhookEventType.from_tag(self.event)
