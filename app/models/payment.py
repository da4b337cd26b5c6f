"""
app/models/payment.py

Purpose: Payment proof document model

- Denormalized submitter name/phone (no link to users)
- Plan title, amount and inline base64 screenshot
- Append-only; never updated after insert
"""

from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaymentDocument(BaseModel):
    """A document from the payments collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    phone: str
    plan_title: str = Field(..., alias="planTitle")
    amount: Union[int, float]
    screenshot_base64: str = Field(..., alias="screenshotBase64")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v):
        return str(v)

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Stored timestamps are UTC; naive ones get the offset made explicit."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
