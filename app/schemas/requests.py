"""
app/schemas/requests.py

Purpose: Request body schemas

- Typed DTOs for register and payment-proof
- Presence checks only: required, non-empty
- Validated by FastAPI before any store call is made
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Union


class RegisterRequest(BaseModel):
    """Body of POST /register."""

    model_config = ConfigDict(
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {"name": "Asha", "phone": "555-0100"}
        },
    )

    name: str = Field(..., min_length=1, description="User's display name")
    phone: str = Field(..., min_length=1, description="Phone number, used as the upsert key")


class PaymentProofRequest(BaseModel):
    """
    Body of POST /payment-proof.

    Every field is required; amount only has to be a number.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "name": "Asha",
                "phone": "555-0100",
                "planTitle": "Premium Love Panel",
                "amount": 11000,
                "screenshotBase64": "iVBORw0KGgo...",
            }
        },
    )

    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    plan_title: str = Field(..., min_length=1, alias="planTitle")
    amount: Union[int, float] = Field(..., description="Any number; 0 counts as present")
    screenshot_base64: str = Field(..., min_length=1, alias="screenshotBase64")

    def to_document(self) -> Dict[str, Any]:
        """Field names as stored in the payments collection."""
        return self.model_dump(by_alias=True)
