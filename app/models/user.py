"""
app/models/user.py

Purpose: User document model

- Name and phone (phone is the upsert key)
- createdAt / updatedAt managed by the service layer
- Store id exposed as "_id"
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserDocument(BaseModel):
    """A document from the users collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    phone: str
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
