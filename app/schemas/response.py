from pydantic import BaseModel
from typing import Optional, Any

from app.models.payment import PaymentDocument
from app.models.user import UserDocument

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None

class RegisterResponse(BaseModel):
    success: bool = True
    user: UserDocument

class PaymentProofResponse(BaseModel):
    success: bool = True
    payment: PaymentDocument
