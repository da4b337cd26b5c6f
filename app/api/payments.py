"""
app/api/payments.py

Purpose: Payment proof endpoints

- POST /payment-proof: store payment info + base64 screenshot
- GET /payments: list every payment proof, newest first
"""

from fastapi import APIRouter, Depends
from typing import List

from app.db.mongo import MongoStore, get_store
from app.models.payment import PaymentDocument
from app.schemas.requests import PaymentProofRequest
from app.schemas.response import ErrorResponse, PaymentProofResponse
from app.services import payment_service

router = APIRouter()


@router.post(
    "/payment-proof",
    response_model=PaymentProofResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_payment_proof(payload: PaymentProofRequest, store: MongoStore = Depends(get_store)):
    """
    Store a payment proof. Every submission creates a new record.
    """
    payment = await payment_service.submit_payment_proof(store, payload)
    return {"success": True, "payment": payment}


@router.get(
    "/payments",
    response_model=List[PaymentDocument],
    responses={500: {"model": ErrorResponse}},
)
async def list_payments(store: MongoStore = Depends(get_store)):
    """
    Fetch all payment proofs, newest first. Screenshots are included.
    """
    return await payment_service.list_payments(store)
