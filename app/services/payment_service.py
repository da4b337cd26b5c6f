"""
app/services/payment_service.py

Purpose: Payment proof storage

- Append a payment proof (never deduplicated or updated)
- List all payment proofs, newest first, screenshots included
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from app.core.exceptions import PersistenceError
from app.core.logging import get_logger, LogContext
from app.schemas.requests import PaymentProofRequest

logger = get_logger(__name__)


async def submit_payment_proof(store, request: PaymentProofRequest) -> Dict[str, Any]:
    """
    Inserts a new payment document.

    Args:
        store: MongoStore (or anything exposing a ``payments`` collection)
        request: Validated payment-proof body

    Returns:
        The inserted document, including its _id

    Raises:
        PersistenceError: If the store call fails
    """
    with LogContext(phone=request.phone, route="payment-proof"):
        now = datetime.now(timezone.utc)
        payment = {
            **request.to_document(),
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await store.payments.insert_one(payment)
        except PyMongoError as e:
            logger.error(f"Payment-proof error: {e}", exc_info=True)
            raise PersistenceError(str(e)) from e

        payment["_id"] = result.inserted_id
        logger.info(
            f"Payment proof stored for plan '{request.plan_title}' "
            f"({len(request.screenshot_base64)} base64 chars)"
        )
        return payment


async def list_payments(store) -> List[Dict[str, Any]]:
    """
    Returns every payment proof ordered by createdAt, newest first.

    Raises:
        PersistenceError: If the store call fails
    """
    try:
        cursor = store.payments.find().sort("createdAt", DESCENDING)
        return await cursor.to_list(length=None)
    except PyMongoError as e:
        logger.error(f"Payments error: {e}", exc_info=True)
        raise PersistenceError(str(e)) from e
