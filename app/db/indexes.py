"""
app/db/indexes.py

Purpose: Database index management

- Unique index on users.phone (the upsert key)
- createdAt indexes backing the newest-first listings
- Idempotent; safe to run on every startup
"""

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, OperationFailure

from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(store):
    """
    Creates the indexes both collections rely on.

    A pre-existing duplicate phone makes the unique index impossible to
    build; that is logged and startup continues without it.
    """
    users = store.users
    payments = store.payments

    logger.info("Creating database indexes...")

    try:
        await users.create_index([("phone", ASCENDING)], unique=True, name="phone_unique")
        logger.debug("Created unique index on users.phone")
    except (DuplicateKeyError, OperationFailure) as e:
        logger.warning(
            f"Could not create unique index on users.phone, duplicates exist: {e}"
        )

    await users.create_index([("createdAt", DESCENDING)], name="user_created_idx")
    logger.debug("Created index on users.createdAt")

    await payments.create_index([("createdAt", DESCENDING)], name="payment_created_idx")
    logger.debug("Created index on payments.createdAt")

    await payments.create_index([("phone", ASCENDING)], name="payment_phone_idx")
    logger.debug("Created index on payments.phone")

    user_indexes = await users.index_information()
    payment_indexes = await payments.index_information()
    logger.info(
        f"✅ Index summary: Users={len(user_indexes)}, Payments={len(payment_indexes)}"
    )


async def find_duplicate_phones(store) -> list:
    """
    Lists phones held by more than one user. Any hit blocks the unique
    phone index.

    Returns:
        [{"phone": ..., "count": ...}, ...]
    """
    pipeline = [
        {"$group": {"_id": "$phone", "count": {"$sum": 1}}},
        {"$match": {"count": {"$gt": 1}}},
        {"$sort": {"count": -1}},
    ]
    duplicates = await store.users.aggregate(pipeline).to_list(length=None)
    return [{"phone": d["_id"], "count": d["count"]} for d in duplicates]
