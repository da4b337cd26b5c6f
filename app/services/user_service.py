"""
app/services/user_service.py

Purpose: User data management

- Register a user (upsert keyed by phone)
- List all users, newest first
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from app.core.exceptions import PersistenceError
from app.core.logging import get_logger, LogContext
from app.schemas.requests import RegisterRequest

logger = get_logger(__name__)


async def register_user(store, request: RegisterRequest) -> Dict[str, Any]:
    """
    Creates the user for this phone, or overwrites its name if it exists.

    Args:
        store: MongoStore (or anything exposing a ``users`` collection)
        request: Validated register body

    Returns:
        The user document after the write

    Raises:
        PersistenceError: If the store call fails
    """
    with LogContext(phone=request.phone, route="register"):
        now = datetime.now(timezone.utc)

        try:
            user = await store.users.find_one_and_update(
                {"phone": request.phone},
                {
                    "$set": {
                        "name": request.name,
                        "phone": request.phone,
                        "updatedAt": now,
                    },
                    "$setOnInsert": {"createdAt": now},
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Register error: {e}", exc_info=True)
            raise PersistenceError(str(e)) from e

        logger.info("User registered")
        return user


async def list_users(store) -> List[Dict[str, Any]]:
    """
    Returns every user ordered by createdAt, newest first.

    Raises:
        PersistenceError: If the store call fails
    """
    try:
        cursor = store.users.find().sort("createdAt", DESCENDING)
        return await cursor.to_list(length=None)
    except PyMongoError as e:
        logger.error(f"Users error: {e}", exc_info=True)
        raise PersistenceError(str(e)) from e
