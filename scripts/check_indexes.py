"""
Index inspection script

    python scripts/check_indexes.py

Lists the indexes on both collections and reports phones registered more
than once, which would stop the unique phone index from being built.
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings, validate_settings
from app.core.logging import setup_logging, get_logger
from app.db.indexes import find_duplicate_phones
from app.db.mongo import MongoStore

setup_logging()
logger = get_logger("scripts.check_indexes")


async def check_indexes():
    validate_settings()
    store = MongoStore.from_settings(settings)

    try:
        await store.connect()

        user_indexes = await store.users.index_information()
        payment_indexes = await store.payments.index_information()
        logger.info(f"users indexes: {list(user_indexes.keys())}")
        logger.info(f"payments indexes: {list(payment_indexes.keys())}")

        if "phone_unique" in user_indexes:
            logger.info("✅ 'phone_unique' exists.")
        else:
            logger.warning("❌ 'phone_unique' is missing.")

        duplicates = await find_duplicate_phones(store)
        if duplicates:
            logger.warning(f"{len(duplicates)} phone(s) registered more than once:")
            for dup in duplicates:
                logger.warning(f"  {dup['phone']}: {dup['count']} users")
        else:
            logger.info("No duplicate phones.")

    finally:
        store.close()


if __name__ == "__main__":
    asyncio.run(check_indexes())
