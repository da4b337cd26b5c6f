"""
Database initialization script

Run once (or after restoring a dump) to create the indexes:
    python scripts/init_db.py

The application also creates them on startup; this is for setting up a
database without starting the server.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings, validate_settings
from app.core.logging import setup_logging, get_logger
from app.db.indexes import create_indexes
from app.db.mongo import MongoStore

setup_logging()
logger = get_logger("scripts.init_db")


async def main():
    """Connect, create indexes, print a summary."""
    logger.info("=" * 60)
    logger.info("  TVT Database Setup")
    logger.info("=" * 60)

    validate_settings()
    store = MongoStore.from_settings(settings)

    try:
        await store.connect()
        await create_indexes(store)

        for collection in (store.users, store.payments):
            indexes = await collection.index_information()
            logger.info(f"{collection.name}:")
            for idx_name in indexes.keys():
                if idx_name != "_id_":
                    logger.info(f"  ✅ {idx_name}")

        logger.info("📊 Current documents:")
        logger.info(f"  Users: {await store.users.count_documents({})}")
        logger.info(f"  Payments: {await store.payments.count_documents({})}")
        logger.info("✅ Database initialization complete!")

    finally:
        store.close()


if __name__ == "__main__":
    asyncio.run(main())
