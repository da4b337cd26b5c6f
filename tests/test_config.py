import asyncio

import pytest

from app.core.config import Settings, validate_settings
from app.core.exceptions import ConfigurationError
from app.main import create_app


def test_defaults():
    config = Settings(_env_file=None, MONGO_URL="mongodb://localhost:27017")
    assert config.PORT == 8000
    assert config.MONGODB_DB_NAME == "tvt_db"
    assert config.API_PREFIX == "/api"
    assert config.MAX_BODY_BYTES == 10 * 1024 * 1024


def test_api_prefix_is_normalized():
    assert Settings(_env_file=None, API_PREFIX="api/").API_PREFIX == "/api"
    assert Settings(_env_file=None, API_PREFIX="/").API_PREFIX == ""


def test_validate_settings_requires_mongo_url():
    with pytest.raises(ConfigurationError) as exc_info:
        validate_settings(Settings(_env_file=None, MONGO_URL=None))
    assert "MONGO_URL is required" in exc_info.value.message


def test_validate_settings_rejects_blank_mongo_url():
    with pytest.raises(ConfigurationError):
        validate_settings(Settings(_env_file=None, MONGO_URL="   "))


def test_validate_settings_passes():
    assert validate_settings(Settings(_env_file=None, MONGO_URL="mongodb://localhost:27017"))


def test_startup_fails_fast_without_mongo_url():
    app = create_app(config=Settings(_env_file=None, MONGO_URL=None))

    async def start():
        async with app.router.lifespan_context(app):
            pass

    with pytest.raises(ConfigurationError):
        asyncio.run(start())
    assert app.state.store is None
