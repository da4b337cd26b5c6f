"""
app/main.py

Purpose: Application entry point

- Builds the FastAPI app (create_app) and wires routes, middleware, handlers
- Loads configuration and logging
- Owns the store lifecycle: validated config, connect, indexes, close
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager
from typing import Optional
import time

from app.core.config import Settings, settings as default_settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.core.middleware import BodySizeLimitMiddleware
from app.db.indexes import create_indexes
from app.db.mongo import MongoStore
from app.api import payments, users

# Initialize logging first
setup_logging()
logger = get_logger(__name__)

VERSION = "1.0.0"


def create_app(store: Optional[MongoStore] = None, config: Optional[Settings] = None) -> FastAPI:
    """
    Builds the application.

    Args:
        store: Pre-built store. When given, the caller owns its lifecycle
            and startup skips config validation, connecting and indexing.
        config: Settings to use instead of the environment-loaded ones.
    """
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = getattr(app.state, "store", None) is None

        if owns_store:
            logger.info("🚀 Starting TVT backend...")
            try:
                validate_settings(config)
                logger.info("✅ Configuration validated")

                app.state.store = MongoStore.from_settings(config)
                await app.state.store.connect()
                await create_indexes(app.state.store)
            except Exception as e:
                logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
                raise

            logger.info(f"🎉 TVT backend started (environment: {config.ENVIRONMENT})")

        yield  # Application runs here

        if owns_store:
            logger.info("🛑 Shutting down TVT backend...")
            app.state.store.close()
            app.state.store = None

    app = FastAPI(
        title="TVT Backend",
        description="User registration and payment proof collection",
        version=VERSION,
        lifespan=lifespan,
        debug=config.DEBUG,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
    )
    app.state.store = store

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > config.SLOW_REQUEST_SECONDS:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={"process_time": process_time}
            )

        return response

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=config.MAX_BODY_BYTES)

    # Added last so it wraps the other middleware, 413s included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app, config)

    app.include_router(users.router, prefix=config.API_PREFIX, tags=["Users"])
    app.include_router(payments.router, prefix=config.API_PREFIX, tags=["Payments"])

    @app.get("/", tags=["Health"], response_class=PlainTextResponse)
    async def root():
        """Liveness string."""
        return "TVT backend is running ✅"

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Pings the store. 200 when it answers, 503 otherwise.
        """
        current = app.state.store
        db_healthy = current is not None and await current.check_health()

        health_status = {
            "status": "healthy" if db_healthy else "unhealthy",
            "timestamp": time.time(),
            "environment": config.ENVIRONMENT,
            "version": VERSION,
            "checks": {"database": "healthy" if db_healthy else "unhealthy"},
        }
        return JSONResponse(content=health_status, status_code=200 if db_healthy else 503)

    return app


app = create_app()


def run():
    """Console entry point: fail fast on bad config, then serve."""
    import uvicorn

    validate_settings(default_settings)
    uvicorn.run(
        "app.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.is_development,
        log_level=default_settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
