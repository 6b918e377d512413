"""SMS Bank Reader API — FastAPI entry point.

create_app() builds an app that owns its KeyRegistry and
TransactionStore; nothing is shared between app instances. The
module-level ``app`` is what uvicorn serves.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import register_error_handlers
from apps.api.core.logging import mask_key, setup_logging
from apps.api.domains.keys.registry import KeyRegistry
from apps.api.domains.keys.router import router as keys_router
from apps.api.domains.transactions.router import router as transactions_router
from apps.api.domains.transactions.store import TransactionStore
from apps.api.routers import docs, health

logger = structlog.get_logger()


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[KeyRegistry] = None,
    store: Optional[TransactionStore] = None,
) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = registry.store if registry is not None else TransactionStore()
    registry = registry or KeyRegistry(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan — startup/shutdown hooks."""
        setup_logging(log_level=settings.log_level, json_output=settings.json_logs)
        if settings.DEMO_API_KEY:
            registry.register(settings.DEMO_API_KEY, settings.DEMO_KEY_NAME)
        logger.info("app_starting", version=settings.APP_VERSION)
        yield
        logger.info("app_stopping", keys=len(registry))

    app = FastAPI(
        title="SMS Bank Reader API",
        description="Key-scoped storage and retrieval of transactions extracted from bank SMS.",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        # /docs is the static endpoint description
        docs_url="/api-docs",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.store = store

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(docs.router)
    app.include_router(keys_router)
    app.include_router(transactions_router)
    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using HOST/PORT from settings."""
    settings = get_settings()
    logger.info(
        "server_listening",
        url=f"http://{settings.HOST}:{settings.PORT}",
        docs="/docs",
        demo_key=mask_key(settings.DEMO_API_KEY),
    )
    uvicorn.run("apps.api.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
