"""FastAPI application entry point."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zoneclock.config.settings import get_settings
from zoneclock.core.store import ClockStore
from zoneclock.data.persistence import PersistenceGateway
from zoneclock.tasks.resolver import DefaultLocationResolver
from zoneclock.tasks.scheduler import TickScheduler
from zoneclock.utils.logging import setup_logging
from .api import (
    search as search_routes,
    selection as selection_routes,
    status as status_routes,
    zones as zone_routes,
)

logger = logging.getLogger("zoneclock.web")


def build_store() -> tuple[ClockStore, bool]:
    """Create the store from durable state; returns it with a first-run flag."""
    persistence = PersistenceGateway()
    persistence.ensure_schema()
    store = ClockStore(persistence)
    restored = store.restore()
    return store, not restored


def create_app(store: ClockStore | None = None, *, run_background: bool = True) -> FastAPI:
    settings = get_settings()
    setup_logging(level=settings.log_level)

    logger.info("Starting %s (%s)", settings.app_name, settings.environment)

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(status_routes.router)
    app.include_router(zone_routes.router)
    app.include_router(selection_routes.router)
    app.include_router(search_routes.router)

    app.state.store = store
    app.state.ticker = None
    app.state.resolver = None

    @app.on_event("startup")
    async def on_startup() -> None:
        first_run = False
        if app.state.store is None:
            app.state.store, first_run = build_store()
        store_ = app.state.store
        resolver = DefaultLocationResolver(store_)
        app.state.resolver = resolver
        if first_run:
            resolver.seed()
        if not run_background:
            return
        if first_run:
            resolver.start()
        app.state.ticker = TickScheduler(store_)
        await app.state.ticker.start()
        logger.info("Tracking %d zones", len(store_.zones))

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        if app.state.resolver is not None:
            await app.state.resolver.stop()
        if app.state.ticker is not None:
            await app.state.ticker.shutdown()

    return app


app = create_app()
