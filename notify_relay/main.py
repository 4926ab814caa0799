from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notify_relay.core.config import Settings, settings as default_settings
from notify_relay.core.errors import install_error_handlers
from notify_relay.routers import actions, control, decisions, health, sessions
from notify_relay.services.dispatcher import KeystrokeDispatcher, build_dispatcher
from notify_relay.services.store import RelayStore
from notify_relay.services.sweeper import start_sweeper, stop_sweeper

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    store: RelayStore | None = None,
    dispatcher: KeystrokeDispatcher | None = None,
    run_sweeper: bool = True,
) -> FastAPI:
    settings = settings or default_settings
    if store is None:
        store = RelayStore.from_settings(settings)
    if dispatcher is None:
        dispatcher = build_dispatcher(settings.dispatcher, settings.dispatch_timeout_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper = start_sweeper(store, settings.sweep_interval_seconds) if run_sweeper else None
        logger.info(
            "control-plane ready (action ttl %ss, sweep every %ss)",
            settings.action_ttl_seconds,
            settings.sweep_interval_seconds,
        )
        try:
            yield
        finally:
            if sweeper is not None:
                await stop_sweeper(sweeper)

    app = FastAPI(
        title="Notify Relay Control Plane",
        version="0.1.0",
        description="Session registry, one-time action tokens and decision polling for remote agent control.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.dispatcher = dispatcher
    app.state.started_at = time.monotonic()

    # Reached only through operator-controlled tunnels; any origin is accepted.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    app.include_router(health.router)
    app.include_router(sessions.router)
    app.include_router(actions.router)
    app.include_router(control.router)
    app.include_router(decisions.router)
    return app
