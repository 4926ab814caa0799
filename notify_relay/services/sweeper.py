from __future__ import annotations

import asyncio
import logging

from notify_relay.services.store import RelayStore

logger = logging.getLogger(__name__)


async def sweep_forever(store: RelayStore, interval_seconds: float) -> None:
    """Prune expired sessions, tokens and decisions until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            store.sweep()
        except Exception:
            logger.exception("periodic sweep failed")


def start_sweeper(store: RelayStore, interval_seconds: float) -> asyncio.Task:
    return asyncio.create_task(sweep_forever(store, interval_seconds), name="relay-sweeper")


async def stop_sweeper(task: asyncio.Task) -> None:
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
