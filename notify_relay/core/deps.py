from __future__ import annotations

from fastapi import Request

from notify_relay.services.dispatcher import KeystrokeDispatcher
from notify_relay.services.store import RelayStore


def get_store(request: Request) -> RelayStore:
    return request.app.state.store


def get_dispatcher(request: Request) -> KeystrokeDispatcher:
    return request.app.state.dispatcher
