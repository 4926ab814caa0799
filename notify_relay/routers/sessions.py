from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from notify_relay.core.deps import get_store
from notify_relay.schemas.control import OkResponse
from notify_relay.schemas.sessions import SessionRegisterRequest
from notify_relay.services.store import RelayStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["sessions"])


@router.post("", response_model=OkResponse)
def register_session(payload: SessionRegisterRequest, store: RelayStore = Depends(get_store)):
    store.sessions.register(payload.session_id, payload.terminal_handle, payload.cwd)
    logger.info("session %s registered (terminal=%s)", payload.session_id, payload.terminal_handle or "-")
    return OkResponse()


@router.delete("/{session_id}", response_model=OkResponse)
def remove_session(session_id: str, store: RelayStore = Depends(get_store)):
    store.sessions.remove(session_id)
    logger.info("session %s removed", session_id)
    return OkResponse()
