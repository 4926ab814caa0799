from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from notify_relay.core.deps import get_store
from notify_relay.schemas.actions import ActionRegisterRequest
from notify_relay.schemas.control import OkResponse
from notify_relay.services.store import RelayStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["actions"])


@router.post("/register-action", response_model=OkResponse)
def register_action(payload: ActionRegisterRequest, store: RelayStore = Depends(get_store)):
    record = store.actions.create(
        payload.token,
        session_id=payload.session_id,
        kind=payload.notification_type,
        message=payload.message,
        project=payload.project,
        tool=payload.tool,
    )
    logger.info("action %s registered (%s, session=%s)", record.token, record.kind.label, record.session_id or "-")
    return OkResponse()
