from __future__ import annotations

from fastapi import APIRouter, Depends

from notify_relay.core.deps import get_store
from notify_relay.schemas.control import DecisionPollResponse
from notify_relay.services.store import RelayStore

router = APIRouter(prefix="/decision", tags=["decisions"])


@router.get("/{token}", response_model=DecisionPollResponse)
def poll_decision(token: str, store: RelayStore = Depends(get_store)):
    # Never an error: "no decision yet" is a null decision.
    return DecisionPollResponse(decision=store.decisions.get(token))
