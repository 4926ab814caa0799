from __future__ import annotations

from pydantic import BaseModel

from notify_relay.models.records import Verdict
from notify_relay.services.dispatcher import DispatchResult


class OkResponse(BaseModel):
    ok: bool = True


class HealthResponse(OkResponse):
    uptime: float


class VerdictResolution(OkResponse):
    decision: Verdict
    sent: str | None = None
    dispatched: bool = False
    dispatch: DispatchResult | None = None
    # Set when the token was already consumed but a verdict had been recorded for it.
    already_decided: bool = False
    detail: str | None = None


class TextResolution(OkResponse):
    sent: str
    dispatched: bool
    dispatch: DispatchResult


class DecisionPollResponse(OkResponse):
    decision: Verdict | None = None
