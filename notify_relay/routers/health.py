from __future__ import annotations

import time

from fastapi import APIRouter, Request

from notify_relay.schemas.control import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    return HealthResponse(uptime=round(time.monotonic() - request.app.state.started_at, 3))
