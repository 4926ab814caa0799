from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from notify_relay.core.deps import get_dispatcher, get_store
from notify_relay.models.records import Verdict
from notify_relay.schemas.control import TextResolution, VerdictResolution
from notify_relay.services.control import control_page_for, resolve_text, resolve_verdict
from notify_relay.services.dispatcher import KeystrokeDispatcher
from notify_relay.services.pages import render_expired_page
from notify_relay.services.store import RelayStore

router = APIRouter(tags=["control"])


@router.get("/approve/{token}", response_model=VerdictResolution)
def approve(
    token: str,
    store: RelayStore = Depends(get_store),
    dispatcher: KeystrokeDispatcher = Depends(get_dispatcher),
):
    return resolve_verdict(store, dispatcher, token, Verdict.allow)


@router.get("/deny/{token}", response_model=VerdictResolution)
def deny(
    token: str,
    store: RelayStore = Depends(get_store),
    dispatcher: KeystrokeDispatcher = Depends(get_dispatcher),
):
    return resolve_verdict(store, dispatcher, token, Verdict.deny)


@router.get("/control/{token}", response_class=HTMLResponse)
def control_page(token: str, store: RelayStore = Depends(get_store)):
    page = control_page_for(store, token)
    if page is None:
        return HTMLResponse(render_expired_page(), status_code=410)
    return HTMLResponse(page)


@router.post("/control/{token}", response_model=TextResolution)
async def send_text(
    token: str,
    request: Request,
    store: RelayStore = Depends(get_store),
    dispatcher: KeystrokeDispatcher = Depends(get_dispatcher),
):
    # The page posts the reply as a raw text/plain body.
    raw = (await request.body()).decode("utf-8", errors="replace")
    return await run_in_threadpool(resolve_text, store, dispatcher, token, raw)
