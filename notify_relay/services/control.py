from __future__ import annotations

import logging

from fastapi import HTTPException

from notify_relay.models.records import ActionRecord, Verdict
from notify_relay.schemas.control import TextResolution, VerdictResolution
from notify_relay.services.dispatcher import DispatchResult, KeystrokeDispatcher
from notify_relay.services.pages import project_label, render_control_page
from notify_relay.services.store import RelayStore

logger = logging.getLogger(__name__)

EXPIRED_DETAIL = "Token expired or already used"


def dispatch_for_action(
    store: RelayStore, dispatcher: KeystrokeDispatcher, action: ActionRecord, text: str
) -> DispatchResult:
    session = store.sessions.get(action.session_id) if action.session_id else None
    if session is None or not session.terminal_handle:
        logger.info("no terminal session for %s; skipping keystroke dispatch", action.session_id or "<none>")
        return DispatchResult.session_not_found
    try:
        result = dispatcher.send(session.terminal_handle, text)
    except Exception:
        # The resolution is already recorded; dispatch is best-effort only.
        logger.exception("keystroke dispatch raised for session %s", action.session_id)
        return DispatchResult.failure
    if result is not DispatchResult.ok:
        logger.warning("keystroke dispatch to %s returned %s", session.terminal_handle, result.value)
    return result


def resolve_verdict(
    store: RelayStore, dispatcher: KeystrokeDispatcher, token: str, verdict: Verdict
) -> VerdictResolution:
    """
    Approve/deny a pending token.

    The verdict is written to the decision channel before the action is consumed,
    so a polling permission gate sees it even if consumption or dispatch goes wrong.
    Losing a race to another resolver still reports the verdict that won.
    """
    if store.actions.peek(token) is not None:
        stored = store.decisions.set(token, verdict)
        action = store.actions.consume(token)
        if action is not None:
            logger.info("token %s resolved: %s", token, stored.value)
            text = stored.keystroke
            result = dispatch_for_action(store, dispatcher, action, text)
            return VerdictResolution(
                decision=stored,
                sent=text,
                dispatched=result is DispatchResult.ok,
                dispatch=result,
            )

    existing = store.decisions.get(token)
    if existing is not None:
        return VerdictResolution(decision=existing, already_decided=True, detail=EXPIRED_DETAIL)
    raise HTTPException(status_code=410, detail=EXPIRED_DETAIL)


def resolve_text(store: RelayStore, dispatcher: KeystrokeDispatcher, token: str, raw_text: str) -> TextResolution:
    text = raw_text.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Empty input")
    action = store.actions.consume(token)
    if action is None:
        raise HTTPException(status_code=410, detail=EXPIRED_DETAIL)
    logger.info("token %s resolved with custom text", token)
    result = dispatch_for_action(store, dispatcher, action, text)
    return TextResolution(sent=text, dispatched=result is DispatchResult.ok, dispatch=result)


def control_page_for(store: RelayStore, token: str) -> str | None:
    action = store.actions.peek(token)
    if action is None:
        return None
    session = store.sessions.get(action.session_id) if action.session_id else None
    project = project_label(action, session.cwd if session is not None else None)
    return render_control_page(action, project)
