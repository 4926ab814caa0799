import threading

import pytest
from fastapi import HTTPException

from notify_relay.models.records import Verdict
from notify_relay.services.control import resolve_text, resolve_verdict
from notify_relay.services.dispatcher import DispatchResult


def test_racing_approve_and_deny_agree_on_one_verdict(store, dispatcher):
    store.sessions.register("S1", "T1", "")
    store.actions.create("race", session_id="S1", kind="permission_prompt")
    barrier = threading.Barrier(8)
    outcomes = []
    lock = threading.Lock()

    def worker(verdict):
        barrier.wait()
        try:
            outcome = resolve_verdict(store, dispatcher, "race", verdict)
        except HTTPException as exc:
            outcome = exc
        with lock:
            outcomes.append(outcome)

    threads = [
        threading.Thread(target=worker, args=(Verdict.allow if i % 2 else Verdict.deny,)) for i in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stored = store.decisions.get("race")
    assert stored is not None
    winners = [o for o in outcomes if not isinstance(o, HTTPException) and not o.already_decided]
    assert len(winners) == 1
    assert winners[0].decision is stored
    # Every caller that saw a verdict saw the stored one, and the keystroke matches it.
    assert all(o.decision is stored for o in outcomes if not isinstance(o, HTTPException))
    assert dispatcher.sent == [("T1", stored.keystroke)]


def test_verdict_after_custom_text_is_gone(store, dispatcher):
    store.actions.create("A1", session_id="S1")
    resolve_text(store, dispatcher, "A1", "continue")

    with pytest.raises(HTTPException) as exc_info:
        resolve_verdict(store, dispatcher, "A1", Verdict.allow)
    assert exc_info.value.status_code == 410
    assert store.decisions.get("A1") is None


def test_session_without_terminal_handle_skips_dispatch(store, dispatcher):
    store.sessions.register("S1", "", "/w")
    store.actions.create("A2", session_id="S1")

    result = resolve_verdict(store, dispatcher, "A2", Verdict.allow)
    assert result.dispatch is DispatchResult.session_not_found
    assert dispatcher.sent == []


def test_empty_text_leaves_token_pending(store, dispatcher):
    store.actions.create("A3")
    with pytest.raises(HTTPException) as exc_info:
        resolve_text(store, dispatcher, "A3", "  ")
    assert exc_info.value.status_code == 400
    assert store.actions.peek("A3") is not None
