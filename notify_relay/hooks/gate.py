from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from notify_relay.models.records import Verdict

logger = logging.getLogger(__name__)

DENY_REASON = "Denied via remote control"


def wait_for_decision(
    poll: Callable[[], Verdict | None],
    *,
    timeout: float = 60.0,
    interval: float = 2.0,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> Verdict | None:
    """
    Poll until a verdict appears or `timeout` elapses.

    Returns None on timeout; the caller then falls back to its own default
    (for the permission hook: the agent's normal interactive prompt). A failed
    poll counts as "no decision yet".
    """
    deadline = clock() + timeout
    while clock() < deadline:
        try:
            verdict = poll()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("decision poll failed: %s", exc)
            verdict = None
        if verdict is not None:
            return verdict
        sleep(max(0.0, min(interval, deadline - clock())))
    return None


def permission_hook_output(verdict: Verdict) -> dict[str, Any]:
    decision: dict[str, Any] = {"behavior": verdict.value}
    if verdict is Verdict.deny:
        decision["message"] = DENY_REASON
    return {
        "hookSpecificOutput": {
            "hookEventName": "PermissionRequest",
            "decision": decision,
        }
    }
