from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
import uuid
from collections.abc import Callable
from typing import Any, Optional, TextIO

import httpx

from notify_relay.core.config import Settings, settings as default_settings
from notify_relay.hooks.client import ControlPlaneClient
from notify_relay.hooks.desktop import notify_desktop
from notify_relay.hooks.events import EventSummary, summarize_notification, summarize_permission_request
from notify_relay.hooks.gate import permission_hook_output, wait_for_decision
from notify_relay.hooks.push import PushMessage, control_links, publish

logger = logging.getLogger(__name__)


def read_event(stream: TextIO) -> dict[str, Any] | None:
    raw = stream.read()
    if not raw.strip():
        return None
    try:
        event = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("ignoring malformed hook input")
        return None
    return event if isinstance(event, dict) else None


def register_session(event: dict[str, Any], client: ControlPlaneClient) -> None:
    session_id = event.get("session_id") or ""
    if not session_id:
        return
    client.register_session(session_id, os.environ.get("ITERM_SESSION_ID", ""), event.get("cwd") or "")


def unregister_session(event: dict[str, Any], client: ControlPlaneClient) -> None:
    session_id = event.get("session_id") or ""
    if session_id:
        client.remove_session(session_id)


def _register_token(
    client: ControlPlaneClient, event: dict[str, Any], summary: EventSummary, tool: str = ""
) -> str | None:
    if not client.is_available():
        return None
    token = str(uuid.uuid4())
    try:
        client.register_action(
            token,
            session_id=event.get("session_id") or "",
            notification_type=summary.notification_type,
            message=summary.message,
            project=summary.project,
            tool=tool,
        )
    except (httpx.HTTPError, ValueError) as exc:
        logger.debug("action registration failed: %s", exc)
        return None
    return token


def notify(
    event: dict[str, Any],
    settings: Settings,
    client: ControlPlaneClient,
    push_http: httpx.Client | None = None,
) -> str | None:
    summary = summarize_notification(event, settings)
    token = _register_token(client, event, summary)
    message = PushMessage(title=summary.title, body=summary.message, priority=summary.priority, tags=summary.tags)
    if token is not None:
        message.click, message.actions = control_links(settings.public_url, token)
    publish(settings.push_server, settings.push_topic, message, http=push_http)
    if settings.local_notifications:
        notify_desktop(summary.title, summary.message)
    return token


def permission_gate(
    event: dict[str, Any],
    settings: Settings,
    client: ControlPlaneClient,
    out: TextIO,
    push_http: httpx.Client | None = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    summary = summarize_permission_request(event, settings)
    token = _register_token(client, event, summary, tool=event.get("tool_name") or "Unknown")
    message = PushMessage(title=summary.title, body=summary.message, priority=summary.priority, tags=summary.tags)
    if token is not None:
        message.click, message.actions = control_links(
            settings.public_url, token, approve_label="Allow", open_label="Details"
        )
    publish(settings.push_server, settings.push_topic, message, http=push_http)
    if settings.local_notifications:
        notify_desktop(summary.title, summary.message)
    if token is None:
        return

    verdict = wait_for_decision(
        lambda: client.decision(token),
        timeout=settings.gate_timeout_seconds,
        interval=settings.poll_interval_seconds,
        clock=clock,
        sleep=sleep,
    )
    # No output on timeout: the agent falls through to its normal prompt.
    if verdict is not None:
        out.write(json.dumps(permission_hook_output(verdict)) + "\n")


def main(
    argv: Optional[list[str]] = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    client: ControlPlaneClient | None = None,
    settings: Settings | None = None,
) -> int:
    parser = argparse.ArgumentParser(prog="notify-relay-hook", description="agent hook commands for notify-relay")
    parser.add_argument(
        "command",
        choices=["register-session", "unregister-session", "notify", "permission-gate"],
    )
    args = parser.parse_args(argv)
    settings = settings or default_settings

    event = read_event(stdin or sys.stdin)
    if event is None:
        return 0

    own_client = client is None
    client = client or ControlPlaneClient(settings.local_url)
    try:
        if args.command == "register-session":
            register_session(event, client)
        elif args.command == "unregister-session":
            unregister_session(event, client)
        elif args.command == "notify":
            notify(event, settings, client)
        else:
            permission_gate(event, settings, client, stdout or sys.stdout)
    except (httpx.HTTPError, ValueError) as exc:
        # Hooks must never block or fail the agent.
        logger.debug("%s: control-plane unavailable: %s", args.command, exc)
    finally:
        if own_client:
            client.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
