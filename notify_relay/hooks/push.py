from __future__ import annotations

import logging
from dataclasses import dataclass
from email.header import Header

import httpx

logger = logging.getLogger(__name__)


@dataclass
class PushMessage:
    title: str
    body: str
    priority: str = "default"
    tags: str = "bell"
    click: str | None = None
    actions: str | None = None


def _header_value(value: str) -> str:
    # ntfy decodes RFC 2047 encoded words; raw non-ASCII is not allowed in headers.
    if value.isascii():
        return value
    return Header(value, "utf-8").encode()


def control_links(base_url: str, token: str, *, approve_label: str = "Approve", open_label: str = "Open") -> tuple[str, str]:
    """Click URL and `Actions` header for a registered token."""
    base = base_url.rstrip("/")
    click = f"{base}/control/{token}"
    actions = (
        f"view, {approve_label}, {base}/approve/{token}, clear=true; "
        f"view, Deny, {base}/deny/{token}, clear=true; "
        f"view, {open_label}, {click}"
    )
    return click, actions


def publish(
    server: str,
    topic: str,
    message: PushMessage,
    *,
    timeout: float = 5.0,
    http: httpx.Client | None = None,
) -> bool:
    """Fire-and-forget POST to an ntfy-compatible topic. Returns False on any transport error."""
    if not topic:
        return False
    headers = {
        "Title": _header_value(message.title),
        "Priority": message.priority,
        "Tags": message.tags,
    }
    if message.click:
        headers["Click"] = message.click
    if message.actions:
        headers["Actions"] = _header_value(message.actions)
    url = f"{server.rstrip('/')}/{topic}"
    try:
        if http is not None:
            response = http.post(url, content=message.body.encode("utf-8"), headers=headers, timeout=timeout)
        else:
            response = httpx.post(url, content=message.body.encode("utf-8"), headers=headers, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("push to %s failed: %s", url, exc)
        return False
    return True
