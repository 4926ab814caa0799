from __future__ import annotations

import html
import os
import re
from functools import lru_cache
from pathlib import Path

from notify_relay.models.records import ActionRecord, NotificationKind

PAGES_DIR = Path(__file__).resolve().parent.parent / "pages"
_PLACEHOLDER = re.compile(r"\{\{([A-Z_]+)\}\}")

DEFAULT_ICON = "\U0001F514"
DEFAULT_TITLE = "Claude Code"

EVENT_ICONS = {
    NotificationKind.permission: "\U0001F512",
    NotificationKind.idle: "⌛",
    NotificationKind.elicitation: "❓",
    NotificationKind.completion: "✅",
}

EVENT_TITLES = {
    NotificationKind.permission: "Permission Required",
    NotificationKind.idle: "Claude Code is Idle",
    NotificationKind.elicitation: "Claude Code has a Question",
    NotificationKind.completion: "Task Complete",
}


@lru_cache(maxsize=None)
def load_template(name: str) -> str:
    return (PAGES_DIR / name).read_text(encoding="utf-8")


def project_label(action: ActionRecord, session_cwd: str | None) -> str:
    if action.project:
        return action.project
    if not session_cwd:
        return ""
    return os.path.basename(session_cwd.rstrip("/"))


def render_control_page(action: ActionRecord, project: str) -> str:
    values = {
        "TOKEN": html.escape(action.token),
        "CREATED_AT": str(int(action.created_at * 1000)),
        "ICON": EVENT_ICONS.get(action.kind, DEFAULT_ICON),
        "TITLE": html.escape(EVENT_TITLES.get(action.kind, DEFAULT_TITLE)),
        "PROJECT": html.escape(project),
        "EVENT_TYPE": html.escape(action.kind.label),
        "TOOL": html.escape(action.tool),
        "MESSAGE": html.escape(action.message),
    }
    # Single pass, so substituted text is never rescanned for placeholders.
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), load_template("control.html"))


def render_expired_page() -> str:
    return load_template("expired.html")
