"""
Human-readable descriptions of agent hook events for push notifications.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any

from notify_relay.core.config import Settings
from notify_relay.services.store import truncate_message

NOTIFY_MESSAGE_LIMIT = 200
PERMISSION_MESSAGE_LIMIT = 300


@dataclass
class EventSummary:
    title: str
    message: str
    priority: str
    tags: str
    notification_type: str
    project: str


def project_name(event: dict[str, Any]) -> str:
    directory = event.get("cwd") or os.environ.get("CLAUDE_PROJECT_DIR", "")
    return os.path.basename(directory.rstrip("/")) if directory else ""


def _with_project(title: str, project: str) -> str:
    return f"[{project}] {title}" if project else title


def summarize_notification(event: dict[str, Any], settings: Settings) -> EventSummary:
    event_name = event.get("hook_event_name") or ""
    notification_type = event.get("notification_type") or ""
    title = event.get("title") or "Claude Code"
    priority, tags = "default", "bell"

    if event_name == "Notification":
        if notification_type == "permission_prompt":
            priority, tags, title = settings.priority_permission, "lock", "Permission Required"
        elif notification_type == "idle_prompt":
            priority, tags, title = settings.priority_idle, "hourglass", "Claude Code is Idle"
        elif notification_type == "elicitation_dialog":
            tags, title = "question", "Claude Code has a Question"
    elif event_name == "Stop":
        priority, tags, title = settings.priority_done, "white_check_mark", "Task Complete"

    project = project_name(event)
    return EventSummary(
        title=_with_project(title, project),
        message=truncate_message(event.get("message") or "Claude Code needs your attention", NOTIFY_MESSAGE_LIMIT),
        priority=priority,
        tags=tags,
        notification_type=notification_type or "stop",
        project=project,
    )


def _first_fields(tool_input: dict[str, Any], count: int = 3, width: int = 60) -> list[str]:
    fields = []
    for key, value in list(tool_input.items())[:count]:
        text = value if isinstance(value, str) else json.dumps(value)
        fields.append(f"{key}: {text[:width]}")
    return fields


def describe_tool_request(tool_name: str, tool_input: dict[str, Any]) -> str:
    if tool_name == "Bash":
        command = tool_input.get("command", "")
        description = tool_input.get("description", "")
        return f"{description}\n\n$ {command}" if description else f"$ {command}"
    if tool_name == "Write":
        return f"Create/overwrite file:\n{tool_input.get('file_path', 'unknown')}"
    if tool_name == "Edit":
        old = (tool_input.get("old_string") or "")[:80]
        return f"Edit file: {tool_input.get('file_path', 'unknown')}\nReplace: {old}..."
    if tool_name == "WebFetch":
        return f"Fetch URL:\n{tool_input.get('url', 'unknown')}"
    if tool_name == "Task":
        agent = tool_input.get("subagent_type", "unknown")
        return f"Launch {agent} agent: {tool_input.get('description', '')}"
    if tool_name.startswith("mcp__"):
        return "\n".join([f"MCP tool: {tool_name}", *_first_fields(tool_input)])
    return f"{tool_name}: " + ", ".join(_first_fields(tool_input))


def summarize_permission_request(event: dict[str, Any], settings: Settings) -> EventSummary:
    tool_name = event.get("tool_name") or "Unknown"
    tool_input = event.get("tool_input") or {}
    if not isinstance(tool_input, dict):
        tool_input = {}
    project = project_name(event)
    return EventSummary(
        title=_with_project(f"Allow {tool_name}?", project),
        message=truncate_message(describe_tool_request(tool_name, tool_input), PERMISSION_MESSAGE_LIMIT),
        priority=settings.priority_permission,
        tags="lock",
        notification_type="permission_prompt",
        project=project,
    )
