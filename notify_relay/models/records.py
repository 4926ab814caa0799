from __future__ import annotations

import enum
from dataclasses import dataclass


class NotificationKind(str, enum.Enum):
    permission = "permission_prompt"
    idle = "idle_prompt"
    elicitation = "elicitation_dialog"
    completion = "stop"
    unspecified = ""

    @classmethod
    def from_wire(cls, value: str | None) -> NotificationKind:
        try:
            return cls(value or "")
        except ValueError:
            return cls.unspecified

    @property
    def label(self) -> str:
        if self is NotificationKind.unspecified:
            return "notification"
        return self.value.replace("_", " ")


class Verdict(str, enum.Enum):
    allow = "allow"
    deny = "deny"

    @property
    def keystroke(self) -> str:
        return "y" if self is Verdict.allow else "n"


@dataclass
class SessionRecord:
    session_id: str
    terminal_handle: str
    cwd: str
    registered_at: float


@dataclass
class ActionRecord:
    """
    A pending decision behind a one-time token.

    `consumed` only ever flips from False to True, under the action store lock.
    """

    token: str
    session_id: str
    kind: NotificationKind
    message: str
    project: str
    tool: str
    created_at: float
    consumed: bool = False


@dataclass(frozen=True)
class DecisionRecord:
    token: str
    verdict: Verdict
    decided_at: float
