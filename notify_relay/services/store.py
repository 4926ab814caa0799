from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from notify_relay.models.records import ActionRecord, DecisionRecord, NotificationKind, SessionRecord, Verdict

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def truncate_message(message: str, limit: int) -> str:
    if limit <= 3 or len(message) <= limit:
        return message
    return message[: limit - 3] + "..."


class SessionRegistry:
    def __init__(self, retention_seconds: float, clock: Clock = time.time):
        self._retention = retention_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: dict[str, SessionRecord] = {}

    def register(self, session_id: str, terminal_handle: str = "", cwd: str = "") -> SessionRecord:
        record = SessionRecord(
            session_id=session_id,
            terminal_handle=terminal_handle,
            cwd=cwd,
            registered_at=self._clock(),
        )
        with self._lock:
            self._sessions[session_id] = record
        return record

    def get(self, session_id: str) -> SessionRecord | None:
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def sweep(self, now: float | None = None) -> int:
        now = self._clock() if now is None else now
        removed = 0
        with self._lock:
            for session_id in list(self._sessions):
                if now - self._sessions[session_id].registered_at > self._retention:
                    del self._sessions[session_id]
                    removed += 1
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class ActionTokenStore:
    """
    One-time action tokens.

    Tokens are generated by the caller. `consume` is the only place a record
    moves from pending to consumed, and it does so under the store lock.
    """

    def __init__(self, ttl_seconds: float, message_max_length: int = 300, clock: Clock = time.time):
        self._ttl = ttl_seconds
        self._message_max_length = message_max_length
        self._clock = clock
        self._lock = threading.Lock()
        self._actions: dict[str, ActionRecord] = {}

    def create(
        self,
        token: str,
        session_id: str = "",
        kind: NotificationKind | str = NotificationKind.unspecified,
        message: str = "",
        project: str = "",
        tool: str = "",
    ) -> ActionRecord:
        if not isinstance(kind, NotificationKind):
            kind = NotificationKind.from_wire(kind)
        record = ActionRecord(
            token=token,
            session_id=session_id,
            kind=kind,
            message=truncate_message(message, self._message_max_length),
            project=project,
            tool=tool,
            created_at=self._clock(),
        )
        with self._lock:
            self._actions[token] = record
        return record

    def _expired(self, record: ActionRecord, now: float) -> bool:
        return now - record.created_at > self._ttl

    def _live(self, token: str) -> ActionRecord | None:
        # Caller holds the lock.
        record = self._actions.get(token)
        if record is None or record.consumed:
            return None
        if self._expired(record, self._clock()):
            del self._actions[token]
            return None
        return record

    def peek(self, token: str) -> ActionRecord | None:
        with self._lock:
            return self._live(token)

    def tokens(self) -> list[str]:
        with self._lock:
            return list(self._actions)

    def consume(self, token: str) -> ActionRecord | None:
        with self._lock:
            record = self._live(token)
            if record is None:
                return None
            record.consumed = True
            return record

    def sweep(self, now: float | None = None) -> int:
        now = self._clock() if now is None else now
        removed = 0
        with self._lock:
            for token in list(self._actions):
                record = self._actions[token]
                if record.consumed or self._expired(record, now):
                    del self._actions[token]
                    removed += 1
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._actions)


class DecisionChannel:
    """Verdicts keyed by token, readable after the action itself is consumed."""

    def __init__(self, ttl_seconds: float, clock: Clock = time.time):
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._decisions: dict[str, DecisionRecord] = {}

    def set(self, token: str, verdict: Verdict) -> Verdict:
        """Record a verdict unless one exists; returns the verdict now stored."""
        with self._lock:
            existing = self._decisions.get(token)
            if existing is not None:
                return existing.verdict
            self._decisions[token] = DecisionRecord(token=token, verdict=verdict, decided_at=self._clock())
            return verdict

    def get(self, token: str) -> Verdict | None:
        with self._lock:
            record = self._decisions.get(token)
        return record.verdict if record is not None else None

    def sweep(self, now: float | None = None) -> int:
        now = self._clock() if now is None else now
        removed = 0
        with self._lock:
            for token in list(self._decisions):
                if now - self._decisions[token].decided_at > self._ttl:
                    del self._decisions[token]
                    removed += 1
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._decisions)


class RelayStore:
    def __init__(
        self,
        *,
        action_ttl_seconds: float,
        session_retention_seconds: float,
        decision_ttl_seconds: float,
        message_max_length: int = 300,
        clock: Clock = time.time,
    ):
        self.clock = clock
        self.sessions = SessionRegistry(session_retention_seconds, clock=clock)
        self.actions = ActionTokenStore(action_ttl_seconds, message_max_length=message_max_length, clock=clock)
        self.decisions = DecisionChannel(decision_ttl_seconds, clock=clock)

    @classmethod
    def from_settings(cls, settings, clock: Clock = time.time) -> RelayStore:
        return cls(
            action_ttl_seconds=settings.action_ttl_seconds,
            session_retention_seconds=settings.session_retention_seconds,
            decision_ttl_seconds=settings.decision_ttl_seconds,
            message_max_length=settings.message_max_length,
            clock=clock,
        )

    def sweep(self, now: float | None = None) -> dict[str, int]:
        now = self.clock() if now is None else now
        removed = {
            "sessions": self.sessions.sweep(now),
            "actions": self.actions.sweep(now),
            "decisions": self.decisions.sweep(now),
        }
        if any(removed.values()):
            logger.debug("sweep removed %s", removed)
        return removed
