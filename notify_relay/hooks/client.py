from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from notify_relay.models.records import Verdict

logger = logging.getLogger(__name__)


class ControlPlaneClient:
    """
    Thin httpx wrapper over the control-plane API, used from agent hooks.

    Transport errors propagate as httpx.HTTPError; callers treat them as
    "no remote control available".
    """

    def __init__(self, base_url: str, *, timeout: float = 2.0, http: httpx.Client | None = None):
        self.base_url = base_url.rstrip("/")
        self._http = http or httpx.Client(base_url=self.base_url, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ControlPlaneClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _json(self, response: httpx.Response) -> dict[str, Any]:
        response.raise_for_status()
        return response.json()

    def is_available(self, timeout: float = 1.0) -> bool:
        try:
            return bool(self._json(self._http.get("/health", timeout=timeout)).get("ok"))
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("control-plane unavailable: %s", exc)
            return False

    def register_session(self, session_id: str, terminal_handle: str = "", cwd: str = "") -> None:
        self._json(
            self._http.post(
                "/session",
                json={"session_id": session_id, "terminal_handle": terminal_handle, "cwd": cwd},
            )
        )

    def remove_session(self, session_id: str) -> None:
        self._json(self._http.delete(f"/session/{quote(session_id, safe='')}"))

    def register_action(
        self,
        token: str,
        *,
        session_id: str = "",
        notification_type: str = "",
        message: str = "",
        project: str = "",
        tool: str = "",
    ) -> None:
        self._json(
            self._http.post(
                "/register-action",
                json={
                    "token": token,
                    "session_id": session_id,
                    "notification_type": notification_type,
                    "message": message,
                    "project": project,
                    "tool": tool,
                },
            )
        )

    def decision(self, token: str) -> Verdict | None:
        value = self._json(self._http.get(f"/decision/{quote(token, safe='')}")).get("decision")
        return Verdict(value) if value else None
