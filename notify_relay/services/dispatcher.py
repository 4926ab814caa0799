from __future__ import annotations

import enum
import logging
import subprocess
from typing import Protocol

logger = logging.getLogger(__name__)


class DispatchResult(str, enum.Enum):
    ok = "ok"
    session_not_found = "session_not_found"
    failure = "failure"


class KeystrokeDispatcher(Protocol):
    def send(self, terminal_handle: str, text: str) -> DispatchResult: ...


_ITERM_WRITE_SCRIPT = """
tell application "iTerm2"
  repeat with w in windows
    repeat with t in tabs of w
      repeat with s in sessions of t
        if unique ID of s is "{handle}" then
          tell s to write text "{text}"
          return "sent"
        end if
      end repeat
    end repeat
  end repeat
  return "session_not_found"
end tell
"""


def applescript_quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _iterm_handle(terminal_handle: str) -> str:
    # ITERM_SESSION_ID looks like "w0t1p0:<UUID>"; AppleScript's unique ID is the UUID part.
    return terminal_handle.split(":", 1)[-1]


class ITermDispatcher:
    """Types text into an iTerm2 session through osascript."""

    def __init__(self, timeout: float = 10.0, osascript: str = "osascript"):
        self.timeout = timeout
        self.osascript = osascript

    def send(self, terminal_handle: str, text: str) -> DispatchResult:
        script = _ITERM_WRITE_SCRIPT.format(
            handle=applescript_quote(_iterm_handle(terminal_handle)),
            text=applescript_quote(text),
        )
        try:
            completed = subprocess.run(
                [self.osascript, "-e", script],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.warning("osascript failed for %s: %s", terminal_handle, exc)
            return DispatchResult.failure
        if completed.returncode != 0:
            logger.warning("osascript exited %s: %s", completed.returncode, completed.stderr.strip())
            return DispatchResult.failure
        if completed.stdout.strip() == "session_not_found":
            return DispatchResult.session_not_found
        return DispatchResult.ok


class NullDispatcher:
    def send(self, terminal_handle: str, text: str) -> DispatchResult:
        return DispatchResult.session_not_found


def build_dispatcher(kind: str, timeout: float) -> KeystrokeDispatcher:
    if kind == "iterm":
        return ITermDispatcher(timeout=timeout)
    if kind == "none":
        return NullDispatcher()
    raise ValueError(f"unknown dispatcher: {kind}")
