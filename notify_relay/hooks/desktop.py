from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable

logger = logging.getLogger(__name__)

NOTIFIER = "terminal-notifier"
GROUP = "claude-notify"


def notify_desktop(
    title: str,
    message: str,
    *,
    which: Callable[[str], str | None] = shutil.which,
    popen: Callable[..., object] = subprocess.Popen,
) -> bool:
    """Show a local banner without waiting for it. Returns False when terminal-notifier is missing."""
    executable = which(NOTIFIER)
    if not executable:
        return False
    try:
        popen(
            [executable, "-title", title, "-message", message, "-sound", "default", "-group", GROUP],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        logger.debug("%s failed: %s", NOTIFIER, exc)
        return False
    return True
