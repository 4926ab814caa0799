from __future__ import annotations

import argparse
import logging
from typing import Optional

import uvicorn

from notify_relay.core.config import settings


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="notify-relay", description="remote-control control-plane (FastAPI)")
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--log-level", default=settings.log_level, help=f"Log level (default: {settings.log_level})")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=str(args.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    try:
        uvicorn.run(
            "notify_relay.main:create_app",
            factory=True,
            host=str(args.host),
            port=int(args.port),
            log_level=str(args.log_level).lower(),
        )
    except (KeyboardInterrupt, SystemExit):
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
