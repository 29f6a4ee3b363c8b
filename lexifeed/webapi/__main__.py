"""Run the lexifeed API under uvicorn.

Host, port and log level default to the loaded configuration
(``api_host``, ``api_port`` and ``debug``); flags override them.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

import uvicorn

from lexifeed import config_manager as cfg

LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


def build_parser(settings: Optional[cfg.LexifeedSettings] = None) -> argparse.ArgumentParser:
    active = settings or cfg.get_settings()
    parser = argparse.ArgumentParser(description="Run the lexifeed API with uvicorn")
    parser.add_argument(
        "--host",
        default=active.api_host,
        help="Interface to bind (default: %(default)s)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=active.api_port,
        help="TCP port to listen on (default: %(default)s)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change.",
    )
    parser.add_argument(
        "--log-level",
        default="debug" if active.debug else "info",
        choices=LOG_LEVELS,
        help="uvicorn log level (default: %(default)s)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    uvicorn.run(
        "lexifeed.webapi.application:create_app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
        factory=True,
    )


if __name__ == "__main__":  # pragma: no cover - CLI integration
    try:
        main()
    except KeyboardInterrupt:  # pragma: no cover - user initiated shutdown
        logging.getLogger(__name__).info("Server interrupted by user")
