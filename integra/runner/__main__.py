"""
integra.runner.__main__ - CLI entry point for the integration service

Usage:
    python -m integra.runner --port 9090 --log-level DEBUG
"""

import argparse
import logging
import sys

import uvicorn

from integra.api.main import create_app
from integra.settings import get_settings


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser; unset options fall back to settings."""
    parser = argparse.ArgumentParser(
        prog="integra",
        description="Run the integra request orchestration service",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind (default: INTEGRA_API_HOST or 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: INTEGRA_API_PORT or 9090)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INTEGRA_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and serve the API."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    log_level = args.log_level or settings.log_level.upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    host = args.host or settings.api_host
    port = args.port or settings.api_port
    logging.getLogger(__name__).info(f"Integration Service starting on {host}:{port}...")

    try:
        uvicorn.run(
            create_app(settings),
            host=host,
            port=port,
            log_level=log_level.lower(),
        )
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
