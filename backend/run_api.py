#!/usr/bin/env python
"""
Start the IOU backend under uvicorn.

Command-line flags override the matching HOST / PORT / RELOAD / LOG_LEVEL
environment settings:

    uv run python run_api.py
    uv run python run_api.py --reload --log-level debug
"""

import argparse

import uvicorn
from rich.console import Console

from shared.config import Settings, get_settings

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"Serve {settings.app_name} {settings.app_version}")
    parser.add_argument("--host", default=settings.host, help=f"bind address (default {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"bind port (default {settings.port})")
    parser.add_argument("--reload", action="store_true", default=settings.reload, help="restart on code changes")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=settings.log_level.lower(),
        help="uvicorn log level",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    Console().print(
        f"[bold]{settings.app_name}[/bold] listening on http://{args.host}:{args.port}"
        + (" [dim](reload)[/dim]" if args.reload else "")
    )
    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
