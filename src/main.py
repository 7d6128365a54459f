# src/main.py — v1
"""CLI entry point: ask and serve commands.

Usage:
    watchbutler ask "What's the Submariner selling for right now?"
    watchbutler serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from watchbutler.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from watchbutler.config.settings import ConfigurationError, load_settings

    try:
        settings = load_settings()
    except (ConfigurationError, ValueError) as exc:
        print(f"Configuration error: {exc}")
        return 2

    _setup_logging(settings, args.verbose)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="watchbutler",
        description=f"watchbutler v{__version__}: watch catalog Q&A with live prices",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- ask ---
    p_ask = subparsers.add_parser("ask", help="Answer a single question")
    p_ask.add_argument("question", help="Question about a watch")
    p_ask.set_defaults(func=_cmd_ask)

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None, help="Bind address (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: API_PORT)")
    p_serve.set_defaults(func=_cmd_serve)

    return parser


def _cmd_ask(args: argparse.Namespace, settings) -> int:
    """Answer one question and print the JSON result."""
    from watchbutler.api.facade import answer
    from watchbutler.core.errors import PipelineError, QuestionRequiredError

    try:
        result = asyncio.run(answer(args.question, settings))
    except QuestionRequiredError as exc:
        print(json.dumps({"error": str(exc)}))
        return 1
    except PipelineError as exc:
        print(json.dumps({"error": str(exc)}))
        return 1

    print(json.dumps(result.to_payload(), indent=2, ensure_ascii=False))
    return 0


def _cmd_serve(args: argparse.Namespace, settings) -> int:
    """Run the FastAPI app under uvicorn."""
    import uvicorn

    from watchbutler.api.server import create_app

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_config=None,
    )
    return 0


def _setup_logging(settings, verbose: bool) -> None:
    from watchbutler.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
