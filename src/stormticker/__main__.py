"""CLI entry-point: ``python -m stormticker serve`` / ``python -m stormticker once``."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from stormticker import config
from stormticker.service import StormService

logger = logging.getLogger(__name__)

_VIEWS = ("canonical", "ticker", "compact", "dashboard")


def _setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _serve(args: argparse.Namespace) -> None:
    import uvicorn

    from stormticker.server import create_app

    service = StormService.from_config(feed_url=args.url, interval=args.interval)
    app = create_app(service)

    logger.info("🚀 Storm ticker running on http://localhost:%d", args.port)
    logger.info("⚙️  Change feed URL: http://localhost:%d/config?url=YOUR_JSON_URL", args.port)
    logger.info("📊 API endpoint: http://localhost:%d/api/data", args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")


def _once(args: argparse.Namespace) -> None:
    """Run a single refresh cycle and print one view to stdout."""
    service = StormService.from_config(feed_url=args.url)
    service.refresh()

    if args.view == "canonical":
        print(service.get_canonical_text())
    elif args.view == "ticker":
        items = [item.model_dump() for item in service.get_ticker_items()]
        print(json.dumps(items, indent=2, ensure_ascii=False))
    elif args.view == "compact":
        print(service.get_compact_sections().model_dump_json(indent=2))
    else:
        print(service.get_dashboard_model().model_dump_json(indent=2))

    if service.snapshot.error:
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="stormticker",
        description="Local storm reports as broadcast overlays.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── serve ──────────────────────────────────────────────────────────
    serve_parser = sub.add_parser("serve", help="Run the overlay web server.")
    serve_parser.add_argument("--host", default=config.HOST, help=f"Bind address (default: {config.HOST}).")
    serve_parser.add_argument(
        "--port", type=int, default=config.PORT, help=f"Port (default: {config.PORT})."
    )
    serve_parser.add_argument("--url", default=None, help="Feed URL (default: API_URL or the IEM LSR feed).")
    serve_parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help=f"Refresh interval in seconds (default: {config.REFRESH_INTERVAL}).",
    )

    # ── once ──────────────────────────────────────────────────────────
    once_parser = sub.add_parser("once", help="Fetch once and print a view.")
    once_parser.add_argument("--url", default=None, help="Feed URL to read.")
    once_parser.add_argument(
        "--view",
        choices=_VIEWS,
        default="canonical",
        help="Which view to print (default: canonical).",
    )

    args = parser.parse_args(argv)

    if args.command == "serve":
        _setup_logging()
        _serve(args)
    elif args.command == "once":
        _setup_logging()
        _once(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
