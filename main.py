# main.py

"""Entry point for storefront_feed (HTTP server or one-shot CLI)."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("storefront_feed.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="storefront_feed",
        description="Republish Shopier storefront pages as JSON.",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check against the storefront.",
    )
    commands = parser.add_subparsers(dest="command")

    serve = commands.add_parser("serve", help="Run the HTTP server (default).")
    serve.add_argument("--host", default=Settings.HOST)
    serve.add_argument("--port", type=int, default=Settings.PORT)

    for name, target, help_text in (
        ("catalog", "shop", "Print the catalog of one storefront."),
        ("product", "product_id", "Print the detail record of one product."),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument(target)
        sub.add_argument(
            "-f",
            "--format",
            choices=["json", "table"],
            default="json",
            dest="output_format",
            help="Output format (default: json).",
        )
    return parser


def _run_server(host: str, port: int) -> None:
    """Serve the HTTP API until interrupted."""
    from src.api.app import create_app

    app = create_app()
    logger.info("Server is up and listening on %s:%d", host, port)
    try:
        app.run(host=host, port=port, threaded=True)
    except Exception:
        logger.critical("Fatal error in HTTP server", exc_info=True)
        raise
    finally:
        logger.info("storefront_feed server shutting down")


def main(argv: list[str] | None = None) -> None:
    """Route to the server (no command) or a one-shot CLI command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    serving = args.command in (None, "serve") and not args.health
    log_file = setup_logging(
        logging.INFO if serving else logging.WARNING
    )
    logger.info("storefront_feed starting, log file: %s", log_file)

    if args.health:
        from src.cli.runner import run_health_check

        sys.exit(run_health_check())
    elif args.command == "catalog":
        from src.cli.runner import run_catalog

        sys.exit(run_catalog(args.shop, args.output_format))
    elif args.command == "product":
        from src.cli.runner import run_product

        sys.exit(run_product(args.product_id, args.output_format))
    else:
        _run_server(
            getattr(args, "host", Settings.HOST),
            getattr(args, "port", Settings.PORT),
        )


if __name__ == "__main__":
    main()
