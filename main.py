# main.py

"""Entry point for the catalog_sync command-line front end."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("catalog_sync.main")


def _add_product_fields(
    parser: argparse.ArgumentParser, required: bool
) -> None:
    """Attach the editable product fields as options."""
    parser.add_argument("--title", required=required, default=None)
    parser.add_argument(
        "--price", type=float, required=required, default=None
    )
    parser.add_argument("--category", default=None)
    parser.add_argument("--description", default=None)
    parser.add_argument("--image", default=None, help="Image URL.")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="catalog_sync",
        description="Product catalog kept in sync with a remote resource.",
        epilog=f"Remote resource: {Settings.BASE_URL}"
        f"{Settings.PRODUCTS_PATH}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo INFO log records to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List the local catalog.")
    list_cmd.add_argument(
        "-q", "--search", default=None, help="Title/description filter."
    )
    list_cmd.add_argument("-c", "--category", default=None)
    list_cmd.add_argument(
        "-r",
        "--refresh",
        action="store_true",
        default=False,
        help="Fetch the remote catalog first.",
    )
    list_cmd.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="table",
        dest="output_format",
        help="Output format (default: table).",
    )

    show_cmd = sub.add_parser("show", help="Show one product.")
    show_cmd.add_argument("id")

    create_cmd = sub.add_parser("create", help="Create a product.")
    _add_product_fields(create_cmd, required=True)

    update_cmd = sub.add_parser("update", help="Update a product.")
    update_cmd.add_argument("id")
    _add_product_fields(update_cmd, required=False)

    delete_cmd = sub.add_parser("delete", help="Delete a product.")
    delete_cmd.add_argument("id")

    sub.add_parser("refresh", help="Replace the local catalog with remote.")
    return parser


def main() -> None:
    """Parse arguments, configure logging and run one sub-command."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(verbose=args.verbose)
    logger.info("catalog_sync starting, log file: %s", log_file)

    from src.cli.runner import run_command

    try:
        exit_code = asyncio.run(run_command(args))
    except Exception:
        logger.critical("Fatal error running '%s'", args.command, exc_info=True)
        raise
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
