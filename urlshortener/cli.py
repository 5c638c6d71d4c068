"""
Command-line interface for URL shortener service.

Usage:
    urlshortener add <url>
    urlshortener get <short_code>
    urlshortener list [--limit N] [--offset M]
    urlshortener delete <short_code>

Every command writes exactly one JSON object to stdout and exits 0 on
success, 1 on failure. Logs go to stderr.
"""

import argparse
import asyncio
import sys
from typing import List, Optional, Sequence, TextIO

from pydantic import ValidationError

from . import __version__
from .app import AppContext
from .common.logging_config import setup_logging
from .config import Config, load_config
from .database.base import MappingStoreBase
from .exceptions import ShortenerError


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="urlshortener",
        description="A simple URL shortener: shorten URLs and resolve short codes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s add https://example.com/long/url

  # Get original URL
  %(prog)s get Hpa3t2B

  # List recent URLs
  %(prog)s list --limit 10 --offset 20

  # Delete a short code
  %(prog)s delete Hpa3t2B
        """,
    )

    parser.add_argument(
        "--db-url",
        default=None,
        help="PostgreSQL connection URL (default: from DB_URL env)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose logging on stderr",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Positionals are optional here so a missing one is reported as JSON
    add_parser = subparsers.add_parser("add", aliases=["a"], help="Shorten a URL")
    add_parser.add_argument("url", nargs="?", help="URL to shorten")

    get_parser = subparsers.add_parser("get", aliases=["g"], help="Get original URL")
    get_parser.add_argument("short_code", nargs="?", help="Short code to lookup")

    list_parser = subparsers.add_parser("list", aliases=["l"], help="List recent URLs")
    list_parser.add_argument("--limit", type=int, default=10, help="Maximum number to return")
    list_parser.add_argument("--offset", type=int, default=0, help="Number of URLs to skip")

    delete_parser = subparsers.add_parser("delete", aliases=["d"], help="Delete a short URL")
    delete_parser.add_argument("short_code", nargs="?", help="Short code to delete")

    return parser


COMMAND_ALIASES = {"a": "add", "g": "get", "l": "list", "d": "delete"}


def _positional(value: Optional[str]) -> List[str]:
    return [] if value is None else [value]


async def run_command(args: argparse.Namespace, ctx: AppContext) -> int:
    """Run the parsed command against an application context.

    Returns:
        Process exit status
    """
    command = COMMAND_ALIASES.get(args.command, args.command)
    actions = ctx.actions

    try:
        if command == "add":
            await actions.add_action(_positional(args.url))
        elif command == "get":
            await actions.get_action(_positional(args.short_code))
        elif command == "list":
            await actions.list_action(args.limit, args.offset)
        elif command == "delete":
            await actions.delete_action(_positional(args.short_code))
        else:
            raise ValueError(f"Unknown command: {command}")
    except ShortenerError:
        # Already written to stdout by the action
        return 1

    return 0


async def main(
    argv: Optional[Sequence[str]] = None,
    config: Optional[Config] = None,
    store: Optional[MappingStoreBase] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Main entry point.

    Args:
        argv: Arguments (defaults to sys.argv[1:])
        config: Configuration to use instead of loading from the environment
        store: Store to use instead of connecting to PostgreSQL
        out: Sink for JSON records (defaults to stdout)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help(sys.stderr)
        return 1

    if config is None:
        overrides = {"db_url": args.db_url} if args.db_url else {}
        try:
            config = load_config(**overrides)
        except ValidationError as e:
            print(f"Invalid configuration: {e}", file=sys.stderr)
            return 1

    logger = setup_logging(
        level="DEBUG" if args.verbose else config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    async with AppContext.create(config, store=store, out=out, logger=logger) as ctx:
        return await run_command(args, ctx)


def cli() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
