#!/usr/bin/env python3
"""
Command-line interface for URL expander service.

Usage:
    url-expander expand <url> [--length N]
    url-expander resolve <token>
    url-expander info <token>
    url-expander list [--limit N]
    url-expander health
    url-expander init-db
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from .common.logging_config import setup_logging
from .components import Components, build_components
from .config import load_config
from .database import PostgresLinkStore
from .errors import ExpanderError


def _print_json(payload: dict, error: bool = False) -> None:
    print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)


class URLExpanderCLI:
    """Command-line interface for URL expander."""

    def __init__(
        self,
        db_url: Optional[str] = None,
        redis_url: Optional[str] = None,
        base_url: Optional[str] = None,
        verbose: bool = False,
    ):
        """Initialize CLI."""
        overrides = {"database_url": db_url, "redis_url": redis_url, "base_url": base_url}
        self.config = load_config().model_copy(
            update={k: v for k, v in overrides.items() if v is not None}
        )
        # Logs go to stderr so stdout stays machine-readable
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING", stream=sys.stderr)
        self.components: Optional[Components] = None

    async def initialize(self):
        """Initialize store, cache and services."""
        self.components = await build_components(self.config, self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.components:
            await self.components.close()

    async def expand(self, url: str, length: Optional[int] = None) -> int:
        """Expand a URL."""
        try:
            link = await self.components.service.expand_link(url, length=length)
        except ExpanderError as e:
            _print_json({"success": False, "error": str(e)}, error=True)
            return 1

        _print_json({
            "success": True,
            "expanded_url": link.expanded_url,
            "original_url": link.original_url,
            "description": link.description,
            "updated_at": link.updated_at.isoformat(),
        })
        return 0

    async def resolve(self, token: str) -> int:
        """Get the original URL behind a token."""
        try:
            original_url = await self.components.resolver.resolve(token)
        except ExpanderError as e:
            _print_json({"success": False, "error": str(e)}, error=True)
            return 1

        _print_json({"success": True, "token": token, "original_url": original_url})
        return 0

    async def info(self, token: str) -> int:
        """Show the full link record behind a token."""
        try:
            link = await self.components.resolver.get_link(token)
        except ExpanderError as e:
            _print_json({"success": False, "error": str(e)}, error=True)
            return 1

        _print_json({"success": True, **link.to_dict()})
        return 0

    async def list_links(self, limit: int = 100) -> int:
        """List recently expanded links."""
        try:
            links = await self.components.service.list_recent(limit)
        except ExpanderError as e:
            _print_json({"success": False, "error": f"Error: {e}"}, error=True)
            return 1

        _print_json({
            "success": True,
            "count": len(links),
            "links": [link.to_dict() for link in links],
        })
        return 0

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.components.service.health_check()
        payload = {"success": health_status["overall"], "health": health_status}

        if health_status["database"]:
            try:
                payload["statistics"] = await self.components.service.get_statistics()
            except ExpanderError as e:
                payload["statistics_error"] = str(e)

        _print_json(payload)
        return 0 if health_status["overall"] else 1

    async def init_db(self) -> int:
        """Create the links table."""
        store = self.components.store
        if not isinstance(store, PostgresLinkStore):
            _print_json({"success": False, "error": "DATABASE_URL is not set"}, error=True)
            return 1

        try:
            await store.ensure_tables()
        except ExpanderError as e:
            _print_json({"success": False, "error": str(e)}, error=True)
            return 1

        _print_json({"success": True, "message": "Tables initialized"})
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="url-expander",
        description="URL Expander CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Expand a URL with a 10-character token
  %(prog)s expand https://example.com/article --length 10

  # Look up where a token redirects
  %(prog)s resolve AbC123xYz0

  # List recent links
  %(prog)s list --limit 10
        """
    )

    parser.add_argument("--db-url", help="PostgreSQL connection URL (default: DATABASE_URL)")
    parser.add_argument("--redis-url", help="Redis connection URL (default: REDIS_URL)")
    parser.add_argument("--base-url", help="Base URL for expanded links (default: BASE_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    expand_parser = subparsers.add_parser("expand", help="Expand a URL")
    expand_parser.add_argument("url", help="URL to expand")
    expand_parser.add_argument("--length", type=int, help="Token length")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL for a token")
    resolve_parser.add_argument("token", help="Token to look up")

    info_parser = subparsers.add_parser("info", help="Show link details for a token")
    info_parser.add_argument("token", help="Token to look up")

    list_parser = subparsers.add_parser("list", help="List recent links")
    list_parser.add_argument("--limit", type=int, default=100, help="Maximum number to return")

    subparsers.add_parser("health", help="Check service health")
    subparsers.add_parser("init-db", help="Create the links table")

    return parser


async def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = URLExpanderCLI(
        db_url=args.db_url,
        redis_url=args.redis_url,
        base_url=args.base_url,
        verbose=args.verbose,
    )

    try:
        await cli.initialize()

        if args.command == "expand":
            return await cli.expand(args.url, args.length)
        elif args.command == "resolve":
            return await cli.resolve(args.token)
        elif args.command == "info":
            return await cli.info(args.token)
        elif args.command == "list":
            return await cli.list_links(args.limit)
        elif args.command == "health":
            return await cli.health()
        elif args.command == "init-db":
            return await cli.init_db()
        else:
            parser.print_help()
            return 1

    finally:
        await cli.cleanup()


def run():
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
