#!/usr/bin/env python3
"""
Command-line interface for the short links service.

Usage:
    python shortlinks_cli.py link <url> [--alias ALIAS]
    python shortlinks_cli.py file <blob_location> <file_name> <size_bytes> [--mime-type TYPE] [--alias ALIAS]
    python shortlinks_cli.py resolve <identifier>
    python shortlinks_cli.py info <identifier>
    python shortlinks_cli.py list {links,files} [--limit N]
    python shortlinks_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add repository root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import Config
from shortlinks.factory import build_service
from shortlinks.common.logging_config import setup_logging
from shortlinks.database.models import NotFound
from shortlinks.errors import ShortLinkError, ValidationError, ConflictError


def _print_result(payload: dict, ok: bool = True) -> int:
    print(json.dumps(payload, indent=2, default=str), file=sys.stdout if ok else sys.stderr)
    return 0 if ok else 1


class ShortLinksCLI:
    """Command-line interface for the short links service."""

    def __init__(self, config: Config, verbose: bool = False):
        """Initialize CLI."""
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service = None

    async def initialize(self):
        """Connect store and cache."""
        self.service = await build_service(self.config, self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    async def _create(self, create, **kwargs) -> int:
        try:
            result = await create(**kwargs)
        except ValidationError as e:
            return _print_result({"success": False, "error": e.message, "rule": e.rule.value}, ok=False)
        except ConflictError as e:
            return _print_result({"success": False, "error": str(e)}, ok=False)

        return _print_result({
            "success": True,
            "id": result["id"],
            "alias": result["alias"],
            "kind": result["kind"].value,
            "created_at": result["created_at"].isoformat(),
        })

    async def link(self, url: str, alias: Optional[str] = None) -> int:
        """Create a link."""
        return await self._create(self.service.create_link, target_url=url, alias=alias)

    async def file(
        self,
        blob_location: str,
        file_name: str,
        size_bytes: int,
        mime_type: Optional[str] = None,
        alias: Optional[str] = None,
    ) -> int:
        """Register a file asset."""
        return await self._create(
            self.service.create_file_asset,
            blob_location=blob_location,
            file_name=file_name,
            size_bytes=size_bytes,
            mime_type=mime_type,
            alias=alias,
        )

    async def resolve(self, identifier: str) -> int:
        """Resolve an identifier (counts as a visit or download)."""
        record = await self.service.resolve(identifier)
        if record is NotFound:
            return _print_result({"success": False, "error": f"'{identifier}' not found"}, ok=False)
        return _print_result({"success": True, "resource": record.to_dict()})

    async def info(self, identifier: str) -> int:
        """Show a resource without counting a visit."""
        record = await self.service.get_resource_info(identifier)
        if record is None:
            return _print_result({"success": False, "error": f"'{identifier}' not found"}, ok=False)
        return _print_result({"success": True, "resource": record.to_dict()})

    async def list_resources(self, kind: str, limit: int = 100) -> int:
        """List links or file assets."""
        if kind == "links":
            records = await self.service.list_links(limit)
        else:
            records = await self.service.list_file_assets(limit)

        return _print_result({
            "success": True,
            "count": len(records),
            kind: [record.to_dict() for record in records],
        })

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.service.health_check()
        stats = await self.service.get_statistics()

        print(json.dumps({
            "success": True,
            "health": health_status,
            "statistics": stats,
        }, indent=2))

        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Short Links CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create a link
  %(prog)s link https://example.com/long/url

  # Create a link with an alias
  %(prog)s link https://example.com/long/url --alias promo

  # Register an uploaded file
  %(prog)s file https://blobs.example.com/uploads/report.pdf report.pdf 183042 --mime-type application/pdf

  # Resolve an identifier
  %(prog)s resolve 42

  # List recent file assets
  %(prog)s list files --limit 10
        """
    )

    parser.add_argument(
        "--db-url",
        default=None,
        help="PostgreSQL connection URL (default: from DATABASE_URL env)"
    )

    parser.add_argument(
        "--redis-url",
        default=None,
        help="Redis connection URL (optional, default: from REDIS_URL env)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    link_parser = subparsers.add_parser("link", help="Create a link")
    link_parser.add_argument("url", help="Redirect target")
    link_parser.add_argument("--alias", help="Custom alias")

    file_parser = subparsers.add_parser("file", help="Register an uploaded file")
    file_parser.add_argument("blob_location", help="Location in the blob store")
    file_parser.add_argument("file_name", help="Original file name")
    file_parser.add_argument("size_bytes", type=int, help="File size in bytes")
    file_parser.add_argument("--mime-type", help="Content type")
    file_parser.add_argument("--alias", help="Custom alias")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve an identifier")
    resolve_parser.add_argument("identifier", help="Numeric id or alias")

    info_parser = subparsers.add_parser("info", help="Show a resource without counting")
    info_parser.add_argument("identifier", help="Numeric id or alias")

    list_parser = subparsers.add_parser("list", help="List recent resources")
    list_parser.add_argument("kind", choices=["links", "files"], help="Resource kind")
    list_parser.add_argument("--limit", type=int, default=100, help="Maximum number to return")

    subparsers.add_parser("health", help="Check service health")

    return parser


async def main():
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    overrides = {}
    if args.db_url:
        overrides["database_url"] = args.db_url
    if args.redis_url:
        overrides["redis_url"] = args.redis_url

    cli = ShortLinksCLI(Config(**overrides), verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "link":
            return await cli.link(args.url, args.alias)
        elif args.command == "file":
            return await cli.file(
                args.blob_location, args.file_name, args.size_bytes, args.mime_type, args.alias
            )
        elif args.command == "resolve":
            return await cli.resolve(args.identifier)
        elif args.command == "info":
            return await cli.info(args.identifier)
        elif args.command == "list":
            return await cli.list_resources(args.kind, args.limit)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1

    except ShortLinkError as e:
        return _print_result({"success": False, "error": f"Error: {e}"}, ok=False)
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
