#!/usr/bin/env python3
"""
Command-line interface for the Shorty snapshot file.

Operates directly on the store file; do not run it against a file that a
live server is writing, or one of the two will overwrite the other's keys.

Usage:
    python shorty_cli.py shorten <url> [--custom-key KEY]
    python shorty_cli.py get <key>
"""

import argparse
import json
import sys
import os
from typing import Optional

# Add parent directories to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from shorty.exceptions import KeyGenerationError
from shorty.store import URLStore
from shorty.common.logging_config import setup_logging


class ShortyCLI:
    """Command-line interface for Shorty."""

    def __init__(self, store_path: str, verbose: bool = False, flush_timeout: float = 10.0):
        """Initialize CLI."""
        self.store_path = store_path
        self.verbose = verbose
        self.flush_timeout = flush_timeout
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store = None

    def initialize(self):
        """Open the store."""
        self.store = URLStore(self.store_path, logger=self.logger.getChild("store"))
        if self.store.load_error:
            print(json.dumps({
                "success": False,
                "error": f"Could not load {self.store_path}: {self.store.load_error}"
            }, indent=2), file=sys.stderr)
            return False
        return True

    def cleanup(self):
        """Wait for pending snapshot writes."""
        if self.store and not self.store.flush(self.flush_timeout):
            print(json.dumps({
                "success": False,
                "error": f"Timed out writing {self.store_path}"
            }, indent=2), file=sys.stderr)
            return False
        return True

    def shorten(self, url: str, custom_key: Optional[str] = None):
        """Shorten a URL."""
        if not url:
            print(json.dumps({
                "success": False,
                "error": "URL is required"
            }, indent=2), file=sys.stderr)
            return 1

        try:
            short_key = self.store.add(url, custom_key)
        except KeyGenerationError as e:
            print(json.dumps({
                "success": False,
                "error": str(e)
            }, indent=2), file=sys.stderr)
            return 1

        print(json.dumps({
            "success": True,
            "shortKey": short_key,
            "url": url,
        }, indent=2))
        return 0

    def get(self, short_key: str):
        """Get original URL for a key."""
        url, found = self.store.get(short_key)

        if found:
            print(json.dumps({
                "success": True,
                "shortKey": short_key,
                "url": url
            }, indent=2))
            return 0

        print(json.dumps({
            "success": False,
            "error": f"Short key '{short_key}' not found"
        }, indent=2), file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Shorty CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Shorten with custom key
  %(prog)s shorten https://example.com/long/url --custom-key mylink

  # Get original URL
  %(prog)s get mylink
        """
    )

    parser.add_argument(
        "--store-path",
        default=os.getenv("STORE_PATH", "urls.json"),
        help="Snapshot file path (default: from STORE_PATH env or urls.json)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--custom-key", help="Custom short key")

    get_parser = subparsers.add_parser("get", help="Get original URL")
    get_parser.add_argument("short_key", help="Short key to lookup")

    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = ShortyCLI(store_path=args.store_path, verbose=args.verbose)

    if not cli.initialize():
        return 1

    try:
        if args.command == "shorten":
            exit_code = cli.shorten(args.url, args.custom_key)
        elif args.command == "get":
            exit_code = cli.get(args.short_key)
        else:
            parser.print_help()
            exit_code = 1
    finally:
        flushed = cli.cleanup()

    return exit_code if flushed else 1


if __name__ == "__main__":
    sys.exit(main())
