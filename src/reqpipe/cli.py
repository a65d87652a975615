"""Command-line interface for reqpipe.

Runs a single request through the pipeline from the terminal.

Usage:
    reqpipe get /echo/json
    reqpipe get /echo/json --transform decrypt
    reqpipe get https://example.com --quiet --format json
"""

import argparse
import asyncio
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from reqpipe import __version__
from reqpipe.clients.http import HttpGet
from reqpipe.collaborators.transformers import TRANSFORMERS, get_transformer
from reqpipe.config import settings
from reqpipe.pipeline.getter import RequestPipeline

logger = logging.getLogger(__name__)

_executor = ThreadPoolExecutor(max_workers=1)


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser with all commands and arguments.
    """
    parser = argparse.ArgumentParser(
        prog="reqpipe",
        description="reqpipe — fetch, log and transform a resource",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  reqpipe get /echo/json
  reqpipe get /echo/json --transform decode
  reqpipe get https://example.com --quiet --format json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # get command
    get_parser = subparsers.add_parser(
        "get",
        help="Fetch a resource through the pipeline",
        description="Log, fetch and transform a single resource",
    )
    get_parser.add_argument(
        "resource",
        type=str,
        help="Path relative to the base URL, or an absolute URL",
    )
    get_parser.add_argument(
        "--transform",
        type=str,
        choices=sorted(TRANSFORMERS),
        default=None,
        help="Transformer applied to the fetched result (default: none)",
    )
    get_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not log the request",
    )
    get_parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help=f"Base URL for relative resources (default: {settings.base_url})",
    )
    get_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    return parser


def _run_async(coro):
    """Run an async coroutine from synchronous CLI context.

    Spins up a new event loop in a dedicated thread to avoid conflicts
    with any existing event loop.
    """
    def _target():
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(coro)
        finally:
            loop.close()

    future = _executor.submit(_target)
    return future.result()


def build_pipeline(args: argparse.Namespace) -> RequestPipeline:
    """Assemble a pipeline from parsed ``get`` arguments."""
    pipeline = RequestPipeline.build()

    if args.base_url:
        pipeline.configure(
            "fetcher",
            HttpGet(
                base_url=args.base_url,
                timeout=settings.timeout,
                headers={"User-Agent": settings.user_agent},
            ),
        )
    if args.quiet:
        pipeline.configure("logger", None)
    if args.transform:
        get_transformer(args.transform).configure(pipeline)

    return pipeline


def cmd_get(args: argparse.Namespace) -> int:
    """Execute the get command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        pipeline = build_pipeline(args)
        logger.debug("Running %r for %s", pipeline, args.resource)

        result = _run_async(pipeline.get(args.resource))

        if args.format == "json":
            print(json.dumps({"resource": args.resource, "result": result}, indent=2, default=str))
        else:
            print(result)

        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except Exception as e:
        logger.error("Request failed: %s", e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_version(args: argparse.Namespace) -> int:
    """Execute the version command."""
    print(f"reqpipe v{__version__}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = create_parser()
    args = parser.parse_args(argv)

    # Route to command handler
    if args.command == "get":
        return cmd_get(args)
    elif args.command == "version":
        return cmd_version(args)
    else:
        # No command specified
        parser.print_help()
        return 0


def cli_entry() -> None:
    """Console script entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
