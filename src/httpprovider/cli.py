"""Command-line interface for httpprovider."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from . import __version__
from .logging_config import setup_logging
from .models.config import ProviderConfig
from .models.diagnostics import Severity
from .provider import HttpProvider
from .server import serve


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="httpprovider",
        description="Expose an HTTP request as declarative, read-only state",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve the provider protocol on stdin/stdout
  httpprovider serve

  # Serve with debugger support
  httpprovider serve --debug

  # One-off fetch
  httpprovider fetch https://example.com -H "Accept: application/json"

  # Print the attribute schema
  httpprovider schema
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Shared network/logging settings
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Total deadline per request (default: 30)",
    )
    common.add_argument(
        "--user-agent",
        type=str,
        default=None,
        help="Default User-Agent string",
    )
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )
    common.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="FILE",
        help="Also write logs to this file",
    )

    serve_parser = subparsers.add_parser("serve", parents=[common], help="Serve the provider protocol")
    serve_parser.add_argument(
        "--debug",
        action="store_true",
        help="Run with support for attaching a debugger",
    )

    fetch_parser = subparsers.add_parser("fetch", parents=[common], help="Fetch a URL once")
    fetch_parser.add_argument("url", help="URL to fetch")
    fetch_parser.add_argument(
        "--method",
        "-X",
        default=None,
        help="HTTP method: GET, POST or HEAD (default: GET)",
    )
    fetch_parser.add_argument(
        "--header",
        "-H",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Request header (repeatable)",
    )
    fetch_parser.add_argument(
        "--data",
        "-d",
        default=None,
        metavar="BODY",
        help="Request body",
    )
    fetch_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the resulting state as JSON",
    )

    subparsers.add_parser("schema", help="Print the provider schema as JSON")

    return parser


def build_config(args: argparse.Namespace) -> ProviderConfig:
    """Build provider configuration from parsed arguments."""
    config_kwargs: dict = {}
    if getattr(args, "timeout", None) is not None:
        config_kwargs["timeout"] = args.timeout
    if getattr(args, "user_agent", None):
        config_kwargs["user_agent"] = args.user_agent
    if getattr(args, "log_level", None):
        config_kwargs["log_level"] = args.log_level
    if getattr(args, "log_file", None):
        config_kwargs["log_file"] = args.log_file
    if getattr(args, "debug", False):
        config_kwargs["debug"] = True
        config_kwargs["log_level"] = "DEBUG"
    return ProviderConfig(**config_kwargs)


def parse_header(value: str) -> tuple[str, str]:
    """Split a 'Name: value' header argument."""
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        raise ValueError(f"Invalid header {value!r}, expected 'Name: value'")
    return name.strip(), header_value.strip()


def run_serve(args: argparse.Namespace, config: ProviderConfig) -> int:
    """Run the provider server until the host stops it."""
    asyncio.run(serve(HttpProvider(config), debug=config.debug))
    return 0


def run_fetch(args: argparse.Namespace, config: ProviderConfig) -> int:
    """Fetch one URL through the data source and print the outcome."""
    console = Console()
    err_console = Console(stderr=True)

    try:
        headers = dict(parse_header(h) for h in args.header)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 1

    data_source_config: dict[str, Any] = {"url": args.url}
    if args.method is not None:
        data_source_config["method"] = args.method
    if headers:
        data_source_config["request_headers"] = headers
    if args.data is not None:
        data_source_config["request_body"] = args.data

    async def run() -> Any:
        async with HttpProvider(config) as provider:
            return await provider.data_sources()["http"].read(data_source_config)

    response = asyncio.run(run())

    for diag in response.diagnostics:
        color = "red" if diag.severity == Severity.ERROR else "yellow"
        label = "Error" if diag.severity == Severity.ERROR else "Warning"
        err_console.print(f"[{color}]{label}:[/{color}] {diag.summary}")
        if diag.detail:
            err_console.print(f"  {diag.detail}")

    if response.state is None:
        return 1

    state = response.state
    if args.json:
        print(json.dumps(state, indent=2))
        return 0

    console.print(f"[bold]Status:[/bold] {state['status_code']}")
    table = Table(title="Response headers", show_header=True)
    table.add_column("Name")
    table.add_column("Value")
    for name, value in state["response_headers"].items():
        table.add_row(name, value)
    console.print(table)
    console.print(state["response_body"], markup=False, highlight=False)
    return 0


def run_schema(args: argparse.Namespace, config: ProviderConfig) -> int:
    """Print the full schema."""
    print(json.dumps(HttpProvider(config).full_schema(), indent=2))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except Exception as e:
        Console(stderr=True).print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(level=config.log_level, log_file=config.log_file)

    commands = {
        "serve": run_serve,
        "fetch": run_fetch,
        "schema": run_schema,
    }
    return commands[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
