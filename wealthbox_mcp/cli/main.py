"""Main CLI entry point for the Wealthbox MCP adapter."""

import argparse
import json
import logging
import sys

import anyio
from dotenv import load_dotenv

from wealthbox_mcp.core import (
    Settings,
    ConfigError,
    ValidationError,
    load_settings,
)
from wealthbox_mcp.core.dispatcher import Dispatcher
from wealthbox_mcp.client import WealthboxClient, BridgeError, APIError
from wealthbox_mcp.operations import build_registry
from wealthbox_mcp.server import serve, render_result

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging for the CLI.

    Logs go to stderr; stdout carries the MCP protocol when serving.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # Suppress httpx INFO logs
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_dispatcher(settings: Settings, client: WealthboxClient | None = None) -> Dispatcher:
    """Wire a dispatcher from settings."""
    if client is None:
        client = WealthboxClient(settings)
    return Dispatcher(build_registry(), client, pagination=settings.pagination)


def _load_settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_serve(args):
    """Handle the serve command."""
    settings = _load_settings_or_exit()
    logger.info(f"Using Wealthbox API at {settings.base_url}")
    dispatcher = build_dispatcher(settings)
    anyio.run(serve, dispatcher)


def cmd_tools(args):
    """Handle the tools command."""
    registry = build_registry()
    print(f"Available operations ({len(registry)}):")
    print()
    for operation in registry.list_operations():
        print(f"  {operation.name:<28} {operation.description}")


def cmd_call(args):
    """Handle the call command."""
    try:
        arguments = json.loads(args.args) if args.args else {}
    except json.JSONDecodeError as e:
        print(f"Error: --args is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)

    if not isinstance(arguments, dict):
        print("Error: --args must be a JSON object", file=sys.stderr)
        sys.exit(1)

    settings = _load_settings_or_exit()

    dispatcher = build_dispatcher(settings)
    try:
        result = dispatcher.invoke(args.name, arguments)
    except ValidationError as e:
        print(f"Invalid invocation: {e}", file=sys.stderr)
        sys.exit(1)
    except APIError as e:
        print(f"API error: {e}", file=sys.stderr)
        print(f"HTTP Status: {e.status_code}", file=sys.stderr)
        sys.exit(1)
    except BridgeError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        sys.exit(1)

    for content in render_result(result):
        print(content.text)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="wealthbox-mcp",
        description="MCP server for the Wealthbox CRM API",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    serve_parser = subparsers.add_parser("serve", help="Run the MCP server over stdio")
    serve_parser.set_defaults(func=cmd_serve)

    tools_parser = subparsers.add_parser("tools", help="List available operations")
    tools_parser.set_defaults(func=cmd_tools)

    call_parser = subparsers.add_parser("call", help="Invoke a single operation and print the result")
    call_parser.add_argument("name", help="Operation name (e.g., 'contacts.get')")
    call_parser.add_argument("--args", help="Arguments as a JSON object (e.g., '{\"id\": 42}')")
    call_parser.set_defaults(func=cmd_call)

    args = parser.parse_args()

    load_dotenv()
    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
