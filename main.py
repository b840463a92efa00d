import sys
import asyncio
import argparse
import json
from typing import Any, Dict, Optional

# --- Settings/Logging ---
from nhl_stats.logging.setup import setup_logging
from nhl_stats.config.settings import settings

setup_logging()

from loguru import logger

# --- End Settings/Logging ---

import uvicorn
from rich import print
from rich.panel import Panel
from rich.pretty import Pretty

from nhl_stats.api.app import create_app
from nhl_stats.operations import handlers  # noqa: F401  (registers operations)
from nhl_stats.operations.registry import (
    InputValidationError,
    OperationContext,
    UnknownOperationError,
    registry,
)
from nhl_stats.upstream.base_client import UpstreamError
from nhl_stats.upstream.espn_client import ESPNClient
from nhl_stats.upstream.nhl_client import NHLClient


def serve() -> None:
    """Runs the HTTP server on the configured host/port."""
    logger.info(f"NHL Stats Agent running on port {settings.port}")
    uvicorn.run(create_app(), host=settings.host, port=settings.port, log_config=None)


async def call(key: str, raw_input: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Runs a single operation locally, without the HTTP layer."""
    nhl, espn = NHLClient(), ESPNClient()
    try:
        return await registry.invoke(key, raw_input, OperationContext(nhl=nhl, espn=espn))
    finally:
        await nhl.close()
        await espn.close()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=settings.agent_description)
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("serve", help="Run the HTTP server (default).")

    call_parser = subparsers.add_parser("call", help="Invoke one operation and print the output.")
    call_parser.add_argument("key", help="Operation key, e.g. standings")
    call_parser.add_argument(
        "--input", default="{}", help='Operation input as JSON, e.g. \'{"conference": "eastern"}\''
    )

    subparsers.add_parser("list", help="List available operations and prices.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.command in (None, "serve"):
        serve()
        return 0

    if args.command == "list":
        for op in registry.list_operations():
            print(f"[bold]{op.key}[/bold] (${op.price.usd:.3f}) - {op.description}")
        return 0

    try:
        raw_input = json.loads(args.input)
    except json.JSONDecodeError as e:
        logger.error(f"--input is not valid JSON: {e}")
        return 2

    try:
        result = asyncio.run(call(args.key, raw_input))
    except (UnknownOperationError, InputValidationError) as e:
        logger.error(str(e))
        return 2
    except UpstreamError as e:
        logger.error(f"Upstream failure: {e}")
        return 1

    print(Panel(Pretty(result["output"]), title=args.key))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
