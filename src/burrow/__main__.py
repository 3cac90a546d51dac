"""Command-line entry point for fetching Gopher resources.

Prints menus in their rendered form (or a raw body with ``--raw``), followed
by a timing summary on stderr.

Examples:
    ```bash
    python -m burrow gopher.floodgap.com
    python -m burrow gophers://bitreich.org/ --tls prefer
    python -m burrow --plus --attributes gopher://gopher.quux.org/
    python -m burrow --search "rfc 1436" gopher.floodgap.com/v2/vs
    python -m burrow --raw gopher.floodgap.com/gopher/proxy > proxy.txt
    ```
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from burrow.client import GopherClient
from burrow.core.config import ClientConfig
from burrow.core.exceptions import BurrowError
from burrow.core.logger import Logger, StructuredFormatter
from burrow.models.constants import GopherProtocol, TlsPolicy
from burrow.models.item import Menu
from burrow.models.request import GopherRequest
from burrow.models.response import GopherResponse


logger = Logger("burrow.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="burrow",
        description="Fetch a Gopher menu or item",
    )

    parser.add_argument(
        "uri",
        help="gopher://, gophers:// or bare host[:port][selector]",
    )

    parser.add_argument(
        "--plus",
        action="store_true",
        help="Speak Gopher+ instead of RFC 1436",
    )

    parser.add_argument(
        "--tls",
        type=TlsPolicy,
        choices=list(TlsPolicy),
        help="TLS policy (default: from config, else none)",
    )

    parser.add_argument(
        "--search",
        metavar="QUERY",
        help="Submit QUERY to a full-text search server",
    )

    parser.add_argument(
        "--raw",
        action="store_true",
        help="Write the response body to stdout instead of parsing a menu",
    )

    parser.add_argument(
        "--attributes",
        action="store_true",
        help="Also fetch Gopher+ attributes for every menu item (implies --plus)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds allowed for connecting and for each read",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Client config YAML",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Install ``StructuredFormatter`` on a stderr root handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def build_config(args: argparse.Namespace) -> ClientConfig:
    """Load the config file (if any) and apply command-line overrides."""
    config = ClientConfig.from_yaml(args.config) if args.config else ClientConfig()

    overrides: dict[str, Any] = {}
    if args.plus or args.attributes:
        overrides["protocol"] = GopherProtocol.GOPHER_PLUS
    if args.tls is not None:
        overrides["tls"] = args.tls
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    return ClientConfig.from_dict({**config.model_dump(), **overrides})


def print_menu(menu: Menu, out: TextIO) -> None:
    for item in menu:
        print(item, file=out)
        if not item.attributes:
            continue
        for name, block in item.attributes.items():
            if name == "INFO":
                continue
            print(f"    +{name}: {block.descriptor}".rstrip(), file=out)
            for key, value in block.lines.items():
                print(f"        {key}: {value}", file=out)


def print_summary(response: GopherResponse, out: TextIO) -> None:
    """Print sizes and timing of an exchange."""
    timing = response.timing
    print(f"Response size: {response.response_size} bytes", file=out)
    if response.header:
        print(f"Header: {response.status} ({response.header_size} bytes)", file=out)
        print(f"Body size: {response.body_size} bytes", file=out)
    print(f"TLS: {'yes' if response.tls_used else 'no'}", file=out)
    print(f"Waiting for connection: {timing.connection_wait:.1f} ms", file=out)
    print(f"Waiting for first byte: {timing.first_byte_wait:.1f} ms", file=out)
    print(f"Receiving: {timing.receive_duration:.1f} ms", file=out)
    print(f"Total: {timing.total_duration:.1f} ms", file=out)


async def run(args: argparse.Namespace) -> int:
    """Execute one fetch described by *args*."""
    client = GopherClient(build_config(args))
    request = GopherRequest.from_uri(args.uri, query=args.search)

    if args.search is not None:
        menu = await client.search(request)
        print_menu(menu, sys.stdout)
        return 0

    response = await client.download_item(request)
    if args.raw:
        sys.stdout.buffer.write(response.body)
        sys.stdout.buffer.flush()
    else:
        menu = client.parse_menu(response, request)
        if args.attributes:
            menu = await client.populate_menu_attributes(menu, tls=request.tls)
        print_menu(menu, sys.stdout)

    print_summary(response, sys.stderr)
    return 0


async def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the fetch, and map failures to an exit code."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        return await run(args)
    except (BurrowError, ValueError) as e:
        logger.error("fetch_failed", uri=args.uri, error=str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
