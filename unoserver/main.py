"""Command line entry point of the Uno server."""

from __future__ import annotations

import asyncio
import logging
import random
import sys
from collections.abc import Sequence

from .antixss import XssFilter, load_tags
from .session import UnoServer

DEFAULT_PORT = 8080
TAGS_FILE = "html_tags.txt"


def parse_port(text: str) -> int:
    """Read a decimal number digit by digit, without any validation."""
    port = 0
    for ch in text:
        port = port * 10 + ord(ch) - ord("0")
    return port


def main(argv: Sequence[str] | None = None) -> int:
    """Run the server; the optional single argument is the port."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) == 1:
        port = parse_port(args[0])
    elif not args:
        port = DEFAULT_PORT
    else:
        print("Invalid argument amount")
        return -1

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        tags = load_tags(TAGS_FILE)
    except OSError as exc:
        print(f"Failed to read {TAGS_FILE}: {exc}")
        return -1

    server = UnoServer(XssFilter(tags), random.Random())
    try:
        asyncio.run(server.serve(None, port))
    except (OSError, OverflowError, ValueError):
        print("Failed to create WebSocket context.")
        return -1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())