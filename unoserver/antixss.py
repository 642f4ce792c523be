"""Rejection of chat input that carries dangerous HTML tags."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from os import PathLike
from pathlib import Path

log = logging.getLogger(__name__)

_MAX_TAG_LENGTH = 17


def load_tags(path: str | PathLike[str]) -> list[str]:
    """Read the tag list from *path*, one tag per newline-terminated line.

    A trailing line without a newline is ignored, and each tag is cut to
    at most 17 characters.
    """
    text = Path(path).read_text(encoding="utf-8")
    *lines, _rest = text.split("\n")
    return [line[:_MAX_TAG_LENGTH] for line in lines]


class XssFilter:
    """Decides whether user text may be broadcast to other players."""

    def __init__(self, tags: Iterable[str]) -> None:
        self.tags = list(tags)

    def is_safe(self, text: str) -> bool:
        """Return False if *text* contains '<' and any of the known tags."""
        if "<" not in text:
            return True
        if any(tag in text for tag in self.tags):
            log.warning("Potential XSS detected in user input: %s", text)
            return False
        return True