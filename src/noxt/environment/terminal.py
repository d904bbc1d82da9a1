"""ANSI colouring for noxt diagnostics.

Used by ``NoxtError.format_compact()`` only; exception messages themselves
stay plain. Colour is decided once at import time:

- ``FORCE_COLOR`` set: always colour
- ``NO_COLOR`` set: never colour (https://no-color.org/)
- otherwise: colour only when stderr is a TTY
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
    "bright_blue": "\033[94m",
}

Style = Literal["reset", "bold", "dim", "red", "green", "yellow", "cyan", "bright_red", "bright_blue"]

_ANSI_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _detect_color() -> bool:
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stderr.isatty()


_USE_COLORS = _detect_color()


def colorize(text: str, *styles: Style) -> str:
    """Wrap ``text`` in the given ANSI styles, or return it unchanged."""
    if not _USE_COLORS or not styles:
        return text
    prefix = "".join(_CODES.get(s, "") for s in styles)
    return f"{prefix}{text}{_CODES['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences (for logs and HTML error pages)."""
    return _ANSI_RE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def component(text: str) -> str:
    """Component or template name."""
    return colorize(text, "cyan")


def route(text: str) -> str:
    """Route pattern or path."""
    return colorize(text, "yellow")


def hint(text: str) -> str:
    return colorize(text, "green")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_error_header(code: str | None, message: str) -> str:
    """``N-RUN-001: message`` with the code highlighted."""
    if code:
        return f"{error_code(code)}: {message}"
    return message
