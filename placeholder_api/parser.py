"""Request path and query string parsers.

The path grammar, each bracketed unit optional::

    WIDTH ['x' HEIGHT] ['@' SCALE 'x'] ['/' BG] ['/' FG] ('.' FORMAT | '/' FORMAT)

Path errors are fatal to the request. Query errors never are: invalid
values are dropped and the resolver falls back to computed defaults.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable
from urllib.parse import parse_qsl, unquote

from .colors import resolve_color
from .config import Configuration
from .formats import UnknownFormatError, validate_format
from .models import PathTokens, QueryTokens

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"[1-9][0-9]*")
_ALNUM = re.compile(r"[A-Za-z0-9]+")
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")

# longer numbers saturate to 10**_MAX_DIGITS and are clamped by the resolver
_MAX_DIGITS = 18


class PathSyntaxError(ValueError):
    """Raised when a request path does not match the placeholder grammar."""

    def __init__(self, message: str, segment: str) -> None:
        super().__init__(f"{message}: {segment!r}")
        self.segment = segment


class _Backtrack(Exception):
    """An optional grammar unit did not match at the cursor."""


class _PathScanner:
    """Single-cursor recursive descent over a trimmed pathname."""

    def __init__(self, path: str, config: Configuration) -> None:
        self.path = path
        self.config = config
        self.pos = 0
        self.tokens: dict[str, Any] = {}

    def at_end(self) -> bool:
        return self.pos == len(self.path)

    def expect(self, char: str) -> None:
        if not self.path.startswith(char, self.pos):
            raise _Backtrack
        self.pos += len(char)

    def read(self, pattern: re.Pattern[str]) -> str:
        match = pattern.match(self.path, self.pos)
        if match is None:
            raise _Backtrack
        self.pos = match.end()
        return match.group()

    def number(self) -> int:
        token = self.read(_NUMBER)
        if len(token) > _MAX_DIGITS:
            return 10**_MAX_DIGITS
        return int(token)

    def optional(self, rule: Callable[[], None]) -> None:
        mark = self.pos
        try:
            rule()
        except (_Backtrack, UnknownFormatError):
            self.pos = mark

    def height(self) -> None:
        self.expect("x")
        self.tokens["height"] = self.number()

    def scale(self) -> None:
        self.expect("@")
        value = self.number()
        self.expect("x")
        self.tokens["scale"] = value

    def color(self, field: str) -> None:
        self.expect("/")
        token = self.read(_ALNUM)
        # a trailing format token wins over a color of the same name
        if self.at_end() and token in self.config.formats:
            self.tokens["format"] = token
            return
        color = resolve_color(token, self.config.colors)
        if color is None:
            raise PathSyntaxError(f"Invalid {field} color", token)
        self.tokens[field] = color

    def dot_format(self) -> None:
        self.expect(".")
        self.tokens["format"] = validate_format(self.read(_ALNUM), self.config.formats)

    def slash_format(self) -> None:
        self.expect("/")
        self.tokens["format"] = self.read(_ALNUM)

    def parse(self) -> PathTokens:
        try:
            self.tokens["width"] = self.number()
        except _Backtrack:
            raise PathSyntaxError("Invalid width", self.path) from None

        self.optional(self.height)
        self.optional(self.scale)
        self.optional(lambda: self.color("background"))
        if "background" in self.tokens:
            self.optional(lambda: self.color("foreground"))
        if "format" not in self.tokens:
            self.optional(self.dot_format)
        if "format" not in self.tokens:
            self.optional(self.slash_format)

        if not self.at_end():
            raise PathSyntaxError("Unexpected trailing characters", self.path[self.pos :])

        return PathTokens(**self.tokens)


def parse_path(pathname: str, config: Configuration) -> PathTokens:
    """Parse a request pathname into path tokens.

    Args:
        pathname: URL path, e.g. ``/300x200@2x/000/fff.png``
        config: Configuration providing the color and format allow-lists

    Returns:
        Parsed path tokens

    Raises:
        PathSyntaxError: If the path does not match the grammar
    """
    path = pathname
    if path.startswith("/"):
        path = path[1:]
    if path.endswith("/"):
        path = path[:-1]

    return _PathScanner(path, config).parse()


def _parse_fontsize(value: str) -> int | None:
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    try:
        size = int(match.group(1))
    except ValueError:
        return None
    return size if size > 0 else None


def parse_query(query: str, config: Configuration) -> QueryTokens:
    """Extract font, fontsize and text overrides from a query string.

    Invalid ``font`` and ``fontsize`` values are dropped, never raised.
    """
    params: dict[str, str] = {}
    for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        params.setdefault(key, value)

    tokens: dict[str, Any] = {}

    font = params.get("font")
    if font is not None:
        if font in config.fonts:
            tokens["font"] = font
        else:
            logger.debug(f"Dropping unknown font {font!r}")

    fontsize = params.get("fontsize")
    if fontsize is not None:
        size = _parse_fontsize(fontsize)
        if size is not None:
            tokens["fontsize"] = size
        else:
            logger.debug(f"Dropping invalid fontsize {fontsize!r}")

    text = params.get("text")
    if text is not None:
        tokens["text"] = unquote(text)

    return QueryTokens(**tokens)
