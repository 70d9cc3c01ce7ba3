"""
Route pattern parser for sigil Pattern descriptors.

Supports:
- Static text: "/items"
- Named segments: "/items/:id"
- Custom segment patterns: "/items/:id(\\d+)"
- Unnamed groups: "/items/(\\d+)"  (keys "0", "1", ...)
- Modifiers: "/:lang?/docs", "/files/:path+", "/files/:path*"
- Escapes: "/price\\:usd"
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, NoReturn, Optional

from .errors import PatternSyntaxError

logger = logging.getLogger(__name__)

DELIMITERS = "/#?"
PREFIXES = "./"
DEFAULT_SEGMENT = f"[^{re.escape(DELIMITERS)}]+?"


class TokenType(Enum):
    TEXT = auto()
    PARAM = auto()


@dataclass
class Token:
    """Represents a single piece of a route pattern."""

    type: TokenType
    value: str
    prefix: str = ""
    pattern: str = DEFAULT_SEGMENT
    modifier: str = ""

    @classmethod
    def text(cls, value: str) -> "Token":
        return cls(TokenType.TEXT, value)

    @classmethod
    def param(cls, name: str, prefix: str, pattern: str, modifier: str) -> "Token":
        return cls(TokenType.PARAM, name, prefix, pattern, modifier)

    @property
    def optional(self) -> bool:
        return self.modifier in ("?", "*")

    @property
    def repeat(self) -> bool:
        return self.modifier in ("+", "*")


@dataclass
class Match:
    """Result of a successful route match."""

    path: str
    params: dict[str, str] = field(default_factory=dict)


class PatternParser:
    """Parser for route patterns."""

    # Regex patterns
    NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.pos = 0
        self.unnamed = 0
        self.tokens: list[Token] = []
        self.buffer = ""

    def parse(self) -> list[Token]:
        """Parse the pattern string into tokens."""
        s = self.pattern

        while self.pos < len(s):
            ch = s[self.pos]

            if ch == "\\":
                if self.pos + 1 >= len(s):
                    self._fail("Dangling escape")
                self.buffer += s[self.pos + 1]
                self.pos += 2
            elif ch == ":":
                self.pos += 1
                match = self.NAME_PATTERN.match(s, self.pos)
                if match is None:
                    self._fail("Missing parameter name")
                self.pos = match.end()
                group = self._read_group() if self._peek() == "(" else DEFAULT_SEGMENT
                self._add_param(match.group(0), group)
            elif ch == "(":
                name = str(self.unnamed)
                self.unnamed += 1
                self._add_param(name, self._read_group())
            elif ch in "?*+":
                self._fail(f"Unexpected modifier {ch!r}")
            else:
                self.buffer += ch
                self.pos += 1

        self._flush()
        return self.tokens

    def _peek(self) -> str:
        return self.pattern[self.pos] if self.pos < len(self.pattern) else ""

    def _fail(self, reason: str) -> NoReturn:
        raise PatternSyntaxError(self.pattern, self.pos, reason)

    def _flush(self) -> None:
        if self.buffer:
            self.tokens.append(Token.text(self.buffer))
            self.buffer = ""

    def _add_param(self, name: str, group: str) -> None:
        if any(t.type == TokenType.PARAM and t.value == name for t in self.tokens):
            self._fail(f"Duplicate parameter name {name!r}")

        prefix = ""
        if self.buffer and self.buffer[-1] in PREFIXES:
            prefix = self.buffer[-1]
            self.buffer = self.buffer[:-1]
        self._flush()

        modifier = ""
        if self._peek() in ("?", "*", "+"):
            modifier = self._peek()
            self.pos += 1

        self.tokens.append(Token.param(name, prefix, group, modifier))

    def _read_group(self) -> str:
        """Read a parenthesised regex starting at the current "("."""
        s = self.pattern
        start = self.pos
        depth = 1
        i = self.pos + 1

        if i < len(s) and s[i] == "?":
            self._fail("Pattern cannot start with '?'")

        while i < len(s):
            ch = s[i]
            if ch == "\\":
                i += 2
                continue
            if ch == ")":
                depth -= 1
                if depth == 0:
                    break
            elif ch == "(":
                depth += 1
                if i + 1 >= len(s) or s[i + 1] != "?":
                    self.pos = i
                    self._fail("Capturing groups are not allowed")
            i += 1

        if depth:
            self.pos = start
            self._fail("Unbalanced pattern")

        group = s[start + 1 : i]
        if not group:
            self.pos = start
            self._fail("Missing pattern")

        self.pos = i + 1
        return group


class CompiledPattern:
    """A route pattern compiled to a regex; call it with a path."""

    def __init__(
        self,
        pattern: str,
        tokens: list[Token],
        regex: re.Pattern[str],
        decode: Callable[[str], str],
    ):
        self.pattern = pattern
        self.tokens = tokens
        self.regex = regex
        self.decode = decode
        self.keys = [t.value for t in tokens if t.type == TokenType.PARAM]

    def __call__(self, path: str) -> Optional[Match]:
        m = self.regex.match(path)
        if m is None:
            return None

        params: dict[str, str] = {}
        for key, value in zip(self.keys, m.groups()):
            # Optional segments that did not participate are left out
            if value is not None:
                params[key] = self.decode(value)

        return Match(m.group(0), params)

    def __repr__(self) -> str:
        return f"CompiledPattern({self.pattern!r})"


def _token_to_regex(token: Token) -> str:
    if token.type == TokenType.TEXT:
        return re.escape(token.value)

    prefix = re.escape(token.prefix)
    if token.repeat:
        inner = f"(?:{token.pattern})(?:{prefix}(?:{token.pattern}))*"
    else:
        inner = token.pattern
    group = f"(?:{prefix}({inner}))"
    return group + "?" if token.optional else group


def _to_regex(tokens: list[Token], *, strict: bool, end: bool) -> str:
    delimiter = f"[{re.escape(DELIMITERS)}]"
    route = "^" + "".join(_token_to_regex(t) for t in tokens)

    if end:
        if not strict:
            route += f"{delimiter}?"
        return route + r"\Z"

    if not strict:
        route += f"(?:{delimiter}(?=\\Z))?"
    last = tokens[-1] if tokens else None
    ends_with_delimiter = (
        last is None or (last.type == TokenType.TEXT and last.value[-1] in DELIMITERS)
    )
    if not ends_with_delimiter:
        route += f"(?={delimiter}|\\Z)"
    return route


def compile_pattern(
    pattern: str,
    *,
    sensitive: bool = False,
    strict: bool = False,
    end: bool = True,
    decode: Callable[[str], str] | None = None,
) -> CompiledPattern:
    """
    Compile a route pattern into a matcher.

    Args:
        pattern: Route pattern (e.g., "/items/:id")
        sensitive: Match case-sensitively
        strict: Disallow an optional trailing delimiter
        end: Require the pattern to match up to the end of the path
        decode: Function applied to every extracted parameter value

    Returns:
        Callable taking a path and returning Match or None

    Raises:
        PatternSyntaxError: If the pattern is malformed

    Examples:
        match = compile_pattern("/items/:id")
        match("/items/42").params    # {"id": "42"}
        match("/other")              # None
    """
    tokens = PatternParser(pattern).parse()
    source = _to_regex(tokens, strict=strict, end=end)
    flags = 0 if sensitive else re.IGNORECASE

    try:
        regex = re.compile(source, flags)
    except re.error as e:
        raise PatternSyntaxError(pattern, e.pos or 0, f"Invalid regex: {e.msg}") from e

    logger.debug("Compiled route pattern %r to %r", pattern, source)
    return CompiledPattern(pattern, tokens, regex, decode or (lambda value: value))
