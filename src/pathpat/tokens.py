"""Lexical token kinds, parsed token structures, and character classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class LexTokenType(Enum):
    OPEN = auto()  # {
    CLOSE = auto()  # }
    PATTERN = auto()  # (...), value is the inner expression
    NAME = auto()  # :ident, value is the identifier
    CHAR = auto()  # any other single character
    ESCAPED_CHAR = auto()  # \x, value is the escaped character
    MODIFIER = auto()  # * + ?
    END = auto()


@dataclass(frozen=True, slots=True)
class LexToken:
    """A single lexer token with its 0-based source offset."""

    type: LexTokenType
    index: int
    value: str


@dataclass(frozen=True, slots=True)
class Key:
    """A named or positional capture in a compiled pattern.

    ``name`` is the declared identifier for ``:name`` parameters and an
    auto-incremented integer for unnamed ``(...)`` groups. A brace group with
    neither carries ``name=""`` and ``pattern=""`` and captures nothing.
    """

    name: str | int
    prefix: str = ""
    suffix: str = ""
    pattern: str = ""
    modifier: str = ""

    @property
    def optional(self) -> bool:
        return self.modifier in ("?", "*")

    @property
    def repeat(self) -> bool:
        return self.modifier in ("*", "+")


# A parsed pattern is an ordered sequence of literal text and keys.
Token = str | Key

MODIFIERS = frozenset("*+?")


def is_name_char(ch: str) -> bool:
    """Return True if ch may appear in a parameter name (ASCII word characters)."""
    return ch == "_" or ("0" <= ch <= "9") or ("a" <= ch <= "z") or ("A" <= ch <= "Z")
