"""Pattern parser: converts the lexer's token stream into literal text and keys."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any

from pathpat.errors import ParseError
from pathpat.lexer import tokenize
from pathpat.options import PatternOptions, resolve_options
from pathpat.regex import escape_string
from pathpat.tokens import Key, LexToken, LexTokenType, Token


class _Group(Enum):
    BRACE = auto()


def default_pattern(delimiter: str) -> str:
    """The capture pattern for a key without an inline ``(...)`` expression."""
    return f"[^{escape_string(delimiter)}]+?"


class Parser:
    """Cursor-driven parser over a pattern's LexToken list."""

    def __init__(self, tokens: list[LexToken], source: str, options: PatternOptions) -> None:
        self._tokens = tokens
        self._source = source
        self._prefixes = options.prefixes
        self._default_pattern = default_pattern(options.delimiter)
        self._pos = 0
        self._key_index = 0
        self._groups: list[tuple[_Group, int]] = []

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> LexToken:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return self._tokens[-1]  # END

    def _try_consume(self, tt: LexTokenType) -> str | None:
        tok = self._peek()
        if self._pos < len(self._tokens) and tok.type == tt:
            self._pos += 1
            return tok.value
        return None

    def _must_consume(self, tt: LexTokenType) -> str:
        value = self._try_consume(tt)
        if value is not None:
            return value
        tok = self._peek()
        message = f"unexpected {tok.type.name} at {tok.index}, expected {tt.name}"
        if self._groups:
            _, opened = self._groups[-1]
            message += f" (group opened at {opened})"
        raise ParseError(message, tok.index, self._source, expected=tt, actual=tok.type)

    def _consume_text(self) -> str:
        chars: list[str] = []
        while True:
            value = self._try_consume(LexTokenType.CHAR)
            if value is None:
                value = self._try_consume(LexTokenType.ESCAPED_CHAR)
            if value is None:
                return "".join(chars)
            chars.append(value)

    def _next_key_index(self) -> int:
        index = self._key_index
        self._key_index += 1
        return index

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse(self) -> list[Token]:
        result: list[Token] = []
        path = ""

        while self._pos < len(self._tokens):
            char = self._try_consume(LexTokenType.CHAR)
            name = self._try_consume(LexTokenType.NAME)
            pattern = self._try_consume(LexTokenType.PATTERN)

            if name is not None or pattern is not None:
                prefix = char or ""
                if prefix not in self._prefixes:
                    path += prefix
                    prefix = ""
                if path:
                    result.append(path)
                    path = ""
                result.append(
                    Key(
                        name=name if name is not None else self._next_key_index(),
                        prefix=prefix,
                        suffix="",
                        pattern=pattern if pattern is not None else self._default_pattern,
                        modifier=self._try_consume(LexTokenType.MODIFIER) or "",
                    )
                )
                continue

            value = char if char is not None else self._try_consume(LexTokenType.ESCAPED_CHAR)
            if value is not None:
                path += value
                continue

            if path:
                result.append(path)
                path = ""

            open_index = self._peek().index
            if self._try_consume(LexTokenType.OPEN) is not None:
                result.append(self._parse_group(open_index))
                continue

            self._must_consume(LexTokenType.END)

        return result

    def _parse_group(self, open_index: int) -> Key:
        """Parse ``{prefix :name(pattern) suffix}modifier`` after the OPEN token."""
        self._groups.append((_Group.BRACE, open_index))
        prefix = self._consume_text()
        name = self._try_consume(LexTokenType.NAME) or ""
        pattern = self._try_consume(LexTokenType.PATTERN) or ""
        suffix = self._consume_text()
        self._must_consume(LexTokenType.CLOSE)
        self._groups.pop()

        key_name: str | int = name
        if not name and pattern:
            key_name = self._next_key_index()
        return Key(
            name=key_name,
            prefix=prefix,
            suffix=suffix,
            pattern=self._default_pattern if name and not pattern else pattern,
            modifier=self._try_consume(LexTokenType.MODIFIER) or "",
        )


def parse(source: str, options: PatternOptions | None = None, **kwargs: Any) -> list[Token]:
    """Parse a path pattern into an ordered list of literal strings and Keys."""
    options = resolve_options(options, kwargs)
    return Parser(tokenize(source), source, options).parse()
