"""Pattern lexer: converts a route pattern string into a flat token stream."""

from __future__ import annotations

from pathpat.errors import LexError
from pathpat.tokens import MODIFIERS, LexToken, LexTokenType, is_name_char


class Lexer:
    """Tokenize a path pattern into LexToken objects in a single left-to-right pass."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._tokens: list[LexToken] = []

    def tokenize(self) -> list[LexToken]:
        """Tokenize the full pattern and return the token list, ending with END."""
        while self._pos < len(self._source):
            ch = self._peek()

            if ch in MODIFIERS:
                self._emit(LexTokenType.MODIFIER, ch, self._pos)
                self._pos += 1
            elif ch == "\\":
                self._lex_escape()
            elif ch == "{":
                self._emit(LexTokenType.OPEN, ch, self._pos)
                self._pos += 1
            elif ch == "}":
                self._emit(LexTokenType.CLOSE, ch, self._pos)
                self._pos += 1
            elif ch == ":":
                self._lex_name()
            elif ch == "(":
                self._lex_pattern()
            else:
                self._emit(LexTokenType.CHAR, ch, self._pos)
                self._pos += 1

        self._emit(LexTokenType.END, "", self._pos)
        return self._tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _emit(self, tt: LexTokenType, value: str, index: int) -> None:
        self._tokens.append(LexToken(tt, index, value))

    def _error(self, message: str, index: int) -> LexError:
        return LexError(message, index, self._source)

    # ------------------------------------------------------------------
    # Token classes
    # ------------------------------------------------------------------

    def _lex_escape(self) -> None:
        start = self._pos
        if start + 1 >= len(self._source):
            raise self._error("unexpected end of pattern after '\\'", start)
        self._emit(LexTokenType.ESCAPED_CHAR, self._source[start + 1], start)
        self._pos += 2

    def _lex_name(self) -> None:
        start = self._pos
        end = start + 1
        while end < len(self._source) and is_name_char(self._source[end]):
            end += 1
        name = self._source[start + 1 : end]
        if not name:
            raise self._error("missing parameter name", start)
        self._emit(LexTokenType.NAME, name, start)
        self._pos = end

    def _lex_pattern(self) -> None:
        """Scan a balanced ``(...)`` group and emit its inner expression.

        Nested groups must be non-capturing, so every ``(`` inside is followed
        by ``?``. Escapes are copied through as character pairs.
        """
        start = self._pos
        j = start + 1
        if self._source[j : j + 1] == "?":
            raise self._error("pattern cannot start with '?'", j)

        # Offsets of every '(' not yet closed, outermost first
        open_groups = [start]
        chars: list[str] = []
        while j < len(self._source):
            ch = self._source[j]
            if ch == "\\":
                chars.append(self._source[j : j + 2])
                j += 2
                continue
            if ch == ")":
                open_groups.pop()
                if not open_groups:
                    j += 1
                    break
            elif ch == "(":
                if self._source[j + 1 : j + 2] != "?":
                    raise self._error("capturing groups are not allowed", j)
                open_groups.append(j)
            chars.append(ch)
            j += 1

        if open_groups:
            raise self._error("unbalanced pattern", start)
        pattern = "".join(chars)
        if not pattern:
            raise self._error("missing pattern", start)
        self._emit(LexTokenType.PATTERN, pattern, start)
        self._pos = j


def tokenize(source: str) -> list[LexToken]:
    """Convenience function: tokenize a pattern and return the token list."""
    return Lexer(source).tokenize()
