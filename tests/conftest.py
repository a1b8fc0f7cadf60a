"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from pathpat.lexer import tokenize
from pathpat.tokens import Key, LexToken, LexTokenType, Token

# Default capture pattern for the default delimiter set "/#?"
DEFAULT_PATTERN = "[^\\/#\\?]+?"


@pytest.fixture
def lex():
    """Return a helper that tokenizes a pattern and returns tokens (excluding END)."""

    def _lex(source: str) -> list[LexToken]:
        tokens = tokenize(source)
        # Strip trailing END for convenience
        return [t for t in tokens if t.type != LexTokenType.END]

    return _lex


def assert_kinds(tokens: list[LexToken], expected: list[LexTokenType]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[LexToken], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def keys_of(tokens: list[Token]) -> list[Key]:
    """Return only the Key entries of a parsed token list."""
    return [t for t in tokens if isinstance(t, Key)]
