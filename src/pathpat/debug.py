"""--debug token dumps to stderr."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from pathpat.tokens import Key, LexToken, Token


def dump_lex_tokens(tokens: Sequence[LexToken], *, file: TextIO = sys.stderr) -> None:
    """Print one line per lexer token: offset, kind and value."""
    for tok in tokens:
        file.write(f"{tok.index:>4} {tok.type.name:<12} {tok.value!r}\n")


def dump_tokens(tokens: Sequence[Token], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable list of parsed tokens to *file*."""
    for token in tokens:
        if isinstance(token, Key):
            _dump_key(token, file)
        else:
            file.write(f"Text({token!r})\n")


def _dump_key(key: Key, f: TextIO) -> None:
    f.write(f"Key {key.name!r}")
    if key.prefix:
        f.write(f" prefix={key.prefix!r}")
    if key.suffix:
        f.write(f" suffix={key.suffix!r}")
    if key.pattern:
        f.write(f" pattern={key.pattern!r}")
    if key.modifier:
        f.write(f" modifier={key.modifier!r}")
    f.write("\n")
