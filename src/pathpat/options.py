"""Compile-time configuration shared by the parser, builder, regex compiler and matcher."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

DEFAULT_DELIMITER = "/#?"
DEFAULT_PREFIXES = "./"


def _identity(value: str) -> str:
    return value


@dataclass(frozen=True, slots=True)
class PatternOptions:
    """Options for parsing, building and matching path patterns.

    delimiter:  characters that bound a path segment; the default capture
                pattern matches anything but these. An empty string
                falls back to the default set.
    prefixes:   characters that become a key's prefix when they directly
                precede it, instead of staying in the literal text.
    sensitive:  match case-sensitively (both matching and build validation).
    strict:     disallow an optional trailing delimiter.
    start:      anchor the regex at the start of the candidate.
    end:        anchor the regex at the end of the candidate.
    ends_with:  extra characters accepted in place of the end of input.
    encode:     applied to parameter values when building and to literal
                text when compiling a regex.
    decode:     applied to captured values when matching.
    validate:   check built segments against their key's capture pattern.
    """

    delimiter: str = DEFAULT_DELIMITER
    prefixes: str = DEFAULT_PREFIXES
    sensitive: bool = False
    strict: bool = False
    start: bool = True
    end: bool = True
    ends_with: str = ""
    encode: Callable[[str], str] = _identity
    decode: Callable[[str], Any] = _identity
    validate: bool = True

    def __post_init__(self) -> None:
        if not self.delimiter:
            object.__setattr__(self, "delimiter", DEFAULT_DELIMITER)


def resolve_options(options: PatternOptions | None, overrides: dict[str, Any]) -> PatternOptions:
    """Apply keyword overrides to *options* (or the defaults).

    Raises TypeError for an unknown option name.
    """
    base = options if options is not None else PatternOptions()
    if not overrides:
        return base
    return replace(base, **overrides)
