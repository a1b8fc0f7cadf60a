"""Path pattern compiler: route patterns to matchers and path builders."""

from __future__ import annotations

from pathpat.builder import compile, tokens_to_function
from pathpat.errors import BuildError, LexError, ParseError
from pathpat.matcher import Match, match, regex_to_function
from pathpat.normalize import path_to_regex
from pathpat.options import PatternOptions
from pathpat.parser import parse
from pathpat.regex import tokens_to_regex
from pathpat.tokens import Key

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "Key",
    "LexError",
    "Match",
    "ParseError",
    "PatternOptions",
    "compile",
    "match",
    "parse",
    "path_to_regex",
    "regex_to_function",
    "tokens_to_function",
    "tokens_to_regex",
]
