"""Regex compiler: turns parsed tokens into an anchored ``re.Pattern``."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from pathpat.options import PatternOptions, resolve_options
from pathpat.tokens import Key, Token

_REGEX_SPECIAL = frozenset(".+*?=^!:${}()[]|/\\")


def escape_string(value: str) -> str:
    """Backslash-escape every regex metacharacter that can appear in path text."""
    return "".join("\\" + ch if ch in _REGEX_SPECIAL else ch for ch in value)


def regex_flags(options: PatternOptions) -> re.RegexFlag:
    return re.NOFLAG if options.sensitive else re.IGNORECASE


def _key_source(key: Key, prefix: str, suffix: str) -> str:
    if not key.pattern:
        return f"(?:{prefix}{suffix}){key.modifier}"

    if not prefix and not suffix:
        return f"({key.pattern}){key.modifier}"

    if key.repeat:
        # Each repetition re-applies the suffix/prefix separator pair
        mod = "?" if key.modifier == "*" else ""
        repeated = f"(?:{suffix}{prefix}(?:{key.pattern}))*"
        return f"(?:{prefix}((?:{key.pattern}){repeated}){suffix}){mod}"
    return f"(?:{prefix}({key.pattern}){suffix}){key.modifier}"


def tokens_to_source(
    tokens: Sequence[Token],
    keys: list[Key] | None,
    options: PatternOptions,
) -> str:
    """Build the regex source for *tokens*, appending capturing keys to *keys*."""
    encode = options.encode
    delimiter = f"[{escape_string(options.delimiter)}]"
    ends_with = f"[{escape_string(options.ends_with)}]|\\Z" if options.ends_with else "\\Z"

    route = "^" if options.start else ""
    for token in tokens:
        if isinstance(token, str):
            route += escape_string(encode(token))
            continue
        if token.pattern and keys is not None:
            keys.append(token)
        prefix = escape_string(encode(token.prefix))
        suffix = escape_string(encode(token.suffix))
        route += _key_source(token, prefix, suffix)

    if options.end:
        if not options.strict:
            route += f"{delimiter}?"
        route += f"(?={ends_with})" if options.ends_with else "\\Z"
        return route

    end_token = tokens[-1] if tokens else None
    if isinstance(end_token, str):
        is_end_delimited = bool(end_token) and end_token[-1] in options.delimiter
    else:
        is_end_delimited = end_token is None
    if not options.strict:
        route += f"(?:{delimiter}(?={ends_with}))?"
    if not is_end_delimited:
        route += f"(?={delimiter}|{ends_with})"
    return route


def tokens_to_regex(
    tokens: Sequence[Token],
    keys: list[Key] | None = None,
    options: PatternOptions | None = None,
    **kwargs: Any,
) -> re.Pattern[str]:
    """Compile parsed tokens into a regex, appending each capturing Key to *keys*.

    Keys are appended in the order of their capture groups, so group ``n``
    of a match belongs to ``keys[n - 1]``.
    """
    options = resolve_options(options, kwargs)
    return re.compile(tokens_to_source(tokens, keys, options), regex_flags(options))
