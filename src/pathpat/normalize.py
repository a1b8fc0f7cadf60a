"""Normalize any accepted path input (string, compiled regex, or a list of them) to a regex."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from pathpat.options import PatternOptions, resolve_options
from pathpat.parser import parse
from pathpat.regex import regex_flags, tokens_to_regex
from pathpat.tokens import Key

logger = logging.getLogger(__name__)

Path = str | re.Pattern[str] | Sequence["Path"]

# A '(' behind an even run of backslashes opens a capturing group, optionally named
_GROUP_OPENER = re.compile(r"(?<!\\)(?:\\\\)*\((?:\?P<(\w+)>)?(?!\?)")


def _regex_to_regex(path: re.Pattern[str], keys: list[Key] | None) -> re.Pattern[str]:
    """Pull keys out of a pre-built regex by scanning its source for capturing groups.

    This is a best-effort scan of the source text: a literal '(' inside a
    character class is also counted as a group.
    """
    if keys is None:
        return path
    index = 0
    for m in _GROUP_OPENER.finditer(path.pattern):
        name: str | int
        if m.group(1):
            name = m.group(1)
        else:
            name = index
            index += 1
        keys.append(Key(name=name))
    return path


def _array_to_regex(
    paths: Sequence[Path],
    keys: list[Key] | None,
    options: PatternOptions,
) -> re.Pattern[str]:
    parts = [path_to_regex(path, keys, options).pattern for path in paths]
    return re.compile(f"(?:{'|'.join(parts)})", regex_flags(options))


def path_to_regex(
    path: Path,
    keys: list[Key] | None = None,
    options: PatternOptions | None = None,
    **kwargs: Any,
) -> re.Pattern[str]:
    """Normalize *path* to a compiled regex, appending its keys to *keys*.

    An empty list may be passed for *keys*; it receives one Key per capturing
    group, in group order. For ``/user/:id`` it holds
    ``[Key(name="id", prefix="/", pattern="[^\\/#\\?]+?")]``.
    """
    options = resolve_options(options, kwargs)
    if isinstance(path, re.Pattern):
        regex = _regex_to_regex(path, keys)
    elif isinstance(path, str):
        regex = tokens_to_regex(parse(path, options), keys, options)
    else:
        regex = _array_to_regex(path, keys, options)
    logger.debug(
        "compiled %r to %r with %d keys", path, regex.pattern, len(keys) if keys is not None else 0
    )
    return regex
