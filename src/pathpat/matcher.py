"""Match function builder: wraps a compiled regex and its keys into a path matcher."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pathpat.normalize import Path, path_to_regex
from pathpat.options import PatternOptions, resolve_options
from pathpat.tokens import Key


@dataclass(frozen=True, slots=True)
class Match:
    """A successful match: the matched text, where it starts, and decoded params."""

    path: str
    index: int
    params: dict[str | int, Any] = field(default_factory=dict)


MatchFunction = Callable[[str], Match | None]


def regex_to_function(
    regex: re.Pattern[str],
    keys: Sequence[Key],
    options: PatternOptions | None = None,
    **kwargs: Any,
) -> MatchFunction:
    """Create a match function from a compiled regex and the keys of its groups.

    The function returns None when the candidate does not match; it never
    raises for non-matching input. Repeating keys (``*``/``+``) are split on
    the ``suffix + prefix`` separator between repetitions and decoded
    piecewise into a list.
    """
    options = resolve_options(options, kwargs)
    decode = options.decode
    keys = list(keys)

    def match(pathname: str) -> Match | None:
        m = regex.search(pathname)
        if m is None:
            return None

        params: dict[str | int, Any] = {}
        for key, value in zip(keys, m.groups()):
            if value is None:
                continue
            separator = key.suffix + key.prefix
            if key.repeat and separator:
                params[key.name] = [decode(part) for part in value.split(separator)]
            elif key.repeat:
                params[key.name] = [decode(value)]
            else:
                params[key.name] = decode(value)
        return Match(path=m.group(0), index=m.start(), params=params)

    return match


def match(path: Path, options: PatternOptions | None = None, **kwargs: Any) -> MatchFunction:
    """Create a match function for a pattern string, compiled regex, or list of them."""
    options = resolve_options(options, kwargs)
    keys: list[Key] = []
    regex = path_to_regex(path, keys, options)
    return regex_to_function(regex, keys, options)
