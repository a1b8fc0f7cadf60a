"""Path builder: turns parsed tokens into a function that renders paths from parameters."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pathpat.errors import BuildError
from pathpat.options import PatternOptions, resolve_options
from pathpat.parser import parse
from pathpat.regex import regex_flags
from pathpat.tokens import Key, Token

Scalar = str | int | float
ParamValue = Scalar | Sequence[Scalar]
Params = Mapping[str | int, ParamValue]
PathFunction = Callable[[Params | None], str]


def _is_scalar(value: object) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _stringify(value: Scalar) -> str:
    # Integral floats render without a fractional part: 1.0 -> "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def tokens_to_function(
    tokens: Sequence[Token],
    options: PatternOptions | None = None,
    **kwargs: Any,
) -> PathFunction:
    """Compile parsed tokens into a function that builds a path from a parameter map.

    Each key's value is encoded with ``options.encode`` and, when
    ``options.validate`` is set, must fully match the key's capture pattern.
    A list or tuple value is only accepted for repeating keys (``*``/``+``)
    and produces one ``prefix + segment + suffix`` per element.

    Raises BuildError when a value is missing, has the wrong shape, or fails
    validation.
    """
    options = resolve_options(options, kwargs)
    tokens = list(tokens)
    encode = options.encode
    validate = options.validate
    flags = regex_flags(options)

    matchers: list[re.Pattern[str] | None] = [
        re.compile(f"(?:{token.pattern})", flags) if isinstance(token, Key) else None
        for token in tokens
    ]

    def _segment(key: Key, matcher: re.Pattern[str] | None, value: Scalar, every: bool) -> str:
        segment = encode(_stringify(value))
        if validate and matcher is not None and matcher.fullmatch(segment) is None:
            quantifier = "all " if every else ""
            raise BuildError(
                f'expected {quantifier}"{key.name}" to match "{key.pattern}", '
                f'but got "{segment}"',
                key.name,
                segment,
            )
        return key.prefix + segment + key.suffix

    def path(params: Params | None = None) -> str:
        parts: list[str] = []
        for token, matcher in zip(tokens, matchers):
            if isinstance(token, str):
                parts.append(token)
                continue

            if not token.pattern:
                # Literal-only group, e.g. "{/list}?": present unless optional
                if not token.optional:
                    parts.append(token.prefix + token.suffix)
                continue

            value = params.get(token.name) if params is not None else None

            if isinstance(value, (list, tuple)):
                if not token.repeat:
                    raise BuildError(
                        f'expected "{token.name}" to not repeat, but got a list', token.name, value
                    )
                if not value:
                    if token.optional:
                        continue
                    raise BuildError(f'expected "{token.name}" to not be empty', token.name, value)
                for item in value:
                    parts.append(_segment(token, matcher, item, every=True))
                continue

            if _is_scalar(value):
                parts.append(_segment(token, matcher, value, every=False))
                continue

            if token.optional:
                continue
            expected = "a list" if token.repeat else "a string"
            raise BuildError(f'expected "{token.name}" to be {expected}', token.name, value)

        return "".join(parts)

    return path


def compile(source: str, options: PatternOptions | None = None, **kwargs: Any) -> PathFunction:
    """Compile a pattern string into a path-building function."""
    options = resolve_options(options, kwargs)
    return tokens_to_function(parse(source, options), options)
