"""Route-table files: one path pattern per line, checked up front."""

from __future__ import annotations

import re
from dataclasses import dataclass

from pathpat.errors import LexError, ParseError
from pathpat.options import PatternOptions
from pathpat.parser import parse
from pathpat.regex import tokens_to_source


@dataclass(frozen=True, slots=True)
class Route:
    """A pattern read from a route file, with its 1-based line and column."""

    pattern: str
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Problem:
    """A diagnostic for one route: 1-based position, severity and message."""

    line: int
    column: int
    length: int
    severity: str  # "error" or "warning"
    message: str


def read_routes(source: str) -> list[Route]:
    """Return the routes in *source*, skipping blank lines and ``#`` comments."""
    routes: list[Route] = []
    for line_no, raw in enumerate(source.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        column = len(raw) - len(raw.lstrip()) + 1
        routes.append(Route(stripped, line_no, column))
    return routes


def check_routes(source: str, options: PatternOptions | None = None) -> list[Problem]:
    """Compile every route in *source* and report errors and duplicate routes."""
    if options is None:
        options = PatternOptions()
    problems: list[Problem] = []
    seen: dict[str, Route] = {}

    for route in read_routes(source):
        try:
            regex_source = tokens_to_source(parse(route.pattern, options), None, options)
            re.compile(regex_source)
        except (LexError, ParseError) as exc:
            problems.append(
                Problem(route.line, route.column + exc.index, 1, "error", str(exc))
            )
            continue
        except re.error as exc:
            problems.append(
                Problem(
                    route.line,
                    route.column,
                    len(route.pattern),
                    "error",
                    f"invalid capture pattern: {exc.msg}",
                )
            )
            continue

        first = seen.get(regex_source)
        if first is not None:
            problems.append(
                Problem(
                    route.line,
                    route.column,
                    len(route.pattern),
                    "warning",
                    f"route {route.pattern!r} duplicates line {first.line}",
                )
            )
        else:
            seen[regex_source] = route

    return problems
