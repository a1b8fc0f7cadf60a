"""Command-line interface for pathpat."""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pathpat.errors import BuildError, LexError, ParseError
from pathpat.options import PatternOptions
from pathpat.tokens import Key

FORMAT_STRING = "%(levelname)s %(name)s: %(message)s"

# Config keys in the [options] table and the types they accept
_CONFIG_TYPES: dict[str, type] = {
    "delimiter": str,
    "prefixes": str,
    "sensitive": bool,
    "strict": bool,
    "start": bool,
    "end": bool,
    "ends_with": str,
    "validate": bool,
}


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    command: str
    patterns: list[str]
    paths: list[str] = field(default_factory=list)
    params: dict[str | int, str | list[str]] = field(default_factory=dict)
    route_file: Path | None = None
    pattern_options: PatternOptions = field(default_factory=PatternOptions)
    debug: bool = False
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--delimiter", help="Segment delimiter characters (default: /#?)")
    common.add_argument("--prefixes", help="Characters that may prefix a key (default: ./)")
    common.add_argument(
        "--sensitive", action="store_true", default=None, help="Match case-sensitively"
    )
    common.add_argument(
        "--strict", action="store_true", default=None, help="Disallow a trailing delimiter"
    )
    common.add_argument(
        "--no-start",
        dest="start",
        action="store_false",
        default=None,
        help="Do not anchor at start",
    )
    common.add_argument(
        "--no-end", dest="end", action="store_false", default=None, help="Do not anchor at end"
    )
    common.add_argument("--ends-with", metavar="CHARS", help="Extra terminator characters")
    common.add_argument(
        "--no-validate",
        dest="validate",
        action="store_false",
        default=None,
        help="Skip capture pattern validation when building",
    )
    common.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover pathpat.toml)",
    )
    common.add_argument("--debug", action="store_true", help="Dump lexer tokens to stderr")
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    p = argparse.ArgumentParser(
        prog="pathpat",
        description="Path pattern compiler: parse, match and build route paths",
    )
    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("parse", parents=[common], help="Print the parsed tokens of a pattern")
    sp.add_argument("pattern")

    sp = sub.add_parser("regex", parents=[common], help="Print the compiled regex and its keys")
    sp.add_argument("patterns", nargs="+", metavar="pattern")

    sp = sub.add_parser("match", parents=[common], help="Match paths against a pattern")
    sp.add_argument("pattern")
    sp.add_argument("paths", nargs="+", metavar="path")

    sp = sub.add_parser("build", parents=[common], help="Build a path from parameters")
    sp.add_argument("pattern")
    sp.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Parameter value (repeat a name to build a list)",
    )

    sp = sub.add_parser("check", parents=[common], help="Validate a route-table file")
    sp.add_argument("route_file", metavar="file")
    return p


def parse_param_arg(s: str) -> tuple[str | int, str]:
    """Parse a NAME=VALUE string into (name, value); numeric names are positional."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid param format (expected NAME=VALUE): {s}")
    name, _, value = s.partition("=")
    if name.isdigit():
        return int(name), value
    return name, value


def load_config(config_path: Path | None, directory: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else directory / "pathpat.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise argparse.ArgumentTypeError(f"invalid config file {path}: {exc}") from exc


def resolve_pattern_options(config: dict[str, Any], args: argparse.Namespace) -> PatternOptions:
    """Merge the config [options] table and CLI flags.

    Precedence: defaults < config file < CLI flags.
    """
    values: dict[str, Any] = {}
    cfg_options = config.get("options")
    if isinstance(cfg_options, dict):
        for name, value in cfg_options.items():
            expected = _CONFIG_TYPES.get(name)
            if expected is None:
                raise argparse.ArgumentTypeError(f"unknown option in config: {name}")
            if not isinstance(value, expected):
                raise argparse.ArgumentTypeError(
                    f"config option {name} must be {expected.__name__}, got {value!r}"
                )
            values[name] = value

    for name in _CONFIG_TYPES:
        value = getattr(args, name, None)
        if value is not None:
            values[name] = value

    return PatternOptions(**values)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions."""
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, Path("."))
    pattern_options = resolve_pattern_options(config, args)

    params: dict[str | int, str | list[str]] = {}
    for raw in getattr(args, "param", []):
        name, value = parse_param_arg(raw)
        current = params.get(name)
        if current is None:
            params[name] = value
        elif isinstance(current, list):
            current.append(value)
        else:
            params[name] = [current, value]

    if args.command == "regex":
        patterns = list(args.patterns)
    elif args.command == "check":
        patterns = []
    else:
        patterns = [args.pattern]

    return CliOptions(
        command=args.command,
        patterns=patterns,
        paths=list(getattr(args, "paths", [])),
        params=params,
        route_file=Path(args.route_file) if args.command == "check" else None,
        pattern_options=pattern_options,
        debug=args.debug,
        verbose=args.verbose,
    )


def configure_logging(verbose: bool) -> None:
    """Send pathpat debug logging to stderr when --verbose is given."""
    if not verbose:
        return
    logging.basicConfig(level=logging.WARNING, format=FORMAT_STRING, stream=sys.stderr)
    logging.getLogger("pathpat").setLevel(logging.DEBUG)


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------


def _cmd_parse(options: CliOptions) -> int:
    from pathpat.debug import dump_tokens
    from pathpat.parser import parse

    dump_tokens(parse(options.patterns[0], options.pattern_options), file=sys.stdout)
    return 0


def _cmd_regex(options: CliOptions) -> int:
    from pathpat.debug import dump_tokens
    from pathpat.normalize import path_to_regex

    keys: list[Key] = []
    path = options.patterns[0] if len(options.patterns) == 1 else options.patterns
    regex = path_to_regex(path, keys, options.pattern_options)
    sys.stdout.write(regex.pattern + "\n")
    dump_tokens(keys, file=sys.stdout)
    return 0


def _cmd_match(options: CliOptions) -> int:
    from pathpat.matcher import match

    fn = match(options.patterns[0], options.pattern_options)
    status = 0
    for candidate in options.paths:
        result = fn(candidate)
        if result is None:
            sys.stdout.write("null\n")
            status = 1
            continue
        payload = {
            "path": result.path,
            "index": result.index,
            "params": {str(k): v for k, v in result.params.items()},
        }
        sys.stdout.write(json.dumps(payload) + "\n")
    return status


def _cmd_build(options: CliOptions) -> int:
    from pathpat.builder import compile

    fn = compile(options.patterns[0], options.pattern_options)
    sys.stdout.write(fn(options.params) + "\n")
    return 0


def _cmd_check(options: CliOptions) -> int:
    from pathpat.routes import check_routes

    route_file = Path(options.route_file or "")
    source = route_file.read_text(encoding="utf-8")
    problems = check_routes(source, options.pattern_options)
    for problem in problems:
        sys.stdout.write(
            f"{route_file}:{problem.line}:{problem.column}: "
            f"{problem.severity}: {problem.message}\n"
        )
    return 1 if any(p.severity == "error" for p in problems) else 0


_COMMANDS = {
    "parse": _cmd_parse,
    "regex": _cmd_regex,
    "match": _cmd_match,
    "build": _cmd_build,
    "check": _cmd_check,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    configure_logging(options.verbose)

    if options.debug:
        from pathpat.debug import dump_lex_tokens
        from pathpat.lexer import tokenize

        for pattern in options.patterns:
            try:
                dump_lex_tokens(tokenize(pattern), file=sys.stderr)
            except LexError:
                pass  # reported by the command itself

    try:
        return _COMMANDS[options.command](options)
    except (LexError, ParseError) as exc:
        print(exc.format(), file=sys.stderr)
        return 1
    except BuildError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except re.error as exc:
        print(f"error: invalid capture pattern: {exc.msg}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
