"""Error types with formatted pattern context."""

from __future__ import annotations

from pathpat.tokens import LexTokenType


def _render(
    message: str,
    source: str,
    index: int,
    filename: str,
    line: int,
    column_offset: int,
) -> str:
    col = column_offset + index + 1
    pad = " " * (column_offset + index)

    line_num = str(line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {' ' * column_offset}{source}\n"
        f"{blank_gutter} {pad}^"
    )


class LexError(Exception):
    """Raised on the first lexing error, with the offending offset in the pattern."""

    def __init__(self, message: str, index: int, source: str) -> None:
        self.message = message
        self.index = index
        self.source = source
        super().__init__(f"{message} at {index}")

    def format(self, filename: str = "<pattern>", line: int = 1, column_offset: int = 0) -> str:
        """Render the error with the pattern and a caret under the offending offset.

        ``line`` and ``column_offset`` place the pattern inside a larger file
        (a route table) so the reported position points into that file.
        """
        return _render(
            f"{self.message} at {self.index}",
            self.source,
            self.index,
            filename,
            line,
            column_offset,
        )


class ParseError(Exception):
    """Raised when the token stream does not fit the pattern grammar."""

    def __init__(
        self,
        message: str,
        index: int,
        source: str,
        expected: LexTokenType | None = None,
        actual: LexTokenType | None = None,
    ) -> None:
        self.message = message
        self.index = index
        self.source = source
        self.expected = expected
        self.actual = actual
        super().__init__(message)

    def format(self, filename: str = "<pattern>", line: int = 1, column_offset: int = 0) -> str:
        return _render(self.message, self.source, self.index, filename, line, column_offset)


class BuildError(Exception):
    """Raised when parameters cannot produce a path for a compiled pattern."""

    def __init__(self, message: str, name: str | int | None = None, value: object = None) -> None:
        self.message = message
        self.name = name
        self.value = value
        super().__init__(message)
