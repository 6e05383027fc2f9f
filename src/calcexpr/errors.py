"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Why an expression was rejected. The value is the display message."""

    UNKNOWN_SYMBOL = "unknown symbol"
    OPERATOR_BEFORE_CLOSE_PAREN = "cannot have an operator before a closing parenthesis"
    UNBALANCED_PARENS = "unbalanced parentheses"
    ADJACENT_OPERATORS = "cannot have two operators side by side"
    OPERATOR_AFTER_OPEN_PAREN = "cannot have an operator after an opening parenthesis"
    LEADING_OPERATOR = "expression cannot start with an operator"
    TRAILING_OPERATOR = "expression cannot end with an operator"
    EMPTY_PARENS = "empty parentheses"
    MISSING_OPERATOR = "missing operator between operands"
    EMPTY_EXPRESSION = "empty expression"


class UnknownSymbolError(Exception):
    """Raised by the lexer when no rule matches at a non-end position."""

    def __init__(self, symbol: str, offset: int) -> None:
        self.symbol = symbol
        self.offset = offset
        super().__init__(f"unknown character {symbol!r} at offset {offset}")


class IncompleteMatchError(Exception):
    """Raised when a matcher breaks its contract.

    A matcher must either return None or a token whose text is exactly the
    non-empty input it consumed. Anything else is a bug in the matcher, not
    in the expression being lexed.
    """

    def __init__(self, message: str, offset: int) -> None:
        self.offset = offset
        super().__init__(f"{message} at offset {offset}")


class ValidationError(Exception):
    """Raised by the validator; ``index`` is -1 when only detectable at end of input."""

    def __init__(self, kind: ErrorKind, index: int) -> None:
        self.kind = kind
        self.index = index
        super().__init__(f"{kind.value} (token {index})")


class EvalError(Exception):
    """Raised when an expression cannot be evaluated, with span and source context.

    ``start`` and ``end`` are 0-based offsets into the source; both are -1
    when the error is certain but has no position (e.g. an unclosed
    parenthesis at end of input).
    """

    def __init__(
        self,
        kind: ErrorKind,
        start: int,
        end: int,
        source: str = "",
        symbol: str | None = None,
    ) -> None:
        self.kind = kind
        self.start = start
        self.end = end
        self.source = source
        self.symbol = symbol
        super().__init__(f"{self.message} in position ({start}, {end})")

    @property
    def message(self) -> str:
        if self.kind == ErrorKind.UNKNOWN_SYMBOL and self.symbol is not None:
            return f"{self.kind.value} {self.symbol!r}"
        return self.kind.value

    @property
    def has_position(self) -> bool:
        return self.start >= 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvalError):
            return NotImplemented
        return (self.kind, self.start, self.end, self.symbol) == (
            other.kind,
            other.start,
            other.end,
            other.symbol,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.start, self.end, self.symbol))

    def format(self, filename: str = "<expr>", line: int = 1) -> str:
        """Render the error with its source line and a caret underline.

        ``line`` is the line number of the first line of the source, so an
        expression taken from a file reports file line numbers.
        """
        lines = self.source.splitlines(keepends=True) or [""]

        if self.has_position:
            line_idx = self.source.count("\n", 0, self.start)
            col = self.start - (self.source.rfind("\n", 0, self.start) + 1)
        else:
            line_idx = len(lines) - 1
            col = 0

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        line_num = str(line + line_idx)
        gutter_width = len(line_num) + 1
        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        if not self.has_position:
            return (
                f"error: {self.message}\n"
                f"{' ' * gutter_width}--> {filename}:{line_num}\n"
                f"{blank_gutter}\n"
                f"{line_gutter} {source_line}\n"
                f"{blank_gutter} (at end of input)"
            )

        # Underline the full span when it stays on one line, otherwise to end of line
        underline_len = max(1, min(self.end - self.start, len(source_line) - col))
        pad = " " * col
        carets = "^" * underline_len

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{line_num}:{col + 1}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )
