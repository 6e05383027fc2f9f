"""Rule-driven lexer engine: converts source text into a flat token stream.

The engine knows nothing about arithmetic. It is configured with an ordered
table of ``(TokenType, Matcher)`` rules; at each position the rules are tried
in order and the first one that returns a token wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from calcexpr.errors import IncompleteMatchError, UnknownSymbolError
from calcexpr.tokens import Token, TokenType

logger = logging.getLogger(__name__)


class Cursor:
    """Read-ahead view over the source, starting at the lexer's committed position.

    Matchers read freely through a cursor. The lexer only commits the cursor's
    position when the matcher returns a token, so a failed match never needs
    to rewind anything.
    """

    __slots__ = ("_source", "_start", "_pos")

    def __init__(self, source: str, start: int) -> None:
        self._source = source
        self._start = start
        self._pos = start

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def text(self) -> str:
        """Everything consumed since the cursor was created."""
        return self._source[self._start : self._pos]

    def at_end(self) -> bool:
        return self._pos >= len(self._source)

    def peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def advance(self) -> str:
        ch = self.peek()
        if ch:
            self._pos += 1
        return ch

    # ------------------------------------------------------------------
    # Reading helpers
    # ------------------------------------------------------------------

    def read_char(self, want: str) -> bool:
        """Consume ``want`` if it is the next character."""
        if self.peek() == want:
            self._pos += 1
            return True
        return False

    def read_between(self, low: str, high: str) -> str:
        """Consume the longest run of characters in ``[low, high]``."""
        begin = self._pos
        while not self.at_end() and low <= self.peek() <= high:
            self._pos += 1
        return self._source[begin : self._pos]

    def read_while(self, chars: str) -> str:
        """Consume the longest run of characters contained in ``chars``."""
        begin = self._pos
        while not self.at_end() and self.peek() in chars:
            self._pos += 1
        return self._source[begin : self._pos]

    def read_int_or_float(self) -> str:
        """Consume ``\\d+`` optionally followed by ``.`` and ``\\d*``.

        A dot with no digits after it is kept (``"5."``), which float()
        parses as ``5.0``.
        """
        integer = self.read_between("0", "9")
        if not integer:
            return ""
        if not self.read_char("."):
            return integer
        return integer + "." + self.read_between("0", "9")


Matcher = Callable[[Cursor], Token | None]


class Lexer:
    """Tokenize source text using an ordered table of matcher rules."""

    def __init__(self, rules: Sequence[tuple[TokenType, Matcher]]) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[tuple[TokenType, Matcher], ...]:
        return self._rules

    def tokenize(self, source: str) -> list[Token]:
        """Tokenize the full source and return the token list."""
        tokens: list[Token] = []
        pos = 0
        while pos < len(source):
            token, pos = self._next_token(source, pos)
            tokens.append(token)
        logger.debug("lexed %d tokens from %r", len(tokens), source)
        return tokens

    def _next_token(self, source: str, pos: int) -> tuple[Token, int]:
        for tt, matcher in self._rules:
            cursor = Cursor(source, pos)
            token = matcher(cursor)
            if token is None:
                continue
            if token.type != tt:
                raise IncompleteMatchError(
                    f"matcher for {tt.name} returned a {token.type.name} token", pos
                )
            if not cursor.text:
                raise IncompleteMatchError(f"matcher for {tt.name} consumed no input", pos)
            if token.text != cursor.text:
                raise IncompleteMatchError(
                    f"matcher for {tt.name} returned {token.text!r} "
                    f"but consumed {cursor.text!r}",
                    pos,
                )
            return token, cursor.pos
        raise UnknownSymbolError(source[pos], pos)


def one_char(ch: str, tt: TokenType) -> Matcher:
    """Build a matcher for a single fixed character."""

    def match(cursor: Cursor) -> Token | None:
        if cursor.read_char(ch):
            return Token(tt, ch)
        return None

    return match


def char_run(chars: str, tt: TokenType) -> Matcher:
    """Build a matcher for a non-empty run of characters from ``chars``."""

    def match(cursor: Cursor) -> Token | None:
        text = cursor.read_while(chars)
        if text:
            return Token(tt, text)
        return None

    return match
