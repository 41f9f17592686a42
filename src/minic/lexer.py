"""minic lexer — converts source text into a flat token stream."""

from __future__ import annotations

import re

from minic.errors import LexError
from minic.grammar import DEFAULT_GRAMMAR, Grammar, Matcher
from minic.tokens import Position, Span, Token

_WHITESPACE = re.compile(r"\s+")

# The same line boundaries str.splitlines() uses, with \r\n counted once
_LINE_BREAK = re.compile(r"\r\n|[\n\r\v\f\x1c\x1d\x1e\x85\u2028\u2029]")


class Lexer:
    """Tokenize source text by first-match-wins over an ordered grammar table.

    The grammar is only read, so one Grammar can back any number of Lexers.
    The cursor and token list belong to this instance.
    """

    def __init__(
        self,
        source: str,
        grammar: Grammar = DEFAULT_GRAMMAR,
        filename: str = "input.c",
    ) -> None:
        self._source = source
        self._grammar = grammar
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    @property
    def remainder(self) -> str:
        """The unconsumed suffix of the source."""
        return self._source[self._pos :]

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while True:
            self._skip_whitespace()
            if self._pos >= len(self._source):
                return self._tokens
            self._lex_token()

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _advance(self, count: int) -> str:
        text = self._source[self._pos : self._pos + count]
        self._pos += count
        last = None
        for last in _LINE_BREAK.finditer(text):
            self._line += 1
        if last is not None:
            self._col = len(text) - last.end() + 1
        else:
            self._col += len(text)
        return text

    def _error(self, message: str) -> LexError:
        return LexError(
            message, self._current_pos(), self._source, self.remainder, self._filename
        )

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _skip_whitespace(self) -> None:
        m = _WHITESPACE.match(self._source, self._pos)
        if m is not None:
            self._advance(m.end() - self._pos)

    def _match(self) -> tuple[Matcher, str] | None:
        """Find the first rule, by table order then rule order, matching at the cursor."""
        for matcher in self._grammar:
            for pattern in matcher.patterns:
                m = pattern.match(self._source, self._pos)
                # An empty match would never move the cursor
                if m is not None and m.end() > self._pos:
                    return matcher, m.group(0)
        return None

    def _lex_token(self) -> None:
        found = self._match()
        if found is None:
            unmatched = self.remainder.splitlines()[0]
            raise self._error(f'no match found: "{unmatched}"')

        matcher, lexeme = found
        start = self._current_pos()
        self._advance(len(lexeme))
        self._tokens.append(Token(matcher.token_type, lexeme, Span(start, self._current_pos())))


def tokenize(
    source: str,
    grammar: Grammar = DEFAULT_GRAMMAR,
    filename: str = "input.c",
) -> list[Token]:
    """Convenience function: tokenize source text and return a list of tokens."""
    return Lexer(source, grammar, filename).tokenize()
