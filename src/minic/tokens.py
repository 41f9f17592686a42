"""Token types and source position data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    # Payload-bearing (value is the matched lexeme)
    IDENTIFIER = "Identifier"
    CONSTANT = "Constant"
    KEYWORD = "Keyword"

    # Fixed-form
    PAREN_OPEN = "ParenthesisOpen"  # (
    PAREN_CLOSE = "ParenthesisClose"  # )
    BRACE_OPEN = "BraceOpen"  # {
    BRACE_CLOSE = "BraceClose"  # }
    SEMICOLON = "Semicolon"  # ;
    COMMENT = "Comment"  # // to end of line

    @property
    def has_payload(self) -> bool:
        return self in _PAYLOAD_TYPES


_PAYLOAD_TYPES = frozenset({TokenType.IDENTIFIER, TokenType.CONSTANT, TokenType.KEYWORD})


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True, slots=True)
class Token:
    """A single token: its tag, the exact lexeme it was matched from, and where."""

    type: TokenType
    value: str
    span: Span

    def __str__(self) -> str:
        if self.type.has_payload:
            return f'{self.type.value}("{self.value}")'
        return self.type.value
