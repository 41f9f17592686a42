"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from minic.lexer import tokenize
from minic.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source with the default grammar."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_rendered(tokens: list[Token], expected: list[str]) -> None:
    """Assert that str(token) matches the expected list, e.g. 'Keyword("int")'."""
    actual = [str(t) for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
