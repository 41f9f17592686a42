"""minic C-subset compiler front end."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minic.grammar import Grammar
    from minic.tokens import Token

__version__ = "0.1.0"


def lex(source: str, filename: str = "input.c", grammar: Grammar | None = None) -> list[Token]:
    """Tokenize minic source with *grammar* (default: the built-in grammar table)."""
    from minic.grammar import DEFAULT_GRAMMAR
    from minic.lexer import tokenize

    return tokenize(source, grammar if grammar is not None else DEFAULT_GRAMMAR, filename)
