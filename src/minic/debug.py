"""--debug grammar and token dumps (stderr unless told otherwise)."""

from __future__ import annotations

import sys
from typing import TextIO

from minic.grammar import Grammar
from minic.tokens import Token


def dump_grammar(grammar: Grammar, *, file: TextIO | None = None) -> None:
    """Print the grammar table in priority order to *file*."""
    if file is None:
        file = sys.stderr
    file.write("Grammar\n")
    for rank, matcher in enumerate(grammar, start=1):
        tag = matcher.token_type.value
        file.write(f"  {rank}. {matcher.name} -> {tag}\n")
        for pattern in matcher.patterns:
            file.write(f"       {pattern.pattern}\n")


def dump_tokens(tokens: list[Token], *, file: TextIO | None = None) -> None:
    """Print every token with its span and raw lexeme to *file*."""
    if file is None:
        file = sys.stderr
    file.write(f"Tokens ({len(tokens)})\n")
    width = max((len(str(t.span)) for t in tokens), default=0)
    for tok in tokens:
        file.write(f"  {str(tok.span):<{width}}  {tok.type.name:<12} {tok.value!r}\n")
