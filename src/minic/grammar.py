"""Grammar table: the ordered catalog of token categories the lexer matches."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from minic.errors import GrammarError
from minic.tokens import TokenType

# Category name -> payload-bearing token type. The name is the only thing that
# selects payload behaviour; every other category emits its pre-built tag.
PAYLOAD_CATEGORIES: dict[str, TokenType] = {
    "Identifier": TokenType.IDENTIFIER,
    "Constant": TokenType.CONSTANT,
    "Keyword": TokenType.KEYWORD,
}

KEYWORDS: tuple[str, ...] = ("int", "void", "return")

_KEYWORD_SHAPE = re.compile(r"[a-zA-Z_]\w*")


@dataclass(frozen=True, slots=True)
class Matcher:
    """One token category: a name, its ordered rules, and an optional fixed tag."""

    name: str
    patterns: tuple[re.Pattern[str], ...]
    token: TokenType | None = None

    def __post_init__(self) -> None:
        if not self.patterns:
            raise GrammarError(f"matcher {self.name!r} has no patterns")
        if self.name in PAYLOAD_CATEGORIES:
            if self.token is not None:
                raise GrammarError(
                    f"payload category {self.name!r} must not carry a pre-built token"
                )
        elif self.token is None:
            raise GrammarError(f"fixed-form category {self.name!r} needs a pre-built token")
        elif self.token.has_payload:
            raise GrammarError(
                f"category {self.name!r} cannot use payload token {self.token.value} as its tag"
            )

    @property
    def token_type(self) -> TokenType:
        """The tag emitted for a match in this category."""
        if self.token is not None:
            return self.token
        return PAYLOAD_CATEGORIES[self.name]


@dataclass(frozen=True, slots=True)
class Grammar:
    """Ordered matchers. Earlier matchers win over later ones on the same input."""

    matchers: tuple[Matcher, ...]

    def __iter__(self) -> Iterator[Matcher]:
        return iter(self.matchers)

    def __len__(self) -> int:
        return len(self.matchers)

    def names(self) -> list[str]:
        return [m.name for m in self.matchers]


def matcher(name: str, *patterns: str, token: TokenType | None = None) -> Matcher:
    """Compile *patterns* into a Matcher.

    Patterns are applied with ``Pattern.match`` at the scan cursor, so they are
    anchored there without a leading ``^``.
    """
    return Matcher(name, tuple(re.compile(p) for p in patterns), token)


def _keyword_pattern(word: str) -> str:
    return re.escape(word) + r"\b"


def build_grammar(extra_keywords: Iterable[str] = ()) -> Grammar:
    """Build the default grammar, with *extra_keywords* appended to the Keyword category."""
    keywords = list(KEYWORDS)
    for word in extra_keywords:
        if not _KEYWORD_SHAPE.fullmatch(word):
            raise GrammarError(f"invalid keyword {word!r}: must look like an identifier")
        if word not in keywords:
            keywords.append(word)

    m: list[Matcher] = []

    def d(name: str, *patterns: str, token: TokenType | None = None) -> None:
        m.append(matcher(name, *patterns, token=token))

    # Keywords first: every keyword is also a valid identifier
    d("Keyword", *(_keyword_pattern(w) for w in keywords))
    d("Identifier", r"[a-zA-Z_]\w*\b")
    d("Constant", r"[0-9]+\b")

    # Punctuation
    d("OpenParenthesis", r"\(", token=TokenType.PAREN_OPEN)
    d("CloseParenthesis", r"\)", token=TokenType.PAREN_CLOSE)
    d("OpenBrace", r"\{", token=TokenType.BRACE_OPEN)
    d("CloseBrace", r"\}", token=TokenType.BRACE_CLOSE)
    d("Semicolon", r";", token=TokenType.SEMICOLON)

    # Line comment, up to but not including the newline
    d("Comment", r"//[^\n\r\v\f\x1c\x1d\x1e\x85\u2028\u2029]*", token=TokenType.COMMENT)

    return Grammar(tuple(m))


def default_grammar() -> Grammar:
    """Return the built-in grammar table."""
    return build_grammar()


DEFAULT_GRAMMAR: Grammar = default_grammar()
