"""Command-line interface for minic."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from minic.errors import GrammarError, LexError
from minic.tokens import Token

MODES = ("lex", "parse", "codegen")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    mode: str
    keywords: list[str]
    spans: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="minic",
        description="minic C-subset compiler front end",
    )
    p.add_argument("input", help="Input source file")
    mode = p.add_mutually_exclusive_group(required=True)
    for name in MODES:
        mode.add_argument(
            f"--{name}",
            dest="mode",
            action="store_const",
            const=name,
            help=f"Stop after the {name} stage",
        )
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-k",
        "--keyword",
        action="append",
        default=[],
        metavar="WORD",
        help="Extra keyword to recognize (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover minic.toml)",
    )
    p.add_argument("--spans", action="store_true", help="Prefix each token with its source span")
    p.add_argument("--debug", action="store_true", help="Dump grammar and tokens to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "minic.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Keywords: config, then CLI
    keywords: list[str] = []
    cfg_grammar = config.get("grammar")
    if isinstance(cfg_grammar, dict):
        cfg_keywords = cfg_grammar.get("keywords")
        if isinstance(cfg_keywords, list):
            keywords.extend(str(k) for k in cfg_keywords)
    keywords.extend(args.keyword)

    # Spans: config < CLI (the flag can only turn them on)
    spans = False
    cfg_lex = config.get("lex")
    if isinstance(cfg_lex, dict):
        cfg_spans = cfg_lex.get("spans")
        if isinstance(cfg_spans, bool):
            spans = cfg_spans
    if args.spans:
        spans = True

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        mode=args.mode,
        keywords=keywords,
        spans=spans,
        debug=args.debug,
    )


def format_tokens(tokens: list[Token], *, spans: bool = False) -> str:
    """Render one token per line, optionally prefixed with its span."""
    if spans:
        return "".join(f"{tok.span}\t{tok}\n" for tok in tokens)
    return "".join(f"{tok}\n" for tok in tokens)


def lex_file(options: CliOptions) -> list[Token]:
    """Read and tokenize a source file with the grammar the options select."""
    from minic.debug import dump_grammar, dump_tokens
    from minic.grammar import build_grammar
    from minic.lexer import tokenize

    grammar = build_grammar(options.keywords)
    if options.debug:
        dump_grammar(grammar)

    source = options.input_file.read_text(encoding="utf-8")
    tokens = tokenize(source, grammar, str(options.input_file))

    if options.debug:
        dump_tokens(tokens)
    return tokens


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    try:
        tokens = lex_file(options)
    except LexError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except GrammarError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"error: cannot read {options.input_file}: {exc.strerror}", file=sys.stderr)
        return 2
    except UnicodeDecodeError:
        print(f"error: {options.input_file} is not valid UTF-8", file=sys.stderr)
        return 2

    if options.mode != "lex":
        print(f"error: --{options.mode} is not implemented yet", file=sys.stderr)
        return 2

    text = format_tokens(tokens, spans=options.spans)
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)

    return 0
