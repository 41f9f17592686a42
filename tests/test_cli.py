"""Tests for the CLI module: arg parsing, modes, exit codes, output."""

from __future__ import annotations

from pathlib import Path

import pytest

from minic.cli import CliOptions, build_parser, format_tokens, lex_file, main
from minic.lexer import tokenize

RETURN_2 = "int main(void) { return 2; }\n"

RETURN_2_LINES = [
    'Keyword("int")',
    'Identifier("main")',
    "ParenthesisOpen",
    'Keyword("void")',
    "ParenthesisClose",
    "BraceOpen",
    'Keyword("return")',
    'Constant("2")',
    "Semicolon",
    "BraceClose",
]


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "return_2.c"
    path.write_text(RETURN_2)
    return path


# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_lex_mode(self) -> None:
        ns = build_parser().parse_args(["prog.c", "--lex"])
        assert ns.input == "prog.c"
        assert ns.mode == "lex"
        assert ns.output is None

    def test_parse_and_codegen_modes(self) -> None:
        p = build_parser()
        assert p.parse_args(["prog.c", "--parse"]).mode == "parse"
        assert p.parse_args(["prog.c", "--codegen"]).mode == "codegen"

    def test_mode_before_path(self) -> None:
        ns = build_parser().parse_args(["--lex", "prog.c"])
        assert ns.input == "prog.c"

    def test_keyword_flags(self) -> None:
        ns = build_parser().parse_args(["prog.c", "--lex", "-k", "if", "--keyword", "else"])
        assert ns.keyword == ["if", "else"]

    def test_spans_and_debug(self) -> None:
        ns = build_parser().parse_args(["prog.c", "--lex", "--spans", "--debug"])
        assert ns.spans is True
        assert ns.debug is True

    def test_missing_mode_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["prog.c"])
        assert exc_info.value.code == 2

    def test_two_modes_rejected(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["prog.c", "--lex", "--parse"])
        assert exc_info.value.code == 2

    def test_missing_path_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--lex"])
        assert exc_info.value.code == 2


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_success(self, source_file: Path) -> None:
        assert main([str(source_file), "--lex"]) == 0

    def test_lex_error_returns_1(self, tmp_path: Path, capsys) -> None:
        bad = tmp_path / "bad.c"
        bad.write_text("int main(void) { return 2 @ 3; }\n")
        assert main([str(bad), "--lex"]) == 1
        err = capsys.readouterr().err
        assert 'no match found: "@ 3; }"' in err
        assert f"{bad}:1:27" in err

    def test_lex_error_wins_over_unimplemented_mode(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.c"
        bad.write_text("@")
        assert main([str(bad), "--codegen"]) == 1

    @pytest.mark.parametrize("mode", ["parse", "codegen"])
    def test_reserved_modes_return_2(self, source_file: Path, mode: str, capsys) -> None:
        assert main([str(source_file), f"--{mode}"]) == 2
        assert f"--{mode} is not implemented yet" in capsys.readouterr().err

    def test_missing_file_returns_2(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "nope.c"), "--lex"]) == 2
        assert "cannot read" in capsys.readouterr().err

    def test_invalid_utf8_returns_2(self, tmp_path: Path) -> None:
        bad = tmp_path / "latin1.c"
        bad.write_bytes(b"int \xff;")
        assert main([str(bad), "--lex"]) == 2

    def test_bad_keyword_returns_2(self, source_file: Path, capsys) -> None:
        assert main([str(source_file), "--lex", "-k", "not-a-word"]) == 2
        assert "invalid keyword" in capsys.readouterr().err

    def test_bad_config_returns_2(self, source_file: Path) -> None:
        (source_file.parent / "minic.toml").write_text("[grammar\n")
        assert main([str(source_file), "--lex"]) == 2


# ---------------------------------------------------------------------------
# Lex output
# ---------------------------------------------------------------------------


class TestLexOutput:
    def test_stdout(self, source_file: Path, capsys) -> None:
        assert main([str(source_file), "--lex"]) == 0
        assert capsys.readouterr().out.splitlines() == RETURN_2_LINES

    def test_output_file(self, source_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "tokens.txt"
        assert main([str(source_file), "--lex", "-o", str(out)]) == 0
        assert out.read_text().splitlines() == RETURN_2_LINES

    def test_spans(self, source_file: Path, capsys) -> None:
        assert main([str(source_file), "--lex", "--spans"]) == 0
        first = capsys.readouterr().out.splitlines()[0]
        assert first == '1:1-1:4\tKeyword("int")'

    def test_extra_keyword(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "loop.c"
        src.write_text("while")
        assert main([str(src), "--lex", "-k", "while"]) == 0
        assert capsys.readouterr().out == 'Keyword("while")\n'

    def test_empty_file(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "empty.c"
        src.write_text("")
        assert main([str(src), "--lex"]) == 0
        assert capsys.readouterr().out == ""

    def test_debug_dumps_to_stderr(self, source_file: Path, capsys) -> None:
        assert main([str(source_file), "--lex", "--debug"]) == 0
        captured = capsys.readouterr()
        assert captured.err.startswith("Grammar\n")
        assert "Tokens (10)" in captured.err
        assert captured.out.splitlines() == RETURN_2_LINES


class TestFormatTokens:
    def test_plain(self) -> None:
        assert format_tokens(tokenize("x;")) == 'Identifier("x")\nSemicolon\n'

    def test_empty(self) -> None:
        assert format_tokens([]) == ""


# ---------------------------------------------------------------------------
# lex_file smoke test
# ---------------------------------------------------------------------------


class TestLexFile:
    def test_basic(self, source_file: Path) -> None:
        opts = CliOptions(
            input_file=source_file,
            output_file=None,
            mode="lex",
            keywords=[],
            spans=False,
            debug=False,
        )
        tokens = lex_file(opts)
        assert [str(t) for t in tokens] == RETURN_2_LINES
