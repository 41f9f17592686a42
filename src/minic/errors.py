"""Error types with formatted source context."""

from __future__ import annotations

from minic.tokens import Position


class GrammarError(Exception):
    """Raised when a grammar table is built from an invalid configuration."""


class LexError(Exception):
    """Raised when no grammar rule matches at the scan cursor.

    Scanning cannot resume after this: the token list built so far is
    discarded and ``remainder`` holds everything from the failing position on.
    """

    def __init__(
        self,
        message: str,
        position: Position,
        source: str,
        remainder: str,
        filename: str = "input.c",
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.remainder = remainder
        self.filename = filename
        super().__init__(self.format())

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)
        carets = "^"

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )
