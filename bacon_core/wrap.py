"""Wrapping of styled lines into sub-lines fitting a width."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, TextIO

from wcwidth import wcwidth

from .tty import CSI_RESET, TLine


class WrappableLine(Protocol):
    """A line which can be wrapped."""

    content: TLine

    def prefix_cols(self) -> int: ...


def _char_width(c: str) -> int:
    width = wcwidth(c)
    return width if width > 0 else 0


@dataclass
class SubString:
    """A slice [start, end) of one string of a line."""

    string_idx: int = 0
    start: int = 0
    end: int = 0

    def draw(self, w: TextIO, content: TLine) -> None:
        string = content.strings[self.string_idx]
        text = string.raw[self.start:self.end]
        if string.csi:
            w.write(f"{string.csi}{text}{CSI_RESET}")
        else:
            w.write(text)


@dataclass
class SubLine:
    """A displayed row, made of slices of one source line."""

    line_idx: int = 0
    sub_strings: list[SubString] = field(default_factory=list)

    def is_continuation(self) -> bool:
        if not self.sub_strings:
            return False
        first = self.sub_strings[0]
        return first.string_idx != 0 or first.start != 0

    def draw(self, w: TextIO, source_lines: Sequence[WrappableLine]) -> None:
        content = source_lines[self.line_idx].content
        for sub_string in self.sub_strings:
            sub_string.draw(w, content)


def wrap(lines: Sequence[WrappableLine], width: int) -> list[SubLine]:
    """Split lines into sub-lines that point back into the given lines."""
    cols = width - 1  # room for the probable scrollbar
    sub_lines: list[SubLine] = []
    for line_idx, line in enumerate(lines):
        current = SubLine(line_idx)
        sub_lines.append(current)
        sub_cols = line.prefix_cols()
        for string_idx, string in enumerate(line.content.strings):
            piece = SubString(string_idx, 0, len(string.raw))
            current.sub_strings.append(piece)
            for idx, c in enumerate(string.raw):
                char_cols = _char_width(c)
                if sub_cols + char_cols > cols and sub_cols > 0:
                    piece.end = idx
                    piece = SubString(string_idx, idx, len(string.raw))
                    current = SubLine(line_idx, [piece])
                    sub_lines.append(current)
                    sub_cols = char_cols
                else:
                    sub_cols += char_cols
    return sub_lines