"""Styled terminal lines: strings with their CSI styling, parsing and drawing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TextIO

from wcwidth import wcwidth

CSI_RESET = "\x1b[0m\x1b[0m"
CSI_BOLD = "\x1b[1m"
CSI_ITALIC = "\x1b[3m"
CSI_GREEN = "\x1b[32m"
CSI_RED = "\x1b[31m"
CSI_BOLD_RED = "\x1b[1m\x1b[38;5;9m"
CSI_BOLD_ORANGE = "\x1b[1m\x1b[38;5;208m"
CSI_BLUE = "\x1b[1m\x1b[36m"
CSI_BOLD_YELLOW = "\x1b[1m\x1b[33m"
CSI_BOLD_BLUE = "\x1b[1m\x1b[38;5;12m"

TAB_REPLACEMENT = "    "


def _char_width(c: str) -> int:
    width = wcwidth(c)
    return width if width > 0 else 0


def _fit(s: str, cols_max: int) -> tuple[str, int]:
    """Return the longest prefix of s fitting in cols_max columns, and its width."""
    cols = 0
    for idx, c in enumerate(s):
        width = _char_width(c)
        if cols + width > cols_max:
            return s[:idx], cols
        cols += width
    return s, cols


@dataclass
class TString:
    """A piece of text with the CSI sequences styling it."""

    csi: str = ""
    raw: str = ""

    @classmethod
    def badge(cls, con: str, fg: int, bg: int) -> "TString":
        """Build a badge; colors are 8-bit ANSI values."""
        return cls(f"\x1b[1m\x1b[38;5;{fg}m\x1b[48;5;{bg}m", f" {con} ")

    @classmethod
    def num_badge(cls, num: int, cat: str, fg: int, bg: int) -> "TString":
        raw = f" {num} {cat} " if num < 2 else f" {num} {cat}s "
        return cls.badge(raw, fg, bg)

    def push_csi(self, params, action: str) -> None:
        self.csi += "\x1b[" + ";".join(str(p) for p in params) + action

    def draw(self, w: TextIO) -> None:
        if self.csi:
            w.write(f"{self.csi}{self.raw}{CSI_RESET}")
        else:
            w.write(self.raw)

    def draw_in(self, w: TextIO, cols_max: int) -> int:
        """Draw without taking more than cols_max columns; return the columns written."""
        text, cols = _fit(self.raw, cols_max)
        if self.csi:
            w.write(f"{self.csi}{text}{CSI_RESET}")
        else:
            w.write(text)
        return cols

    def starts_with(self, csi: str, raw: str) -> bool:
        return self.csi == csi and self.raw.startswith(raw)

    def split_off(self, at: int) -> "TString":
        """Keep the text before `at` and return the rest, with the same style."""
        tail = self.raw[at:]
        self.raw = self.raw[:at]
        return TString(self.csi, tail)

    def is_blank(self) -> bool:
        return all(c.isspace() for c in self.raw)


@dataclass
class TLine:
    """A line made of homogeneously styled parts."""

    strings: list[TString] = field(default_factory=list)

    @classmethod
    def from_tty(cls, tty: str) -> "TLine":
        builder = TLineBuilder()
        builder.read(tty.replace("\t", TAB_REPLACEMENT))
        return builder.build()

    @classmethod
    def from_raw(cls, raw: str) -> "TLine":
        return cls([TString(" ", raw)])

    def to_raw(self) -> str:
        return "".join(ts.raw for ts in self.strings)

    @classmethod
    def bold(cls, raw: str) -> "TLine":
        return cls([TString(CSI_BOLD, raw)])

    @classmethod
    def italic(cls, raw: str) -> "TLine":
        return cls([TString(CSI_ITALIC, raw)])

    @classmethod
    def failed(cls, key: str) -> "TLine":
        strings = [TString(CSI_BOLD_ORANGE, "failed"), TString("", ": ")]
        module, sep, function = key.rpartition("::")
        if sep:
            strings.append(TString("", f"{module}::"))
            strings.append(TString(CSI_BOLD_ORANGE, function))
        else:
            strings.append(TString(CSI_BOLD_ORANGE, key))
        return cls(strings)

    def add_badge(self, badge: TString) -> None:
        self.strings.append(badge)
        self.strings.append(TString("", " "))

    def draw(self, w: TextIO) -> None:
        for ts in self.strings:
            ts.draw(w)

    def draw_in(self, w: TextIO, cols_max: int) -> int:
        """Draw without taking more than cols_max columns; return the columns written."""
        cols = 0
        for ts in self.strings:
            if cols >= cols_max:
                break
            cols += ts.draw_in(w, cols_max - cols)
        return cols

    def is_blank(self) -> bool:
        return all(not ts.raw.strip() for ts in self.strings)

    def if_unstyled(self) -> str | None:
        """Return the content if the line is made of a single unstyled string."""
        if len(self.strings) == 1 and not self.strings[0].csi:
            return self.strings[0].raw
        return None

    def has(self, part: str) -> bool:
        return any(part in ts.raw for ts in self.strings)


class _State(enum.Enum):
    GROUND = enum.auto()
    ESCAPE = enum.auto()
    CSI = enum.auto()
    CSI_IGNORE = enum.auto()
    OSC = enum.auto()
    STRING = enum.auto()


class TLineBuilder:
    """Consume text holding terminal escape sequences and build a TLine."""

    def __init__(self) -> None:
        self._cur: TString | None = None
        self._strings: list[TString] = []
        self._state = _State.GROUND
        self._params: list[int] = []
        self._param = 0

    def read(self, s: str) -> None:
        for c in s:
            self._advance(c)

    def build(self) -> TLine:
        strings = list(self._strings)
        if self._cur is not None:
            strings.append(self._cur)
        return TLine(strings)

    def _advance(self, c: str) -> None:
        code = ord(c)
        if c == "\x1b":
            self._state = _State.ESCAPE
            return
        state = self._state
        if state is _State.GROUND:
            if code < 0x20 or 0x7F <= code <= 0x9F:
                return
            self._print(c)
        elif state is _State.ESCAPE:
            if code < 0x20:
                return
            if c == "[":
                self._params = []
                self._param = 0
                self._state = _State.CSI
            elif c == "]":
                self._state = _State.OSC
            elif c in "PX^_":
                self._state = _State.STRING
            elif 0x20 <= code <= 0x2F:
                pass
            else:
                self._state = _State.GROUND
        elif state is _State.CSI:
            if code < 0x20:
                return
            if "0" <= c <= "9":
                self._param = self._param * 10 + (code - 0x30)
            elif c in ";:":
                self._params.append(self._param)
                self._param = 0
            elif 0x3C <= code <= 0x3F or 0x20 <= code <= 0x2F:
                pass
            elif 0x40 <= code <= 0x7E:
                self._params.append(self._param)
                self._csi_dispatch(self._params, c)
                self._state = _State.GROUND
            else:
                self._state = _State.CSI_IGNORE
        elif state is _State.CSI_IGNORE:
            if 0x40 <= code <= 0x7E:
                self._state = _State.GROUND
        elif state is _State.OSC:
            if c in "\x07\x9c":
                self._state = _State.GROUND
        elif state is _State.STRING:
            if c == "\x9c":
                self._state = _State.GROUND

    def _print(self, c: str) -> None:
        if self._cur is None:
            self._cur = TString()
        self._cur.raw += c

    def _csi_dispatch(self, params: list[int], action: str) -> None:
        if params == [0]:
            if self._cur is not None:
                self._strings.append(self._cur)
                self._cur = None
            return
        if self._cur is not None and not self._cur.raw:
            self._cur.push_csi(params, action)
            return
        if self._cur is not None:
            self._strings.append(self._cur)
        cur = TString()
        cur.push_csi(params, action)
        self._cur = cur