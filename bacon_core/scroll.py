"""Scroll commands and scroll arithmetic."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass


class ScrollKind(enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LINES = "lines"
    PAGES = "pages"


_PATTERNS = [
    (re.compile(r"scroll[-_]?to[-_]?top", re.I | re.A), ScrollKind.TOP),
    (re.compile(r"scroll[-_]?to[-_]?bottom", re.I | re.A), ScrollKind.BOTTOM),
    (re.compile(r"scroll[-_]?lines?\(([+-]?[0-9]{1,4})\)", re.I | re.A), ScrollKind.LINES),
    (re.compile(r"scroll[-_]?pages?\(([+-]?[0-9]{1,4})\)", re.I | re.A), ScrollKind.PAGES),
]


@dataclass(frozen=True)
class ScrollCommand:
    """A scroll related command."""

    kind: ScrollKind
    amount: int = 0

    @classmethod
    def top(cls) -> "ScrollCommand":
        return cls(ScrollKind.TOP)

    @classmethod
    def bottom(cls) -> "ScrollCommand":
        return cls(ScrollKind.BOTTOM)

    @classmethod
    def lines(cls, n: int) -> "ScrollCommand":
        return cls(ScrollKind.LINES, n)

    @classmethod
    def pages(cls, n: int) -> "ScrollCommand":
        return cls(ScrollKind.PAGES, n)

    @classmethod
    def parse(cls, s: str) -> "ScrollCommand":
        for pattern, kind in _PATTERNS:
            match = pattern.fullmatch(s)
            if match:
                amount = int(match.group(1)) if match.groups() else 0
                return cls(kind, amount)
        raise ValueError("not a valid scroll command")

    def __str__(self) -> str:
        if self.kind is ScrollKind.TOP:
            return "scroll-to-top"
        if self.kind is ScrollKind.BOTTOM:
            return "scroll-to-bottom"
        if self.kind is ScrollKind.LINES:
            return f"scroll-lines({self.amount})"
        return f"scroll-pages({self.amount})"

    def _to_lines(self, content_height: int, page_height: int) -> int:
        if self.kind is ScrollKind.TOP:
            return -content_height
        if self.kind is ScrollKind.BOTTOM:
            return content_height
        if self.kind is ScrollKind.LINES:
            return self.amount
        return self.amount * page_height

    def doc(self) -> str:
        """Description of the action for help pages."""
        if self.kind is ScrollKind.TOP:
            return "scroll to top"
        if self.kind is ScrollKind.BOTTOM:
            return "scroll to bottom"
        thing = "line" if self.kind is ScrollKind.LINES else "page"
        n, way = (self.amount, "down") if self.amount > 0 else (-self.amount, "up")
        plural = "s" if n > 1 else ""
        return f"scroll {n} {thing}{plural} {way}"

    def apply(self, scroll: int, content_height: int, page_height: int) -> int:
        """Compute the new scroll value."""
        if content_height <= page_height:
            return 0
        new = scroll + self._to_lines(content_height, page_height)
        return max(0, min(new, content_height - page_height))


def is_thumb(y: int, scrollbar: tuple[int, int] | None) -> bool:
    """Tell whether row y is in the scrollbar thumb."""
    if scrollbar is None:
        return False
    top, bottom = scrollbar
    return top <= y <= bottom


def fix_scroll(scroll: int, content_height: int, page_height: int) -> int:
    if content_height > page_height:
        return min(scroll, content_height - page_height - 1)
    return 0