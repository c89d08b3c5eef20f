"""Hardcoded actions that can be bound to keys or run after a successful job."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .scroll import ScrollCommand


class InternalKind(enum.Enum):
    BACK = "back"
    HELP = "help"
    PAUSE = "pause"
    QUIT = "quit"
    RERUN = "rerun"
    REFRESH = "refresh"
    RELOAD_CONFIG = "reload-config"
    SCOPE_TO_FAILURES = "scope-to-failures"
    SCROLL = "scroll"
    TOGGLE_BACKTRACE = "toggle-backtrace"
    TOGGLE_PAUSE = "toggle-pause"
    TOGGLE_RAW_OUTPUT = "toggle-raw-output"
    TOGGLE_SUMMARY = "toggle-summary"
    TOGGLE_WRAP = "toggle-wrap"
    UNPAUSE = "unpause"


_DOCS = {
    InternalKind.BACK: "back to previous page or job",
    InternalKind.HELP: "help",
    InternalKind.PAUSE: "pause",
    InternalKind.QUIT: "quit",
    InternalKind.RERUN: "run current job again",
    InternalKind.REFRESH: "clear then run current job again",
    InternalKind.RELOAD_CONFIG: "reload configuration files",
    InternalKind.SCOPE_TO_FAILURES: "scope to failures",
    InternalKind.TOGGLE_PAUSE: "toggle pause",
    InternalKind.TOGGLE_RAW_OUTPUT: "toggle raw output",
    InternalKind.TOGGLE_SUMMARY: "toggle summary",
    InternalKind.TOGGLE_WRAP: "toggle wrap",
    InternalKind.UNPAUSE: "unpause",
}

_BACKTRACE_NAMES = {
    "toggle-backtrace": "1",
    "toggle-backtrace(1)": "1",
    "toggle-backtrace(2)": "2",
    "toggle-backtrace(full)": "full",
}

_SIMPLE_KINDS = {
    kind.value: kind
    for kind in InternalKind
    if kind not in (InternalKind.SCROLL, InternalKind.TOGGLE_BACKTRACE)
}


@dataclass(frozen=True)
class Internal:
    """An internal action; scroll and backtrace actions carry a parameter."""

    kind: InternalKind
    command: ScrollCommand | None = None
    level: str | None = None

    @classmethod
    def scroll(cls, command: ScrollCommand) -> "Internal":
        return cls(InternalKind.SCROLL, command=command)

    @classmethod
    def toggle_backtrace(cls, level: str) -> "Internal":
        return cls(InternalKind.TOGGLE_BACKTRACE, level=level)

    @classmethod
    def parse(cls, s: str) -> "Internal":
        try:
            return cls.scroll(ScrollCommand.parse(s))
        except ValueError:
            pass
        if s in _BACKTRACE_NAMES:
            return cls.toggle_backtrace(_BACKTRACE_NAMES[s])
        kind = _SIMPLE_KINDS.get(s)
        if kind is None:
            raise ValueError("invalid internal")
        return cls(kind)

    def doc(self) -> str:
        """Description of the action for help pages."""
        if self.kind is InternalKind.SCROLL:
            return self.command.doc()
        if self.kind is InternalKind.TOGGLE_BACKTRACE:
            return f"toggle backtrace ({self.level})"
        return _DOCS[self.kind]

    def __str__(self) -> str:
        if self.kind is InternalKind.SCROLL:
            return str(self.command)
        if self.kind is InternalKind.TOGGLE_BACKTRACE:
            return f"toggle-backtrace({self.level})"
        return self.kind.value