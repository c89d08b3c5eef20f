"""Tell whether changed paths are to be ignored."""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable


class Ignorer(ABC):
    """Something able to tell whether a path is excluded."""

    @abstractmethod
    def excludes(self, path: str | os.PathLike) -> bool:
        """Return True when the path is excluded."""


def _class_to_regex(body: str, negate: bool) -> str:
    items = []
    idx = 0
    while idx < len(body):
        c = body[idx]
        if idx + 2 < len(body) and body[idx + 1] == "-":
            items.append(f"{re.escape(c)}-{re.escape(body[idx + 2])}")
            idx += 3
        else:
            items.append(re.escape(c))
            idx += 1
    return f"[{'^' if negate else ''}{''.join(items)}]"


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a glob pattern; wildcards may cross path separators."""
    out = []
    idx = 0
    n = len(pattern)
    while idx < n:
        c = pattern[idx]
        if pattern.startswith("**", idx):
            end = idx + 2
            if (idx > 0 and pattern[idx - 1] != "/") or (end < n and pattern[end] != "/"):
                raise ValueError("recursive wildcards must form a single path component")
            if end < n:
                out.append("(?:.*/)?")
                idx = end + 1
            else:
                out.append(".*")
                idx = end
            continue
        if c == "*":
            out.append(".*")
            idx += 1
        elif c == "?":
            out.append(".")
            idx += 1
        elif c == "[":
            start = idx + 1
            negate = start < n and pattern[start] == "!"
            if negate:
                start += 1
            close = start
            if close < n and pattern[close] == "]":
                close += 1
            while close < n and pattern[close] != "]":
                close += 1
            if close >= n:
                raise ValueError("invalid range pattern")
            out.append(_class_to_regex(pattern[start:close], negate))
            idx = close + 1
        else:
            out.append(re.escape(c))
            idx += 1
    return re.compile("".join(out), re.DOTALL)


class GlobIgnorer(Ignorer):
    """Exclude paths matching glob patterns."""

    def __init__(self) -> None:
        self._globs: list[re.Pattern[str]] = []

    def add(self, pattern: str, root: str | os.PathLike) -> None:
        """Add a pattern; relative ones match at any depth."""
        if pattern.startswith("/"):
            self._globs.append(_glob_to_regex(pattern))
            # probably a path relative to the root of the package
            self._globs.append(_glob_to_regex(str(Path(root) / pattern)))
        else:
            self._globs.append(_glob_to_regex(f"/**/{pattern}"))

    def excludes(self, path: str | os.PathLike) -> bool:
        text = os.fspath(path)
        return any(glob.fullmatch(text) for glob in self._globs)


class IgnorerSet:
    """A set of ignorers; a path is excluded when one of them excludes it."""

    def __init__(self) -> None:
        self._ignorers: list[Ignorer] = []

    def add(self, ignorer: Ignorer) -> None:
        self._ignorers.append(ignorer)

    def excludes_all(self, paths: Iterable[str | os.PathLike]) -> bool:
        """Tell whether every path is excluded (False when there is no ignorer)."""
        if not self._ignorers:
            return False
        return all(
            any(ignorer.excludes(path) for ignorer in self._ignorers) for path in paths
        )