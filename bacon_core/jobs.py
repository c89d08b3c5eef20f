"""References to jobs: names, aliases, scopes and special references."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)

_ENTRY_RE = re.compile(r"(alias:)?([^()]+)(?:\(([^)]+)\))?")
_SCOPE_RE = re.compile(r"scope:(.+)", re.I)


def _split_tests(s: str) -> tuple[str, ...]:
    return tuple(t for t in s.split(",") if t.strip())


@dataclass(frozen=True)
class Scope:
    """A dynamic reduction of a job execution."""

    tests: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tests", tuple(self.tests))

    def has_tests(self) -> bool:
        return bool(self.tests)


@dataclass(frozen=True)
class NameOrAlias:
    """A job name, or the name of a cargo alias when `alias` is set."""

    value: str
    alias: bool = False


@dataclass(frozen=True)
class ConcreteJobRef:
    """A job reference usable without looking at the job stack."""

    name_or_alias: NameOrAlias = NameOrAlias("check")
    scope: Scope = field(default_factory=Scope)

    @classmethod
    def from_job_name(cls, name: str) -> "ConcreteJobRef":
        return cls(NameOrAlias(str(name)))

    @classmethod
    def from_entry(cls, entry: str) -> "ConcreteJobRef":
        """Read a reference like `name`, `alias:name` or `name(test1,test2)`."""
        match = _ENTRY_RE.fullmatch(entry)
        if match is None:
            logger.warning("unexpected job ref: %r", entry)
            return cls.from_job_name(entry)
        alias_prefix, name, tests = match.groups()
        return cls(
            NameOrAlias(name, alias=alias_prefix is not None),
            Scope(_split_tests(tests or "")),
        )

    @classmethod
    def parse(cls, s: str) -> "ConcreteJobRef":
        if not s:
            raise ValueError("empty job name")
        return cls.from_entry(s)

    def badge_label(self) -> str:
        label = self.name_or_alias.value
        if self.scope.has_tests():
            label += " (scoped)"
        return label

    def with_scope(self, scope: Scope) -> "ConcreteJobRef":
        return replace(self, scope=scope)

    def __str__(self) -> str:
        if self.name_or_alias.alias:
            text = f"alias:{self.name_or_alias.value}"
        else:
            text = self.name_or_alias.value
        if self.scope.has_tests():
            text += f"({','.join(self.scope.tests)})"
        return text


class JobRefKind(enum.Enum):
    DEFAULT = "default"
    INITIAL = "initial"
    PREVIOUS = "previous"
    CONCRETE = "concrete"
    SCOPE = "scope"


_SPECIAL_KINDS = (JobRefKind.DEFAULT, JobRefKind.INITIAL, JobRefKind.PREVIOUS)


@dataclass(frozen=True)
class JobRef:
    """A reference to a job, possibly relative to the job stack."""

    kind: JobRefKind
    concrete: ConcreteJobRef | None = None
    scope: Scope | None = None

    @classmethod
    def from_job_name(cls, name: str) -> "JobRef":
        return cls(JobRefKind.CONCRETE, concrete=ConcreteJobRef.from_job_name(name))

    @classmethod
    def parse(cls, s: str) -> "JobRef":
        for kind in _SPECIAL_KINDS:
            if re.fullmatch(kind.value, s, re.I):
                return cls(kind)
        match = _SCOPE_RE.fullmatch(s)
        if match:
            return cls(JobRefKind.SCOPE, scope=Scope(_split_tests(match.group(1))))
        return cls(JobRefKind.CONCRETE, concrete=ConcreteJobRef.from_entry(s))

    def __str__(self) -> str:
        if self.kind is JobRefKind.CONCRETE:
            return str(self.concrete)
        if self.kind is JobRefKind.SCOPE:
            return f"scope:{','.join(self.scope.tests)}"
        return self.kind.value