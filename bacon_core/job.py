"""Job definitions and the stack of jobs run during a session."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Sequence

from .jobs import ConcreteJobRef, JobRef, JobRefKind, NameOrAlias

logger = logging.getLogger(__name__)

DEFAULT_ALIAS_ARGS = ("--color", "always")

_FIELD_KINDS = {
    "allow_failures": "bool",
    "allow_warnings": "bool",
    "analyzer": "str",
    "apply_gitignore": "bool",
    "background": "bool",
    "command": "str_list",
    "default_watch": "bool",
    "env": "str_map",
    "expand_env_vars": "bool",
    "extraneous_args": "bool",
    "ignore": "str_list",
    "ignored_lines": "str_list",
    "kill": "str_list",
    "need_stdout": "bool",
    "on_change_strategy": "str",
    "on_success": "str",
    "watch": "str_list",
}


def _checked(name: str, value: Any) -> Any:
    kind = _FIELD_KINDS[name]
    if kind == "bool":
        valid = isinstance(value, bool)
    elif kind == "str":
        valid = isinstance(value, str)
    elif kind == "str_list":
        valid = isinstance(value, list) and all(isinstance(v, str) for v in value)
    else:
        valid = isinstance(value, dict) and all(
            isinstance(k, str) and isinstance(v, str) for k, v in value.items()
        )
    if not valid:
        raise ValueError(f"invalid value for `{name}`: {value!r}")
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value


@dataclass
class Job:
    """One of the jobs that can be run."""

    command: list[str]
    """Tokens of the command to execute; the first one is the executable."""
    allow_failures: bool = False
    allow_warnings: bool = False
    analyzer: str | None = None
    apply_gitignore: bool | None = None
    background: bool = True
    default_watch: bool | None = None
    env: dict[str, str] = field(default_factory=dict)
    expand_env_vars: bool = True
    extraneous_args: bool = True
    ignore: list[str] = field(default_factory=list)
    ignored_lines: list[str] | None = None
    kill: list[str] | None = None
    need_stdout: bool = False
    on_change_strategy: str | None = None
    on_success: str | None = None
    watch: list[str] | None = None

    @classmethod
    def from_alias(
        cls, alias_name: str, additional_alias_args: Sequence[str] | None = None
    ) -> "Job":
        """Build a job running a cargo alias."""
        extra = DEFAULT_ALIAS_ARGS if additional_alias_args is None else additional_alias_args
        return cls(command=["cargo", alias_name, *extra], analyzer="standard")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Job":
        """Build a job from configuration data; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {
            key: _checked(key, value)
            for key, value in data.items()
            if key in known and value is not None
        }
        if "command" not in values:
            raise ValueError("missing field `command`")
        return cls(**values)


class JobNotFoundError(LookupError):
    """Raised when a job name is not among the configured jobs."""

    def __init__(self, name: str) -> None:
        super().__init__(f"job not found: {name!r}")
        self.name = name


class JobStack:
    """The jobs run so far, allowing to go back to a previous one or to scope the current one."""

    def __init__(self, additional_alias_args: Sequence[str] | None = None) -> None:
        self._entries: list[ConcreteJobRef] = []
        self.additional_alias_args = (
            None if additional_alias_args is None else list(additional_alias_args)
        )

    @property
    def entries(self) -> tuple[ConcreteJobRef, ...]:
        return tuple(self._entries)

    def pick_job(
        self,
        job_ref: JobRef,
        jobs: Mapping[str, Job],
        default_job: ConcreteJobRef,
        arg_job: ConcreteJobRef | None = None,
    ) -> tuple[ConcreteJobRef, Job] | None:
        """Determine the job to run and update the stack.

        Return None when there's no job left, meaning the application should quit.
        """
        logger.debug("picking job %s", job_ref)
        kind = job_ref.kind
        if kind is JobRefKind.DEFAULT:
            concrete = default_job
        elif kind is JobRefKind.INITIAL:
            concrete = arg_job if arg_job is not None else default_job
        elif kind is JobRefKind.PREVIOUS:
            current = self._entries.pop() if self._entries else None
            if self._entries:
                concrete = self._entries.pop()
            elif current is not None and current.scope.has_tests():
                # rather than quitting, assume the user wants to "unscope"
                concrete = ConcreteJobRef(current.name_or_alias)
            else:
                return None
        elif kind is JobRefKind.CONCRETE:
            concrete = job_ref.concrete
        else:
            if not self._entries:
                return None
            concrete = self._entries[-1].with_scope(job_ref.scope)

        job = self._job_for(concrete.name_or_alias, jobs)
        if not self._entries or self._entries[-1] != concrete:
            self._entries.append(concrete)
        return concrete, job

    def _job_for(self, name_or_alias: NameOrAlias, jobs: Mapping[str, Job]) -> Job:
        if name_or_alias.alias:
            return Job.from_alias(name_or_alias.value, self.additional_alias_args)
        try:
            return copy.deepcopy(jobs[name_or_alias.value])
        except KeyError:
            raise JobNotFoundError(name_or_alias.value) from None