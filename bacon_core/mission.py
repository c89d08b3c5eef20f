"""What to run, where, and how: a job resolved against the settings."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from .ignorer import GlobIgnorer, IgnorerSet
from .job import Job
from .jobs import ConcreteJobRef

logger = logging.getLogger(__name__)

_ENV_VAR_RE = re.compile(r"\$([A-Z0-9a-z_]+)")


@dataclass
class MissionSettings:
    """The settings a mission depends on."""

    additional_job_args: list[str] = field(default_factory=list)
    all_features: bool = False
    features: str | None = None
    no_default_features: bool = False
    ignored_lines: list[str] | None = None


@dataclass
class CommandSpec:
    """A fully built command, ready to be started."""

    program: str
    args: list[str] = field(default_factory=list)
    cwd: Path | None = None
    env: dict[str, str] = field(default_factory=dict)
    with_stdout: bool = False

    @property
    def tokens(self) -> list[str]:
        return [self.program, *self.args]


def _expand_var(match: re.Match[str]) -> str:
    value = os.environ.get(match.group(1))
    if value is None:
        logger.warning("variable %s not found in env", match.group(0))
        return match.group(0)
    return value


def merge_features(a: str, b: str) -> str:
    """Union of two comma separated feature lists."""
    return ",".join(dict.fromkeys([*a.split(","), *b.split(",")]))


@dataclass
class Mission:
    """A job to run, with its location and the settings applying to it."""

    location_name: str
    concrete_job_ref: ConcreteJobRef
    execution_directory: Path
    package_directory: Path
    root_directory: Path
    """The path used to make relative paths absolute."""
    job: Job
    paths_to_watch: list[Path] = field(default_factory=list)
    settings: MissionSettings = field(default_factory=MissionSettings)

    def ignorer(self) -> IgnorerSet:
        """Build the set of ignorers for the job's ignore patterns."""
        ignorers = IgnorerSet()
        if self.job.ignore:
            glob_ignorer = GlobIgnorer()
            for pattern in self.job.ignore:
                try:
                    glob_ignorer.add(pattern, self.package_directory)
                except ValueError as e:
                    logger.warning("Failed to add ignore pattern %s: %s", pattern, e)
            ignorers.add(glob_ignorer)
        return ignorers

    def make_absolute(self, path: str | os.PathLike) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.root_directory / path

    def get_command(self) -> CommandSpec:
        """Build (without starting it) the command of the job."""
        if self.job.expand_env_vars:
            command = [_ENV_VAR_RE.sub(_expand_var, token) for token in self.job.command]
        else:
            command = list(self.job.command)

        scope = self.concrete_job_ref.scope
        if scope.has_tests() and len(command) > 2:
            # vanilla cargo test can only be scoped to one test
            tests = scope.tests[:1] if command[:2] == ["cargo", "test"] else scope.tests
            command.extend(tests)

        if not command:
            raise ValueError("empty job command")
        program, *rest = command
        spec = CommandSpec(
            program,
            cwd=self.execution_directory,
            env=dict(self.job.env),
            with_stdout=self.need_stdout(),
        )
        if not self.job.extraneous_args:
            spec.args.extend(rest)
            logger.debug("command: %r", spec)
            return spec

        settings = self.settings
        args = spec.args
        no_default_features_done = False
        features_done = False
        last_is_features = False
        has_double_dash = False
        tokens = iter([*rest, *settings.additional_job_args])
        for arg in tokens:
            if arg == "--":
                # what follows goes after the feature arguments
                has_double_dash = True
                break
            if last_is_features:
                if settings.all_features:
                    logger.debug("ignoring features given along --all-features")
                else:
                    features_done = True
                    if settings.features is not None:
                        args.append("--features")
                        if settings.no_default_features:
                            args.append(settings.features)
                        else:
                            args.append(merge_features(arg, settings.features))
                    elif not settings.no_default_features:
                        args.extend(["--features", arg])
                last_is_features = False
            elif arg == "--no-default-features":
                no_default_features_done = True
                args.append(arg)
            elif arg == "--features":
                last_is_features = True
            else:
                args.append(arg)

        if settings.no_default_features and not no_default_features_done:
            args.append("--no-default-features")
        if settings.all_features:
            args.append("--all-features")
        if not features_done and settings.features is not None:
            if settings.all_features:
                logger.debug("not using features because of --all-features")
            else:
                args.extend(["--features", settings.features])
        if has_double_dash:
            args.append("--")
            args.extend(tokens)
        logger.debug("command: %r", spec)
        return spec

    def kill_command(self) -> list[str] | None:
        return None if self.job.kill is None else list(self.job.kill)

    def need_stdout(self) -> bool:
        """Whether stdout is needed, not just stderr."""
        return self.job.need_stdout

    def ignored_lines_patterns(self) -> list[str] | None:
        """Patterns of the job, or else of the settings, when not empty."""
        patterns = self.job.ignored_lines
        if patterns is None:
            patterns = self.settings.ignored_lines
        return list(patterns) if patterns else None