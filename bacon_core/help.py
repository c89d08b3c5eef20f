"""Help texts: launch examples and the list of jobs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .job import Job
from .jobs import ConcreteJobRef


@dataclass(frozen=True)
class Example:
    """A launch example to display in the --help message."""

    title: str
    cmd: str


EXAMPLES = (
    Example("Start with the default job", "bacon"),
    Example("Start with a specific job", "bacon clippy"),
    Example("Start with features", "bacon --features clipboard"),
    Example("Start a specific job on another path", "bacon ../broot test"),
    Example("Start in summary mode", "bacon -s"),
)


def examples_text() -> str:
    """Markdown listing the numbered examples."""
    lines = "".join(
        f"*{number})* {example.title}: `{example.cmd}`\n"
        for number, example in enumerate(EXAMPLES, start=1)
    )
    return f"\n**Examples:**\n\n{lines}\n"


def jobs_table(jobs: Mapping[str, Job], default_job: ConcreteJobRef | str) -> str:
    """Markdown table of the jobs sorted by name, followed by the default job."""
    rows = "".join(
        f"|{name}|{' '.join(jobs[name].command)}|\n" for name in sorted(jobs)
    )
    return (
        "|:-:|:-|\n"
        "|**job**|**command**|\n"
        "|:-:|:-|\n"
        f"{rows}"
        "|-|-|\n"
        f"default job: {default_job}\n"
    )


def print_jobs(jobs: Mapping[str, Job], default_job: ConcreteJobRef | str) -> None:
    print(jobs_table(jobs, default_job), end="")