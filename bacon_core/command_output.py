"""Output lines of a command, failures and wrapped output."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .tty import TLine
from .wrap import SubLine, wrap


class CommandStream(enum.Enum):
    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass
class CommandOutputLine:
    """A line coming either from stdout or from stderr."""

    content: TLine
    origin: CommandStream

    def prefix_cols(self) -> int:
        return 0


@dataclass
class CommandOutput:
    """Some output lines."""

    lines: list[CommandOutputLine] = field(default_factory=list)

    def reverse(self) -> None:
        self.lines.reverse()

    def push(self, line: CommandOutputLine) -> None:
        self.lines.append(line)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass
class Failure:
    """Data of a failed command."""

    error_code: int
    output: CommandOutput
    suggest_backtrace: bool


class WrappedCommandOutput:
    """Sub-lines of a command output wrapped for a given width.

    Only valid for the output it was computed for; the width is the
    total area width, including the scrollbar.
    """

    def __init__(self, cmd_output: CommandOutput, width: int) -> None:
        self.sub_lines: list[SubLine] = wrap(cmd_output.lines, width)
        self.wrapped_lines_count = len(cmd_output)

    def update(self, cmd_output: CommandOutput, width: int) -> None:
        """Wrap the lines added since the last wrapping, same width assumed."""
        offset = self.wrapped_lines_count
        for sub_line in wrap(cmd_output.lines[offset:], width):
            sub_line.line_idx += offset
            self.sub_lines.append(sub_line)
        self.wrapped_lines_count = len(cmd_output)