# bacon_core

This package holds the building blocks of a background job runner. Such a
runner watches source files and runs a command again whenever they change.

## Modules

- `bacon_core.tty`: styled terminal lines.
  - `TString` is a run of text together with the CSI sequences that style it.
    It has constructors for badges (`TString.badge`, `TString.num_badge`).
  - `TLine` is a list of `TString` runs. `TLine.from_tty` parses text that
    holds CSI sequences, and a tab becomes four spaces.
  - `TLine.draw` and `TLine.draw_in` write a line to a text stream.
    `draw_in` stops at a column limit and returns the number of columns it
    wrote.
  - `TLineBuilder` is the parser that `from_tty` uses.
- `bacon_core.wrap`: `wrap(lines, width)` cuts lines into `SubLine` rows of
  `SubString` slices that point back into the source lines.
  - One column is kept free for a scrollbar.
  - Wide characters count for their display width.
- `bacon_core.command_output`: `CommandStream`, `CommandOutputLine`,
  `CommandOutput`, `Failure`, and `WrappedCommandOutput`.
  - `WrappedCommandOutput.update` wraps only the lines added since the last
    call.
- `bacon_core.scroll`: `ScrollCommand` and its string forms, such as
  `scroll-to-top`, `scroll-lines(-3)` or `ScrollPages(2)`.
  - `ScrollCommand.apply` computes a new scroll position.
  - `ScrollCommand.doc` gives a short description.
  - There are also two helpers, `fix_scroll` and `is_thumb`.
- `bacon_core.internal`: `Internal` holds the built-in actions, such as
  `quit`, `rerun`, `refresh`, `toggle-wrap`, `toggle-backtrace(full)` and
  the scroll commands.
  - `Internal.parse` and `str()` convert between these actions and their
    string forms.
  - `doc()` describes each one.
- `bacon_core.messages`: `Message` is a short status message. It has a
  display duration, and `Message.is_expired` tells whether that duration
  has passed.
- `bacon_core.jobs`: `Scope`, `NameOrAlias`, `ConcreteJobRef` and `JobRef`.
  - They parse entries such as `check`, `alias:my-check`,
    `nextest(first::test,second_test)`, `scope:abc`, `default`, `initial`
    and `previous`.
  - `str()` writes them back in the same form.
- `bacon_core.job`: `Job` describes a job.
  - `Job.from_dict` reads a job from configuration data.
  - `Job.from_alias` builds a `cargo <alias>` job.
  - `JobStack.pick_job` resolves a `JobRef` and updates the stack. It
    returns `None` when no job is left. It raises `JobNotFoundError` when a
    job name is not configured.
- `bacon_core.mission`: `Mission` and `MissionSettings`.
  - `Mission.get_command` builds a `CommandSpec` (program, arguments,
    working directory, environment). It expands `$VARS` and adds the test
    scope. It also handles `--features`, `--no-default-features`,
    `--all-features` and `--`.
  - `merge_features` takes the union of two comma-separated feature lists.
- `bacon_core.ignorer`: `Ignorer`, `GlobIgnorer` and `IgnorerSet`.
  - A pattern that starts with `/` matches as given. It also matches
    relative to the package root.
  - Any other pattern matches at any depth.
- `bacon_core.watcher`: `Watcher` watches files and directories with
  watchdog.
  - `wait(timeout)` returns `True` on a change that is not ignored.
  - `close()` stops watching, and a `Watcher` can also be used in a `with`
    block.
- `bacon_core.help`: the launch examples (`EXAMPLES`, `examples_text()`)
  and a markdown table of the jobs (`jobs_table`, `print_jobs`).

## Examples

```python
from bacon_core.tty import TLine

line = TLine.from_tty("\x1b[1mfailed\x1b[0m: tests::it_works")
assert line.to_raw() == "failed: tests::it_works"
```

```python
from bacon_core.scroll import ScrollCommand

cmd = ScrollCommand.parse("scroll-lines(3)")
assert cmd.doc() == "scroll 3 lines down"
assert cmd.apply(0, 100, 20) == 3
assert ScrollCommand.parse("scroll-pages(1)").apply(0, 100, 20) == 20
```

```python
from bacon_core.internal import Internal

assert Internal.parse("toggle-backtrace(full)").doc() == "toggle backtrace (full)"
```

```python
from bacon_core.jobs import ConcreteJobRef

job_ref = ConcreteJobRef.parse("nextest(first::test)")
assert job_ref.badge_label() == "nextest (scoped)"
```

```python
from pathlib import Path
from bacon_core.ignorer import GlobIgnorer

ignorer = GlobIgnorer()
ignorer.add("*.tmp", Path("/project"))
assert ignorer.excludes(Path("/project/src/scratch.tmp"))
```

## What the package does not do

This is a library. It has no command-line entry point and no interactive
terminal screen.

- It builds commands (`CommandSpec`) but never starts them.
- It does not analyse command output into error, warning or test-failure
  reports.
- It does not load configuration files.
- It does not map keys to actions.
- Gitignore rules are not applied. Only the job's own `ignore` glob
  patterns are used.

## Requirements

Python 3.10 or later, with `wcwidth` and `watchdog`.