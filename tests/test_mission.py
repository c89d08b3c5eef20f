from pathlib import Path

import pytest

from bacon_core.job import Job
from bacon_core.jobs import ConcreteJobRef, Scope
from bacon_core.mission import Mission, MissionSettings, merge_features


def make_mission(command, *, settings=None, tests=(), **job_fields):
    job = Job(command=list(command), **job_fields)
    ref = ConcreteJobRef.from_job_name("check").with_scope(Scope(tuple(tests)))
    return Mission(
        location_name="demo",
        concrete_job_ref=ref,
        execution_directory=Path("/work"),
        package_directory=Path("/work/pkg"),
        root_directory=Path("/work"),
        job=job,
        settings=settings or MissionSettings(),
    )


def test_command_without_extraneous_args():
    mission = make_mission(
        ["cargo", "check", "--features", "a"],
        settings=MissionSettings(features="b"),
        extraneous_args=False,
        env={"K": "V"},
        need_stdout=True,
    )
    spec = mission.get_command()
    assert spec.tokens == ["cargo", "check", "--features", "a"]
    assert spec.cwd == Path("/work")
    assert spec.env == {"K": "V"}
    assert spec.with_stdout is True


def test_env_vars_are_expanded(monkeypatch):
    monkeypatch.setenv("BACON_CORE_TEST_VAR", "expanded")
    monkeypatch.delenv("BACON_CORE_MISSING_VAR", raising=False)
    mission = make_mission(["echo", "$BACON_CORE_TEST_VAR", "$BACON_CORE_MISSING_VAR"])
    assert mission.get_command().args == ["expanded", "$BACON_CORE_MISSING_VAR"]


def test_env_vars_not_expanded_when_disabled(monkeypatch):
    monkeypatch.setenv("BACON_CORE_TEST_VAR", "expanded")
    mission = make_mission(["echo", "$BACON_CORE_TEST_VAR"], expand_env_vars=False)
    assert mission.get_command().args == ["$BACON_CORE_TEST_VAR"]


def test_cargo_test_is_scoped_to_first_test():
    mission = make_mission(["cargo", "test", "--color"], tests=["a::t1", "b::t2"])
    assert mission.get_command().args == ["test", "--color", "a::t1"]


def test_other_commands_receive_all_tests():
    mission = make_mission(["cargo", "nextest", "run"], tests=["a::t1", "b::t2"])
    assert mission.get_command().args == ["nextest", "run", "a::t1", "b::t2"]


def test_job_and_setting_features_are_merged():
    mission = make_mission(
        ["cargo", "check", "--features", "a,b"],
        settings=MissionSettings(features="b,c"),
    )
    args = mission.get_command().args
    assert args[:2] == ["check", "--features"]
    assert set(args[2].split(",")) == {"a", "b", "c"}
    assert len(args) == 3


def test_no_default_features_replaces_job_features():
    mission = make_mission(
        ["cargo", "check", "--features", "a"],
        settings=MissionSettings(features="x", no_default_features=True),
    )
    assert mission.get_command().args == [
        "check",
        "--features",
        "x",
        "--no-default-features",
    ]


def test_no_default_features_drops_job_features():
    mission = make_mission(
        ["cargo", "check", "--features", "a"],
        settings=MissionSettings(no_default_features=True),
    )
    assert mission.get_command().args == ["check", "--no-default-features"]


def test_all_features_ignores_other_features():
    mission = make_mission(
        ["cargo", "check", "--features", "a"],
        settings=MissionSettings(features="x", all_features=True),
    )
    assert mission.get_command().args == ["check", "--all-features"]


def test_arguments_after_double_dash_come_last():
    mission = make_mission(
        ["cargo", "run"],
        settings=MissionSettings(features="f", additional_job_args=["--", "x"]),
    )
    assert mission.get_command().args == ["run", "--features", "f", "--", "x"]


def test_empty_command_is_rejected():
    with pytest.raises(ValueError):
        make_mission([]).get_command()


def test_merge_features_is_a_union():
    merged = merge_features("a,b", "b,c")
    assert sorted(merged.split(",")) == ["a", "b", "c"]


def test_make_absolute():
    mission = make_mission(["cargo", "check"])
    assert mission.make_absolute("src/main.rs") == Path("/work/src/main.rs")
    assert mission.make_absolute(Path("/abs/file.rs")) == Path("/abs/file.rs")


def test_ignorer_uses_job_patterns():
    mission = make_mission(["cargo", "check"], ignore=["*.log"])
    ignorer = mission.ignorer()
    assert ignorer.excludes_all(["/work/pkg/target/x.log"]) is True
    assert ignorer.excludes_all(["/work/pkg/src/main.rs"]) is False


def test_ignorer_without_patterns_excludes_nothing():
    mission = make_mission(["cargo", "check"])
    assert mission.ignorer().excludes_all(["/work/pkg/x.log"]) is False


def test_ignored_lines_patterns():
    settings = MissionSettings(ignored_lines=["^warning"])
    assert make_mission(["c"], settings=settings).ignored_lines_patterns() == ["^warning"]
    job_wins = make_mission(["c"], settings=settings, ignored_lines=["^note"])
    assert job_wins.ignored_lines_patterns() == ["^note"]
    emptied = make_mission(["c"], settings=settings, ignored_lines=[])
    assert emptied.ignored_lines_patterns() is None


def test_kill_command_and_need_stdout():
    mission = make_mission(["cargo", "run"], kill=["pkill", "app"])
    assert mission.kill_command() == ["pkill", "app"]
    assert mission.need_stdout() is False