import pytest

from bacon_core.jobs import (
    ConcreteJobRef,
    JobRef,
    JobRefKind,
    NameOrAlias,
    Scope,
)

ROUND_TRIP_REFS = [
    JobRef(JobRefKind.DEFAULT),
    JobRef(JobRefKind.INITIAL),
    JobRef(JobRefKind.PREVIOUS),
    JobRef(JobRefKind.CONCRETE, concrete=ConcreteJobRef(NameOrAlias("run"), Scope())),
    JobRef(
        JobRefKind.CONCRETE,
        concrete=ConcreteJobRef(NameOrAlias("nextest"), Scope(["first::test", "second_test"])),
    ),
    JobRef(
        JobRefKind.CONCRETE,
        concrete=ConcreteJobRef(NameOrAlias("my-check", alias=True), Scope()),
    ),
    JobRef(
        JobRefKind.CONCRETE,
        concrete=ConcreteJobRef(NameOrAlias("my-test", alias=True), Scope(["abc"])),
    ),
    JobRef(
        JobRefKind.CONCRETE,
        concrete=ConcreteJobRef(NameOrAlias("nextest"), Scope(["abc"])),
    ),
    JobRef(JobRefKind.SCOPE, scope=Scope(["first::test", "second_test"])),
]


@pytest.mark.parametrize("job_ref", ROUND_TRIP_REFS, ids=str)
def test_job_ref_string_round_trip(job_ref):
    assert JobRef.parse(str(job_ref)) == job_ref


def test_special_refs_are_case_insensitive():
    assert JobRef.parse("DEFAULT") == JobRef(JobRefKind.DEFAULT)
    assert JobRef.parse("Previous") == JobRef(JobRefKind.PREVIOUS)


def test_scope_ref_ignores_blank_tests():
    assert JobRef.parse("scope:a, ,b") == JobRef(JobRefKind.SCOPE, scope=Scope(["a", "b"]))


def test_job_ref_from_job_name():
    job_ref = JobRef.from_job_name("clippy")
    assert job_ref.kind is JobRefKind.CONCRETE
    assert job_ref.concrete == ConcreteJobRef(NameOrAlias("clippy"))
    assert str(job_ref) == "clippy"


def test_default_concrete_job_is_check():
    assert ConcreteJobRef() == ConcreteJobRef.from_job_name("check")


def test_concrete_display_with_alias_and_scope():
    ref = ConcreteJobRef(NameOrAlias("my-test", alias=True), Scope(["a", "b"]))
    assert str(ref) == "alias:my-test(a,b)"


def test_badge_label():
    assert ConcreteJobRef.from_job_name("test").badge_label() == "test"
    scoped = ConcreteJobRef.from_job_name("nextest").with_scope(Scope(["abc"]))
    assert scoped.badge_label() == "nextest (scoped)"


def test_with_scope_keeps_original():
    ref = ConcreteJobRef.from_job_name("test")
    scoped = ref.with_scope(Scope(["x"]))
    assert not ref.scope.has_tests()
    assert scoped.scope.tests == ("x",)
    assert scoped.name_or_alias == ref.name_or_alias


def test_from_entry_unexpected_falls_back_to_name():
    ref = ConcreteJobRef.from_entry("weird(")
    assert ref == ConcreteJobRef(NameOrAlias("weird("))


def test_parse_empty_name_fails():
    with pytest.raises(ValueError, match="empty job name"):
        ConcreteJobRef.parse("")


def test_parse_alias():
    ref = ConcreteJobRef.parse("alias:foo")
    assert ref.name_or_alias == NameOrAlias("foo", alias=True)
    assert not ref.scope.has_tests()


def test_scope_has_tests():
    assert Scope(["t"]).has_tests()
    assert not Scope().has_tests()