import pytest

from bacon_core.ignorer import GlobIgnorer, Ignorer, IgnorerSet


class _NameIgnorer(Ignorer):
    def __init__(self, name):
        self.name = name

    def excludes(self, path):
        return str(path).endswith(self.name)


def test_relative_pattern_matches_at_any_depth(tmp_path):
    ignorer = GlobIgnorer()
    ignorer.add("*.log", tmp_path)
    assert ignorer.excludes(tmp_path / "a" / "b.log")
    assert ignorer.excludes("/b.log")
    assert not ignorer.excludes(tmp_path / "a" / "b.rs")


def test_directory_pattern(tmp_path):
    ignorer = GlobIgnorer()
    ignorer.add("target/*", tmp_path)
    assert ignorer.excludes("/proj/target/debug/out")
    assert not ignorer.excludes("/proj/src/main.rs")


def test_absolute_pattern(tmp_path):
    ignorer = GlobIgnorer()
    ignorer.add("/data/*.bak", tmp_path)
    assert ignorer.excludes("/data/x.bak")
    assert not ignorer.excludes("/other/x.bak")


def test_question_mark_and_classes(tmp_path):
    ignorer = GlobIgnorer()
    ignorer.add("file?.txt", tmp_path)
    ignorer.add("[!a]b.md", tmp_path)
    assert ignorer.excludes("/d/file1.txt")
    assert not ignorer.excludes("/d/file.txt")
    assert ignorer.excludes("/d/cb.md")
    assert not ignorer.excludes("/d/ab.md")


def test_empty_glob_ignorer_excludes_nothing():
    assert not GlobIgnorer().excludes("/any/path")


@pytest.mark.parametrize("pattern", ["a**b", "[abc"])
def test_invalid_patterns(tmp_path, pattern):
    with pytest.raises(ValueError):
        GlobIgnorer().add(pattern, tmp_path)


def test_empty_set_excludes_nothing():
    assert not IgnorerSet().excludes_all(["/x.log"])


def test_set_requires_every_path_excluded(tmp_path):
    glob = GlobIgnorer()
    glob.add("*.log", tmp_path)
    ignorers = IgnorerSet()
    ignorers.add(glob)
    ignorers.add(_NameIgnorer(".tmp"))
    assert ignorers.excludes_all(["/a/x.log", "/b/y.tmp"])
    assert not ignorers.excludes_all(["/a/x.log", "/src/lib.rs"])


def test_set_with_no_paths_is_all_excluded():
    ignorers = IgnorerSet()
    ignorers.add(_NameIgnorer(".tmp"))
    assert ignorers.excludes_all([])