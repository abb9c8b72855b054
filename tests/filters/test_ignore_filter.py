"""Unit tests for the gitignore-style pattern filter."""

import pytest

from lsn.filters.base_filter import FilterResult
from lsn.filters.ignore_filter import IgnorePatternFilter, read_ignore_file
from lsn.walker.dir_entry import DirEntry


def entry(relative_path, is_dir=False):
    return DirEntry(relative_path.rsplit("/", 1)[-1], relative_path, relative_path, is_dir=is_dir)


@pytest.fixture
def ignore_file(tmp_path):
    path = tmp_path / ".gitignore"
    path.write_text("# build output\n*.pyc\n\nbuild/\n!keep.pyc\n")
    return path


@pytest.mark.parametrize(
    "relative_path,is_dir,expected",
    [
        ("main.pyc", False, FilterResult.EXCLUDED),
        ("pkg/mod.pyc", False, FilterResult.EXCLUDED),
        ("keep.pyc", False, FilterResult.INCLUDED),
        ("main.py", False, FilterResult.INCLUDED),
        ("build", True, FilterResult.PRUNED),
        ("src/build", True, FilterResult.PRUNED),
        ("build", False, FilterResult.INCLUDED),
    ],
)
def test_patterns(relative_path, is_dir, expected):
    ignore_filter = IgnorePatternFilter(["*.pyc", "build/", "!keep.pyc"])
    assert ignore_filter(entry(relative_path, is_dir)) is expected


def test_matches_ignores_root_prefix():
    ignore_filter = IgnorePatternFilter(["/top.txt"])
    rooted = DirEntry("top.txt", "/some/root/top.txt", "top.txt")
    nested = DirEntry("top.txt", "/some/root/sub/top.txt", "sub/top.txt")
    assert ignore_filter(rooted) is FilterResult.EXCLUDED
    assert ignore_filter(nested) is FilterResult.INCLUDED


def test_later_patterns_override_earlier():
    assert IgnorePatternFilter(["*.log", "!app.log"]).matches("app.log") is False
    assert IgnorePatternFilter(["!app.log", "*.log"]).matches("app.log") is True


def test_read_ignore_file(ignore_file):
    assert read_ignore_file(ignore_file) == ["# build output", "*.pyc", "", "build/", "!keep.pyc"]


def test_read_missing_ignore_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Ignore file not found"):
        read_ignore_file(tmp_path / "missing")


def test_from_files(ignore_file, tmp_path):
    extra = tmp_path / "extra.ignore"
    extra.write_text("*.log\n")

    ignore_filter = IgnorePatternFilter.from_files([ignore_file, extra])
    assert ignore_filter.matches("a.pyc")
    assert ignore_filter.matches("a.log")
    assert not ignore_filter.matches("keep.pyc")

    single = IgnorePatternFilter.from_files(str(extra))
    assert single.matches("a.log")
    assert not single.matches("a.pyc")


def test_has_rules():
    assert not IgnorePatternFilter().has_rules()
    assert not IgnorePatternFilter(["# only a comment", ""]).has_rules()
    assert IgnorePatternFilter(["*.tmp"]).has_rules()
