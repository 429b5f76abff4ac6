import posixpath
from dataclasses import dataclass

import pytest

from sftpkit.match import BadPatternError, glob, has_meta, join, match, split


@dataclass
class _Entry:
    name: str
    directory: bool

    def is_dir(self):
        return self.directory


class _FakeFS:
    def __init__(self, tree):
        self._tree = tree
        self._files = {
            posixpath.normpath(posixpath.join(parent, child))
            for parent, children in tree.items()
            for child in children
        }

    def _describe(self, path):
        path = posixpath.normpath(path)
        if path in self._tree:
            return _Entry(posixpath.basename(path), True)
        if path in self._files:
            return _Entry(posixpath.basename(path), False)
        raise FileNotFoundError(path)

    def lstat(self, path):
        return self._describe(path)

    def stat(self, path):
        return self._describe(path)

    def read_dir(self, path):
        path = posixpath.normpath(path)
        if path not in self._tree:
            raise NotADirectoryError(path)
        return [
            self._describe(posixpath.join(path, child)) for child in self._tree[path]
        ]


@pytest.fixture
def fs():
    return _FakeFS(
        {
            ".": ["docs", "src", "readme.md"],
            "docs": ["a.txt", "b.md"],
            "src": ["main.go", "util.go", "notes.txt"],
        }
    )


@pytest.mark.parametrize("name", ["abc", "a/b/c", "file.txt", ""])
def test_meta_free_pattern_matches_itself(name):
    assert match(name, name)
    assert not match(name, name + "x")


def test_star_does_not_cross_slash():
    assert match("*", "abc")
    assert not match("*", "a/b")
    assert match("a/*", "a/b")


def test_question_mark_matches_one_character():
    assert match("a?c", "abc")
    assert not match("a?c", "a/c")
    assert not match("a?c", "ac")


def test_escaped_star_is_literal():
    assert match("\\*", "*")
    assert not match("\\*", "x")


def test_character_classes():
    assert match("[a-c]", "b")
    assert not match("[^a-c]", "b")
    assert match("[^a-c]", "z")


@pytest.mark.parametrize(
    "pattern", ["[", "a\\", "[]a]", "[-]", "[x-]", "[x-", "x*["]
)
def test_bad_patterns_raise(pattern):
    with pytest.raises(BadPatternError):
        match(pattern, "a")


@pytest.mark.parametrize("p", ["a/b/c", "/abs/file", "file", "dir/", "/"])
def test_split_parts_rejoin_to_input(p):
    directory, file = split(p)
    assert directory + file == p
    assert "/" not in file


def test_join_cleans_result():
    assert join("a", "b", "../c") == "a/c"
    assert join("a", "") == join("a")
    assert join() == ""
    assert not join("//a").startswith("//")


@pytest.mark.parametrize("p", ["a//b", "a/./b/", "/x/../y", "rel/../.."])
def test_join_is_idempotent(p):
    assert join(join(p)) == join(p)


def test_has_meta():
    for char in "\\*?[":
        assert has_meta(f"a{char}b")
    assert not has_meta("plain/path")


def test_glob_in_plain_directory(fs):
    assert glob(fs, "src/*.go") == ["src/main.go", "src/util.go"]


def test_glob_through_meta_directory(fs):
    assert glob(fs, "*/*.txt") == ["docs/a.txt", "src/notes.txt"]


def test_glob_results_all_match(fs):
    pattern = "*/*"
    results = glob(fs, pattern)
    assert results
    assert all(match(pattern, result) for result in results)


def test_glob_without_meta_existing_path(fs):
    assert glob(fs, "docs/a.txt") == ["docs/a.txt"]


def test_glob_without_meta_missing_path(fs):
    assert glob(fs, "docs/missing.txt") == []


def test_glob_missing_directory(fs):
    assert glob(fs, "nowhere/*.txt") == []


def test_glob_bad_pattern_raises(fs):
    with pytest.raises(BadPatternError):
        glob(fs, "docs/[")