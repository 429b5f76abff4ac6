"""Shell-style pattern matching and globbing over slash-separated paths."""

from __future__ import annotations

import posixpath
from typing import Any, Protocol

_META_CHARS = "\\*?["


class BadPatternError(ValueError):
    """Raised when a glob pattern is malformed."""

    def __init__(self, message: str = "syntax error in pattern") -> None:
        super().__init__(message)


class GlobFileSystem(Protocol):
    """The file system operations that glob needs.

    lstat and stat return objects with a `name` attribute and an `is_dir()`
    method; read_dir returns such objects for the entries of a directory.
    All three raise OSError on failure.
    """

    def lstat(self, path: str) -> Any: ...

    def stat(self, path: str) -> Any: ...

    def read_dir(self, path: str) -> list[Any]: ...


def _scan_chunk(pattern: str) -> tuple[bool, str, str]:
    stripped = pattern.lstrip("*")
    star = len(stripped) != len(pattern)
    in_range = False
    i = 0
    while i < len(stripped):
        char = stripped[i]
        if char == "\\":
            if i + 1 < len(stripped):
                i += 1
        elif char == "[":
            in_range = True
        elif char == "]":
            in_range = False
        elif char == "*" and not in_range:
            break
        i += 1
    return star, stripped[:i], stripped[i:]


def _get_escaped(chunk: str) -> tuple[str, str]:
    if not chunk or chunk[0] in "-]":
        raise BadPatternError()
    if chunk[0] == "\\":
        chunk = chunk[1:]
        if not chunk:
            raise BadPatternError()
    char, rest = chunk[0], chunk[1:]
    if not rest:
        raise BadPatternError()
    return char, rest


def _match_chunk(chunk: str, s: str) -> str | None:
    """Match chunk at the start of s; return the rest of s, or None.

    After a mismatch the chunk is still scanned so that syntax errors surface.
    """
    failed = False
    while chunk:
        if not failed and not s:
            failed = True
        head = chunk[0]
        if head == "[":
            char = ""
            if not failed:
                char, s = s[0], s[1:]
            chunk = chunk[1:]
            negated = chunk.startswith("^")
            if negated:
                chunk = chunk[1:]
            matched = False
            ranges = 0
            while True:
                if chunk.startswith("]") and ranges:
                    chunk = chunk[1:]
                    break
                low, chunk = _get_escaped(chunk)
                high = low
                if chunk[0] == "-":
                    high, chunk = _get_escaped(chunk[1:])
                if low <= char <= high:
                    matched = True
                ranges += 1
            if matched == negated:
                failed = True
        elif head == "?":
            if not failed:
                if s[0] == "/":
                    failed = True
                s = s[1:]
            chunk = chunk[1:]
        else:
            if head == "\\":
                chunk = chunk[1:]
                if not chunk:
                    raise BadPatternError()
            if not failed:
                if chunk[0] != s[0]:
                    failed = True
                s = s[1:]
            chunk = chunk[1:]
    return None if failed else s


def match(pattern: str, name: str) -> bool:
    """Report whether name matches the shell pattern.

    `*` matches any run of characters except `/`, `?` one character except
    `/`, `[...]` a character class (negated with `^`), and `\\` escapes.
    Raises BadPatternError for a malformed pattern.
    """
    while pattern:
        star, chunk, pattern = _scan_chunk(pattern)
        if star and not chunk:
            return "/" not in name
        rest = _match_chunk(chunk, name)
        if rest is not None and (not rest or pattern):
            name = rest
            continue
        if star:
            found = None
            for i, char in enumerate(name):
                if char == "/":
                    break
                rest = _match_chunk(chunk, name[i + 1:])
                if rest is None or (not pattern and rest):
                    continue
                found = rest
                break
            if found is not None:
                name = found
                continue
        while pattern:
            _, chunk, pattern = _scan_chunk(pattern)
            _match_chunk(chunk, "")
        return False
    return not name


def split(p: str) -> tuple[str, str]:
    """Split p after its final slash into a directory and a file name."""
    head, separator, tail = p.rpartition("/")
    return head + separator, tail


def _clean(path: str) -> str:
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def join(*args: str) -> str:
    """Join path elements with slashes and clean the result.

    Empty elements are ignored; if all are empty the result is empty.
    """
    parts = [element for element in args if element]
    return _clean("/".join(parts)) if parts else ""


def has_meta(path: str) -> bool:
    """Report whether path holds any character that match treats specially."""
    return any(char in _META_CHARS for char in path)


def _clean_glob_path(path: str) -> str:
    if path == "":
        return "."
    if path == "/":
        return path
    return path[:-1]


def _glob_dir(fs: GlobFileSystem, directory: str, pattern: str, matches: list[str]) -> None:
    try:
        if not fs.stat(directory).is_dir():
            return
        entries = fs.read_dir(directory)
    except OSError:
        return
    matches.extend(
        join(directory, entry.name) for entry in entries if match(pattern, entry.name)
    )


def glob(fs: GlobFileSystem, pattern: str) -> list[str]:
    """Return the paths in fs that match pattern, in directory order.

    File system errors are ignored; only BadPatternError is raised.
    """
    if not has_meta(pattern):
        try:
            info = fs.lstat(pattern)
        except OSError:
            return []
        directory, _ = split(pattern)
        return [join(_clean_glob_path(directory), info.name)]

    directory, file_pattern = split(pattern)
    directory = _clean_glob_path(directory)

    matches: list[str] = []
    if not has_meta(directory):
        _glob_dir(fs, directory, file_pattern, matches)
        return matches

    if directory == pattern:
        raise BadPatternError()

    for parent in glob(fs, directory):
        _glob_dir(fs, parent, file_pattern, matches)
    return matches