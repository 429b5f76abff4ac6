import re
from datetime import datetime, timedelta

import pytest

from sftpkit.listing import FileInfo, OSIDLookup, run_ls
from sftpkit.permissions import FileMode

TYPE_DIRECTORY = "d"
TYPE_FILE = "[^d]"

RWXS = "[-r][-w][-xsS]"
RWXT = "[-r][-w][-xtT]"
NUMBER = "(?:[0-9]+)"
NAME = "(?:[a-z0-9_][a-z0-9_.-]*\\$?)"


def _check_ls_line(result, expected_type, filename):
    fields = [field for field in result.split(" ") if field]
    perms, link_count, user, group, size = fields[:5]
    date_time = " ".join(fields[5:8])

    assert re.fullmatch(expected_type + RWXS + RWXS + RWXT, perms)
    assert re.fullmatch(NUMBER, link_count)
    assert re.fullmatch(f"(?:{NUMBER}|{NAME})+", user.lower())
    assert re.fullmatch(f"(?:{NUMBER}|{NAME})+", group.lower())
    assert re.fullmatch(NUMBER, size)
    assert re.fullmatch(r"[A-Z][a-z]{2} \d{1,2} (?:\d{2}:\d{2}|\d{4})", date_time)
    assert fields[8] == filename


@pytest.fixture
def examples_dir(tmp_path):
    directory = tmp_path / "examples"
    directory.mkdir()
    return directory


@pytest.fixture
def license_file(tmp_path):
    path = tmp_path / "LICENSE"
    path.write_text("some licence text\n")
    return path


def test_run_ls_with_examples_directory(examples_dir):
    result = run_ls(None, FileInfo.from_path(examples_dir))
    _check_ls_line(result, TYPE_DIRECTORY, "examples")


def test_run_ls_with_license_file(license_file):
    result = run_ls(None, FileInfo.from_path(license_file))
    _check_ls_line(result, TYPE_FILE, "LICENSE")


def test_run_ls_with_examples_directory_with_os_lookup(examples_dir):
    result = run_ls(OSIDLookup(), FileInfo.from_path(examples_dir))
    _check_ls_line(result, TYPE_DIRECTORY, "examples")


def test_run_ls_with_license_file_with_os_lookup(license_file):
    result = run_ls(OSIDLookup(), FileInfo.from_path(license_file))
    _check_ls_line(result, TYPE_FILE, "LICENSE")


def test_from_path_describes_file(license_file):
    info = FileInfo.from_path(license_file)
    assert info.name == "LICENSE"
    assert info.size == len("some licence text\n")
    assert info.mode.is_regular()
    assert info.nlink >= 1


def test_from_path_describes_directory(examples_dir):
    info = FileInfo.from_path(examples_dir)
    assert info.name == "examples"
    assert info.mode.is_dir()


def test_run_ls_old_file_shows_year():
    entry = FileInfo(
        name="t-filexfer",
        size=348911,
        mode=FileMode(0o100755),
        mod_time=datetime(2000, 3, 25, 14, 29),
        uid=501,
        gid=20,
        nlink=1,
    )
    expected = (
        "-rwxr-xr-x" + "    1" + " 501     " + " 20      "
        + "   348911" + " Mar 25" + "  2000" + " t-filexfer"
    )
    assert run_ls(None, entry) == expected


def test_run_ls_recent_file_shows_time():
    mtime = datetime.now() - timedelta(days=1)
    entry = FileInfo(name="recent", size=5, mode=FileMode(0o100644), mod_time=mtime)
    result = run_ls(None, entry)
    assert result.startswith("-rw-r--r--")
    assert result.endswith(f" {mtime.hour:02d}:{mtime.minute:02d} recent")


def test_run_ls_long_ago_file_shows_its_year():
    mtime = datetime.now() - timedelta(days=400)
    entry = FileInfo(name="old", mode=FileMode(0o40755), mod_time=mtime)
    result = run_ls(None, entry)
    assert result.startswith("drwxr-xr-x")
    assert result.endswith(f" {mtime.year} old")


class _FixedLookup:
    def lookup_user_name(self, uid):
        return f"user{uid}"

    def lookup_group_name(self, gid):
        return f"group{gid}"


def test_run_ls_uses_lookup_names():
    entry = FileInfo(name="f", mode=FileMode(0o100600), uid=7, gid=9)
    fields = run_ls(_FixedLookup(), entry).split()
    assert fields[2] == "user7"
    assert fields[3] == "group9"


def test_run_ls_without_lookup_uses_numbers():
    entry = FileInfo(name="f", mode=FileMode(0o100600), uid=7, gid=9, nlink=3)
    fields = run_ls(None, entry).split()
    assert fields[1:4] == ["3", "7", "9"]


def test_os_lookup_returns_unknown_ids_unchanged():
    lookup = OSIDLookup()
    assert lookup.lookup_user_name("not-a-uid") == "not-a-uid"
    assert lookup.lookup_group_name("not-a-gid") == "not-a-gid"