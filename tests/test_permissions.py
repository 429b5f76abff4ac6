import pytest

from sftpkit.permissions import (
    MODE_CHAR_DEVICE,
    MODE_DEVICE,
    MODE_DIR,
    MODE_NAMED_PIPE,
    MODE_PERM,
    MODE_REGULAR,
    MODE_SETGID,
    MODE_SETUID,
    MODE_SOCKET,
    MODE_STICKY,
    MODE_SYMLINK,
    MODE_TYPE,
    FileMode,
)


def test_regular_all_permissions():
    assert str(FileMode(MODE_REGULAR | 0o777)) == "-rwxrwxrwx"


def test_directory_string():
    assert str(FileMode(MODE_DIR | 0o755)) == "drwxr-xr-x"


def test_char_device_string():
    assert str(FileMode(MODE_CHAR_DEVICE | 0o666)) == "crw-rw-rw-"


@pytest.mark.parametrize(
    "type_bits, char",
    [
        (MODE_REGULAR, "-"),
        (MODE_DIR, "d"),
        (MODE_SYMLINK, "l"),
        (MODE_DEVICE, "b"),
        (MODE_CHAR_DEVICE, "c"),
        (MODE_NAMED_PIPE, "p"),
        (MODE_SOCKET, "s"),
        (FileMode(0), "?"),
    ],
)
def test_type_character(type_bits, char):
    assert str(FileMode(type_bits | 0o644))[0] == char


def test_special_bits_with_exec():
    text = str(FileMode(MODE_REGULAR | MODE_SETUID | MODE_SETGID | MODE_STICKY | 0o777))
    assert text[3] == "s"
    assert text[6] == "s"
    assert text[9] == "t"


def test_special_bits_without_exec():
    text = str(FileMode(MODE_REGULAR | MODE_SETUID | MODE_SETGID | MODE_STICKY))
    assert text[3] == "S"
    assert text[6] == "S"
    assert text[9] == "T"


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "?---------"),
        (0o100644, "-rw-r--r--"),
        (0o40755, "drwxr-xr-x"),
        (0o127777, "lrwsrwsrwt"),
        (0x87654321, "dr--r----t"),
        (0xFFFFFFFF, "?rwsrwsrwt"),
    ],
)
def test_string_values(value, expected):
    assert str(FileMode(value)) == expected


def test_is_dir_and_is_regular():
    directory = FileMode(MODE_DIR | 0o700)
    regular = FileMode(MODE_REGULAR | 0o600)
    assert directory.is_dir() and not directory.is_regular()
    assert regular.is_regular() and not regular.is_dir()
    assert not FileMode(MODE_SYMLINK | 0o777).is_dir()


def test_perm_and_type_split():
    mode = FileMode(MODE_DIR | MODE_STICKY | 0o640)
    assert mode.perm() == 0o640
    assert mode.type() == MODE_DIR
    assert mode.perm() | mode.type() | MODE_STICKY == mode
    assert mode.perm() & ~MODE_PERM == 0
    assert mode.type() & ~MODE_TYPE == 0


def test_perm_returns_file_mode():
    perm = FileMode(MODE_REGULAR | 0o755).perm()
    assert str(perm)[1:] == str(FileMode(MODE_REGULAR | 0o755))[1:]


@pytest.mark.parametrize("value", [-1, 1 << 32])
def test_out_of_range(value):
    with pytest.raises(ValueError):
        FileMode(value)


def test_compares_and_hashes_as_int():
    assert FileMode(0x4000) == 0x4000
    assert {0x4000: "dir"}[FileMode(0x4000)] == "dir"