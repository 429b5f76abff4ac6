"""File mode and permission bits as carried in SFTP attributes."""

from __future__ import annotations


class FileMode(int):
    """A POSIX file mode: file type bits plus permission bits (uint32)."""

    __slots__ = ()

    def __new__(cls, value: int = 0) -> FileMode:
        if not 0 <= int(value) <= 0xFFFFFFFF:
            raise ValueError(f"file mode out of uint32 range: {value!r}")
        return super().__new__(cls, value)

    def is_dir(self) -> bool:
        """Report whether the mode describes a directory."""
        return self.type() == MODE_DIR

    def is_regular(self) -> bool:
        """Report whether the mode describes a regular file."""
        return self.type() == MODE_REGULAR

    def perm(self) -> FileMode:
        """Return only the POSIX permission bits."""
        return FileMode(self & MODE_PERM)

    def type(self) -> FileMode:
        """Return only the file type bits."""
        return FileMode(self & MODE_TYPE)

    def __repr__(self) -> str:
        return f"FileMode({oct(int(self))})"

    def __str__(self) -> str:
        """Render the mode as an `ls -l` style string such as `-rwxr-xr-x`."""
        chars = [_TYPE_CHARS.get(int(self.type()), "?")]
        chars.extend(
            char if self & (1 << (8 - position)) else "-"
            for position, char in enumerate("rwxrwxrwx")
        )
        for bit, index, when_exec, when_not_exec in _SPECIAL_BITS:
            if self & bit:
                chars[index] = when_exec if chars[index] == "x" else when_not_exec
        return "".join(chars)


MODE_PERM = FileMode(0o0777)
MODE_USER_READ = FileMode(0o0400)
MODE_USER_WRITE = FileMode(0o0200)
MODE_USER_EXEC = FileMode(0o0100)
MODE_GROUP_READ = FileMode(0o0040)
MODE_GROUP_WRITE = FileMode(0o0020)
MODE_GROUP_EXEC = FileMode(0o0010)
MODE_OTHER_READ = FileMode(0o0004)
MODE_OTHER_WRITE = FileMode(0o0002)
MODE_OTHER_EXEC = FileMode(0o0001)

MODE_SETUID = FileMode(0o4000)
MODE_SETGID = FileMode(0o2000)
MODE_STICKY = FileMode(0o1000)

MODE_TYPE = FileMode(0xF000)
MODE_NAMED_PIPE = FileMode(0x1000)
MODE_CHAR_DEVICE = FileMode(0x2000)
MODE_DIR = FileMode(0x4000)
MODE_DEVICE = FileMode(0x6000)
MODE_REGULAR = FileMode(0x8000)
MODE_SYMLINK = FileMode(0xA000)
MODE_SOCKET = FileMode(0xC000)

_TYPE_CHARS = {
    int(MODE_REGULAR): "-",
    int(MODE_DIR): "d",
    int(MODE_SYMLINK): "l",
    int(MODE_DEVICE): "b",
    int(MODE_CHAR_DEVICE): "c",
    int(MODE_NAMED_PIPE): "p",
    int(MODE_SOCKET): "s",
}

_SPECIAL_BITS = (
    (MODE_SETUID, 3, "s", "S"),
    (MODE_SETGID, 6, "s", "S"),
    (MODE_STICKY, 9, "t", "T"),
)