"""`ls -l` style long names for the entries of a directory listing."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Protocol

from sftpkit.permissions import FileMode

try:
    import grp
    import pwd
except ImportError:  # platforms without a user database
    grp = None
    pwd = None

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class IDLookup(Protocol):
    """Something that turns numeric user and group ids into names."""

    def lookup_user_name(self, uid: str) -> str: ...

    def lookup_group_name(self, gid: str) -> str: ...


@dataclass
class FileInfo:
    """What a listing needs to know about one directory entry."""

    name: str
    size: int = 0
    mode: FileMode = field(default_factory=FileMode)
    mod_time: datetime = field(default_factory=datetime.now)
    uid: int = 0
    gid: int = 0
    nlink: int = 1

    def __post_init__(self) -> None:
        self.mode = FileMode(self.mode)

    @classmethod
    def from_path(cls, path: str | os.PathLike) -> FileInfo:
        """Describe the file at path, following symbolic links."""
        result = os.stat(path)
        nlink, uid, gid = _links_uid_gid(result)
        return cls(
            name=os.path.basename(os.path.normpath(os.fspath(path))),
            size=result.st_size,
            mode=FileMode(result.st_mode & 0xFFFFFFFF),
            mod_time=datetime.fromtimestamp(result.st_mtime),
            uid=uid,
            gid=gid,
            nlink=nlink,
        )


def _links_uid_gid(result: os.stat_result) -> tuple[int, int, int]:
    if os.name == "nt":
        return 1, 0, 0
    return result.st_nlink, result.st_uid, result.st_gid


class OSIDLookup:
    """Looks ids up in the local user and group databases."""

    def lookup_user_name(self, uid: str) -> str:
        """Return the user name for uid, or uid itself when it is unknown."""
        if pwd is None:
            return uid
        try:
            return pwd.getpwuid(int(uid)).pw_name
        except (KeyError, ValueError, OverflowError):
            return uid

    def lookup_group_name(self, gid: str) -> str:
        """Return the group name for gid, or gid itself when it is unknown."""
        if grp is None:
            return gid
        try:
            return grp.getgrgid(int(gid)).gr_name
        except (KeyError, ValueError, OverflowError):
            return gid


def _six_months_before(moment: datetime) -> datetime:
    year, month_index = divmod(moment.year * 12 + moment.month - 1 - 6, 12)
    first = moment.replace(year=year, month=month_index + 1, day=1)
    return first + timedelta(days=moment.day - 1)


def run_ls(id_lookup: Optional[IDLookup], entry: FileInfo) -> str:
    """Format entry as an `ls -l` line, as used for the longname of a NAME entry."""
    uid, gid = str(entry.uid), str(entry.gid)
    if id_lookup is not None:
        uid = id_lookup.lookup_user_name(uid)
        gid = id_lookup.lookup_group_name(gid)

    mtime = entry.mod_time
    date_text = f"{_MONTHS[mtime.month - 1]} {mtime.day}"
    if mtime < _six_months_before(datetime.now(mtime.tzinfo)):
        year_or_time = f"{mtime.year:04d}"
    else:
        year_or_time = f"{mtime.hour:02d}:{mtime.minute:02d}"

    return (
        f"{str(entry.mode)} {entry.nlink:4d} {uid:<8} {gid:<8} {entry.size:8d} "
        f"{date_text} {year_or_time:>5} {entry.name}"
    )