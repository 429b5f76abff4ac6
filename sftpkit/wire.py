"""Primitive wire encoding for SFTP packets: types, buffers and attributes."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO

from sftpkit.permissions import FileMode

DEFAULT_MAX_PACKET_LENGTH = 34000

ATTR_SIZE = 0x00000001
ATTR_UIDGID = 0x00000002
ATTR_PERMISSIONS = 0x00000004
ATTR_ACMODTIME = 0x00000008
ATTR_EXTENDED = 0x80000000

_STRING_ENCODING = "utf-8"
_STRING_ERRORS = "surrogateescape"


class ShortPacketError(ValueError):
    """Raised when a packet holds fewer bytes than its encoding requires."""


class LongPacketError(ValueError):
    """Raised when a packet is longer than the allowed maximum."""


def _unknown_member(cls, value, limit):
    if not isinstance(value, int) or not 0 <= value <= limit:
        return None
    member = int.__new__(cls, value)
    member._name_ = f"UNKNOWN_{value}"
    member._value_ = value
    return member


class PacketType(IntEnum):
    """SSH_FXP_* packet type codes."""

    INIT = 1
    VERSION = 2
    OPEN = 3
    CLOSE = 4
    READ = 5
    WRITE = 6
    LSTAT = 7
    FSTAT = 8
    SETSTAT = 9
    FSETSTAT = 10
    OPENDIR = 11
    READDIR = 12
    REMOVE = 13
    MKDIR = 14
    RMDIR = 15
    REALPATH = 16
    STAT = 17
    RENAME = 18
    READLINK = 19
    SYMLINK = 20
    STATUS = 101
    HANDLE = 102
    DATA = 103
    NAME = 104
    ATTRS = 105
    EXTENDED = 200
    EXTENDED_REPLY = 201

    @classmethod
    def _missing_(cls, value):
        return _unknown_member(cls, value, 0xFF)

    def __str__(self) -> str:
        if self._name_ in type(self).__members__:
            return f"SSH_FXP_{self._name_}"
        return f"SSH_FXP_UNKNOWN({int(self)})"


class Status(IntEnum):
    """SSH_FX_* status codes."""

    OK = 0
    EOF = 1
    NO_SUCH_FILE = 2
    PERMISSION_DENIED = 3
    FAILURE = 4
    BAD_MESSAGE = 5
    NO_CONNECTION = 6
    CONNECTION_LOST = 7
    OP_UNSUPPORTED = 8

    @classmethod
    def _missing_(cls, value):
        return _unknown_member(cls, value, 0xFFFFFFFF)

    def __str__(self) -> str:
        if self._name_ in type(self).__members__:
            return f"SSH_FX_{self._name_}"
        return f"SSH_FX_UNKNOWN({int(self)})"


class Buffer:
    """A byte buffer that appends at its end and consumes from its front."""

    __slots__ = ("_data", "_offset")

    def __init__(self, data: bytes | bytearray = b"") -> None:
        self._data = bytearray(data)
        self._offset = 0

    def __len__(self) -> int:
        return len(self._data) - self._offset

    def __repr__(self) -> str:
        return f"Buffer({self.bytes()!r})"

    def bytes(self) -> bytes:
        """Return the bytes not yet consumed."""
        return bytes(self._data[self._offset:])

    def _take(self, count: int) -> bytes:
        if len(self) < count:
            raise ShortPacketError(f"need {count} bytes, only {len(self)} remain")
        start = self._offset
        self._offset += count
        return bytes(self._data[start:self._offset])

    def consume_uint8(self) -> int:
        return self._take(1)[0]

    def consume_uint32(self) -> int:
        return struct.unpack(">I", self._take(4))[0]

    def consume_uint64(self) -> int:
        return struct.unpack(">Q", self._take(8))[0]

    def consume_bytes(self) -> bytes:
        """Consume a uint32 length-prefixed byte string."""
        start = self._offset
        try:
            return self._take(self.consume_uint32())
        except ShortPacketError:
            self._offset = start
            raise

    def consume_string(self) -> str:
        """Consume a length-prefixed string; undecodable bytes are preserved."""
        return self.consume_bytes().decode(_STRING_ENCODING, _STRING_ERRORS)

    def consume_count(self) -> int:
        """Consume a uint32 element count."""
        return self.consume_uint32()

    def append_uint8(self, value: int) -> None:
        self._data += int(value).to_bytes(1, "big")

    def append_uint32(self, value: int) -> None:
        self._data += int(value).to_bytes(4, "big")

    def append_uint64(self, value: int) -> None:
        self._data += int(value).to_bytes(8, "big")

    def append_bytes(self, value: bytes) -> None:
        """Append a uint32 length-prefixed byte string."""
        self.append_uint32(len(value))
        self._data += value

    def append_string(self, value: str) -> None:
        self.append_bytes(value.encode(_STRING_ENCODING, _STRING_ERRORS))

    def start_packet(self, packet_type: int, request_id: int) -> None:
        """Reset the buffer to a packet header with a placeholder length."""
        self._data = bytearray(4)
        self._offset = 0
        self.append_uint8(int(packet_type))
        self.append_uint32(request_id)

    def packet(self, payload: bytes = b"") -> tuple[bytes, bytes]:
        """Fill in the length and return the (header, payload) pair."""
        if len(self._data) < 9:
            raise ValueError("packet was not started")
        length = len(self._data) - 4 + len(payload)
        self._data[:4] = length.to_bytes(4, "big")
        return self.bytes(), bytes(payload)


@dataclass
class ExtensionPair:
    """A name/data pair as exchanged in INIT and VERSION packets."""

    name: str = ""
    data: str = ""

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_string(self.name)
        buf.append_string(self.data)

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> ExtensionPair:
        name = buf.consume_string()
        return cls(name=name, data=buf.consume_string())


@dataclass
class Attributes:
    """File attributes (ATTRS); only fields named in `flags` are encoded."""

    flags: int = 0
    size: int = 0
    uid: int = 0
    gid: int = 0
    permissions: FileMode = field(default_factory=FileMode)
    atime: int = 0
    mtime: int = 0
    extended_attributes: list[ExtensionPair] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.permissions = FileMode(self.permissions)

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_uint32(self.flags)
        if self.flags & ATTR_SIZE:
            buf.append_uint64(self.size)
        if self.flags & ATTR_UIDGID:
            buf.append_uint32(self.uid)
            buf.append_uint32(self.gid)
        if self.flags & ATTR_PERMISSIONS:
            buf.append_uint32(self.permissions)
        if self.flags & ATTR_ACMODTIME:
            buf.append_uint32(self.atime)
            buf.append_uint32(self.mtime)
        if self.flags & ATTR_EXTENDED:
            buf.append_uint32(len(self.extended_attributes))
            for attribute in self.extended_attributes:
                attribute.marshal_into(buf)

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> Attributes:
        attrs = cls(flags=buf.consume_uint32())
        if attrs.flags & ATTR_SIZE:
            attrs.size = buf.consume_uint64()
        if attrs.flags & ATTR_UIDGID:
            attrs.uid = buf.consume_uint32()
            attrs.gid = buf.consume_uint32()
        if attrs.flags & ATTR_PERMISSIONS:
            attrs.permissions = FileMode(buf.consume_uint32())
        if attrs.flags & ATTR_ACMODTIME:
            attrs.atime = buf.consume_uint32()
            attrs.mtime = buf.consume_uint32()
        if attrs.flags & ATTR_EXTENDED:
            count = buf.consume_count()
            attrs.extended_attributes = [
                ExtensionPair.unmarshal_from(buf) for _ in range(count)
            ]
        return attrs


def compose_packet(header: bytes, payload: bytes) -> bytes:
    """Join a marshalled header and payload into one contiguous packet."""
    return bytes(header) + bytes(payload)


def _read_exactly(stream: BinaryIO, count: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < count:
        chunk = stream.read(count - len(chunks))
        if not chunk:
            raise EOFError(f"stream ended after {len(chunks)} of {count} bytes")
        chunks += chunk
    return bytes(chunks)


def read_packet(
    stream: BinaryIO, max_packet_length: int = DEFAULT_MAX_PACKET_LENGTH
) -> bytes:
    """Read one uint32 length-prefixed packet and return its body.

    The body is not read when its declared length exceeds `max_packet_length`.
    """
    length = int.from_bytes(_read_exactly(stream, 4), "big")
    if length < 5:
        raise ShortPacketError(f"packet length {length} is below the minimum")
    if length > max_packet_length:
        raise LongPacketError(
            f"packet length {length} exceeds the maximum {max_packet_length}"
        )
    return _read_exactly(stream, length)