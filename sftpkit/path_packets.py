"""Request packets that name a file system path."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from sftpkit.wire import Attributes, Buffer, PacketType


def _marshal_strings(
    packet_type: PacketType, request_id: int, *values: str
) -> tuple[bytes, bytes]:
    buf = Buffer()
    buf.start_packet(packet_type, request_id)
    for value in values:
        buf.append_string(value)
    return buf.packet()


def _marshal_with_attrs(
    packet_type: PacketType, request_id: int, path: str, attrs: Attributes
) -> tuple[bytes, bytes]:
    buf = Buffer()
    buf.start_packet(packet_type, request_id)
    buf.append_string(path)
    attrs.marshal_into(buf)
    return buf.packet()


@dataclass
class LStatPacket:
    """The SSH_FXP_LSTAT packet."""

    path: str = ""

    packet_type: ClassVar[PacketType] = PacketType.LSTAT

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_strings(self.packet_type, request_id, self.path)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> LStatPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class SetstatPacket:
    """The SSH_FXP_SETSTAT packet."""

    path: str = ""
    attrs: Attributes = field(default_factory=Attributes)

    packet_type: ClassVar[PacketType] = PacketType.SETSTAT

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_with_attrs(self.packet_type, request_id, self.path, self.attrs)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> SetstatPacket:
        """Decode the body that follows the request id."""
        path = buf.consume_string()
        return cls(path=path, attrs=Attributes.unmarshal_from(buf))


@dataclass
class RemovePacket:
    """The SSH_FXP_REMOVE packet."""

    path: str = ""

    packet_type: ClassVar[PacketType] = PacketType.REMOVE

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_strings(self.packet_type, request_id, self.path)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> RemovePacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class MkdirPacket:
    """The SSH_FXP_MKDIR packet."""

    path: str = ""
    attrs: Attributes = field(default_factory=Attributes)

    packet_type: ClassVar[PacketType] = PacketType.MKDIR

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_with_attrs(self.packet_type, request_id, self.path, self.attrs)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> MkdirPacket:
        """Decode the body that follows the request id."""
        path = buf.consume_string()
        return cls(path=path, attrs=Attributes.unmarshal_from(buf))


@dataclass
class RmdirPacket:
    """The SSH_FXP_RMDIR packet."""

    path: str = ""

    packet_type: ClassVar[PacketType] = PacketType.RMDIR

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_strings(self.packet_type, request_id, self.path)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> RmdirPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class RealPathPacket:
    """The SSH_FXP_REALPATH packet."""

    path: str = ""

    packet_type: ClassVar[PacketType] = PacketType.REALPATH

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_strings(self.packet_type, request_id, self.path)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> RealPathPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class StatPacket:
    """The SSH_FXP_STAT packet."""

    path: str = ""

    packet_type: ClassVar[PacketType] = PacketType.STAT

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_strings(self.packet_type, request_id, self.path)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> StatPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class RenamePacket:
    """The SSH_FXP_RENAME packet."""

    old_path: str = ""
    new_path: str = ""

    packet_type: ClassVar[PacketType] = PacketType.RENAME

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_strings(
            self.packet_type, request_id, self.old_path, self.new_path
        )

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> RenamePacket:
        """Decode the body that follows the request id."""
        old_path = buf.consume_string()
        return cls(old_path=old_path, new_path=buf.consume_string())


@dataclass
class ReadLinkPacket:
    """The SSH_FXP_READLINK packet."""

    path: str = ""

    packet_type: ClassVar[PacketType] = PacketType.READLINK

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_strings(self.packet_type, request_id, self.path)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> ReadLinkPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class SymlinkPacket:
    """The SSH_FXP_SYMLINK packet.

    On the wire the target path comes before the link path, following the
    order that widely deployed servers use.
    """

    link_path: str = ""
    target_path: str = ""

    packet_type: ClassVar[PacketType] = PacketType.SYMLINK

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _marshal_strings(
            self.packet_type, request_id, self.target_path, self.link_path
        )

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> SymlinkPacket:
        """Decode the body that follows the request id."""
        target_path = buf.consume_string()
        return cls(link_path=buf.consume_string(), target_path=target_path)