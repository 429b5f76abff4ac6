"""Request packets that operate on an open file or directory handle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from sftpkit.wire import Attributes, Buffer, PacketType


def _start(packet_type: PacketType, request_id: int, handle: str) -> Buffer:
    buf = Buffer()
    buf.start_packet(packet_type, request_id)
    buf.append_string(handle)
    return buf


@dataclass
class ClosePacket:
    """The SSH_FXP_CLOSE packet."""

    handle: str = ""

    packet_type: ClassVar[PacketType] = PacketType.CLOSE

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _start(self.packet_type, request_id, self.handle).packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> ClosePacket:
        """Decode the body that follows the request id."""
        return cls(handle=buf.consume_string())


@dataclass
class ReadPacket:
    """The SSH_FXP_READ packet."""

    handle: str = ""
    offset: int = 0
    length: int = 0

    packet_type: ClassVar[PacketType] = PacketType.READ

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = _start(self.packet_type, request_id, self.handle)
        buf.append_uint64(self.offset)
        buf.append_uint32(self.length)
        return buf.packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> ReadPacket:
        """Decode the body that follows the request id."""
        handle = buf.consume_string()
        offset = buf.consume_uint64()
        return cls(handle=handle, offset=offset, length=buf.consume_uint32())


@dataclass
class WritePacket:
    """The SSH_FXP_WRITE packet; the data travels as the payload."""

    handle: str = ""
    offset: int = 0
    data: bytes = b""

    packet_type: ClassVar[PacketType] = PacketType.WRITE

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = _start(self.packet_type, request_id, self.handle)
        buf.append_uint64(self.offset)
        buf.append_uint32(len(self.data))
        return buf.packet(self.data)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> WritePacket:
        """Decode the body that follows the request id."""
        handle = buf.consume_string()
        offset = buf.consume_uint64()
        return cls(handle=handle, offset=offset, data=buf.consume_bytes())


@dataclass
class FStatPacket:
    """The SSH_FXP_FSTAT packet."""

    handle: str = ""

    packet_type: ClassVar[PacketType] = PacketType.FSTAT

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _start(self.packet_type, request_id, self.handle).packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> FStatPacket:
        """Decode the body that follows the request id."""
        return cls(handle=buf.consume_string())


@dataclass
class FSetstatPacket:
    """The SSH_FXP_FSETSTAT packet."""

    handle: str = ""
    attrs: Attributes = field(default_factory=Attributes)

    packet_type: ClassVar[PacketType] = PacketType.FSETSTAT

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = _start(self.packet_type, request_id, self.handle)
        self.attrs.marshal_into(buf)
        return buf.packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> FSetstatPacket:
        """Decode the body that follows the request id."""
        handle = buf.consume_string()
        return cls(handle=handle, attrs=Attributes.unmarshal_from(buf))


@dataclass
class ReadDirPacket:
    """The SSH_FXP_READDIR packet."""

    handle: str = ""

    packet_type: ClassVar[PacketType] = PacketType.READDIR

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        return _start(self.packet_type, request_id, self.handle).packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> ReadDirPacket:
        """Decode the body that follows the request id."""
        return cls(handle=buf.consume_string())