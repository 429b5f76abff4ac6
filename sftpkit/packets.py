"""General packet framing: raw packets and automatically decoded requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, BinaryIO

from sftpkit.handle_packets import (
    ClosePacket,
    FSetstatPacket,
    FStatPacket,
    ReadDirPacket,
    ReadPacket,
    WritePacket,
)
from sftpkit.open_packets import OpenDirPacket, OpenPacket
from sftpkit.path_packets import (
    LStatPacket,
    MkdirPacket,
    ReadLinkPacket,
    RealPathPacket,
    RemovePacket,
    RenamePacket,
    RmdirPacket,
    SetstatPacket,
    StatPacket,
    SymlinkPacket,
)
from sftpkit.wire import (
    DEFAULT_MAX_PACKET_LENGTH,
    Buffer,
    PacketType,
    compose_packet,
    read_packet,
)

_REQUEST_CLASSES = {
    PacketType.OPEN: OpenPacket,
    PacketType.CLOSE: ClosePacket,
    PacketType.READ: ReadPacket,
    PacketType.WRITE: WritePacket,
    PacketType.LSTAT: LStatPacket,
    PacketType.FSTAT: FStatPacket,
    PacketType.SETSTAT: SetstatPacket,
    PacketType.FSETSTAT: FSetstatPacket,
    PacketType.OPENDIR: OpenDirPacket,
    PacketType.READDIR: ReadDirPacket,
    PacketType.REMOVE: RemovePacket,
    PacketType.MKDIR: MkdirPacket,
    PacketType.RMDIR: RmdirPacket,
    PacketType.REALPATH: RealPathPacket,
    PacketType.STAT: StatPacket,
    PacketType.RENAME: RenamePacket,
    PacketType.READLINK: ReadLinkPacket,
    PacketType.SYMLINK: SymlinkPacket,
}


def new_packet_from_type(packet_type: int) -> type:
    """Return the packet class that decodes requests of the given type."""
    packet_type = PacketType(packet_type)
    if packet_type == PacketType.EXTENDED:
        from sftpkit.openssh import ExtendedPacket

        return ExtendedPacket
    try:
        return _REQUEST_CLASSES[packet_type]
    except KeyError:
        raise ValueError(f"unexpected request packet type: {packet_type}") from None


@dataclass
class RawPacket:
    """A packet whose body is left undecoded, as a client receives responses."""

    packet_type: PacketType = PacketType.INIT
    request_id: int = 0
    data: Buffer = field(default_factory=Buffer)

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair under request_id."""
        buf = Buffer()
        buf.start_packet(self.packet_type, request_id)
        return buf.packet(self.data.bytes())

    def marshal_binary(self) -> bytes:
        """Return the whole packet, length prefix included."""
        return compose_packet(*self.marshal_packet(self.request_id))

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> RawPacket:
        """Decode type and request id; the rest of buf becomes the data."""
        packet_type = PacketType(buf.consume_uint8())
        request_id = buf.consume_uint32()
        return cls(
            packet_type=packet_type, request_id=request_id, data=Buffer(buf.bytes())
        )

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> RawPacket:
        """Decode a packet whose length prefix was already consumed."""
        return cls.unmarshal_from(Buffer(data))

    @classmethod
    def read_from(
        cls, stream: BinaryIO, max_packet_length: int = DEFAULT_MAX_PACKET_LENGTH
    ) -> RawPacket:
        """Read and decode one length-prefixed packet from stream."""
        return cls.unmarshal_from(Buffer(read_packet(stream, max_packet_length)))


@dataclass
class RequestPacket:
    """A packet whose body is decoded into the matching request packet."""

    request_id: int = 0
    request: Any = None

    @property
    def packet_type(self) -> PacketType:
        """The SSH_FXP_* type of the wrapped request."""
        return self.request.packet_type

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the wrapped request as a (header, payload) pair."""
        if self.request is None:
            raise ValueError("empty request packet")
        return self.request.marshal_packet(request_id)

    def marshal_binary(self) -> bytes:
        """Return the whole packet, length prefix included."""
        return compose_packet(*self.marshal_packet(self.request_id))

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> RequestPacket:
        """Decode the type, request id and body of a request packet."""
        packet_class = new_packet_from_type(buf.consume_uint8())
        request_id = buf.consume_uint32()
        return cls(
            request_id=request_id, request=packet_class.unmarshal_packet_body(buf)
        )

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> RequestPacket:
        """Decode a packet whose length prefix was already consumed."""
        return cls.unmarshal_from(Buffer(data))

    @classmethod
    def read_from(
        cls, stream: BinaryIO, max_packet_length: int = DEFAULT_MAX_PACKET_LENGTH
    ) -> RequestPacket:
        """Read and decode one length-prefixed request packet from stream."""
        return cls.unmarshal_from(Buffer(read_packet(stream, max_packet_length)))