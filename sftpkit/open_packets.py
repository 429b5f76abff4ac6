"""Request packets that open files and directories."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import ClassVar

from sftpkit.wire import Attributes, Buffer, PacketType


class OpenFlag(IntFlag):
    """SSH_FXF_* flags for opening a file."""

    READ = 1 << 0
    WRITE = 1 << 1
    APPEND = 1 << 2
    CREATE = 1 << 3
    TRUNCATE = 1 << 4
    EXCLUSIVE = 1 << 5


@dataclass
class OpenPacket:
    """The SSH_FXP_OPEN packet."""

    filename: str = ""
    pflags: int = 0
    attrs: Attributes = field(default_factory=Attributes)

    packet_type: ClassVar[PacketType] = PacketType.OPEN

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = Buffer()
        buf.start_packet(self.packet_type, request_id)
        buf.append_string(self.filename)
        buf.append_uint32(int(self.pflags))
        self.attrs.marshal_into(buf)
        return buf.packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> OpenPacket:
        """Decode the body that follows the request id."""
        filename = buf.consume_string()
        pflags = OpenFlag(buf.consume_uint32())
        return cls(
            filename=filename, pflags=pflags, attrs=Attributes.unmarshal_from(buf)
        )


@dataclass
class OpenDirPacket:
    """The SSH_FXP_OPENDIR packet."""

    path: str = ""

    packet_type: ClassVar[PacketType] = PacketType.OPENDIR

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = Buffer()
        buf.start_packet(self.packet_type, request_id)
        buf.append_string(self.path)
        return buf.packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> OpenDirPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())