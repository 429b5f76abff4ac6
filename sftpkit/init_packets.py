"""The SSH_FXP_INIT and SSH_FXP_VERSION handshake packets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from sftpkit.wire import Buffer, ExtensionPair, PacketType


def _marshal_handshake(
    packet_type: PacketType, version: int, extensions: list[ExtensionPair]
) -> bytes:
    body = Buffer()
    body.append_uint8(int(packet_type))
    body.append_uint32(version)
    for extension in extensions:
        extension.marshal_into(body)
    data = body.bytes()
    return len(data).to_bytes(4, "big") + data


def _unmarshal_handshake(data: bytes) -> tuple[int, list[ExtensionPair]]:
    buf = Buffer(data)
    version = buf.consume_uint32()
    extensions = []
    while len(buf):
        extensions.append(ExtensionPair.unmarshal_from(buf))
    return version, extensions


@dataclass
class InitPacket:
    """The SSH_FXP_INIT packet a client sends first."""

    version: int = 0
    extensions: list[ExtensionPair] = field(default_factory=list)

    packet_type: ClassVar[PacketType] = PacketType.INIT

    def marshal_binary(self) -> bytes:
        """Return the whole packet, length prefix included."""
        return _marshal_handshake(self.packet_type, self.version, self.extensions)

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> InitPacket:
        """Decode a packet whose length and type bytes were already consumed."""
        version, extensions = _unmarshal_handshake(data)
        return cls(version=version, extensions=extensions)


@dataclass
class VersionPacket:
    """The SSH_FXP_VERSION packet a server answers with."""

    version: int = 0
    extensions: list[ExtensionPair] = field(default_factory=list)

    packet_type: ClassVar[PacketType] = PacketType.VERSION

    def marshal_binary(self) -> bytes:
        """Return the whole packet, length prefix included."""
        return _marshal_handshake(self.packet_type, self.version, self.extensions)

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> VersionPacket:
        """Decode a packet whose length and type bytes were already consumed."""
        version, extensions = _unmarshal_handshake(data)
        return cls(version=version, extensions=extensions)