"""Response packets a server sends back to a client."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import ClassVar

from sftpkit.wire import Attributes, Buffer, PacketType, Status


def _start(packet_type: PacketType, request_id: int) -> Buffer:
    buf = Buffer()
    buf.start_packet(packet_type, request_id)
    return buf


@dataclass(eq=False)
class StatusPacket(Exception):
    """The SSH_FXP_STATUS packet; it can also be raised as an error."""

    status_code: Status = Status.OK
    error_message: str = ""
    language_tag: str = ""

    packet_type: ClassVar[PacketType] = PacketType.STATUS

    def __post_init__(self) -> None:
        self.status_code = Status(self.status_code)
        super().__init__(self.status_code, self.error_message)

    def __str__(self) -> str:
        if not self.error_message:
            return f"sftp: {self.status_code}"
        quoted = json.dumps(self.error_message, ensure_ascii=False)
        return f"sftp: {self.status_code}: {quoted}"

    def matches(self, target: object) -> bool:
        """Report whether target is a status packet or code with the same code."""
        if isinstance(target, StatusPacket):
            return self.status_code == target.status_code
        return self.status_code == target

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = _start(self.packet_type, request_id)
        buf.append_uint32(int(self.status_code))
        buf.append_string(self.error_message)
        buf.append_string(self.language_tag)
        return buf.packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> StatusPacket:
        """Decode the body that follows the request id."""
        code = Status(buf.consume_uint32())
        message = buf.consume_string()
        return cls(
            status_code=code, error_message=message, language_tag=buf.consume_string()
        )


@dataclass
class HandlePacket:
    """The SSH_FXP_HANDLE packet."""

    handle: str = ""

    packet_type: ClassVar[PacketType] = PacketType.HANDLE

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = _start(self.packet_type, request_id)
        buf.append_string(self.handle)
        return buf.packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> HandlePacket:
        """Decode the body that follows the request id."""
        return cls(handle=buf.consume_string())


@dataclass
class DataPacket:
    """The SSH_FXP_DATA packet; the data travels as the payload."""

    data: bytes = b""

    packet_type: ClassVar[PacketType] = PacketType.DATA

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = _start(self.packet_type, request_id)
        buf.append_uint32(len(self.data))
        return buf.packet(self.data)

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> DataPacket:
        """Decode the body that follows the request id."""
        return cls(data=buf.consume_bytes())


@dataclass
class NameEntry:
    """One entry of an SSH_FXP_NAME packet."""

    filename: str = ""
    longname: str = ""
    attrs: Attributes = field(default_factory=Attributes)

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_string(self.filename)
        buf.append_string(self.longname)
        self.attrs.marshal_into(buf)

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> NameEntry:
        filename = buf.consume_string()
        longname = buf.consume_string()
        return cls(
            filename=filename, longname=longname, attrs=Attributes.unmarshal_from(buf)
        )


@dataclass
class NamePacket:
    """The SSH_FXP_NAME packet."""

    entries: list[NameEntry] = field(default_factory=list)

    packet_type: ClassVar[PacketType] = PacketType.NAME

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = _start(self.packet_type, request_id)
        buf.append_uint32(len(self.entries))
        for entry in self.entries:
            entry.marshal_into(buf)
        return buf.packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> NamePacket:
        """Decode the body that follows the request id."""
        count = buf.consume_count()
        return cls(entries=[NameEntry.unmarshal_from(buf) for _ in range(count)])


@dataclass
class AttrsPacket:
    """The SSH_FXP_ATTRS packet."""

    attrs: Attributes = field(default_factory=Attributes)

    packet_type: ClassVar[PacketType] = PacketType.ATTRS

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = _start(self.packet_type, request_id)
        self.attrs.marshal_into(buf)
        return buf.packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> AttrsPacket:
        """Decode the body that follows the request id."""
        return cls(attrs=Attributes.unmarshal_from(buf))