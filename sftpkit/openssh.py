"""The SSH_FXP_EXTENDED packets and the OpenSSH protocol extensions."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, ClassVar

from sftpkit.wire import Buffer, ExtensionPair, PacketType

_VENDOR = "openssh.com"

EXTENSION_FSYNC = "fsync@" + _VENDOR
EXTENSION_HARDLINK = "hardlink@" + _VENDOR
EXTENSION_POSIX_RENAME = "posix-rename@" + _VENDOR
EXTENSION_STATVFS = "statvfs@" + _VENDOR
EXTENSION_FSTATVFS = "fstatvfs@" + _VENDOR

MOUNT_FLAGS_READ_ONLY = 0x1
MOUNT_FLAGS_NO_SUID = 0x2

_registry: dict[str, Callable[..., Any]] = {}


def register_extended_packet_type(name: str, factory: Callable[..., Any]) -> None:
    """Register a decoder for the extended request called name.

    The factory is a class whose unmarshal_from classmethod decodes the
    request-specific data of the extended packet.
    """
    _registry[name] = factory


@dataclass
class _RawExtendedData:
    """Undecoded data of an extended packet with no registered decoder."""

    data: bytes = b""

    def marshal_into(self, buf: Buffer) -> None:
        buf._data += self.data

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> _RawExtendedData:
        data = buf.bytes()
        buf._offset += len(data)
        return cls(data=data)


@dataclass
class ExtendedPacket:
    """The SSH_FXP_EXTENDED packet: a named request plus its specific data."""

    extended_request: str = ""
    data: Any = None

    packet_type: ClassVar[PacketType] = PacketType.EXTENDED

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = Buffer()
        buf.start_packet(self.packet_type, request_id)
        buf.append_string(self.extended_request)
        if self.data is not None:
            self.data.marshal_into(buf)
        return buf.packet()

    @classmethod
    def unmarshal_packet_body(cls, buf: Buffer) -> ExtendedPacket:
        """Decode the body that follows the request id.

        Data of unregistered extensions is kept undecoded.
        """
        name = buf.consume_string()
        decoder = _registry.get(name, _RawExtendedData)
        return cls(extended_request=name, data=decoder.unmarshal_from(buf))


@dataclass
class ExtendedReplyPacket:
    """The SSH_FXP_EXTENDED_REPLY packet."""

    data: Any = None

    packet_type: ClassVar[PacketType] = PacketType.EXTENDED_REPLY

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the packet as a (header, payload) pair."""
        buf = Buffer()
        buf.start_packet(self.packet_type, request_id)
        if self.data is not None:
            self.data.marshal_into(buf)
        return buf.packet()

    def unmarshal_packet_body(self, buf: Buffer) -> ExtendedReplyPacket:
        """Decode the body into the type of the data already held, then return self."""
        decoder = type(self.data) if self.data is not None else _RawExtendedData
        self.data = decoder.unmarshal_from(buf)
        return self


def _marshal_extended(name: str, data: Any, request_id: int) -> tuple[bytes, bytes]:
    return ExtendedPacket(extended_request=name, data=data).marshal_packet(request_id)


def _encode(data: Any) -> bytes:
    buf = Buffer()
    data.marshal_into(buf)
    return buf.bytes()


@dataclass
class FSyncExtendedPacket:
    """The fsync extended request."""

    handle: str = ""

    extension_name: ClassVar[str] = EXTENSION_FSYNC
    packet_type: ClassVar[PacketType] = PacketType.EXTENDED

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the full extended packet as a (header, payload) pair."""
        return _marshal_extended(self.extension_name, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_string(self.handle)

    def marshal_binary(self) -> bytes:
        """Encode only the extension-specific data."""
        return _encode(self)

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> FSyncExtendedPacket:
        return cls(handle=buf.consume_string())

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> FSyncExtendedPacket:
        """Decode the extension-specific data."""
        return cls.unmarshal_from(Buffer(data))


@dataclass
class HardlinkExtendedPacket:
    """The hardlink extended request."""

    old_path: str = ""
    new_path: str = ""

    extension_name: ClassVar[str] = EXTENSION_HARDLINK
    packet_type: ClassVar[PacketType] = PacketType.EXTENDED

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the full extended packet as a (header, payload) pair."""
        return _marshal_extended(self.extension_name, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_string(self.old_path)
        buf.append_string(self.new_path)

    def marshal_binary(self) -> bytes:
        """Encode only the extension-specific data."""
        return _encode(self)

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> HardlinkExtendedPacket:
        old_path = buf.consume_string()
        return cls(old_path=old_path, new_path=buf.consume_string())

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> HardlinkExtendedPacket:
        """Decode the extension-specific data."""
        return cls.unmarshal_from(Buffer(data))


@dataclass
class POSIXRenameExtendedPacket:
    """The posix-rename extended request."""

    old_path: str = ""
    new_path: str = ""

    extension_name: ClassVar[str] = EXTENSION_POSIX_RENAME
    packet_type: ClassVar[PacketType] = PacketType.EXTENDED

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the full extended packet as a (header, payload) pair."""
        return _marshal_extended(self.extension_name, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_string(self.old_path)
        buf.append_string(self.new_path)

    def marshal_binary(self) -> bytes:
        """Encode only the extension-specific data."""
        return _encode(self)

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> POSIXRenameExtendedPacket:
        old_path = buf.consume_string()
        return cls(old_path=old_path, new_path=buf.consume_string())

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> POSIXRenameExtendedPacket:
        """Decode the extension-specific data."""
        return cls.unmarshal_from(Buffer(data))


@dataclass
class StatVFSExtendedPacket:
    """The statvfs extended request."""

    path: str = ""

    extension_name: ClassVar[str] = EXTENSION_STATVFS
    packet_type: ClassVar[PacketType] = PacketType.EXTENDED

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the full extended packet as a (header, payload) pair."""
        return _marshal_extended(self.extension_name, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_string(self.path)

    def marshal_binary(self) -> bytes:
        """Encode only the extension-specific data."""
        return _encode(self)

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> StatVFSExtendedPacket:
        return cls(path=buf.consume_string())

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> StatVFSExtendedPacket:
        """Decode the extension-specific data."""
        return cls.unmarshal_from(Buffer(data))


@dataclass
class FStatVFSExtendedPacket:
    """The fstatvfs extended request."""

    path: str = ""

    extension_name: ClassVar[str] = EXTENSION_FSTATVFS
    packet_type: ClassVar[PacketType] = PacketType.EXTENDED

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the full extended packet as a (header, payload) pair."""
        return _marshal_extended(self.extension_name, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_string(self.path)

    def marshal_binary(self) -> bytes:
        """Encode only the extension-specific data."""
        return _encode(self)

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> FStatVFSExtendedPacket:
        return cls(path=buf.consume_string())

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> FStatVFSExtendedPacket:
        """Decode the extension-specific data."""
        return cls.unmarshal_from(Buffer(data))


@dataclass
class StatVFSExtendedReplyPacket:
    """The reply to statvfs and fstatvfs requests: eleven uint64 values."""

    block_size: int = 0
    fragment_size: int = 0
    blocks: int = 0
    blocks_free: int = 0
    blocks_avail: int = 0
    files: int = 0
    files_free: int = 0
    files_avail: int = 0
    filesystem_id: int = 0
    mount_flags: int = 0
    max_name_length: int = 0

    packet_type: ClassVar[PacketType] = PacketType.EXTENDED_REPLY

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Return the full extended reply packet as a (header, payload) pair."""
        return ExtendedReplyPacket(data=self).marshal_packet(request_id)

    def unmarshal_packet_body(self, buf: Buffer) -> StatVFSExtendedReplyPacket:
        """Decode the reply body into self and return self."""
        decoded = ExtendedReplyPacket(data=self).unmarshal_packet_body(buf).data
        for item in fields(self):
            setattr(self, item.name, getattr(decoded, item.name))
        return self

    def marshal_into(self, buf: Buffer) -> None:
        for item in fields(self):
            buf.append_uint64(getattr(self, item.name))

    def marshal_binary(self) -> bytes:
        """Encode only the reply-specific data."""
        return _encode(self)

    @classmethod
    def unmarshal_from(cls, buf: Buffer) -> StatVFSExtendedReplyPacket:
        return cls(*(buf.consume_uint64() for _ in fields(cls)))

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> StatVFSExtendedReplyPacket:
        return cls.unmarshal_from(Buffer(data))


def extension_fsync() -> ExtensionPair:
    """Return the pair that announces fsync support."""
    return ExtensionPair(name=EXTENSION_FSYNC, data="1")


def extension_hardlink() -> ExtensionPair:
    """Return the pair that announces hardlink support."""
    return ExtensionPair(name=EXTENSION_HARDLINK, data="1")


def extension_posix_rename() -> ExtensionPair:
    """Return the pair that announces posix-rename support."""
    return ExtensionPair(name=EXTENSION_POSIX_RENAME, data="1")


def extension_statvfs() -> ExtensionPair:
    """Return the pair that announces statvfs support."""
    return ExtensionPair(name=EXTENSION_STATVFS, data="2")


def extension_fstatvfs() -> ExtensionPair:
    """Return the pair that announces fstatvfs support."""
    return ExtensionPair(name=EXTENSION_FSTATVFS, data="2")


def register_extension_fsync() -> None:
    register_extended_packet_type(EXTENSION_FSYNC, FSyncExtendedPacket)


def register_extension_hardlink() -> None:
    register_extended_packet_type(EXTENSION_HARDLINK, HardlinkExtendedPacket)


def register_extension_posix_rename() -> None:
    register_extended_packet_type(EXTENSION_POSIX_RENAME, POSIXRenameExtendedPacket)


def register_extension_statvfs() -> None:
    register_extended_packet_type(EXTENSION_STATVFS, StatVFSExtendedPacket)


def register_extension_fstatvfs() -> None:
    register_extended_packet_type(EXTENSION_FSTATVFS, FStatVFSExtendedPacket)