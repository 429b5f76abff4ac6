# sftpkit

Building blocks for the SSH File Transfer Protocol (SFTP, filexfer draft 02)
in pure Python. The package uses only the standard library.

## What is in the package

- `sftpkit.wire` contains the primitive encoding:
  - `Buffer` appends big-endian integers and length-prefixed strings at its end and consumes them from its front.
  - `Attributes` holds file attributes. Only the fields selected by `flags` are encoded.
  - `ExtensionPair` holds an extension name and its data.
  - `compose_packet(header, payload)` joins the two parts of a marshalled packet.
  - `read_packet(stream, max_packet_length)` reads one length-prefixed packet body from a binary stream.
  - The `PacketType` and `Status` enumerations.
- `sftpkit.permissions` contains `FileMode`. It is an `int` subclass with `is_dir()`, `is_regular()`, `perm()` and `type()`. Its `str()` gives the `ls -l` form, for example `-rwxr-xr-x`.
- `sftpkit.init_packets` contains `InitPacket` and `VersionPacket`. Both use `marshal_binary()` and `unmarshal_binary(data)`.
- `sftpkit.path_packets` contains `LStatPacket`, `SetstatPacket`, `RemovePacket`, `MkdirPacket`, `RmdirPacket`, `RealPathPacket`, `StatPacket`, `RenamePacket`, `ReadLinkPacket` and `SymlinkPacket`.
- `sftpkit.handle_packets` contains `ClosePacket`, `ReadPacket`, `WritePacket`, `FStatPacket`, `FSetstatPacket` and `ReadDirPacket`.
- `sftpkit.open_packets` contains `OpenPacket`, `OpenDirPacket` and the `OpenFlag` flags.
- `sftpkit.response_packets` contains `StatusPacket`, `HandlePacket`, `DataPacket`, `NamePacket` (with `NameEntry`) and `AttrsPacket`.
- `sftpkit.packets` contains:
  - `RawPacket`, which keeps the body undecoded.
  - `RequestPacket`, which decodes any request type through `new_packet_from_type`.
- `sftpkit.openssh` contains:
  - `ExtendedPacket` and `ExtendedReplyPacket`.
  - The OpenSSH extensions `FSyncExtendedPacket`, `HardlinkExtendedPacket`, `POSIXRenameExtendedPacket`, `StatVFSExtendedPacket` and `FStatVFSExtendedPacket`, plus `StatVFSExtendedReplyPacket`.
  - The `register_extension_*()` and `extension_*()` helpers.
- `sftpkit.listing` contains `run_ls(id_lookup, entry)`, which formats `ls -l` style long names.
  - `FileInfo.from_path` describes a local file.
  - `OSIDLookup` turns numeric ids into user and group names where the platform has a user database. Otherwise it returns the id unchanged.
- `sftpkit.match` contains `match`, `split`, `join`, `has_meta` and `glob` for slash-separated paths.
- `sftpkit.ordering` contains `PacketManager`. It sends responses in the order their requests were registered.

Every request and response packet has a `marshal_packet(request_id)` method, which returns a `(header, payload)` pair. It also has an `unmarshal_packet_body(buf)` classmethod, which decodes what follows the request id.

## Installation

```
pip install sftpkit
```

To run the test suite:

```
pip install "sftpkit[test]"
pytest
```

## Examples

Encode a request and decode it again:

```python
import io

from sftpkit.packets import RequestPacket
from sftpkit.path_packets import StatPacket
from sftpkit.wire import compose_packet

data = compose_packet(*StatPacket(path="/foo").marshal_packet(42))

request = RequestPacket.read_from(io.BytesIO(data), 256 * 1024)
assert request.request_id == 42
assert request.request.path == "/foo"
```

`read_from` and `read_packet` default to a maximum packet length of
`sftpkit.wire.DEFAULT_MAX_PACKET_LENGTH` (34000 bytes).

Format a permission string and a listing line:

```python
from datetime import datetime

from sftpkit.listing import FileInfo, run_ls
from sftpkit.permissions import FileMode

print(FileMode(0o100755))   # -rwxr-xr-x

entry = FileInfo(name="notes.txt", size=348911, mode=0o100644,
                 mod_time=datetime(2020, 3, 25, 14, 29), uid=501, gid=20)
print(run_ls(None, entry))  # -rw-r--r--    1 501      20 ... Mar 25  2020 notes.txt
```

An entry modified within the last six months shows its time (`14:29`)
instead of the year.

Match names against shell patterns:

```python
from sftpkit.match import match, split

match("*.txt", "notes.txt")     # True
match("*.txt", "dir/notes.txt") # False: * does not cross a slash
split("/usr/bin/ed")            # ("/usr/bin/", "ed")
```

`glob(fs, pattern)` walks any object that provides `lstat(path)`,
`stat(path)` and `read_dir(path)`. The objects these return must have a
`name` attribute and an `is_dir()` method, and the methods must raise
`OSError` on failure. File system errors are ignored.

Use an OpenSSH extension:

```python
from sftpkit.openssh import ExtendedPacket, HardlinkExtendedPacket, register_extension_hardlink
from sftpkit.wire import Buffer, compose_packet

register_extension_hardlink()
data = compose_packet(*HardlinkExtendedPacket(old_path="/foo", new_path="/bar").marshal_packet(7))

decoded = ExtendedPacket.unmarshal_packet_body(Buffer(data[9:]))
assert decoded.data.new_path == "/bar"
```

Without a registered decoder, the extension data is kept undecoded.

Keep responses in request order:

```python
from sftpkit.ordering import OrderedRequest, OrderedResponse, PacketManager

sent = []
with PacketManager(sent.append) as manager:
    manager.incoming_packet(OrderedRequest(request_id=10, order_id=1))
    manager.incoming_packet(OrderedRequest(request_id=11, order_id=2))
    manager.ready_packet(OrderedResponse(request_id=11, order_id=2))
    manager.ready_packet(OrderedResponse(request_id=10, order_id=1))

assert [response.request_id for response in sent] == [10, 11]
```

Leaving the `with` block calls `close()`. It waits until every registered
request has been answered.

## Errors

- `ShortPacketError` is raised for truncated or undersized data.
- `LongPacketError` is raised when a packet is longer than the allowed maximum.
- `EOFError` is raised when a stream ends inside a packet.
- `BadPatternError` is raised for a malformed pattern.
- `ValueError` is raised for a request type that has no decoder.

`StatusPacket` is an exception and can be raised. `StatusPacket.matches`
compares it with a `Status` code or with another `StatusPacket`.

## What the package does not do

This is a toolkit of encodings and helpers, not an SFTP client or server:

- It opens no SSH connections.
- It performs no authentication.
- It has no command-line program.
- It does not serve requests from a file system.

Connecting these pieces to a transport and to file storage is left to the
application.