# hvbase

Small, dependency-free building blocks for writing network services in
Python: error codes, URL escaping, CRC checksums, a file logger, a thread
pool, socket helpers, packet headers, protobuf varints, directory listings
and host information.

## Modules

- `hvbase.errors` — the `ErrorCode` enum (each member has a `message`),
  `strerror(err)`, which returns the system message for errno values 1–133
  and the library message otherwise (`"Undefined error"` for unknown codes),
  and the `HvError` exception carrying a `code` and a `message`.
- `hvbase.version` — `version_string()` (`"1.20.3"`), `version_number()`,
  `version_atoi("v1.2.3.4")` → `0x01020304` and `version_itoa(0x00010203)`
  → `"1.2.3"` (leading zero components are dropped).
- `hvbase.url` — `url_escape` percent-encodes everything except ASCII
  letters, digits and `-_.~` (text is encoded as UTF-8 first);
  `url_unescape` decodes `%XX` escapes and leaves malformed ones as they are.
- `hvbase.crc` — `crc16` (CRC-16/XMODEM), `crc32` and `crc64`
  (CRC-64/Jones) over bytes or UTF-8 text, and the `hash16` / `hash32` /
  `hash64` helpers built on them.
- `hvbase.log` — `LogLevel` and a thread-safe `Logger`. Each record is
  prefixed with a local timestamp and a level tag. With a `handler` the text
  goes to `handler(level, text)`; without one it is appended to
  `<filepath>-YYYY-MM-DD.log`, a new file is started each day, older files
  beyond `remain_days` are removed and a file grown past `max_filesize` is
  truncated. `default_logger()` returns a shared instance; `stdout_logger`,
  `stderr_logger` and `file_logger` are ready-made handlers.
- `hvbase.threadpool` — `ThreadPool` with `start`, `stop`, `pause`,
  `resume`, `wait` and `commit`, which returns a
  `concurrent.futures.Future`. It also works as a context manager.
- `hvbase.sockets` — `resolve`, `sockaddr_str`, `bind_socket`, `listen`,
  `connect`, `connect_nonblock`, `connect_timeout`, `socketpair`, and the
  option setters `tcp_nodelay`, `tcp_nopush`, `tcp_keepalive`,
  `udp_broadcast`, `so_sndtimeo` and `so_rcvtimeo`. Failures raise
  `OSError` (`TimeoutError` when `connect_timeout` runs out of time).
- `hvbase.netinet` — `IpHeader`, `UdpHeader`, `TcpHeader` and
  `IcmpHeader` dataclasses with `pack()` / `unpack()` in network byte
  order, the `IcmpType` enum and the Internet `checksum`.
- `hvbase.grpc` — `GrpcMessageHeader` (flags byte plus 4-byte length),
  `WireType`, `FieldType`, `make_tag`, `tag_field_number`,
  `tag_wire_type`, `varint_encode` and `varint_decode`.
- `hvbase.fsutil` — `listdir(directory)` returns `DirEntry` items
  (including `.` and `..`) sorted by name ignoring case, each with
  `mode_string()` such as `drwxr-xr-x`; `File` is a binary file wrapper
  whose `readline` accepts LF, CRLF and CR line ends. Opening a file that
  cannot be opened raises `HvError` with `ErrorCode.OPEN_FILE`.
- `hvbase.sysinfo` — `get_ncpu()` and `get_meminfo()`, which returns a
  `MemInfo` with `total` and `free` in kilobytes, or raises `OSError`
  where the system does not report them.

## Examples

```python
from hvbase.crc import crc16, crc64
from hvbase.grpc import varint_encode, varint_decode
from hvbase.url import url_escape
from hvbase.errors import strerror

hex(crc16(b"123456789"))             # '0x31c3'
hex(crc64(b"123456789"))             # '0xe9c6d914c4b8d9ca'
varint_decode(varint_encode(300))    # (300, 2)
url_escape("a b")                    # 'a%20b'
strerror(1015)                       # 'Invalid json'
```

```python
from hvbase.threadpool import ThreadPool

with ThreadPool(4) as pool:
    future = pool.commit(pow, 2, 10)
    print(future.result())  # 1024
    pool.wait()
```

```python
from hvbase.log import Logger, LogLevel, stdout_logger

logger = Logger(level=LogLevel.INFO, handler=stdout_logger)
logger.log(LogLevel.INFO, "listening on port %d\n", 8080)
logger.log(LogLevel.DEBUG, "dropped")  # returns None
```

## What it does not do

hvbase is a library of helpers only. It has no event loop, no servers or
clients of its own and no command-line programs; the socket helpers return
plain `socket.socket` objects for you to drive.

## Testing

```
pip install -e .[test]
pytest
```