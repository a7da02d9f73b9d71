"""Directory listings in the style of ``ls`` and a small binary file wrapper."""

import os
import stat
from dataclasses import dataclass

from hvbase.errors import ErrorCode, HvError

MAX_DIR_LEN = 256

_PERMISSION_BITS = (
    (0o400, "r"), (0o200, "w"), (0o100, "x"),
    (0o040, "r"), (0o020, "w"), (0o010, "x"),
    (0o004, "r"), (0o002, "w"), (0o001, "x"),
)

LF = 0x0A
CR = 0x0D


@dataclass
class DirEntry:
    """One directory entry.

    ``type`` is one of f (file), d (directory), l (link), b (block device),
    c (character device), s (socket), p (pipe), - (other) or an empty
    string when the entry could not be examined.
    """

    name: str
    type: str = ""
    mode: int = 0
    size: int = 0
    atime: int = 0
    mtime: int = 0
    ctime: int = 0

    def mode_string(self):
        """Type character followed by ``rwx`` permission flags, e.g. ``drwxr-xr-x``."""
        perms = "".join(ch if self.mode & bit else "-" for bit, ch in _PERMISSION_BITS)
        return (self.type or "-") + perms


def _type_char(st_mode):
    if stat.S_ISREG(st_mode):
        return "f"
    if stat.S_ISDIR(st_mode):
        return "d"
    if stat.S_ISLNK(st_mode):
        return "l"
    if stat.S_ISBLK(st_mode):
        return "b"
    if stat.S_ISCHR(st_mode):
        return "c"
    if stat.S_ISSOCK(st_mode):
        return "s"
    if stat.S_ISFIFO(st_mode):
        return "p"
    return "-"


def _entry(directory, name):
    try:
        st = os.lstat(os.path.join(directory, name))
    except OSError:
        return DirEntry(name)
    return DirEntry(
        name=name,
        type=_type_char(st.st_mode),
        mode=st.st_mode & 0o777,
        size=st.st_size,
        atime=int(st.st_atime),
        mtime=int(st.st_mtime),
        ctime=int(st.st_ctime),
    )


def listdir(directory):
    """List ``directory`` including ``.`` and ``..``, sorted by name ignoring case.

    Raises ``ValueError`` for a path longer than 256 characters and
    ``OSError`` when the directory cannot be read.
    """
    directory = os.fspath(directory)
    if len(directory) > MAX_DIR_LEN:
        raise ValueError(f"directory path longer than {MAX_DIR_LEN} characters")
    names = [".", ".."] + os.listdir(directory)
    entries = [_entry(directory, name) for name in names]
    entries.sort(key=lambda entry: entry.name.lower())
    return entries


class File:
    """A file opened in binary mode, with line reading that accepts LF, CRLF and CR."""

    def __init__(self, filepath, mode="rb"):
        if "b" not in mode:
            mode += "b"
        self.filepath = os.fspath(filepath)
        self.mode = mode
        try:
            self._fp = open(self.filepath, mode)
        except OSError as exc:
            raise HvError(ErrorCode.OPEN_FILE, f"cannot open {self.filepath}: {exc.strerror}") from exc

    @property
    def closed(self):
        """True once the file has been closed."""
        return self._fp is None

    def _open_fp(self):
        if self._fp is None:
            raise ValueError("I/O operation on closed file")
        return self._fp

    def close(self):
        """Close the file; closing twice is harmless."""
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def size(self):
        """Size of the file on disk in bytes."""
        if self._fp is not None:
            self._fp.flush()
        return os.stat(self.filepath).st_size

    def read(self, length):
        """Read up to ``length`` bytes."""
        return self._open_fp().read(length)

    def readall(self):
        """Read as many bytes as the file holds, from the current position."""
        return self._open_fp().read(self.size())

    def readline(self):
        """Next line without its terminator, or None at the end of the file."""
        fp = self._open_fp()
        line = bytearray()
        while True:
            ch = fp.read(1)
            if not ch:
                return bytes(line) if line else None
            byte = ch[0]
            if byte == LF:
                return bytes(line)
            if byte == CR:
                following = fp.read(1)
                if following and following[0] != LF:
                    fp.seek(-1, os.SEEK_CUR)
                return bytes(line)
            line.append(byte)

    def readlines(self):
        """Yield the remaining lines, each without its terminator."""
        while True:
            line = self.readline()
            if line is None:
                return
            yield line

    def write(self, data):
        """Write ``data`` (bytes, or text encoded as UTF-8); returns the bytes written."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        return self._open_fp().write(data)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()