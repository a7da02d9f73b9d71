"""IP, UDP, TCP and ICMP header layouts in network byte order, and the Internet checksum."""

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar


class IcmpType(IntEnum):
    """ICMP message types."""

    ECHOREPLY = 0
    DEST_UNREACH = 3
    SOURCE_QUENCH = 4
    REDIRECT = 5
    ECHO = 8
    TIME_EXCEEDED = 11
    PARAMETERPROB = 12
    TIMESTAMP = 13
    TIMESTAMPREPLY = 14
    INFO_REQUEST = 15
    INFO_REPLY = 16
    ADDRESS = 17
    ADDRESSREPLY = 18


def _pack(layout, *values):
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


def _header_bytes(layout, data, name):
    data = bytes(data)
    if len(data) < layout.size:
        raise ValueError(f"{name} needs {layout.size} bytes, got {len(data)}")
    return layout.unpack(data[: layout.size])


@dataclass
class IpHeader:
    """IPv4 header without options (20 bytes)."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("!BBHHHBBHII")

    version: int = 4
    ihl: int = 5
    tos: int = 0
    tot_len: int = 0
    id: int = 0
    frag_off: int = 0
    ttl: int = 0
    protocol: int = 0
    check: int = 0
    saddr: int = 0
    daddr: int = 0

    def pack(self):
        """Wire bytes of this header."""
        if not (0 <= self.version <= 15 and 0 <= self.ihl <= 15):
            raise ValueError("version and ihl must fit in 4 bits")
        return _pack(
            self.LAYOUT,
            (self.version << 4) | self.ihl,
            self.tos, self.tot_len, self.id, self.frag_off,
            self.ttl, self.protocol, self.check, self.saddr, self.daddr,
        )

    @classmethod
    def unpack(cls, data):
        """Parse the first 20 bytes of ``data``."""
        (ver_ihl, tos, tot_len, ident, frag_off,
         ttl, protocol, check, saddr, daddr) = _header_bytes(cls.LAYOUT, data, "IP header")
        return cls(ver_ihl >> 4, ver_ihl & 0x0F, tos, tot_len, ident, frag_off,
                   ttl, protocol, check, saddr, daddr)


@dataclass
class UdpHeader:
    """UDP header (8 bytes)."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("!HHHH")

    source: int = 0
    dest: int = 0
    len: int = 0
    check: int = 0

    def pack(self):
        """Wire bytes of this header."""
        return _pack(self.LAYOUT, self.source, self.dest, self.len, self.check)

    @classmethod
    def unpack(cls, data):
        """Parse the first 8 bytes of ``data``."""
        return cls(*_header_bytes(cls.LAYOUT, data, "UDP header"))


@dataclass
class TcpHeader:
    """TCP header without options (20 bytes)."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("!HHIIBBHHH")

    source: int = 0
    dest: int = 0
    seq: int = 0
    ack_seq: int = 0
    doff: int = 5
    res1: int = 0
    res2: int = 0
    fin: bool = False
    syn: bool = False
    rst: bool = False
    psh: bool = False
    ack: bool = False
    urg: bool = False
    window: int = 0
    check: int = 0
    urg_ptr: int = 0

    def pack(self):
        """Wire bytes of this header."""
        if not (0 <= self.doff <= 15 and 0 <= self.res1 <= 15 and 0 <= self.res2 <= 3):
            raise ValueError("doff, res1 or res2 out of range")
        flags = (
            (self.res2 << 6)
            | (bool(self.urg) << 5)
            | (bool(self.ack) << 4)
            | (bool(self.psh) << 3)
            | (bool(self.rst) << 2)
            | (bool(self.syn) << 1)
            | bool(self.fin)
        )
        return _pack(
            self.LAYOUT,
            self.source, self.dest, self.seq, self.ack_seq,
            (self.doff << 4) | self.res1, flags,
            self.window, self.check, self.urg_ptr,
        )

    @classmethod
    def unpack(cls, data):
        """Parse the first 20 bytes of ``data``."""
        (source, dest, seq, ack_seq, off, flags,
         window, check, urg_ptr) = _header_bytes(cls.LAYOUT, data, "TCP header")
        return cls(
            source=source, dest=dest, seq=seq, ack_seq=ack_seq,
            doff=off >> 4, res1=off & 0x0F, res2=flags >> 6,
            fin=bool(flags & 0x01), syn=bool(flags & 0x02), rst=bool(flags & 0x04),
            psh=bool(flags & 0x08), ack=bool(flags & 0x10), urg=bool(flags & 0x20),
            window=window, check=check, urg_ptr=urg_ptr,
        )


@dataclass
class IcmpHeader:
    """ICMP header (8 bytes); the last four bytes read as echo id and sequence."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("!BBHHH")

    type: int = 0
    code: int = 0
    checksum: int = 0
    id: int = 0
    sequence: int = 0

    @property
    def gateway(self):
        """The last four bytes read as one 32-bit gateway address."""
        return (self.id << 16) | self.sequence

    @property
    def mtu(self):
        """The next-hop MTU of a fragmentation-needed message."""
        return self.sequence

    def pack(self):
        """Wire bytes of this header."""
        return _pack(self.LAYOUT, self.type, self.code, self.checksum, self.id, self.sequence)

    @classmethod
    def unpack(cls, data):
        """Parse the first 8 bytes of ``data``."""
        return cls(*_header_bytes(cls.LAYOUT, data, "ICMP header"))


def checksum(data):
    """Internet checksum (ones' complement of the ones' complement sum) of ``data``.

    The result is to be stored in network byte order.
    """
    data = bytes(data)
    if len(data) % 2:
        data += b"\x00"
    total = sum(word for (word,) in struct.iter_unpack("!H", data))
    while total >> 16:
        total = (total >> 16) + (total & 0xFFFF)
    return ~total & 0xFFFF