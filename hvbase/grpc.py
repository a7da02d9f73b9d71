"""gRPC length-prefixed message header and protobuf wire-format primitives."""

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

GRPC_MESSAGE_HDLEN = 5

_MAX_VARINT_BYTES = 10
_MASK64 = (1 << 64) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class WireType(IntEnum):
    """Protobuf wire types, the low three bits of a tag."""

    VARINT = 0
    FIXED64 = 1
    LENGTH_DELIMITED = 2
    START_GROUP = 3
    END_GROUP = 4
    FIXED32 = 5


class FieldType(IntEnum):
    """Protobuf field types."""

    DOUBLE = 1
    FLOAT = 2
    INT64 = 3
    UINT64 = 4
    INT32 = 5
    FIXED64 = 6
    FIXED32 = 7
    BOOL = 8
    STRING = 9
    GROUP = 10
    MESSAGE = 11
    BYTES = 12
    UINT32 = 13
    ENUM = 14
    SFIXED32 = 15
    SFIXED64 = 16
    SINT32 = 17
    SINT64 = 18
    MAX_FIELD_TYPE = 18


@dataclass
class GrpcMessageHeader:
    """One flags byte followed by a 4-byte big-endian message length."""

    PACKER: ClassVar[struct.Struct] = struct.Struct(">BI")
    UNPACKER: ClassVar[struct.Struct] = struct.Struct(">Bi")

    flags: int = 0
    length: int = 0

    def pack(self):
        """The 5 header bytes."""
        if not 0 <= self.flags <= 0xFF:
            raise ValueError("flags must fit in one byte")
        return self.PACKER.pack(self.flags, self.length & 0xFFFFFFFF)

    @classmethod
    def unpack(cls, data):
        """Parse the first 5 bytes of ``data``; the length is a signed 32-bit value."""
        data = bytes(data)
        if len(data) < GRPC_MESSAGE_HDLEN:
            raise ValueError(f"gRPC header needs {GRPC_MESSAGE_HDLEN} bytes, got {len(data)}")
        flags, length = cls.UNPACKER.unpack(data[:GRPC_MESSAGE_HDLEN])
        return cls(flags, length)


def make_tag(field_number, wire_type):
    """Protobuf tag of ``field_number`` with ``wire_type``."""
    return (field_number << 3) | int(wire_type)


def tag_field_number(tag):
    """Field number stored in ``tag``."""
    return tag >> 3


def tag_wire_type(tag):
    """Wire type stored in ``tag``."""
    return WireType(tag & 0x07)


def varint_encode(value):
    """Encode a signed 64-bit integer as a little-endian base-128 varint.

    Negative values are encoded as their 64-bit two's complement.
    """
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError("value does not fit in 64 bits")
    value &= _MASK64
    out = bytearray()
    while True:
        low = value & 0x7F
        value >>= 7
        if value:
            out.append(low | 0x80)
        else:
            out.append(low)
            return bytes(out)


def varint_decode(data):
    """Decode a varint at the start of ``data``; returns ``(value, bytes_used)``.

    At most ten bytes are read; decoding also stops at the end of ``data``.
    The value is read as a signed 64-bit integer.
    """
    data = bytes(data)
    if not data:
        raise ValueError("no data to decode")
    value = 0
    used = 0
    for shift, byte in zip(range(0, 7 * _MAX_VARINT_BYTES, 7), data):
        value |= (byte & 0x7F) << shift
        used += 1
        if not byte & 0x80:
            break
    value &= _MASK64
    if value > _INT64_MAX:
        value -= 1 << 64
    return value, used