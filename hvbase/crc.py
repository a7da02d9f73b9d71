"""CRC checksums (16, 32 and 64 bit) and the hash helpers built on them.

* ``crc16`` is CRC-16/XMODEM: polynomial 0x1021, initial value 0, no
  reflection, no final xor.
* ``crc32`` is the common CRC-32 (reflected, polynomial 0xEDB88320,
  initial value and final xor 0xFFFFFFFF).
* ``crc64`` is the reflected CRC-64 with the "Jones" polynomial
  0xad93d23594c935a9, initial value 0 and no final xor.
"""

import zlib

_CRC16_POLY = 0x1021
_CRC64_POLY_REFLECTED = 0x95AC9329AC4BC9B5
_MASK16 = 0xFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _crc16_entry(index):
    crc = index << 8
    for _ in range(8):
        crc = ((crc << 1) ^ _CRC16_POLY) if crc & 0x8000 else (crc << 1)
        crc &= _MASK16
    return crc


def _crc64_entry(index):
    crc = index
    for _ in range(8):
        crc = (crc >> 1) ^ _CRC64_POLY_REFLECTED if crc & 1 else crc >> 1
    return crc


_CRC16_TABLE = tuple(_crc16_entry(i) for i in range(256))
_CRC64_TABLE = tuple(_crc64_entry(i) for i in range(256))


def _as_bytes(data):
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected str or bytes-like data, got {type(data).__name__}")


def crc16(data):
    """CRC-16/XMODEM of ``data`` (bytes, or text encoded as UTF-8)."""
    crc = 0
    for byte in _as_bytes(data):
        crc = ((crc << 8) & _MASK16) ^ _CRC16_TABLE[((crc >> 8) ^ byte) & 0xFF]
    return crc


def crc32(data):
    """CRC-32 of ``data`` (bytes, or text encoded as UTF-8)."""
    return zlib.crc32(_as_bytes(data)) & 0xFFFFFFFF


def crc64(data):
    """CRC-64/Jones of ``data`` (bytes, or text encoded as UTF-8)."""
    crc = 0
    for byte in _as_bytes(data):
        crc = _CRC64_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc & _MASK64


def hash16(key):
    """Hash ``key`` into the range 0x0000..0xffff."""
    return crc16(key)


def hash32(key):
    """Hash ``key`` into the range 0x00000000..0xffffffff."""
    return crc32(key)


def hash64(key):
    """Hash ``key`` into the range 0..0xffffffffffffffff."""
    return crc64(key)