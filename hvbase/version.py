"""Library version and dotted-version/integer conversions."""

import re

VERSION_MAJOR = 1
VERSION_MINOR = 20
VERSION_PATCH = 3

_MASK32 = 0xFFFFFFFF
_LEADING_INT = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")


def version_string():
    """Library version as ``major.minor.patch``."""
    return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"


def version_number():
    """Library version packed as ``0xMMmmpp``."""
    return (VERSION_MAJOR << 16) | (VERSION_MINOR << 8) | VERSION_PATCH


def _atoi(text):
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _to_int32(value):
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def version_atoi(s):
    """Pack a dotted version such as ``v1.2.3.4`` into ``0x01020304``.

    Anything up to and including the first ``v`` is ignored; each component
    takes one byte and the result is a signed 32-bit integer.
    """
    pos = s.find("v")
    text = s[pos + 1:] if pos >= 0 else s
    packed = 0
    for part in text.split("."):
        packed = ((packed << 8) | _atoi(part)) & _MASK32
    return _to_int32(packed)


def version_itoa(num):
    """Unpack ``0x01020304`` into ``1.2.3.4``, dropping leading zero components."""
    parts = (num & _MASK32).to_bytes(4, "big")
    text = ".".join(str(byte) for byte in parts)
    while text.startswith("0."):
        text = text[2:]
    return text