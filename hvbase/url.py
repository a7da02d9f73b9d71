"""Percent-encoding of URL components."""

import string

_UNRESERVED = frozenset((string.ascii_letters + string.digits + "-_.~").encode("ascii"))
_HEX_DIGITS = frozenset(string.hexdigits.encode("ascii"))


def _as_bytes(value):
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def url_escape(s):
    """Percent-encode every byte of ``s`` except ASCII letters, digits and ``-_.~``.

    Text is encoded as UTF-8 first; escapes use upper-case hex digits.
    """
    return "".join(
        chr(byte) if byte in _UNRESERVED else f"%{byte:02X}"
        for byte in _as_bytes(s)
    )


def url_unescape(s):
    """Decode ``%XX`` escapes in ``s``; malformed escapes are kept as they are."""
    data = _as_bytes(s)
    out = bytearray()
    pos = 0
    while pos < len(data):
        if (
            data[pos] == ord("%")
            and pos + 2 < len(data) + 0
            and data[pos + 1] in _HEX_DIGITS
            and data[pos + 2] in _HEX_DIGITS
        ):
            out.append(int(data[pos + 1:pos + 3], 16))
            pos += 3
        else:
            out.append(data[pos])
            pos += 1
    return out.decode("utf-8", errors="replace")