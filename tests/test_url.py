import pytest

from hvbase.url import url_escape, url_unescape


def test_escape_space():
    assert url_escape("a b") == "a%20b"


def test_unreserved_kept():
    text = "-_.~AZaz09"
    assert url_escape(text) == text


def test_unescape_single():
    assert url_unescape("%41") == "A"


def test_escape_utf8_bytes():
    assert url_escape("é") == "%C3%A9"


def test_hex_case_insensitive():
    assert url_unescape("%4a%2f") == url_unescape("%4A%2F")


@pytest.mark.parametrize("text", ["%zz", "%4", "100%", "%%", "%g1"])
def test_malformed_escapes_kept(text):
    assert url_unescape(text) == text


def test_escape_output_is_safe():
    escaped = url_escape("key=value&x=/path?q#frag é")
    assert all(c.isalnum() or c in "-_.~%" for c in escaped)


@pytest.mark.parametrize(
    "text",
    ["", "hello world", "a+b=c&d", "/mnt/share/image/test.jpg", "你好", "100%"],
)
def test_round_trip(text):
    assert url_unescape(url_escape(text)) == text


def test_escape_accepts_bytes():
    assert url_escape(b"a b") == url_escape("a b")


def test_plus_is_not_space():
    assert url_unescape("a+b") == "a+b"


def test_unescape_plain_text_unchanged():
    text = "plain-text_value.~"
    assert url_unescape(text) == text