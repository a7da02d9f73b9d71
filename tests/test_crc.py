import pytest

from hvbase.crc import crc16, crc32, crc64, hash16, hash32, hash64

CHECK = "123456789"
SAMPLES = [b"", b"a", b"hello world", bytes(range(256)), "user=admin&pswd=123456".encode()]


def test_crc16_check_value():
    assert crc16(CHECK) == 0x31C3


def test_crc64_check_value():
    assert crc64(CHECK) == 0xE9C6D914C4B8D9CA


def test_crc32_check_value():
    assert crc32(CHECK) == 0xCBF43926


@pytest.mark.parametrize("fn", [crc16, crc32, crc64])
def test_empty_input_is_zero(fn):
    assert fn(b"") == 0


@pytest.mark.parametrize("fn", [crc16, crc32, crc64])
def test_str_and_bytes_agree(fn):
    text = "héllo wörld"
    assert fn(text) == fn(text.encode("utf-8"))
    assert fn(bytearray(b"abc")) == fn(b"abc")
    assert fn(memoryview(b"abc")) == fn(b"abc")


@pytest.mark.parametrize("fn,bits", [(crc16, 16), (crc32, 32), (crc64, 64)])
@pytest.mark.parametrize("data", SAMPLES)
def test_results_fit_width(fn, bits, data):
    value = fn(data)
    assert 0 <= value < (1 << bits)


@pytest.mark.parametrize("fn", [crc16, crc32, crc64])
def test_single_bit_change_detected(fn):
    data = bytearray(b"The quick brown fox")
    original = fn(bytes(data))
    for pos in range(len(data)):
        for bit in range(8):
            flipped = bytearray(data)
            flipped[pos] ^= 1 << bit
            assert fn(bytes(flipped)) != original


@pytest.mark.parametrize("fn", [crc16, crc64])
def test_linearity_without_init_or_xorout(fn):
    a = b"abcdefgh12"
    b = b"ZYXWVU9876"
    xored = bytes(x ^ y for x, y in zip(a, b))
    assert fn(xored) == fn(a) ^ fn(b)


@pytest.mark.parametrize("data", SAMPLES + [CHECK])
def test_hashes_match_crcs(data):
    assert hash16(data) == crc16(data)
    assert hash32(data) == crc32(data)
    assert hash64(data) == crc64(data)


def test_hash_known_keys():
    assert hash16(CHECK) == 0x31C3
    assert hash64(CHECK) == 0xE9C6D914C4B8D9CA


@pytest.mark.parametrize("fn", [crc16, crc32, crc64, hash16, hash32, hash64])
@pytest.mark.parametrize("bad", [123, None, 1.5, ["a"]])
def test_rejects_non_bytes(fn, bad):
    with pytest.raises(TypeError):
        fn(bad)


@pytest.mark.parametrize("fn", [crc16, crc32, crc64])
def test_deterministic(fn):
    assert fn(b"repeat me") == fn(b"repeat me")
    assert fn(b"order") != fn(b"redro")