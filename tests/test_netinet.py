import struct

import pytest

from hvbase.netinet import (
    IcmpHeader,
    IcmpType,
    IpHeader,
    TcpHeader,
    UdpHeader,
    checksum,
)

SAMPLE_IP = IpHeader(
    version=4, ihl=5, tos=0, tot_len=0x73, id=0, frag_off=0x4000,
    ttl=0x40, protocol=0x11, check=0, saddr=0xC0A80001, daddr=0xC0A800C7,
)


def test_header_sizes():
    assert len(IpHeader().pack()) == 20
    assert len(UdpHeader().pack()) == 8
    assert len(TcpHeader().pack()) == 20
    assert len(IcmpHeader().pack()) == 8


def test_ip_checksum_worked_example():
    assert checksum(SAMPLE_IP.pack()) == 0xB861


def test_checksum_of_filled_header_is_zero():
    header = IpHeader(**{**SAMPLE_IP.__dict__})
    header.check = checksum(header.pack())
    assert checksum(header.pack()) == 0


def test_checksum_odd_length_matches_zero_padding():
    data = b"\x01\x02\x03"
    assert checksum(data) == checksum(data + b"\x00")


def test_ip_header_round_trip():
    packed = SAMPLE_IP.pack()
    assert packed[0] == 0x45
    assert IpHeader.unpack(packed) == SAMPLE_IP


def test_ip_header_rejects_wide_version():
    with pytest.raises(ValueError):
        IpHeader(version=16).pack()


def test_udp_header_round_trip():
    header = UdpHeader(source=53, dest=40000, len=8, check=0x1234)
    packed = header.pack()
    assert packed == struct.pack("!HHHH", 53, 40000, 8, 0x1234)
    assert UdpHeader.unpack(packed) == header


def test_udp_header_rejects_large_port():
    with pytest.raises(ValueError):
        UdpHeader(source=70000).pack()


def test_tcp_syn_flag_layout():
    assert TcpHeader(doff=5, syn=True).pack()[12:14] == b"\x50\x02"


def test_tcp_header_round_trip():
    header = TcpHeader(
        source=1234, dest=80, seq=1, ack_seq=2, doff=5,
        fin=True, ack=True, urg=True, window=65535, check=7, urg_ptr=9,
    )
    assert TcpHeader.unpack(header.pack()) == header


def test_icmp_echo_request_bytes():
    header = IcmpHeader(type=IcmpType.ECHO, id=1, sequence=2)
    assert header.pack() == bytes([IcmpType.ECHO, 0, 0, 0, 0, 1, 0, 2])


def test_icmp_round_trip_with_checksum():
    header = IcmpHeader(type=IcmpType.ECHO, id=0x1234, sequence=7)
    header.checksum = checksum(header.pack())
    packed = header.pack()
    assert checksum(packed) == 0
    parsed = IcmpHeader.unpack(packed)
    assert parsed == header
    assert parsed.gateway == (0x1234 << 16) | 7


@pytest.mark.parametrize("cls", [IpHeader, UdpHeader, TcpHeader, IcmpHeader])
def test_unpack_too_short(cls):
    with pytest.raises(ValueError):
        cls.unpack(b"\x00\x01")