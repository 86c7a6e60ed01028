import struct

import pytest

from pcapsniff.packet import Packet
from pcapsniff.reader import PcapError, PcapReader, read_packets


def _capture(records, order="<", magic=0xA1B2C3D4):
    out = struct.pack(order + "IHHiIII", magic, 2, 4, 0, 0, 65535, 1)
    for seconds, fraction, data, original in records:
        out += struct.pack(order + "IIII", seconds, fraction, len(data), original) + data
    return out


def _write(tmp_path, content):
    path = tmp_path / "capture.pcap"
    path.write_bytes(content)
    return path


def test_reads_packets_in_order(tmp_path):
    path = _write(
        tmp_path,
        _capture([(100, 250000, b"first", 5), (101, 0, b"second!", 9)]),
    )
    with PcapReader(path) as reader:
        packets = list(reader)
    assert [packet.data for packet in packets] == [b"first", b"second!"]
    assert [packet.length for packet in packets] == [5, 9]
    assert packets[0].timestamp == pytest.approx(100.25)
    assert packets[1].timestamp == pytest.approx(101)


def test_global_header_fields(tmp_path):
    path = _write(tmp_path, _capture([]))
    with PcapReader(path) as reader:
        assert (reader.version_major, reader.version_minor) == (2, 4)
        assert reader.snapshot_length == 65535
        assert reader.link_type == 1


def test_big_endian_capture(tmp_path):
    path = _write(tmp_path, _capture([(7, 0, b"abc", 3)], order=">"))
    assert list(read_packets(path)) == [Packet(b"abc", 3, 7.0)]


def test_nanosecond_capture(tmp_path):
    path = _write(tmp_path, _capture([(7, 500_000_000, b"abc", 3)], magic=0xA1B23C4D))
    (packet,) = read_packets(path)
    assert packet.timestamp == pytest.approx(7.5)


def test_empty_capture(tmp_path):
    assert list(read_packets(_write(tmp_path, _capture([])))) == []


def test_bad_magic(tmp_path):
    path = _write(tmp_path, b"\x00" * 24)
    with pytest.raises(PcapError):
        PcapReader(path)


def test_short_global_header(tmp_path):
    path = _write(tmp_path, _capture([])[:10])
    with pytest.raises(PcapError):
        PcapReader(path)


def test_truncated_packet_data(tmp_path):
    path = _write(tmp_path, _capture([(1, 0, b"abcdef", 6)])[:-2])
    with pytest.raises(PcapError):
        list(read_packets(path))


def test_truncated_record_header(tmp_path):
    path = _write(tmp_path, _capture([]) + b"\x01\x02\x03")
    with pytest.raises(PcapError):
        list(read_packets(path))


def test_missing_file(tmp_path):
    with pytest.raises(PcapError, match="absent.pcap"):
        PcapReader(tmp_path / "absent.pcap")


def test_packets_before_an_error_are_yielded(tmp_path):
    path = _write(tmp_path, _capture([(1, 0, b"ok", 2)]) + b"\x00")
    packets = read_packets(path)
    assert next(packets).data == b"ok"
    with pytest.raises(PcapError):
        next(packets)