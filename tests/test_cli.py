import struct

import pytest

from pcapsniff.cli import main

PAYLOAD_HEX = "0012BFE2000000000000000000000000000000000000"
FRAME = bytes.fromhex(
    "020000000001"
    "020000000002"
    "0800"
    "45"
    "00"
    "0026"
    "1234"
    "2000"
    "40"
    "11"
    "1AF2"
    "A4017BA3"
    "A4017B3D"
    "007B"
    "0089"
) + bytes.fromhex(PAYLOAD_HEX)


@pytest.fixture
def capture(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "numberToProtocol.txt").write_text("17 UDP\n", encoding="utf-8")
    path = tmp_path / "capture.pcap"
    record = struct.pack("<IIII", 1, 0, len(FRAME), len(FRAME)) + FRAME
    path.write_bytes(struct.pack("<IHHiIII", 0xA1B2C3D4, 2, 4, 0, 0, 65535, 1) + record * 2)
    return str(path)


def test_prints_every_packet(capture, capsys):
    assert main(["-f", capture]) == 1
    out = capsys.readouterr().out
    assert out.count("Size: ") == 2
    assert "Protocol: UDP (17)" in out
    assert "Source Address: 164.1.123.163" in out
    assert f"Data: {PAYLOAD_HEX}\n\n" in out


def test_source_filter_excludes_packets(capture, capsys):
    assert main(["-f", capture, "--src", "164.1.123.61"]) == 1
    assert capsys.readouterr().out == "\n\n"


def test_port_filter_matches_destination(capture, capsys):
    main(["-f", capture, "-P", "137"])
    out = capsys.readouterr().out
    assert out.count("Destination Port: 137") == 2


def test_destination_filter_matches(capture, capsys):
    main(["-f", capture, "-d", "164.1.123.61"])
    assert capsys.readouterr().out.count("Size: ") == 2


def test_missing_capture(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["-f", "absent.pcap"]) == 1
    assert "absent.pcap" in capsys.readouterr().err


def test_invalid_port(capture, capsys):
    assert main(["-f", capture, "-P", "abc"]) == 1
    assert "abc" in capsys.readouterr().err


def test_truncated_capture_prints_complete_packets(capture, capsys):
    with open(capture, "ab") as handle:
        handle.write(b"\x00\x01")
    assert main(["-f", capture]) == 1
    assert capsys.readouterr().out.count("Size: ") == 2


def test_help_exits_successfully(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0
    assert "--file" in capsys.readouterr().out