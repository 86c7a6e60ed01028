"""Reading of packets from capture files in the classic pcap format."""

from __future__ import annotations

import struct
from collections.abc import Iterator

from .packet import Packet

_GLOBAL_HEADER_SIZE = 24
_RECORD_HEADER_SIZE = 16
_MICROSECOND_MAGIC = 0xA1B2C3D4
_NANOSECOND_MAGIC = 0xA1B23C4D
_FRACTION_SCALE = {_MICROSECOND_MAGIC: 1e-6, _NANOSECOND_MAGIC: 1e-9}


class PcapError(Exception):
    """The capture file could not be opened or read."""


class PcapReader:
    """An open capture file that yields its packets in order."""

    def __init__(self, path):
        self.path = path
        try:
            self._file = open(path, "rb")
        except OSError as exc:
            raise PcapError(f"{path}: {exc.strerror or exc}") from exc
        try:
            self._read_global_header()
        except BaseException:
            self._file.close()
            raise

    def _read_global_header(self) -> None:
        header = self._file.read(_GLOBAL_HEADER_SIZE)
        if len(header) < _GLOBAL_HEADER_SIZE:
            raise PcapError(f"{self.path}: truncated dump file")
        for order in ("<", ">"):
            (magic,) = struct.unpack(order + "I", header[:4])
            if magic in _FRACTION_SCALE:
                break
        else:
            raise PcapError(f"{self.path}: unknown file format")
        self._order = order
        self._scale = _FRACTION_SCALE[magic]
        (
            _,
            self.version_major,
            self.version_minor,
            _,
            _,
            self.snapshot_length,
            self.link_type,
        ) = struct.unpack(order + "IHHiIII", header)

    def __iter__(self) -> Iterator[Packet]:
        while True:
            record = self._file.read(_RECORD_HEADER_SIZE)
            if not record:
                return
            if len(record) < _RECORD_HEADER_SIZE:
                raise PcapError(f"{self.path}: truncated packet header")
            seconds, fraction, captured, original = struct.unpack(
                self._order + "IIII", record
            )
            data = self._file.read(captured)
            if len(data) < captured:
                raise PcapError(f"{self.path}: truncated packet data")
            yield Packet(data, original, seconds + fraction * self._scale)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> PcapReader:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def read_packets(path) -> Iterator[Packet]:
    """Yield every packet of the capture at path, closing it afterwards."""
    with PcapReader(path) as reader:
        yield from reader