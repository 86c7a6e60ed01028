"""Decoding of Ethernet/IPv4 frame fields and a readable packet summary."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path


class FieldOffset(IntEnum):
    """Byte offsets of header fields in an Ethernet frame carrying IPv4."""

    DESTINATION_MAC_ADDRESS_START = 0
    DESTINATION_MAC_ADDRESS_END = 5
    SOURCE_MAC_ADDRESS_START = 6
    SOURCE_MAC_ADDRESS_END = 11
    PROTOCOL_TYPE_START = 12
    PROTOCOL_TYPE_END = 13
    VERSION_AND_IHL = 14
    TYPES_OF_SERVICE = 15
    TOTAL_LENGTH_START = 16
    TOTAL_LENGTH_END = 17
    IDENTIFICATION_NUMBER_START = 18
    IDENTIFICATION_NUMBER_END = 19
    IP_FLAGS = 20
    FRAGMENT_OFFSET_START = 20
    FRAGMENT_OFFSET_END = 21
    TIME_TO_LIVE = 22
    PROTOCOL = 23
    HEADER_CHECKSUM_START = 24
    HEADER_CHECKSUM_END = 25
    SOURCE_IP_ADDRESS_START = 26
    SOURCE_IP_ADDRESS_END = 29
    DESTINATION_IP_ADDRESS_START = 30
    DESTINATION_IP_ADDRESS_END = 33
    SOURCE_PORT_START = 34
    SOURCE_PORT_END = 35
    DESTINATION_PORT_START = 36
    DESTINATION_PORT_END = 37
    DATA = 38


_ETHER_TYPES = {
    "0800": "IPv4",
    "86DD": "IPv6",
    "0806": "ARP",
    "8100": "VLAN-tagged",
    "88CC": "LLDP",
    "8847": "MPLS",
}

_DSCP_NAMES = {
    0: "Default",
    8: "Class Selector 1",
    10: "AF11",
    18: "AF21",
    26: "AF31",
    46: "Expedited Forwarding",
    **dict.fromkeys(range(48, 64), "CS6–CS7"),
}

_ECN_NAMES = {
    0: "Not ECN-Capable",
    1: "ECT(1)",
    2: "ECT(0)",
    3: "CE",
}

_UNASSIGNED_PROTOCOLS = range(146, 255)


def load_protocol_names(path) -> dict[int, str]:
    """Read a table of "number name" lines; unassigned numbers map to "-".

    A missing or unreadable file yields only the unassigned range.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        text = ""

    names: dict[int, str] = {}
    for line in text.splitlines():
        fields = line.split()
        if not fields:
            continue
        try:
            number = int(fields[0])
        except ValueError:
            continue
        names[number] = fields[1] if len(fields) > 1 else ""

    names.update(dict.fromkeys(_UNASSIGNED_PROTOCOLS, "-"))
    return names


@dataclass(frozen=True)
class Packet:
    """A captured frame: its bytes, its original length and its capture time."""

    data: bytes
    length: int
    timestamp: float = 0.0

    def _span(self, start: int, end: int) -> bytes:
        if end >= len(self.data):
            raise IndexError(
                f"packet of {len(self.data)} bytes has no byte at offset {end}"
            )
        return self.data[start : end + 1]

    def _hex(self, start: int, end: int) -> str:
        return self._span(start, end).hex().upper()

    def mac_address(self, start, end) -> str:
        return ":".join(f"{byte:02X}" for byte in self._span(start, end))

    def protocol_type(self) -> str:
        code = self._hex(FieldOffset.PROTOCOL_TYPE_START, FieldOffset.PROTOCOL_TYPE_END)
        return f"{_ETHER_TYPES.get(code, '')} (0x{code})"

    def protocol_version(self) -> int:
        return (self.data[FieldOffset.VERSION_AND_IHL] & 0xF0) >> 4

    def header_length(self) -> int:
        """Header length in 32-bit words."""
        return self.data[FieldOffset.VERSION_AND_IHL] & 0x0F

    def differentiated_services_codepoint(self) -> str:
        tos = self.data[FieldOffset.TYPES_OF_SERVICE]
        return f"{_DSCP_NAMES.get(tos & 0xFC, '')} ({tos})"

    def explicit_congestion_notification(self) -> str:
        return _ECN_NAMES[self.data[FieldOffset.TYPES_OF_SERVICE] & 2]

    def total_length(self) -> int:
        return (self.data[FieldOffset.TOTAL_LENGTH_START] << 2) + self.data[
            FieldOffset.TOTAL_LENGTH_END
        ]

    def identification_number(self) -> str:
        high, low = self._span(
            FieldOffset.IDENTIFICATION_NUMBER_START, FieldOffset.IDENTIFICATION_NUMBER_END
        )
        return f"0x{high:02X}{low:02X} ({(high << 2) + low})"

    def reserved_bit(self) -> int:
        return (self.data[FieldOffset.IP_FLAGS] & 0x80) >> 7

    def dont_fragment_bit(self) -> int:
        return (self.data[FieldOffset.IP_FLAGS] & 0x40) >> 6

    def more_fragments_bit(self) -> int:
        return (self.data[FieldOffset.IP_FLAGS] & 0x20) >> 5

    def fragment_offset(self) -> int:
        return ((self.data[FieldOffset.FRAGMENT_OFFSET_START] & 0x1F) << 2) + self.data[
            FieldOffset.FRAGMENT_OFFSET_END
        ]

    def time_to_live(self) -> int:
        return self.data[FieldOffset.TIME_TO_LIVE]

    def protocol(self, names) -> str:
        number = self.data[FieldOffset.PROTOCOL]
        return f"{names.get(number, '')} ({number})"

    def header_checksum(self) -> str:
        return "0x" + self._hex(
            FieldOffset.HEADER_CHECKSUM_START, FieldOffset.HEADER_CHECKSUM_END
        )

    def ip_address(self, start, end) -> str:
        return ".".join(str(byte) for byte in self._span(start, end))

    def port(self, start, end) -> int:
        return (self.data[start] << 8) | self.data[end]

    def payload(self) -> str:
        """Hex dump of the bytes after the transport ports, up to the original length."""
        return self.data[FieldOffset.DATA : self.length].hex().upper()

    def matches_filter(self, source_ip, destination_ip, port) -> bool:
        """Check the packet against address and port filters; empty or None means any."""
        if source_ip and self.ip_address(
            FieldOffset.SOURCE_IP_ADDRESS_START, FieldOffset.SOURCE_IP_ADDRESS_END
        ) != source_ip:
            return False
        if destination_ip and self.ip_address(
            FieldOffset.DESTINATION_IP_ADDRESS_START, FieldOffset.DESTINATION_IP_ADDRESS_END
        ) != destination_ip:
            return False
        if port is not None and port not in (
            self.port(FieldOffset.SOURCE_PORT_START, FieldOffset.SOURCE_PORT_END),
            self.port(FieldOffset.DESTINATION_PORT_START, FieldOffset.DESTINATION_PORT_END),
        ):
            return False
        return True

    def describe(self, protocol_names) -> str:
        """Return the multi-line report of every decoded field."""
        captured_at = time.strftime("%c %Z", time.localtime(int(self.timestamp)))
        lines = [
            f"Size: {self.length}",
            f"Time: {captured_at}",
            "Destination MAC: "
            + self.mac_address(
                FieldOffset.DESTINATION_MAC_ADDRESS_START,
                FieldOffset.DESTINATION_MAC_ADDRESS_END,
            ),
            "Source MAC: "
            + self.mac_address(
                FieldOffset.SOURCE_MAC_ADDRESS_START, FieldOffset.SOURCE_MAC_ADDRESS_END
            ),
            f"Type: {self.protocol_type()}",
            f"Version: {self.protocol_version()}",
            f"Header Length: {self.header_length()} ({self.header_length() * 4} bytes)",
            "Differentiated Services Codepoint: "
            + self.differentiated_services_codepoint(),
            "Explicit Congestion Notification: "
            + self.explicit_congestion_notification(),
            f"Total Length: {self.total_length()}",
            f"Identification Number: {self.identification_number()}",
            "IP Flags:",
            f"\tReserved bit: {self.reserved_bit()}",
            f"\tDon't fragment bit: {self.dont_fragment_bit()}",
            f"\tMore fragments bit: {self.more_fragments_bit()}",
            f"Fragment Offset: {self.fragment_offset()}",
            f"Time to Live: {self.time_to_live()}",
            f"Protocol: {self.protocol(protocol_names)}",
            f"Header Checksum: {self.header_checksum()}",
            "Source Address: "
            + self.ip_address(
                FieldOffset.SOURCE_IP_ADDRESS_START, FieldOffset.SOURCE_IP_ADDRESS_END
            ),
            "Destination Address: "
            + self.ip_address(
                FieldOffset.DESTINATION_IP_ADDRESS_START,
                FieldOffset.DESTINATION_IP_ADDRESS_END,
            ),
            "Source Port: "
            + str(self.port(FieldOffset.SOURCE_PORT_START, FieldOffset.SOURCE_PORT_END)),
            "Destination Port: "
            + str(
                self.port(
                    FieldOffset.DESTINATION_PORT_START, FieldOffset.DESTINATION_PORT_END
                )
            ),
            f"Data: {self.payload()}",
        ]
        return "\n".join(lines)