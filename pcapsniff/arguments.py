"""Command-line options of the packet sniffer."""

from __future__ import annotations

import getopt
import re
import sys
from dataclasses import dataclass

_PROGRAM = "pcapsniff"

_USAGE = f"""Usage: {_PROGRAM} [options] filename
  -h, --help        Show this help message
  -f, --file        Set .pcap file from where packets will be read
  -s, --src         Set filter to print packets with provided source IP address
  -d, --dst         Set filter to print packets with provided destination IP address
  -P, --port        Set filter to print packets with provided port"""

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Arguments:
    """Settings chosen on the command line; empty or None filters match anything."""

    path: str
    source_ip: str = ""
    destination_ip: str = ""
    port: int | None = None


def _parse_port(value: str) -> int:
    match = _LEADING_INTEGER.match(value)
    if match is None:
        raise ValueError(f"invalid port: {value!r}")
    return int(match.group(1))


def parse_arguments(argv) -> Arguments:
    """Parse options; help and usage errors print a message and raise SystemExit."""
    try:
        options, _ = getopt.gnu_getopt(
            list(argv), "hf:s:d:P:", ["help", "file=", "src=", "dst=", "port="]
        )
    except getopt.GetoptError as exc:
        print(f"Unknown option '{exc.opt}'. Use -h for help.")
        raise SystemExit(1) from None

    path = ""
    source_ip = ""
    destination_ip = ""
    port = None
    for option, value in options:
        if option in ("-h", "--help"):
            print(_USAGE)
            raise SystemExit(0)
        if option in ("-f", "--file"):
            path = value
        elif option in ("-s", "--src"):
            source_ip = value
        elif option in ("-d", "--dst"):
            destination_ip = value
        elif option in ("-P", "--port"):
            port = _parse_port(value)

    if not path:
        print(
            "No .pcap file path provided. Use -f <filename> or --file=<filename>",
            file=sys.stderr,
        )
        raise SystemExit(1)

    return Arguments(path, source_ip, destination_ip, port)