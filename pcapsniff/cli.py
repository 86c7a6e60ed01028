"""Command that prints the decoded packets of a capture file."""

from __future__ import annotations

import contextlib
import sys

from .arguments import parse_arguments
from .packet import load_protocol_names
from .reader import PcapError, PcapReader

PROTOCOL_TABLE = "numberToProtocol.txt"


def main(argv=None) -> int:
    """Print every packet that passes the filters.

    The capture is read until it ends or a read fails; either way the run
    finishes with status 1, since the end of the capture counts as a failed read.
    """
    try:
        arguments = parse_arguments(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    protocol_names = load_protocol_names(PROTOCOL_TABLE)

    try:
        reader = PcapReader(arguments.path)
    except PcapError as exc:
        print(exc, file=sys.stderr)
        return 1

    with reader, contextlib.suppress(PcapError):
        for packet in reader:
            if packet.matches_filter(
                arguments.source_ip, arguments.destination_ip, arguments.port
            ):
                print(packet.describe(protocol_names))
            print()
    return 1


if __name__ == "__main__":
    sys.exit(main())