# pcapsniff

`pcapsniff` reads the packets in a classic `.pcap` capture file and prints the fields of each one. It reads every packet as an Ethernet frame that carries IPv4 with a 20-byte header, with the two port numbers straight after that header. It prints:

- the original length and the capture time, in local time
- the destination and source MAC addresses, and the EtherType with its name when known (IPv4, IPv6, ARP, VLAN-tagged, LLDP, MPLS)
- the IPv4 fields: version, header length, DSCP, ECN, total length, identification, the three flag bits, fragment offset, TTL, protocol and header checksum
- the source and destination IP addresses and ports
- the bytes after the ports, in hex

You can choose to print only the packets with a given source address, destination address or port.

The package needs Python 3.10 or later. It uses only the standard library.

## Installation

```
pip install .
```

## Command line

```
pcapsniff -f capture.pcap
```

| Option | Meaning |
| --- | --- |
| `-h`, `--help` | Print the usage text and exit with status 0 |
| `-f`, `--file` | The `.pcap` file to read (required) |
| `-s`, `--src` | Print only packets with this source IP address |
| `-d`, `--dst` | Print only packets with this destination IP address |
| `-P`, `--port` | Print only packets whose source or destination port is this number |

A packet is printed only if it passes every filter you give. For example:

```
pcapsniff --file capture.pcap --src 192.0.2.10 --port 53
```

After each packet the command prints a blank line. It does this for packets the filters leave out too.

The command reads until the capture ends or a record is truncated. It then exits with status 1. The end of the file counts as a failed read, so the status is 1 even when every packet was read. The command also exits with status 1 in these cases:

- no file is given
- the port is not a number
- an option is not recognised
- the file cannot be opened, or is not a pcap capture

The command looks up the names of IP protocol numbers, such as `UDP (17)`, in a file named `numberToProtocol.txt` in the current directory. Each line of that file holds a number and a name. If the file is missing, the numbers 146 to 254 show as `-`, and any other number shows with an empty name.

## Library use

```python
from pcapsniff.packet import FieldOffset, load_protocol_names
from pcapsniff.reader import read_packets

names = load_protocol_names("numberToProtocol.txt")

for packet in read_packets("capture.pcap"):
    if packet.matches_filter("192.0.2.10", "", None):
        source = packet.ip_address(
            FieldOffset.SOURCE_IP_ADDRESS_START, FieldOffset.SOURCE_IP_ADDRESS_END
        )
        print(source, packet.protocol(names), packet.time_to_live())
```

- `pcapsniff.reader.PcapReader(path)` opens a capture file. Use it as a context manager and iterate over it to get `Packet` objects. It accepts both byte orders, with microsecond or nanosecond timestamps. It raises `PcapError` when the file cannot be opened, is not a pcap file, or ends partway through a record.
- `pcapsniff.reader.read_packets(path)` yields the packets of a file and closes the file when it is done.
- `pcapsniff.packet.Packet` holds the captured bytes (`data`), the original length (`length`) and the capture time in seconds (`timestamp`). It has one method per field. `describe(protocol_names)` returns the same text that the command prints for that packet. A method that needs bytes the packet does not have raises `IndexError`.
- `pcapsniff.arguments.parse_arguments(argv)` returns an `Arguments` value with `path`, `source_ip`, `destination_ip` and `port`.
- `pcapsniff.cli.main(argv=None)` runs the command and returns its exit status.

## What it does not do

- It does not capture live traffic. It only reads files.
- It does not read pcapng files.
- It does not look at the link type or the IP version before decoding. Every packet is decoded at the fixed IPv4 offsets, so IPv6, ARP and other frames give meaningless field values.

## Running the tests

```
pip install ".[test]"
pytest
```