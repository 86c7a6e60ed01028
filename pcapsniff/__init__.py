"""Read classic .pcap capture files and decode the Ethernet, IPv4 and port fields of each packet."""

__version__ = "0.1.0"
__all__ = ["__version__"]