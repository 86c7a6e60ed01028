[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcapsniff"
version = "0.1.0"
description = "Print the Ethernet, IPv4 and port fields of packets in classic .pcap capture files, with optional address and port filters."
requires-python = ">=3.10"
dependencies = []
keywords = ["pcap", "packet", "ethernet", "ipv4", "network", "capture"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pcapsniff = "pcapsniff.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pcapsniff"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
