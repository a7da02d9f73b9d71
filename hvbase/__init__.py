"""Building blocks for network services: errors, CRC, logging, threads, sockets and headers."""

__version__ = "1.20.3"