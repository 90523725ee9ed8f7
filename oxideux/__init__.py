"""Terminal client and server for copying a directory's files over TCP, with JSON profiles."""

__version__ = "0.1.0"