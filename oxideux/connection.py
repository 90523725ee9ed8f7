"""Framed messages and file transfer over a stream socket."""

from __future__ import annotations

import os
import socket
import struct
from pathlib import Path
from typing import Union

from oxideux.parity import Entry
from oxideux.request import (
    Request,
    RequestResult,
    decode_request,
    decode_result,
    encode_request,
    encode_result,
)

_U32 = struct.Struct("<I")
_CHUNK = 4096
_MIB = 1048576


class Connection:
    """A stream socket speaking the length-prefixed protocol of client and server."""

    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.sock.close()

    def _read_exact(self, size: int) -> bytes:
        buffer = bytearray()
        while len(buffer) < size:
            chunk = self.sock.recv(min(size - len(buffer), 65536))
            if not chunk:
                raise ConnectionError(
                    f"connection closed after {len(buffer)} of {size} bytes"
                )
            buffer += chunk
        return bytes(buffer)

    def _send_framed(self, data: bytes) -> None:
        self.send_u32(len(data))
        self.sock.sendall(data)

    def _read_framed(self) -> bytes:
        return self._read_exact(self.read_u32())

    def shutdown(self, how: int) -> None:
        self.sock.shutdown(how)

    def send_u32(self, value: int) -> None:
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"value does not fit in 32 bits: {value}")
        self.sock.sendall(_U32.pack(value))

    def read_u32(self) -> int:
        return _U32.unpack(self._read_exact(_U32.size))[0]

    def send_string(self, value: str) -> None:
        self._send_framed(value.encode("utf-8"))

    def read_string(self) -> str:
        return self._read_framed().decode("utf-8")

    def send_request(self, request: Request) -> None:
        self._send_framed(encode_request(request))

    def read_request(self) -> Request:
        return decode_request(self._read_framed())

    def send_request_result(self, result: RequestResult) -> RequestResult:
        """Send ``result`` and hand it back, so the caller may naturalize it."""
        self._send_framed(encode_result(result))
        return result

    def read_request_result(self) -> RequestResult:
        return decode_result(self._read_framed())

    def send_file(self, entry: Entry) -> None:
        """Send the entry's length and then the file's contents."""
        self.send_u32(entry.length)
        with open(entry.path, "rb") as source:
            for chunk in iter(lambda: source.read(_CHUNK), b""):
                self.sock.sendall(chunk)

    def read_file(self, output: Union[str, "os.PathLike[str]"]) -> None:
        """Receive a length-prefixed file and write it to ``output``."""
        length = self.read_u32()
        print(f"Downloading file ({length // _MIB} MiB)")
        remaining = length
        with open(Path(output), "wb") as target:
            while remaining > 0:
                chunk = self.sock.recv(min(_CHUNK, remaining))
                if not chunk:
                    raise ConnectionError(
                        f"connection closed with {remaining} of {length} file bytes unread"
                    )
                target.write(chunk)
                remaining -= len(chunk)