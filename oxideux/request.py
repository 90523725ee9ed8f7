"""Requests and results exchanged between client and server, and their wire form."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_U64_MAX = 0xFFFFFFFFFFFFFFFF


class RequestError(Exception):
    """Raised for refused requests and malformed request data."""


class RequestKind(IntEnum):
    DISCONNECT = 0
    GET_FILE_COUNT = 1
    DOWNLOAD_FILE_BY_INDEX = 2
    DOWNLOAD_FILE_BY_NAME = 3
    DOWNLOAD_ALL_FILES = 4


@dataclass(frozen=True)
class Request:
    """A client request; ``index`` and ``name`` are set only for the kinds that carry them."""

    kind: RequestKind
    index: Optional[int] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        kind = RequestKind(self.kind)
        object.__setattr__(self, "kind", kind)
        if kind is RequestKind.DOWNLOAD_FILE_BY_INDEX:
            index = self.index
            if isinstance(index, bool) or not isinstance(index, int):
                raise ValueError("DOWNLOAD_FILE_BY_INDEX needs an integer index")
            if not 0 <= index <= _U64_MAX:
                raise ValueError(f"index out of range: {index}")
        elif self.index is not None:
            raise ValueError(f"{kind.name} takes no index")
        if kind is RequestKind.DOWNLOAD_FILE_BY_NAME:
            if not isinstance(self.name, str):
                raise ValueError("DOWNLOAD_FILE_BY_NAME needs a name")
        elif self.name is not None:
            raise ValueError(f"{kind.name} takes no name")


class RequestResult(IntEnum):
    OK = 0
    ERR_UNAUTHORIZED_ACCESS = 1
    ERR_INDEX_OUT_OF_BOUNDS = 2

    def naturalize(self) -> None:
        """Raise RequestError unless the result is OK."""
        if self is RequestResult.ERR_UNAUTHORIZED_ACCESS:
            raise RequestError("Unauthorized access")
        if self is RequestResult.ERR_INDEX_OUT_OF_BOUNDS:
            raise RequestError("Index out of bounds")


class _Reader:
    def __init__(self, data: Union[bytes, bytearray, memoryview]) -> None:
        self._data = bytes(data)
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise RequestError("unexpected end of data")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def u32(self) -> int:
        return _U32.unpack(self.take(_U32.size))[0]

    def u64(self) -> int:
        return _U64.unpack(self.take(_U64.size))[0]


def encode_request(request: Request) -> bytes:
    parts = [_U32.pack(request.kind)]
    if request.kind is RequestKind.DOWNLOAD_FILE_BY_INDEX:
        parts.append(_U64.pack(request.index))
    elif request.kind is RequestKind.DOWNLOAD_FILE_BY_NAME:
        raw = request.name.encode("utf-8")
        parts.append(_U64.pack(len(raw)))
        parts.append(raw)
    return b"".join(parts)


def decode_request(data: Union[bytes, bytearray, memoryview]) -> Request:
    reader = _Reader(data)
    tag = reader.u32()
    try:
        kind = RequestKind(tag)
    except ValueError:
        raise RequestError(f"invalid request variant: {tag}") from None
    if kind is RequestKind.DOWNLOAD_FILE_BY_INDEX:
        return Request(kind, index=reader.u64())
    if kind is RequestKind.DOWNLOAD_FILE_BY_NAME:
        length = reader.u64()
        raw = reader.take(length)
        try:
            name = raw.decode("utf-8")
        except UnicodeDecodeError as error:
            raise RequestError(f"invalid UTF-8 in name: {error}") from None
        return Request(kind, name=name)
    return Request(kind)


def encode_result(result: RequestResult) -> bytes:
    return _U32.pack(RequestResult(result))


def decode_result(data: Union[bytes, bytearray, memoryview]) -> RequestResult:
    tag = _Reader(data).u32()
    try:
        return RequestResult(tag)
    except ValueError:
        raise RequestError(f"invalid result variant: {tag}") from None