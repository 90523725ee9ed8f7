"""Listing of the files kept in a parity root."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

_U32_MASK = 0xFFFFFFFF

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class Entry:
    """A file in the parity root; ``length`` is its size truncated to 32 bits."""

    name: str
    path: Path
    length: int


def get_file_entry(path: PathLike) -> Entry:
    """Describe the file at ``path``; raise ValueError if it is not a regular file."""
    path = Path(path)
    if not path.is_file():
        raise ValueError(f"Path is not a file: {str(path)!r}")
    length = path.stat().st_size & _U32_MASK
    return Entry(name=path.name, path=path, length=length)


def get_file_entries(path: PathLike) -> list[Entry]:
    """Describe every non-directory entry directly inside ``path``."""
    entries = []
    with os.scandir(path) as listing:
        for item in listing:
            if item.is_dir(follow_symlinks=False):
                continue
            length = item.stat(follow_symlinks=False).st_size & _U32_MASK
            entries.append(Entry(name=item.name, path=Path(item.path), length=length))
    return entries