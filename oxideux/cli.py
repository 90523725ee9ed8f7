"""Standard console actions: separators, notices, prompts and option menus."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

_INDEX_PATTERN = re.compile(r"\+?[0-9]+")
_SEPARATOR_WIDTH = 10


def _separator(char: str) -> None:
    print(char * _SEPARATOR_WIDTH)


def sep_low() -> None:
    """Print a low separator line."""
    _separator("_")


def sep_thin() -> None:
    """Print a thin separator line."""
    _separator("-")


def sep_thick() -> None:
    """Print a thick separator line."""
    _separator("=")


def notice(what: Any) -> None:
    print(f"<(!)> {what}")


def notice_if_some(what: Optional[Any]) -> None:
    if what is not None:
        notice(what)


def notice_all(what: Iterable[Any]) -> None:
    print()
    for value in what:
        notice(value)
    print()


def out(what: Any) -> None:
    print(what)


def out_if_some(what: Optional[Any]) -> None:
    if what is not None:
        out(what)


def clear() -> None:
    """Push earlier output off the screen."""
    for _ in range(20):
        print()


def prompt() -> str:
    """Read one line from standard input, stripped of surrounding whitespace."""
    print(">> ", end="", flush=True)
    return sys.stdin.readline().strip()


@dataclass(frozen=True)
class DynamicOption:
    """A choice of one of the numbered options."""

    index: int


@dataclass(frozen=True)
class StaticOption:
    """A choice of one of the keyed options."""

    key: str


@dataclass(frozen=True)
class InvalidOption:
    """Input that matched no option."""

    message: str


Choice = Union[DynamicOption, StaticOption, InvalidOption]


class InputOptions:
    """A menu of numbered and keyed options read from standard input."""

    def __init__(self) -> None:
        self._dynamic: list[str] = []
        self._static: dict[str, str] = {}
        self._header_dynamic: Optional[str] = None
        self._header_static: Optional[str] = None

    def add_dynamic(self, label: Any) -> "InputOptions":
        self._dynamic.append(str(label))
        return self

    def add_static(self, key: Any, label: Any) -> "InputOptions":
        self._static[str(key)] = str(label)
        return self

    def set_header_dynamic(self, what: Any) -> "InputOptions":
        self._header_dynamic = str(what)
        return self

    def set_header_static(self, what: Any) -> "InputOptions":
        self._header_static = str(what)
        return self

    def get(self) -> Choice:
        """Print the menu, read a line and resolve it to an option."""
        if self._dynamic:
            out_if_some(self._header_dynamic)
            for index, label in enumerate(self._dynamic):
                out(f"{index} :: {label}")

        if self._static:
            out_if_some(self._header_static)
            for key, label in self._static.items():
                out(f"[{key}] {label}")

        option = prompt()

        if option in self._static:
            return StaticOption(option)

        if _INDEX_PATTERN.fullmatch(option):
            index = int(option)
            if index < len(self._dynamic):
                return DynamicOption(index)

        return InvalidOption(f"'{option}' is not a valid option.")