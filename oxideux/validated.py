"""Values that carry their own validation rule."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_IPV4_PATTERN = re.compile(r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}")


class ValidationError(ValueError):
    """Raised when a value fails its validation rule."""


@dataclass
class ValidatedValue(Generic[T]):
    """A value that may be checked against the rule of its class.

    The held value is not checked on construction; use ``is_valid`` or
    ``safe_set`` to enforce the rule.
    """

    value: T

    @classmethod
    def check_value(cls, value: Any) -> Any:
        """Return ``value`` if it satisfies the rule, else raise ValidationError."""
        return value

    def is_valid(self) -> bool:
        """Return True if the held value is valid; raise ValidationError otherwise."""
        self.check_value(self.value)
        return True

    def safe_set(self, value: T) -> None:
        """Replace the held value only if the new one is valid."""
        self.value = self.check_value(value)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class ValidatedDirectory(ValidatedValue[str]):
    """A path that must name an existing directory."""

    @classmethod
    def check_value(cls, value: str) -> str:
        path = Path(value)
        if not path.exists():
            raise ValidationError("Non-existent directory")
        if not path.is_dir():
            raise ValidationError("Is not directory")
        return value


class ValidatedPort(ValidatedValue[int]):
    """A TCP port outside the privileged range."""

    @classmethod
    def check_value(cls, value: int) -> int:
        if (
            isinstance(value, bool)
            or not isinstance(value, int)
            or value < 1024
            or value > 0xFFFF
        ):
            raise ValidationError(f"Invalid port: {value}")
        return value


class ValidatedIPv4(ValidatedValue[str]):
    """A dotted-quad address, or the name ``localhost``."""

    @classmethod
    def check_value(cls, value: str) -> str:
        if value == "localhost":
            return value
        if not isinstance(value, str) or _IPV4_PATTERN.fullmatch(value) is None:
            raise ValidationError(f"Invalid IPv4: {value}")
        return value