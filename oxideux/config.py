"""Profile configuration files for the client and the server."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Optional, Union

import platformdirs

from oxideux.validated import ValidatedDirectory, ValidatedIPv4, ValidatedPort

PathLike = Union[str, "Path"]

_DEFAULT_CONFIG = {"profiles": {}}


class ConfigError(Exception):
    """Raised when a configuration file or profile is missing or malformed."""


@dataclass
class ServerProfile:
    """Settings the server runs with."""

    name: str
    parity_root: ValidatedDirectory
    port: ValidatedPort
    mask: ValidatedIPv4


@dataclass
class ClientProfile:
    """Settings the client connects with."""

    name: str
    parity_root: ValidatedDirectory
    port: ValidatedPort
    ipv4: ValidatedIPv4


def _home_dir() -> Path:
    try:
        return Path.home()
    except RuntimeError:
        raise ConfigError("Home directory could not be retrieved.") from None


def _appdata_dir() -> Path:
    return Path(platformdirs.user_data_dir(roaming=False))


def _download_dir() -> Path:
    return Path(platformdirs.user_downloads_dir())


def config_dir() -> Path:
    """The user's local configuration directory."""
    return Path(platformdirs.user_config_dir(roaming=False))


def config_dir_ext(ext: str) -> Path:
    """``ext`` resolved inside the user's configuration directory."""
    return config_dir() / ext


_PLACEHOLDERS = (
    ("~", _home_dir),
    ("{home}", _home_dir),
    ("{config}", config_dir),
    ("{appdata}", _appdata_dir),
    ("{download}", _download_dir),
)


def fill_path_placeholders(string_path: str) -> str:
    """Replace a leading ``~``, ``{home}``, ``{config}``, ``{appdata}`` or ``{download}``."""
    result = string_path
    for placeholder, resolve in _PLACEHOLDERS:
        if result.startswith(placeholder):
            result = str(resolve()) + result[len(placeholder):]
    return result


def _get_key(obj: dict, key: str) -> Any:
    try:
        return obj[key]
    except KeyError:
        raise ConfigError(f"'{key}' key was not found in object {obj!r}") from None


def _get_object(obj: dict, key: str) -> dict:
    value = _get_key(obj, key)
    if not isinstance(value, dict):
        raise ConfigError(f"Expected key '{key}' to be of type Object.")
    return value


def _get_u16(obj: dict, key: str) -> int:
    value = _get_key(obj, key)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFFFF:
        raise ConfigError("Could not interpret value as u16")
    return value


def _get_str(obj: dict, key: str) -> str:
    value = _get_key(obj, key)
    if not isinstance(value, str):
        raise ConfigError("Could not interpret value as str")
    return value


class ProfileStore:
    """Named profiles kept in one JSON configuration file."""

    EXT: ClassVar[str]
    ADDRESS_KEY: ClassVar[str]
    PROFILE_CLASS: ClassVar[type]
    DEFAULT_PARITY_ROOT: ClassVar[str]
    DEFAULT_PORT: ClassVar[int] = 49160
    DEFAULT_ADDRESS: ClassVar[str]

    def __init__(self, config_root: Optional[PathLike] = None) -> None:
        root = config_dir() if config_root is None else Path(config_root)
        self.path = root / self.EXT

    def _read_root(self) -> dict:
        text = self.path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as error:
            raise ConfigError(f"Malformed config file {str(self.path)!r}: {error}") from None
        if not isinstance(data, dict):
            raise ConfigError("Could not get config root object")
        return data

    def _write_root(self, root: dict) -> None:
        with open(self.path, "r+", encoding="utf-8") as file:
            file.write(json.dumps(root, separators=(",", ":"), ensure_ascii=False))
            file.truncate()

    def init_config_file(self) -> bool:
        """Create the file with a default profile if it is missing; return True if created."""
        if self.path.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(_DEFAULT_CONFIG), encoding="utf-8")
        self.create_profile(
            "default", self.DEFAULT_PARITY_ROOT, self.DEFAULT_PORT, self.DEFAULT_ADDRESS
        )
        return True

    def get_profile_names(self) -> list[str]:
        """Names of all profiles, in file order, skipping empty names."""
        profiles = _get_object(self._read_root(), "profiles")
        return [name for name in profiles if name]

    def get_profile(self, profile_name: str):
        """Load one profile, with placeholders in its parity root filled in."""
        profiles = _get_object(self._read_root(), "profiles")
        obj = _get_object(profiles, profile_name)
        path = fill_path_placeholders(_get_str(obj, "parity_root"))
        return self.PROFILE_CLASS(
            name=profile_name,
            parity_root=ValidatedDirectory(path),
            port=ValidatedPort(_get_u16(obj, "port")),
            **{self.ADDRESS_KEY: ValidatedIPv4(_get_str(obj, self.ADDRESS_KEY))},
        )

    def save_profile(self, profile) -> None:
        """Write the profile under its name, replacing any profile of that name."""
        root = self._read_root()
        profiles = _get_object(root, "profiles")
        profiles[profile.name] = {
            "parity_root": profile.parity_root.value,
            "port": profile.port.value,
            self.ADDRESS_KEY: getattr(profile, self.ADDRESS_KEY).value,
        }
        self._write_root(root)

    def erase_profile(self, profile_name: str) -> None:
        """Remove the named profile; absent names are ignored."""
        root = self._read_root()
        _get_object(root, "profiles").pop(profile_name, None)
        self._write_root(root)

    def rename_profile(self, profile_name: str, new_name: str) -> None:
        """Move a profile to a new name that is not yet taken."""
        root = self._read_root()
        profiles = _get_object(root, "profiles")
        if new_name in profiles:
            raise ConfigError(f"Profile '{new_name}' already exists")
        profile = _get_object(profiles, str(profile_name))
        profiles[new_name] = profile
        del profiles[str(profile_name)]
        self._write_root(root)

    def _create(self, profile_name: str, parity_root: str, port: int, address: str) -> None:
        if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 0xFFFF:
            raise ConfigError(f"Port does not fit in 16 bits: {port!r}")
        profile = self.PROFILE_CLASS(
            name=str(profile_name),
            parity_root=ValidatedDirectory(str(parity_root)),
            port=ValidatedPort(port),
            **{self.ADDRESS_KEY: ValidatedIPv4(str(address))},
        )
        self.save_profile(profile)


class ServerProfileStore(ProfileStore):
    """Profiles of the server."""

    EXT = "oxideux/server_config.json"
    ADDRESS_KEY = "mask"
    PROFILE_CLASS = ServerProfile
    DEFAULT_PARITY_ROOT = "{home}/oxideux/source"
    DEFAULT_ADDRESS = "0.0.0.0"

    def create_profile(self, profile_name: str, parity_root: str, port: int, mask: str) -> None:
        """Build a server profile from plain values and save it."""
        self._create(profile_name, parity_root, port, mask)


class ClientProfileStore(ProfileStore):
    """Profiles of the client."""

    EXT = "oxideux/client_config.json"
    ADDRESS_KEY = "ipv4"
    PROFILE_CLASS = ClientProfile
    DEFAULT_PARITY_ROOT = "{download}"
    DEFAULT_ADDRESS = "localhost"

    def create_profile(self, profile_name: str, parity_root: str, port: int, ipv4: str) -> None:
        """Build a client profile from plain values and save it."""
        self._create(profile_name, parity_root, port, ipv4)