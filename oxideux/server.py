"""Interactive server: manage server profiles and serve the parity root's files."""

from __future__ import annotations

import argparse
import socket
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from oxideux import cli
from oxideux.app import App, Command
from oxideux.config import (
    ConfigError,
    ServerProfile,
    ServerProfileStore,
    fill_path_placeholders,
)
from oxideux.connection import Connection
from oxideux.parity import get_file_entries, get_file_entry
from oxideux.request import RequestKind, RequestResult
from oxideux.validated import ValidationError

_NEW_PROFILE_ROOT = "{home}/oxideux/source"
_NEW_PROFILE_PORT = 49160
_NEW_PROFILE_MASK = "0.0.0.0"


@dataclass
class ServerData:
    """State shared by the server's screens."""

    store: ServerProfileStore = field(default_factory=ServerProfileStore)
    profile_names: list[str] = field(default_factory=list)
    current_profile: Optional[ServerProfile] = None
    notices: list[str] = field(default_factory=list)

    def push_notice(self, message: Any) -> None:
        self.notices.append(str(message))

    def refresh_cli(self) -> None:
        """Clear the screen, show pending notices and forget them."""
        cli.clear()
        cli.notice_all(self.notices)
        self.notices.clear()

    def refresh_profile_names(self) -> None:
        self.profile_names = self.store.get_profile_names()


def _open_directory(path: Path) -> None:
    if sys.platform.startswith("win"):
        opener = "explorer"
    elif sys.platform == "darwin":
        opener = "open"
    else:
        opener = "xdg-open"
    subprocess.run([opener, str(path)], capture_output=True, check=False)


def _state_pick_profile(data: ServerData, command: Command) -> None:
    data.refresh_profile_names()
    data.refresh_cli()

    options = cli.InputOptions()
    options.set_header_dynamic("PICK A PROFILE:").set_header_static("__________")
    for name in data.profile_names:
        options.add_dynamic(name)
    (
        options.add_static("a", "Create new profile")
        .add_static("r", "Refresh profiles")
        .add_static("c", "Open config directory")
        .add_static("q", "Terminate program")
    )

    choice = options.get()
    if isinstance(choice, cli.DynamicOption):
        name = data.profile_names[choice.index]
        data.current_profile = data.store.get_profile(name)
        command.queue_state("manage_profile")
    elif isinstance(choice, cli.StaticOption):
        if choice.key == "a":
            try:
                data.store.create_profile(
                    f"profile #{len(data.profile_names)}",
                    _NEW_PROFILE_ROOT,
                    _NEW_PROFILE_PORT,
                    _NEW_PROFILE_MASK,
                )
            except (OSError, ConfigError):
                pass
        elif choice.key == "r":
            data.refresh_profile_names()
        elif choice.key == "c":
            try:
                _open_directory(data.store.path.parent)
            except OSError as error:
                data.push_notice(error)
        elif choice.key == "q":
            command.exit()
    else:
        data.push_notice(choice.message)


def _profile_errors(profile: ServerProfile) -> list[str]:
    errors = []
    checks = (
        ("Parity root", profile.parity_root),
        ("Port", profile.port),
        ("Mask", profile.mask),
    )
    for label, value in checks:
        try:
            value.is_valid()
        except ValidationError as error:
            errors.append(f"{label}: {error}.")
    if errors:
        errors.append(
            f"Due to {len(errors)} previous error(s), the server may not be started."
        )
    return errors


def _state_manage_profile(data: ServerData, command: Command) -> None:
    data.refresh_cli()
    profile = data.current_profile

    errors = _profile_errors(profile)
    for error in errors:
        cli.notice(error)
    print()

    cli.out(f"Profile: {profile.name}")
    cli.out(f"Parity root: {profile.parity_root.value}")
    cli.out(f"Port: {profile.port.value}")
    cli.out(f"Mask: {profile.mask.value}")
    print()

    options = cli.InputOptions()
    if not errors:
        options.add_static("s", "Start server")
    (
        options.add_static("cn", "Change name")
        .add_static("cr", "Change parity root")
        .add_static("cp", "Change port")
        .add_static("cm", "Change mask")
        .add_static("erase", "Erase the profile (permanently)")
        .add_static("q", "Return")
    )

    next_states = {
        "s": "start_server",
        "cn": "change_name",
        "cr": "change_parity_root",
        "cp": "change_port",
        "cm": "change_mask",
        "q": "pick_profile",
    }

    choice = options.get()
    if isinstance(choice, cli.StaticOption):
        if choice.key == "erase":
            try:
                data.store.erase_profile(profile.name)
            except (OSError, ConfigError) as error:
                data.push_notice(f"Error erasing file: {error}")
            else:
                command.queue_state("pick_profile")
        else:
            command.queue_state(next_states[choice.key])
    elif isinstance(choice, cli.InvalidOption):
        data.push_notice(choice.message)


def _state_change_name(data: ServerData, command: Command) -> None:
    data.refresh_cli()
    profile = data.current_profile

    cli.notice("Leave blank to cancel.")
    print()
    cli.out("Changing: name")
    cli.out(f"Current: {profile.name}")

    new_name = cli.prompt()
    if not new_name:
        command.queue_state("manage_profile")
        return

    try:
        data.store.rename_profile(profile.name, new_name)
    except (OSError, ConfigError) as error:
        data.push_notice(error)
        return
    profile.name = new_name
    command.queue_state("manage_profile")


def _parse_u16(text: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits:
        if not text:
            raise ValueError("cannot parse integer from empty string")
        raise ValueError("invalid digit found in string")
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError("invalid digit found in string")
    value = int(digits)
    if value > 0xFFFF:
        raise ValueError("number too large to fit in target type")
    return value


def _change_property(
    label: str, attribute: str, parse: Callable[[str], Any]
) -> Callable[[ServerData, Command], None]:
    def state(data: ServerData, command: Command) -> None:
        data.refresh_cli()
        profile = data.current_profile
        validated = getattr(profile, attribute)

        cli.notice("Leave blank to cancel.")
        print()
        cli.out(f"Changing: {label}")
        cli.out(f"Current: {validated.value}")

        text = cli.prompt()
        if not text:
            command.queue_state("manage_profile")
            return

        try:
            parsed = parse(text)
        except (ValueError, ConfigError) as error:
            data.push_notice(error)
            return

        try:
            validated.safe_set(parsed)
        except ValidationError as error:
            data.push_notice(error)
            return
        command.queue_state("save_updated_profile")

    return state


def _state_save_updated_profile(data: ServerData, command: Command) -> None:
    data.refresh_cli()
    profile = data.current_profile

    cli.out(f"Changes have been made to the following profile: {profile.name}")
    cli.out("Would you like to save these changes?")
    print()

    options = cli.InputOptions()
    options.add_static("y", "Yes, save").add_static("n", "No, do not save")

    choice = options.get()
    if isinstance(choice, cli.StaticOption):
        if choice.key == "y":
            try:
                data.store.save_profile(profile)
            except (OSError, ConfigError) as error:
                data.push_notice(f"Error saving profile: {error}")
            else:
                data.push_notice("Profile successfully saved.")
        command.queue_state("manage_profile")
    elif isinstance(choice, cli.InvalidOption):
        data.push_notice(choice.message)


def _state_start_server(data: ServerData, command: Command) -> None:
    try:
        serve(data.current_profile)
    except Exception as error:  # any failure ends the session, not the program
        data.push_notice(f"Server terminated (ERROR): {error}")
    else:
        data.push_notice("Server terminated (OK)")
    command.queue_state("manage_profile")


def build_app(data: ServerData) -> App[ServerData]:
    """An App with every server screen registered and the profile picker queued."""
    app = App(data)
    app.register_state("pick_profile", _state_pick_profile)
    app.register_state("manage_profile", _state_manage_profile)
    app.register_state("change_name", _state_change_name)
    app.register_state(
        "change_parity_root",
        _change_property("parity root", "parity_root", fill_path_placeholders),
    )
    app.register_state("change_port", _change_property("port", "port", _parse_u16))
    app.register_state("change_mask", _change_property("mask", "mask", str))
    app.register_state("save_updated_profile", _state_save_updated_profile)
    app.register_state("start_server", _state_start_server)
    app.queue_state("pick_profile")
    return app


def handle_client(profile: ServerProfile, conn: Connection) -> None:
    """Read one request from ``conn`` and answer it from the profile's parity root.

    Refused requests are reported to the peer and then raised as RequestError.
    """
    request = conn.read_request()
    root = Path(profile.parity_root.value)
    kind = request.kind

    if kind is RequestKind.DISCONNECT:
        conn.shutdown(socket.SHUT_RDWR)
    elif kind is RequestKind.GET_FILE_COUNT:
        entries = get_file_entries(root)
        conn.send_request_result(RequestResult.OK)
        conn.send_u32(len(entries))
    elif kind is RequestKind.DOWNLOAD_FILE_BY_INDEX:
        entries = get_file_entries(root)
        if request.index >= len(entries):
            conn.send_request_result(RequestResult.ERR_INDEX_OUT_OF_BOUNDS).naturalize()
        entry = entries[request.index]
        conn.send_request_result(RequestResult.OK)
        conn.send_string(entry.name)
        conn.send_file(entry)
    elif kind is RequestKind.DOWNLOAD_FILE_BY_NAME:
        file_path = root / request.name
        file_path.resolve(strict=True)
        if not file_path.is_relative_to(root):
            conn.send_request_result(RequestResult.ERR_UNAUTHORIZED_ACCESS).naturalize()
        entry = get_file_entry(file_path)
        conn.send_request_result(RequestResult.OK)
        conn.send_file(entry)
    elif kind is RequestKind.DOWNLOAD_ALL_FILES:
        entries = get_file_entries(root)
        conn.send_request_result(RequestResult.OK)
        conn.send_u32(len(entries))
        for entry in entries:
            conn.send_string(entry.name)
            conn.send_file(entry)
            conn.read_request_result()


def serve(profile: ServerProfile) -> None:
    """Listen on the profile's mask and port, answering one request per connection."""
    host = profile.mask.value
    port = profile.port.value
    address = f"{host}:{port}"
    with socket.create_server((host, port)) as listener:
        print(
            f"Listening for connections on {address}\n"
            f"Parity root: {profile.parity_root.value}"
        )
        while True:
            try:
                stream, peer = listener.accept()
            except OSError as error:
                print(f"Connection error: {error}")
                continue
            print(f"Connection established: {peer}")
            with Connection(stream) as conn:
                try:
                    handle_client(profile, conn)
                except Exception as error:  # one bad client must not stop the server
                    print(f"Connection terminated: {error!r}")
                else:
                    print("Connection terminated: OK")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oxideux-server", description="Serve the files of a parity root."
    )
    parser.add_argument(
        "--config-root",
        default=None,
        help="directory holding the configuration (defaults to the user's config dir)",
    )
    args = parser.parse_args(argv)

    store = ServerProfileStore(args.config_root)
    store.init_config_file()
    app = build_app(ServerData(store=store))
    while app.update():
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())