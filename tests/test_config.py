import json
from pathlib import Path

import pytest

from oxideux.config import (
    ClientProfile,
    ClientProfileStore,
    ConfigError,
    ServerProfile,
    ServerProfileStore,
    config_dir,
    config_dir_ext,
    fill_path_placeholders,
)
from oxideux.validated import ValidatedDirectory, ValidatedIPv4, ValidatedPort


@pytest.fixture
def server_store(tmp_path):
    store = ServerProfileStore(tmp_path)
    store.init_config_file()
    return store


@pytest.fixture
def client_store(tmp_path):
    store = ClientProfileStore(tmp_path)
    store.init_config_file()
    return store


def test_fill_home_placeholders():
    home = str(Path.home())
    assert fill_path_placeholders("~/data") == home + "/data"
    assert fill_path_placeholders("{home}/oxideux/source") == home + "/oxideux/source"


def test_fill_config_placeholder():
    assert fill_path_placeholders("{config}/x") == str(config_dir()) + "/x"


def test_placeholder_only_at_start():
    assert fill_path_placeholders("/tmp/~/{home}") == "/tmp/~/{home}"


def test_config_dir_ext():
    assert config_dir_ext("oxideux") == config_dir() / "oxideux"


def test_init_creates_default_server_profile(tmp_path):
    store = ServerProfileStore(tmp_path)
    assert store.init_config_file() is True
    assert store.path == tmp_path / "oxideux/server_config.json"
    assert store.get_profile_names() == ["default"]
    profile = store.get_profile("default")
    assert profile.port.value == 49160
    assert profile.mask.value == "0.0.0.0"
    assert profile.parity_root.value == str(Path.home()) + "/oxideux/source"
    assert store.init_config_file() is False


def test_init_creates_default_client_profile(tmp_path):
    store = ClientProfileStore(tmp_path)
    assert store.init_config_file() is True
    profile = store.get_profile("default")
    assert profile.ipv4.value == "localhost"
    assert profile.port.value == 49160
    assert profile.parity_root.value == fill_path_placeholders("{download}")


def test_create_and_get_round_trip(server_store, tmp_path):
    server_store.create_profile("alpha", str(tmp_path), 5000, "127.0.0.1")
    profile = server_store.get_profile("alpha")
    assert profile == ServerProfile(
        name="alpha",
        parity_root=ValidatedDirectory(str(tmp_path)),
        port=ValidatedPort(5000),
        mask=ValidatedIPv4("127.0.0.1"),
    )
    assert server_store.get_profile_names() == ["default", "alpha"]


def test_save_writes_compact_json(client_store, tmp_path):
    profile = ClientProfile(
        name="beta",
        parity_root=ValidatedDirectory(str(tmp_path)),
        port=ValidatedPort(2000),
        ipv4=ValidatedIPv4("10.0.0.1"),
    )
    client_store.save_profile(profile)
    text = client_store.path.read_text(encoding="utf-8")
    assert " " not in text.replace(str(tmp_path), "")
    data = json.loads(text)
    assert data["profiles"]["beta"] == {
        "parity_root": str(tmp_path),
        "port": 2000,
        "ipv4": "10.0.0.1",
    }


def test_save_existing_keeps_position(server_store, tmp_path):
    server_store.create_profile("second", str(tmp_path), 3000, "0.0.0.0")
    server_store.create_profile("default", str(tmp_path), 4000, "0.0.0.0")
    assert server_store.get_profile_names() == ["default", "second"]
    assert server_store.get_profile("default").port.value == 4000


def test_rename_profile(server_store):
    server_store.rename_profile("default", "main")
    assert server_store.get_profile_names() == ["main"]
    assert server_store.get_profile("main").port.value == 49160


def test_rename_to_existing_name_fails(server_store, tmp_path):
    server_store.create_profile("other", str(tmp_path), 3000, "0.0.0.0")
    with pytest.raises(ConfigError, match="already exists"):
        server_store.rename_profile("default", "other")
    assert server_store.get_profile_names() == ["default", "other"]


def test_rename_missing_profile_fails(server_store):
    with pytest.raises(ConfigError):
        server_store.rename_profile("ghost", "new")


def test_erase_profile(client_store):
    client_store.erase_profile("default")
    assert client_store.get_profile_names() == []


def test_erase_missing_profile_is_ignored(client_store):
    client_store.erase_profile("ghost")
    assert client_store.get_profile_names() == ["default"]


def test_get_missing_profile_fails(client_store):
    with pytest.raises(ConfigError):
        client_store.get_profile("ghost")


def test_empty_profile_names_are_skipped(tmp_path):
    store = ClientProfileStore(tmp_path)
    store.path.parent.mkdir(parents=True)
    store.path.write_text(json.dumps({"profiles": {"": {}, "x": {}}}), encoding="utf-8")
    assert store.get_profile_names() == ["x"]


@pytest.mark.parametrize("port", [70000, "49160", -1, True])
def test_bad_port_in_file(tmp_path, port):
    store = ServerProfileStore(tmp_path)
    store.path.parent.mkdir(parents=True)
    data = {"profiles": {"p": {"parity_root": "/", "port": port, "mask": "0.0.0.0"}}}
    store.path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(ConfigError):
        store.get_profile("p")


def test_missing_key_in_profile(tmp_path):
    store = ServerProfileStore(tmp_path)
    store.path.parent.mkdir(parents=True)
    data = {"profiles": {"p": {"parity_root": "/", "port": 5000}}}
    store.path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(ConfigError, match="'mask' key was not found"):
        store.get_profile("p")


def test_root_not_object(tmp_path):
    store = ServerProfileStore(tmp_path)
    store.path.parent.mkdir(parents=True)
    store.path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError, match="Could not get config root object"):
        store.get_profile_names()


def test_profiles_not_object(tmp_path):
    store = ServerProfileStore(tmp_path)
    store.path.parent.mkdir(parents=True)
    store.path.write_text('{"profiles": []}', encoding="utf-8")
    with pytest.raises(ConfigError, match="type Object"):
        store.get_profile_names()


def test_save_without_file_fails(tmp_path):
    store = ServerProfileStore(tmp_path)
    with pytest.raises(FileNotFoundError):
        store.create_profile("x", str(tmp_path), 5000, "0.0.0.0")


def test_create_rejects_oversized_port(server_store, tmp_path):
    with pytest.raises(ConfigError):
        server_store.create_profile("x", str(tmp_path), 70000, "0.0.0.0")
    assert server_store.get_profile_names() == ["default"]