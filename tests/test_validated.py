import pytest

from oxideux.validated import (
    ValidatedDirectory,
    ValidatedIPv4,
    ValidatedPort,
    ValidationError,
)


def test_port_accepts_default_port():
    port = ValidatedPort(2000)
    port.safe_set(49160)
    assert port.value == 49160


def test_port_lower_bound_is_inclusive():
    assert ValidatedPort.check_value(1024) == 1024


def test_port_below_1024_rejected():
    with pytest.raises(ValidationError, match="Invalid port: 1023"):
        ValidatedPort.check_value(1023)


def test_port_above_u16_rejected():
    with pytest.raises(ValidationError, match="Invalid port"):
        ValidatedPort.check_value(70000)


def test_safe_set_keeps_old_value_on_failure():
    port = ValidatedPort(49160)
    with pytest.raises(ValidationError):
        port.safe_set(80)
    assert port.value == 49160


def test_is_valid_raises_for_invalid_held_value():
    port = ValidatedPort(80)
    with pytest.raises(ValidationError, match="Invalid port: 80"):
        port.is_valid()


def test_is_valid_true_for_valid_held_value():
    assert ValidatedIPv4("0.0.0.0").is_valid() is True


@pytest.mark.parametrize("address", ["localhost", "0.0.0.0", "127.0.0.1", "999.1.1.1"])
def test_ipv4_accepted(address):
    assert ValidatedIPv4.check_value(address) == address


@pytest.mark.parametrize(
    "address", ["1.2.3", "1234.1.1.1", "a.b.c.d", "1.2.3.4\n", " 1.2.3.4", ""]
)
def test_ipv4_rejected(address):
    with pytest.raises(ValidationError, match="Invalid IPv4"):
        ValidatedIPv4.check_value(address)


def test_directory_accepts_existing_directory(tmp_path):
    directory = ValidatedDirectory("nowhere")
    directory.safe_set(str(tmp_path))
    assert directory.value == str(tmp_path)


def test_directory_missing(tmp_path):
    with pytest.raises(ValidationError, match="Non-existent directory"):
        ValidatedDirectory.check_value(str(tmp_path / "missing"))


def test_directory_is_file(tmp_path):
    file_path = tmp_path / "file.txt"
    file_path.write_text("data")
    with pytest.raises(ValidationError, match="Is not directory"):
        ValidatedDirectory.check_value(str(file_path))


def test_str_names_class_and_value():
    assert str(ValidatedPort(49160)) == "ValidatedPort(49160)"


def test_equality_depends_on_class_and_value():
    assert ValidatedIPv4("localhost") == ValidatedIPv4("localhost")
    assert ValidatedIPv4("localhost") != ValidatedDirectory("localhost")