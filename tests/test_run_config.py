import logging
from dataclasses import FrozenInstanceError, replace

import pytest
import yaml

from uefapi_runner import config as app_config
from uefapi_runner import run_config
from uefapi_runner.errors import ConfigParseError, ConfigReadError, ConfigWriteError
from uefapi_runner.run_config import RunConfiguration


# --- Example and Generation Tests ---


def test_example_values():
    """Test that the example configuration carries the documented defaults."""
    config = run_config.example()
    assert config.project_path == "."
    assert config.auto_build is True
    assert config.build_cmd == "build --target x86_64-unknown-uefi --release"
    assert config.binary_path == "target/x86_64-unknown-uefi/debug/your_bin_name.efi"
    assert config.efi_name == "BOOTX64.EFI"
    assert config.move_binary is True
    assert config.qemu_cmd == "/path_to_qemu/qemu-system-x86_64"
    assert config.ovmf_path == "/path_to_ovmf_files"
    assert config.stdio_serial is True
    assert config.log_serial is True
    assert config.log_path == "runner-x86_64-release.log"


def test_generate_writes_well_known_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    written = run_config.generate()
    target = tmp_path / app_config.DEFAULT_CONFIG_FILE
    assert target.exists()
    assert run_config.load() == written


def test_generate_is_byte_identical(tmp_path):
    """Test that generating twice produces exactly the same bytes."""
    first = tmp_path / "first.yaml"
    second = tmp_path / "second.yaml"
    run_config.generate(first)
    run_config.generate(second)
    assert first.read_bytes() == second.read_bytes()


def test_generate_overwrites_existing_file(tmp_path):
    target = tmp_path / "runner.yaml"
    target.write_text("garbage: [")
    run_config.generate(target)
    assert run_config.load(target) == run_config.example()


def test_generated_file_is_documented(tmp_path):
    target = tmp_path / "runner.yaml"
    run_config.generate(target)
    text = target.read_text()
    assert text.startswith("#")
    for name in run_config.example().to_dict():
        assert f"#   {name}" in text


def test_generate_unwritable_destination(tmp_path):
    with pytest.raises(ConfigWriteError, match="Failed to write"):
        run_config.generate(tmp_path / "missing-dir" / "runner.yaml")


# --- Round-trip Tests ---


@pytest.mark.parametrize("overrides", [
    {},
    {"auto_build": False, "build_cmd": "", "move_binary": False},
    {"efi_name": "yes", "log_path": "null", "project_path": "123"},
    {"build_cmd": "build  --release\t--target x86_64-unknown-uefi", "qemu_cmd": "C:\\qemu\\qemu.exe"},
])
def test_round_trip(overrides):
    """Test that serializing then parsing returns an equal configuration."""
    original = replace(run_config.example(), **overrides)
    assert run_config.loads(run_config.dumps(original)) == original


def test_configuration_is_immutable():
    config = run_config.example()
    with pytest.raises(FrozenInstanceError):
        config.auto_build = False


def test_build_args_split_on_whitespace():
    config = replace(run_config.example(), build_cmd="  build\t--target  x86_64-unknown-uefi\n--release ")
    assert config.build_args() == ["build", "--target", "x86_64-unknown-uefi", "--release"]


@pytest.mark.parametrize("move_binary, auto_build, expected", [
    (True, False, True),
    (True, True, False),
    (False, False, False),
    (False, True, False),
])
def test_risky_move(move_binary, auto_build, expected):
    config = replace(run_config.example(), move_binary=move_binary, auto_build=auto_build)
    assert config.risky_move is expected


# --- Loading Tests ---


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigReadError, match="Failed to read config file"):
        run_config.load(tmp_path / "absent.yaml")


def test_load_directory_is_read_error(tmp_path):
    with pytest.raises(ConfigReadError):
        run_config.load(tmp_path)


def test_load_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("project_path: [unclosed\n")
    with pytest.raises(ConfigParseError, match="invalid YAML"):
        run_config.load(path)


def _document(**overrides):
    data = run_config.example().to_dict()
    data.update(overrides)
    return data


def test_root_must_be_mapping():
    with pytest.raises(ConfigParseError, match="must be a mapping"):
        run_config.loads("- a\n- b\n")


def test_empty_document_rejected():
    with pytest.raises(ConfigParseError, match="must be a mapping"):
        run_config.loads("")


def test_missing_field_rejected():
    data = _document()
    del data["ovmf_path"]
    with pytest.raises(ConfigParseError, match="missing field 'ovmf_path'"):
        RunConfiguration.from_mapping(data)


@pytest.mark.parametrize("name, value", [
    ("auto_build", "yes"),
    ("auto_build", 1),
    ("move_binary", None),
    ("project_path", 5),
    ("efi_name", True),
    ("log_path", ["a"]),
])
def test_wrong_type_rejected(name, value):
    with pytest.raises(ConfigParseError, match=f"field '{name}'"):
        RunConfiguration.from_mapping(_document(**{name: value}))


def test_empty_build_cmd_rejected_when_auto_building():
    with pytest.raises(ConfigParseError, match="build_cmd"):
        RunConfiguration.from_mapping(_document(auto_build=True, build_cmd="   "))


def test_empty_build_cmd_allowed_without_auto_build():
    config = RunConfiguration.from_mapping(_document(auto_build=False, build_cmd=""))
    assert config.build_args() == []


def test_empty_efi_name_rejected():
    with pytest.raises(ConfigParseError, match="efi_name"):
        RunConfiguration.from_mapping(_document(efi_name=""))


def test_unknown_keys_are_ignored_with_warning(caplog):
    text = yaml.safe_dump(_document(extra_flag=True))
    with caplog.at_level(logging.WARNING):
        config = run_config.loads(text, "runner.yaml")
    assert config == run_config.example()
    assert "extra_flag" in caplog.text


def test_parse_error_names_source(tmp_path):
    path = tmp_path / "runner.yaml"
    path.write_text(yaml.safe_dump(_document(auto_build="true")))
    with pytest.raises(ConfigParseError, match="runner.yaml"):
        run_config.load(path)


@pytest.mark.parametrize("efi_name", [".", "..", "EFI/BOOTX64.EFI", "..\\BOOTX64.EFI"])
def test_efi_name_must_be_single_component(efi_name):
    """Test that names which would not land as a file directly under EFI/BOOT are rejected."""
    with pytest.raises(ConfigParseError, match="single file name"):
        RunConfiguration.from_mapping(_document(efi_name=efi_name))
