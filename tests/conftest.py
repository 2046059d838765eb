import logging
import stat
from dataclasses import replace

import pytest

from uefapi_runner import run_config
from uefapi_runner.logging_utils import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drops handlers installed by main() so they never outlive a test's captured streams."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_script(tmp_path):
    """Writes an executable /bin/sh script and returns its path."""
    def _make(name, body):
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body + "\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path
    return _make


@pytest.fixture
def firmware_dir(tmp_path):
    """An OVMF directory holding both firmware images."""
    directory = tmp_path / "ovmf"
    directory.mkdir()
    (directory / "OVMF_CODE.fd").write_bytes(b"\x00" * 16)
    (directory / "OVMF_VARS.fd").write_bytes(b"\x00" * 16)
    return directory


@pytest.fixture
def binary(tmp_path):
    """A 10-byte stand-in for a built .efi file."""
    path = tmp_path / "project" / "app.efi"
    path.parent.mkdir()
    path.write_bytes(b"MZ12345678")
    return path


@pytest.fixture
def make_config(tmp_path, binary, firmware_dir):
    """Builds a RunConfiguration for a pre-built binary, with overrides."""
    def _make(**overrides):
        base = replace(
            run_config.example(),
            project_path=str(binary.parent),
            auto_build=False,
            binary_path=str(binary),
            move_binary=False,
            qemu_cmd=str(tmp_path / "no-such-qemu"),
            ovmf_path=str(firmware_dir),
            stdio_serial=False,
            log_serial=False,
            log_path=str(tmp_path / "serial.log"),
        )
        return replace(base, **overrides)
    return _make


@pytest.fixture
def staging_parent(tmp_path):
    """Parent directory for staging directories, so tests can check what is left behind."""
    directory = tmp_path / "staging"
    directory.mkdir()
    return directory
