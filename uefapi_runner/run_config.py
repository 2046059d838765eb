"""
Run configuration model, example generator and loader.

A run is described by a single flat YAML document. `generate` writes a
documented example to the well-known file name, `load` reads one back.
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from . import config as app_config
from .errors import ConfigParseError, ConfigReadError, ConfigWriteError

logger = logging.getLogger(__name__)

# Written verbatim above the serialized fields.
EXAMPLE_HEADER = """\
# uefapi-runner configuration
#
#   project_path  Working directory the build command runs in.
#   auto_build    Run 'cargo <build_cmd>' before every launch.
#   build_cmd     Arguments passed to cargo, split on whitespace.
#   binary_path   The built .efi file, relative to the current directory.
#   efi_name      File name given to the binary under EFI/BOOT.
#   move_binary   Move the binary instead of copying it. Without auto_build
#                 the binary is gone after the first run.
#   qemu_cmd      Path to the qemu-system-x86_64 executable.
#   ovmf_path     Directory holding OVMF_CODE.fd and OVMF_VARS.fd.
#   stdio_serial  Connect the guest serial port to this terminal.
#   log_serial    Also write serial output to log_path (needs stdio_serial).
#   log_path      Serial log file.
#
"""


@dataclass(frozen=True)
class RunConfiguration:
    """Everything needed to build, stage and boot one UEFI binary."""
    project_path: str
    auto_build: bool
    build_cmd: str
    binary_path: str
    efi_name: str
    move_binary: bool
    qemu_cmd: str
    ovmf_path: str
    stdio_serial: bool
    log_serial: bool
    log_path: str

    @property
    def risky_move(self):
        """True when the binary is moved away but never rebuilt."""
        return self.move_binary and not self.auto_build

    def build_args(self):
        return self.build_cmd.split()

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_mapping(cls, data, source="<config>"):
        """
        Validates a parsed document and builds a RunConfiguration from it.

        Args:
            data: The mapping produced by the YAML parser.
            source: Name of the file the mapping came from, for diagnostics.

        Returns:
            A RunConfiguration.

        Raises:
            ConfigParseError: If a field is missing, has the wrong type or
                violates a field invariant.
        """
        if not isinstance(data, dict):
            raise ConfigParseError(f"{source}: configuration root must be a mapping")

        known = {f.name: f for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            logger.warning("%s: ignoring unknown keys: %s", source, ", ".join(unknown))

        values = {}
        for name, field in known.items():
            if name not in data:
                raise ConfigParseError(f"{source}: missing field '{name}'")
            value = data[name]
            expected = bool if field.type is bool else str
            # bool is not accepted for str fields and ints are not accepted for bool fields.
            if type(value) is not expected:
                raise ConfigParseError(
                    f"{source}: field '{name}' must be a {expected.__name__}, got {value!r}"
                )
            values[name] = value

        if values["auto_build"] and not values["build_cmd"].split():
            raise ConfigParseError(f"{source}: 'build_cmd' must not be empty when 'auto_build' is true")
        efi_name = values["efi_name"]
        if not efi_name:
            raise ConfigParseError(f"{source}: 'efi_name' must not be empty")
        if efi_name in (".", "..") or "/" in efi_name or "\\" in efi_name:
            raise ConfigParseError(f"{source}: 'efi_name' must be a single file name, got {efi_name!r}")

        return cls(**values)


def example():
    """Returns the documented example configuration."""
    return RunConfiguration(
        project_path=".",
        auto_build=True,
        build_cmd="build --target x86_64-unknown-uefi --release",
        binary_path="target/x86_64-unknown-uefi/debug/your_bin_name.efi",
        efi_name="BOOTX64.EFI",
        move_binary=True,
        qemu_cmd="/path_to_qemu/qemu-system-x86_64",
        ovmf_path="/path_to_ovmf_files",
        stdio_serial=True,
        log_serial=True,
        log_path="runner-x86_64-release.log",
    )


def dumps(run_config):
    """Serializes a configuration to the YAML text written by `generate`."""
    body = yaml.safe_dump(run_config.to_dict(), sort_keys=False, default_flow_style=False)
    return EXAMPLE_HEADER + body


def loads(text, source="<config>"):
    """Parses YAML text into a RunConfiguration."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"{source}: invalid YAML: {e}") from e
    return RunConfiguration.from_mapping(data, source)


def generate(path=app_config.DEFAULT_CONFIG_FILE):
    """Writes the example configuration to `path` and returns it."""
    run_config = example()
    try:
        Path(path).write_text(dumps(run_config), encoding="utf-8")
    except OSError as e:
        raise ConfigWriteError(f"Failed to write example config to {path}: {e}") from e
    logger.info("Example config written to %s", path)
    return run_config


def load(path=None):
    """Reads and parses the configuration at `path` (default: the well-known file)."""
    path = Path(path or app_config.DEFAULT_CONFIG_FILE)
    logger.info("Loading config from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Failed to read config file {path}: {e}") from e
    run_config = loads(text, str(path))
    logger.debug("Config loaded: %s", run_config)
    return run_config
