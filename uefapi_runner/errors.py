"""
Exceptions raised by the runner pipeline.

Every step raises a subclass of RunnerError; the entry point reports it once
and exits. Nothing in the pipeline retries.
"""


class RunnerError(Exception):
    """Base class for all errors that end a run."""


# --- Configuration ---

class ConfigError(RunnerError):
    """Raised when the run configuration cannot be read, parsed or written."""


class ConfigReadError(ConfigError):
    """The configuration file is missing or unreadable."""


class ConfigParseError(ConfigError):
    """The configuration file does not match the schema."""


class ConfigWriteError(ConfigError):
    """The example configuration could not be written."""


# --- Build ---

class BuildError(RunnerError):
    """Raised when the project could not be built."""


class BuildSpawnError(BuildError):
    """The build tool could not be started."""


class BuildFailedError(BuildError):
    """The build tool exited with a non-zero status."""

    def __init__(self, message, returncode):
        super().__init__(message)
        self.returncode = returncode


# --- Staging ---

class StagingIOError(RunnerError):
    """The boot image directory could not be created or populated."""


# --- Firmware ---

class FirmwareError(RunnerError):
    """Raised when the OVMF firmware directory is unusable."""


class FirmwarePathError(FirmwareError):
    """The firmware directory does not exist or cannot be resolved."""


class FirmwareMissingError(FirmwareError):
    """One or both firmware images are absent from the firmware directory."""

    def __init__(self, message, missing):
        super().__init__(message)
        self.missing = list(missing)


# --- Emulator ---

class EmulatorError(RunnerError):
    """Raised when QEMU could not be run to completion."""


class EmulatorSpawnError(EmulatorError):
    """The emulator executable could not be started."""


class EmulatorWaitError(EmulatorError):
    """Waiting for the emulator process failed."""
