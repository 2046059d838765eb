# --- Global Configuration & Executable Paths ---

# The run configuration file read by default and written by the 'gen' command.
DEFAULT_CONFIG_FILE = "uefapi-runner.yaml"

# The reserved first argument that writes an example configuration instead of running.
GENERATE_COMMAND = "gen"

# The build tool invoked with the whitespace-split 'build_cmd' arguments.
BUILD_EXECUTABLE = "cargo"

# The virtual machine type QEMU will emulate; 'q35' is the modern x86 chipset OVMF expects.
MACHINE_TYPE = "q35"

# Environment variable selecting the console log level (debug, info, warning, error).
LOG_LEVEL_ENV_VAR = "UEFAPI_RUNNER_LOG"

# --- UEFI Firmware Configuration ---

# The OVMF firmware code image, mapped as the first pflash device.
OVMF_CODE_FILE = "OVMF_CODE.fd"
# The OVMF variable store image, mapped as the second pflash device.
OVMF_VARS_FILE = "OVMF_VARS.fd"

# --- Boot Image Staging ---

# Removable-media boot path the firmware searches; must not be altered.
EFI_BOOT_DIR = ("EFI", "BOOT")
# Prefix for the per-run temporary directory exposed to QEMU as a FAT drive.
STAGING_PREFIX = "uefapi-runner-"

# --- Serial Console Configuration ---
SERIAL_CHARDEV_ID = "char0"
