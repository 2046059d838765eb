import logging
import subprocess

from . import config as app_config
from .errors import EmulatorSpawnError, EmulatorWaitError

logger = logging.getLogger(__name__)


def option_value(value):
    """Escapes a value for a QEMU key=value option list, where ',' separates options."""
    return str(value).replace(",", ",,")


def serial_chardev_spec(run_config):
    """Returns the -chardev value for the stdio serial console."""
    chardev_id = app_config.SERIAL_CHARDEV_ID
    if run_config.log_serial:
        return f"stdio,id={chardev_id},logfile={option_value(run_config.log_path)}"
    return f"stdio,id={chardev_id}"


def build_qemu_args(run_config, firmware, staging_root):
    """Constructs the list of arguments for the QEMU command."""
    args = [
        run_config.qemu_cmd,
        "-machine", app_config.MACHINE_TYPE,
        "-drive", f"if=pflash,format=raw,file={option_value(firmware.code)}",
        "-drive", f"if=pflash,format=raw,file={option_value(firmware.vars)}",
        "-drive", f"format=raw,file=fat:rw:{option_value(staging_root)}",
    ]
    # log_serial alone does nothing; the log file is only attached to the stdio console.
    if run_config.stdio_serial:
        args.extend([
            "-chardev", serial_chardev_spec(run_config),
            "-serial", f"chardev:{app_config.SERIAL_CHARDEV_ID}",
        ])
    return args


def format_command(args):
    """Formats an argument list one argument per line, shell-quoted."""
    formatted_command = f"{args[0]} \\\n"
    formatted_command += " \\\n".join([f"    {subprocess.list2cmdline([arg])}" for arg in args[1:]])
    return formatted_command


def run_qemu(args):
    """Executes the QEMU command in the foreground and returns its exit status."""
    logger.info("Starting QEMU with the following command:\n%s", format_command(args))

    try:
        process = subprocess.Popen(args)
    except OSError as e:
        raise EmulatorSpawnError(f"Failed to run QEMU executable '{args[0]}': {e}") from e

    try:
        logger.info("QEMU started")
        returncode = process.wait()
    except KeyboardInterrupt:
        process.terminate()
        process.wait()
        raise
    except OSError as e:
        raise EmulatorWaitError(f"Failed to wait for QEMU: {e}") from e

    logger.info("QEMU exited with status: %s", returncode)
    return returncode
