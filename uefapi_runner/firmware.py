import logging
from collections import namedtuple
from pathlib import Path

from . import config as app_config
from .errors import FirmwareMissingError, FirmwarePathError

logger = logging.getLogger(__name__)

FirmwareImages = namedtuple("FirmwareImages", ["code", "vars"])


def firmware_hint():
    """Returns the hint printed after a firmware error."""
    return f"Hint: This tool needs {app_config.OVMF_CODE_FILE} and {app_config.OVMF_VARS_FILE} to run"


def locate_firmware(ovmf_path):
    """
    Resolves the OVMF directory and checks both firmware images are present.

    Only existence is checked; the images are handed to QEMU untouched.

    Args:
        ovmf_path: The configured firmware directory.

    Returns:
        FirmwareImages: Absolute paths of the code and variable store images.

    Raises:
        FirmwarePathError: If the directory cannot be resolved.
        FirmwareMissingError: If either image is missing.
    """
    try:
        directory = Path(ovmf_path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise FirmwarePathError(f"Failed to resolve OVMF path {ovmf_path}: {e}") from e
    if not directory.is_dir():
        raise FirmwarePathError(f"OVMF path {directory} is not a directory")

    images = FirmwareImages(
        code=directory / app_config.OVMF_CODE_FILE,
        vars=directory / app_config.OVMF_VARS_FILE,
    )
    missing = [image.name for image in images if not image.exists()]
    if missing:
        raise FirmwareMissingError(
            f"OVMF files not found in {directory}: missing {', '.join(missing)} "
            f"(expected {app_config.OVMF_CODE_FILE} and {app_config.OVMF_VARS_FILE})",
            missing,
        )
    logger.debug("Using OVMF firmware from %s", directory)
    return images
