import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path

from . import config as app_config
from .errors import StagingIOError

logger = logging.getLogger(__name__)


@contextmanager
def staging_directory(parent=None):
    """
    Creates a fresh boot image directory for one run.

    The directory contains an empty `EFI/BOOT` tree and is exposed to QEMU as
    a writable FAT drive. It is removed, with everything in it, when the
    `with` block exits, however it exits.

    Args:
        parent: Directory to create the staging directory in. Defaults to the
                system temporary directory.

    Yields:
        Path: The root of the staging directory.

    Raises:
        StagingIOError: If the directory tree cannot be created.
    """
    try:
        temp_dir = tempfile.TemporaryDirectory(prefix=app_config.STAGING_PREFIX, dir=parent)
    except OSError as e:
        raise StagingIOError(f"Failed to create staging directory: {e}") from e

    with temp_dir:
        root = Path(temp_dir.name)
        boot_dir = root.joinpath(*app_config.EFI_BOOT_DIR)
        try:
            boot_dir.mkdir(parents=True)
        except OSError as e:
            raise StagingIOError(f"Failed to create {boot_dir}: {e}") from e
        logger.debug("Created staging directory %s", root)
        yield root
    logger.debug("Removed staging directory %s", root)


def stage_binary(run_config, root):
    """Moves or copies the built binary to EFI/BOOT/<efi_name> under `root`."""
    source = Path(run_config.binary_path)
    destination = Path(root).joinpath(*app_config.EFI_BOOT_DIR, run_config.efi_name)

    try:
        if run_config.move_binary:
            logger.info("Moving binary to %s", destination)
            shutil.move(str(source), str(destination))
        else:
            logger.info("Copying binary to %s", destination)
            shutil.copy(source, destination)
    except OSError as e:
        verb = "move" if run_config.move_binary else "copy"
        raise StagingIOError(f"Failed to {verb} binary {source} to {destination}: {e}") from e
    return destination
