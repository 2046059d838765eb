import logging

from . import build, firmware, process, staging

logger = logging.getLogger(__name__)


def run_pipeline(run_config, staging_parent=None):
    """
    Builds, stages and boots the configured UEFI binary.

    Steps run strictly in order and the first failure ends the run by
    raising a RunnerError. The staging directory is removed on every path
    once it has been created.

    Args:
        run_config: The loaded RunConfiguration.
        staging_parent: Directory the staging directory is created in.
                        Defaults to the system temporary directory.

    Returns:
        int: The emulator's exit status.
    """
    if run_config.risky_move:
        logger.warning("Moving binary away but not auto-building, this may cause issues")

    if run_config.auto_build:
        build.run_build(run_config)
    else:
        logger.info("Auto-build disabled, using existing binary %s", run_config.binary_path)

    with staging.staging_directory(staging_parent) as root:
        staging.stage_binary(run_config, root)
        images = firmware.locate_firmware(run_config.ovmf_path)
        args = process.build_qemu_args(run_config, images, root)
        return process.run_qemu(args)
