import logging
import subprocess

from . import config as app_config
from .errors import BuildFailedError, BuildSpawnError

logger = logging.getLogger(__name__)


def run_build(run_config, executable=None):
    """Runs the build tool in the project directory and waits for it to finish."""
    executable = executable or app_config.BUILD_EXECUTABLE
    args = [executable, *run_config.build_args()]
    logger.info("Building project in %s: %s", run_config.project_path, subprocess.list2cmdline(args))

    try:
        # stdout is inherited so cargo's progress shows up live.
        process = subprocess.Popen(args, cwd=run_config.project_path)
    except OSError as e:
        raise BuildSpawnError(
            f"Failed to run build command '{executable}' in {run_config.project_path}: {e}"
        ) from e

    returncode = process.wait()
    if returncode != 0:
        raise BuildFailedError(f"Build failed: '{subprocess.list2cmdline(args)}' exited with status {returncode}", returncode)
    logger.info("Build successful")
