import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from . import config as app_config, firmware, logging_utils, pipeline, run_config
from .errors import FirmwareError, RunnerError

logger = logging.getLogger(__name__)


def get_version():
    try:
        return version("uefapi-runner")
    except PackageNotFoundError:
        return "unknown"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="uefapi-runner",
        description="Build a UEFI binary, stage it on a FAT drive and boot it in QEMU with OVMF.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Run '%(prog)s {app_config.GENERATE_COMMAND}' to write an example {app_config.DEFAULT_CONFIG_FILE}.",
    )
    parser.add_argument(
        "config", nargs="?", default=app_config.DEFAULT_CONFIG_FILE, metavar="CONFIG",
        help=f"Path to the run configuration, or '{app_config.GENERATE_COMMAND}' to write an example. "
             f"Default: {app_config.DEFAULT_CONFIG_FILE}.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug messages.")
    parser.add_argument("--debug-file", metavar="PATH", help="Write timestamped debug messages to PATH.")
    return parser


def main(argv=None):
    """Parses command-line arguments and either writes an example config or runs the pipeline."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        logging_utils.configure_logging(logging_utils.console_level(args.verbose), args.debug_file)
    except OSError as e:
        parser.error(f"cannot open debug file {args.debug_file}: {e}")
    logger.info("UEFAPI UEFI Project Runner, Version %s", get_version())

    try:
        if args.config == app_config.GENERATE_COMMAND:
            run_config.generate(app_config.DEFAULT_CONFIG_FILE)
            sys.exit(0)

        loaded = run_config.load(args.config)
        pipeline.run_pipeline(loaded)
    except FirmwareError as e:
        logger.error("%s", e)
        logger.info("%s", firmware.firmware_hint())
        sys.exit(1)
    except RunnerError as e:
        logger.error("%s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        sys.exit(130)
    sys.exit(0)
