#!/usr/bin/env python3
"""
Shared logging utilities for uefapi-runner.

Provides severity-prefixed console output, coloured when attached to a
terminal, and optional timestamped debug logging to file.
"""

import logging
import os
import sys

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.styles import Style

from . import config as app_config

PACKAGE_LOGGER = "uefapi_runner"

LEVEL_PREFIXES = {
    logging.DEBUG: ("class:debug", "Debug: "),
    logging.INFO: ("class:info", "Info: "),
    logging.WARNING: ("class:warning", "Warning: "),
    logging.ERROR: ("class:error", "Error: "),
    logging.CRITICAL: ("class:error", "Error: "),
}

CONSOLE_STYLE = Style.from_dict({
    "debug": "ansibrightblack",
    "info": "ansigreen",
    "warning": "ansiyellow bold",
    "error": "ansired bold",
})

LEVEL_NAMES = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class ConsoleHandler(logging.Handler):
    """Writes records as 'Info: message' lines, styling the prefix on a terminal."""

    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream or sys.stderr

    def emit(self, record):
        try:
            style_class, prefix = LEVEL_PREFIXES.get(record.levelno, ("", ""))
            message = self.format(record)
            if self.stream.isatty():
                print_formatted_text(
                    FormattedText([(style_class, prefix), ("", message)]),
                    style=CONSOLE_STYLE, file=self.stream,
                )
            else:
                self.stream.write(f"{prefix}{message}\n")
                self.stream.flush()
        except Exception:
            self.handleError(record)


def console_level(verbose=False, environ=None):
    """Picks the console level from --verbose, then the environment, then INFO."""
    if verbose:
        return logging.DEBUG
    environ = os.environ if environ is None else environ
    name = environ.get(app_config.LOG_LEVEL_ENV_VAR, "").strip().lower()
    return LEVEL_NAMES.get(name, logging.INFO)


def configure_logging(level=logging.INFO, debug_file=None, stream=None):
    """
    Attaches the console handler, and a file handler if requested, to the
    package logger. Replaces handlers from any previous call.

    Args:
        level: Minimum level shown on the console.
        debug_file: Path of a file receiving every record with a timestamp,
                    or None if debug logging is disabled.
        stream: Console stream; defaults to stderr.

    Returns:
        logging.Logger: The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = ConsoleHandler(stream)
    console.setLevel(level)
    logger.addHandler(console)

    if debug_file:
        file_handler = logging.FileHandler(debug_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("[%(created).6f] %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if debug_file else level)
    return logger
