"""Logging configuration for the appblock CLI.

Library modules only create module-level loggers; this module attaches
handlers once the CLI knows the requested verbosity: Rich output on
stderr and a plain-text log file in the state directory.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from appblock.core.paths import get_log_path

LOGGER_NAME = "appblock"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    console: Console | None = None,
    log_path: Path | None = None,
) -> logging.Logger:
    """Attach console and file handlers to the appblock logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        verbose: Show DEBUG messages on the console and in the log file.
        quiet: Only show errors on the console.
        console: Rich console for terminal output (stderr if None).
        log_path: Log file location. Defaults to the state directory.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)

    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=verbose,
        rich_tracebacks=verbose,
    )
    rich_handler.setLevel(console_level)
    logger.addHandler(rich_handler)

    path = log_path or get_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot open log file %s: %s", path, e)
    else:
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
