"""Logging configuration for got"""
import logging
import sys
from pathlib import Path
from typing import Optional

LOG_DIR = Path.home() / '.got'
LOG_FILE_NAME = 'got.log'

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
SHORT_FORMAT = '[%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Loggers named after these prefixes are shortened by get_logger
STRIPPED_PREFIXES = ('got.', 'services.')

# GitPython and PyGithub log every request at DEBUG
QUIET_LIBRARIES = ('git', 'github')


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name when stderr is a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color and sys.stderr.isatty():
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _file_handler(directory: Path, level: int) -> logging.Handler:
    directory.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(directory / LOG_FILE_NAME, mode='w')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if debug:
        handler.setFormatter(ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(ColoredFormatter(fmt=SHORT_FORMAT))
    return handler


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    tui_mode: bool = False,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure the root logger.

    The dashboard owns the terminal, so in TUI mode records only go to
    ``got.log``. Outside it they go to stderr, and also to the file under
    ``--debug``.

    Args:
        verbose: Show INFO records
        debug: Show DEBUG records with timestamps
        tui_mode: Write to the log file only
        log_dir: Directory for the log file (defaults to ~/.got)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if tui_mode else level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if tui_mode or debug:
        file_level = logging.DEBUG if (debug or verbose) else logging.INFO
        root_logger.addHandler(_file_handler(log_dir or LOG_DIR, file_level))
    if not tui_mode:
        root_logger.addHandler(_console_handler(level, debug))

    for library in QUIET_LIBRARIES:
        logging.getLogger(library).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named without the package prefix (``got.services.x`` -> ``x``)."""
    for prefix in STRIPPED_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
