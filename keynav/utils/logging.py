"""Logging setup for keynav.

Standard Logger Initialization Pattern
--------------------------------------
Modules use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

and leave handler configuration to the application. The CLI calls
setup_logging(); get_logger() is for code that runs standalone inside a
TUI and needs file logging without touching the terminal.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from keynav.config.constants import KEYNAV_CONFIG_DIR, LOG_FILENAME

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT)
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def get_logger(name: str, log_file: Optional[Path] = None) -> logging.Logger:
    """Get a logger that writes to the keynav log file."""
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.addHandler(_file_handler(log_file or KEYNAV_CONFIG_DIR / LOG_FILENAME))
        logger.setLevel(logging.INFO)

    return logger


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure the keynav logger tree for CLI use.

    Warnings and above always reach stderr; --verbose lowers that to DEBUG.
    A log file is attached only when one is given.
    """
    root = logging.getLogger("keynav")
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in list(root.handlers):
        if getattr(handler, "_keynav_cli", False):
            root.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    console_handler._keynav_cli = True
    root.addHandler(console_handler)

    if log_file is not None:
        file_handler = _file_handler(log_file)
        file_handler._keynav_cli = True
        root.addHandler(file_handler)
