"""clozemark - cloze exercise markup processing.

Turns author HTML with ``___`` blanks and ``!!text!!`` highlights into
anchored HTML plus the ordered blanks and highlights a renderer needs.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from clozemark.cloze import Cloze, create_cloze
from clozemark.models import (
    Blank,
    ClozeElement,
    ClozeElementType,
    Highlight,
    IncorrectAnswer,
    MediaElement,
    MediaType,
)

__version__ = "0.1.0"

__all__ = [
    "Blank",
    "Cloze",
    "ClozeElement",
    "ClozeElementType",
    "Highlight",
    "IncorrectAnswer",
    "MediaElement",
    "MediaType",
    "create_cloze",
]


def _setup_logging(log_dir: Path, console_level: str = "INFO") -> Path:
    """Configure logging to both console and rotating file.

    Returns:
        Path of the log file.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"clozemark.{os.getpid()}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.debug("Logging configured. Log file: %s", log_file.absolute())
    return log_file
