"""Loggers that share stderr with the tqdm frame progress bar.

Console records go through ``tqdm.write`` so a message emitted mid-render is
printed above the bar rather than through it. Each logger also appends to a
rotating file under ``HILBERT_ANIM_LOG_DIR`` unless ``HILBERT_ANIM_LOG_FILE``
is switched off.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tqdm import tqdm

from hilbert_anim.utilities.env.parsing import _env_flag

LOG_LEVEL_ENV_VAR = "LOG_LEVEL"
LOG_DIR_ENV_VAR = "HILBERT_ANIM_LOG_DIR"
LOG_FILE_ENV_VAR = "HILBERT_ANIM_LOG_FILE"
DEFAULT_LOG_SUBDIR = Path(".hilbert_anim") / "logs"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10 MiB
BACKUP_COUNT = 5


class TqdmHandler(logging.StreamHandler):
    """Stream handler that writes around any active tqdm bars."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def _resolve_log_directory() -> Path:
    log_dir = os.getenv(LOG_DIR_ENV_VAR)
    if log_dir:
        path = Path(log_dir).expanduser()
    else:
        path = Path.home() / DEFAULT_LOG_SUBDIR

    path.mkdir(parents=True, exist_ok=True)
    return path


def _sanitize_logger_name(name: str) -> str:
    """Convert a logger name to a filesystem-friendly filename."""

    sanitized = name.replace("/", "_").replace(os.sep, "_")
    sanitized = sanitized.replace("..", ".")
    return sanitized.replace(".", "_") or "root"


def _configure_logger(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    if logger.handlers:
        # Logger already configured elsewhere; respect existing handlers.
        return

    console = TqdmHandler()
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if _env_flag(LOG_FILE_ENV_VAR, default=True):
        log_filename = (
            _resolve_log_directory() / f"{_sanitize_logger_name(logger.name)}.log"
        )
        file_handler = RotatingFileHandler(
            log_filename,
            maxBytes=MAX_LOG_BYTES,
            backupCount=BACKUP_COUNT,
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger printing through tqdm and, optionally, to a rolling file."""

    level_name = os.getenv(LOG_LEVEL_ENV_VAR, "INFO").upper()
    logger = logging.getLogger(name)
    _configure_logger(logger, getattr(logging, level_name, logging.INFO))
    return logger
