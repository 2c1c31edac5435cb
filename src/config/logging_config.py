# src/config/logging_config.py

"""Per-run logging configuration for catalog_sync.

Every launch writes to its own ``logs/sync_<timestamp>.log`` file.  All
``catalog_sync.*`` loggers (store, commands, api, mirror, cli) propagate
to the project logger configured here, so a single file holds the full
sequence of remote calls, transitions and mirror writes for the run.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

PROJECT_LOGGER = "catalog_sync"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    verbose: bool = False,
    logs_dir: Path | None = None,
) -> Path:
    """Attach file and console handlers to the ``catalog_sync`` logger.

    Args:
        verbose: Lower the console threshold from WARNING to INFO.
        logs_dir: Override for ``Settings.LOGS_DIR``.

    Returns:
        The path of the log file for this run.  Repeated calls return a
        fresh path but leave the already-installed handlers untouched.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"sync_{stamp}.log"

    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(logging.DEBUG)

    if project_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    project_logger.addHandler(file_handler)
    project_logger.addHandler(console_handler)

    project_logger.debug("Logging initialised, writing to %s", log_file)
    return log_file
