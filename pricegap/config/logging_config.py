# pricegap/config/logging_config.py

"""Per-run timestamped logging configuration for pricegap.

Each launch creates a dedicated log file inside ``logs/`` named with the
launch timestamp (e.g. ``logs/run_20260214_153045.log``). All
``pricegap.*`` loggers route through this file handler, so the pipeline
stages, storage, CLI and TUI write to the same per-run log.

Data-quality warnings reach the console as well; everything else stays
in the file.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from pricegap.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(console_level: int = logging.WARNING) -> Path:
    """Initialise the root ``pricegap`` logger for the current run.

    Args:
        console_level: Minimum level echoed to stderr. The TUI passes
            ``logging.CRITICAL`` so warnings do not corrupt the screen.

    Returns:
        The :class:`~pathlib.Path` to the log file created for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    root_logger = logging.getLogger("pricegap")
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, TUI relaunch) must not stack handlers
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)

    return log_file
