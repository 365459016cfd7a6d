"""Loguru sinks for the API process and the CLI.

Records go to stderr as text, except those bound with
``json_output=True`` which are serialized as JSON lines. Setting
``log_dir`` adds ``civiclens-api.log`` there, rotated daily and kept for
a week.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
LOG_FILE_NAME = "civiclens-api.log"


def _wants_json(record: dict) -> bool:
    return bool(record["extra"].get("json_output", False))


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Replace every existing sink with the CivicLens configuration.

    Args:
        log_level: Minimum level, any case.
        log_dir: Directory for the rotating log file; created if missing.

    Raises:
        ValueError: If ``log_level`` is not a Loguru level name.
    """
    level = logger.level(log_level.upper()).name

    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT, filter=lambda record: not _wants_json(record))
    logger.add(sys.stderr, level=level, serialize=True, filter=_wants_json)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(log_path / LOG_FILE_NAME, level=level, format=_LOG_FORMAT, rotation="24h", retention="7 days")
