"""Loguru logging configuration for the lookup client and CLI.

Library modules log through ``loguru.logger`` directly; this module only
decides where records go. Stderr gets either a readable line format or
serialized JSON records, and a rotating file sink is added when a
``log_dir`` is configured.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
_LOG_FILE_NAME = "address-lookup.log"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, *, json_logs: bool = False) -> None:
    """Replace Loguru's default sink with the configured ones.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for a log file rotated every 24 hours
            and retained 7 days.
        json_logs: Emit serialized JSON records on stderr instead of the
            line format.
    """
    level = log_level.upper()

    logger.remove()
    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / _LOG_FILE_NAME,
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
