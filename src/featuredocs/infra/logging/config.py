from __future__ import annotations

"""
Logging Configuration Models.

A documentation run logs to stderr (stdout is reserved for --json output)
and optionally to a rotating file.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings of the logging subsystem.

    Attributes:
        level: Minimum severity name ('DEBUG', 'INFO', ...).
        console: Emit records on stderr.
        log_file: Rotating log file, if any.
        max_bytes: Rollover threshold of the log file.
        backup_count: Archived log files kept.
        console_fmt: Format of stderr records.
        file_fmt: Format of file records.
        datefmt: Timestamp format of file records.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s [%(name)s] %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%dT%H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Settings derived from the --debug and --log-file flags."""
        return cls(level="DEBUG" if debug else "INFO", log_file=log_file or None)
