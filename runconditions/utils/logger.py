"""
Logging for condition evaluation.

The build console logger (``runconditions.build``) and anything else fetched
through get_logger() writes to stderr and to rotating files under
{RUNCOND_LOG_DIR or user space/.ai/logs}:

- runconditions.log: every record the logger level lets through
- runconditions.errors.log: errors only
- runconditions.json: one JSON object per evaluation line, for tooling
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Optional, Tuple

from runconditions.config import get_log_dir, get_settings
from runconditions.constants import LOG_PREFIX

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_MB = 1024 * 1024


class JsonFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _text_formatter() -> logging.Formatter:
    return logging.Formatter(_TEXT_FORMAT, datefmt=_DATE_FORMAT)


# (file suffix, max bytes, backups, level, formatter factory)
_ROTATING_LOGS: Tuple[Tuple[str, int, int, int, Callable[[], logging.Formatter]], ...] = (
    (".log", 5 * _MB, 3, logging.DEBUG, _text_formatter),
    (".errors.log", 2 * _MB, 2, logging.ERROR, _text_formatter),
    (".json", 5 * _MB, 2, logging.INFO, JsonFormatter),
)


def _add_file_handlers(logger: logging.Logger, log_dir: Path) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    for suffix, max_bytes, backups, level, formatter in _ROTATING_LOGS:
        handler = RotatingFileHandler(
            log_dir / f"{LOG_PREFIX}{suffix}",
            maxBytes=max_bytes,
            backupCount=backups,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(formatter())
        logger.addHandler(handler)


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a logger wired to stderr and the rotating log files.

    Handlers are attached the first time a name is requested; old log files
    are pruned at the same moment. File logging failures degrade to stderr
    only.

    Args:
        name: Logger name
        level: Explicit level; defaults to RUNCOND_LOG_LEVEL
    """
    settings = get_settings()
    logger = logging.getLogger(name)

    if not logger.handlers:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(settings.console_log_level.upper())
        console.setFormatter(_text_formatter())
        logger.addHandler(console)

        if settings.file_logging:
            try:
                cleanup_old_logs(settings.log_retention_days)
                _add_file_handlers(logger, get_log_dir())
            except OSError as e:
                logger.warning(f"File logging unavailable: {e}")

    if level is not None:
        logger.setLevel(level)
    elif not logger.level:
        logger.setLevel(settings.log_level.upper())

    return logger


def cleanup_old_logs(days: int = 30) -> int:
    """Delete this package's log files (rotated backups included) older than ``days``.

    Returns:
        Number of files removed
    """
    log_dir = get_log_dir()
    if not log_dir.is_dir():
        return 0

    cutoff = datetime.now(timezone.utc).timestamp() - days * 86400
    stale = [
        path
        for path in log_dir.glob(f"{LOG_PREFIX}*")
        if path.is_file() and path.stat().st_mtime < cutoff
    ]
    for path in stale:
        path.unlink()
    return len(stale)
