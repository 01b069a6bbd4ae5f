"""
Logging for the card search service.

Every server start writes a fresh session log next to LOG_FILE, named
``<stem>_<YYYYmmdd_HHMMSS>.log``. The console gets one line per event;
the session file gets timestamps, logger names and line numbers.
"""
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, List

DEFAULT_LOG_FILE = "logs/cardsearch.log"
DEFAULT_KEEP_SESSIONS = 5
SESSION_MAX_BYTES = 10 * 1024 * 1024
SESSION_BACKUPS = 10

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

# Per-request chatter from the HTTP stack stays in the session file only
NOISY_LOGGERS = ("uvicorn.access", "httpx")


def session_logs(log_file: str) -> List[Path]:
    """Existing session logs for ``log_file``, newest first."""
    base = Path(log_file)
    if not base.parent.exists():
        return []
    return sorted(base.parent.glob(f"{base.stem}_*.log"), reverse=True)


def prune_session_logs(log_file: str, keep: int) -> List[Path]:
    """
    Delete all but the newest ``keep`` session logs.

    Returns:
        Paths that were removed
    """
    removed = []
    for old_log in session_logs(log_file)[max(keep, 0):]:
        try:
            old_log.unlink()
        except OSError as e:
            print(f"WARNING: could not remove old log {old_log}: {e}", file=sys.stderr)
            continue
        removed.append(old_log)
    return removed


def _quiet(names: Iterable[str]) -> None:
    for name in names:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(
    log_file: str = DEFAULT_LOG_FILE,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    keep_sessions: int = DEFAULT_KEEP_SESSIONS,
) -> Path:
    """
    Route all loggers to the console and to a new session log file.

    Older session logs beyond ``keep_sessions`` (counting the new one) are
    deleted first. The session file rolls over at 10MB.

    Args:
        log_file: Base log path; its directory is created if missing
        console_level: Console threshold (LOG_LEVEL)
        file_level: Session file threshold
        keep_sessions: Session files to retain, including this one

    Returns:
        Path of the session log file
    """
    base = Path(log_file)
    base.parent.mkdir(parents=True, exist_ok=True)
    prune_session_logs(log_file, keep_sessions - 1)

    session_log = base.parent / f"{base.stem}_{datetime.now():%Y%m%d_%H%M%S}.log"

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = RotatingFileHandler(
        session_log,
        maxBytes=SESSION_MAX_BYTES,
        backupCount=SESSION_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.setLevel(min(console_level, file_level))
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)
    _quiet(NOISY_LOGGERS)

    logging.getLogger(__name__).info(
        "Logging configured: console=%s, session log=%s (%s), keeping %d sessions",
        logging.getLevelName(console_level),
        session_log,
        logging.getLevelName(file_level),
        keep_sessions,
    )
    return session_log
