"""
Log file layout for compensation runs.

Each run writes to a log directory:

- combined.log: every partner_comp message at INFO and above
- warnings_errors.log: WARNING and above, e.g. MD pools that do not add up
- engine_events.log: the engines package only (DEBUG with --debug)
- debug_detail.log: everything at DEBUG, only when debug is on

Warnings are also echoed to the console.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Set

ENGINE_LOGGER = "partner_comp.engines"

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(levelname)-8s %(message)s"

LOG_FILES = (
    "combined.log",
    "warnings_errors.log",
    "engine_events.log",
    "debug_detail.log",
)

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

_LOGGING_CONFIGURED = False
_open_log_files: Set[Path] = set()


def clear_logs(log_dir: Path) -> None:
    """Delete the previous run's log files from ``log_dir``."""
    for name in LOG_FILES:
        path = log_dir / name
        if not path.exists():
            continue
        try:
            path.unlink()
        except OSError as e:
            logging.getLogger(__name__).warning(f"Could not delete {path}: {e}")


def _rotating_handler(filename: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=filename,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    _open_log_files.add(filename)
    return handler


def _detach_handlers(logger: logging.Logger, close: bool = False) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if close:
            handler.close()


def setup_logging(log_dir: Path, debug: bool = False, clear_existing: bool = True) -> None:
    """
    Attach the console and rotating file handlers. Only the first call in a
    process has any effect; call ``reset_logging`` to configure again.

    Args:
        log_dir: Created if missing.
        debug: Lower the engine and root levels to DEBUG and add
            debug_detail.log.
        clear_existing: Start from empty log files instead of appending.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    if clear_existing:
        clear_logs(log_dir)

    level = logging.DEBUG if debug else logging.INFO
    file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    root = logging.getLogger()
    _detach_handlers(root)
    root.setLevel(level)

    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)
    root.addHandler(_rotating_handler(log_dir / "combined.log", logging.INFO, file_formatter))
    root.addHandler(_rotating_handler(log_dir / "warnings_errors.log", logging.WARNING, file_formatter))
    if debug:
        root.addHandler(_rotating_handler(log_dir / "debug_detail.log", logging.DEBUG, file_formatter))

    # Engine messages also propagate to the root handlers above
    engine = logging.getLogger(ENGINE_LOGGER)
    _detach_handlers(engine)
    engine.setLevel(level)
    engine.addHandler(_rotating_handler(log_dir / "engine_events.log", level, file_formatter))
    engine.propagate = True

    _LOGGING_CONFIGURED = True


def reset_logging() -> None:
    """Close every handler setup_logging attached so it can run again."""
    global _LOGGING_CONFIGURED
    _detach_handlers(logging.getLogger(), close=True)
    _detach_handlers(logging.getLogger(ENGINE_LOGGER), close=True)
    _open_log_files.clear()
    _LOGGING_CONFIGURED = False
