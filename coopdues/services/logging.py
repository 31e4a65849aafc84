"""Logging configuration for the dues API server.

Every record goes to stdout and to ``LOG_FILE``. ``LOG_LEVEL`` sets the
threshold (default: INFO). Ledger services log rejected operations at
WARNING, so ``LOG_LEVEL=WARNING`` still keeps a trail of refused payments
and edits.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from coopdues.config import Settings, get_settings

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def get_log_level(level_name: str) -> int:
    """Resolve a level name such as ``"warning"`` to a logging constant.

    Unknown names resolve to INFO.
    """
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_server_logging(settings: Optional[Settings] = None) -> None:
    """Configure the root logger for the API server.

    Replaces any handlers already installed on the root logger. SQL
    statements are logged only when ``DATABASE_ECHO`` is on.

    Args:
        settings: Application settings (default: the global settings)
    """
    settings = settings or get_settings()
    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    log_level = get_log_level(settings.log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    for handler in (
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(log_path, encoding="utf-8"),
    ):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    if settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    logging.getLogger(__name__).debug(
        "Logging to stdout and %s at %s", log_path, logging.getLevelName(log_level)
    )


__all__ = ["get_log_level", "setup_server_logging"]
