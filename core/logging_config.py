# core/logging_config.py
"""
Logging setup shared by the whole application.

``setup_logging`` is called once from ``main.py``; modules obtain their
logger with ``get_logger(__name__)``.
"""
import json
import logging
from datetime import datetime, timezone

from core.config import settings

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_configured = False


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str = None, json_format: bool = None) -> logging.Logger:
    global _configured
    root = logging.getLogger()
    if _configured:
        return root

    level = (level or settings.LOG_LEVEL).upper()
    json_format = settings.LOG_JSON if json_format is None else json_format

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(SIMPLE_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)

    # SQL statements are only wanted when DATABASE_ECHO is on
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
