"""Centralized logging configuration."""
import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

session_id_ctx: ContextVar[Optional[str]] = ContextVar("session_id", default=None)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_type: str = "json",
    enabled: bool = True,
    console: bool = False,
) -> None:
    """Configure application logging.

    The interactive screen owns stdout, so the console handler is opt-in
    and writes to stderr.
    """

    if not enabled:
        logging.disable(logging.CRITICAL)
        return
    logging.disable(logging.NOTSET)

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(session_id)s] %(message)s'
        )

    handlers: List[logging.Handler] = []

    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    if not handlers:
        handlers.append(logging.NullHandler())

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(SessionIdFilter())

    logging.basicConfig(
        level=numeric_level,
        handlers=handlers,
        force=True
    )


class SessionIdFilter(logging.Filter):
    """Stamp every record with the current session id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = session_id_ctx.get() or "-"
        return True


class JsonFormatter(logging.Formatter):
    """Format logs as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "session_id": getattr(record, "session_id", "-"),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in ("function", "execution_time_ms", "error", "attempts"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
