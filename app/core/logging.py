"""
Structured JSON logging.

Every record carries the service name and environment, plus the request id
of the HTTP request or websocket it was emitted under.
"""
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pythonjsonlogger import jsonlogger

from app.core.config import settings

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

LOG_FORMAT = "%(timestamp) %(level) %(name) %(message)"

# Chatty third-party loggers held at WARNING
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "multipart")


class RecordJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        request_id = request_id_var.get()
        if request_id:
            log_record["request_id"] = request_id

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.app_name
        log_record["environment"] = settings.environment


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """Install the JSON handler on the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    root.setLevel(level or settings.log_level)
    if any(isinstance(handler.formatter, RecordJsonFormatter) for handler in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(RecordJsonFormatter(LOG_FORMAT))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
