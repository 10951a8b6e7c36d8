import dataclasses
import datetime
from decimal import Decimal
import json
import logging
import traceback
from typing import Any, Optional
import uuid

from asgi_correlation_id import CorrelationIdFilter
from pydantic import BaseModel

from .constants import LOG_SOURCE, LOG_LEVEL

# Atributos propios de LogRecord que no se vuelcan como campos extra
_RESERVED_ATTRS = frozenset([
    "msg", "name", "args", "module", "message", "asctime", "lineno", "thread",
    "threadName", "levelno", "levelname", "funcName", "pathname", "filename",
    "exc_info", "exc_text", "stack_info", "processName", "process",
    "relativeCreated", "created", "msecs", "taskName", "extra", "correlation_id",
])

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class CustomJSONEncoder(json.JSONEncoder):
    """JSON encoder for the values that show up in node map log records."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, uuid.UUID):
            return str(obj)
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, datetime.datetime):
            return obj.isoformat()
        if isinstance(obj, (set, frozenset)):
            return sorted(obj, key=repr)
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json", exclude_none=True)
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return str(obj)
        if callable(obj):
            return getattr(obj, "__qualname__", repr(obj))
        return super().default(obj)


class JSONFormatter(logging.Formatter):
    """Formats each record as a single JSON line."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        dt = datetime.datetime.fromtimestamp(record.created).astimezone()
        return dt.strftime("%Y-%m-%d %H:%M:%S.%f%z")

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict = {
            "timestamp": self.formatTime(record, self.datefmt),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if getattr(record, "correlation_id", None) is not None:
            log_data["correlation_id"] = record.correlation_id

        if record.exc_info:
            exc_type, exc_value, exc_traceback = record.exc_info
            log_data["exc_info"] = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
        else:
            log_data["exc_info"] = None

        if getattr(record, "extra", None):
            log_data.update(record.extra)

        log_data.update({k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS})
        return json.dumps(log_data, cls=CustomJSONEncoder)


def setup_logger_json(
    level: str,
    module_name: str,
) -> logging.Logger:
    """Configure and return a JSON logger for a node map module.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        module_name: Name of the module requesting the logger

    Returns:
        logging.Logger: logger named ``node_map.<module_name>``
    """
    logger = logging.getLogger(f"{LOG_SOURCE}.{module_name}")
    logger.handlers.clear()
    logger.setLevel(_LEVELS[level])
    logger.propagate = False

    logger.addFilter(CorrelationIdFilter())

    console_handler = logging.StreamHandler()
    console_handler.setLevel(_LEVELS[level])
    console_handler.setFormatter(JSONFormatter())
    logger.addHandler(console_handler)

    return logger


def get_logger(module_name: str) -> logging.Logger:
    """Logger del paquete con el nivel configurado en NODE_MAP_LOG_LEVEL."""
    return setup_logger_json(LOG_LEVEL if LOG_LEVEL in _LEVELS else "INFO", module_name)
