import logging
import json
import contextvars
from contextlib import contextmanager
from typing import Optional

_schema_ctx = contextvars.ContextVar("schema", default=None)
_column_ctx = contextvars.ContextVar("column", default=None)


class SchemaContextFilter(logging.Filter):
    """Tags log records with the table and column currently being processed."""
    def filter(self, record):
        record.schema = _schema_ctx.get()
        column = _column_ctx.get()
        if column is not None and not hasattr(record, "column"):
            record.column = column
        return True


@contextmanager
def schema_context(schema: str):
    """Context manager to tag log records emitted in this context with a schema name."""
    token = _schema_ctx.set(schema)
    try:
        yield
    finally:
        _schema_ctx.reset(token)


@contextmanager
def column_context(column: str):
    """Tags log records with the column being resolved or built."""
    token = _column_ctx.set(column)
    try:
        yield
    finally:
        _column_ctx.reset(token)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, keyed by table and column when known."""

    # LogRecord attributes that are not caller-supplied extras
    RESERVED = frozenset({
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "funcName", "levelname", "levelno", "lineno", "module",
        "msecs", "message", "msg", "name", "pathname", "process",
        "processName", "relativeCreated", "stack_info", "thread", "threadName",
        "taskName", "schema", "column",
    })

    def format(self, record: logging.LogRecord) -> str:
        """Formats the log record as a JSON string.

        `schema` and `column` come first when set, followed by any extras.
        Exceptions are rendered under `error`.
        """
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        for key in ("schema", "column"):
            value = getattr(record, key, None)
            if value:
                log_record[key] = value

        if record.exc_info:
            log_record["error"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self.RESERVED and not key.startswith("_"):
                log_record[key] = value

        return json.dumps(log_record, default=str)


def configure_logging(level: str = "INFO", json_format: bool = False, replace_handlers: bool = True):
    """Configures the root logger.

    Args:
        level (str): The logging level (default: INFO).
        json_format (bool): Whether to use JSON formatting (default: False).
        replace_handlers (bool): Drop existing root handlers first. When False
            and the root logger already has handlers, nothing is changed.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers and not replace_handlers:
        return

    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.addFilter(SchemaContextFilter())

    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        formatter = logging.Formatter(
            "%(asctime)s - [%(schema)s] - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)

    root_logger.addHandler(handler)

    # DDL echo is noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Gets a named logger."""
    return logging.getLogger(name)
