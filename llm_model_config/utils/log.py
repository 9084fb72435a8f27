"""Process-wide logger for model configuration lookups.

Console output goes to stderr at the level named by
``LLM_MODEL_CONFIG_LOG_LEVEL`` (WARNING when unset). An optional file
handler records everything at DEBUG with ``extra=`` context appended as JSON.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


LOG_LEVEL_ENV = "LLM_MODEL_CONFIG_LOG_LEVEL"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName", "stacklevel"}


class StructuredFormatter(logging.Formatter):
    """UTC ISO-8601 timestamps plus a JSON tail of the record's extra fields."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return stamp.strftime("%Y-%m-%dT%H:%M:%S.") + f"{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {
            name: value
            for name, value in vars(record).items()
            if name not in _STANDARD_ATTRS and not name.startswith("_")
        }
        if not context:
            return line
        try:
            tail = json.dumps(context, sort_keys=True, ensure_ascii=True, default=str)
        except (TypeError, ValueError):
            tail = str(context)
        return f"{line} | {tail}"


class ModelConfigLogger:
    """Thin wrapper owning the console handler and at most one log file."""

    def __init__(self, name: str = "llm_model_config"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        if not self.logger.handlers:
            level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(getattr(logging, level_name, logging.WARNING))
            console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
            self.logger.addHandler(console)

        self._file_handler: Optional[logging.Handler] = None
        self._file_handler_path: Optional[Path] = None

    @property
    def file_handler_path(self) -> Optional[Path]:
        return self._file_handler_path

    def attach_file_handler(self, log_file: Path) -> Path:
        """Send DEBUG and above to ``log_file``, replacing any previous file."""
        if self._file_handler is not None and self._file_handler_path == log_file:
            return log_file
        self.detach_file_handler()

        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(StructuredFormatter("%(asctime)s [%(levelname)s] %(message)s"))
        self.logger.addHandler(handler)
        self._file_handler = handler
        self._file_handler_path = log_file
        return log_file

    def detach_file_handler(self) -> None:
        if self._file_handler is None:
            return
        self.logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None
        self._file_handler_path = None

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.warning(message, *args, **kwargs)


_logger: Optional[ModelConfigLogger] = None


def get_logger() -> ModelConfigLogger:
    """Return the shared logger, creating it on first use."""
    global _logger
    if _logger is None:
        _logger = ModelConfigLogger()
    return _logger


def enable_file_logging(log_file: Path) -> Path:
    """Also write the shared logger's output to ``log_file``."""
    logger = get_logger()
    logger.attach_file_handler(log_file)
    logger.debug("[logging] File logging enabled", extra={"path": str(log_file)})
    return log_file
