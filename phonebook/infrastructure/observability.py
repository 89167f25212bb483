"""Structured Logging — one root handler for app, access and server logs.

Invariants:
    - Exactly one phonebook handler on the root logger, however often setup_logging runs
    - Request fields set by the access log (method, path, status_code...) appear as
      top-level JSON keys; storage fields (error_code, error_kind) likewise
    - uvicorn's own access logger is muted: phonebook.access already logs every request
"""

import logging
import json
from datetime import datetime, timezone

REQUEST_FIELDS = ("method", "path", "status_code", "content_length", "duration_ms")
ERROR_FIELDS = ("error_code", "error_kind")

_HANDLER_NAME = "phonebook"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s — %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per line; absent request/error fields are omitted."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in REQUEST_FIELDS + ERROR_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def _build_formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    return logging.Formatter(_TEXT_FORMAT)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the phonebook handler on the root logger and align uvicorn's loggers."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(_build_formatter(fmt))
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # uvicorn installs its own handlers; send its records through ours instead
    for name in ("uvicorn", "uvicorn.error"):
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
    logging.getLogger("uvicorn.access").disabled = True
