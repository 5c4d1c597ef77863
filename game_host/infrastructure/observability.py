"""Structured Logging: JSON and key=value formatters for the game host.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Request extras (path, status, port, host, error_kind, asset_root) surfaced
      in both formats when present
    - setup_logging is idempotent: a second call replaces the handler it installed

Design Decisions:
    - Formatters on stdlib logging: uvicorn runs with log_config=None and its
      records flow through the same root handler
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("path", "status", "port", "host", "error_kind", "asset_root")

_HANDLER_NAME = "game_host"


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable line with extras appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if not extras:
            return line
        head, sep, tail = line.partition("\n")
        pairs = " ".join(f"{k}={v}" for k, v in extras.items())
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "text"):
    """Install the game-host handler on the root logger."""
    for existing in logging.root.handlers[:]:
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
