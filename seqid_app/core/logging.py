"""
JSON log lines for the whole app.

Every module logger is a child of the "seqid" logger, which alone owns a
handler. Context passed with extra= (user_id, blob, backend, counts) is
copied into the JSON object next to the message.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from seqid_app.config import settings

ROOT_LOGGER = "seqid"

# Attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
        root.setLevel(settings.log_level.upper())
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for one module, e.g. get_logger("storage") -> "seqid.storage" """
    return _configure_root().getChild(name)
