"""JSON log output for mediapass."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "taskName"}

_PASS_ATTRS = {
    "media_path": "media",
    "pass_index": "index",
    "total_passes": "total",
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``timestamp`` (UTC), ``level``, ``message``, ``logger``, ``pass``
    while a pass is running, ``context`` for ``extra=`` fields and
    ``exception`` when exc_info is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name

        current_pass = {
            key: getattr(record, attr)
            for attr, key in _PASS_ATTRS.items()
            if getattr(record, attr, None) is not None
        }
        if current_pass:
            entry["pass"] = current_pass

        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
            and key not in _PASS_ATTRS
            and key != "pass_tag"
            and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
