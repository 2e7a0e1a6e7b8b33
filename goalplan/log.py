"""
Logging setup for GoalPlan.

Library modules only create ``logging.getLogger(__name__)`` loggers and never
configure handlers. Applications (the ``goalplan`` CLI) call
``setup_logging`` once at startup.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

__all__ = ["KeyValueFormatter", "setup_logging"]


class KeyValueFormatter(logging.Formatter):
    """One line per record: ``<ts> level=<L> logger=<name> msg=<message>``."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="seconds")
        line = f"{ts} level={record.levelname} logger={record.name} msg={record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger at *level*."""
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace handlers so repeated calls do not duplicate output
    root.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.setFormatter(KeyValueFormatter())
    root.addHandler(handler)
