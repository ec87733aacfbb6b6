"""Process-wide logger for shiftboard.

Every record carries a short run id so that log lines from one server
process can be told apart when several instances write to the same sink.
"""
from __future__ import annotations

import logging
import uuid

from shiftboard.config import settings

_RUN_ID = uuid.uuid4().hex[:8]


def get_run_id() -> str:
    """Return the id of the current process run."""
    return _RUN_ID


class _RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID
        return True


def _configure() -> logging.Logger:
    log = logging.getLogger("shiftboard")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.addFilter(_RunIdFilter())
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(run_id)s] %(name)s: %(message)s")
        )
        log.addHandler(handler)
    log.setLevel(settings.LOG_LEVEL.upper())
    return log


logger = _configure()
