"""Logging setup for the ``mhs`` command.

Library modules only create named loggers (``mhs.server``, ``mhs.access``);
the CLI calls ``configure_logging()`` once to route them to stderr with
date and microsecond timestamps::

    2026/10/19 14:03:22.418213 - 127.0.0.1:51234 - GET /ok - 200
"""

import logging
import sys
from datetime import datetime
from typing import TextIO

TIME_FORMAT = "%Y/%m/%d %H:%M:%S.%f"


class MicrosecondFormatter(logging.Formatter):
    """Formatter whose ``asctime`` carries microseconds.

    ``logging.Formatter`` renders times through ``time.strftime``, which
    has no ``%f``.
    """

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        stamp = datetime.fromtimestamp(record.created)
        return stamp.strftime(datefmt or TIME_FORMAT)


def configure_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach a single stderr handler to the ``mhs`` logger.

    Idempotent: calling it again replaces the handler instead of adding
    a second one.
    """
    logger = logging.getLogger("mhs")
    for existing in list(logger.handlers):
        if getattr(existing, "_mhs_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(MicrosecondFormatter("%(asctime)s %(message)s"))
    handler._mhs_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
