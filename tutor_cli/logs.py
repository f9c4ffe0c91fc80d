"""
Logging helpers shared by the API client and the command line.

Functions:
    configure_logging(log_file: str | None, verbosity: int):
        Configures logging handlers and verbosity levels.

    log_event(event: str, level: int = logging.INFO, **fields):
        Logs structured events as JSON records on the "tutor_cli" logger.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import json
import logging
import sys

logger = logging.getLogger("tutor_cli")


def configure_logging(log_file: str | None, verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        handlers.append(fh)
    logging.basicConfig(level=level, handlers=handlers, format="%(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)


def log_event(event: str, level: int = logging.INFO, **fields):
    record = {"event": event, **fields}
    logger.log(level, json.dumps(record, ensure_ascii=False, default=str))
