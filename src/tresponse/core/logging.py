# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Logging that knows about the response being built.

Every record is tagged with the request's correlation ID and, when a
ResponseState is bound to the current context, with that response's outcome.
A host that wants those tags calls ``configure_logging()`` once at startup;
the package itself only ever logs through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from .config import get_config
from .context import peek_response

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Correlation ID of the request being handled, if any."""
    return _correlation_id.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Generator[str, None, None]:
    """Tag every record logged inside the block with a correlation ID.

    Args:
        correlation_id: ID supplied by the caller (e.g. a request header).
            A new UUID4 is used when it is missing or empty.

    Yields:
        The correlation ID in effect.
    """
    cid = correlation_id or str(uuid.uuid4())
    token = _correlation_id.set(cid)
    try:
        yield cid
    finally:
        _correlation_id.reset(token)


def response_outcome() -> dict[str, Any] | None:
    """Error flag and status of the bound response, or None when none is bound."""
    state = peek_response()
    if state is None:
        return None
    return {"error": state.error, "status": state.status}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, carrying the correlation ID and response outcome."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        outcome = response_outcome()
        if outcome is not None:
            log_data["response"] = outcome

        # Status downgrades and captures are the records worth locating
        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text for terminals: ``... [cid] [404 error] message``."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        # Copy so other handlers see the untouched record
        record = logging.makeLogRecord(record.__dict__)

        tags = []
        correlation_id = get_correlation_id()
        if correlation_id:
            tags.append(f"[{correlation_id[:8]}]")
        outcome = response_outcome()
        if outcome is not None:
            tags.append(f"[{outcome['status']} {'error' if outcome['error'] else 'ok'}]")
        if tags:
            record.msg = " ".join(tags) + " " + str(record.msg)

        return super().format(record)


def configure_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Install the response-aware formatters on the root logger.

    Arguments left as None come from ``TRESPONSE_LOG_LEVEL``,
    ``TRESPONSE_LOG_FORMAT`` (``json``/``text``; unset picks JSON unless
    stderr is a terminal) and ``TRESPONSE_LOG_FILE``. The log file, when
    set, always receives JSON.
    """
    config = get_config()

    if level is None:
        level = config.log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_format is None:
        format_env = config.log_format.lower()
        if format_env in ("json", "text"):
            json_format = format_env == "json"
        else:
            json_format = not sys.stderr.isatty()

    if log_file is None:
        log_file = config.log_file

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(JSONFormatter() if json_format else TextFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)
