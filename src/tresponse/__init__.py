# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""tresponse - one normalized API response per request.

A request handler reports what happened (a boolean, a message, or a raised
exception) and tresponse turns it into a consistent payload::

    {"error": false, "status": 200, ...extra fields}
    {"error": true, "status": 404, "message": "...", "type": "...", ...}

Architecture:
  core.response   ResponseState and the module-level helpers
  core.context    one state per request/task (contextvars)
  core.status     status allow-list, invalid codes fall back to 500
  core.coercion   loose / strict success coercion
  server          Starlette middleware and JSONResponse rendering
"""

__version__ = "1.0.7"

from . import (
    core as core,
)
from .core.response import (
    api,
    detect_error,
    error,
    exception,
    handle,
    has_error,
    info,
    message,
    serialize,
    set_data,
    status,
    success,
)

__all__ = [
    "api",
    "detect_error",
    "error",
    "exception",
    "handle",
    "has_error",
    "info",
    "message",
    "serialize",
    "set_data",
    "status",
    "success",
]
