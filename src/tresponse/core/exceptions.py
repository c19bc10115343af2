# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Exception hierarchy for tresponse.

Most anomalies seen by the response state are normalized into state
(status downgrade, key suffixing) instead of being raised. The classes here
cover the few paths that do propagate.
"""

from __future__ import annotations

from typing import Any


class TResponseException(Exception):  # noqa: N818 - public name of the package error
    """Base exception for all tresponse errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class DuplicationError(TResponseException):
    """Raised on any attempt to copy, deep-copy or pickle a ResponseState.

    There is exactly one state per request context; a duplicate would let two
    callers diverge on what the response is.
    """

    def __init__(self, message: str = "You cannot clone this class."):
        super().__init__(message)


class InvalidStatusCodeError(TResponseException):
    """Raised for a status code outside the allow-list.

    Only raised in strict-status mode. By default invalid codes are
    downgraded to 500 and never surface to the caller.
    """

    def __init__(self, status: Any):
        super().__init__(
            f"HTTP status code {status!r} is not valid.",
            {"status": str(status)},
        )
        self.status = status
