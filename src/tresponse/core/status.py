# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""HTTP status allow-list and the validation policy applied to it."""

from __future__ import annotations

import logging
from typing import Any

from .exceptions import InvalidStatusCodeError

logger = logging.getLogger(__name__)

FALLBACK_STATUS = 500

VALID_HTTP_STATUS_CODES: frozenset[int] = frozenset(
    [100, 101]
    + list(range(200, 207))
    + list(range(300, 308))
    + list(range(400, 418))
    + list(range(500, 506))
)


def is_valid_status(code: Any) -> bool:
    """Return True if ``code`` is an int (not a bool) in the allow-list."""
    return isinstance(code, int) and not isinstance(code, bool) and code in VALID_HTTP_STATUS_CODES


def validate_status(code: Any, strict: bool = False) -> int:
    """Normalize a status code against the allow-list.

    Args:
        code: Candidate status code.
        strict: Raise instead of downgrading when the code is not allowed.

    Returns:
        ``code`` when allowed, otherwise ``FALLBACK_STATUS``.

    Raises:
        InvalidStatusCodeError: If ``strict`` and the code is not allowed.
    """
    if is_valid_status(code):
        return code
    if strict:
        raise InvalidStatusCodeError(code)
    logger.warning("Invalid HTTP status code %r, using %d", code, FALLBACK_STATUS)
    return FALLBACK_STATUS
