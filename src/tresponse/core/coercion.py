# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Boolean coercion of operation outcomes.

Two named modes decide whether an outcome counts as success:

STRICT
    Only the literal ``True`` is a success.

LOOSE
    Falsy: ``None``, ``False``, ``0``, ``0.0``, ``""``, ``"0"`` and empty
    lists, tuples, dicts and sets. Everything else is truthy. This differs
    from plain ``bool()`` only for the string ``"0"``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class CoercionMode(StrEnum):
    """How an outcome value is turned into a success flag."""

    LOOSE = "loose"
    STRICT = "strict"


_FALSY_STRINGS = frozenset({"", "0"})


def loose_truth(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value not in _FALSY_STRINGS
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) > 0
    return bool(value)


def strict_truth(value: Any) -> bool:
    return value is True


def coerce(value: Any, mode: CoercionMode | str = CoercionMode.LOOSE) -> bool:
    """Coerce an outcome to a success flag using the given mode."""
    if CoercionMode(mode) is CoercionMode.STRICT:
        return strict_truth(value)
    return loose_truth(value)
