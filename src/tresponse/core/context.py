# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Scoping of the current ResponseState.

There is one state per logical request, not per process. The state lives in
a ``ContextVar``: asyncio tasks and new threads start from a copy of (or an
empty) context, so concurrent requests never write to the same instance.

Usage::

    from tresponse.core.context import response_context

    with response_context() as state:
        handle_request()          # module-level helpers act on ``state``
        payload = state.serialize()
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .response import ResponseState

_current_response: ContextVar[ResponseState | None] = ContextVar("tresponse_state", default=None)


def get_response() -> ResponseState:
    """Return the state bound to the current context, creating it on first access."""
    state = _current_response.get()
    if state is None:
        from .response import ResponseState

        state = ResponseState()
        _current_response.set(state)
    return state


def peek_response() -> ResponseState | None:
    """Return the bound state without creating one."""
    return _current_response.get()


@contextmanager
def response_context(state: ResponseState | None = None) -> Generator[ResponseState, None, None]:
    """Bind a fresh (or the given) state for the duration of a block.

    The previously bound state, if any, is restored on exit.
    """
    if state is None:
        from .response import ResponseState

        state = ResponseState()
    token = _current_response.set(state)
    try:
        yield state
    finally:
        _current_response.reset(token)
