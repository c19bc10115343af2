# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Starlette adapter for the per-request response state.

``ResponseStateMiddleware`` binds a fresh ``ResponseState`` (and a
correlation ID) to every HTTP request, so endpoints can use the
module-level helpers without sharing state across requests. An exception
escaping the endpoint is captured into the state and rendered instead of
propagating.

Usage::

    from starlette.applications import Starlette
    from starlette.middleware import Middleware

    from tresponse import handle
    from tresponse.server import ResponseStateMiddleware, json_response

    async def save(request):
        handle(await store(request), "Saved", "Not saved", 409)
        return json_response()

    app = Starlette(routes=[...], middleware=[Middleware(ResponseStateMiddleware)])
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..core.context import get_response, response_context
from ..core.logging import correlation_context
from ..core.response import ResponseState

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Statuses that must not carry a body
_BODYLESS_STATUSES = frozenset({100, 101, 204, 304})


def json_response(state: ResponseState | None = None) -> Response:
    """Render a state (default: the current one) as an HTTP response.

    The HTTP status is the state's status and the body is its serialized
    payload as JSON, with values JSON cannot encode rendered via ``str``.
    """
    if state is None:
        state = get_response()
    if state.status in _BODYLESS_STATUSES:
        return Response(status_code=state.status)
    return Response(state.to_json(), status_code=state.status, media_type="application/json")


class ResponseStateMiddleware(BaseHTTPMiddleware):
    """Scope one ResponseState to each request.

    The state is also exposed as ``request.state.response``.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        with correlation_context(request.headers.get(CORRELATION_HEADER)) as cid:
            with response_context() as state:
                request.state.response = state
                try:
                    response = await call_next(request)
                except Exception as e:  # Intentionally broad: every failure becomes a payload
                    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
                    response = json_response(state.exception(e))
                response.headers[CORRELATION_HEADER] = cid
                return response
