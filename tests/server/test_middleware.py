"""Tests for the Starlette adapter (middleware and json_response)."""

from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.routing import Route
from starlette.testclient import TestClient

from tresponse import error, handle, info, success
from tresponse.core.context import get_response
from tresponse.core.response import DEFAULT_ERROR_MESSAGE, ResponseState
from tresponse.server import ResponseStateMiddleware, json_response
from tresponse.server.middleware import CORRELATION_HEADER


class GoneError(Exception):
    code = 410


async def saved(request: Request):
    handle(True, "Saved", "Not saved", 409)
    info({"id": 7})
    return json_response()


async def untouched(request: Request):
    success()
    return json_response()


async def missing(request: Request):
    error("Nope", 404)
    return json_response()


async def exploding(request: Request):
    raise GoneError("already deleted")


async def no_content(request: Request):
    handle(False, error_code=204)
    return json_response()


async def same_state(request: Request):
    info({"same": request.state.response is get_response()})
    return json_response()


@pytest.fixture
def client():
    app = Starlette(
        routes=[
            Route("/saved", saved),
            Route("/untouched", untouched),
            Route("/missing", missing),
            Route("/exploding", exploding),
            Route("/no-content", no_content),
            Route("/same-state", same_state),
        ],
        middleware=[Middleware(ResponseStateMiddleware)],
    )
    with TestClient(app) as test_client:
        yield test_client


class TestJsonResponse:
    """Tests for json_response()."""

    def test_renders_given_state(self):
        """Body is the JSON payload and status is the state status."""
        state = ResponseState().fail("Denied", 403)
        resp = json_response(state)

        assert resp.status_code == 403
        assert resp.media_type == "application/json"
        assert resp.body == state.to_json().encode()

    def test_defaults_to_current_state(self, fresh_response):
        """Without a state, the bound one is rendered."""
        fresh_response.succeed("done")
        assert json_response().body == fresh_response.to_json().encode()

    def test_bodyless_status(self):
        """Statuses that forbid a body render an empty one."""
        state = ResponseState().fail("", 304)
        resp = json_response(state)

        assert resp.status_code == 304
        assert resp.body == b""


class TestResponseStateMiddleware:
    """Tests for the per-request middleware."""

    def test_success_payload(self, client):
        """handle() and info() build the success body."""
        resp = client.get("/saved")

        assert resp.status_code == 200
        assert resp.json() == {"error": False, "status": 200, "message": "Saved", "id": 7}

    def test_default_message_elided(self, client):
        """The default success message is not sent."""
        assert client.get("/untouched").json() == {"error": False, "status": 200}

    def test_error_status_becomes_http_status(self, client):
        """The state status is the HTTP status."""
        resp = client.get("/missing")

        assert resp.status_code == 404
        assert resp.json() == {"error": True, "status": 404, "message": "Nope"}

    def test_unhandled_exception_is_captured(self, client):
        """An escaping exception is captured into the response."""
        resp = client.get("/exploding")
        body = resp.json()

        assert resp.status_code == 410
        assert body["error"] is True
        assert body["message"] == "already deleted"
        assert body["type"] == "GoneError"
        assert body["trace"][-1]["function"] == "exploding"

    def test_no_content(self, client):
        """204 is sent without a body."""
        resp = client.get("/no-content")

        assert resp.status_code == 204
        assert resp.content == b""

    def test_requests_do_not_share_state(self, client):
        """Each request starts from a fresh state."""
        client.get("/saved")
        resp = client.get("/missing")

        assert "id" not in resp.json()
        assert client.get("/untouched").json() == {"error": False, "status": 200}

    def test_request_state_exposes_response(self, client):
        """request.state.response is the bound state."""
        assert client.get("/same-state").json()["same"] is True

    def test_correlation_header_echoed(self, client):
        """A supplied correlation ID is echoed back."""
        resp = client.get("/untouched", headers={CORRELATION_HEADER: "req-42"})
        assert resp.headers[CORRELATION_HEADER] == "req-42"

    def test_correlation_header_generated(self, client):
        """A correlation ID is generated when none is supplied."""
        resp = client.get("/untouched")
        assert len(resp.headers[CORRELATION_HEADER]) == 36

    def test_test_state_untouched_by_requests(self, client, fresh_response):
        """Requests do not leak into the caller's context."""
        client.get("/missing")
        assert fresh_response.error is False
        assert fresh_response.message != DEFAULT_ERROR_MESSAGE
