"""Tests for problem details rendering and request ID propagation."""

from __future__ import annotations

from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
import pytest

from listing_service.app.exception_handlers import configure_exception_handlers
from listing_service.app.middleware import configure_middleware
from listing_service.core.exceptions import ConflictException
from listing_service.core.pagination import InvalidSortField, QueryTimeoutException
from listing_service.infra.logging import get_log_context


@pytest.fixture
def bare_app() -> FastAPI:
    """Small app wired with the service's handlers and middleware only."""
    app = FastAPI()
    configure_exception_handlers(app)
    configure_middleware(app)

    @app.get("/sort")
    async def bad_sort():
        raise InvalidSortField("password", "invalid sort field 'password'")

    @app.get("/slow")
    async def slow():
        raise QueryTimeoutException(3.0)

    @app.get("/conflict")
    async def conflict():
        raise ConflictException(detail="taken", extra={"username": "alice"})

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @app.get("/context")
    async def context(request: Request):
        return {"state": request.state.request_id, "log": get_log_context().get("request_id")}

    return app


@pytest.fixture
async def bare_client(bare_app: FastAPI):
    transport = ASGITransport(app=bare_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestProblemDetails:
    """RFC 7807 bodies for each error family."""

    async def test_pagination_error(self, bare_client):
        response = await bare_client.get("/sort", headers={"X-Request-ID": "req-1"})

        assert response.status_code == 400
        body = response.json()
        assert body == {
            "type": "invalid-sort-field",
            "title": "Bad Request",
            "status": 400,
            "detail": "invalid sort field 'password'",
            "instance": "http://test/sort",
            "code": "E_INVALID_PARAM",
            "parameter": "sort",
            "value": "password",
            "request_id": "req-1",
        }

    async def test_query_timeout(self, bare_client):
        response = await bare_client.get("/slow")

        assert response.status_code == 504
        body = response.json()
        assert body["type"] == "query-timeout"
        assert body["timeout"] == 3.0

    async def test_conflict(self, bare_client):
        response = await bare_client.get("/conflict")

        assert response.status_code == 409
        assert response.json()["title"] == "Conflict"
        assert response.json()["username"] == "alice"

    async def test_unexpected_error(self, bare_client):
        response = await bare_client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "internal-error"
        assert "kaboom" not in response.text

    async def test_unknown_route_is_not_rewritten(self, bare_client):
        response = await bare_client.get("/missing")

        assert response.status_code == 404


class TestRequestID:
    """RequestIDMiddleware behaviour."""

    async def test_request_id_reaches_state_and_log_context(self, bare_client):
        response = await bare_client.get("/context", headers={"X-Request-ID": "trace-42"})

        assert response.json() == {"state": "trace-42", "log": "trace-42"}
        assert response.headers["x-request-id"] == "trace-42"

    async def test_unacceptable_header_is_replaced(self, bare_client):
        response = await bare_client.get("/context", headers={"X-Request-ID": "bad id with spaces"})

        generated = response.headers["x-request-id"]
        assert generated != "bad id with spaces"
        assert response.json()["state"] == generated

    async def test_context_cleared_after_request(self, bare_client):
        await bare_client.get("/context", headers={"X-Request-ID": "gone-after"})

        assert get_log_context().get("request_id") is None
