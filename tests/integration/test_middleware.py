"""Integration tests for the Starlette log helper."""

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from callsite_log import get_log
from callsite_log.middleware import LogHelperMiddleware, request_log


async def users(request: Request) -> PlainTextResponse:
    request.state.log.warn("listing users")
    return PlainTextResponse("ok")


async def helper(request: Request) -> PlainTextResponse:
    return PlainTextResponse(request_log(request).name)


def _app(facility=None, with_middleware=True) -> Starlette:
    app = Starlette(routes=[Route("/users", users), Route("/helper", helper)])
    if with_middleware:
        app.add_middleware(LogHelperMiddleware, facility=facility)
    return app


@pytest.mark.integration
def test_handler_logs_through_request_state(make_facility, sink):
    log = make_facility(level="INFO")
    client = TestClient(_app(log))

    response = client.get("/users")

    assert response.status_code == 200
    assert len(sink.lines) == 2
    assert sink.lines[0].startswith("WARN: ")
    assert sink.lines[0].endswith(": listing users\n")
    assert sink.lines[1].startswith("INFO: ")
    assert sink.lines[1].endswith(": GET /users 200\n")


@pytest.mark.integration
def test_handler_location_points_at_route(make_facility, sink):
    client = TestClient(_app(make_facility()))
    client.get("/users")
    location = sink.lines[0].split(": ", 3)[2]
    assert "test_middleware.py:" in location


@pytest.mark.integration
def test_not_found_is_logged(make_facility, sink):
    client = TestClient(_app(make_facility()))
    client.get("/missing")
    assert sink.lines[-1].endswith(": GET /missing 404\n")


@pytest.mark.integration
def test_defaults_to_process_wide_facility(monkeypatch):
    monkeypatch.setenv("PROJECT_NAME", "Web App")
    client = TestClient(_app())
    assert client.get("/helper").text == "WebApp"
    assert get_log().name == "WebApp"


@pytest.mark.integration
def test_request_log_without_middleware(monkeypatch):
    monkeypatch.setenv("PROJECT_NAME", "Bare")
    client = TestClient(_app(with_middleware=False))
    assert client.get("/helper").text == "Bare"
