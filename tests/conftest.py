"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from view_tools.config import Settings
from view_tools.context import ViewContext
from view_tools.core.app_factory import create_app
from view_tools.tools import LinkTool


def make_settings(**overrides) -> Settings:
    """Settings that ignore any local .env file."""
    return Settings(_env_file=None, **overrides)


def make_request(
    path: str = "/catalog/list",
    query_string: bytes = b"",
    root_path: str = "",
    host: str = "example.com:8080",
    scheme: str = "http",
) -> Request:
    """Build a Starlette request from a raw ASGI scope."""
    hostname, _, port = host.partition(":")
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": scheme,
        "path": path,
        "root_path": root_path,
        "query_string": query_string,
        "headers": [(b"host", host.encode("latin-1"))],
        "server": (hostname, int(port) if port else None),
    }
    return Request(scope)


@pytest.fixture
def test_settings():
    """Default settings without .env influence."""
    return make_settings()


@pytest.fixture
def view_context():
    """Request mounted under /app with a few query parameters."""
    return ViewContext(
        scheme="http",
        host="example.com",
        port=8080,
        context_path="/app",
        path="/app/catalog/list",
        parameters={"page": ["2"], "sort": ["name", "date"], "q": ["red shoes"]},
    )


@pytest.fixture
def link(view_context):
    """Link tool initialized against view_context."""
    tool = LinkTool()
    tool.init(view_context)
    return tool


@pytest.fixture
def test_client(test_settings):
    """FastAPI test client for the demo app."""
    with TestClient(create_app(test_settings)) as client:
        yield client
