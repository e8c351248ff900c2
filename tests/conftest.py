"""Shared pytest fixtures for resdk tests."""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from starlette.requests import Request


def build_request(
    method: str = "GET",
    path: str = "/items",
    *,
    query: str = "",
    headers: dict[str, str] | None = None,
    body: bytes = b"",
) -> Request:
    """Build a Starlette request without going through a server."""
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query.encode(),
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }

    async def receive() -> dict[str, object]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


@pytest.fixture
def make_request() -> Callable[..., Request]:
    return build_request


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point RESDK_HOME at a temp dir and drop any RESDK_* overrides."""
    for key in list(os.environ):
        if key.startswith("RESDK_"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path / "resdk-home"
    monkeypatch.setenv("RESDK_HOME", str(home))
    return home
