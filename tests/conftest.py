"""Shared pytest fixtures for Bouncer test suites."""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
from pathlib import Path
import sys

import pytest
from starlette.requests import Request

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Build a Starlette request with an in-memory body."""

    def _make_request(
        method: str,
        *,
        body: bytes = b"",
        headers: dict[str, str] | None = None,
        receive: Callable[[], Awaitable[dict]] | None = None,
    ) -> Request:
        scope = {
            "type": "http",
            "method": method,
            "path": "/widgets",
            "query_string": b"",
            "headers": [(key.lower().encode(), value.encode()) for key, value in (headers or {}).items()],
        }

        async def _receive() -> dict:
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive or _receive)

    return _make_request

