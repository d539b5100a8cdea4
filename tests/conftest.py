from __future__ import annotations

import pytest
import httpx

from boundjson.api.app import create_app
from boundjson.domain import greeter


def _odd_second() -> float:
    return 1_700_000_001.0


def _even_second() -> float:
    return 1_700_000_000.0


@pytest.fixture()
def friendly_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(greeter, "_now", _odd_second)


@pytest.fixture()
def grumpy_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(greeter, "_now", _even_second)


@pytest.fixture()
async def client() -> httpx.AsyncClient:
    app = create_app()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client
