"""Pytest configuration for tests."""

from __future__ import annotations

import random
from typing import Any, Callable

import pytest

from profilebrowser.config import BrowserConfig
from profilebrowser.services import GitHubService

_INVALID_JSON = object()


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._payload is _INVALID_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session`` and records every GET."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[dict[str, Any]] = []
        self.handler: Callable[[str, dict | None], FakeResponse] = lambda url, params: FakeResponse(
            200, []
        )
        self.closed = False

    def get(self, url: str, params: dict | None = None, timeout: float | None = None) -> FakeResponse:
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        return self.handler(url, params)

    def close(self) -> None:
        self.closed = True


def make_user(user_id: int, login: str | None = None, **extra: Any) -> dict[str, Any]:
    login = login or f"user{user_id}"
    record = {
        "id": user_id,
        "login": login,
        "avatar_url": f"https://avatars.githubusercontent.com/u/{user_id}?v=4",
        "html_url": f"https://github.com/{login}",
        "type": "User",
    }
    record.update(extra)
    return record


def batch_handler(url: str, params: dict | None) -> FakeResponse:
    per_page = int(params["per_page"])
    since = int(params["since"])
    return FakeResponse(200, [make_user(since + offset + 1) for offset in range(per_page)])


@pytest.fixture
def config() -> BrowserConfig:
    return BrowserConfig(api_url="https://api.example.test", timeout=3.0)


@pytest.fixture
def session() -> FakeSession:
    fake = FakeSession()
    fake.handler = batch_handler
    return fake


@pytest.fixture
def service(config, session) -> GitHubService:
    return GitHubService(config, session=session)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def invalid_json() -> object:
    return _INVALID_JSON
