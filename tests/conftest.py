from __future__ import annotations

import httpx
import pytest

from tutor_cli.client import ApiClient

BASE_URL = "https://tutor.example.com"


class Recorder:
    """Mock backend: records every request and answers with a fixed response."""

    def __init__(self, status: int = 200, json=None, content: bytes | None = None, headers=None):
        self.requests: list[httpx.Request] = []
        self.status = status
        self.json = {"ok": True} if json is None and content is None else json
        self.content = content
        self.headers = headers or {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status, content=self.content, headers=self.headers)
        return httpx.Response(self.status, json=self.json, headers=self.headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_client():
    def _make(handler, **kwargs) -> ApiClient:
        return ApiClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)
    return _make
