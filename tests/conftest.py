"""Shared fixtures: isolated settings and a scripted Keybase API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
import pytest

from core.config import AppSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in ("KEYBASECTL_USER", "KEYBASECTL_API_ENDPOINT", "KEYBASECTL_DEBUG", "KEYBASECTL_HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    # A project .env in the working directory must not leak into the tests.
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger("keybasectl")
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, http_timeout_seconds=2.0)


def envelope(them: list[Any], *, status: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "status": status if status is not None else {"code": 0, "name": "OK", "desc": "ok"},
        "them": them,
    }


def user_entry(username: str, *, fingerprint: str | None = None) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "id": f"{username}-id",
        "basics": {"username": username, "username_cased": username.title(), "track_version": 3, "salt": "s"},
    }
    if fingerprint is not None:
        entry["public_keys"] = {"primary": {"kid": f"{username}-kid", "key_fingerprint": fingerprint, "key_type": 1}}
    return entry


class FakeKeybaseApi:
    """Records requests and answers from a queue of scripted responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Exception] = []

    def queue_json(self, payload: Any, status_code: int = 200) -> None:
        self._responses.append(
            httpx.Response(
                status_code,
                content=json.dumps(payload).encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
        )

    def queue_text(self, text: str, status_code: int = 200) -> None:
        self._responses.append(httpx.Response(status_code, content=text.encode("utf-8")))

    def queue_error(self, exc: Exception) -> None:
        self._responses.append(exc)

    def queue_response(self, response: httpx.Response) -> None:
        self._responses.append(response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"No queued response for {request.url}")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport())


@pytest.fixture
def api() -> FakeKeybaseApi:
    return FakeKeybaseApi()
