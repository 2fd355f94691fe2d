"""Shared fixtures: isolated environment, mock HTTP transport, log capture.

Every test runs against an injected environment mapping and an
``httpx.MockTransport`` so no real credentials or network are involved.
"""
from __future__ import annotations

import json
import logging
from typing import Callable, Dict, List

import httpx
import pytest

from genai_bridge import ClientConfig, GenAIClient
from genai_bridge.base.logging import BASE_LOGGER_NAME, get_logger


FAKE_KEYS: Dict[str, str] = {
    "google": "g-key-123",  # pragma: allowlist secret - test-only fake key
    "openai": "sk-test-456",  # pragma: allowlist secret - test-only fake key
    "claude": "ak-test-789",  # pragma: allowlist secret - test-only fake key
}


class Recorder:
    """Mock transport handler replaying scripted responses in order.

    Each script item is either an ``httpx.Response``, an exception instance
    (raised) or a callable ``(request) -> Response``.
    """

    def __init__(self, script: List[object]) -> None:
        self.script = list(script)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.script:
            raise AssertionError("unexpected extra request")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if callable(item):
            return item(request)
        return item  # type: ignore[return-value]

    def bodies(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture()
def make_client() -> Callable[..., tuple]:
    """Build a client wired to a :class:`Recorder` transport.

    Returns ``(client, recorder, sleeps)``; ``sleeps`` collects retry waits.
    """
    created: List[GenAIClient] = []

    def _make(provider: str, script: List[object], **config_kwargs):
        recorder = Recorder(script)
        sleeps: List[float] = []
        http = httpx.Client(transport=httpx.MockTransport(recorder))
        client = GenAIClient(
            provider,
            api_key=FAKE_KEYS[provider],
            config=ClientConfig(**config_kwargs),
            environ={},
            http_client=http,
            sleep=sleeps.append,
        )
        created.append(client)
        return client, recorder, sleeps

    yield _make
    for c in created:
        c._http.close()


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.payloads: List[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.payloads.append(json.loads(record.getMessage()))
        except ValueError:
            self.payloads.append({"msg": record.getMessage()})


@pytest.fixture()
def log_events():
    """Capture structured events emitted under the ``genai_bridge`` logger."""
    base = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield handler.payloads
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)
