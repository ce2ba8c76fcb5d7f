# tests/conftest.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

# ---------- Paths & .env ----------
ROOT = Path(__file__).resolve().parents[1]  # repo root
# Optional: load .env from repo root so live tests can see real keys
try:
    from dotenv import load_dotenv  # type: ignore
    env_path = ROOT / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
except ImportError:
    pass

# With src/ layout and `pip install -e .`, we can import the app package directly:
from vela_llm_bridge.app import app, get_secrets, get_transport  # noqa: E402
from vela_llm_bridge.core.config import ProviderSecrets  # noqa: E402


# ---------- Upstream recorder ----------
class FakeUpstream:
    """
    httpx.MockTransport wrapper: records every outbound request and replies
    with whatever was queued via respond() / fail().
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._status = 200
        self._body: Any = {}
        self._raw: Optional[str] = None
        self._error: Optional[Exception] = None
        self.transport = httpx.MockTransport(self._handle)

    def respond(self, status: int = 200, json_body: Any = None, text: Optional[str] = None) -> None:
        self._status = status
        self._body = json_body if json_body is not None else {}
        self._raw = text
        self._error = None

    def fail(self, error: Exception) -> None:
        self._error = error

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        if self._raw is not None:
            return httpx.Response(self._status, text=self._raw)
        return httpx.Response(self._status, json=self._body)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no upstream request was made"
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


# ---------- Fixtures ----------
@pytest.fixture
def fake_secrets() -> ProviderSecrets:
    return ProviderSecrets(
        gemini_api_key="test-gemini-key",
        openrouter_api_key="test-openrouter-key",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_client(upstream: FakeUpstream) -> Callable[[ProviderSecrets], TestClient]:
    """Build a TestClient wired to the given secrets and the fake upstream."""

    def _make(secrets: ProviderSecrets) -> TestClient:
        app.dependency_overrides[get_secrets] = lambda: secrets
        app.dependency_overrides[get_transport] = lambda: upstream.transport
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, fake_secrets: ProviderSecrets) -> TestClient:
    return make_client(fake_secrets)
