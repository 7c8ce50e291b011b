"""Root pytest fixtures for typed-llm tests."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from typed_llm.config import ClientConfig

ENV_VARS = (
    "TYPED_LLM_BASE_URL",
    "TYPED_LLM_API_KEY",
    "TYPED_LLM_MODEL",
    "TYPED_LLM_AUTH_STYLE",
    "TYPED_LLM_API_VERSION",
    "TYPED_LLM_TIMEOUT_SECS",
    "TYPED_LLM_VERBOSE",
    "OPENAI_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host credentials and settings out of tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> ClientConfig:
    """Configuration pointing at a fake endpoint."""
    return ClientConfig(
        base_url="https://llm.test/v1",
        api_key="sk-test-key",
        model="test-model",
    )


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def mock_http(recorded_requests: list[httpx.Request]) -> Callable[[Handler], httpx.AsyncClient]:
    """Build an httpx client served by a handler, recording requests."""

    def factory(handler: Handler) -> httpx.AsyncClient:
        def recording(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(recording))

    return factory
