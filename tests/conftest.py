"""Shared pytest fixtures for Clair-X tests."""

import random

import pytest
from fastapi.testclient import TestClient

from clairx.api.main import create_app
from clairx.config import Settings
from clairx.models.errors import ErrorCode
from clairx.services.retry_service import RetryableError

VALID_KEY = "AIzaSyTestKey1234567890abcdef"
OTHER_VALID_KEY = "AIzaSyOtherKey0987654321zyxwvu"
SESSION_COOKIE = "clairx.session-token"


class MockContentProvider:
    """Mock content provider for testing."""

    def __init__(
        self,
        failing_models: set[str] | None = None,
        rejected_keys: set[str] | None = None,
        fail_generation: bool = False,
        text: str = "A detailed description",
    ):
        """
        Initialize mock provider.

        Args:
            failing_models: Models that raise PROVIDER_REJECTED on every call
            rejected_keys: Keys that raise CREDENTIAL_INVALID on every call
            fail_generation: If True, non-probe calls raise INTERNAL_ERROR
            text: Text returned by successful calls
        """
        self.failing_models = failing_models or set()
        self.rejected_keys = rejected_keys or set()
        self.fail_generation = fail_generation
        self.text = text
        self.calls: list[tuple[str, str, str]] = []

    @property
    def probe_calls(self) -> list[tuple[str, str, str]]:
        return [call for call in self.calls if call[0] == "test"]

    @property
    def generation_calls(self) -> list[tuple[str, str, str]]:
        return [call for call in self.calls if call[0] != "test"]

    async def generate_text(self, prompt: str, model: str, api_key: str) -> str:
        """Mock generate_text method."""
        self.calls.append((prompt, model, api_key))

        if api_key in self.rejected_keys:
            raise RetryableError(ErrorCode.CREDENTIAL_INVALID, "API key not valid. Please pass a valid API key.")
        if model in self.failing_models:
            raise RetryableError(ErrorCode.PROVIDER_REJECTED, f"models/{model} is not found")
        if self.fail_generation and prompt != "test":
            raise RetryableError(ErrorCode.INTERNAL_ERROR, "Mock generation failure")
        return self.text


@pytest.fixture
def settings() -> Settings:
    """Settings with no server key and fast upstream timeouts."""
    return Settings(
        gemini_api_key=None,
        legacy_gemini_api_key=None,
        generation_max_attempts=1,
        probe_timeout_seconds=1.0,
        request_timeout_seconds=1.0,
        video_delay_seconds=0.0,
        _env_file=None,
    )


@pytest.fixture
def keyed_settings(settings: Settings) -> Settings:
    """Settings with a well-formed server key."""
    return settings.model_copy(update={"gemini_api_key": VALID_KEY})


@pytest.fixture
def mock_provider() -> MockContentProvider:
    """Fixture for a working mock content provider."""
    return MockContentProvider()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def test_client(settings: Settings, mock_provider: MockContentProvider) -> TestClient:
    """TestClient for an app without a server key, signed in."""
    client = TestClient(create_app(settings, mock_provider))
    client.cookies.set(SESSION_COOKIE, "demo-session")
    return client


@pytest.fixture
def keyed_client(keyed_settings: Settings, mock_provider: MockContentProvider) -> TestClient:
    """TestClient for an app with a server key, signed in."""
    client = TestClient(create_app(keyed_settings, mock_provider))
    client.cookies.set(SESSION_COOKIE, "demo-session")
    return client


@pytest.fixture
def anonymous_client(settings: Settings, mock_provider: MockContentProvider) -> TestClient:
    """TestClient without a session cookie."""
    return TestClient(create_app(settings, mock_provider))
