"""Tests for key validation, server status and single-model tests."""

import pytest

from clairx.models.requests import ModelTestRequest
from clairx.services.credential_service import EMPTY_KEY_REASON, INVALID_FORMAT_REASON, NO_KEY_REASON
from clairx.services.key_check_service import (
    KEY_REJECTED_REASON,
    NO_WORKING_MODEL_REASON,
    check_server_status,
    run_model_test,
    validate_api_key,
)
from clairx.services.model_probe import ModelProber
from tests.conftest import OTHER_VALID_KEY, VALID_KEY, MockContentProvider


@pytest.mark.asyncio
async def test_validate_malformed_key_without_probing(settings, mock_provider):
    result = await validate_api_key("not-a-key", ModelProber(mock_provider, settings), settings)

    assert result.valid is False
    assert result.reason == INVALID_FORMAT_REASON
    assert "format" in result.reason
    assert "AIza" in result.details
    assert mock_provider.calls == []


@pytest.mark.asyncio
async def test_validate_empty_key(settings, mock_provider):
    result = await validate_api_key("   ", ModelProber(mock_provider, settings), settings)

    assert result.valid is False
    assert result.reason == EMPTY_KEY_REASON


@pytest.mark.asyncio
async def test_validate_working_key(settings, mock_provider):
    result = await validate_api_key(f"  {VALID_KEY}  ", ModelProber(mock_provider, settings), settings)

    assert result.valid is True
    assert result.model == "gemini-1.5-flash"
    assert result.details == "API key is valid for model: gemini-1.5-flash"
    assert mock_provider.calls[0][2] == VALID_KEY


@pytest.mark.asyncio
async def test_validate_rejected_key(settings):
    provider = MockContentProvider(rejected_keys={VALID_KEY})

    result = await validate_api_key(VALID_KEY, ModelProber(provider, settings), settings)

    assert result.valid is False
    assert result.reason == KEY_REJECTED_REASON
    assert len(provider.probe_calls) == 1


@pytest.mark.asyncio
async def test_validate_key_without_working_model(settings):
    provider = MockContentProvider(failing_models=set(settings.model_candidates))

    result = await validate_api_key(VALID_KEY, ModelProber(provider, settings), settings)

    assert result.valid is False
    assert result.reason == NO_WORKING_MODEL_REASON


@pytest.mark.asyncio
async def test_validate_bypasses_model_cache(settings, mock_provider):
    prober = ModelProber(mock_provider, settings)

    await validate_api_key(VALID_KEY, prober, settings)
    await validate_api_key(VALID_KEY, prober, settings)

    assert len(mock_provider.probe_calls) == 2


@pytest.mark.asyncio
async def test_server_status_without_key(settings, mock_provider):
    result = await check_server_status(ModelProber(mock_provider, settings), settings)

    assert result.gemini_available is False
    assert result.reason == NO_KEY_REASON
    assert mock_provider.calls == []


@pytest.mark.asyncio
async def test_server_status_with_malformed_key(settings, mock_provider):
    malformed = settings.model_copy(update={"gemini_api_key": "sk-wrong-vendor-key-123456"})

    result = await check_server_status(ModelProber(mock_provider, malformed), malformed)

    assert result.gemini_available is False
    assert result.reason == INVALID_FORMAT_REASON


@pytest.mark.asyncio
async def test_server_status_available(keyed_settings, mock_provider):
    result = await check_server_status(ModelProber(mock_provider, keyed_settings), keyed_settings)

    assert result.gemini_available is True
    assert result.model == "gemini-1.5-flash"


@pytest.mark.asyncio
async def test_server_status_key_rejected(keyed_settings):
    provider = MockContentProvider(rejected_keys={VALID_KEY})

    result = await check_server_status(ModelProber(provider, keyed_settings), keyed_settings)

    assert result.gemini_available is False
    assert result.reason == KEY_REJECTED_REASON


@pytest.mark.asyncio
async def test_model_test_success(keyed_settings, mock_provider):
    request = ModelTestRequest(model_name="gemini-pro", prompt="Say hello")

    result = await run_model_test(request, mock_provider, keyed_settings)

    assert result.success is True
    assert result.model == "gemini-pro"
    assert result.text == "A detailed description"
    assert mock_provider.calls == [("Say hello", "gemini-pro", VALID_KEY)]


@pytest.mark.asyncio
async def test_model_test_uses_client_key(keyed_settings, mock_provider):
    request = ModelTestRequest(model_name="gemini-pro", prompt="Say hello", client_api_key=OTHER_VALID_KEY)

    await run_model_test(request, mock_provider, keyed_settings)

    assert mock_provider.calls[0][2] == OTHER_VALID_KEY


@pytest.mark.asyncio
async def test_model_test_reports_model_failure_without_fallback(keyed_settings):
    provider = MockContentProvider(failing_models={"gemini-pro"})
    request = ModelTestRequest(model_name="gemini-pro", prompt="Say hello")

    result = await run_model_test(request, provider, keyed_settings)

    assert result.success is False
    assert "gemini-pro is not found" in result.error
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_model_test_without_key(settings, mock_provider):
    request = ModelTestRequest(model_name="gemini-pro", prompt="Say hello")

    result = await run_model_test(request, mock_provider, settings)

    assert result.success is False
    assert "No valid API key" in result.error
    assert mock_provider.calls == []


@pytest.mark.asyncio
async def test_server_status_falls_through_to_legacy_key(settings, mock_provider):
    legacy = settings.model_copy(update={"gemini_api_key": "not-a-key", "legacy_gemini_api_key": OTHER_VALID_KEY})

    result = await check_server_status(ModelProber(mock_provider, legacy), legacy)

    assert result.gemini_available is True
    assert mock_provider.calls[0][2] == OTHER_VALID_KEY


@pytest.mark.asyncio
async def test_server_status_with_malformed_legacy_key_only(settings, mock_provider):
    legacy = settings.model_copy(update={"legacy_gemini_api_key": "not-a-key"})

    result = await check_server_status(ModelProber(mock_provider, legacy), legacy)

    assert result.gemini_available is False
    assert result.reason == INVALID_FORMAT_REASON
    assert mock_provider.calls == []
