"""Live credential checks: validate a key, report server status, test a model.

Unlike the generation pipeline, these operations report the precise failure
so the user can fix their key.
"""

import logging

from clairx.config import Settings
from clairx.models.requests import ModelTestRequest
from clairx.models.responses import ApiKeyValidationResponse, ApiStatusResponse, ModelTestResponse
from clairx.providers.base import ContentProvider
from clairx.services.credential_service import (
    describe_invalid_key,
    describe_unusable_server_key,
    is_valid_api_key_format,
    resolve_credential,
)
from clairx.services.model_probe import ModelProber, ProbeResult
from clairx.services.retry_service import build_retry_config, retry_with_backoff

logger = logging.getLogger(__name__)

KEY_REJECTED_REASON = "API key was rejected"
NO_WORKING_MODEL_REASON = "No working Gemini models found"


def _probe_failure(probe: ProbeResult) -> tuple[str, str]:
    if probe.key_rejected:
        return KEY_REJECTED_REASON, "The API key is invalid. Please check your API key and try again."
    return (
        NO_WORKING_MODEL_REASON,
        "The API key appears valid, but no working Gemini models were found for this key",
    )


async def validate_api_key(api_key: str, prober: ModelProber, settings: Settings) -> ApiKeyValidationResponse:
    """Check a user-supplied key's format, then probe models with it (bypassing the cache)."""
    if not is_valid_api_key_format(api_key, settings.api_key_prefix, settings.api_key_min_length):
        reason, details = describe_invalid_key(api_key, settings)
        return ApiKeyValidationResponse(valid=False, reason=reason, details=details)

    probe = await prober.probe(api_key.strip(), use_cache=False)
    if probe.model is None:
        reason, details = _probe_failure(probe)
        return ApiKeyValidationResponse(valid=False, reason=reason, details=details)

    return ApiKeyValidationResponse(
        valid=True,
        model=probe.model,
        details=f"API key is valid for model: {probe.model}",
    )


async def check_server_status(prober: ModelProber, settings: Settings) -> ApiStatusResponse:
    """Report whether a server-configured key can reach a working model."""
    api_key = resolve_credential(None, settings)
    if api_key is None:
        reason, details = describe_unusable_server_key(settings)
        return ApiStatusResponse(gemini_available=False, reason=reason, details=details)

    probe = await prober.probe(api_key)
    if probe.model is None:
        reason, details = _probe_failure(probe)
        return ApiStatusResponse(gemini_available=False, reason=reason, details=details)

    return ApiStatusResponse(
        gemini_available=True,
        model=probe.model,
        details=f"Successfully connected to Gemini API using model: {probe.model}",
    )


async def run_model_test(
    request: ModelTestRequest,
    provider: ContentProvider,
    settings: Settings,
) -> ModelTestResponse:
    """Send the request's prompt to exactly the named model, without fallback."""
    api_key = resolve_credential(request.client_api_key, settings)
    if api_key is None:
        return ModelTestResponse(
            success=False,
            model=request.model_name,
            error="No valid API key available. Provide a key or configure GEMINI_API_KEY.",
        )

    logger.info(f"[ModelTest] Testing model {request.model_name}")
    try:
        text = await retry_with_backoff(
            provider.generate_text,
            request.prompt,
            request.model_name,
            api_key,
            retry_config=build_retry_config(1),
            timeout_seconds=settings.request_timeout_seconds,
        )
    except Exception as e:
        logger.warning(f"⚠️ [ModelTest] Model {request.model_name} failed: {e}")
        return ModelTestResponse(success=False, model=request.model_name, error=str(e))

    return ModelTestResponse(success=True, model=request.model_name, text=text)
