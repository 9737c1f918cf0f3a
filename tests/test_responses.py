"""Contract tests for response shapes and validation."""

import pytest

from clairx.models.errors import ErrorCode, is_retryable
from clairx.models.responses import (
    ApiStatusResponse,
    ErrorResponse,
    ImageGenerationResponse,
    ImageResult,
    ModelTestResponse,
)


def _image(model: str = "gemini-1.5-flash") -> ImageResult:
    return ImageResult(
        url="/placeholder.svg?height=1024&width=1024&query=fox",
        prompt="fox",
        style="auto",
        aspect_ratio="1:1",
        description="fox",
        model=model,
    )


def test_image_generation_response_serializes_camel_case():
    response = ImageGenerationResponse(images=[_image()], mode="gemini", model="gemini-1.5-flash")

    data = response.model_dump(by_alias=True, exclude_none=True)

    assert data["success"] is True
    assert data["mode"] == "gemini"
    assert data["images"][0]["aspectRatio"] == "1:1"
    assert "reason" not in data


def test_gemini_mode_requires_model():
    with pytest.raises(ValueError, match="model must be present when mode='gemini'"):
        ImageGenerationResponse(images=[_image()], mode="gemini")


def test_fallback_mode_requires_reason():
    with pytest.raises(ValueError, match="reason must be present when mode='fallback'"):
        ImageGenerationResponse(images=[_image("fallback")], mode="fallback")


def test_images_must_not_be_empty():
    with pytest.raises(ValueError, match="images must not be empty"):
        ImageGenerationResponse(images=[], mode="fallback", reason="No working Gemini models found")


def test_model_test_response_failure_requires_error():
    with pytest.raises(ValueError, match="error must be present when success=False"):
        ModelTestResponse(success=False)


def test_api_status_response_alias():
    data = ApiStatusResponse(gemini_available=False, reason="API key not configured").model_dump(by_alias=True)
    assert data["geminiAvailable"] is False


def test_error_response_shape():
    error = ErrorResponse(error="prompt is required", code=ErrorCode.MISSING_INPUT)

    assert error.model_dump(mode="json", exclude_none=True) == {
        "error": "prompt is required",
        "code": "MISSING_INPUT",
    }


def test_retryable_codes():
    assert is_retryable(ErrorCode.PROVIDER_TIMEOUT) is True
    assert is_retryable(ErrorCode.PROVIDER_OVERLOADED) is True
    assert is_retryable(ErrorCode.RATE_LIMITED) is True


def test_non_retryable_codes():
    assert is_retryable(ErrorCode.MISSING_INPUT) is False
    assert is_retryable(ErrorCode.UNAUTHENTICATED) is False
    assert is_retryable(ErrorCode.CREDENTIAL_INVALID) is False
    assert is_retryable(ErrorCode.PROVIDER_REJECTED) is False
    assert is_retryable(ErrorCode.INTERNAL_ERROR) is False
