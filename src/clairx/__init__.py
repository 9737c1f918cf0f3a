"""Clair-X - prompt-to-image generation with Gemini and placeholder fallback."""

from clairx.config import Settings
from clairx.models.errors import ErrorCode, is_retryable
from clairx.models.requests import AspectRatio, ImageGenerationRequest
from clairx.models.responses import ImageGenerationResponse, ImageResult
from clairx.providers.base import ContentProvider
from clairx.services.credential_service import is_valid_api_key_format, resolve_credential
from clairx.services.image_service import ImageService
from clairx.services.metrics_service import MetricsService
from clairx.services.model_probe import ModelProber, first_success
from clairx.services.moderation_service import moderate
from clairx.services.placeholder_service import placeholders
from clairx.services.retry_service import RetryableError

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "Settings",
    # Error types
    "ErrorCode",
    "is_retryable",
    "RetryableError",
    # Request/Response types
    "AspectRatio",
    "ImageGenerationRequest",
    "ImageGenerationResponse",
    "ImageResult",
    # Providers
    "ContentProvider",
    # Services
    "ImageService",
    "MetricsService",
    "ModelProber",
    # Pipeline steps
    "first_success",
    "is_valid_api_key_format",
    "moderate",
    "placeholders",
    "resolve_credential",
]
