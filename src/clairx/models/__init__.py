"""Models package for Clair-X."""

from clairx.models.errors import ErrorCode, is_retryable
from clairx.models.metrics import GenerationMetrics
from clairx.models.requests import (
    AgentforceRequest,
    ApiKeyValidationRequest,
    AspectRatio,
    ImageGenerationRequest,
    ModelTestRequest,
    ModerationRequest,
    VideoGenerationRequest,
)
from clairx.models.responses import (
    AgentforceResponse,
    ApiKeyValidationResponse,
    ApiStatusResponse,
    CustomerProfile,
    ErrorResponse,
    ImageGenerationResponse,
    ImageResult,
    ModelTestResponse,
    ModerationCategories,
    ModerationResult,
    UserInfo,
    VideoGenerationResponse,
    VideoResult,
)

__all__ = [
    "ErrorCode",
    "is_retryable",
    "GenerationMetrics",
    "AgentforceRequest",
    "ApiKeyValidationRequest",
    "AspectRatio",
    "ImageGenerationRequest",
    "ModelTestRequest",
    "ModerationRequest",
    "VideoGenerationRequest",
    "AgentforceResponse",
    "ApiKeyValidationResponse",
    "ApiStatusResponse",
    "CustomerProfile",
    "ErrorResponse",
    "ImageGenerationResponse",
    "ImageResult",
    "ModelTestResponse",
    "ModerationCategories",
    "ModerationResult",
    "UserInfo",
    "VideoGenerationResponse",
    "VideoResult",
]
