"""Request models for Clair-X."""

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from clairx.models.base import CamelModel


class AspectRatio(str, Enum):
    """Aspect ratios offered by the image generator."""

    SQUARE = "1:1"
    CLASSIC = "3:2"
    STANDARD = "4:3"
    WIDE = "16:9"
    PORTRAIT = "9:16"


# Target dimensions when a model produced the description.
GENERATION_SIZES: dict[AspectRatio, tuple[int, int]] = {
    AspectRatio.SQUARE: (1024, 1024),
    AspectRatio.CLASSIC: (1200, 800),
    AspectRatio.STANDARD: (1200, 900),
    AspectRatio.WIDE: (1600, 900),
    AspectRatio.PORTRAIT: (900, 1600),
}

# Smaller dimensions used for fallback placeholders.
PLACEHOLDER_SIZES: dict[AspectRatio, tuple[int, int]] = {
    AspectRatio.SQUARE: (512, 512),
    AspectRatio.CLASSIC: (600, 400),
    AspectRatio.STANDARD: (640, 480),
    AspectRatio.WIDE: (640, 360),
    AspectRatio.PORTRAIT: (360, 640),
}

AUTO_STYLE = "auto"
MAX_OUTPUTS = 4


def _require_text(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value


class ImageGenerationRequest(CamelModel):
    """Request model for image generation."""

    prompt: str = Field(..., max_length=2000, description="Text prompt describing the image")
    style: str = Field(AUTO_STYLE, description="Style name, or 'auto' to leave the prompt undecorated")
    aspect_ratio: AspectRatio = Field(AspectRatio.SQUARE, description="Output aspect ratio")
    output_count: int = Field(
        1,
        ge=1,
        le=MAX_OUTPUTS,
        alias="numberOfOutputs",
        description="Number of images to generate (1-4)",
    )
    client_api_key: Optional[str] = Field(
        None,
        description="Gemini API key supplied by the browser; overrides the server key when well-formed",
        repr=False,
    )

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        return _require_text(value, "prompt")

    @field_validator("style", mode="before")
    @classmethod
    def default_style(cls, value: Any) -> Any:
        """Treat a missing or blank style as 'auto'."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return AUTO_STYLE
        return value

    def get_size_tuple(self) -> tuple[int, int]:
        """Convert the aspect ratio to (width, height) for model-backed results."""
        return GENERATION_SIZES[self.aspect_ratio]

    def get_placeholder_size(self) -> tuple[int, int]:
        """Convert the aspect ratio to (width, height) for fallback placeholders."""
        return PLACEHOLDER_SIZES[self.aspect_ratio]

    def decorated_prompt(self) -> str:
        """Prompt with the style appended, unless the style is 'auto'."""
        if self.style == AUTO_STYLE:
            return self.prompt
        return f"{self.prompt} in {self.style} style"


class ApiKeyValidationRequest(CamelModel):
    """Request model for the credential validation endpoint."""

    api_key: str = Field("", description="Gemini API key to validate", repr=False)

    @field_validator("api_key", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ModerationRequest(CamelModel):
    """Request model for content moderation."""

    content: str = Field(..., description="Text to moderate")
    content_type: str = Field("prompt", description="Kind of content (prompt, edit-prompt, ...)")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        return _require_text(value, "content")


class ModelTestRequest(CamelModel):
    """Request model for running one prompt against one specific model."""

    model_name: str = Field(..., description="Model identifier, e.g. 'gemini-1.5-flash'")
    prompt: str = Field(..., description="Prompt to send to the model")
    client_api_key: Optional[str] = Field(None, description="Key to test with", repr=False)

    @field_validator("model_name")
    @classmethod
    def model_name_not_blank(cls, value: str) -> str:
        return _require_text(value, "modelName")

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        return _require_text(value, "prompt")


class VideoGenerationRequest(CamelModel):
    """Request model for (mock) video generation."""

    prompt: str = Field(..., max_length=2000, description="Text prompt describing the video")
    style: Optional[str] = Field(None, description="Style name")
    duration: Optional[int] = Field(None, ge=1, le=60, description="Requested length in seconds")
    resolution: Optional[str] = Field(None, description="Requested resolution label, e.g. '720p'")

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        return _require_text(value, "prompt")


class AgentforceRequest(CamelModel):
    """Request model for CRM-backed prompt enhancement."""

    customer_id: str = Field("", description="CRM customer identifier, e.g. 'SF-10042'")
    prompt: str = Field(..., description="Base prompt to enhance")

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        return _require_text(value, "prompt")
