"""Response models for Clair-X."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from clairx.models.base import CamelModel
from clairx.models.errors import ErrorCode
from clairx.models.requests import AspectRatio

FALLBACK_MODEL = "fallback"


class ErrorResponse(BaseModel):
    """Body returned with 4xx/5xx HTTP statuses."""

    error: str = Field(..., description="User-friendly error message")
    code: ErrorCode = Field(..., description="Error category code")
    details: Optional[dict] = Field(None, description="Optional additional context for the client")


class ImageResult(CamelModel):
    """Result for a single generated image."""

    url: str = Field(..., description="Placeholder image URL rendering the result")
    prompt: str = Field(..., description="Prompt as submitted by the user")
    style: str = Field(..., description="Requested style")
    aspect_ratio: AspectRatio = Field(..., description="Requested aspect ratio")
    description: Optional[str] = Field(None, description="Model-written description of the image")
    model: Optional[str] = Field(None, description="Model that produced this entry ('fallback' for placeholders)")


class ImageGenerationResponse(CamelModel):
    """Response model for image generation."""

    success: bool = Field(True, description="Always true; failures degrade to fallback mode")
    images: list[ImageResult] = Field(..., description="Results, index-aligned with the requested outputs")
    mode: Literal["gemini", "fallback"] = Field(..., description="Which path produced the images")
    model: Optional[str] = Field(None, description="Model used when mode='gemini'")
    reason: Optional[str] = Field(None, description="Why the fallback path was taken")
    error: Optional[str] = Field(None, description="Upstream error message behind a fallback, if any")

    @model_validator(mode="after")
    def validate_mode_state(self):
        """Ensure mode and its companion fields are consistent."""
        if not self.images:
            raise ValueError("images must not be empty")
        if self.mode == "gemini":
            if not self.model:
                raise ValueError("model must be present when mode='gemini'")
            if self.reason:
                raise ValueError("reason must be None when mode='gemini'")
        elif not self.reason:
            raise ValueError("reason must be present when mode='fallback'")
        return self


class ApiKeyValidationResponse(CamelModel):
    """Response model for the credential validation endpoint."""

    valid: bool
    model: Optional[str] = None
    reason: Optional[str] = None
    details: Optional[str] = None


class ApiStatusResponse(CamelModel):
    """Server-side credential and model availability."""

    gemini_available: bool
    model: Optional[str] = None
    reason: Optional[str] = None
    details: Optional[str] = None


class ModerationCategories(CamelModel):
    """Flags raised by the moderation check."""

    harmful: bool = False
    offensive: bool = False


class ModerationResult(CamelModel):
    """Outcome of a moderation check."""

    safe: bool
    categories: ModerationCategories
    score: float = Field(..., ge=0.0, le=1.0, description="Likelihood that the content is unsafe")
    message: str


class ModelTestResponse(CamelModel):
    """Result of sending one prompt to one model."""

    success: bool
    model: Optional[str] = None
    text: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def validate_success_state(self):
        """Ensure success state is consistent."""
        if self.success and self.error:
            raise ValueError("error must be None when success=True")
        if not self.success and not self.error:
            raise ValueError("error must be present when success=False")
        return self


class VideoResult(CamelModel):
    """A single (mock) generated video."""

    id: str
    url: str
    prompt: str
    style: Optional[str] = None
    duration: Optional[int] = None
    thumbnail: str


class VideoGenerationResponse(CamelModel):
    """Response model for video generation."""

    success: bool = True
    videos: list[VideoResult]


class UserInfo(CamelModel):
    """Profile of the signed-in demo user."""

    name: str
    email: str
    image: str


class CustomerProfile(CamelModel):
    """CRM record used to tailor prompts."""

    name: str
    preferences: list[str]
    recent_purchases: list[str]
    marketing_segment: str


class AgentforceResponse(CamelModel):
    """Prompt enhanced with CRM customer data."""

    enhanced_prompt: str
    agent_response: str
    customer_data: CustomerProfile
