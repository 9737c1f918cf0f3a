"""Metrics models for Clair-X."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class GenerationMetrics(BaseModel):
    """Tracking data for a generation request."""

    duration_ms: int = Field(..., ge=0, description="Total request time in milliseconds")
    mode: str = Field(..., description="'gemini' when a model produced the output, 'fallback' otherwise")
    output_count: int = Field(..., ge=0, description="Number of results returned")
    model_used: Optional[str] = Field(None, description="AI model identifier")
    probe_count: int = Field(0, ge=0, description="Availability probes issued (0 = cached model reused)")
    timestamp: Optional[datetime] = Field(None, description="When the request completed (UTC)")
