"""Mock video generation.

No video model is wired in: every request returns the same sample clip with
a placeholder thumbnail after a simulated rendering delay.
"""

import asyncio
import uuid

from clairx.config import Settings
from clairx.models.requests import VideoGenerationRequest
from clairx.models.responses import VideoGenerationResponse, VideoResult
from clairx.services.placeholder_service import build_placeholder_url

SAMPLE_VIDEO_URL = "https://storage.googleapis.com/web-dev-assets/video-and-source-tags/chrome.mp4"
THUMBNAIL_SIZE = (1280, 720)


class VideoService:
    """Returns sample videos for prompts."""

    def __init__(self, settings: Settings):
        self.delay_seconds = settings.video_delay_seconds

    async def generate(self, request: VideoGenerationRequest) -> VideoGenerationResponse:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        width, height = THUMBNAIL_SIZE
        return VideoGenerationResponse(
            videos=[
                VideoResult(
                    id=uuid.uuid4().hex[:13],
                    url=SAMPLE_VIDEO_URL,
                    prompt=request.prompt,
                    style=request.style,
                    duration=request.duration,
                    thumbnail=build_placeholder_url(width, height, request.prompt),
                )
            ]
        )
