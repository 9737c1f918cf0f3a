"""Image generation pipeline: credential, model probe, fan-out, fallback.

The upstream model writes text, not pixels. Each requested output is one
content call asking the model to describe the image; the description is
rendered as a placeholder URL at the real-model dimensions. Whenever a real
result cannot be produced the whole request degrades to placeholders, so
callers always receive images.
"""

import asyncio
import logging
import random
import time
from datetime import datetime, timezone
from typing import Optional

from clairx.config import Settings
from clairx.models.metrics import GenerationMetrics
from clairx.models.requests import ImageGenerationRequest
from clairx.models.responses import ImageGenerationResponse, ImageResult
from clairx.providers.base import ContentProvider
from clairx.services.credential_service import resolve_credential
from clairx.services.metrics_service import MetricsService
from clairx.services.model_probe import ModelProber
from clairx.services.placeholder_service import build_placeholder_url, placeholders, random_seed
from clairx.services.retry_service import build_retry_config, retry_with_backoff

logger = logging.getLogger(__name__)

NO_CREDENTIAL_REASON = "Invalid API key format or no API key available"
NO_WORKING_MODEL_REASON = "No working Gemini models found"
GENERATION_FAILED_REASON = "Generation failed"


def description_prompt(decorated_prompt: str, seed: int) -> str:
    """Prompt asking the model to describe one image; the seed keeps outputs apart."""
    return f"Create a detailed description for an image of: {decorated_prompt}. Seed: {seed}."


class ImageService:
    """Generation pipeline with placeholder fallback."""

    def __init__(
        self,
        settings: Settings,
        provider: ContentProvider,
        prober: ModelProber | None = None,
        metrics_service: MetricsService | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Service settings (server key, timeouts, retry attempts)
            provider: Content provider used for probes and generation calls
            prober: Model prober (created from provider and settings if not provided)
            metrics_service: Optional MetricsService for recording metrics
            rng: Random source for seeds; pass a seeded Random for reproducible output
        """
        self.settings = settings
        self.provider = provider
        self.prober = prober or ModelProber(provider, settings)
        self._metrics_service = metrics_service
        self._rng = rng
        self._retry_config = build_retry_config(settings.generation_max_attempts)

    async def generate(
        self,
        request: ImageGenerationRequest,
        client_api_key: Optional[str] = None,
    ) -> ImageGenerationResponse:
        """
        Generate images for a request, falling back to placeholders on any failure.

        Args:
            request: Image generation request
            client_api_key: Key supplied by the caller; defaults to ``request.client_api_key``

        Returns:
            ImageGenerationResponse in 'gemini' mode when a model produced every
            output, otherwise in 'fallback' mode with the reason set
        """
        start_time = time.time()
        api_key = resolve_credential(client_api_key or request.client_api_key, self.settings)

        if api_key is None:
            logger.info("[ImageService] No usable API key, returning placeholders")
            return self._fallback(request, NO_CREDENTIAL_REASON, start_time)

        probe = await self.prober.probe(api_key)
        if probe.model is None:
            logger.info("[ImageService] No working model for this key, returning placeholders")
            return self._fallback(request, NO_WORKING_MODEL_REASON, start_time, probes=probe.probes, error=probe.error)

        try:
            images = await self._generate_batch(request, api_key, probe.model)
        except Exception as e:
            # All-or-nothing: one failed output discards the whole batch.
            logger.warning(f"⚠️ [ImageService] Generation with {probe.model} failed, returning placeholders: {e}")
            self.prober.invalidate(api_key)
            return self._fallback(request, GENERATION_FAILED_REASON, start_time, probes=probe.probes, error=str(e))

        self._record(start_time, "gemini", len(images), probe.model, probe.probes)
        return ImageGenerationResponse(images=images, mode="gemini", model=probe.model)

    async def _generate_batch(self, request: ImageGenerationRequest, api_key: str, model: str) -> list[ImageResult]:
        """Issue one content call per output concurrently; any failure fails the batch."""
        tasks = [
            asyncio.ensure_future(self._generate_one(request, api_key, model))
            for _ in range(request.output_count)
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

    async def _generate_one(self, request: ImageGenerationRequest, api_key: str, model: str) -> ImageResult:
        decorated = request.decorated_prompt()
        prompt = description_prompt(decorated, random_seed(self._rng))

        text = await retry_with_backoff(
            self.provider.generate_text,
            prompt,
            model,
            api_key,
            retry_config=self._retry_config,
            timeout_seconds=self.settings.request_timeout_seconds,
        )
        description = text.strip() or decorated
        width, height = request.get_size_tuple()

        return ImageResult(
            url=build_placeholder_url(width, height, description),
            prompt=request.prompt,
            style=request.style,
            aspect_ratio=request.aspect_ratio,
            description=description,
            model=model,
        )

    def _fallback(
        self,
        request: ImageGenerationRequest,
        reason: str,
        start_time: float,
        probes: int = 0,
        error: Optional[str] = None,
    ) -> ImageGenerationResponse:
        images = placeholders(request, self._rng)
        self._record(start_time, "fallback", len(images), None, probes)
        return ImageGenerationResponse(images=images, mode="fallback", reason=reason, error=error)

    def _record(self, start_time: float, mode: str, output_count: int, model: Optional[str], probes: int) -> None:
        if self._metrics_service is None:
            return
        self._metrics_service.record(
            GenerationMetrics(
                duration_ms=int((time.time() - start_time) * 1000),
                mode=mode,
                output_count=output_count,
                model_used=model,
                probe_count=probes,
                timestamp=datetime.now(timezone.utc),
            )
        )
