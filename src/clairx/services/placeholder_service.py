"""Placeholder image synthesis.

Placeholders are URLs, not pixels: the front end renders
``/placeholder.svg`` with the size and query encoded in the URL. Every entry
gets its own random seed so identical prompts still produce distinguishable
images.
"""

import random
from typing import Optional
from urllib.parse import quote

from clairx.models.requests import ImageGenerationRequest
from clairx.models.responses import FALLBACK_MODEL, ImageResult

PLACEHOLDER_PATH = "/placeholder.svg"
SEED_LIMIT = 1_000_000

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode ``value`` the way browsers' encodeURIComponent does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_placeholder_url(width: int, height: int, query: str) -> str:
    """URL of a placeholder image of the given size labelled with ``query``."""
    return f"{PLACEHOLDER_PATH}?height={height}&width={width}&query={encode_uri_component(query)}"


def random_seed(rng: Optional[random.Random] = None) -> int:
    """Seed in [0, 1_000_000)."""
    return (rng or random).randrange(SEED_LIMIT)


def placeholders(request: ImageGenerationRequest, rng: Optional[random.Random] = None) -> list[ImageResult]:
    """
    Build ``request.output_count`` placeholder results without any network call.

    Args:
        request: Generation request
        rng: Random source for per-entry seeds; pass a seeded Random for reproducible URLs

    Returns:
        One ImageResult per requested output, each marked with model='fallback'
    """
    width, height = request.get_placeholder_size()
    results: list[ImageResult] = []
    for _ in range(request.output_count):
        seed = random_seed(rng)
        query = f"{request.prompt} {request.style} style {seed}"
        results.append(
            ImageResult(
                url=build_placeholder_url(width, height, query),
                prompt=request.prompt,
                style=request.style,
                aspect_ratio=request.aspect_ratio,
                description=f"Placeholder image for: {request.prompt} in {request.style} style",
                model=FALLBACK_MODEL,
            )
        )
    return results
