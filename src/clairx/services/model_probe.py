"""Model availability probing with a last-known-good cache.

Models are tried in a fixed order of preference instead of asking the API to
list models, which has proven unreliable across API versions. The first model
that answers a minimal prompt wins. A working model is remembered per key for
a short TTL so that back-to-back requests skip the probe round trip.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional, TypeVar

from clairx.config import Settings
from clairx.models.errors import ErrorCode
from clairx.providers.base import ContentProvider
from clairx.services.retry_service import RetryableError, build_retry_config, retry_with_backoff

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROBE_PROMPT = "test"


async def first_success(
    candidates: Iterable[T],
    attempt: Callable[[T], Awaitable[Any]],
    stop_on: Optional[Callable[[Exception], bool]] = None,
) -> Optional[T]:
    """
    Return the first candidate for which ``attempt`` completes without raising.

    Candidates after the first success are never attempted. Failures are
    logged and swallowed. If ``stop_on`` returns True for a failure, the
    remaining candidates are skipped.

    Returns:
        The winning candidate, or None if every attempt failed
    """
    for candidate in candidates:
        try:
            await attempt(candidate)
        except Exception as e:
            logger.warning(f"⚠️ [ModelProber] Candidate {candidate} unavailable: {e}")
            if stop_on is not None and stop_on(e):
                logger.info("[ModelProber] Key rejected by the provider, skipping remaining candidates")
                return None
            continue
        return candidate
    return None


def _is_key_rejected(error: Exception) -> bool:
    return isinstance(error, RetryableError) and error.error_code == ErrorCode.CREDENTIAL_INVALID


def _cache_key(api_key: str) -> str:
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()


@dataclass
class ProbeResult:
    """Outcome of one availability check."""

    model: Optional[str]
    probes: int = 0
    cached: bool = False
    error: Optional[str] = None
    key_rejected: bool = False


class ModelProber:
    """Finds the first working model for a key and remembers it for a while."""

    def __init__(
        self,
        provider: ContentProvider,
        settings: Settings,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.provider = provider
        self.candidates = tuple(settings.model_candidates)
        self.ttl_seconds = settings.model_cache_ttl_seconds
        self.timeout_seconds = settings.probe_timeout_seconds
        self._clock = clock
        self._known_good: dict[str, tuple[str, float]] = {}

    async def find_working_model(self, api_key: str) -> Optional[str]:
        """Return the first candidate model that works with ``api_key``, or None."""
        return (await self.probe(api_key)).model

    async def probe(self, api_key: str, use_cache: bool = True) -> ProbeResult:
        """
        Check which model works with ``api_key``.

        Args:
            api_key: Syntactically valid Google API key
            use_cache: Reuse a model that worked within the TTL instead of probing

        Returns:
            ProbeResult with the chosen model (None if all candidates failed),
            the number of probes issued, and the last probe error
        """
        if use_cache:
            cached = self._cached_model(api_key)
            if cached is not None:
                logger.debug(f"[ModelProber] Reusing cached model {cached}")
                return ProbeResult(model=cached, cached=True)

        result = ProbeResult(model=None)

        async def _attempt(model: str) -> None:
            result.probes += 1
            try:
                await retry_with_backoff(
                    self.provider.generate_text,
                    PROBE_PROMPT,
                    model,
                    api_key,
                    retry_config=build_retry_config(1),
                    timeout_seconds=self.timeout_seconds,
                )
            except Exception as e:
                result.error = str(e)
                result.key_rejected = _is_key_rejected(e)
                raise

        result.model = await first_success(self.candidates, _attempt, stop_on=_is_key_rejected)
        if result.model is not None:
            result.error = None
            logger.info(f"✅ [ModelProber] Model {result.model} is working ({result.probes} probe(s))")
            self._remember(api_key, result.model)
        else:
            self.invalidate(api_key)
        return result

    def invalidate(self, api_key: str) -> None:
        """Forget the cached model for ``api_key`` so the next request re-probes."""
        self._known_good.pop(_cache_key(api_key), None)

    def _cached_model(self, api_key: str) -> Optional[str]:
        if self.ttl_seconds <= 0:
            return None
        entry = self._known_good.get(_cache_key(api_key))
        if entry is None:
            return None
        model, expires_at = entry
        if self._clock() >= expires_at:
            self.invalidate(api_key)
            return None
        return model

    def _remember(self, api_key: str, model: str) -> None:
        if self.ttl_seconds > 0:
            self._known_good[_cache_key(api_key)] = (model, self._clock() + self.ttl_seconds)
