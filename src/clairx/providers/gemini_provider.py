"""Google Gemini content provider."""

import asyncio
import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from clairx.config import Settings
from clairx.models.errors import ErrorCode
from clairx.services.retry_service import RetryableError

logger = logging.getLogger(__name__)

# Substrings Google returns when the key itself is rejected.
INVALID_KEY_MARKERS = ("API_KEY_INVALID", "API key not valid")


def _client_for(api_key: str, timeout_ms: int) -> genai.Client:
    """New client for one call. The raw key lives in the client until it is closed."""
    # google-genai expects timeout in milliseconds.
    return genai.Client(api_key=api_key, http_options=types.HttpOptions(timeout=timeout_ms))


def classify_api_error(error: genai_errors.APIError) -> ErrorCode:
    """Map a Gemini API error onto an ErrorCode."""
    message = str(error)
    status_code = getattr(error, "code", None) or 0
    if any(marker in message for marker in INVALID_KEY_MARKERS) or status_code in (401, 403):
        return ErrorCode.CREDENTIAL_INVALID
    if status_code == 429:
        return ErrorCode.RATE_LIMITED
    if status_code >= 500:
        return ErrorCode.PROVIDER_OVERLOADED
    return ErrorCode.PROVIDER_REJECTED


class GeminiProvider:
    """Content provider backed by the google-genai SDK."""

    def __init__(self, settings: Settings):
        """
        Initialize Gemini provider.

        Args:
            settings: Service settings; only the request timeout is read here.
                Keys are passed per call because each request may carry its own,
                and no key outlives the call that used it.
        """
        self.timeout_ms = int(settings.request_timeout_seconds * 1000)

    async def generate_text(self, prompt: str, model: str, api_key: str) -> str:
        """
        Generate text with one Gemini model.

        Args:
            prompt: Text prompt
            model: Gemini model identifier
            api_key: Google API key

        Returns:
            The response text, or an empty string when the model returned none

        Raises:
            RetryableError: For every failure, tagged with the matching ErrorCode
        """
        client = _client_for(api_key, self.timeout_ms)
        logger.debug(f"[GeminiProvider] generate_content model={model}, prompt_chars={len(prompt)}")
        try:
            response = await client.aio.models.generate_content(model=model, contents=prompt)
            return response.text or ""
        except genai_errors.APIError as e:
            code = classify_api_error(e)
            raise RetryableError(code, f"Gemini API error ({model}): {e}", original_exception=e)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise RetryableError(
                ErrorCode.PROVIDER_TIMEOUT,
                f"Gemini request timed out ({model}): {e}",
                original_exception=e,
            )
        except Exception as e:
            raise RetryableError(
                ErrorCode.INTERNAL_ERROR,
                f"Gemini generation failed ({model}): {e}",
                original_exception=e,
            )
        finally:
            await client.aio.aclose()
