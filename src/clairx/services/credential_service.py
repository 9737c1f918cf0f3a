"""Credential resolution and format checks for Gemini API keys.

A format check only tells us a string *looks* like a Google API key. Whether
the key actually authenticates is decided by probing a model (see
:mod:`clairx.services.model_probe`).
"""

from typing import Optional

from clairx.config import Settings

EMPTY_KEY_REASON = "API key is empty"
INVALID_FORMAT_REASON = "API key format is invalid"
NO_KEY_REASON = "API key not configured"


def is_valid_api_key_format(
    api_key: Optional[str],
    prefix: str = "AIza",
    min_length: int = 20,
) -> bool:
    """Return True if the key is non-empty, starts with the vendor prefix and is long enough."""
    if not api_key:
        return False
    key = api_key.strip()
    return key.startswith(prefix) and len(key) > min_length


def server_keys(settings: Settings) -> tuple[Optional[str], ...]:
    """Server-configured keys in lookup order: ``GEMINI_API_KEY``, then legacy ``gemeni``."""
    return (settings.gemini_api_key, settings.legacy_gemini_api_key)


def resolve_credential(client_supplied: Optional[str], settings: Settings) -> Optional[str]:
    """
    Pick the key to use for one request.

    The client-supplied key wins when it is well-formed; otherwise each
    server-configured key is tried in turn and the first well-formed one is
    used. Returns None when none qualifies.
    """
    for candidate in (client_supplied, *server_keys(settings)):
        if is_valid_api_key_format(candidate, settings.api_key_prefix, settings.api_key_min_length):
            return candidate.strip()
    return None


def describe_unusable_server_key(settings: Settings) -> tuple[str, str]:
    """(reason, details) when :func:`resolve_credential` finds no usable server key."""
    configured = [key for key in server_keys(settings) if key and key.strip()]
    if not configured:
        return NO_KEY_REASON, "Please add your Gemini API key in the settings page"
    return describe_invalid_key(configured[0], settings)


def describe_invalid_key(api_key: Optional[str], settings: Settings) -> tuple[str, str]:
    """User-facing (reason, details) for a key that failed the format check."""
    if not api_key or not api_key.strip():
        return EMPTY_KEY_REASON, "Please provide a valid Gemini API key"
    return (
        INVALID_FORMAT_REASON,
        f"The API key format appears to be invalid. Google API keys typically start with "
        f"'{settings.api_key_prefix}'",
    )
