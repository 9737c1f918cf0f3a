"""Base provider interface for text-generation backends."""

from typing import Protocol

from typing_extensions import runtime_checkable


@runtime_checkable
class ContentProvider(Protocol):
    """Protocol for providers that turn a prompt into text."""

    async def generate_text(self, prompt: str, model: str, api_key: str) -> str:
        """
        Run one content-generation call.

        Args:
            prompt: Text prompt
            model: Model identifier (e.g., "gemini-1.5-flash")
            api_key: Credential to authenticate the call with

        Returns:
            Generated text (may be empty)

        Raises:
            RetryableError: Tagged with the ErrorCode describing the failure
        """
        ...
