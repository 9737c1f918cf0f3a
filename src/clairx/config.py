"""Configuration for the Clair-X generation service.

Settings are loaded with Pydantic Settings, in this priority order:

1. Keyword arguments passed to :class:`Settings`
2. Environment variables (``CLAIRX_*`` prefix)
3. A ``.env`` file in the working directory
4. Defaults defined below

The Gemini API key is the one exception to the prefix rule: it is read from
``GEMINI_API_KEY``, and separately from the legacy ``gemeni`` variable that
older deployments still set. Each is format-checked on its own, so a
malformed ``GEMINI_API_KEY`` does not hide a good legacy key.

Services never read the environment themselves. Build one ``Settings`` at
startup and pass it to the services that need it::

    settings = Settings()
    service = ImageService(settings, provider=GeminiProvider(settings))
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL_CANDIDATES = ("gemini-1.5-flash", "gemini-1.5-pro", "gemini-pro")


class Settings(BaseSettings):
    """Runtime settings for Clair-X."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CLAIRX_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
        protected_namespaces=(),
    )

    # Credential
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "GEMINI_API_KEY"),
        repr=False,
        description="Server-side Gemini API key",
    )
    legacy_gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("legacy_gemini_api_key", "gemeni"),
        repr=False,
        description="Server-side key under the legacy variable name; used when GEMINI_API_KEY is unusable",
    )
    api_key_prefix: str = Field(default="AIza", description="Prefix every Google API key starts with")
    api_key_min_length: int = Field(default=20, ge=1, description="Keys must be longer than this")

    # Models
    model_candidates: tuple[str, ...] = Field(
        default=DEFAULT_MODEL_CANDIDATES,
        min_length=1,
        description="Model identifiers in order of preference",
    )
    model_cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0.0,
        description="How long a working model is reused per key before re-probing (0 disables)",
    )

    # Upstream calls
    probe_timeout_seconds: float = Field(default=5.0, gt=0.0, description="Timeout for one availability probe")
    request_timeout_seconds: float = Field(default=10.0, gt=0.0, description="Timeout for one generation call")
    generation_max_attempts: int = Field(default=2, ge=1, le=5, description="Attempts per generation call")

    # Behaviour
    moderate_prompts: bool = Field(default=True, description="Reject flagged prompts on generation endpoints")
    video_delay_seconds: float = Field(default=3.0, ge=0.0, description="Simulated video rendering time")
    session_cookie_names: tuple[str, ...] = Field(
        default=("clairx.session-token", "__Secure-clairx.session-token"),
        description="Cookies whose presence marks a signed-in session",
    )

    # Server
    server_host: str = Field(default="0.0.0.0", description="Bind address")
    server_port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    log_level: str = Field(default="INFO", description="Root log level")
