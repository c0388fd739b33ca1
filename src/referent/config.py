"""Configuration model and loader for the Referent pipeline."""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from referent.errors import ConfigurationError

__all__ = ["DEFAULT_BASE_URL", "DEFAULT_MODEL", "PipelineConfig"]

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "deepseek/deepseek-chat"

# Environment variable -> field name.
_ENV_FIELDS = {
    "OPENROUTER_API_KEY": "api_key",
    "REFERENT_BASE_URL": "base_url",
    "REFERENT_MODEL": "model",
    "NEXT_PUBLIC_APP_URL": "app_url",
    "REFERENT_APP_TITLE": "app_title",
    "REFERENT_OUTPUT_LANGUAGE": "output_language",
    "REFERENT_FETCH_TIMEOUT": "fetch_timeout",
    "REFERENT_COMPLETION_TIMEOUT": "completion_timeout",
    "REFERENT_MAX_CONTENT_LENGTH": "max_content_length",
}


class PipelineConfig(BaseModel):
    """Settings shared by the extractor and the completion client."""

    api_key: str | None = Field(
        default=None,
        description="Bearer credential for the chat-completion service",
    )
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Root URL of the chat-completion API")
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier sent with every request")
    app_url: str = Field(
        default="http://localhost:3000",
        description="Sent as the HTTP-Referer header so the provider can attribute traffic",
    )
    app_title: str = Field(default="Referent App", description="Sent as the X-Title header")
    output_language: str = Field(
        default="English",
        description="Language the generated summaries, theses and posts are written in",
    )
    fetch_timeout: float = Field(default=30.0, gt=0, description="Seconds allowed for a page fetch")
    completion_timeout: float = Field(
        default=60.0, gt=0, description="Seconds allowed for a text completion request"
    )
    max_content_length: int = Field(
        default=20000,
        gt=0,
        description=(
            "Largest body (in characters) sent to the completion service in one request. "
            "Roughly a 6000-7000 token budget at a conservative 3 characters per token."
        ),
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PipelineConfig":
        """Build a configuration from environment variables."""

        source = os.environ if environ is None else environ
        values = {
            field: source[name].strip()
            for name, field in _ENV_FIELDS.items()
            if source.get(name, "").strip()
        }

        try:
            return cls.model_validate(values)
        except PydanticValidationError as exc:
            raise ConfigurationError(f"Invalid pipeline configuration:\n{exc}") from exc

    def require_api_key(self) -> str:
        """Return the API credential or raise :class:`ConfigurationError`."""

        if not self.api_key:
            raise ConfigurationError(
                "The completion service API key is not configured. "
                "Set OPENROUTER_API_KEY in the environment or in a .env file."
            )
        return self.api_key
