"""Domain models used across the application."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from referent.errors import ValidationError

__all__ = ["ActionKind", "CompletionResult", "ExtractedArticle", "PromptConfig"]


class ExtractedArticle(BaseModel):
    """Title, publication date and body text extracted from a web page."""

    model_config = ConfigDict(frozen=True)

    title: str
    published_at: str = Field(..., description="Raw date text as found on the page, never parsed")
    body: str


class ActionKind(str, Enum):
    """Transformations that can be applied to an article body."""

    SUMMARIZE = "summary"
    EXTRACT_THESES = "thesis"
    SOCIAL_POST = "telegram"

    @classmethod
    def parse(cls, value: "ActionKind | str | None") -> "ActionKind":
        """Return the member matching ``value`` or raise :class:`ValidationError`."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(member.value for member in cls)
        raise ValidationError(f"Action must be one of: {allowed}")


class PromptConfig(BaseModel):
    """Messages and generation parameters for a single completion request."""

    model_config = ConfigDict(frozen=True)

    system_instruction: str
    user_instruction: str
    temperature: float = Field(..., ge=0.0, le=1.0)
    max_output_tokens: int = Field(..., gt=0)

    def to_messages(self) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system_instruction},
            {"role": "user", "content": self.user_instruction},
        ]


class CompletionResult(BaseModel):
    """Text returned by the completion service."""

    text: str
