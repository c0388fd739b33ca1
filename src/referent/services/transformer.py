"""Turn article bodies into summaries, thesis lists and social-media posts."""

from __future__ import annotations

import logging
import re

from referent.config import PipelineConfig
from referent.errors import UpstreamFormatError, ValidationError
from referent.models import ActionKind
from referent.services.chunker import split_content
from referent.services.completion import CompletionClient
from referent.services.prompts import build_prompt_config, build_translation_prompt

__all__ = [
    "ArticleTransformer",
    "TRUNCATION_NOTE",
    "enforce_attribution",
    "has_attribution",
    "normalize_links",
    "transform_content",
    "translate_content",
]

logger = logging.getLogger(__name__)

TRUNCATION_NOTE = (
    "[Note: the article was shortened for processing; results reflect the first part of the article.]"
)
ATTRIBUTION_PREFIX = "📎 Source:"

# [https://a](https://a) -> https://a
_MARKDOWN_URL_LINK_RE = re.compile(r"\[(https?://[^\]]+)\]\(https?://[^)]+\)")
# [https://a] -> https://a
_BRACKETED_URL_RE = re.compile(r"\[(https?://[^\]]+)\]")


def normalize_links(text: str) -> str:
    """Reduce markdown links whose label is a URL to the bare URL."""

    text = _MARKDOWN_URL_LINK_RE.sub(r"\1", text)
    return _BRACKETED_URL_RE.sub(r"\1", text)


def has_attribution(text: str, source_url: str) -> bool:
    return source_url in text or "source:" in text.lower()


def enforce_attribution(text: str, source_url: str) -> str:
    """Normalise links in ``text`` and make sure it credits ``source_url``."""

    text = normalize_links(text)
    if not has_attribution(text, source_url):
        text = f"{text}\n\n{ATTRIBUTION_PREFIX} {source_url}"
    return text


def _require_content(content: object) -> str:
    if not isinstance(content, str) or not content:
        raise ValidationError("Content is required")
    if not content.strip():
        raise ValidationError("Content must not be empty")
    return content


class ArticleTransformer:
    """Validate requests, build prompts and drive the completion client."""

    def __init__(
        self,
        config: PipelineConfig | None = None,
        *,
        completion_client: CompletionClient | None = None,
    ) -> None:
        if completion_client is not None:
            config = config or completion_client.config
        self._config = config or PipelineConfig.from_env()
        self._completion = completion_client or CompletionClient(self._config)

    def transform(
        self,
        content: str,
        action: ActionKind | str,
        source_url: str | None = None,
    ) -> str:
        """Apply ``action`` to ``content`` and return the generated text.

        Bodies longer than ``max_content_length`` are split; only the first
        chunk is sent and a truncation note is appended to the result.
        """

        content = _require_content(content)
        kind = ActionKind.parse(action)
        source_url = source_url.strip() if isinstance(source_url, str) and source_url.strip() else None
        limit = self._config.max_content_length

        if len(content) <= limit:
            result = self._complete(kind, content, source_url)
        else:
            chunks = split_content(content, limit)
            logger.info(
                "Content has %d characters; processing the first of %d chunks", len(content), len(chunks)
            )
            result = self._complete(kind, chunks[0], source_url)
            if len(chunks) > 1:
                result = f"{result}\n\n{TRUNCATION_NOTE}"
                if kind is ActionKind.SOCIAL_POST and source_url and not has_attribution(result, source_url):
                    result = f"{result}\n\n{ATTRIBUTION_PREFIX} {source_url}"

        if kind is ActionKind.SOCIAL_POST and source_url:
            result = enforce_attribution(result, source_url)

        if not result.strip():
            raise UpstreamFormatError("Empty response from the completion service. Try again.")

        return result

    def translate(self, content: str) -> str:
        """Translate ``content`` into the configured output language."""

        content = _require_content(content)
        prompt = build_translation_prompt(content, language=self._config.output_language)
        result = self._completion.complete(prompt).text
        if not result.strip():
            raise UpstreamFormatError("Empty response from the completion service. Try again.")
        return result

    def _complete(self, kind: ActionKind, body: str, source_url: str | None) -> str:
        prompt = build_prompt_config(kind, body, source_url, language=self._config.output_language)
        return self._completion.complete(prompt).text


def transform_content(content: str, action: ActionKind | str, source_url: str | None = None) -> str:
    """Transform ``content`` using configuration from the environment."""

    return ArticleTransformer().transform(content, action, source_url)


def translate_content(content: str) -> str:
    """Translate ``content`` using configuration from the environment."""

    return ArticleTransformer().translate(content)
