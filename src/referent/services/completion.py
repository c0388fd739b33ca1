"""Client for the external chat-completion service."""

from __future__ import annotations

import logging

import openai
from openai import OpenAI

from referent.config import PipelineConfig
from referent.errors import NetworkError, UpstreamFormatError, UpstreamHttpError, UpstreamTimeout
from referent.models import CompletionResult, PromptConfig

__all__ = ["CompletionClient"]

logger = logging.getLogger(__name__)

MAX_ERROR_BODY = 200


def _error_message(exc: openai.APIStatusError) -> str:
    """Derive a readable message from a non-success completion response."""

    response = exc.response
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return f"Completion API error: {error['message']}"
        if isinstance(error, str) and error:
            return f"Completion API error: {error}"

    raw = response.text
    if raw:
        return f"Completion API error: {raw[:MAX_ERROR_BODY]}"

    reason = response.reason_phrase or "request failed"
    return f"Completion API error: HTTP {exc.status_code} {reason}"


class CompletionClient:
    """Issue single, time-bounded chat-completion requests.

    No retries are performed here; every failure is converted into a
    :class:`~referent.errors.PipelineError` and handed to the caller.
    """

    def __init__(self, config: PipelineConfig | None = None, *, client: OpenAI | None = None) -> None:
        self._config = config or PipelineConfig.from_env()
        self._client = client

    @property
    def config(self) -> PipelineConfig:
        return self._config

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self._config.require_api_key(),
                base_url=self._config.base_url,
                max_retries=0,
                timeout=self._config.completion_timeout,
                default_headers={
                    "HTTP-Referer": self._config.app_url,
                    "X-Title": self._config.app_title,
                },
            )
        return self._client

    def complete(self, prompt: PromptConfig, *, timeout: float | None = None) -> CompletionResult:
        """Send ``prompt`` and return the text of the first completion choice."""

        client = self._get_client()
        budget = timeout if timeout is not None else self._config.completion_timeout

        logger.info(
            "Requesting completion from %s (max_tokens=%d, timeout=%gs)",
            self._config.model,
            prompt.max_output_tokens,
            budget,
        )
        try:
            response = client.chat.completions.create(
                model=self._config.model,
                messages=prompt.to_messages(),
                temperature=prompt.temperature,
                max_tokens=prompt.max_output_tokens,
                timeout=budget,
            )
        except openai.APITimeoutError as exc:
            logger.warning("Completion request timed out after %gs", budget)
            raise UpstreamTimeout(
                "The completion service did not respond in time. Try again later or shorten the article."
            ) from exc
        except openai.APIConnectionError as exc:
            logger.warning("Completion service unreachable: %s", exc)
            raise NetworkError(
                "Could not reach the completion service. Check the network connection and try again."
            ) from exc
        except openai.APIStatusError as exc:
            message = _error_message(exc)
            logger.warning("Completion request failed with HTTP %s: %s", exc.status_code, message)
            raise UpstreamHttpError.from_status(exc.status_code, message) from exc
        except openai.APIResponseValidationError as exc:
            raise UpstreamFormatError("Unexpected response shape from the completion service") from exc

        choices = getattr(response, "choices", None)
        if not choices:
            raise UpstreamFormatError("Unexpected response shape from the completion service")

        message = getattr(choices[0], "message", None)
        if message is None:
            raise UpstreamFormatError("Unexpected response shape from the completion service")

        return CompletionResult(text=getattr(message, "content", None) or "")
