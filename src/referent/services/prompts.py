"""Prompt templates for each article transformation."""

from __future__ import annotations

from referent.models import ActionKind, PromptConfig

__all__ = ["build_prompt_config", "build_translation_prompt"]

_SYSTEM_INSTRUCTIONS = {
    ActionKind.SUMMARIZE: (
        "You are an experienced analyst and journalist. Your task is to write a short but "
        "informative summary of an article. Your answer must be structured, easy to follow "
        "and contain only the key ideas of the article."
    ),
    ActionKind.EXTRACT_THESES: (
        "You are an expert in text analysis. Your task is to extract the main theses of an "
        "article in a structured form. Each thesis must be a self-contained statement that "
        "captures an important idea from the article."
    ),
    ActionKind.SOCIAL_POST: (
        "You are a copywriter who specialises in Telegram channel posts. Your task is to write "
        "an engaging and informative post. The post must be well structured, use emoji for "
        "visual emphasis and end with a call to action."
    ),
}

_GENERATION_PARAMETERS = {
    ActionKind.SUMMARIZE: (0.5, 2000),
    ActionKind.EXTRACT_THESES: (0.4, 2500),
    ActionKind.SOCIAL_POST: (0.7, 3000),
}


def _user_instruction(action: ActionKind, body: str, source_url: str | None, language: str) -> str:
    if action is ActionKind.SUMMARIZE:
        return (
            "Write a short summary of the following article (2-3 paragraphs) that highlights its "
            f"main ideas and key points. Answer in {language}; keep it informative and easy to "
            f"read:\n\n{body}"
        )

    if action is ActionKind.EXTRACT_THESES:
        return (
            "Extract the main theses of the following article. Present them as a numbered list "
            "where every item is a separate thesis. Keep the theses brief but informative. "
            f"Answer in {language}:\n\n{body}"
        )

    reference = f"\n\nArticle source: {source_url}" if source_url else ""
    return (
        "Write a Telegram channel post based on the following article. The post must:\n"
        "- Hook the reader from the very first line\n"
        "- Convey the main ideas of the article concisely\n"
        "- Use emoji for visual structure (without overdoing it)\n"
        "- End with a call to action\n"
        "- Be structured: a headline (emoji allowed), the main text, hashtags at the end\n"
        "- Be easy and interesting to read\n"
        "- Finish with a link to the article source in the format \"📎 Source: [URL]\" where "
        "[URL] is the plain URL without square or round brackets, for example: "
        "\"📎 Source: https://example.com/article\"\n\n"
        "IMPORTANT: Do not use Markdown for the link (do not write [text](url)). Write the "
        "plain URL after \"Source:\".\n\n"
        f"Answer in {language}.\n\n"
        f"Article:\n{body}{reference}"
    )


def build_prompt_config(
    action: ActionKind,
    body: str,
    source_url: str | None = None,
    *,
    language: str = "English",
) -> PromptConfig:
    """Return the prompt and generation parameters for ``action`` applied to ``body``."""

    temperature, max_tokens = _GENERATION_PARAMETERS[action]
    return PromptConfig(
        system_instruction=_SYSTEM_INSTRUCTIONS[action],
        user_instruction=_user_instruction(action, body, source_url, language),
        temperature=temperature,
        max_output_tokens=max_tokens,
    )


def build_translation_prompt(body: str, *, language: str = "English") -> PromptConfig:
    """Return the prompt used to translate ``body`` into ``language``."""

    return PromptConfig(
        system_instruction=(
            f"You are a professional translator. Translate the text into {language}, "
            "preserving the structure and style of the original."
        ),
        user_instruction=f"Translate the following text into {language}:\n\n{body}",
        temperature=0.3,
        max_output_tokens=4000,
    )
