"""Service layer entry points for Referent."""

from __future__ import annotations

from .chunker import split_content  # noqa: F401
from .completion import CompletionClient  # noqa: F401
from .extractor import ArticleExtractor, extract_article  # noqa: F401
from .pipeline import PipelineResult, process_url  # noqa: F401
from .transformer import ArticleTransformer, transform_content, translate_content  # noqa: F401

__all__ = [
    "ArticleExtractor",
    "ArticleTransformer",
    "CompletionClient",
    "PipelineResult",
    "extract_article",
    "process_url",
    "split_content",
    "transform_content",
    "translate_content",
]
