"""Extract an article from a URL and transform it in one call."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from referent.config import PipelineConfig
from referent.errors import NoContentError
from referent.models import ActionKind, ExtractedArticle
from referent.services.extractor import BODY_NOT_FOUND, ArticleExtractor
from referent.services.transformer import ArticleTransformer

__all__ = ["PipelineResult", "process_url", "require_body"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResult:
    """The extracted article together with the generated text."""

    article: ExtractedArticle
    result: str


def require_body(article: ExtractedArticle) -> str:
    """Return the article body or raise :class:`NoContentError` when extraction found none."""

    body = article.body.strip()
    if not body or body == BODY_NOT_FOUND:
        raise NoContentError("No article content could be extracted from the page.")
    return body


def process_url(
    url: str,
    action: ActionKind | str,
    *,
    config: PipelineConfig | None = None,
    extractor: ArticleExtractor | None = None,
    transformer: ArticleTransformer | None = None,
) -> PipelineResult:
    """Fetch ``url``, extract its article and apply ``action`` to the body.

    The page is cited as the source of generated social-media posts.
    """

    kind = ActionKind.parse(action)
    config = config or PipelineConfig.from_env()
    transformer = transformer or ArticleTransformer(config)

    if extractor is None:
        with ArticleExtractor(timeout=config.fetch_timeout) as owned:
            article = owned.extract(url)
    else:
        article = extractor.extract(url)

    body = require_body(article)
    logger.info("Transforming %r with action %s", article.title, kind.value)
    return PipelineResult(article=article, result=transformer.transform(body, kind, source_url=url))
