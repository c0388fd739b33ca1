"""Convenience script for running the Referent pipeline locally."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure the src directory is on the Python path so the referent package can be imported
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from referent.config import PipelineConfig  # noqa: E402  (import after path setup)
from referent.errors import PipelineError  # noqa: E402
from referent.models import ActionKind  # noqa: E402
from referent.services.extractor import ArticleExtractor  # noqa: E402
from referent.services.pipeline import require_body  # noqa: E402
from referent.services.transformer import ArticleTransformer  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract a web article and transform it with an LLM.")
    parser.add_argument("url", help="Article URL")
    parser.add_argument(
        "--action",
        choices=[kind.value for kind in ActionKind],
        default=ActionKind.SUMMARIZE.value,
        help="Transformation to apply (default: summary)",
    )
    parser.add_argument(
        "--translate",
        action="store_true",
        help="Translate the article instead of transforming it",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Extract the article at the given URL and print the generated text."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = _parse_args(argv)

    try:
        config = PipelineConfig.from_env()
        with ArticleExtractor(timeout=config.fetch_timeout) as extractor:
            article = extractor.extract(args.url)
        print(f"Title: {article.title}")
        print(f"Date: {article.published_at}")
        print()

        body = require_body(article)
        transformer = ArticleTransformer(config)
        if args.translate:
            output = transformer.translate(body)
        else:
            output = transformer.transform(body, args.action, source_url=args.url)
    except PipelineError as exc:
        logging.error("%s: %s", exc.code, exc.message)
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    main()
