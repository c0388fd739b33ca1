"""API routes exposing extraction and transformation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict, Field

from referent.errors import PipelineError, ValidationError
from referent.services.extractor import extract_article
from referent.services.pipeline import process_url
from referent.services.transformer import transform_content, translate_content

logger = logging.getLogger(__name__)

router = APIRouter()

ILLUSTRATION_DISABLED_MESSAGE = "Illustration generation is temporarily disabled."


class ParseRequest(BaseModel):
    url: str | None = None


class ParseResponse(BaseModel):
    title: str
    date: str
    content: str


class ProcessRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str | None = None
    action: str | None = None
    source_url: str | None = Field(default=None, alias="sourceUrl")


class ProcessResponse(BaseModel):
    result: str


class TranslateRequest(BaseModel):
    content: str | None = None


class TranslateResponse(BaseModel):
    translation: str


class PipelineRequest(BaseModel):
    url: str | None = None
    action: str | None = None


class PipelineResponse(BaseModel):
    article: ParseResponse
    result: str


def _http_error(exc: PipelineError) -> HTTPException:
    return HTTPException(status_code=exc.http_status, detail=exc.to_dict())


def _require_url(url: str | None) -> str:
    if not url or not url.strip():
        raise _http_error(ValidationError("URL is required"))
    return url.strip()


@router.post("/parse", response_model=ParseResponse)
async def parse_article(payload: ParseRequest) -> ParseResponse:
    """Fetch a page and return its title, publication date and body."""

    url = _require_url(payload.url)
    try:
        article = await run_in_threadpool(extract_article, url)
    except PipelineError as exc:
        logger.warning("Parsing %s failed: %s", url, exc.message)
        raise _http_error(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive guard for unexpected failures
        logger.exception("Unexpected pipeline failure")
        raise HTTPException(
            status_code=500, detail={"code": "INTERNAL_ERROR", "message": str(exc)}
        ) from exc

    return ParseResponse(title=article.title, date=article.published_at, content=article.body)


@router.post("/ai-process", response_model=ProcessResponse)
async def process_content(payload: ProcessRequest) -> ProcessResponse:
    """Summarise, extract theses from or write a post about the supplied content."""

    try:
        result = await run_in_threadpool(
            transform_content, payload.content, payload.action, payload.source_url
        )
    except PipelineError as exc:
        logger.warning("Processing failed (%s): %s", exc.code, exc.message)
        raise _http_error(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive guard for unexpected failures
        logger.exception("Unexpected pipeline failure")
        raise HTTPException(
            status_code=500, detail={"code": "INTERNAL_ERROR", "message": str(exc)}
        ) from exc

    return ProcessResponse(result=result)


@router.post("/translate", response_model=TranslateResponse)
async def translate(payload: TranslateRequest) -> TranslateResponse:
    """Translate the supplied content into the configured output language."""

    try:
        translation = await run_in_threadpool(translate_content, payload.content)
    except PipelineError as exc:
        logger.warning("Translation failed (%s): %s", exc.code, exc.message)
        raise _http_error(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive guard for unexpected failures
        logger.exception("Unexpected pipeline failure")
        raise HTTPException(
            status_code=500, detail={"code": "INTERNAL_ERROR", "message": str(exc)}
        ) from exc

    return TranslateResponse(translation=translation)


@router.post("/process", response_model=PipelineResponse)
async def process_page(payload: PipelineRequest) -> PipelineResponse:
    """Extract the article at ``url`` and apply ``action`` to it."""

    url = _require_url(payload.url)
    try:
        outcome = await run_in_threadpool(process_url, url, payload.action)
    except PipelineError as exc:
        logger.warning("Pipeline for %s failed (%s): %s", url, exc.code, exc.message)
        raise _http_error(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive guard for unexpected failures
        logger.exception("Unexpected pipeline failure")
        raise HTTPException(
            status_code=500, detail={"code": "INTERNAL_ERROR", "message": str(exc)}
        ) from exc

    article = outcome.article
    return PipelineResponse(
        article=ParseResponse(title=article.title, date=article.published_at, content=article.body),
        result=outcome.result,
    )


@router.post("/illustration")
async def generate_illustration() -> None:
    """Image generation is switched off; the endpoint always answers 503."""

    raise HTTPException(
        status_code=503,
        detail={"code": "DISABLED", "message": ILLUSTRATION_DISABLED_MESSAGE},
    )
