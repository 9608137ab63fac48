"""
FastAPI service exposing the random-review sentiment analysis.
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from review_sentiment.config import Settings, load_settings
from review_sentiment.corpus import load_reviews
from review_sentiment.errors import AnalysisInProgressError, CorpusLoadError, ReviewSentimentError
from review_sentiment.logging_utils import PipelineLogger, setup_logging
from review_sentiment.presentation import describe_corpus_failure, describe_failure
from review_sentiment.sentiment import SentimentClient
from review_sentiment.service import AnalysisService

class AnalyzeRequest(BaseModel):
    api_token: str | None = None


class AnalyzeResponse(BaseModel):
    review: str
    sentiment: str
    label: str
    icon: str
    emoji: str
    logs: list[str] = Field(default_factory=list)
    log_markdown: str | None = None
    raw: Any = None


class ReviewsResponse(BaseModel):
    count: int


@dataclass
class AppState:
    service: Optional[AnalysisService] = None
    corpus_error: Optional[str] = None


def build_state(settings: Settings, client: SentimentClient) -> AppState:
    startup_logger = PipelineLogger("api.startup")
    try:
        corpus = load_reviews(settings.reviews_path)
    except CorpusLoadError as exc:
        startup_logger.error("Reviews failed to load", error=exc.message)
        return AppState(corpus_error=describe_corpus_failure(exc))
    startup_logger.info("Reviews loaded", count=len(corpus))
    service = AnalysisService(corpus, client, default_credential=settings.api_token)
    return AppState(service=service)


def create_app(settings: Optional[Settings] = None, client: Optional[SentimentClient] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or load_settings()
        setup_logging(resolved.log_level)
        sentiment_client = client or SentimentClient(
            resolved.sentiment_api_url,
            timeout=resolved.timeout,
        )
        app.state.analysis = build_state(resolved, sentiment_client)
        try:
            yield
        finally:
            app.state.analysis = AppState()
            if client is None:
                await sentiment_client.aclose()

    api = FastAPI(title="Review Sentiment API", version="0.1.0", lifespan=lifespan)
    api.state.analysis = AppState()

    @api.get("/health", response_model=dict)
    async def health(request: Request) -> dict:
        state: AppState = request.app.state.analysis
        return {"status": "ok", "reviews_loaded": state.service is not None}

    @api.get("/reviews", response_model=ReviewsResponse)
    async def reviews(request: Request) -> ReviewsResponse:
        service = _require_service(request.app.state.analysis)
        return ReviewsResponse(count=len(service.corpus))

    @api.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(request: Request, payload: AnalyzeRequest | None = None) -> AnalyzeResponse:
        service = _require_service(request.app.state.analysis)
        request_id = str(uuid.uuid4())
        pipeline_logger = PipelineLogger("api.analyze", context={"request_id": request_id})
        pipeline_logger.info("Received analyze request", stage="request")

        credential = payload.api_token if payload else None
        try:
            report = await service.analyze(credential, logger=pipeline_logger)
        except AnalysisInProgressError as exc:
            raise HTTPException(status_code=409, detail=exc.message) from exc
        except ReviewSentimentError as exc:
            raise HTTPException(
                status_code=502,
                detail=describe_failure(exc),
                headers={"X-Error-Kind": exc.kind.value},
            ) from exc

        pipeline_logger.info("Responding to client", stage="response")
        return AnalyzeResponse(
            review=report.review,
            sentiment=report.sentiment.value,
            label=report.display.label,
            icon=report.display.icon,
            emoji=report.display.emoji,
            logs=pipeline_logger.as_text_lines(),
            log_markdown=pipeline_logger.as_markdown(),
            raw=report.payload,
        )

    return api


def _require_service(state: AppState) -> AnalysisService:
    if state.service is None:
        detail = state.corpus_error or "Reviews are not loaded yet."
        raise HTTPException(status_code=503, detail=detail)
    return state.service


app = create_app()
