"""
Random-review analysis: owns the loaded corpus and the sentiment client.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Optional

from .corpus import Corpus
from .errors import AnalysisInProgressError, ReviewSentimentError
from .logging_utils import PipelineLogger
from .presentation import SentimentDisplay, present
from .sentiment import Sentiment, SentimentClient


@dataclass(frozen=True)
class AnalysisReport:
    review: str
    sentiment: Sentiment
    display: SentimentDisplay
    payload: Any = None


class AnalysisService:
    """
    Runs at most one analysis at a time. The corpus is never mutated after construction.
    """

    def __init__(
        self,
        corpus: Corpus,
        client: SentimentClient,
        *,
        default_credential: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.corpus = corpus
        self.client = client
        self._default_credential = default_credential
        self._rng = rng or random.Random()
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def pick_review(self) -> str:
        return self.corpus.choose(self._rng)

    async def analyze(
        self,
        credential: Optional[str] = None,
        *,
        logger: Optional[PipelineLogger] = None,
    ) -> AnalysisReport:
        if self.busy:
            raise AnalysisInProgressError()

        log = logger or PipelineLogger(__name__)
        async with self._lock:
            review = self.pick_review()
            token = (credential or "").strip() or self._default_credential
            log.info(
                "Selected random review",
                stage="select",
                corpus_size=len(self.corpus),
                review_chars=len(review),
            )

            outcome = await self.client.request(review, token)
            if not outcome.ok:
                error: ReviewSentimentError = outcome.error
                log.warning(error.message, stage="classify", error_type=error.kind.value)
                raise error

            log.info("Classified review", stage="classify", sentiment=outcome.sentiment.value)
            return AnalysisReport(
                review=review,
                sentiment=outcome.sentiment,
                display=present(outcome.sentiment),
                payload=outcome.payload,
            )


__all__ = ["AnalysisReport", "AnalysisService"]
