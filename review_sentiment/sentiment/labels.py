"""
Reduction of raw inference payloads to the closed three-way sentiment label.
"""

from __future__ import annotations

from enum import Enum
from numbers import Real
from typing import Any, Mapping, Optional, Sequence

CONFIDENCE_THRESHOLD = 0.5


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


_REMOTE_LABELS = {
    "POSITIVE": Sentiment.POSITIVE,
    "NEGATIVE": Sentiment.NEGATIVE,
}


def _first(value: Any) -> Any:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or not value:
        return None
    return value[0]


def _score(candidate: Mapping[str, Any]) -> Optional[Real]:
    score = candidate.get("score")
    if isinstance(score, bool) or not isinstance(score, Real):
        return None
    return score


def normalize(payload: Any) -> Sentiment:
    """
    Map a raw response (``[[{"label": ..., "score": ...}, ...]]``) to a Sentiment.

    Only the first candidate of the first group is inspected. Anything missing or
    of the wrong shape yields ``Sentiment.NEUTRAL``; a score of exactly 0.5 is
    inconclusive.
    """

    candidate = _first(_first(payload))
    if not isinstance(candidate, Mapping):
        return Sentiment.NEUTRAL

    label = candidate.get("label")
    sentiment = _REMOTE_LABELS.get(label) if isinstance(label, str) else None
    score = _score(candidate)
    if sentiment is None or score is None:
        return Sentiment.NEUTRAL
    if score > CONFIDENCE_THRESHOLD:
        return sentiment
    return Sentiment.NEUTRAL


__all__ = ["CONFIDENCE_THRESHOLD", "Sentiment", "normalize"]
