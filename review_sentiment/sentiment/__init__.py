"""
Remote sentiment classification: HTTP client and label normalization.
"""

from .client import (
    ClassificationFailure,
    ClassificationOutcome,
    ClassificationSuccess,
    SentimentClient,
    build_headers,
)
from .labels import CONFIDENCE_THRESHOLD, Sentiment, normalize

__all__ = [
    "CONFIDENCE_THRESHOLD",
    "ClassificationFailure",
    "ClassificationOutcome",
    "ClassificationSuccess",
    "Sentiment",
    "SentimentClient",
    "build_headers",
    "normalize",
]
