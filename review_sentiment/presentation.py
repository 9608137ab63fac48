"""
Display mapping for sentiment labels and user-facing error text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .errors import ReviewSentimentError
from .sentiment import Sentiment


@dataclass(frozen=True)
class SentimentDisplay:
    label: str
    icon: str
    emoji: str
    css_class: str


_DISPLAYS: Dict[Sentiment, SentimentDisplay] = {
    Sentiment.POSITIVE: SentimentDisplay(label="Positive", icon="thumbs-up", emoji="👍", css_class="positive"),
    Sentiment.NEGATIVE: SentimentDisplay(label="Negative", icon="thumbs-down", emoji="👎", css_class="negative"),
    Sentiment.NEUTRAL: SentimentDisplay(label="Neutral", icon="question-circle", emoji="❓", css_class="neutral"),
}


def present(sentiment: Sentiment | str) -> SentimentDisplay:
    try:
        key = Sentiment(sentiment)
    except ValueError:
        key = Sentiment.NEUTRAL
    return _DISPLAYS[key]


def describe_failure(error: Exception) -> str:
    return f"Analysis failed: {error}"


def describe_corpus_failure(error: Exception) -> str:
    return f"Failed to load reviews: {error}"


def quote_review(text: str) -> str:
    return f'"{text}"'


__all__ = [
    "SentimentDisplay",
    "describe_corpus_failure",
    "describe_failure",
    "present",
    "quote_review",
]
