"""
Async client for the hosted sentiment-inference endpoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from review_sentiment.config import DEFAULT_SENTIMENT_API_URL, DEFAULT_TIMEOUT_SECONDS
from review_sentiment.errors import RemoteError, TransportError

from .labels import Sentiment, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationSuccess:
    sentiment: Sentiment
    payload: Any = None

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Sentiment:
        return self.sentiment


@dataclass(frozen=True)
class ClassificationFailure:
    error: Union[TransportError, RemoteError]

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Sentiment:
        raise self.error


ClassificationOutcome = Union[ClassificationSuccess, ClassificationFailure]


def build_headers(credential: Optional[str]) -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    token = (credential or "").strip()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        logger.debug("Sentiment endpoint returned a non-JSON body: %r", response.text[:200])
        return None


class SentimentClient:
    """
    Issues one POST per call; never retries. Owns its httpx.AsyncClient unless one is injected.
    """

    def __init__(
        self,
        url: str = DEFAULT_SENTIMENT_API_URL,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "SentimentClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def request(self, text: str, credential: Optional[str] = None) -> ClassificationOutcome:
        """
        Classify ``text`` and return a tagged outcome instead of raising.
        """

        if not text or not text.strip():
            raise ValueError("text must be a non-empty string")

        headers = build_headers(credential)
        logger.info(
            "Requesting sentiment for %s characters (authenticated=%s)",
            len(text),
            "Authorization" in headers,
        )
        try:
            response = await self._http.post(self.url, headers=headers, json={"inputs": text})
        except httpx.RequestError as exc:
            logger.warning("Sentiment request failed in transport: %s", exc)
            return ClassificationFailure(TransportError(str(exc) or exc.__class__.__name__))

        if not response.is_success:
            error = RemoteError.from_status(response.status_code, response.reason_phrase)
            logger.warning(
                "Sentiment endpoint rejected request: status=%s kind=%s",
                response.status_code,
                error.kind.value,
            )
            return ClassificationFailure(error)

        payload = _parse_body(response)
        sentiment = normalize(payload)
        logger.info("Sentiment endpoint responded: %s", sentiment.value)
        return ClassificationSuccess(sentiment=sentiment, payload=payload)

    async def classify(self, text: str, credential: Optional[str] = None) -> Sentiment:
        """
        Return the normalized label, raising TransportError or RemoteError on failure.
        """

        outcome = await self.request(text, credential)
        return outcome.unwrap()


__all__ = [
    "ClassificationFailure",
    "ClassificationOutcome",
    "ClassificationSuccess",
    "SentimentClient",
    "build_headers",
]
