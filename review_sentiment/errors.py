"""
Shared error primitives for corpus loading and remote sentiment analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    MODEL_LOADING = "model_loading"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    UNEXPECTED_STATUS = "unexpected_status"
    CORPUS_LOAD = "corpus_load"
    IN_PROGRESS = "in_progress"


_STATUS_KINDS: Dict[int, Tuple[ErrorKind, str]] = {
    503: (ErrorKind.MODEL_LOADING, "Model is loading, please try again in a few seconds"),
    429: (ErrorKind.RATE_LIMITED, "Rate limit exceeded. Please add an API token for higher limits"),
    401: (ErrorKind.UNAUTHORIZED, "Invalid API token"),
}


class ReviewSentimentError(Exception):
    """
    Base class for every classified failure the demo surfaces to users.
    """

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> Dict[str, Any]:
        return {"message": self.message, "error_type": self.kind.value}


@dataclass(eq=False)
class TransportError(ReviewSentimentError):
    message: str
    kind: ErrorKind = ErrorKind.TRANSPORT


@dataclass(eq=False)
class RemoteError(ReviewSentimentError):
    kind: ErrorKind
    message: str
    status_code: int
    reason: str = ""

    @classmethod
    def from_status(cls, status_code: int, reason: str = "") -> "RemoteError":
        known = _STATUS_KINDS.get(status_code)
        if known:
            kind, message = known
        else:
            kind = ErrorKind.UNEXPECTED_STATUS
            message = f"API error: {status_code} {reason}".rstrip()
        return cls(kind=kind, message=message, status_code=status_code, reason=reason)

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["status_code"] = self.status_code
        if self.reason:
            payload["reason"] = self.reason
        return payload


@dataclass(eq=False)
class CorpusLoadError(ReviewSentimentError):
    message: str
    path: Optional[Path] = None
    kind: ErrorKind = ErrorKind.CORPUS_LOAD

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.path is not None:
            payload["path"] = str(self.path)
        return payload


@dataclass(eq=False)
class AnalysisInProgressError(ReviewSentimentError):
    message: str = "An analysis is already running, wait for it to finish"
    kind: ErrorKind = ErrorKind.IN_PROGRESS


__all__ = [
    "AnalysisInProgressError",
    "CorpusLoadError",
    "ErrorKind",
    "RemoteError",
    "ReviewSentimentError",
    "TransportError",
]
