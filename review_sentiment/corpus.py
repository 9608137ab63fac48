import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple

import pandas as pd

from .config import REVIEWS_PATH
from .errors import CorpusLoadError

logger = logging.getLogger(__name__)

TEXT_COLUMN = "text"


@dataclass(frozen=True)
class Corpus:
    """
    Ordered, read-only collection of trimmed review texts.
    """

    reviews: Tuple[str, ...]
    source: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.reviews:
            raise CorpusLoadError("No reviews available", path=self.source)

    def __len__(self) -> int:
        return len(self.reviews)

    def __iter__(self) -> Iterator[str]:
        return iter(self.reviews)

    def choose(self, rng: Optional[random.Random] = None) -> str:
        """
        Pick one review uniformly at random.
        """

        return (rng or random).choice(self.reviews)


def _read_table(path: Path) -> pd.DataFrame:
    try:
        return pd.read_csv(
            path,
            sep="\t",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except FileNotFoundError as exc:
        raise CorpusLoadError(f"Reviews file not found: {path}", path=path) from exc
    except pd.errors.EmptyDataError as exc:
        raise CorpusLoadError(f"Reviews file is empty: {path}", path=path) from exc
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise CorpusLoadError(f"Failed to parse reviews file {path}: {exc}", path=path) from exc


def extract_reviews(df: pd.DataFrame) -> Tuple[str, ...]:
    """
    Return trimmed, non-empty ``text`` values in file order.
    """

    if TEXT_COLUMN not in df.columns:
        raise CorpusLoadError(f"Reviews table has no '{TEXT_COLUMN}' column (found {list(df.columns)})")
    texts = df[TEXT_COLUMN].fillna("").astype(str).str.strip()
    return tuple(text for text in texts if text)


def load_reviews(path: Optional[Path] = None) -> Corpus:
    """
    Load the review corpus from a tab-separated file with a ``text`` header column.
    """

    path = Path(path) if path is not None else REVIEWS_PATH
    logger.info("Reading reviews from %s", path)
    df = _read_table(path)
    try:
        reviews = extract_reviews(df)
    except CorpusLoadError as exc:
        raise CorpusLoadError(f"{exc.message} in {path}", path=path) from exc

    dropped = len(df) - len(reviews)
    if dropped:
        logger.warning("Dropped %s rows without review text", dropped)
    if not reviews:
        raise CorpusLoadError(f"No usable reviews found in {path}", path=path)

    logger.info("Loaded %s reviews", len(reviews))
    return Corpus(reviews=reviews, source=path)


__all__ = ["Corpus", "TEXT_COLUMN", "extract_reviews", "load_reviews"]
