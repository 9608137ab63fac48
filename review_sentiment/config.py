import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def find_project_root(start: Path) -> Path:
    for parent in [start, *start.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    raise RuntimeError("Unable to locate project root (pyproject.toml not found).")


def _locate_project_root() -> Path:
    try:
        return find_project_root(Path(__file__).resolve())
    except RuntimeError:
        # installed without the source tree; data and .env are looked up from the working directory
        return Path.cwd()


PROJECT_ROOT = _locate_project_root()

ENV_PATH = PROJECT_ROOT / ".env"
REVIEWS_PATH = PROJECT_ROOT / "data" / "reviews_test.tsv"

DEFAULT_SENTIMENT_API_URL = (
    "https://api-inference.huggingface.co/models/siebert/sentiment-roberta-large-english"
)
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_API_URL = "http://localhost:8000"


def load_env() -> bool:
    """
    Load the optional .env file. Returns False when no file is present.
    """

    if not ENV_PATH.exists():
        return False
    loaded = load_dotenv(ENV_PATH)
    if not loaded:
        raise RuntimeError(f"Failed to load env file from {ENV_PATH}")
    return True


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    cleaned = raw.strip().lower()
    if cleaned in {"", "none", "off", "0"}:
        return None
    try:
        value = float(cleaned)
    except ValueError as exc:
        raise ValueError(f"SENTIMENT_TIMEOUT must be a number of seconds, got {raw!r}") from exc
    if value < 0:
        raise ValueError("SENTIMENT_TIMEOUT must not be negative")
    return value


@dataclass(frozen=True)
class Settings:
    api_token: Optional[str]
    sentiment_api_url: str
    timeout: Optional[float]
    reviews_path: Path
    log_level: str
    api_url: str


def load_settings() -> Settings:
    """
    Build settings from the environment (after loading .env when available).
    """

    load_env()
    token = (os.getenv("HF_API_TOKEN") or "").strip() or None
    reviews_override = os.getenv("REVIEWS_FILE")
    return Settings(
        api_token=token,
        sentiment_api_url=os.getenv("SENTIMENT_API_URL") or DEFAULT_SENTIMENT_API_URL,
        timeout=_parse_timeout(os.getenv("SENTIMENT_TIMEOUT")),
        reviews_path=Path(reviews_override) if reviews_override else REVIEWS_PATH,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        api_url=os.getenv("API_URL", DEFAULT_API_URL),
    )


if __name__ == "__main__":
    print(f"Project root: {PROJECT_ROOT}")
    print(f"Env path: {ENV_PATH}")

    settings = load_settings()
    print(f"Reviews file: {settings.reviews_path}")
    print(f"Sentiment endpoint: {settings.sentiment_api_url}")
    print(f"Token configured: {bool(settings.api_token)}")
