import httpx
import pytest
from fastapi.testclient import TestClient

from review_sentiment.api import main as api_main
from review_sentiment.api.main import create_app
from review_sentiment.config import Settings
from review_sentiment.sentiment import SentimentClient


def _settings(reviews_path, api_token=None) -> Settings:
    return Settings(
        api_token=api_token,
        sentiment_api_url="https://inference.test/model",
        timeout=None,
        reviews_path=reviews_path,
        log_level="INFO",
        api_url="http://testserver",
    )


@pytest.fixture
def reviews_path(tmp_path):
    path = tmp_path / "reviews.tsv"
    path.write_text("text\tlabel\nA heartfelt story\t1\n\t0\n", encoding="utf-8")
    return path


def _client_for(handler, captured=None) -> SentimentClient:
    def recording(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return handler(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return SentimentClient("https://inference.test/model", http_client=http_client)


def test_health_reports_loaded_reviews(reviews_path):
    app = create_app(_settings(reviews_path), _client_for(lambda request: httpx.Response(200, json=[])))
    with TestClient(app) as client:
        response = client.get("/health")
        assert response.json() == {"status": "ok", "reviews_loaded": True}
        assert client.get("/reviews").json() == {"count": 1}


def test_analyze_returns_sentiment_and_trace(reviews_path):
    captured = []
    sentiment_client = _client_for(
        lambda request: httpx.Response(200, json=[[{"label": "POSITIVE", "score": 0.99}]]),
        captured,
    )
    app = create_app(_settings(reviews_path), sentiment_client)

    with TestClient(app) as client:
        response = client.post("/analyze", json={"api_token": "abc"})

    assert response.status_code == 200
    body = response.json()
    assert body["review"] == "A heartfelt story"
    assert body["sentiment"] == "positive"
    assert body["label"] == "Positive"
    assert body["icon"] == "thumbs-up"
    assert body["logs"]
    assert "Classified review" in body["log_markdown"]
    assert captured[0].headers["authorization"] == "Bearer abc"


def test_analyze_without_body_uses_configured_token(reviews_path):
    captured = []
    sentiment_client = _client_for(
        lambda request: httpx.Response(200, json=[[{"label": "NEGATIVE", "score": 0.6}]]),
        captured,
    )
    app = create_app(_settings(reviews_path, api_token="configured"), sentiment_client)

    with TestClient(app) as client:
        response = client.post("/analyze")

    assert response.json()["sentiment"] == "negative"
    assert captured[0].headers["authorization"] == "Bearer configured"


@pytest.mark.parametrize(
    ("status_code", "kind", "detail"),
    [
        (503, "model_loading", "Analysis failed: Model is loading, please try again in a few seconds"),
        (429, "rate_limited", "Analysis failed: Rate limit exceeded. Please add an API token for higher limits"),
        (401, "unauthorized", "Analysis failed: Invalid API token"),
        (500, "unexpected_status", "Analysis failed: API error: 500 Internal Server Error"),
    ],
)
def test_analyze_maps_remote_failures(reviews_path, status_code, kind, detail):
    app = create_app(_settings(reviews_path), _client_for(lambda request: httpx.Response(status_code)))

    with TestClient(app) as client:
        response = client.post("/analyze", json={})

    assert response.status_code == 502
    assert response.json()["detail"] == detail
    assert response.headers["x-error-kind"] == kind


def test_analyze_reports_transport_failure(reviews_path):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network unreachable", request=request)

    app = create_app(_settings(reviews_path), _client_for(handler))

    with TestClient(app) as client:
        response = client.post("/analyze", json={})

    assert response.status_code == 502
    assert response.json()["detail"] == "Analysis failed: network unreachable"
    assert response.headers["x-error-kind"] == "transport"


def test_corpus_failure_disables_analysis(tmp_path):
    app = create_app(_settings(tmp_path / "missing.tsv"), _client_for(lambda request: httpx.Response(200, json=[])))

    with TestClient(app) as client:
        assert client.get("/health").json()["reviews_loaded"] is False
        response = client.post("/analyze", json={})
        reviews = client.get("/reviews")

    assert response.status_code == 503
    assert response.json()["detail"].startswith("Failed to load reviews:")
    assert reviews.status_code == 503


def test_lifespan_configures_logging_from_settings(reviews_path, monkeypatch):
    levels = []
    monkeypatch.setattr(api_main, "setup_logging", lambda level=None: levels.append(level))
    settings = Settings(
        api_token=None,
        sentiment_api_url="https://inference.test/model",
        timeout=None,
        reviews_path=reviews_path,
        log_level="WARNING",
        api_url="http://testserver",
    )
    app = create_app(settings, _client_for(lambda request: httpx.Response(200, json=[])))

    with TestClient(app):
        pass

    assert levels == ["WARNING"]
