import pytest

from review_sentiment.sentiment import Sentiment, normalize


def test_positive_above_threshold():
    assert normalize([[{"label": "POSITIVE", "score": 0.7}]]) == Sentiment.POSITIVE


def test_negative_above_threshold():
    assert normalize([[{"label": "NEGATIVE", "score": 0.9}]]) == Sentiment.NEGATIVE


@pytest.mark.parametrize("label", ["POSITIVE", "NEGATIVE"])
def test_score_at_threshold_is_neutral(label):
    assert normalize([[{"label": label, "score": 0.5}]]) == Sentiment.NEUTRAL


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        [[]],
        {},
        "POSITIVE",
        [None],
        [["POSITIVE"]],
        [{"label": "POSITIVE", "score": 0.9}],
        [[{"label": "POSITIVE"}]],
        [[{"score": 0.99}]],
        [[{"label": "POSITIVE", "score": "0.9"}]],
        [[{"label": "POSITIVE", "score": True}]],
        [[{"label": ["POSITIVE"], "score": 0.9}]],
        {"error": "Model is currently loading"},
    ],
)
def test_malformed_payloads_are_neutral(payload):
    assert normalize(payload) == Sentiment.NEUTRAL


def test_label_match_is_case_sensitive():
    assert normalize([[{"label": "positive", "score": 0.99}]]) == Sentiment.NEUTRAL


def test_only_first_candidate_is_considered():
    payload = [[{"label": "NEGATIVE", "score": 0.3}, {"label": "POSITIVE", "score": 0.7}]]
    assert normalize(payload) == Sentiment.NEUTRAL


def test_integer_score_is_accepted():
    assert normalize([[{"label": "POSITIVE", "score": 1}]]) == Sentiment.POSITIVE


def test_normalize_is_idempotent():
    payload = [[{"label": "NEGATIVE", "score": 0.51}]]
    results = {normalize(payload) for _ in range(5)}
    assert results == {Sentiment.NEGATIVE}


def test_huge_integer_score_does_not_overflow():
    assert normalize([[{"label": "POSITIVE", "score": 10**400}]]) == Sentiment.POSITIVE


def test_nan_score_is_neutral():
    assert normalize([[{"label": "NEGATIVE", "score": float("nan")}]]) == Sentiment.NEUTRAL
