import importlib

import pytest
from fastapi.testclient import TestClient

from document_similarity.api import app as app_module
from document_similarity.models import ComparisonConfig
from document_similarity.preprocess import Preprocessor
from document_similarity.service import DocumentComparisonService


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    config = ComparisonConfig(min_match_length=10, max_report_matches=5)
    service = DocumentComparisonService(
        config=config, preprocessor=Preprocessor(config, stop_words=["the", "on", "near"])
    )
    monkeypatch.setattr(app_module, "service", service)
    with TestClient(app_module.app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_compare_returns_scores_and_matches(client: TestClient) -> None:
    resp = client.post(
        "/similarity/compare",
        json={
            "source_text": "the cat sat on the mat",
            "comparison_text": "the cat sat near the mat",
        },
    )

    assert resp.status_code == 200
    payload = resp.json()
    assert list(payload["scores"]) == [
        "Cosine Similarity",
        "Jaccard Similarity",
        "N-gram Similarity",
    ]
    assert payload["scores"]["Jaccard Similarity"] == 1.0
    assert payload["best_method"] in payload["scores"]
    assert payload["best_score"] == max(payload["scores"].values())
    assert payload["match_count"] == 1
    assert payload["matches"][0]["source_text"] == "the cat sat "


def test_compare_selected_methods(client: TestClient) -> None:
    resp = client.post(
        "/similarity/compare",
        json={"source_text": "alpha beta", "comparison_text": "beta gamma", "methods": ["jaccard"]},
    )

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["scores"] == {"Jaccard Similarity": pytest.approx(1 / 3)}
    assert payload["best_method"] == "Jaccard Similarity"
    assert payload["matches"] == []


def test_compare_unknown_method(client: TestClient) -> None:
    resp = client.post(
        "/similarity/compare",
        json={"source_text": "a", "comparison_text": "b", "methods": ["levenshtein"]},
    )
    assert resp.status_code == 422


def test_startup_builds_service_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIMILARITY_NGRAM_SIZE", "2")
    monkeypatch.setenv("SIMILARITY_MIN_MATCH_LENGTH", "12")
    monkeypatch.setenv("SIMILARITY_MAX_MATCHES", "7")
    monkeypatch.setattr(
        Preprocessor, "_load_stop_words", staticmethod(lambda language: frozenset({"the"}))
    )
    module = importlib.reload(app_module)
    try:
        assert module.service is None
        with TestClient(module.app) as test_client:
            resp = test_client.post(
                "/similarity/compare",
                json={
                    "source_text": "the cat sat on the mat",
                    "comparison_text": "the cat sat near the mat",
                },
            )
        config = module.service.config
        assert (config.ngram_size, config.min_match_length, config.max_report_matches) == (2, 12, 7)
        assert resp.status_code == 200
        assert resp.json()["match_count"] == 1
    finally:
        monkeypatch.undo()
        importlib.reload(app_module)
