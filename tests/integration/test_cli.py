from pathlib import Path

import pytest

from document_similarity import cli
from document_similarity.preprocess import Preprocessor

_TEXT_A = "The quick brown fox jumps over the lazy dog near the quiet river bank."
_TEXT_B = "A slow brown fox jumps over the lazy dog near the quiet river bank today."


@pytest.fixture(autouse=True)
def _offline_stop_words(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        Preprocessor,
        "_load_stop_words",
        staticmethod(lambda language: frozenset({"the", "a", "over", "near"})),
    )


def _write_inputs(tmp_path: Path):
    source = tmp_path / "source.txt"
    comparison = tmp_path / "comparison.txt"
    source.write_text(_TEXT_A, encoding="utf-8")
    comparison.write_text(_TEXT_B, encoding="utf-8")
    return source, comparison


def _score(report: str, name: str) -> str:
    for line in report.splitlines():
        if line.startswith(f"{name}:"):
            return line
    raise AssertionError(f"{name} missing from report")


def test_cli_prints_all_metrics(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    source, comparison = _write_inputs(tmp_path)

    cli.main([str(source), str(comparison)])

    out = capsys.readouterr().out
    assert "Cosine Similarity:" in out
    assert "Jaccard Similarity:" in out
    assert "N-gram Similarity:" in out
    assert "Matching segments: 1" in out
    assert "brown fox jumps over the lazy dog near the quiet river bank" in out


def test_cli_single_method_and_output_file(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    source, comparison = _write_inputs(tmp_path)
    output = tmp_path / "reports" / "result.txt"

    cli.main([str(source), str(comparison), "--method", "jaccard", "--output", str(output)])

    out = capsys.readouterr().out
    assert "Jaccard Similarity:" in out
    assert "Cosine Similarity:" not in out
    assert output.read_text(encoding="utf-8") == out


def test_cli_keep_stopwords_changes_scores(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    source, comparison = _write_inputs(tmp_path)

    cli.main([str(source), str(comparison), "--method", "jaccard"])
    filtered = _score(capsys.readouterr().out, "Jaccard Similarity")
    cli.main([str(source), str(comparison), "--method", "jaccard", "--keep-stopwords"])
    kept = _score(capsys.readouterr().out, "Jaccard Similarity")

    # 8 shared of 11 distinct tokens without stop words, 11 of 15 with them.
    assert filtered.startswith("Jaccard Similarity: 0.7273")
    assert kept.startswith("Jaccard Similarity: 0.7333")


def test_cli_forwards_ngram_size(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    source, comparison = _write_inputs(tmp_path)

    cli.main([str(source), str(comparison), "--method", "ngram", "--ngram-size", "1"])
    unigram = _score(capsys.readouterr().out, "N-gram Similarity")
    cli.main([str(source), str(comparison), "--method", "ngram", "--ngram-size", "20"])
    too_long = _score(capsys.readouterr().out, "N-gram Similarity")

    assert unigram.startswith("N-gram Similarity: 0.7273")
    assert too_long.startswith("N-gram Similarity: 0.0000")


def test_cli_forwards_match_options(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    source, comparison = _write_inputs(tmp_path)

    cli.main([str(source), str(comparison), "--min-match-length", "100"])
    assert "Matching segments: 0" in capsys.readouterr().out

    cli.main([str(source), str(comparison), "--min-match-length", "5", "--max-matches", "0"])
    out = capsys.readouterr().out
    assert "Matching segments: 1" in out
    assert "... 1 more segments not shown" in out


def test_cli_invalid_ngram_size_exits(tmp_path: Path) -> None:
    source, comparison = _write_inputs(tmp_path)
    with pytest.raises(SystemExit, match="Invalid configuration"):
        cli.main([str(source), str(comparison), "--ngram-size", "0"])


def test_cli_missing_file_exits(tmp_path: Path) -> None:
    source, _ = _write_inputs(tmp_path)
    with pytest.raises(SystemExit):
        cli.main([str(source), str(tmp_path / "missing.txt")])


def test_cli_rejects_unknown_method(tmp_path: Path) -> None:
    source, comparison = _write_inputs(tmp_path)
    with pytest.raises(SystemExit):
        cli.main([str(source), str(comparison), "--method", "levenshtein"])


def test_selected_methods() -> None:
    assert [m.short_name for m in cli.selected_methods("all")] == ["cosine", "jaccard", "ngram"]
    assert [m.short_name for m in cli.selected_methods("ngram")] == ["ngram"]
