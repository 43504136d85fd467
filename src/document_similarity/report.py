from pathlib import Path
from typing import List

from .models import ComparisonResult, Document, MatchSegment

_RULE = "-" * 80


def format_report(
    result: ComparisonResult, max_matches: int = 20, verbose: bool = False
) -> str:
    """Render a comparison as plain text.

    Args:
        result: Output of ``DocumentComparisonService.compare``.
        max_matches: How many matched segments to print; the total count is
            always shown.
        verbose: Include character offsets for each segment.
    """
    lines: List[str] = [
        "Document Similarity Report",
        _RULE,
        f"Source:     {_describe(result.source)}",
        f"Comparison: {_describe(result.comparison)}",
        _RULE,
    ]

    for method, value in result.scores.items():
        lines.append(f"{method.value}: {value:.4f} ({value * 100:.2f}%)")
    if result.best is not None:
        lines.append(f"Best method: {result.best.method.value} ({result.best.value:.4f})")
    lines.append(_RULE)

    lines.append(f"Matching segments: {len(result.matches)}")
    for idx, segment in enumerate(result.matches[:max_matches], start=1):
        lines.extend(_format_segment(idx, segment, verbose))
    hidden = len(result.matches) - max_matches
    if hidden > 0:
        lines.append(f"... {hidden} more segments not shown")

    return "\n".join(lines) + "\n"


def write_report(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        handle.write(text)


def _describe(document: Document) -> str:
    if document.title:
        return f"{document.doc_id} ({document.title})"
    return document.doc_id


def _format_segment(idx: int, segment: MatchSegment, verbose: bool) -> List[str]:
    header = f"[{idx}] {segment.length} characters"
    if verbose:
        header += (
            f", source {segment.source_start}-{segment.source_end}"
            f", comparison {segment.comparison_start}-{segment.comparison_end}"
        )
    lines = [header, f"    Source:     {_flatten(segment.source_text)}"]
    if verbose:
        lines.append(f"    Comparison: {_flatten(segment.comparison_text)}")
    return lines


def _flatten(text: str) -> str:
    return " ".join(text.split())
