from collections import Counter
from typing import Dict, Iterable, Mapping, Optional, Sequence

import numpy as np

from .models import SimilarityMethod
from .ngrams import generate_ngrams


def cosine_similarity(units_a: Sequence[str], units_b: Sequence[str]) -> float:
    """Cosine of the term-frequency vectors of two unit sequences."""
    if not units_a or not units_b:
        return 0.0

    counts_a = Counter(units_a)
    counts_b = Counter(units_b)
    vocabulary = sorted(set(counts_a) | set(counts_b))
    a = np.array([counts_a.get(unit, 0) for unit in vocabulary], dtype=float)
    b = np.array([counts_b.get(unit, 0) for unit in vocabulary], dtype=float)

    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return 0.0
    return _clamp(float(np.dot(a, b) / denom))


def jaccard_similarity(units_a: Iterable[str], units_b: Iterable[str]) -> float:
    set_a = set(units_a)
    set_b = set(units_b)
    union = set_a | set_b
    # Two empty sets carry no evidence of similarity.
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def ngram_similarity(ngrams_a: Sequence[str], ngrams_b: Sequence[str]) -> float:
    """Set overlap of two n-gram sequences produced by the caller."""
    return jaccard_similarity(ngrams_a, ngrams_b)


def calculate_similarity(
    method: SimilarityMethod,
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
    ngram_size: int = 3,
) -> float:
    if method is SimilarityMethod.COSINE:
        return cosine_similarity(tokens_a, tokens_b)
    if method is SimilarityMethod.JACCARD:
        return jaccard_similarity(tokens_a, tokens_b)
    if method is SimilarityMethod.NGRAM:
        return ngram_similarity(
            generate_ngrams(tokens_a, ngram_size),
            generate_ngrams(tokens_b, ngram_size),
        )
    raise ValueError(f"Unsupported similarity method: {method!r}")


def calculate_similarities(
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
    methods: Optional[Iterable[SimilarityMethod]] = None,
    ngram_size: int = 3,
) -> Dict[SimilarityMethod, float]:
    """Score two token sequences under each requested metric.

    The returned mapping follows the declaration order of ``SimilarityMethod``
    regardless of the order ``methods`` was given in.
    """
    requested = set(methods) if methods is not None else set(SimilarityMethod)
    scores: Dict[SimilarityMethod, float] = {}
    for method in SimilarityMethod:
        if method not in requested:
            continue
        scores[method] = calculate_similarity(method, tokens_a, tokens_b, ngram_size)
    return scores


def best_method(scores: Mapping[SimilarityMethod, float]) -> SimilarityMethod:
    """Pick the highest-scoring metric; ties go to the earlier declared one."""
    if not scores:
        raise ValueError("Cannot pick a best method from an empty score mapping.")
    best: Optional[SimilarityMethod] = None
    for method in SimilarityMethod:
        if method not in scores:
            continue
        if best is None or scores[method] > scores[best]:
            best = method
    return best


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))
