import logging
from typing import Iterable, Optional

from .matcher import SegmentMatcher
from .models import (
    ComparisonConfig,
    ComparisonResult,
    Document,
    SimilarityMethod,
    SimilarityScore,
)
from .preprocess import Preprocessor
from .similarity import best_method, calculate_similarities


class DocumentComparisonService:
    """Pairwise comparison: token metrics plus raw-text segment matching."""

    def __init__(
        self,
        config: Optional[ComparisonConfig] = None,
        preprocessor: Optional[Preprocessor] = None,
    ) -> None:
        self.config = config or ComparisonConfig()
        self.config.validate()
        self.preprocessor = preprocessor or Preprocessor(self.config)
        self.matcher = SegmentMatcher(min_length=self.config.min_match_length)

    def compare(
        self,
        source: Document,
        comparison: Document,
        methods: Optional[Iterable[SimilarityMethod]] = None,
    ) -> ComparisonResult:
        source_tokens = self.preprocessor.prepare(source)
        comparison_tokens = self.preprocessor.prepare(comparison)
        logging.debug(
            "Document %s -> %s: %d vs %d tokens after preprocessing",
            source.doc_id,
            comparison.doc_id,
            len(source_tokens),
            len(comparison_tokens),
        )

        scores = calculate_similarities(
            source_tokens,
            comparison_tokens,
            methods=methods,
            ngram_size=self.config.ngram_size,
        )
        for method, value in scores.items():
            logging.debug("%s: %.4f", method.value, value)

        best: Optional[SimilarityScore] = None
        if scores:
            winner = best_method(scores)
            best = SimilarityScore(method=winner, value=scores[winner])

        matches = self.matcher.find_matches(source.text, comparison.text)
        logging.info(
            "Compared %s with %s: %d matching segments",
            source.doc_id,
            comparison.doc_id,
            len(matches),
        )
        return ComparisonResult(
            source=source,
            comparison=comparison,
            scores=scores,
            matches=matches,
            best=best,
        )

    def compare_texts(
        self,
        source_text: str,
        comparison_text: str,
        methods: Optional[Iterable[SimilarityMethod]] = None,
    ) -> ComparisonResult:
        return self.compare(
            Document(doc_id="source", title=None, text=source_text),
            Document(doc_id="comparison", title=None, text=comparison_text),
            methods=methods,
        )
