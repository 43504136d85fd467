from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


@dataclass
class Document:
    doc_id: str
    title: Optional[str]
    text: str
    metadata: Optional[dict] = None


class SimilarityMethod(Enum):
    """Known similarity metrics, in tie-break order."""

    COSINE = "Cosine Similarity"
    JACCARD = "Jaccard Similarity"
    NGRAM = "N-gram Similarity"

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]

    @classmethod
    def from_name(cls, name: str) -> "SimilarityMethod":
        key = name.strip()
        for method in cls:
            if key.lower() in (method.short_name, method.value.lower()):
                return method
        raise ValueError(f"Unknown similarity method: {name!r}")


_SHORT_NAMES = {
    SimilarityMethod.COSINE: "cosine",
    SimilarityMethod.JACCARD: "jaccard",
    SimilarityMethod.NGRAM: "ngram",
}


@dataclass(frozen=True)
class SimilarityScore:
    method: SimilarityMethod
    value: float


@dataclass(frozen=True)
class MatchSegment:
    source_start: int
    source_end: int
    comparison_start: int
    comparison_end: int
    source_text: str
    comparison_text: str

    @property
    def length(self) -> int:
        return self.source_end - self.source_start


@dataclass
class ComparisonResult:
    source: Document
    comparison: Document
    scores: Dict[SimilarityMethod, float]
    matches: List[MatchSegment] = field(default_factory=list)
    best: Optional[SimilarityScore] = None


@dataclass
class ComparisonConfig:
    ngram_size: int = 3
    min_match_length: int = 30
    lowercase: bool = True
    strip_accents: bool = False
    remove_stopwords: bool = True
    stopwords_language: str = "english"
    max_report_matches: int = 20

    def validate(self) -> None:
        if self.ngram_size < 1:
            raise ValueError("ngram_size must be at least 1.")
        if self.min_match_length < 1:
            raise ValueError("min_match_length must be at least 1.")
        if self.max_report_matches < 0:
            raise ValueError("max_report_matches cannot be negative.")
