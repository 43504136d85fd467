import os
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from document_similarity.models import ComparisonConfig, SimilarityMethod
from document_similarity.service import DocumentComparisonService

DEFAULT_NGRAM_SIZE = int(os.environ.get("SIMILARITY_NGRAM_SIZE", "3"))
DEFAULT_MIN_MATCH_LENGTH = int(os.environ.get("SIMILARITY_MIN_MATCH_LENGTH", "30"))
DEFAULT_MAX_MATCHES = int(os.environ.get("SIMILARITY_MAX_MATCHES", "50"))

app = FastAPI(title="Document Similarity Service")
service: Optional[DocumentComparisonService] = None


class CompareRequest(BaseModel):
    source_text: str
    comparison_text: str
    methods: Optional[List[str]] = None


class MatchResponse(BaseModel):
    source_start: int
    source_end: int
    comparison_start: int
    comparison_end: int
    source_text: str
    comparison_text: str


class CompareResponse(BaseModel):
    scores: Dict[str, float]
    best_method: Optional[str]
    best_score: Optional[float]
    match_count: int
    matches: List[MatchResponse]


@app.on_event("startup")
async def startup_event() -> None:
    global service
    if service is not None:
        return
    config = ComparisonConfig(
        ngram_size=DEFAULT_NGRAM_SIZE,
        min_match_length=DEFAULT_MIN_MATCH_LENGTH,
        max_report_matches=DEFAULT_MAX_MATCHES,
    )
    service = DocumentComparisonService(config=config)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/similarity/compare", response_model=CompareResponse)
async def compare(req: CompareRequest) -> CompareResponse:
    if service is None:
        raise HTTPException(status_code=503, detail="Service not initialised")

    methods = None
    if req.methods is not None:
        try:
            methods = [SimilarityMethod.from_name(name) for name in req.methods]
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    result = service.compare_texts(req.source_text, req.comparison_text, methods=methods)
    matches = [
        MatchResponse(
            source_start=segment.source_start,
            source_end=segment.source_end,
            comparison_start=segment.comparison_start,
            comparison_end=segment.comparison_end,
            source_text=segment.source_text,
            comparison_text=segment.comparison_text,
        )
        for segment in result.matches[: service.config.max_report_matches]
    ]
    return CompareResponse(
        scores={method.value: value for method, value in result.scores.items()},
        best_method=result.best.method.value if result.best else None,
        best_score=result.best.value if result.best else None,
        match_count=len(result.matches),
        matches=matches,
    )
