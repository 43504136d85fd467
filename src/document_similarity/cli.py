import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .loader import load_document
from .models import ComparisonConfig, SimilarityMethod
from .report import format_report, write_report
from .service import DocumentComparisonService

METHOD_CHOICES = ["all"] + [method.short_name for method in SimilarityMethod]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare two documents and report how similar they are"
    )
    parser.add_argument("source", type=Path, help="Path to the source document")
    parser.add_argument(
        "comparison", type=Path, help="Path to the document to compare against"
    )
    parser.add_argument(
        "--method",
        default="all",
        choices=METHOD_CHOICES,
        help="Similarity metric to compute",
    )
    parser.add_argument("--output", type=Path, help="Also write the report to this file")
    parser.add_argument(
        "--ngram-size", type=int, default=3, help="Window size for the n-gram metric"
    )
    parser.add_argument(
        "--min-match-length",
        type=int,
        default=30,
        help="Minimum length in characters of a reported matching segment",
    )
    parser.add_argument(
        "--max-matches",
        type=int,
        default=20,
        help="Maximum number of matching segments printed in the report",
    )
    parser.add_argument(
        "--keep-stopwords",
        action="store_true",
        help="Do not remove stop words before computing similarity",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging and segment offsets in the report",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser.parse_args(argv)


def selected_methods(name: str) -> List[SimilarityMethod]:
    if name == "all":
        return list(SimilarityMethod)
    return [SimilarityMethod.from_name(name)]


def build_service(args: argparse.Namespace) -> DocumentComparisonService:
    config = ComparisonConfig(
        ngram_size=args.ngram_size,
        min_match_length=args.min_match_length,
        remove_stopwords=not args.keep_stopwords,
        max_report_matches=args.max_matches,
    )
    try:
        return DocumentComparisonService(config=config)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(logging, args.log_level.upper())
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(message)s",
    )

    try:
        source = load_document(args.source)
        comparison = load_document(args.comparison)
    except (OSError, UnicodeDecodeError) as exc:
        raise SystemExit(f"Could not read input document: {exc}") from exc

    service = build_service(args)
    logging.info("Comparing %s with %s", args.source, args.comparison)
    result = service.compare(source, comparison, methods=selected_methods(args.method))

    report = format_report(
        result,
        max_matches=service.config.max_report_matches,
        verbose=args.verbose,
    )
    sys.stdout.write(report)

    if args.output:
        logging.info("Writing report to %s", args.output)
        write_report(args.output, report)


if __name__ == "__main__":
    main()
