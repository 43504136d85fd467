#!/usr/bin/env python3
import argparse
import os
from pathlib import Path

import requests


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Document similarity API demo")
    parser.add_argument("source", type=Path, help="Path to the source text file")
    parser.add_argument("comparison", type=Path, help="Path to the text file to compare")
    parser.add_argument(
        "--method",
        action="append",
        dest="methods",
        help="Metric to request (cosine, jaccard, ngram); repeatable",
    )
    parser.add_argument(
        "--top", type=int, default=3, help="Number of matching segments to display",
    )
    parser.add_argument(
        "--api-url",
        default=os.environ.get("SIMILARITY_API_URL", "http://localhost:8000"),
        help="Base URL of the document similarity API",
    )
    return parser.parse_args()


def call_compare(api_url: str, source_text: str, comparison_text: str, methods=None) -> dict:
    payload = {"source_text": source_text, "comparison_text": comparison_text}
    if methods:
        payload["methods"] = methods
    response = requests.post(
        f"{api_url}/similarity/compare",
        json=payload,
        timeout=120,
    )
    response.raise_for_status()
    return response.json()


def main() -> None:
    args = parse_args()

    source_text = args.source.read_text(encoding="utf-8")
    comparison_text = args.comparison.read_text(encoding="utf-8")
    result = call_compare(args.api_url, source_text, comparison_text, args.methods)

    print(f"Compared {args.source.name} with {args.comparison.name}")
    for name, value in result["scores"].items():
        print(f"  {name}: {value:.3f}")
    if result.get("best_method"):
        print(f"  Best method: {result['best_method']}")

    matches = result.get("matches", [])
    if not matches:
        print("No matching segments found.")
        return

    print(f"Matching segments: {result['match_count']}")
    for idx, match in enumerate(matches[: args.top], start=1):
        print("-" * 80)
        print(f"Segment {idx}: source {match['source_start']}-{match['source_end']}")
        print(f"  {match['source_text']}")
    print("-" * 80)


if __name__ == "__main__":
    main()
