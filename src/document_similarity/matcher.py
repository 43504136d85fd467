import logging
from bisect import bisect_left, bisect_right
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .models import MatchSegment


class ConsumedRanges:
    """Sorted set of disjoint half-open ``[start, end)`` intervals."""

    def __init__(self) -> None:
        self._starts: List[int] = []
        self._ends: List[int] = []

    def add(self, start: int, end: int) -> None:
        if start >= end:
            raise ValueError(f"Empty or inverted range [{start}, {end}).")
        if self.overlaps(start, end):
            raise ValueError(f"Range [{start}, {end}) overlaps a consumed range.")
        idx = bisect_left(self._starts, start)
        self._starts.insert(idx, start)
        self._ends.insert(idx, end)

    def overlaps(self, start: int, end: int) -> bool:
        idx = bisect_right(self._starts, start)
        if idx > 0 and self._ends[idx - 1] > start:
            return True
        return idx < len(self._starts) and self._starts[idx] < end

    def contains(self, position: int) -> bool:
        return self.overlaps(position, position + 1)

    def next_start(self, position: int) -> Optional[int]:
        """First interval start at or after ``position``."""
        idx = bisect_left(self._starts, position)
        if idx == len(self._starts):
            return None
        return self._starts[idx]

    def previous_end(self, position: int) -> Optional[int]:
        """Last interval end at or before ``position``."""
        idx = bisect_right(self._ends, position)
        if idx == 0:
            return None
        return self._ends[idx - 1]

    @property
    def total_length(self) -> int:
        return sum(end - start for start, end in self)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(zip(self._starts, self._ends))

    def __len__(self) -> int:
        return len(self._starts)


@dataclass
class _Candidate:
    source_start: int
    comparison_start: int
    length: int


def _common_run(
    a: str, i: int, b: str, j: int, limit: int, backward: bool = False
) -> int:
    """Length of the common run of ``a`` and ``b`` from ``i``/``j``, capped at ``limit``.

    Forward runs cover ``a[i:]``/``b[j:]``; backward runs cover the text
    ending just before ``i``/``j``. The run is found by galloping then
    bisecting over slice comparisons.
    """

    def agree(n: int) -> bool:
        if backward:
            return a[i - n : i] == b[j - n : j]
        return a[i : i + n] == b[j : j + n]

    if backward:
        limit = min(limit, i, j)
    else:
        limit = min(limit, len(a) - i, len(b) - j)
    if limit <= 0:
        return 0
    low, step = 0, 1
    while True:
        probe = min(low + step, limit)
        if not agree(probe):
            high = probe - 1
            break
        low = probe
        if low == limit:
            return low
        step *= 2
    while low < high:
        mid = (low + high + 1) // 2
        if agree(mid):
            low = mid
        else:
            high = mid - 1
    return low


class SegmentMatcher:
    """Greedy extraction of long common substrings between two texts.

    Every ``min_length`` window of the comparison text is indexed. The source
    text is scanned left to right; a window hit is extended in both directions
    while characters agree and neither side runs into text that already
    belongs to an earlier segment. Identical texts yield one segment covering
    the whole text.

    At most ``max_candidates`` unconsumed comparison positions are extended
    per window hit, earliest first, which bounds the work on repetitive text.
    """

    def __init__(self, min_length: int = 30, max_candidates: int = 64) -> None:
        if min_length < 1:
            raise ValueError("Minimum match length must be a positive integer.")
        if max_candidates < 1:
            raise ValueError("max_candidates must be a positive integer.")
        self.min_length = min_length
        self.max_candidates = max_candidates

    def find_matches(self, source: str, comparison: str) -> List[MatchSegment]:
        k = self.min_length
        if len(source) < k or len(comparison) < k:
            return []

        index = self._index_windows(comparison)
        source_used = ConsumedRanges()
        comparison_used = ConsumedRanges()
        matches: List[MatchSegment] = []

        position = 0
        while position <= len(source) - k:
            positions = index.get(source[position : position + k])
            candidate = None
            if positions:
                candidate = self._best_candidate(
                    source, comparison, position, positions, source_used, comparison_used
                )
            if candidate is None:
                position += 1
                continue

            source_end = candidate.source_start + candidate.length
            comparison_end = candidate.comparison_start + candidate.length
            source_used.add(candidate.source_start, source_end)
            comparison_used.add(candidate.comparison_start, comparison_end)
            matches.append(
                MatchSegment(
                    source_start=candidate.source_start,
                    source_end=source_end,
                    comparison_start=candidate.comparison_start,
                    comparison_end=comparison_end,
                    source_text=source[candidate.source_start : source_end],
                    comparison_text=comparison[candidate.comparison_start : comparison_end],
                )
            )
            position = source_end

        logging.debug(
            "Segment matcher found %d segments covering %d/%d source characters",
            len(matches),
            source_used.total_length,
            len(source),
        )
        return matches

    def _index_windows(self, text: str) -> Dict[str, List[int]]:
        k = self.min_length
        index: Dict[str, List[int]] = defaultdict(list)
        for start in range(len(text) - k + 1):
            index[text[start : start + k]].append(start)
        return index

    def _live_candidates(
        self, positions: List[int], comparison_used: ConsumedRanges
    ) -> List[int]:
        """Earliest unconsumed positions, pruning dead ones from ``positions``."""
        k = self.min_length
        live: List[int] = []
        scanned = 0
        for start in positions:
            if len(live) == self.max_candidates:
                break
            scanned += 1
            if not comparison_used.overlaps(start, start + k):
                live.append(start)
        # Consumed positions never come back.
        positions[:scanned] = live
        return live

    def _best_candidate(
        self,
        source: str,
        comparison: str,
        position: int,
        positions: List[int],
        source_used: ConsumedRanges,
        comparison_used: ConsumedRanges,
    ) -> Optional[_Candidate]:
        k = self.min_length
        if source_used.overlaps(position, position + k):
            return None

        source_floor = source_used.previous_end(position) or 0
        source_ceiling = source_used.next_start(position)
        if source_ceiling is None:
            source_ceiling = len(source)
        longest_possible = source_ceiling - source_floor

        best: Optional[_Candidate] = None
        for start in self._live_candidates(positions, comparison_used):
            comparison_floor = comparison_used.previous_end(start) or 0
            comparison_ceiling = comparison_used.next_start(start)
            if comparison_ceiling is None:
                comparison_ceiling = len(comparison)

            # Stays at zero under a left-to-right scan.
            back = _common_run(
                source,
                position,
                comparison,
                start,
                min(position - source_floor, start - comparison_floor),
                backward=True,
            )
            forward = k + _common_run(
                source,
                position + k,
                comparison,
                start + k,
                min(source_ceiling - position, comparison_ceiling - start) - k,
            )

            length = back + forward
            # Positions ascend, so a strict comparison keeps the earliest tie.
            if best is None or length > best.length:
                best = _Candidate(
                    source_start=position - back,
                    comparison_start=start - back,
                    length=length,
                )
                if length == longest_possible:
                    break
        return best


def find_matching_segments(
    source: str, comparison: str, min_length: int = 30, max_candidates: int = 64
) -> List[MatchSegment]:
    matcher = SegmentMatcher(min_length=min_length, max_candidates=max_candidates)
    return matcher.find_matches(source, comparison)
