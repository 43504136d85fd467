from typing import List, Sequence


def generate_ngrams(tokens: Sequence[str], n: int, separator: str = " ") -> List[str]:
    """Join every window of ``n`` consecutive tokens into a single string.

    Sequences shorter than ``n`` yield an empty list.
    """
    if n <= 0:
        raise ValueError("N-gram size must be a positive integer.")
    if len(tokens) < n:
        return []
    return [separator.join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]
