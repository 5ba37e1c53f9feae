"""Split a path into a bounded number of contiguous, overlapping chunks."""

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

MIN_CHUNKS = 3
MAX_CHUNKS = 10


def chunk_count(n_points: int) -> int:
    return min(MAX_CHUNKS, max(MIN_CHUNKS, n_points // 5))


def segment_path(path: Sequence[T]) -> list[list[T]]:
    """Divide ``path`` into chunks that share their boundary point.

    Each chunk starts where the previous one ended, so every chunk is a valid
    line of at least two points. Tail chunks shorter than two points are
    dropped.
    """
    n = len(path)
    if n < 2:
        return []
    size = math.ceil(n / chunk_count(n))
    chunks = []
    for start in range(0, n - 1, size):
        chunk = list(path[start:min(start + size + 1, n)])
        if len(chunk) >= 2:
            chunks.append(chunk)
    return chunks
