# combinatorics.py
from itertools import combinations
from typing import Iterable, Iterator, Tuple

Simplex = Tuple[int, ...]


def canon_simplex(vertices: Iterable[int]) -> Simplex:
    """Sorted tuple of distinct vertex ids. Raises on repeated or missing vertices."""
    s = tuple(sorted(int(v) for v in vertices))
    if len(s) == 0:
        raise ValueError("A simplex needs at least one vertex.")
    for a, b in zip(s, s[1:]):
        if a == b:
            raise ValueError(f"Repeated vertex {a} in simplex {s}.")
    return s


def simplex_dim(s: Simplex) -> int:
    return len(s) - 1


def facets(s: Simplex) -> Iterator[Simplex]:
    """Codimension-1 faces of a canonical simplex (nothing for a vertex)."""
    if len(s) < 2:
        return
    for i in range(len(s)):
        yield s[:i] + s[i + 1:]


def proper_faces(s: Simplex) -> Iterator[Simplex]:
    """All non-empty proper faces, smallest dimension first, lexicographic within a dimension."""
    for k in range(1, len(s)):
        yield from combinations(s, k)
