# witness_complex/complex.py
"""
Filtered simplicial complexes that accept witness-complex insertions.

Both sinks share one insertion contract: inserting ``(sigma, v)`` leaves sigma
and every face of sigma present with a filtration value ``<= v``. Values are
only ever lowered, so repeated insertions of a simplex keep the minimum. Faces
are always updated before the simplices that contain them, so the complex is
closed and monotone after every single insertion.
"""
from __future__ import annotations

import math
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Tuple

from .nerve.combinatorics import Simplex, canon_simplex, facets, simplex_dim

__all__ = ["FilteredComplexSink", "FilteredComplex", "SimplexTreeSink"]


class FilteredComplexSink(Protocol):
    """The only sink operations the witness complex builder depends on."""

    def insert_simplex(self, vertices: Iterable[int], filtration: float) -> bool:
        ...

    def simplex_count(self) -> int:
        ...

    def dimension(self) -> int:
        ...


def _check_value(filtration: float) -> float:
    v = float(filtration)
    if math.isnan(v):
        raise ValueError("Filtration value must not be NaN.")
    return v


class FilteredComplex:
    """
    In-memory filtered complex keyed by canonical simplices (sorted vertex tuples).

    Examples
    --------
    >>> cx = FilteredComplex()
    >>> cx.insert_simplex([1, 0], 0.81)
    True
    >>> cx.filtration((1,))
    0.81
    >>> cx.insert_simplex([0], 0.01)   # lowers the vertex, edge untouched
    True
    >>> cx.insert_simplex([0, 1], 2.0)  # higher value: no change
    False
    """

    def __init__(self) -> None:
        self._values: Dict[Simplex, float] = {}
        self._dim = -1

    # ----------------------------
    # sink contract
    # ----------------------------

    def insert_simplex(self, vertices: Iterable[int], filtration: float) -> bool:
        """
        Insert a simplex (and all its faces) at ``filtration``.

        Returns True if the simplex was absent or its stored value was lowered.
        """
        s = canon_simplex(vertices)
        return self._lower(s, _check_value(filtration))

    def simplex_count(self) -> int:
        return len(self._values)

    def dimension(self) -> int:
        return self._dim

    def _lower(self, s: Simplex, v: float) -> bool:
        cur = self._values.get(s)
        if cur is not None and cur <= v:
            # stored faces are already <= cur <= v
            return False
        for f in facets(s):
            self._lower(f, v)
        self._values[s] = v
        if len(s) - 1 > self._dim:
            self._dim = len(s) - 1
        return True

    # ----------------------------
    # queries
    # ----------------------------

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, vertices) -> bool:
        try:
            return canon_simplex(vertices) in self._values
        except (TypeError, ValueError):
            return False

    def __iter__(self) -> Iterator[Tuple[Simplex, float]]:
        return iter(self.get_filtration())

    def filtration(self, vertices: Iterable[int]) -> float:
        s = canon_simplex(vertices)
        try:
            return self._values[s]
        except KeyError:
            raise KeyError(f"Simplex {s} is not in the complex.") from None

    def num_vertices(self) -> int:
        return sum(1 for s in self._values if len(s) == 1)

    def get_simplices(self) -> List[Tuple[Simplex, float]]:
        """All (simplex, value) pairs in dimension-then-lexicographic order."""
        return sorted(self._values.items(), key=lambda kv: (len(kv[0]), kv[0]))

    def get_filtration(self) -> List[Tuple[Simplex, float]]:
        """(simplex, value) pairs sorted by value, then dimension, then vertices; faces come first."""
        return sorted(self._values.items(), key=lambda kv: (kv[1], len(kv[0]), kv[0]))

    def get_skeleton(self, dim: int) -> List[Tuple[Simplex, float]]:
        dim = int(dim)
        return [(s, v) for s, v in self.get_simplices() if simplex_dim(s) <= dim]

    def simplices_of_dimension(self, dim: int) -> List[Simplex]:
        k = int(dim) + 1
        return sorted(s for s in self._values if len(s) == k)

    def filtration_values(self, dim: Optional[int] = None) -> List[float]:
        if dim is None:
            return [v for _, v in self.get_simplices()]
        k = int(dim) + 1
        return [v for s, v in self.get_simplices() if len(s) == k]

    def as_dict(self) -> Dict[Simplex, float]:
        return dict(self._values)

    def to_simplex_tree(self):
        """Export to a ``gudhi.SimplexTree`` (e.g. for persistence computations)."""
        from .nerve.nerve_utils import complex_to_simplex_tree

        return complex_to_simplex_tree(self)

    def __repr__(self) -> str:
        return f"FilteredComplex(n_simplices={len(self._values)}, dimension={self._dim})"


class SimplexTreeSink:
    """
    Adapter giving a ``gudhi.SimplexTree`` the sink contract.

    ``gudhi.SimplexTree.insert`` already completes faces and lowers any stored
    value that is higher; the adapter adds the "new or lowered" return value by
    querying before inserting.
    """

    def __init__(self, simplex_tree=None):
        if simplex_tree is None:
            try:
                import gudhi as gd  # type: ignore
            except Exception as e:
                raise ImportError("SimplexTreeSink requires gudhi to be installed.") from e
            simplex_tree = gd.SimplexTree()
        self.simplex_tree = simplex_tree

    def insert_simplex(self, vertices: Iterable[int], filtration: float) -> bool:
        s = list(canon_simplex(vertices))
        v = _check_value(filtration)
        st = self.simplex_tree
        cur = st.filtration(s) if st.find(s) else None
        st.insert(s, filtration=v)
        return cur is None or v < cur

    def simplex_count(self) -> int:
        return int(self.simplex_tree.num_simplices())

    def dimension(self) -> int:
        if self.simplex_tree.num_simplices() == 0:
            return -1
        return int(self.simplex_tree.dimension())

    def filtration(self, vertices: Iterable[int]) -> float:
        s = list(canon_simplex(vertices))
        if not self.simplex_tree.find(s):
            raise KeyError(f"Simplex {tuple(s)} is not in the complex.")
        return float(self.simplex_tree.filtration(s))
