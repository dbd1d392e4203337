from __future__ import annotations

from typing import Optional, Sequence, Set

try:
    import gudhi
except ImportError as e:
    raise ImportError("This function requires `gudhi`. Install with `pip install gudhi`.") from e

from .combinatorics import canon_simplex
from ..complex import FilteredComplex


def complex_to_simplex_tree(
    cx: FilteredComplex,
    *,
    include_isolated_vertices: Optional[Sequence[int]] = None,
    isolated_filtration: float = 0.0,
) -> "gudhi.SimplexTree":
    """
    Build a Gudhi SimplexTree from a FilteredComplex.

    Simplices are inserted in filtration order (value, then dimension), so every
    face is already present with its own, smaller or equal, value when a coface
    arrives and Gudhi never has to lower anything.

    Parameters
    ----------
    cx : FilteredComplex
    include_isolated_vertices : optional list of ints
        Landmark ids to force into the tree even if no witness reached them
        (e.g. to keep the vertex set equal to the landmark set).
    isolated_filtration : float
        Filtration assigned to the forced vertices that were not already present.

    Returns
    -------
    st : gudhi.SimplexTree
    """
    st = gudhi.SimplexTree()

    for s, v in cx.get_filtration():
        st.insert(list(s), filtration=float(v))

    if include_isolated_vertices is not None:
        present: Set[int] = {s[0] for s in cx.simplices_of_dimension(0)}
        for u in include_isolated_vertices:
            if int(u) not in present:
                st.insert([int(u)], filtration=float(isolated_filtration))

    return st


def simplex_tree_to_complex(st: "gudhi.SimplexTree") -> FilteredComplex:
    """Copy a Gudhi SimplexTree into a FilteredComplex (values and faces kept as stored)."""
    cx = FilteredComplex()
    for s, v in sorted(st.get_filtration(), key=lambda sv: (sv[1], len(sv[0]))):
        cx.insert_simplex(canon_simplex(s), float(v))
    return cx
