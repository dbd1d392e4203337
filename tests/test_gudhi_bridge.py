"""
gudhi interoperability
======================

Export to gudhi.SimplexTree and the SimplexTree-backed sink.
"""

import pytest

gd = pytest.importorskip("gudhi")

from witness_complex import SimplexTreeSink, build_strong_witness_complex  # noqa: E402
from witness_complex.nerve.nerve_utils import (  # noqa: E402
    complex_to_simplex_tree,
    simplex_tree_to_complex,
)


def test_export_keeps_simplices_and_values(random_cloud):
    L, X = random_cloud
    cx = build_strong_witness_complex(L, X, max_squared_alpha=0.4, limit_dimension=2)
    st = cx.to_simplex_tree()

    assert st.num_simplices() == cx.simplex_count()
    assert st.dimension() == cx.dimension()
    for s, v in cx.get_simplices():
        assert st.filtration(list(s)) == pytest.approx(v)

    # a valid filtration for gudhi's persistence
    st.compute_persistence()
    assert st.betti_numbers()[0] >= 1


def test_export_forces_isolated_vertices(two_landmarks):
    L, W = two_landmarks
    cx = build_strong_witness_complex(L, W, max_squared_alpha=0.05, limit_dimension=1)
    st = complex_to_simplex_tree(cx, include_isolated_vertices=[0, 1, 2], isolated_filtration=1.0)

    assert sorted(tuple(s) for s, _ in st.get_skeleton(0)) == [(0,), (1,), (2,)]
    assert st.filtration([0]) == pytest.approx(0.01)
    assert st.filtration([2]) == 1.0


def test_simplex_tree_round_trip(random_cloud):
    L, X = random_cloud
    cx = build_strong_witness_complex(L, X, max_squared_alpha=0.3, limit_dimension=2)
    back = simplex_tree_to_complex(cx.to_simplex_tree())
    assert set(back.as_dict()) == set(cx.as_dict())


def test_simplex_tree_sink_contract():
    sink = SimplexTreeSink()
    assert sink.dimension() == -1
    assert sink.insert_simplex([1, 0], 2.0)
    assert not sink.insert_simplex([0, 1], 3.0)
    assert sink.insert_simplex([0, 1], 1.0)

    assert sink.simplex_count() == 3
    assert sink.dimension() == 1
    assert sink.filtration([0]) == 1.0
    with pytest.raises(KeyError):
        sink.filtration([0, 2])


def test_builder_into_simplex_tree_matches_filtered_complex(random_cloud):
    L, X = random_cloud
    cx = build_strong_witness_complex(L, X, max_squared_alpha=0.4, limit_dimension=2)
    sink = build_strong_witness_complex(L, X, max_squared_alpha=0.4, limit_dimension=2, sink=SimplexTreeSink())

    st = sink.simplex_tree
    assert st.num_simplices() == cx.simplex_count()
    for s, v in cx.get_simplices():
        assert st.filtration(list(s)) == pytest.approx(v)


def test_empty_export():
    from witness_complex import FilteredComplex

    st = FilteredComplex().to_simplex_tree()
    assert st.num_simplices() == 0
    assert st.num_vertices() == 0
