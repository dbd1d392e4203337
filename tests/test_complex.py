"""
Filtered complex sinks
======================

Insertion contract: faces completed, values only lowered, closure kept after
every insertion.
"""

import pytest

from witness_complex import FilteredComplex, canon_simplex, facets, proper_faces


# =============================================================================
# Combinatorics
# =============================================================================

def test_canon_simplex_sorts():
    assert canon_simplex([3, 1, 2]) == (1, 2, 3)


@pytest.mark.parametrize("bad", [[], [1, 1], [0, 2, 2]])
def test_canon_simplex_rejects_bad_input(bad):
    with pytest.raises(ValueError):
        canon_simplex(bad)


def test_faces():
    assert list(facets((0, 1, 2))) == [(1, 2), (0, 2), (0, 1)]
    assert list(facets((4,))) == []
    assert list(proper_faces((0, 1, 2))) == [(0,), (1,), (2,), (0, 1), (0, 2), (1, 2)]


# =============================================================================
# FilteredComplex
# =============================================================================

def test_insert_completes_faces():
    cx = FilteredComplex()
    assert cx.insert_simplex([2, 0, 1], 1.5)

    assert cx.simplex_count() == 7
    assert cx.dimension() == 2
    assert cx.num_vertices() == 3
    for s, v in cx.get_simplices():
        assert v == 1.5


def test_higher_value_is_ignored_lower_value_wins():
    cx = FilteredComplex()
    assert cx.insert_simplex([0, 1], 2.0)
    assert not cx.insert_simplex([0, 1], 3.0)
    assert cx.filtration([0, 1]) == 2.0
    assert cx.insert_simplex([1, 0], 1.0)
    assert cx.filtration([0, 1]) == 1.0
    assert cx.filtration([0]) == 1.0


def test_lowering_a_simplex_lowers_its_faces_first():
    cx = FilteredComplex()
    cx.insert_simplex([0], 5.0)
    cx.insert_simplex([1, 2], 4.0)
    cx.insert_simplex([0, 1, 2], 1.0)

    for s, v in cx.get_simplices():
        assert v == 1.0, s


def test_lower_face_does_not_touch_coface():
    cx = FilteredComplex()
    cx.insert_simplex([0, 1], 2.0)
    assert cx.insert_simplex([0], 0.5)
    assert cx.filtration([0]) == 0.5
    assert cx.filtration([0, 1]) == 2.0


def test_nan_value_rejected():
    cx = FilteredComplex()
    with pytest.raises(ValueError):
        cx.insert_simplex([0], float("nan"))
    assert cx.simplex_count() == 0


def test_missing_simplex_lookup():
    cx = FilteredComplex()
    cx.insert_simplex([0], 0.0)
    with pytest.raises(KeyError):
        cx.filtration([0, 1])
    assert [0, 1] not in cx
    assert 7 not in cx
    assert (0,) in cx


def test_filtration_order_puts_faces_first():
    cx = FilteredComplex()
    cx.insert_simplex([0, 1], 1.0)
    cx.insert_simplex([1, 2], 0.5)
    cx.insert_simplex([3], 0.7)

    order = [s for s, _ in cx.get_filtration()]
    assert order == [(1,), (2,), (1, 2), (3,), (0,), (0, 1)]
    seen = set()
    for s in order:
        assert all(f in seen for f in proper_faces(s))
        seen.add(s)


def test_skeleton_and_dimension_queries():
    cx = FilteredComplex()
    cx.insert_simplex([0, 1, 2], 1.0)
    assert len(cx.get_skeleton(1)) == 6
    assert cx.simplices_of_dimension(1) == [(0, 1), (0, 2), (1, 2)]
    assert cx.filtration_values(2) == [1.0]


def test_empty_complex():
    cx = FilteredComplex()
    assert cx.simplex_count() == 0
    assert cx.dimension() == -1
    assert cx.get_filtration() == []
    assert len(cx) == 0
