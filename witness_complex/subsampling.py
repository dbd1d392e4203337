# witness_complex/subsampling.py
from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from .metrics import PointKernel, as_kernel
from .oracle import as_point_array

__all__ = ["pick_n_random_points", "choose_n_farthest_points"]


def pick_n_random_points(
    points: np.ndarray,
    n: int,
    *,
    rng: Optional[np.random.Generator] = None,
    return_indices: bool = False,
) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    """
    Choose ``n`` distinct points uniformly at random.

    The chosen rows keep their relative order from ``points`` (so landmark ids
    follow input order). If ``n`` exceeds the number of points, every point is
    returned.

    Returns
    -------
    L : (min(n, N), D) array
    idx : (min(n, N),) int array
        Only if ``return_indices``.
    """
    X = as_point_array(points)
    n = int(n)
    if n < 0:
        raise ValueError(f"n must be >= 0. Got {n}.")
    rng = np.random.default_rng() if rng is None else rng

    N = X.shape[0]
    k = min(n, N)
    idx = np.sort(rng.choice(N, size=k, replace=False)) if k > 0 else np.empty(0, dtype=int)
    L = X[idx]
    return (L, idx) if return_indices else L


def choose_n_farthest_points(
    points: np.ndarray,
    n: int,
    *,
    kernel: Union[PointKernel, str, None] = None,
    starting_point: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    return_indices: bool = False,
) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    """
    Greedy max-min (farthest point) landmark selection.

    Starting from ``starting_point`` (index 0 if None and no ``rng``; a random
    index if ``rng`` is given), repeatedly add the point farthest from the
    points chosen so far. Ties go to the lowest index. Landmarks are returned in
    selection order.

    Notes
    -----
    Uses one column of ``kernel.pairwise`` per selected point, so the cost is
    O(n * N) distance evaluations.
    """
    X = as_point_array(points)
    n = int(n)
    if n < 0:
        raise ValueError(f"n must be >= 0. Got {n}.")
    N = X.shape[0]
    k = min(n, N)
    if k == 0:
        idx = np.empty(0, dtype=int)
        return (X[idx], idx) if return_indices else X[idx]

    ker = as_kernel(kernel)
    if starting_point is None:
        start = 0 if rng is None else int(rng.integers(N))
    else:
        start = int(starting_point)
        if not 0 <= start < N:
            raise IndexError(f"starting_point {start} out of range for {N} points.")

    chosen = [start]
    dist = np.asarray(ker.pairwise(X, X[[start]]), dtype=float)[:, 0]
    dist[start] = -np.inf
    while len(chosen) < k:
        nxt = int(np.argmax(dist))
        chosen.append(nxt)
        dist = np.minimum(dist, np.asarray(ker.pairwise(X, X[[nxt]]), dtype=float)[:, 0])
        dist[chosen] = -np.inf

    idx = np.asarray(chosen, dtype=int)
    return (X[idx], idx) if return_indices else X[idx]
