# witness_complex/oracle.py
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

import numpy as np

from .errors import AmbientDimensionMismatch
from .metrics import PointKernel, as_kernel

__all__ = ["LandmarkRanking", "NearestLandmarkOracle", "as_point_array"]


def as_point_array(X, *, name: str = "points") -> np.ndarray:
    """
    Coerce to a float array of shape (n_points, D).

    A 1D input is read as a single column (n_points, 1), like the covers do with
    1D base points. An empty input becomes shape (0, 0).
    """
    try:
        X = np.asarray(X, dtype=float)
    except ValueError as e:
        # ragged rows: points with differing coordinate counts
        raise AmbientDimensionMismatch(
            f"{name} must all have the same number of coordinates."
        ) from e
    if X.size == 0 and X.ndim <= 1:
        return X.reshape(0, 0)
    if X.ndim == 1:
        return X.reshape(-1, 1)
    if X.ndim == 2:
        return X
    raise AmbientDimensionMismatch(f"{name} must be 1D or 2D. Got shape {X.shape}.")


class LandmarkRanking:
    """
    Landmarks of one witness ordered by increasing distance, sorted on demand.

    The logical order is fixed: increasing distance, ties broken by landmark
    index. Only a prefix is sorted at any time; asking for entries past it
    extends the prefix (at least doubling it), and what was already served never
    changes.

    Parameters
    ----------
    distances :
        Distance from the witness to every landmark, indexed by landmark id.
    """

    _MIN_CHUNK = 8

    def __init__(self, distances: np.ndarray):
        self._d = np.asarray(distances, dtype=float).reshape(-1)
        self._order = np.empty(0, dtype=np.intp)

    def __len__(self) -> int:
        return int(self._d.size)

    @property
    def n_ranked(self) -> int:
        """How many entries are sorted so far."""
        return int(self._order.size)

    def ensure(self, k: int) -> None:
        n = self._d.size
        k = min(int(k), n)
        if k <= self._order.size:
            return
        grow = max(k, 2 * self._order.size, self._MIN_CHUNK)
        self._order = self._smallest(min(grow, n))

    def _smallest(self, k: int) -> np.ndarray:
        d = self._d
        n = d.size
        if k >= n:
            return np.argsort(d, kind="stable")
        kth = np.partition(d, k - 1)[k - 1]
        cand = np.flatnonzero(d <= kth)  # ascending landmark ids
        return cand[np.argsort(d[cand], kind="stable")][:k]

    def __getitem__(self, i: int) -> Tuple[int, float]:
        i = int(i)
        if i < 0:
            i += len(self)
        if not 0 <= i < len(self):
            raise IndexError(f"rank {i} out of range for {len(self)} landmarks")
        self.ensure(i + 1)
        j = int(self._order[i])
        return j, float(self._d[j])

    def __iter__(self) -> Iterator[Tuple[int, float]]:
        for i in range(len(self)):
            yield self[i]

    def prefix(self, k: int) -> List[Tuple[int, float]]:
        """First ``k`` (landmark_id, distance) pairs (fewer if there are fewer landmarks)."""
        self.ensure(k)
        k = min(int(k), len(self))
        return [(int(j), float(self._d[j])) for j in self._order[:k]]

    def nearest_distance(self) -> Optional[float]:
        if len(self) == 0:
            return None
        return self[0][1]


class NearestLandmarkOracle:
    """
    Ranks landmarks by distance to witnesses under a point kernel.

    ``rank_block`` evaluates the kernel once for a whole block of witnesses
    (one vectorized ``pairwise`` call) and hands out one independent ranking
    per witness.
    """

    def __init__(self, landmarks, kernel: Optional[PointKernel] = None):
        self.landmarks = as_point_array(landmarks, name="landmarks")
        self.kernel = as_kernel(kernel)

    @property
    def n_landmarks(self) -> int:
        return int(self.landmarks.shape[0])

    @property
    def ambient_dim(self) -> Optional[int]:
        return None if self.n_landmarks == 0 else int(self.landmarks.shape[1])

    def _check(self, W: np.ndarray) -> None:
        D = self.ambient_dim
        if D is not None and W.shape[0] > 0 and W.shape[1] != D:
            raise AmbientDimensionMismatch(
                f"Witnesses have dimension {W.shape[1]} but landmarks have dimension {D}."
            )

    def rank(self, witness) -> LandmarkRanking:
        w = np.asarray(witness, dtype=float).reshape(1, -1)
        return self.rank_block(w)[0]

    def rank_block(self, witnesses) -> List[LandmarkRanking]:
        W = as_point_array(witnesses, name="witnesses")
        if self.n_landmarks == 0:
            return [LandmarkRanking(np.empty(0)) for _ in range(W.shape[0])]
        self._check(W)
        if W.shape[0] == 0:
            return []
        D = np.asarray(self.kernel.pairwise(W, self.landmarks), dtype=float)
        return [LandmarkRanking(row) for row in D]
