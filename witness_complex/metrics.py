# witness_complex/metrics.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

import numpy as np

from scipy.spatial.distance import cdist as _cdist


# ============================================================
# Point kernels: scalar + vectorized distance capability
# ============================================================

class PointKernel(Protocol):
    """
    Distance capability used by the landmark oracle.

    A kernel only has to answer two questions: the distance between two points,
    and the full distance matrix between two point sets. Which kernel is used is
    a configuration choice (see :func:`make_kernel`).
    """
    name: str

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        ...

    def pairwise(self, X: np.ndarray, Y: Optional[np.ndarray] = None) -> np.ndarray:
        ...


def _as_rows(X: np.ndarray) -> np.ndarray:
    X = np.asarray(X, dtype=float)
    if X.ndim == 1:
        X = X.reshape(-1, 1)
    return X


@dataclass(frozen=True)
class SquaredEuclideanKernel:
    """Squared Euclidean distance ||a-b||^2 (the default filtration convention)."""
    name: str = "squared_euclidean"

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        d = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
        return float(np.dot(d, d))

    def pairwise(self, X: np.ndarray, Y: Optional[np.ndarray] = None) -> np.ndarray:
        X = _as_rows(X)
        Y = X if Y is None else _as_rows(Y)
        # per-coordinate differences keep coincident points at exactly 0.0
        # (the |x|^2 - 2<x,y> + |y|^2 expansion can go slightly negative)
        diff = X[:, None, :] - Y[None, :, :]
        return np.einsum("nmd,nmd->nm", diff, diff)


@dataclass(frozen=True)
class EuclideanKernel:
    name: str = "euclidean"

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))

    def pairwise(self, X: np.ndarray, Y: Optional[np.ndarray] = None) -> np.ndarray:
        X = _as_rows(X)
        Y = X if Y is None else _as_rows(Y)
        return np.linalg.norm(X[:, None, :] - Y[None, :, :], axis=-1)


@dataclass(frozen=True)
class SciPyCdistKernel:
    """
    Wrap a scalar metric(p,q) or a scipy metric name using scipy.spatial.distance.cdist.

    Callables must be module-level functions if the kernel is shipped to worker
    processes (``n_jobs > 1``).
    """
    metric: Union[str, Callable]
    name: str = "scipy_cdist"

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        a = np.asarray(a, dtype=float).reshape(1, -1)
        b = np.asarray(b, dtype=float).reshape(1, -1)
        return float(_cdist(a, b, metric=self.metric)[0, 0])

    def pairwise(self, X: np.ndarray, Y: Optional[np.ndarray] = None) -> np.ndarray:
        X = _as_rows(X)
        Y = X if Y is None else _as_rows(Y)
        return _cdist(X, Y, metric=self.metric)


_SQUARED_NAMES = {"squared_euclidean", "sqeuclidean", "squared", "sq_euclidean"}
_EUCLIDEAN_NAMES = {"euclidean", "l2"}


def make_kernel(kind: str = "squared_euclidean") -> PointKernel:
    """
    Factory for point kernels.

    kind:
      - "squared_euclidean" (aliases: "sqeuclidean", "squared"): default
      - "euclidean" (alias: "l2")
      - any other metric name understood by ``scipy.spatial.distance.cdist``
        (e.g. "cityblock", "chebyshev", "cosine")
    """
    key = str(kind).lower().strip()
    if key in _SQUARED_NAMES:
        return SquaredEuclideanKernel()
    if key in _EUCLIDEAN_NAMES:
        return EuclideanKernel()
    # let cdist validate the name now rather than inside a worker
    probe = np.zeros((1, 1))
    try:
        _cdist(probe, probe, metric=key)
    except ValueError as e:
        raise ValueError(f"Unknown kernel kind={kind!r}.") from e
    return SciPyCdistKernel(metric=key, name=key)


def as_kernel(kernel: Union["PointKernel", Callable, str, None]) -> "PointKernel":
    """Convert a kernel object, a kernel name, or a callable(p,q) into a PointKernel."""
    if kernel is None:
        return SquaredEuclideanKernel()
    if isinstance(kernel, str):
        return make_kernel(kernel)
    if hasattr(kernel, "pairwise") and hasattr(kernel, "distance"):
        return kernel  # type: ignore[return-value]
    if callable(kernel):
        return SciPyCdistKernel(metric=kernel, name=getattr(kernel, "__name__", "custom_kernel"))
    raise TypeError(f"Cannot interpret {type(kernel).__name__} as a point kernel.")
