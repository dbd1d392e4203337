# witness_complex/builder.py
"""
Strong witness complex construction.

Conventions
-----------
- Landmark ``i`` is vertex ``i`` of the output complex; witnesses never become vertices.
- For a witness ``w`` with landmarks ranked ``r_0, r_1, ...`` by increasing
  distance (ties by landmark index), the prefix simplex ``{r_0, ..., r_k}`` is
  witnessed at ``d(w, r_k)``: the distance to its farthest member.
- Only prefixes with at most ``limit_dimension + 1`` vertices and values
  ``<= max_squared_alpha`` are produced. The prefix values are non-decreasing,
  so enumeration for a witness stops at the first landmark out of range.
- The *weak* variant (``d(w, r_k) - d(w, r_0)``) differs only in the value
  formula and is not provided.

Workers (one per block of witnesses) return their local minimum value per
simplex; a single merge stage keeps the global minimum and inserts into the sink
in (dimension, vertices) order. Sequential and parallel runs therefore produce
identical complexes.
"""
from __future__ import annotations

import math
import time
import warnings
from dataclasses import dataclass
from multiprocessing import Pool, cpu_count
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from .complex import FilteredComplex, FilteredComplexSink
from .errors import (
    AmbientDimensionMismatch,
    EmptyLandmarkSetWarning,
    InvalidThreshold,
    WitnessComplexError,
)
from .metrics import PointKernel, as_kernel
from .nerve.combinatorics import Simplex
from .oracle import LandmarkRanking, NearestLandmarkOracle, as_point_array
from .utils.status_utils import _Progress, _status, _status_clear

__all__ = [
    "WitnessComplexConfig",
    "StrongWitnessComplex",
    "witness_prefix_simplices",
    "merge_minimum_filtrations",
    "build_strong_witness_complex",
]


# ----------------------------
# Parameters
# ----------------------------

def _check_parameters(
    max_squared_alpha: float,
    limit_dimension: Optional[int],
) -> Tuple[float, Optional[int]]:
    try:
        alpha2 = float(max_squared_alpha)
    except (TypeError, ValueError) as e:
        raise InvalidThreshold(f"max_squared_alpha must be a real number. Got {max_squared_alpha!r}.") from e
    if math.isnan(alpha2) or alpha2 < 0.0:
        raise InvalidThreshold(f"max_squared_alpha must be >= 0. Got {max_squared_alpha!r}.")

    if limit_dimension is None:
        return alpha2, None
    try:
        integral = not isinstance(limit_dimension, bool) and float(limit_dimension).is_integer()
    except (TypeError, ValueError):
        integral = False
    if not integral:
        raise InvalidThreshold(f"limit_dimension must be a non-negative integer. Got {limit_dimension!r}.")
    lim = int(limit_dimension)
    if lim < 0:
        raise InvalidThreshold(f"limit_dimension must be >= 0. Got {limit_dimension!r}.")
    return alpha2, lim


@dataclass(frozen=True)
class WitnessComplexConfig:
    """
    Parameters of one construction run.

    max_squared_alpha:
      no simplex receives a filtration value above this (alpha^2 under the
      default squared-Euclidean kernel).
    limit_dimension:
      maximal simplex dimension; None means no limit besides the landmark count.
    kernel:
      kernel name (or kernel object) passed to :func:`witness_complex.metrics.as_kernel`.
    n_jobs:
      worker processes for the per-witness stage (1 = in-process, -1 = all CPUs).
    block_size:
      witnesses per vectorized distance evaluation / work item.
    """
    max_squared_alpha: float = math.inf
    limit_dimension: Optional[int] = None
    kernel: str = "squared_euclidean"
    n_jobs: int = 1
    block_size: int = 256
    verbose: bool = False

    def validate(self) -> "WitnessComplexConfig":
        _check_parameters(self.max_squared_alpha, self.limit_dimension)
        if int(self.block_size) < 1:
            raise ValueError(f"block_size must be >= 1. Got {self.block_size}.")
        if int(self.n_jobs) == 0 or int(self.n_jobs) < -1:
            raise ValueError(f"n_jobs must be >= 1 or -1. Got {self.n_jobs}.")
        as_kernel(self.kernel)
        return self


# ----------------------------
# Per-witness enumeration
# ----------------------------

def witness_prefix_simplices(
    ranking: LandmarkRanking,
    max_squared_alpha: float,
    limit_dimension: Optional[int],
) -> List[Tuple[Simplex, float]]:
    """
    Simplices witnessed by one witness, shortest prefix first.

    Returns ``[(simplex, value), ...]`` where the k-th entry is the sorted
    vertex tuple of the first ``k+1`` ranked landmarks and ``value`` is the
    distance to the (k+1)-th one. Stops at the first landmark farther than
    ``max_squared_alpha`` and after ``limit_dimension + 1`` landmarks.
    """
    n = len(ranking) if limit_dimension is None else int(limit_dimension) + 1
    out: List[Tuple[Simplex, float]] = []
    verts: List[int] = []
    for j, d in ranking.prefix(n):
        if d > max_squared_alpha:
            break
        verts.append(j)
        out.append((tuple(sorted(verts)), d))
    return out


def _block_minima(
    oracle: NearestLandmarkOracle,
    witnesses: np.ndarray,
    max_squared_alpha: float,
    limit_dimension: Optional[int],
) -> Dict[Simplex, float]:
    local: Dict[Simplex, float] = {}
    for ranking in oracle.rank_block(witnesses):
        for s, v in witness_prefix_simplices(ranking, max_squared_alpha, limit_dimension):
            cur = local.get(s)
            if cur is None or v < cur:
                local[s] = v
    return local


# worker-process state, set once per process by _init_worker
_WORKER: Dict[str, object] = {}


def _init_worker(landmarks, kernel, max_squared_alpha, limit_dimension):
    _WORKER["oracle"] = NearestLandmarkOracle(landmarks, kernel)
    _WORKER["alpha2"] = max_squared_alpha
    _WORKER["limit"] = limit_dimension


def _worker_task(witnesses: np.ndarray) -> Dict[Simplex, float]:
    return _block_minima(_WORKER["oracle"], witnesses, _WORKER["alpha2"], _WORKER["limit"])


def merge_minimum_filtrations(results: Iterable[Dict[Simplex, float]]) -> Dict[Simplex, float]:
    """Combine per-worker results, keeping the minimum value for each simplex."""
    merged: Dict[Simplex, float] = {}
    for local in results:
        for s, v in local.items():
            cur = merged.get(s)
            if cur is None or v < cur:
                merged[s] = v
    return merged


# ----------------------------
# Builder
# ----------------------------

class StrongWitnessComplex:
    """
    Strong witness complex of ``landmarks`` witnessed by ``witnesses``.

    Inputs are validated here, before anything is inserted anywhere:
    both point sets must be 2D (n, D) arrays of finite values with the same D
    (1D inputs are read as 1-dimensional points).

    Parameters
    ----------
    landmarks :
        (nbL, D) landmark coordinates. Row ``i`` becomes vertex ``i``.
    witnesses :
        (n, D) witness coordinates (commonly the full point cloud).
    kernel :
        Point kernel, kernel name, scalar callable, or None (squared Euclidean).

    Raises
    ------
    AmbientDimensionMismatch
        If the coordinate counts differ or an input is not 1D/2D.
    WitnessComplexError
        If any coordinate is NaN or infinite.
    """

    def __init__(self, landmarks, witnesses, kernel: Union[PointKernel, str, None] = None):
        L = as_point_array(landmarks, name="landmarks")
        W = as_point_array(witnesses, name="witnesses")
        if L.shape[1] > 0 and W.shape[1] > 0 and L.shape[1] != W.shape[1]:
            raise AmbientDimensionMismatch(
                f"Landmarks have dimension {L.shape[1]} but witnesses have dimension {W.shape[1]}."
            )
        for name, X in (("landmarks", L), ("witnesses", W)):
            if X.size and not np.all(np.isfinite(X)):
                raise WitnessComplexError(f"{name} contain NaN or infinite coordinates.")

        self.landmarks = L
        self.witnesses = W
        self.kernel = as_kernel(kernel)
        self.elapsed_seconds: Optional[float] = None

    @property
    def n_landmarks(self) -> int:
        return int(self.landmarks.shape[0])

    @property
    def n_witnesses(self) -> int:
        return int(self.witnesses.shape[0])

    @property
    def ambient_dim(self) -> Optional[int]:
        for X in (self.landmarks, self.witnesses):
            if X.shape[0] > 0:
                return int(X.shape[1])
        return None

    def create_complex(
        self,
        sink: Optional[FilteredComplexSink] = None,
        max_squared_alpha: float = math.inf,
        limit_dimension: Optional[int] = None,
        *,
        n_jobs: int = 1,
        block_size: int = 256,
        verbose: bool = False,
    ) -> FilteredComplexSink:
        """
        Fill ``sink`` (a new :class:`FilteredComplex` if None) and return it.

        Parameters
        ----------
        sink :
            Any sink with ``insert_simplex``. Existing content is kept; values
            are only lowered.
        max_squared_alpha :
            Threshold on filtration values (>= 0).
        limit_dimension :
            Maximal simplex dimension (>= 0), or None for no limit.
        n_jobs :
            Worker processes for the per-witness stage. ``-1`` uses all CPUs.
        block_size :
            Witnesses per work item / vectorized distance call.
        verbose :
            Print progress lines.

        Raises
        ------
        InvalidThreshold
            On a negative/NaN threshold or invalid dimension limit (nothing is inserted).
        """
        cfg = WitnessComplexConfig(
            max_squared_alpha=max_squared_alpha,
            limit_dimension=limit_dimension,
            n_jobs=n_jobs,
            block_size=block_size,
            verbose=verbose,
        ).validate()
        alpha2, lim = _check_parameters(cfg.max_squared_alpha, cfg.limit_dimension)

        if sink is None:
            sink = FilteredComplex()

        if self.n_landmarks == 0:
            warnings.warn(
                "Empty landmark set: the witness complex has no simplices.",
                EmptyLandmarkSetWarning,
                stacklevel=2,
            )
            self.elapsed_seconds = 0.0
            return sink
        if self.n_witnesses == 0:
            self.elapsed_seconds = 0.0
            return sink

        t0 = time.perf_counter()
        bs = int(cfg.block_size)
        blocks = [self.witnesses[i:i + bs] for i in range(0, self.n_witnesses, bs)]
        workers = cpu_count() if int(cfg.n_jobs) == -1 else min(int(cfg.n_jobs), cpu_count())
        workers = min(workers, len(blocks))

        progress = _Progress("Witness blocks", len(blocks), enabled=bool(cfg.verbose))
        results: List[Dict[Simplex, float]] = []
        if workers <= 1:
            oracle = NearestLandmarkOracle(self.landmarks, self.kernel)
            for b, blk in enumerate(blocks):
                results.append(_block_minima(oracle, blk, alpha2, lim))
                progress.update(b + 1)
        else:
            with Pool(
                processes=workers,
                initializer=_init_worker,
                initargs=(self.landmarks, self.kernel, alpha2, lim),
            ) as pool:
                for b, local in enumerate(pool.imap(_worker_task, blocks)):
                    results.append(local)
                    progress.update(b + 1)
        progress.close()

        if cfg.verbose:
            _status("Merging witnessed simplices...")
        merged = merge_minimum_filtrations(results)
        for s in sorted(merged, key=lambda s: (len(s), s)):
            sink.insert_simplex(s, merged[s])

        self.elapsed_seconds = time.perf_counter() - t0
        if cfg.verbose:
            _status_clear()
        return sink


def build_strong_witness_complex(
    landmarks,
    witnesses,
    *,
    max_squared_alpha: float = math.inf,
    limit_dimension: Optional[int] = None,
    kernel: Union[PointKernel, str, None] = None,
    config: Optional[WitnessComplexConfig] = None,
    sink: Optional[FilteredComplexSink] = None,
    n_jobs: int = 1,
    block_size: int = 256,
    verbose: bool = False,
) -> FilteredComplexSink:
    """
    One-call construction. If ``config`` is given it overrides the keyword
    parameters (including ``kernel``).

    Returns the filled sink (a new :class:`FilteredComplex` unless ``sink`` is given).
    """
    if config is not None:
        config.validate()
        max_squared_alpha = config.max_squared_alpha
        limit_dimension = config.limit_dimension
        kernel = config.kernel
        n_jobs = config.n_jobs
        block_size = config.block_size
        verbose = config.verbose

    swc = StrongWitnessComplex(landmarks, witnesses, kernel=kernel)
    return swc.create_complex(
        sink,
        max_squared_alpha,
        limit_dimension,
        n_jobs=n_jobs,
        block_size=block_size,
        verbose=verbose,
    )
