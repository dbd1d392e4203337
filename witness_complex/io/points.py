# witness_complex/io/points.py
"""
Point cloud readers/writers.

Supported formats
-----------------
- ``.fvecs``: one record per point, a little-endian int32 dimension ``d``
  followed by ``d`` little-endian float32 coordinates.
- ``.npy``: a 2D numpy array.
- anything else: text, one point per line, whitespace- or comma-separated
  (``#`` starts a comment).
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np

from ..errors import AmbientDimensionMismatch
from ..oracle import as_point_array

__all__ = ["load_points", "load_points_from_fvecs_file", "write_points_fvecs"]

PathLike = Union[str, Path]


def load_points_from_fvecs_file(path: PathLike) -> np.ndarray:
    raw = np.fromfile(Path(path), dtype="<i4")
    if raw.size == 0:
        return np.empty((0, 0), dtype=float)

    d = int(raw[0])
    if d <= 0 or raw.size % (d + 1) != 0:
        raise AmbientDimensionMismatch(
            f"{path}: {raw.size * 4} bytes do not split into records of dimension {d}."
        )
    rec = raw.reshape(-1, d + 1)
    bad = np.flatnonzero(rec[:, 0] != d)
    if bad.size:
        raise AmbientDimensionMismatch(
            f"{path}: record {int(bad[0])} has dimension {int(rec[bad[0], 0])}, expected {d}."
        )
    return np.ascontiguousarray(rec[:, 1:]).view("<f4").astype(float)


def write_points_fvecs(path: PathLike, points) -> Path:
    X = as_point_array(points)
    n, d = X.shape
    out = np.empty((n, d + 1), dtype="<i4")
    out[:, 0] = d
    out[:, 1:] = X.astype("<f4").view("<i4")
    path = Path(path)
    out.tofile(path)
    return path


def _load_text(path: Path) -> np.ndarray:
    with open(path, "r") as fh:
        first = ""
        for line in fh:
            if line.strip() and not line.lstrip().startswith("#"):
                first = line
                break
    if not first:
        return np.empty((0, 0), dtype=float)
    delimiter = "," if "," in first else None
    try:
        X = np.loadtxt(path, delimiter=delimiter, comments="#", ndmin=2, dtype=float)
    except ValueError as e:
        raise AmbientDimensionMismatch(f"{path}: rows do not all have the same number of coordinates.") from e
    return X


def load_points(path: PathLike) -> np.ndarray:
    """Read a point cloud as an (n, D) float array, dispatching on the file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".fvecs":
        return load_points_from_fvecs_file(path)
    if suffix == ".npy":
        return as_point_array(np.load(path), name=str(path))
    return _load_text(path)
