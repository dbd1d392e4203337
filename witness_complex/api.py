from __future__ import annotations

"""
Public API re-exports for witness_complex.

Import style:
    from witness_complex.api import StrongWitnessComplex, FilteredComplex, build_strong_witness_complex, ...

Notes
-----
- This file is curated: internal helpers (worker functions, status printing) stay private.
- The gudhi bridge (``complex_to_simplex_tree``) lives in :mod:`witness_complex.nerve.nerve_utils`
  and is not imported here, so importing the package does not require gudhi.
"""

# ----------------------------
# Construction
# ----------------------------
from .builder import (
    StrongWitnessComplex,
    WitnessComplexConfig,
    build_strong_witness_complex,
    merge_minimum_filtrations,
    witness_prefix_simplices,
)

# ----------------------------
# Filtered complexes (sinks)
# ----------------------------
from .complex import (
    FilteredComplex,
    FilteredComplexSink,
    SimplexTreeSink,
)

# ----------------------------
# Geometry
# ----------------------------
from .metrics import (
    EuclideanKernel,
    PointKernel,
    SciPyCdistKernel,
    SquaredEuclideanKernel,
    as_kernel,
    make_kernel,
)
from .oracle import LandmarkRanking, NearestLandmarkOracle

# ----------------------------
# Errors
# ----------------------------
from .errors import (
    AmbientDimensionMismatch,
    EmptyLandmarkSetWarning,
    InvalidThreshold,
    WitnessComplexError,
)

# ----------------------------
# Points and landmarks
# ----------------------------
from .io.points import load_points, load_points_from_fvecs_file, write_points_fvecs
from .subsampling import choose_n_farthest_points, pick_n_random_points

# ----------------------------
# Summaries
# ----------------------------
from .summaries.complex_summary import (
    WitnessComplexSummary,
    plot_filtration_boxplot,
    summarize_complex,
)

# ----------------------------
# Combinatorics
# ----------------------------
from .nerve.combinatorics import Simplex, canon_simplex, facets, proper_faces


__all__ = [
    # construction
    "StrongWitnessComplex", "WitnessComplexConfig", "build_strong_witness_complex",
    "merge_minimum_filtrations", "witness_prefix_simplices",

    # complexes
    "FilteredComplex", "FilteredComplexSink", "SimplexTreeSink",

    # geometry
    "PointKernel", "SquaredEuclideanKernel", "EuclideanKernel", "SciPyCdistKernel",
    "as_kernel", "make_kernel",
    "LandmarkRanking", "NearestLandmarkOracle",

    # errors
    "WitnessComplexError", "AmbientDimensionMismatch", "InvalidThreshold", "EmptyLandmarkSetWarning",

    # points
    "load_points", "load_points_from_fvecs_file", "write_points_fvecs",
    "pick_n_random_points", "choose_n_farthest_points",

    # summaries
    "WitnessComplexSummary", "summarize_complex", "plot_filtration_boxplot",

    # combinatorics
    "Simplex", "canon_simplex", "facets", "proper_faces",
]
