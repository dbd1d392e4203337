# witness_complex/__init__.py
from __future__ import annotations

"""
witness_complex: strong witness complexes of point clouds, filtered for persistent homology.

Recommended usage:
    import witness_complex as wc

    L = wc.choose_n_farthest_points(X, 100)
    cx = wc.build_strong_witness_complex(L, X, max_squared_alpha=0.1, limit_dimension=2)
    st = cx.to_simplex_tree()   # gudhi.SimplexTree, e.g. for st.persistence()

Public API:
    - Curated user-facing symbols are re-exported from :mod:`witness_complex.api`.
    - ``wc.nerve_utils`` (the gudhi bridge) is imported lazily, so gudhi is only
      needed when a SimplexTree is actually requested.
"""

import importlib
from typing import Any

# ------------------------------------------------------------
# Version
# ------------------------------------------------------------
from ._version import __version__

# ------------------------------------------------------------
# Curated public API re-export
# ------------------------------------------------------------
from .api import *  # noqa: F401,F403
from .api import __all__ as _api_all

_LAZY_MODULES = {"nerve_utils": "nerve.nerve_utils", "cli": "cli"}

__all__ = ["__version__", *_api_all]


def __getattr__(name: str) -> Any:
    if name in _LAZY_MODULES:
        return importlib.import_module(f"{__name__}.{_LAZY_MODULES[name]}")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    names = set(globals().keys())
    names.update(_LAZY_MODULES)
    return sorted(names)
