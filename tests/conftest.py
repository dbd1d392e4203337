"""
Shared fixtures for the witness complex tests.
"""

import numpy as np
import pytest

from witness_complex.nerve.combinatorics import canon_simplex, proper_faces


@pytest.fixture
def two_landmarks():
    """L0 at the origin, L1 at (1,0), one witness at (0.1,0)."""
    L = np.array([[0.0, 0.0], [1.0, 0.0]])
    W = np.array([[0.1, 0.0]])
    return L, W


@pytest.fixture
def random_cloud():
    """Noisy circle of 240 witnesses in R^2 with 16 landmarks taken from the cloud."""
    rng = np.random.default_rng(7)
    t = rng.uniform(0.0, 2.0 * np.pi, size=240)
    X = np.c_[np.cos(t), np.sin(t)] + rng.normal(0.0, 0.05, size=(240, 2))
    idx = np.sort(rng.choice(240, size=16, replace=False))
    return X[idx], X


def brute_force_strong_witness(L, W, max_squared_alpha, limit_dimension):
    """
    Reference construction: full sort per witness, prefixes, explicit face completion.
    Returns {simplex: value}.
    """
    out = {}
    if len(L) == 0:
        return out
    for w in W:
        d = ((L - w) ** 2).sum(axis=1)
        order = np.lexsort((np.arange(len(L)), d))
        verts = []
        for j in order[: limit_dimension + 1]:
            if d[j] > max_squared_alpha:
                break
            verts.append(int(j))
            s = canon_simplex(verts)
            for f in [s, *proper_faces(s)]:
                f = tuple(f)
                if f not in out or d[j] < out[f]:
                    out[f] = float(d[j])
    return out


@pytest.fixture
def brute_force():
    return brute_force_strong_witness
