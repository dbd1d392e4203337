# witness_complex/cli.py
"""
Command line driver:

    witness-complex POINT_FILE NB_LANDMARKS MAX_SQUARED_ALPHA LIMIT_DIMENSION

Reads a point cloud, picks landmarks among the points, builds the strong
witness complex with every point as a witness, and reports its size.
"""
from __future__ import annotations

import argparse
import sys
import time
from typing import Optional, Sequence

import numpy as np

from .builder import StrongWitnessComplex, WitnessComplexConfig
from .errors import WitnessComplexError
from .io.points import load_points
from .subsampling import choose_n_farthest_points, pick_n_random_points
from .summaries.complex_summary import summarize_complex


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="witness-complex",
        description="Build a strong witness complex from a point file.",
    )
    parser.add_argument("point_file", help="points (.fvecs, .npy, or whitespace/comma separated text)")
    parser.add_argument("nb_landmarks", type=int, help="number of landmarks")
    parser.add_argument("max_squared_alpha", type=float, help="filtration threshold (alpha^2)")
    parser.add_argument("limit_dimension", type=int, help="maximal simplex dimension")
    parser.add_argument("--landmarks", choices=("random", "farthest"), default="random",
                        help="landmark selection (default: random)")
    parser.add_argument("--seed", type=int, default=None, help="seed for landmark selection")
    parser.add_argument("--kernel", default="squared_euclidean",
                        help="distance kernel (squared_euclidean, euclidean, or a scipy cdist metric)")
    parser.add_argument("--n-jobs", type=int, default=1, help="worker processes (-1: all CPUs)")
    parser.add_argument("--block-size", type=int, default=256, help="witnesses per work item")
    parser.add_argument("--summary", action="store_true", help="print per-dimension counts and filtration ranges")
    parser.add_argument("-v", "--verbose", action="store_true", help="show progress")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)

    cfg = WitnessComplexConfig(
        max_squared_alpha=args.max_squared_alpha,
        limit_dimension=args.limit_dimension,
        kernel=args.kernel,
        n_jobs=args.n_jobs,
        block_size=args.block_size,
        verbose=args.verbose,
    )

    try:
        cfg.validate()
        if args.nb_landmarks < 0:
            raise ValueError(f"number of landmarks must be >= 0. Got {args.nb_landmarks}.")
        points = load_points(args.point_file)
    except OSError as e:
        print(f"witness-complex: cannot read {args.point_file}: {e}", file=sys.stderr)
        return 1
    except (WitnessComplexError, ValueError) as e:
        print(f"witness-complex: {e}", file=sys.stderr)
        return 1

    print(f"Successfully read {points.shape[0]} points.")
    print(f"Ambient dimension is {points.shape[1] if points.shape[0] else 0}.")

    rng = np.random.default_rng(args.seed)
    if args.landmarks == "farthest":
        landmarks = choose_n_farthest_points(points, args.nb_landmarks, kernel=cfg.kernel, rng=rng)
    else:
        landmarks = pick_n_random_points(points, args.nb_landmarks, rng=rng)

    try:
        swc = StrongWitnessComplex(landmarks, points, kernel=cfg.kernel)
        start = time.perf_counter()
        cx = swc.create_complex(
            None,
            cfg.max_squared_alpha,
            cfg.limit_dimension,
            n_jobs=cfg.n_jobs,
            block_size=cfg.block_size,
            verbose=cfg.verbose,
        )
        elapsed = time.perf_counter() - start
    except WitnessComplexError as e:
        print(f"witness-complex: {e}", file=sys.stderr)
        return 1

    print(f"Strong witness complex took {elapsed:.3f} s.")
    print(f"Number of simplices is: {cx.simplex_count()}")
    print(f"Max dimension is: {cx.dimension()}")

    if args.summary:
        summary = summarize_complex(
            cx,
            n_landmarks=swc.n_landmarks,
            n_witnesses=swc.n_witnesses,
            max_squared_alpha=cfg.max_squared_alpha,
            limit_dimension=cfg.limit_dimension,
            elapsed_seconds=elapsed,
        )
        print(summary.to_text())

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
