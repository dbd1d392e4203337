# witness_complex/summaries/complex_summary.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from ..complex import FilteredComplex


# ----------------------------
# Summary data container
# ----------------------------

@dataclass
class WitnessComplexSummary:
    """
    Summary of a witness complex: simplex counts and filtration ranges per dimension.

    Attributes
    ----------
    n_landmarks, n_witnesses :
        Sizes of the input point sets (None when not known).
    max_squared_alpha, limit_dimension :
        Parameters of the run (None when not known / unlimited).
    counts :
        ``counts[d]`` = number of d-simplices, for d = 0..dimension.
    filtration_ranges :
        ``filtration_ranges[d] = (min, max)`` of the d-simplex values.
    filtration_values :
        Optional raw values per dimension (used by the boxplot).
    elapsed_seconds :
        Build time, when the caller measured it.
    warnings :
        Human-readable warnings surfaced by :func:`summarize_complex`.
    """
    n_landmarks: Optional[int]
    n_witnesses: Optional[int]
    max_squared_alpha: Optional[float]
    limit_dimension: Optional[int]

    counts: Dict[int, int] = field(default_factory=dict)
    filtration_ranges: Dict[int, Tuple[float, float]] = field(default_factory=dict)
    filtration_values: Optional[Dict[int, np.ndarray]] = None

    elapsed_seconds: Optional[float] = None
    warnings: Tuple[str, ...] = ()

    @property
    def n_simplices(self) -> int:
        return int(sum(self.counts.values()))

    @property
    def dimension(self) -> int:
        return max(self.counts) if self.counts else -1

    # ----------------------------
    # formatting
    # ----------------------------

    def to_text(self) -> str:
        lines: List[str] = []
        lines.append("Witness Complex Summary")
        if self.n_landmarks is not None or self.n_witnesses is not None:
            lines.append(f"  n_landmarks = {self.n_landmarks}, n_witnesses = {self.n_witnesses}")
        alpha = "inf" if self.max_squared_alpha is None or math.isinf(self.max_squared_alpha) else f"{self.max_squared_alpha:g}"
        lim = "none" if self.limit_dimension is None else str(self.limit_dimension)
        lines.append(f"  max_squared_alpha = {alpha}, limit_dimension = {lim}")

        lines.append("")
        if not self.counts:
            lines.append("  the complex is empty")
        else:
            lines.append("  simplex counts:")
            for d in sorted(self.counts):
                lo, hi = self.filtration_ranges[d]
                lines.append(f"    #( {d}-simplices ) = {self.counts[d]}   filtration in [{lo:.6g}, {hi:.6g}]")
            lines.append(f"  total = {self.n_simplices}, dimension = {self.dimension}")

        if self.elapsed_seconds is not None:
            lines.append("")
            lines.append(f"  construction took {self.elapsed_seconds:.3f} s")

        for w in self.warnings:
            lines.append("")
            lines.append(f"  WARNING: {w}")

        return "\n".join(lines)

    def to_markdown(self) -> str:
        md: List[str] = []
        md.append("### Witness Complex Summary")
        if self.n_landmarks is not None or self.n_witnesses is not None:
            md.append(f"- $n_\\text{{landmarks}} = {self.n_landmarks}$, $n_\\text{{witnesses}} = {self.n_witnesses}$")
        if self.max_squared_alpha is not None and not math.isinf(self.max_squared_alpha):
            md.append(f"- $\\alpha^2_\\max = {self.max_squared_alpha:g}$")
        if self.limit_dimension is not None:
            md.append(f"- dimension limit $= {self.limit_dimension}$")

        md.append("")
        if not self.counts:
            md.append("*The complex is empty.*")
        else:
            md.append("| dim | # simplices | min filtration | max filtration |")
            md.append("|---:|---:|---:|---:|")
            for d in sorted(self.counts):
                lo, hi = self.filtration_ranges[d]
                md.append(f"| {d} | {self.counts[d]} | {lo:.6g} | {hi:.6g} |")

        if self.warnings:
            md.append("")
            md.append("**Warnings:**")
            md.append("")
            for w in self.warnings:
                md.append(f"- {w}")

        return "\n".join(md)


def _try_display_markdown(md: str) -> bool:
    try:
        from IPython.display import display, Markdown  # type: ignore
        display(Markdown(md))
        return True
    except Exception:
        return False


def summarize_complex(
    cx: FilteredComplex,
    *,
    n_landmarks: Optional[int] = None,
    n_witnesses: Optional[int] = None,
    max_squared_alpha: Optional[float] = None,
    limit_dimension: Optional[int] = None,
    elapsed_seconds: Optional[float] = None,
    keep_values: bool = True,
    verbose: bool = False,
    latex: Union[str, bool] = "auto",
) -> WitnessComplexSummary:
    """
    Collect counts and filtration ranges per dimension from a FilteredComplex.

    Warnings are raised (as strings in the summary) when some landmarks are not
    vertices of the complex, or when the complex stops below ``limit_dimension``
    (usually a sign that ``max_squared_alpha`` is small relative to the landmark spacing).

    If ``verbose``, the summary is displayed (markdown in notebooks when ``latex``
    is True/"auto", text otherwise).
    """
    by_dim: Dict[int, List[float]] = {}
    for s, v in cx.get_simplices():
        by_dim.setdefault(len(s) - 1, []).append(float(v))

    counts = {d: len(vals) for d, vals in by_dim.items()}
    ranges = {d: (min(vals), max(vals)) for d, vals in by_dim.items()}
    values = {d: np.asarray(vals, dtype=float) for d, vals in by_dim.items()} if keep_values else None

    warns: List[str] = []
    n0 = counts.get(0, 0)
    if n_landmarks is not None and 0 < n0 < int(n_landmarks):
        warns.append(
            f"{int(n_landmarks) - n0} of {int(n_landmarks)} landmarks are not witnessed "
            "within max_squared_alpha and are missing from the complex."
        )
    top = max(counts) if counts else -1
    if limit_dimension is not None and 0 <= top < int(limit_dimension):
        if n_landmarks is None or top + 1 < int(n_landmarks):
            warns.append(
                f"Highest simplex dimension is {top} but limit_dimension = {int(limit_dimension)}."
            )

    summary = WitnessComplexSummary(
        n_landmarks=n_landmarks,
        n_witnesses=n_witnesses,
        max_squared_alpha=None if max_squared_alpha is None else float(max_squared_alpha),
        limit_dimension=None if limit_dimension is None else int(limit_dimension),
        counts=counts,
        filtration_ranges=ranges,
        filtration_values=values,
        elapsed_seconds=elapsed_seconds,
        warnings=tuple(warns),
    )

    if verbose:
        shown = False
        if latex is True or latex == "auto":
            shown = _try_display_markdown(summary.to_markdown())
        if not shown:
            print(summary.to_text())

    return summary


# ----------------------------
# Plot helpers (box-and-whisker)
# ----------------------------

def plot_filtration_boxplot(
    summary: Union[WitnessComplexSummary, FilteredComplex],
    *,
    dpi: int = 200,
    figsize: Optional[Tuple[float, float]] = None,
    save_path: Optional[str] = None,
    showfliers: bool = False,
    whis=(0, 100),
    show: bool = True,
):
    """
    Box-and-whisker plot of filtration values, one box per simplex dimension.

    Whiskers default to the full range (``whis=(0,100)``), so they mark the true
    min/max.

    Returns
    -------
    fig, ax :
        ``(None, None)`` if the complex is empty.
    """
    import matplotlib.pyplot as plt

    if isinstance(summary, FilteredComplex):
        summary = summarize_complex(summary, keep_values=True)
    if not summary.filtration_values:
        return None, None

    dims = sorted(summary.filtration_values)
    data = [summary.filtration_values[d] for d in dims]

    if figsize is None:
        figsize = (1.6 * len(dims) + 3.0, 4.5)

    fig, ax = plt.subplots(figsize=figsize, dpi=int(dpi), constrained_layout=True)
    ax.boxplot(data, showfliers=bool(showfliers), whis=whis)
    ax.set_xticks(range(1, len(dims) + 1))
    ax.set_xticklabels([f"{d}-simplices\n(n={summary.counts[d]})" for d in dims])
    ax.set_ylabel("Filtration value")
    ax.set_title("Witness Complex Filtration Values")
    ax.grid(True, axis="y", alpha=0.25)

    if save_path is not None:
        out = save_path
        if out.lower().endswith(".pdf"):
            out = out[:-4] + "_filtration.pdf"
        else:
            out = out + "_filtration.pdf"
        fig.savefig(out, format="pdf", bbox_inches="tight")

    if show:
        plt.show()
    return fig, ax
