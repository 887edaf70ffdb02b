"""Side-by-side runs of the OSC variants.

The three variants share one contract, so comparing them on the same data is
a matter of calling each in turn.  No state is shared between runs; a caller
who wants parallel runs can dispatch :func:`oscfilter.engine.osc` directly.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .engine import METHODS, osc
from .exceptions import OSCInputError
from .metrics import orth_error
from .result import OSCResult
from .utils import timer

logger = logging.getLogger(__name__)


def compare_variants(X,
                     Y,
                     methods: Sequence[str] = ('wold', 'sjoblom', 'fearn'),
                     n_components: int = 1,
                     tol: float = 1e-6,
                     max_iter: int = 100) -> tuple[dict[str, OSCResult], dict[str, float]]:
    """Run several OSC variants on the same ``(X, Y)``.

    Parameters
    ----------
    X, Y : array_like
        Predictor and response matrices, see :func:`oscfilter.engine.osc`.
    methods : sequence of str, optional
        Variants to run, in order.
    n_components, tol, max_iter
        Passed unchanged to every variant.

    Returns
    -------
    results : dict
        ``method -> OSCResult``.
    runtimes : dict
        ``method -> elapsed seconds``.
    """
    unknown = [m for m in methods if m not in METHODS]
    if unknown:
        raise OSCInputError(f"unknown OSC method(s) {unknown}; expected {sorted(METHODS)}")

    results: dict[str, OSCResult] = {}
    runtimes: dict[str, float] = {}
    for method in methods:
        with timer(f"{method} OSC") as clock:
            results[method] = osc(X, Y, n_components=n_components, tol=tol,
                                  max_iter=max_iter, method=method)
        runtimes[method] = clock['elapsed']
        logger.debug("%s OSC finished in %.3f s", method, runtimes[method])
    return results, runtimes


def comparison_table(results: dict[str, OSCResult],
                     runtimes: dict[str, float] | None = None) -> list[dict]:
    """One row of diagnostics per variant, ready for printing or YAML export."""
    rows = []
    for method, res in results.items():
        row = {
            'method': method,
            'R2': round(float(res.R2), 4),
            'angle': round(float(res.angle), 4),
            'weight_orth': round(orth_error(res.weights), 4),
            'iterations': int(sum(res.n_iter)),
            'converged': res.all_converged,
        }
        if runtimes is not None and method in runtimes:
            row['runtime_s'] = float(runtimes[method])
        rows.append(row)
    return rows


def format_table(rows: list[dict]) -> str:
    """Render :func:`comparison_table` rows as fixed-width text."""
    header = f"{'method':<10}{'R2 (%)':>10}{'angle':>10}{'W orth':>9}{'iter':>7}  converged"
    lines = [header, '-' * len(header)]
    for row in rows:
        lines.append(f"{row['method']:<10}{row['R2']:>10.2f}{row['angle']:>10.2f}"
                     f"{row['weight_orth']:>9.3f}{row['iterations']:>7d}  {row['converged']}")
    return "\n".join(lines)
