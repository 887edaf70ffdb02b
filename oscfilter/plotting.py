"""Plotting utilities for OSC diagnostics."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from .result import OSCResult


def _finish(fig, outfile: str | None) -> None:
    plt.tight_layout()
    if outfile:
        plt.savefig(outfile)
        plt.close(fig)
    else:
        plt.show()


def plot_scores(result: OSCResult,
                Y: np.ndarray,
                component: int = 0,
                title: str | None = None,
                outfile: str | None = None):
    """Scatter a removed score vector against each response column.

    A cloud with no trend means the component is orthogonal to ``Y``.

    Parameters
    ----------
    result : OSCResult
        Output of an OSC run with at least ``component + 1`` components.
    Y : ndarray of shape (n, m) or (n,)
        Responses used for the correction.
    component : int, optional
        Zero-based component index.
    title : str, optional
        Title of the plot.
    outfile : str, optional
        If provided, the figure is saved to this path instead of shown.

    Returns
    -------
    fig : matplotlib.figure.Figure
    """
    Y = np.asarray(Y, dtype=float)
    if Y.ndim == 1:
        Y = Y[:, None]
    if not 0 <= component < result.n_components:
        raise IndexError(f"component {component} out of range for {result.n_components} component(s)")
    t = result.scores[:, component]

    fig, ax = plt.subplots(figsize=(6, 5))
    for j in range(Y.shape[1]):
        ax.scatter(Y[:, j], t, s=12, label=f"y{j + 1}")
    ax.axhline(0.0, linestyle='--', linewidth=0.5, color='grey')
    ax.set_xlabel("Response")
    ax.set_ylabel(f"Score {component + 1}")
    ax.set_title(title or f"{result.method} OSC (angle {result.angle:.1f}°)")
    ax.grid(True, linestyle='--', linewidth=0.5)
    if Y.shape[1] > 1:
        ax.legend(loc='best')
    _finish(fig, outfile)
    return fig


def plot_comparison(results: dict[str, OSCResult],
                    title: str = "OSC variants",
                    outfile: str | None = None):
    """Bar chart of ``R2`` per variant with the mean angle on a twin axis."""
    labels = list(results)
    r2 = [results[m].R2 for m in labels]
    angle = [results[m].angle for m in labels]
    x = np.arange(len(labels))

    fig, ax1 = plt.subplots(figsize=(6, 4))
    ax1.bar(x, r2, width=0.5, label="R2 retained (%)")
    ax1.set_xticks(x)
    ax1.set_xticklabels(labels)
    ax1.set_ylabel("R2 retained (%)")
    ax1.set_ylim(0, 100)

    ax2 = ax1.twinx()
    ax2.plot(x, angle, 'o:', color='black', label="angle (deg)")
    ax2.set_ylabel("Angle to Y (deg)")
    ax2.set_ylim(0, 180)

    lines, names = [], []
    for ax in (ax1, ax2):
        line, name = ax.get_legend_handles_labels()
        lines += line
        names += name
    ax1.legend(lines, names, loc='best')
    plt.title(title)
    _finish(fig, outfile)
    return fig
