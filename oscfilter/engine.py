"""Single entry point dispatching to the OSC variants."""

from __future__ import annotations

from .exceptions import OSCInputError
from .fearn import fearn_osc
from .result import OSCResult
from .sjoblom import sjoblom_osc
from .wold import wold_osc

METHODS = {
    'wold': wold_osc,
    'sjoblom': sjoblom_osc,
    'fearn': fearn_osc,
}


def osc(X,
        Y,
        n_components: int = 1,
        tol: float = 1e-6,
        max_iter: int = 100,
        method: str = 'wold',
        **options) -> OSCResult:
    """Remove ``n_components`` directions of ``X`` that are orthogonal to ``Y``.

    Parameters
    ----------
    X : array_like of shape (n, p)
        Predictor matrix.
    Y : array_like of shape (n, m) or (n,)
        Response(s).
    n_components : int, optional
        Number of orthogonal components (``0`` returns ``X`` unchanged).
    tol : float, optional
        Convergence threshold of the refinement loop.
    max_iter : int, optional
        Iteration budget per component.
    method : {'wold', 'sjoblom', 'fearn'}
        Variant to run.
    **options
        Variant specific keywords (``pls_components`` for ``'sjoblom'``).

    Returns
    -------
    result : OSCResult

    Raises
    ------
    OSCInputError
        For invalid inputs or an unknown ``method``.
    """
    try:
        func = METHODS[method.lower()]
    except (AttributeError, KeyError):
        raise OSCInputError(
            f"unknown OSC method {method!r}; expected one of {sorted(METHODS)}"
        ) from None
    return func(X, Y, n_components=n_components, tol=tol, max_iter=max_iter, **options)
