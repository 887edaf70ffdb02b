"""Orthogonal Signal Correction (OSC) package.

OSC removes from a predictor matrix ``X`` the directions of largest variation
that are uncorrelated with a response ``Y``, before a regression model is
fitted.  The package provides:

* :mod:`wold`, :mod:`sjoblom`, :mod:`fearn` – the three classical variants,
  sharing one call signature and returning an :class:`OSCResult`;
* :mod:`engine` – :func:`osc`, which dispatches to a variant by name;
* :mod:`linalg` – pseudo-inverse, sign-stable SVD, PCA, projection and
  deflation helpers;
* :mod:`metrics` – retained variance ``R2``, orthogonality angle and
  convergence diagnostics;
* :mod:`compare` – running and tabulating several variants on one dataset;
* :mod:`plotting` – score and comparison figures;
* :mod:`utils` – random seeding, timers and YAML configuration.

"""

from .engine import osc  # noqa: F401
from .exceptions import ConvergenceWarning, OSCInputError  # noqa: F401
from .result import OSCResult  # noqa: F401

__all__ = ["osc", "OSCResult", "ConvergenceWarning", "OSCInputError"]
