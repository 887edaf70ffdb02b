"""Error and warning types raised by the OSC engine."""

from __future__ import annotations


class OSCInputError(ValueError):
    """Raised when the inputs to an OSC variant cannot be used.

    Mismatched row counts, non-numeric or non-finite entries, and invalid
    ``n_components``/``tol``/``max_iter`` values all end up here before any
    computation is performed.
    """


class ConvergenceWarning(UserWarning):
    """Emitted when a component's refinement loop exhausts ``max_iter``.

    The engine keeps the last score/weight estimate and carries on, so this
    is never fatal.
    """
