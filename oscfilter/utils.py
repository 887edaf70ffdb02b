"""Miscellaneous helpers: seeding, timing and YAML configuration."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, fields

import numpy as np
import yaml

from .engine import osc
from .exceptions import OSCInputError
from .result import OSCResult

logger = logging.getLogger(__name__)


def set_seed(seed: int | None) -> np.random.Generator:
    """Seed synthetic (X, Y) generation for reproducible OSC runs.

    The legacy global state is seeded too (reduced modulo 2**32), so code that
    still draws through ``np.random.*`` repeats as well.  ``None`` takes fresh
    OS entropy.  Returns the ``numpy.random.Generator`` to draw from.
    """
    if seed is None:
        seed = np.random.SeedSequence().entropy
    rng = np.random.default_rng(seed)
    np.random.seed(seed % 2 ** 32)  # for legacy APIs
    return rng


@contextmanager
def timer(message: str | None = None):
    """Time a block of code.

    Yields a dict whose ``'elapsed'`` entry holds the duration in seconds once
    the block exits.  If ``message`` is given, the timing is also logged.
    """
    record = {'elapsed': 0.0}
    start = time.perf_counter()
    try:
        yield record
    finally:
        record['elapsed'] = time.perf_counter() - start
        if message:
            logger.info("%s: %.3f s", message, record['elapsed'])


def load_config(config_path: str) -> dict:
    """Read the raw mapping behind an :class:`OSCConfig` from a YAML file.

    An empty file yields ``{}``; key checking is left to
    :meth:`OSCConfig.from_dict`.
    """
    with open(config_path, 'r', encoding='utf-8') as f:
        cfg = yaml.safe_load(f)
    return cfg or {}


def save_results(path: str, results: dict) -> None:
    """Dump a mapping of plain Python values (e.g. ``OSCResult.summary()``) to YAML."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(results, f, sort_keys=False)


@dataclass
class OSCConfig:
    """Run settings for an OSC variant, loadable from YAML.

    Example
    -------

    ```yaml
    method: fearn
    n_components: 2
    tol: 1.0e-8
    max_iter: 200
    ```
    """

    method: str = 'wold'
    n_components: int = 1
    tol: float = 1e-6
    max_iter: int = 100
    pls_components: int | None = None

    @classmethod
    def from_dict(cls, cfg: dict) -> 'OSCConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(cfg) - known
        if unknown:
            raise OSCInputError(f"unknown OSC configuration key(s): {sorted(unknown)}")
        cfg = dict(cfg)
        # PyYAML reads "1e-6" (no decimal point) as a string
        if isinstance(cfg.get('tol'), str):
            try:
                cfg['tol'] = float(cfg['tol'])
            except ValueError as exc:
                raise OSCInputError(f"tol must be a number, got {cfg['tol']!r}") from exc
        return cls(**cfg)

    @classmethod
    def from_yaml(cls, config_path: str) -> 'OSCConfig':
        return cls.from_dict(load_config(config_path))

    def to_dict(self) -> dict:
        return asdict(self)

    def run(self, X, Y) -> OSCResult:
        """Run the configured variant on ``(X, Y)``."""
        options = {}
        if self.pls_components is not None:
            options['pls_components'] = self.pls_components
        return osc(X, Y, n_components=self.n_components, tol=self.tol,
                   max_iter=self.max_iter, method=self.method, **options)
