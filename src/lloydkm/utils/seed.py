from __future__ import annotations

import random

import numpy as np


def set_global_seed(seed: int) -> np.random.Generator:
    """Seed Python's and numpy's legacy global RNGs and return a fresh Generator."""
    random.seed(seed)
    np.random.seed(seed % (2**32))
    return np.random.default_rng(seed)
