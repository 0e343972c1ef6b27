from __future__ import annotations

from typing import Union

import numpy as np
from sklearn.cluster import kmeans_plusplus

InitLike = Union[str, np.ndarray]

INIT_METHODS = ("kmeans++", "random")


def initial_centroids(X: np.ndarray, k: int, *, method: InitLike = "kmeans++", random_seed: int = 0) -> np.ndarray:
    """Seed k starting centroids for a fit.

    `method` is "kmeans++", "random" (k distinct rows), or an explicit (k, n) array.
    """
    if X.ndim != 2:
        raise ValueError("X must be 2D")
    m, n = X.shape
    if not (1 <= k <= m):
        raise ValueError(f"k must be in [1, {m}] (got {k})")

    if not isinstance(method, str):
        C = np.array(method, dtype=float)
        if C.shape != (k, n):
            raise ValueError(f"Initial centroids must have shape {(k, n)} (got {C.shape})")
        if not np.all(np.isfinite(C)):
            raise ValueError("Initial centroids must be finite")
        return C

    if method == "kmeans++":
        centers, _ = kmeans_plusplus(X, n_clusters=k, random_state=random_seed)
        return np.asarray(centers, dtype=float)
    if method == "random":
        rng = np.random.default_rng(random_seed)
        idx = rng.choice(m, size=k, replace=False)
        return X[np.sort(idx)].astype(float)
    raise ValueError(f"Unknown init method {method!r}; expected one of {list(INIT_METHODS)}")
