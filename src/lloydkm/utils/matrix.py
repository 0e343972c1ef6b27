from __future__ import annotations

import numpy as np


def mean_record(X: np.ndarray) -> np.ndarray:
    """Column-wise mean of a 2D matrix (the centroid of all rows)."""
    if X.ndim != 2:
        raise ValueError("X must be 2D")
    return X.mean(axis=0)


def squared_distance_sum(X: np.ndarray, center: np.ndarray) -> float:
    diff = X - center[None, :]
    return float(np.sum(diff * diff))


def group_sums(X: np.ndarray, labels: np.ndarray, k: int) -> tuple[np.ndarray, np.ndarray]:
    """Per-label coordinate sums (k, n) and member counts (k,)."""
    sums = np.zeros((k, X.shape[1]), dtype=float)
    np.add.at(sums, labels, X)
    counts = np.bincount(labels, minlength=k)
    return sums, counts


def per_cluster_sq_cost(X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Sum of squared Euclidean distances of each cluster's members to its centroid."""
    k = centroids.shape[0]
    diff = X - centroids[labels]
    row_cost = np.einsum("ij,ij->i", diff, diff)
    return np.bincount(labels, weights=row_cost, minlength=k).astype(float)
