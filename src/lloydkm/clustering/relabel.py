from __future__ import annotations

import numpy as np


def first_appearance_order(labels: np.ndarray, k: int) -> np.ndarray:
    """Old cluster indices in the order they first appear in `labels`.

    Clusters that never appear follow in ascending index order.
    """
    uniq, first_idx = np.unique(labels, return_index=True)
    seen = uniq[np.argsort(first_idx)]
    unseen = np.setdiff1d(np.arange(k), seen)
    return np.concatenate([seen, unseen]).astype(int)


def reorder_labels_and_centroids(labels: np.ndarray, centroids: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    k = centroids.shape[0]
    order = first_appearance_order(labels, k)
    mapping = np.empty(k, dtype=int)
    mapping[order] = np.arange(k)
    return mapping[labels], centroids[order].copy()
