from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from lloydkm.metrics.pairwise import Metric, MetricLike, get_metric


@dataclass(frozen=True)
class Assignment:
    labels: np.ndarray
    distances: np.ndarray


@dataclass(frozen=True)
class NonFiniteDistance:
    """No finite distance could be produced for one or more centroids."""

    metric: str
    columns: tuple[int, ...]


AssignmentResult = Union[Assignment, NonFiniteDistance]


class NearestCentroid:
    """Labels rows with the index of their nearest centroid under a metric.

    Ties go to the lowest centroid index.
    """

    def __init__(self, centroids: np.ndarray, labels: np.ndarray | None = None, *, metric: MetricLike = "euclidean"):
        C = np.asarray(centroids, dtype=float)
        if C.ndim != 2:
            raise ValueError("centroids must be 2D")
        if labels is None:
            labels = np.arange(C.shape[0])
        labels = np.asarray(labels, dtype=int)
        if labels.shape != (C.shape[0],):
            raise ValueError("labels must have one entry per centroid")
        self.centroids = C
        self.labels = labels
        self.metric: Metric = get_metric(metric)

    def predict(self, X: np.ndarray) -> AssignmentResult:
        if X.ndim != 2 or X.shape[1] != self.centroids.shape[1]:
            raise ValueError(f"X must be 2D with {self.centroids.shape[1]} columns")

        bad_centroids = ~np.all(np.isfinite(self.centroids), axis=1)
        if np.any(bad_centroids):
            return NonFiniteDistance(
                metric=self.metric.name,
                columns=tuple(int(i) for i in np.flatnonzero(bad_centroids)),
            )

        D = self.metric.pairwise(X, self.centroids)
        finite = np.isfinite(D)
        dead = ~np.any(finite, axis=0)
        if np.any(dead):
            return NonFiniteDistance(metric=self.metric.name, columns=tuple(int(i) for i in np.flatnonzero(dead)))

        # Non-finite cells can never win unless a whole row is non-finite.
        D = np.where(finite, D, np.inf)
        idx = np.argmin(D, axis=1)
        dist = D[np.arange(D.shape[0]), idx]
        return Assignment(labels=self.labels[idx], distances=dist.astype(float))
