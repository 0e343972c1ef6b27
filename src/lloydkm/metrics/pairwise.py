from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Union

import numpy as np
from scipy.spatial.distance import cdist
from sklearn.metrics.pairwise import pairwise_kernels

_DISTANCE_ALIASES = {
    "euclidean": "euclidean",
    "l2": "euclidean",
    "sqeuclidean": "sqeuclidean",
    "manhattan": "cityblock",
    "cityblock": "cityblock",
    "l1": "cityblock",
    "chebyshev": "chebyshev",
    "cosine": "cosine",
    "canberra": "canberra",
    "braycurtis": "braycurtis",
    "minkowski": "minkowski",
}

_KERNEL_ALIASES = {
    "rbf": "rbf",
    "gaussian": "rbf",
    "linear": "linear",
    "polynomial": "polynomial",
    "poly": "polynomial",
    "sigmoid": "sigmoid",
    "laplacian": "laplacian",
    "cosine_similarity": "cosine",
}


class Metric:
    """Point-to-centroid (dis)similarity.

    `pairwise(X, C)` returns an (m, k) matrix where smaller means closer.
    """

    name: str

    def pairwise(self, X: np.ndarray, C: np.ndarray) -> np.ndarray:
        raise NotImplementedError


@dataclass(frozen=True)
class DistanceMetric(Metric):
    name: str
    params: dict[str, Any] = field(default_factory=dict)

    def pairwise(self, X: np.ndarray, C: np.ndarray) -> np.ndarray:
        return cdist(X, C, metric=self.name, **self.params)


@dataclass(frozen=True)
class SimilarityKernel(Metric):
    """A similarity kernel, negated so that the most similar centroid is the nearest."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)

    def pairwise(self, X: np.ndarray, C: np.ndarray) -> np.ndarray:
        return -pairwise_kernels(X, C, metric=self.name, **self.params)


@dataclass(frozen=True)
class CallableMetric(Metric):
    fn: Callable[[np.ndarray, np.ndarray], np.ndarray]
    name: str = "callable"

    def pairwise(self, X: np.ndarray, C: np.ndarray) -> np.ndarray:
        D = np.asarray(self.fn(X, C), dtype=float)
        if D.shape != (X.shape[0], C.shape[0]):
            raise ValueError(
                f"Metric {self.name!r} returned shape {D.shape}, expected {(X.shape[0], C.shape[0])}"
            )
        return D


MetricLike = Union[str, Metric, Callable[[np.ndarray, np.ndarray], np.ndarray]]


def available_metrics() -> list[str]:
    return sorted(set(_DISTANCE_ALIASES) | set(_KERNEL_ALIASES))


def get_metric(metric: MetricLike, **params: Any) -> Metric:
    if isinstance(metric, Metric):
        return metric
    if callable(metric):
        return CallableMetric(fn=metric, name=getattr(metric, "__name__", "callable"))

    key = str(metric).strip().lower()
    if key in _DISTANCE_ALIASES:
        return DistanceMetric(name=_DISTANCE_ALIASES[key], params=dict(params))
    if key in _KERNEL_ALIASES:
        return SimilarityKernel(name=_KERNEL_ALIASES[key], params=dict(params))
    raise ValueError(f"Unknown metric {metric!r}; expected one of {available_metrics()}")
