from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from lloydkm.utils.matrix import group_sums, per_cluster_sq_cost

_LOG = logging.getLogger(__name__)


def _frozen(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


@dataclass(frozen=True)
class IterationState:
    iteration: int
    centroids: np.ndarray
    labels: np.ndarray | None
    tss: float
    max_cost: float
    converged: bool = False

    @property
    def k(self) -> int:
        return int(self.centroids.shape[0])


def initial_state(centroids: np.ndarray) -> IterationState:
    return IterationState(
        iteration=0,
        centroids=_frozen(np.array(centroids, dtype=float)),
        labels=None,
        tss=math.inf,
        max_cost=-math.inf,
    )


def update_centroids(
    X: np.ndarray, labels: np.ndarray, previous: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    """New cluster means and each cluster's cost against the previous centroids.

    A cluster with no members keeps its previous centroid and costs nothing.
    """
    k = previous.shape[0]
    sums, counts = group_sums(X, labels, k)
    empty = counts == 0
    means = np.array(previous, dtype=float, copy=True)
    means[~empty] = sums[~empty] / counts[~empty, None]
    if np.any(empty):
        _LOG.debug("Empty clusters %s keep their previous centroids", np.flatnonzero(empty).tolist())
    cost = per_cluster_sq_cost(X, labels, previous)
    return means, cost


def is_converged(diff: float, tolerance: float) -> bool:
    # An infinite tolerance accepts the first pass, whose diff is itself infinite.
    if math.isinf(tolerance):
        return True
    return abs(diff) < tolerance


def lloyd_step(prev: IterationState, labels: np.ndarray, X: np.ndarray, *, tolerance: float) -> IterationState:
    """One update/convergence transition given the labels assigned against `prev.centroids`."""
    means, cost = update_centroids(X, labels, prev.centroids)
    system_cost = float(cost.sum())

    diff = prev.tss - system_cost
    max_cost = system_cost if math.isinf(diff) else prev.max_cost

    return IterationState(
        iteration=prev.iteration + 1,
        centroids=_frozen(means),
        labels=_frozen(np.array(labels, dtype=int, copy=True)),
        tss=system_cost,
        max_cost=max_cost,
        converged=is_converged(diff, tolerance),
    )
