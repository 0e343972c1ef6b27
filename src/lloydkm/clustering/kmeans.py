from __future__ import annotations

import logging
import math
import threading
import time
import warnings
from dataclasses import dataclass
from typing import Callable

import numpy as np
from sklearn.exceptions import ConvergenceWarning

from lloydkm.clustering.assign import NearestCentroid, NonFiniteDistance
from lloydkm.clustering.init import InitLike, initial_centroids
from lloydkm.clustering.relabel import reorder_labels_and_centroids
from lloydkm.clustering.state import IterationState, initial_state, lloyd_step
from lloydkm.clustering.summary import FitSummary, SummaryRecord
from lloydkm.exceptions import ModelNotFitError, NonFiniteDistanceWarning
from lloydkm.metrics.pairwise import Metric, MetricLike, get_metric
from lloydkm.utils.matrix import mean_record, per_cluster_sq_cost, squared_distance_sum

_LOG = logging.getLogger(__name__)

DEF_K = 2
DEF_MAX_ITER = 100
DEF_TOLERANCE = 0.005

WarningSink = Callable[[str, type], None]


def warn_sink(message: str, category: type) -> None:
    warnings.warn(message, category, stacklevel=3)


def _readonly(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


class KMeans:
    """Lloyd's algorithm over a fixed, read-only data matrix.

    Each iteration labels every row with its nearest centroid under `metric`,
    then moves each centroid to the mean of its members. Cost is always the
    squared Euclidean distance to the centroids the rows were assigned
    against, whatever metric drives the assignment. The loop stops once the
    change in total cost drops below `tolerance` or after `max_iter` passes.

    After a normal exit clusters are renumbered in order of first appearance
    in the label array, and the within (`wss`) and between (`bss`) sums of
    squares are derived. A metric that cannot produce finite distances for
    some centroid collapses the model to a single cluster with a warning.

    `fit()` is idempotent and serialized by a per-instance lock.
    """

    def __init__(
        self,
        X: np.ndarray,
        k: int = DEF_K,
        *,
        init: InitLike = "kmeans++",
        metric: MetricLike = "euclidean",
        max_iter: int = DEF_MAX_ITER,
        tolerance: float = DEF_TOLERANCE,
        random_seed: int = 0,
        warning_sink: WarningSink | None = None,
        summary: FitSummary | None = None,
    ) -> None:
        data = np.array(X, dtype=float)
        if data.ndim != 2:
            raise ValueError("X must be 2D")
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError("X must be non-empty")
        if not np.all(np.isfinite(data)):
            raise ValueError("X must be finite")
        if not (1 <= int(k) <= data.shape[0]):
            raise ValueError(f"k must be in [1, {data.shape[0]}] (got {k})")
        if int(max_iter) < 1:
            raise ValueError("max_iter must be >= 1")
        if not (tolerance >= 0):
            raise ValueError("tolerance must be >= 0")

        self._X = _readonly(data)
        self._k = int(k)
        self.metric: Metric = get_metric(metric)
        self.max_iter = int(max_iter)
        self.tolerance = float(tolerance)
        self.random_seed = int(random_seed)
        self.init_centroids = _readonly(initial_centroids(data, self._k, method=init, random_seed=self.random_seed))

        self._warn = warning_sink or warn_sink
        self._summary = summary if summary is not None else FitSummary()
        self._lock = threading.RLock()

        self._labels: np.ndarray | None = None
        self._centroids: np.ndarray | None = None
        self._wss: np.ndarray | None = None
        self._tss = math.inf
        self._max_cost = -math.inf
        self._bss = math.nan
        self._converged = False
        self._n_iter = 0

    # ------------------------------------------------------------------ fitting

    def fit(self) -> KMeans:
        with self._lock:
            if self._labels is not None:
                return self

            t0 = time.perf_counter()
            m, n = self._X.shape
            _LOG.info("Fitting KMeans: m=%d, n=%d, k=%d, metric=%s", m, n, self._k, self.metric.name)

            if self._k == 1:
                self._finalize_singular(t0)
                return self

            state = initial_state(self.init_centroids)
            for t in range(self.max_iter):
                assigner = NearestCentroid(state.centroids, metric=self.metric)
                result = assigner.predict(self._X)
                if isinstance(result, NonFiniteDistance):
                    self._k = 1
                    self._warn(
                        f"(dis)similarity metric {result.metric!r} cannot partition the space without "
                        f"propagating non-finite distances (centroids {list(result.columns)}); "
                        "returning one cluster",
                        NonFiniteDistanceWarning,
                    )
                    self._finalize_singular(t0)
                    return self

                self._summary.append(
                    SummaryRecord(t, state.converged, state.max_cost, state.tss, math.nan, math.nan, self._wall(t0))
                )
                state = lloyd_step(state, result.labels, self._X, tolerance=self.tolerance)
                _LOG.debug("iter=%d tss=%.6g converged=%s", t, state.tss, state.converged)
                if state.converged:
                    break

            self._finalize(state, t0)
            return self

    def _finalize(self, state: IterationState, t0: float) -> None:
        labels, centroids = reorder_labels_and_centroids(state.labels, state.centroids)
        wss = per_cluster_sq_cost(self._X, labels, centroids)
        wss_sum = float(wss.sum())

        self._labels = _readonly(labels)
        self._centroids = _readonly(centroids)
        self._wss = _readonly(wss)
        self._tss = state.tss
        self._max_cost = state.max_cost
        self._bss = state.tss - wss_sum
        self._converged = state.converged
        self._n_iter = state.iteration

        self._summary.append(
            SummaryRecord(self._n_iter, self._converged, self._max_cost, self._tss, wss_sum, self._bss, self._wall(t0))
        )
        if not self._converged:
            self._warn(f"KMeans did not converge within {self.max_iter} iterations", ConvergenceWarning)
        _LOG.info(
            "KMeans finished: iterations=%d converged=%s tss=%.6g bss=%.6g",
            self._n_iter,
            self._converged,
            self._tss,
            self._bss,
        )

    def _finalize_singular(self, t0: float) -> None:
        center = mean_record(self._X)
        tss = squared_distance_sum(self._X, center)

        self._labels = _readonly(np.zeros(self._X.shape[0], dtype=int))
        self._centroids = _readonly(center[None, :].copy())
        self._wss = _readonly(np.array([tss], dtype=float))
        self._tss = tss
        self._max_cost = tss
        self._bss = 0.0
        self._converged = True
        self._n_iter = 1

        self._summary.append(SummaryRecord(1, True, tss, tss, math.nan, math.nan, self._wall(t0)))
        _LOG.info("KMeans finished with a single cluster: tss=%.6g", tss)

    @staticmethod
    def _wall(t0: float) -> float:
        return time.perf_counter() - t0

    # ---------------------------------------------------------------- accessors

    def _require_fit(self) -> None:
        if self._labels is None:
            raise ModelNotFitError("KMeans model has not been fit")

    @property
    def is_fit(self) -> bool:
        return self._labels is not None

    @property
    def data(self) -> np.ndarray:
        return self._X

    @property
    def k(self) -> int:
        return self._k

    @property
    def labels(self) -> np.ndarray:
        self._require_fit()
        return self._labels

    @property
    def centroids(self) -> np.ndarray:
        self._require_fit()
        return self._centroids

    @property
    def tss(self) -> float:
        self._require_fit()
        return self._tss

    @property
    def max_cost(self) -> float:
        self._require_fit()
        return self._max_cost

    @property
    def wss(self) -> np.ndarray:
        self._require_fit()
        return self._wss

    @property
    def bss(self) -> float:
        self._require_fit()
        return self._bss

    @property
    def converged(self) -> bool:
        self._require_fit()
        return self._converged

    @property
    def n_iter(self) -> int:
        self._require_fit()
        return self._n_iter

    @property
    def summary(self) -> FitSummary:
        return self._summary

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Label new rows against the fitted centroids."""
        self._require_fit()
        data = np.asarray(X, dtype=float)
        if data.ndim != 2 or data.shape[1] != self._X.shape[1]:
            raise ValueError(f"X must be 2D with {self._X.shape[1]} columns")
        result = NearestCentroid(self._centroids, metric=self.metric).predict(data)
        if isinstance(result, NonFiniteDistance):
            raise ValueError(f"Metric {result.metric!r} produced non-finite distances for centroids {list(result.columns)}")
        return result.labels


@dataclass(frozen=True)
class KMeansFit:
    k: int
    labels: np.ndarray
    centers: np.ndarray
    inertia: float
    tss: float
    bss: float
    converged: bool
    n_iter: int


def fit_kmeans(
    X: np.ndarray,
    *,
    k: int,
    random_seed: int,
    init: InitLike = "kmeans++",
    metric: MetricLike = "euclidean",
    max_iter: int = DEF_MAX_ITER,
    tolerance: float = DEF_TOLERANCE,
) -> KMeansFit:
    if X.ndim != 2:
        raise ValueError("X must be 2D")
    if k < 1:
        raise ValueError("k must be >= 1")
    if X.shape[0] < k:
        raise ValueError(f"Need at least k samples (n={X.shape[0]}, k={k})")

    model = KMeans(
        X,
        k,
        init=init,
        metric=metric,
        max_iter=max_iter,
        tolerance=tolerance,
        random_seed=random_seed,
    ).fit()
    return KMeansFit(
        k=model.k,
        labels=model.labels,
        centers=model.centroids,
        inertia=float(model.wss.sum()),
        tss=model.tss,
        bss=model.bss,
        converged=model.converged,
        n_iter=model.n_iter,
    )
