"""Pluggable distance and similarity metrics."""

from .pairwise import (
    CallableMetric,
    DistanceMetric,
    Metric,
    MetricLike,
    SimilarityKernel,
    available_metrics,
    get_metric,
)

__all__ = [
    "CallableMetric",
    "DistanceMetric",
    "Metric",
    "MetricLike",
    "SimilarityKernel",
    "available_metrics",
    "get_metric",
]
