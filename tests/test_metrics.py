import numpy as np
import pytest

from lloydkm.metrics.pairwise import CallableMetric, DistanceMetric, SimilarityKernel, get_metric


def test_named_metrics_resolve() -> None:
    assert get_metric("manhattan") == DistanceMetric(name="cityblock")
    assert isinstance(get_metric("RBF", gamma=0.5), SimilarityKernel)
    with pytest.raises(ValueError):
        get_metric("not-a-metric")


def test_manhattan_pairwise() -> None:
    D = get_metric("manhattan").pairwise(np.array([[0.0, 0.0]]), np.array([[1.0, 2.0], [3.0, -1.0]]))
    assert D.tolist() == [[3.0, 4.0]]


def test_minkowski_params_are_forwarded() -> None:
    D = get_metric("minkowski", p=1).pairwise(np.array([[0.0, 0.0]]), np.array([[1.0, 2.0]]))
    assert D[0, 0] == pytest.approx(3.0)


def test_kernel_is_negated_similarity() -> None:
    D = get_metric("linear").pairwise(np.array([[1.0, 2.0]]), np.array([[3.0, 4.0]]))
    assert D[0, 0] == pytest.approx(-11.0)


def test_callable_metric_shape_is_checked() -> None:
    metric = get_metric(lambda X, C: np.zeros((1, 1)))
    assert isinstance(metric, CallableMetric)
    with pytest.raises(ValueError):
        metric.pairwise(np.zeros((3, 2)), np.zeros((2, 2)))
