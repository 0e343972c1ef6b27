import numpy as np

from lloydkm.clustering.assign import Assignment, NearestCentroid, NonFiniteDistance


def test_nearest_centroid_labels_and_distances() -> None:
    X = np.array([[0.0, 0.0], [0.0, 1.0], [10.0, 0.0]])
    out = NearestCentroid(np.array([[0.0, 0.0], [10.0, 0.0]])).predict(X)

    assert isinstance(out, Assignment)
    assert out.labels.tolist() == [0, 0, 1]
    assert np.allclose(out.distances, [0.0, 1.0, 0.0])


def test_ties_go_to_lowest_index() -> None:
    out = NearestCentroid(np.array([[-1.0], [1.0]])).predict(np.array([[0.0]]))
    assert out.labels.tolist() == [0]


def test_custom_label_set_is_returned() -> None:
    out = NearestCentroid(np.array([[0.0], [5.0]]), np.array([7, 3])).predict(np.array([[4.0], [1.0]]))
    assert out.labels.tolist() == [3, 7]


def test_entirely_infinite_column_is_reported() -> None:
    def metric(X: np.ndarray, C: np.ndarray) -> np.ndarray:
        D = np.ones((X.shape[0], C.shape[0]))
        D[:, 2] = np.inf
        return D

    out = NearestCentroid(np.zeros((3, 2)), metric=metric).predict(np.zeros((4, 2)))
    assert isinstance(out, NonFiniteDistance)
    assert out.columns == (2,)


def test_partially_infinite_column_still_assigns() -> None:
    def metric(X: np.ndarray, C: np.ndarray) -> np.ndarray:
        D = np.array([[np.inf, 2.0], [1.0, np.nan]])
        return D

    out = NearestCentroid(np.zeros((2, 1)), metric=metric).predict(np.zeros((2, 1)))
    assert isinstance(out, Assignment)
    assert out.labels.tolist() == [1, 0]


def test_nan_centroid_is_reported() -> None:
    out = NearestCentroid(np.array([[0.0, 0.0], [np.nan, 1.0]])).predict(np.zeros((2, 2)))
    assert isinstance(out, NonFiniteDistance)
    assert out.columns == (1,)


def test_similarity_kernel_picks_most_similar() -> None:
    X = np.array([[0.1, 0.0], [9.5, 0.0]])
    out = NearestCentroid(np.array([[0.0, 0.0], [10.0, 0.0]]), metric="rbf").predict(X)
    assert out.labels.tolist() == [0, 1]
