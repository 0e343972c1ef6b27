import numpy as np

from lloydkm.clustering.relabel import first_appearance_order, reorder_labels_and_centroids


def test_first_appearance_order_puts_unseen_last() -> None:
    assert first_appearance_order(np.array([2, 2, 0, 2, 0]), 4).tolist() == [2, 0, 1, 3]


def test_reorder_moves_labels_and_centroids_together() -> None:
    labels = np.array([2, 0, 2, 1])
    centroids = np.array([[0.0], [1.0], [2.0]])
    new_labels, new_centroids = reorder_labels_and_centroids(labels, centroids)

    assert new_labels.tolist() == [0, 1, 0, 2]
    assert new_centroids.ravel().tolist() == [2.0, 0.0, 1.0]
    for old, new in zip(labels, new_labels):
        assert centroids[old, 0] == new_centroids[new, 0]
