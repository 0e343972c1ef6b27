"""Lloyd's K-Means and its collaborators (assignment, seeding, relabeling, summaries)."""

from .assign import Assignment, AssignmentResult, NearestCentroid, NonFiniteDistance
from .init import INIT_METHODS, initial_centroids
from .kmeans import DEF_K, DEF_MAX_ITER, DEF_TOLERANCE, KMeans, KMeansFit, fit_kmeans
from .relabel import reorder_labels_and_centroids
from .state import IterationState, lloyd_step
from .summary import SUMMARY_HEADERS, FitSummary, SummaryRecord

__all__ = [
    "Assignment",
    "AssignmentResult",
    "DEF_K",
    "DEF_MAX_ITER",
    "DEF_TOLERANCE",
    "FitSummary",
    "INIT_METHODS",
    "IterationState",
    "KMeans",
    "KMeansFit",
    "NearestCentroid",
    "NonFiniteDistance",
    "SUMMARY_HEADERS",
    "SummaryRecord",
    "fit_kmeans",
    "initial_centroids",
    "lloyd_step",
    "reorder_labels_and_centroids",
]
