"""Lloyd-style K-Means clustering with cost bookkeeping and fit summaries."""

from lloydkm.clustering import SUMMARY_HEADERS, FitSummary, KMeans, KMeansFit, fit_kmeans
from lloydkm.exceptions import ModelNotFitError, NonFiniteDistanceWarning

__all__ = [
    "FitSummary",
    "KMeans",
    "KMeansFit",
    "ModelNotFitError",
    "NonFiniteDistanceWarning",
    "SUMMARY_HEADERS",
    "fit_kmeans",
]

__version__ = "0.1.0"
