from __future__ import annotations


class ModelNotFitError(RuntimeError):
    """Raised when fitted results are requested from an unfit model."""


class NonFiniteDistanceWarning(UserWarning):
    """The metric could not partition the space without non-finite distances."""
