"""
floating_feature_select.exceptions
==================================
Errors raised at the instance / classifier boundary.

All of them derive from ``ValueError`` so that callers who already guard
against bad input with ``except ValueError`` keep working.  The search
layer never catches them: a malformed dataset cannot be repaired from
inside the selection loop.
"""

__all__ = [
    "InvalidIndexError",
    "EmptyTestSetError",
    "InsufficientNeighborsError",
]


class InvalidIndexError(ValueError, IndexError):
    """A feature index lies outside ``[0, n_features)``."""


class EmptyTestSetError(ValueError):
    """Accuracy was requested from a classifier with no testing instances.

    This usually means the dataset is too small for the train/test split.
    """


class InsufficientNeighborsError(ValueError):
    """Fewer training instances than the number of neighbours ``k``."""
