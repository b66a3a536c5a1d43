"""
floating_feature_select.instance
================================
A single labeled feature vector and the restricted Euclidean distance
used by the KNN evaluator.
"""

from __future__ import annotations

from numbers import Integral
from typing import Any, Hashable, Iterable

import numpy as np

from .exceptions import InvalidIndexError


__all__ = ["Instance", "check_indices", "instances_from_arrays"]


class Instance:
    """Immutable feature vector with a class label.

    Parameters
    ----------
    features : array-like, shape (n_features,)
        Numeric feature values.  Stored as a read-only float array.
    label : hashable
        Class identifier.  Only equality is ever used.

    Notes
    -----
    Equality and hashing are identity based: two rows with equal values
    are still two distinct members of a dataset.
    """

    __slots__ = ("_features", "_label")

    def __init__(self, features: Any, label: Hashable):
        arr = np.array(features, dtype=float)
        if arr.ndim != 1:
            raise ValueError(
                f"features must be one-dimensional, got shape {arr.shape}."
            )
        arr.setflags(write=False)
        self._features = arr
        self._label    = label

    @property
    def features(self) -> np.ndarray:
        return self._features

    @property
    def label(self) -> Hashable:
        return self._label

    @property
    def n_features(self) -> int:
        return self._features.shape[0]

    def distance_to(self, other: "Instance", indices: Iterable[int]) -> float:
        """Euclidean distance to ``other`` over the given feature indices.

        Parameters
        ----------
        other : Instance
        indices : iterable of int
            Feature indices to compare.  Order and duplicates are
            irrelevant; an empty collection gives a distance of 0.

        Returns
        -------
        float

        Raises
        ------
        InvalidIndexError
            If an index is negative or not below ``n_features`` of either
            instance.
        """
        cols = check_indices(indices, min(self.n_features, other.n_features))
        if not cols:
            return 0.0
        diff = self._features[cols] - other._features[cols]
        return float(np.sqrt(np.dot(diff, diff)))

    def __repr__(self) -> str:
        return f"Instance(label={self._label!r}, n_features={self.n_features})"


def check_indices(indices: Iterable[int], n_features: int) -> list[int]:
    """Return ``indices`` as a sorted list of unique ints within range.

    Raises
    ------
    InvalidIndexError
        If any index is not an integer or is outside ``[0, n_features)``.
    """
    indices = list(indices)
    for i in indices:
        if isinstance(i, bool) or not isinstance(i, Integral):
            raise InvalidIndexError(f"Feature index {i!r} is not an integer.")
    cols = sorted({int(i) for i in indices})
    bad  = [i for i in cols if i < 0 or i >= n_features]
    if bad:
        raise InvalidIndexError(
            f"Feature indices {bad} out of range for {n_features} features."
        )
    return cols


def instances_from_arrays(X: Any, y: Any) -> list[Instance]:
    """Build one :class:`Instance` per row of ``X``, keeping row order."""
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y)
    if X_arr.ndim != 2:
        raise ValueError(f"X must be two-dimensional, got shape {X_arr.shape}.")
    if len(X_arr) != len(y_arr):
        raise ValueError(
            f"X and y have inconsistent lengths: {len(X_arr)} != {len(y_arr)}."
        )
    return [Instance(row, label) for row, label in zip(X_arr, y_arr.tolist())]
