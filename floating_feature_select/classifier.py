"""
floating_feature_select.classifier
==================================
K-Nearest-Neighbours evaluator used as the objective of the wrapper
search.

A :class:`KNNClassifier` holds a fixed train/test split.  For a given set
of feature indices it classifies every testing instance by a majority
vote of its ``k`` nearest training instances, with distances computed
only over those indices, and reports the fraction classified correctly.

Determinism rules
-----------------
* Neighbours are ranked by distance alone.  Equal distances keep the
  training order (stable sort), so the label never acts as a tie-break.
* The vote scans the ``k`` neighbours nearest-first; the winning label is
  the first one to reach the highest count.
"""

from __future__ import annotations

from typing import Hashable, Iterable, Optional, Sequence

import numpy as np
from scipy.spatial.distance import cdist

from .exceptions import EmptyTestSetError, InsufficientNeighborsError
from .instance import Instance, check_indices


__all__ = ["KNNClassifier", "DEFAULT_N_NEIGHBORS", "DEFAULT_TRAIN_SIZE"]


DEFAULT_N_NEIGHBORS = 3
DEFAULT_TRAIN_SIZE  = 0.7


class KNNClassifier:
    """KNN classifier over an explicit training / testing split.

    Parameters
    ----------
    training : sequence of Instance
        Reference instances searched for neighbours.
    testing : sequence of Instance
        Held-out instances whose labels are predicted.
    k : int, default=3
        Number of neighbours that vote.

    Raises
    ------
    ValueError
        If ``k < 1`` or the instances do not share one feature length.
    InsufficientNeighborsError
        If there are fewer training instances than ``k``.

    Examples
    --------
    >>> from floating_feature_select import Instance, KNNClassifier
    >>> train = [Instance([0.0], "a"), Instance([1.0], "a"), Instance([9.0], "b")]
    >>> test  = [Instance([0.5], "a"), Instance([8.0], "b")]
    >>> KNNClassifier(train, test, k=1).classify()
    1.0
    """

    def __init__(
        self,
        training: Sequence[Instance],
        testing: Sequence[Instance],
        k: int = DEFAULT_N_NEIGHBORS,
    ):
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}.")
        self._training = list(training)
        self._testing  = list(testing)
        self._k        = k

        if len(self._training) < k:
            raise InsufficientNeighborsError(
                f"{len(self._training)} training instances cannot supply "
                f"k={k} neighbours."
            )

        self._n_features = self._training[0].n_features
        lengths = {inst.n_features for inst in self._training + self._testing}
        if len(lengths) > 1:
            raise ValueError(
                f"All instances must have the same number of features, "
                f"found lengths {sorted(lengths)}."
            )

        self._X_train = self._stack(self._training)
        self._X_test  = self._stack(self._testing)
        self._y_train = [inst.label for inst in self._training]
        self._y_test  = [inst.label for inst in self._testing]

    @classmethod
    def from_instances(
        cls,
        instances: Iterable[Instance],
        k: int = DEFAULT_N_NEIGHBORS,
        train_size: float = DEFAULT_TRAIN_SIZE,
    ) -> "KNNClassifier":
        """Split ``instances`` by iteration order and build a classifier.

        The first ``int(len(instances) * train_size)`` instances become the
        training set and the rest the testing set.  No shuffling happens,
        so the same input order always gives the same split.
        """
        if not 0.0 < train_size < 1.0:
            raise ValueError(f"train_size must be in (0, 1), got {train_size}.")
        instances = list(instances)
        n_train = int(len(instances) * train_size)
        return cls(instances[:n_train], instances[n_train:], k=k)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def training(self) -> list[Instance]:
        return list(self._training)

    @property
    def testing(self) -> list[Instance]:
        return list(self._testing)

    @property
    def k(self) -> int:
        return self._k

    @property
    def n_features(self) -> int:
        return self._n_features

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def predict(self, indices: Optional[Iterable[int]] = None) -> list[Hashable]:
        """Voted label for every testing instance, in testing order.

        Parameters
        ----------
        indices : iterable of int, optional
            Feature indices used for the distance.  ``None`` uses every
            feature.

        Returns
        -------
        list
        """
        if indices is None:
            cols = list(range(self._n_features))
        else:
            cols = check_indices(indices, self._n_features)

        if not self._testing:
            return []

        if cols:
            dist = cdist(self._X_test[:, cols], self._X_train[:, cols])
        else:
            dist = np.zeros((len(self._testing), len(self._training)))

        # stable: equal distances keep training order
        order = np.argsort(dist, axis=1, kind="stable")[:, : self._k]
        return [
            _majority_vote([self._y_train[j] for j in row]) for row in order
        ]

    def classify(self, indices: Optional[Iterable[int]] = None) -> float:
        """Fraction of testing instances classified correctly.

        Parameters
        ----------
        indices : iterable of int, optional
            Feature indices used for the distance.  ``None`` uses every
            feature.

        Returns
        -------
        float
            Accuracy in ``[0, 1]``.

        Raises
        ------
        EmptyTestSetError
            If the testing set is empty.
        InvalidIndexError
            If an index is out of range.
        """
        if not self._testing:
            raise EmptyTestSetError(
                "Cannot compute accuracy: the testing set is empty "
                f"({len(self._training)} training instances)."
            )
        predicted = self.predict(indices)
        correct = sum(p == t for p, t in zip(predicted, self._y_test))
        return correct / len(self._testing)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _stack(self, instances: list[Instance]) -> np.ndarray:
        if not instances:
            return np.zeros((0, self._n_features))
        return np.vstack([inst.features for inst in instances])

    def __repr__(self) -> str:
        return (
            f"KNNClassifier(k={self._k}, n_training={len(self._training)}, "
            f"n_testing={len(self._testing)})"
        )


def _majority_vote(labels: Sequence[Hashable]) -> Hashable:
    """Most frequent label; the first one to reach the top count wins."""
    counts: dict = {}
    best, best_count = None, 0
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
        if counts[label] > best_count:
            best, best_count = label, counts[label]
    return best
