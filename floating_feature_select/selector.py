"""
floating_feature_select.selector
================================
Scikit-learn compatible estimator around the SFFS search.

The estimator follows the standard sklearn API:

    selector = SequentialFloatingForwardSelector(
        n_features_to_select=3,
        n_neighbors=3,
    )
    selector.fit(X_train, y_train)
    X_reduced = selector.transform(X_train)

Rows are split into training / testing in their given order (first
``train_size`` fraction for training), so shuffle beforehand if the data
is sorted by class.
"""

from __future__ import annotations

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted, check_X_y

from .classifier import DEFAULT_N_NEIGHBORS, DEFAULT_TRAIN_SIZE
from .instance import instances_from_arrays
from .search import (
    MAX_ITERATIONS_WITHOUT_PROGRESS,
    Criteria,
    SequentialFloatingForwardSelection,
)


__all__ = ["SequentialFloatingForwardSelector"]


class SequentialFloatingForwardSelector(TransformerMixin, BaseEstimator):
    """Wrapper feature selector driven by KNN hold-out accuracy.

    Parameters
    ----------
    n_features_to_select : int, optional
        Stop once this many features are selected.  If ``None``, stop
        after ``max_iterations_without_progress`` iterations without an
        accuracy gain.
    max_iterations_without_progress : int, default=5
        Patience of the no-progress stopping rule.  Ignored when
        ``n_features_to_select`` is set.
    n_neighbors : int, default=3
        ``k`` of the KNN objective.
    train_size : float, default=0.7
        Fraction of rows (in order) used as KNN training data; the rest
        is held out for scoring.
    verbose : int, default=0
        Verbosity level (0 = silent, 1 = progress, 2 = detailed).

    Attributes
    ----------
    selected_features_ : tuple of int
        Sorted indices of the selected features.
    accuracy_ : float
        Hold-out KNN accuracy of the selected subset.
    history_ : list of SearchStep
        Per-iteration trace of the search.
    n_evaluations_ : int
        Number of KNN evaluations performed.
    n_features_in_ : int
        Total number of features seen during fit.

    Examples
    --------
    >>> from sklearn.datasets import load_iris
    >>> from sklearn.utils import shuffle
    >>> from floating_feature_select import SequentialFloatingForwardSelector
    >>>
    >>> X, y = shuffle(*load_iris(return_X_y=True), random_state=0)
    >>> selector = SequentialFloatingForwardSelector(n_features_to_select=2)
    >>> selector.fit(X, y)
    SequentialFloatingForwardSelector(n_features_to_select=2)
    >>> selector.transform(X).shape[0]
    150
    """

    def __init__(
        self,
        n_features_to_select: int | None = None,
        max_iterations_without_progress: int = MAX_ITERATIONS_WITHOUT_PROGRESS,
        n_neighbors: int = DEFAULT_N_NEIGHBORS,
        train_size: float = DEFAULT_TRAIN_SIZE,
        verbose: int = 0,
    ):
        self.n_features_to_select            = n_features_to_select
        self.max_iterations_without_progress = max_iterations_without_progress
        self.n_neighbors                     = n_neighbors
        self.train_size                      = train_size
        self.verbose                         = verbose

    # ------------------------------------------------------------------
    # sklearn API
    # ------------------------------------------------------------------

    def fit(self, X: np.ndarray, y: np.ndarray) -> "SequentialFloatingForwardSelector":
        """Run SFFS on ``(X, y)``.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)
            Training data.
        y : array-like, shape (n_samples,)
            Class labels.

        Returns
        -------
        self
        """
        X_arr, y_arr = check_X_y(X, y, dtype=float)
        self.n_features_in_ = X_arr.shape[1]

        self._validate_params(X_arr)

        if self.n_features_to_select is not None:
            criteria = Criteria.max_features(self.n_features_to_select)
        else:
            criteria = Criteria.no_progress(self.max_iterations_without_progress)

        search = SequentialFloatingForwardSelection(
            instances_from_arrays(X_arr, y_arr),
            k=self.n_neighbors,
            train_size=self.train_size,
            verbose=self.verbose,
        )
        selected = search.select(criteria)

        self.selected_features_ = tuple(sorted(selected))
        self.accuracy_          = search.best_accuracy_
        self.history_           = search.history_
        self.n_evaluations_     = search.n_evaluations
        return self

    def transform(self, X: np.ndarray) -> np.ndarray:
        """Project X onto the selected feature subset.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)

        Returns
        -------
        X_reduced : np.ndarray, shape (n_samples, len(selected_features_))
        """
        check_is_fitted(self, "selected_features_")
        X_arr = np.asarray(X, dtype=float)
        if X_arr.ndim != 2 or X_arr.shape[1] != self.n_features_in_:
            raise ValueError(
                f"X has {X_arr.shape[-1]} features, but "
                f"{type(self).__name__} was fitted with {self.n_features_in_}."
            )
        return X_arr[:, list(self.selected_features_)]

    def get_support(self, indices: bool = False):
        """Return a mask or indices of the selected features.

        Parameters
        ----------
        indices : bool, default=False
            If ``True``, return indices; otherwise return a boolean mask.

        Returns
        -------
        mask : np.ndarray of bool, or np.ndarray of int
        """
        check_is_fitted(self, "selected_features_")
        mask = np.zeros(self.n_features_in_, dtype=bool)
        mask[list(self.selected_features_)] = True
        if indices:
            return np.where(mask)[0]
        return mask

    def get_feature_names_out(self, input_features=None):
        """Get feature names for the selected features.

        Parameters
        ----------
        input_features : array-like of str, optional
            Input feature names.  If ``None``, uses ``x0``, ``x1``, etc.

        Returns
        -------
        feature_names_out : np.ndarray of str
        """
        check_is_fitted(self, "selected_features_")
        if input_features is None:
            input_features = [f"x{i}" for i in range(self.n_features_in_)]
        return np.array(
            [input_features[i] for i in self.selected_features_], dtype=object,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_params(self, X: np.ndarray):
        n_features = X.shape[1]
        if self.n_features_to_select is not None and not (
            1 <= self.n_features_to_select <= n_features
        ):
            raise ValueError(
                f"n_features_to_select ({self.n_features_to_select}) must be "
                f"between 1 and the number of features ({n_features})."
            )
        if self.max_iterations_without_progress < 1:
            raise ValueError("max_iterations_without_progress must be >= 1.")
        if self.n_neighbors < 1:
            raise ValueError("n_neighbors must be >= 1.")
        if not 0.0 < self.train_size < 1.0:
            raise ValueError("train_size must be in (0, 1).")

    def summary(self) -> str:
        """Return a human-readable summary of the fitted selector."""
        check_is_fitted(self, "selected_features_")
        stop = (
            f"{self.n_features_to_select} features"
            if self.n_features_to_select is not None
            else f"{self.max_iterations_without_progress} iterations without progress"
        )
        return "\n".join([
            "SequentialFloatingForwardSelector – fit summary",
            f"  n_features_in          : {self.n_features_in_}",
            f"  stopping rule          : {stop}",
            f"  n_neighbors            : {self.n_neighbors}",
            f"  iterations             : {len(self.history_)}",
            f"  KNN evaluations        : {self.n_evaluations_}",
            f"  selected features      : {self.selected_features_}",
            f"  hold-out accuracy      : {self.accuracy_:.4f}",
        ])
