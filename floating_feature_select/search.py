"""
floating_feature_select.search
==============================
Wrapper search over feature subsets.

:class:`FeatureSelection` is the scaffold shared by wrapper strategies:
it owns the instances and scores candidate subsets with a freshly built
:class:`~floating_feature_select.classifier.KNNClassifier`.
:class:`SequentialFloatingForwardSelection` implements SFFS on top of it:

1. **Forward step** – add the remaining feature whose addition gives the
   highest accuracy.
2. **Floating backward phase** – repeatedly drop the least valuable
   selected feature while doing so does not lower accuracy; the first
   removal that hurts is undone and ends the phase.
3. Track the best subset seen at any iteration boundary and return it,
   since floating search may finish on a worse state than it visited.

The outer loop is driven by a :class:`Criteria`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Integral
from typing import Callable, Iterable, NamedTuple, Optional, Union

from .classifier import DEFAULT_N_NEIGHBORS, DEFAULT_TRAIN_SIZE, KNNClassifier
from .instance import Instance


__all__ = [
    "Criteria",
    "FeatureSelection",
    "MAX_ITERATIONS_WITHOUT_PROGRESS",
    "SearchStep",
    "SequentialFloatingForwardSelection",
]


MAX_ITERATIONS_WITHOUT_PROGRESS = 5

ACCURACY       = "accuracy"
NO_IMPROVEMENT = "no_improvement"


# ---------------------------------------------------------------------------
# Stopping criteria
# ---------------------------------------------------------------------------

class Criteria:
    """Stopping rule for the outer search loop.

    Parameters
    ----------
    predicate : callable ``(progress, selected_size) -> bool``
        The loop continues while this returns ``True``.
    signal : {"accuracy", "no_improvement"}, default="accuracy"
        Which progress value is passed as ``progress``: the accuracy of
        the last accepted subset, or the number of consecutive iterations
        without improvement.
    max_iterations : int, optional
        Hard cap on the number of outer iterations.
    """

    def __init__(
        self,
        predicate: Callable[[float, int], bool],
        signal: str = ACCURACY,
        max_iterations: Optional[int] = None,
    ):
        if signal not in (ACCURACY, NO_IMPROVEMENT):
            raise ValueError(
                f"signal must be '{ACCURACY}' or '{NO_IMPROVEMENT}', got {signal!r}."
            )
        if max_iterations is not None and max_iterations < 0:
            raise ValueError("max_iterations must be >= 0.")
        self.predicate      = predicate
        self.signal         = signal
        self.max_iterations = max_iterations

    @classmethod
    def max_features(cls, n: int) -> "Criteria":
        """Continue while fewer than ``n`` features are selected.

        Also caps the run at ``n`` outer iterations: floating removals can
        shrink the subset, so the size test alone need not terminate.
        """
        if n < 1:
            raise ValueError(f"max_features must be >= 1, got {n}.")
        return cls(lambda accuracy, size: size < n, ACCURACY, max_iterations=n)

    @classmethod
    def no_progress(cls, limit: int = MAX_ITERATIONS_WITHOUT_PROGRESS) -> "Criteria":
        """Continue while fewer than ``limit`` consecutive iterations failed
        to improve accuracy."""
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}.")
        return cls(lambda no_improvement, size: no_improvement < limit, NO_IMPROVEMENT)

    def evaluate(self, progress: float, selected_size: int) -> bool:
        return bool(self.predicate(progress, selected_size))

    def exhausted(self, iteration: int) -> bool:
        return self.max_iterations is not None and iteration >= self.max_iterations

    def __repr__(self) -> str:
        return f"Criteria(signal={self.signal!r}, max_iterations={self.max_iterations})"


class SearchStep(NamedTuple):
    """State at the end of one outer SFFS iteration."""

    iteration: int
    added: int
    removed: tuple[int, ...]
    selected: tuple[int, ...]
    accuracy: float
    no_improvement: int


# ---------------------------------------------------------------------------
# Scaffold
# ---------------------------------------------------------------------------

class FeatureSelection(ABC):
    """Base class for wrapper feature selection with a KNN objective.

    Parameters
    ----------
    instances : sequence of Instance
        The dataset.  Its order fixes the train/test split.
    k : int, default=3
        Number of neighbours used by the KNN objective.
    train_size : float, default=0.7
        Fraction of instances (in order) used for training.
    verbose : int, default=0
        Verbosity level (0 = silent, 1 = progress, 2 = detailed).

    Attributes
    ----------
    n_evaluations : int
        Number of objective-function calls made so far.
    """

    def __init__(
        self,
        instances: Optional[Iterable[Instance]],
        k: int = DEFAULT_N_NEIGHBORS,
        train_size: float = DEFAULT_TRAIN_SIZE,
        verbose: int = 0,
    ):
        self.instances  = list(instances) if instances is not None else []
        self.k          = k
        self.train_size = train_size
        self.verbose    = verbose
        self.n_evaluations = 0

    def objective_function(self, subset: Iterable[int]) -> float:
        """Held-out KNN accuracy using only the features in ``subset``."""
        classifier = KNNClassifier.from_instances(
            self.instances, k=self.k, train_size=self.train_size,
        )
        accuracy = classifier.classify(subset)
        self.n_evaluations += 1
        return accuracy

    def best(self, selected: set[int], remaining: set[int]) -> Optional[int]:
        """Feature from ``remaining`` whose addition scores highest.

        Candidates are tried in ascending index order and only a strictly
        better score replaces the incumbent, so ties go to the lowest
        index.  Returns ``None`` when ``remaining`` is empty.
        """
        best_feature, best_accuracy = None, -1.0
        for feature in sorted(remaining):
            accuracy = self.objective_function(selected | {feature})
            if accuracy > best_accuracy:
                best_feature, best_accuracy = feature, accuracy
        return best_feature

    def worst(self, selected: set[int]) -> Optional[int]:
        """Feature from ``selected`` whose removal leaves the highest score.

        Ties go to the lowest index.  Returns ``None`` when ``selected``
        has one element or fewer: the last feature is never removed.
        """
        if len(selected) <= 1:
            return None
        worst_feature, best_accuracy = None, -1.0
        for feature in sorted(selected):
            accuracy = self.objective_function(selected - {feature})
            if accuracy > best_accuracy:
                worst_feature, best_accuracy = feature, accuracy
        return worst_feature

    def all_feature_indices(self) -> set[int]:
        if not self.instances:
            return set()
        return set(range(self.instances[0].n_features))

    @abstractmethod
    def select(self, *args, **kwargs) -> set[int]:
        """Run the search and return the chosen feature indices."""

    def _log(self, level: int, message: str):
        if self.verbose >= level:
            print(f"[{type(self).__name__}] {message}")


# ---------------------------------------------------------------------------
# SFFS
# ---------------------------------------------------------------------------

class SequentialFloatingForwardSelection(FeatureSelection):
    """Sequential Floating Forward Selection with a KNN objective.

    ``select`` has three forms:

    * ``select(n)`` – stop once ``n`` features are selected (and after at
      most ``n`` iterations).
    * ``select()`` – stop after ``MAX_ITERATIONS_WITHOUT_PROGRESS``
      consecutive iterations without an accuracy gain.
    * ``select(criteria)`` – any :class:`Criteria`, or a bare callable
      ``(accuracy, selected_size) -> bool``.

    Attributes
    ----------
    history_ : list of SearchStep
        One entry per outer iteration of the last run.
    best_accuracy_ : float
        Accuracy of the subset returned by the last run.

    Examples
    --------
    >>> from floating_feature_select import (
    ...     Instance, SequentialFloatingForwardSelection)
    >>> data = [Instance([i % 2, 7.0], "odd" if i % 2 else "even")
    ...         for i in range(10)]
    >>> SequentialFloatingForwardSelection(data, k=1).select(1)
    {0}
    """

    def __init__(
        self,
        instances: Optional[Iterable[Instance]],
        k: int = DEFAULT_N_NEIGHBORS,
        train_size: float = DEFAULT_TRAIN_SIZE,
        verbose: int = 0,
    ):
        super().__init__(instances, k=k, train_size=train_size, verbose=verbose)
        self.history_: list[SearchStep] = []
        self.best_accuracy_: Optional[float] = None

    def select(
        self,
        criteria: Union[Criteria, Callable[[float, int], bool], int, None] = None,
    ) -> set[int]:
        """Run SFFS and return the best feature subset found.

        Parameters
        ----------
        criteria : Criteria, callable, int or None
            ``None`` stops on lack of progress, an ``int`` is a maximum
            number of features, a callable is wrapped as an accuracy-driven
            :class:`Criteria`.

        Returns
        -------
        set of int
        """
        criteria = self._resolve_criteria(criteria)

        self.history_ = []
        self.best_accuracy_ = None
        self.n_evaluations = 0

        if not self.instances:
            return set()

        remaining = self.all_feature_indices()
        selected: set[int] = set()

        best_so_far: set[int] = set()
        highest_accuracy = self.objective_function(selected)
        accuracy         = highest_accuracy
        last_accuracy    = accuracy
        no_improvement   = 0
        iteration        = 0

        self._log(1, f"Baseline accuracy with no features: {accuracy:.4f}")

        while not criteria.exhausted(iteration) and criteria.evaluate(
            no_improvement if criteria.signal == NO_IMPROVEMENT else accuracy,
            len(selected),
        ):
            feature = self.best(selected, remaining)
            if feature is None:
                self._log(2, "No remaining features to add.")
                break

            iteration += 1
            selected.add(feature)
            remaining.discard(feature)
            self._log(2, f"Adding feature {feature}; selected={sorted(selected)}")

            accuracy_before_removal = self.objective_function(selected)
            removed = self._float_backward(selected, remaining, accuracy_before_removal)

            accuracy = self.objective_function(selected)

            if accuracy > highest_accuracy:
                highest_accuracy = accuracy
                best_so_far = set(selected)

            if accuracy <= last_accuracy:
                no_improvement += 1
            else:
                no_improvement = 0
            last_accuracy = accuracy

            self.history_.append(SearchStep(
                iteration=iteration,
                added=feature,
                removed=tuple(removed),
                selected=tuple(sorted(selected)),
                accuracy=accuracy,
                no_improvement=no_improvement,
            ))
            self._log(
                1,
                f"Iteration {iteration}: features={sorted(selected)}  "
                f"accuracy={accuracy:.4f}  best={highest_accuracy:.4f}",
            )

        self.best_accuracy_ = highest_accuracy
        self._log(
            1,
            f"Done after {iteration} iterations and {self.n_evaluations} "
            f"evaluations.  Selected features: {sorted(best_so_far)}  "
            f"(accuracy = {highest_accuracy:.4f})",
        )
        return best_so_far

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _float_backward(
        self,
        selected: set[int],
        remaining: set[int],
        accuracy_before_removal: float,
    ) -> list[int]:
        """Drop features from ``selected`` while accuracy does not fall.

        Mutates ``selected`` and ``remaining`` in place and returns the
        features that were removed for good.
        """
        removed = []
        while True:
            worst_feature = self.worst(selected)
            if worst_feature is None:
                break

            selected.discard(worst_feature)
            remaining.add(worst_feature)
            new_accuracy = self.objective_function(selected)

            if new_accuracy < accuracy_before_removal:
                selected.add(worst_feature)
                remaining.discard(worst_feature)
                self._log(
                    2,
                    f"Removing {worst_feature} drops accuracy to "
                    f"{new_accuracy:.4f}; undone.",
                )
                break

            removed.append(worst_feature)
            accuracy_before_removal = new_accuracy
            self._log(
                2,
                f"Removed feature {worst_feature}; accuracy={new_accuracy:.4f}",
            )
        return removed

    @staticmethod
    def _resolve_criteria(criteria) -> Criteria:
        if criteria is None:
            return Criteria.no_progress()
        if isinstance(criteria, Criteria):
            return criteria
        if isinstance(criteria, bool):
            raise TypeError("criteria must be a Criteria, callable, int or None.")
        if isinstance(criteria, Integral):
            return Criteria.max_features(int(criteria))
        if callable(criteria):
            return Criteria(criteria)
        raise TypeError(
            f"criteria must be a Criteria, callable, int or None, "
            f"got {type(criteria).__name__}."
        )
