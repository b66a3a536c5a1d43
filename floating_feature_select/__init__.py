"""
floating_feature_select
=======================
Wrapper feature selection by Sequential Floating Forward Selection (SFFS)
with a K-Nearest-Neighbours objective.

Core idea
---------
**Objective – KNN hold-out accuracy**
    The instances are split in order into a training part (70 %) and a
    testing part (30 %).  A candidate feature subset S is scored by
    classifying every testing instance with a ``k``-NN majority vote,
    distances computed over the features in S only::

        J(S) = (correctly classified testing instances) / (testing instances)

**Search – SFFS**
    Starting from the empty set, add the feature that maximizes J, then
    keep dropping the least useful selected feature as long as J does not
    fall.  The best subset seen at any iteration boundary is returned.
    The floating backward phase lets the search undo earlier additions
    that later turn out to be redundant, which plain forward selection
    cannot do.

Public API
----------
Instance                            – labeled feature vector
KNNClassifier                       – KNN objective over a fixed split
FeatureSelection                    – abstract wrapper-search scaffold
SequentialFloatingForwardSelection  – SFFS over a list of instances
Criteria                            – stopping rules for the search
SequentialFloatingForwardSelector   – sklearn-compatible estimator
"""

from .classifier import KNNClassifier
from .exceptions import (
    EmptyTestSetError,
    InsufficientNeighborsError,
    InvalidIndexError,
)
from .instance import Instance, instances_from_arrays
from .search import (
    MAX_ITERATIONS_WITHOUT_PROGRESS,
    Criteria,
    FeatureSelection,
    SearchStep,
    SequentialFloatingForwardSelection,
)
from .selector import SequentialFloatingForwardSelector

__all__ = [
    "Criteria",
    "EmptyTestSetError",
    "FeatureSelection",
    "Instance",
    "InsufficientNeighborsError",
    "InvalidIndexError",
    "KNNClassifier",
    "MAX_ITERATIONS_WITHOUT_PROGRESS",
    "SearchStep",
    "SequentialFloatingForwardSelection",
    "SequentialFloatingForwardSelector",
    "instances_from_arrays",
]

__version__ = "0.1.0"
