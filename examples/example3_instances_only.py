"""
Example 3 – Using the Search Directly (No sklearn Estimator)
=============================================================
Sometimes the data is already a list of labeled records rather than an
array.  This example builds :class:`Instance` objects by hand and drives
the KNN objective and the SFFS search through the low-level API.
"""

import numpy as np

from floating_feature_select import (
    Criteria,
    Instance,
    KNNClassifier,
    SequentialFloatingForwardSelection,
)

# ---------------------------------------------------------------------------
# Synthetic dataset: 2 informative features + 2 noise features
# ---------------------------------------------------------------------------
rng = np.random.default_rng(0)
n   = 200

instances = []
for i in range(n):
    label  = "pos" if i % 2 else "neg"
    centre = 3.0 if label == "pos" else 0.0
    informative = rng.normal(centre, 0.6, 2)
    noise       = rng.normal(0.0, 1.0, 2)
    instances.append(Instance(np.concatenate([informative, noise]), label))

print("Feature indices: 0,1 = informative | 2,3 = noise\n")

# ---------------------------------------------------------------------------
# Score specific subsets
# ---------------------------------------------------------------------------
clf = KNNClassifier.from_instances(instances, k=3)
for subset in [set(), {0}, {0, 1}, {2, 3}, {0, 1, 2, 3}]:
    print(f"  accuracy{sorted(subset)} = {clf.classify(subset):.4f}")

# ---------------------------------------------------------------------------
# Run SFFS with each stopping rule
# ---------------------------------------------------------------------------
sffs = SequentialFloatingForwardSelection(instances, k=3)

print("\nStop at 2 features:       ", sorted(sffs.select(2)))
print("Stop without progress:    ", sorted(sffs.select()))
print("Stop at 95 % accuracy:    ",
      sorted(sffs.select(Criteria(lambda accuracy, size: accuracy < 0.95,
                                  max_iterations=10))))

print("\nTrajectory of the last run:")
for step in sffs.history_:
    print(f"  #{step.iteration}  +{step.added}  -{list(step.removed)}  "
          f"features={list(step.selected)}  accuracy={step.accuracy:.4f}")
print(f"\n{sffs.n_evaluations} KNN evaluations in the last run.")
