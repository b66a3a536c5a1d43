"""
Example 2 – Stopping Rules and Model Selection on Wine
=======================================================
Demonstrates:
  * How the stopping rule trades KNN evaluations for accuracy
    (Wine dataset: 13 features, 3 classes, 178 samples)
  * Tuning ``n_features_to_select`` with GridSearchCV, the selector
    sitting inside a Pipeline after a scaler

Wine rows are sorted by class and the selector splits rows in order,
so the data is shuffled first.
"""

from sklearn.datasets import load_wine
from sklearn.model_selection import GridSearchCV
from sklearn.neighbors import KNeighborsClassifier
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.utils import shuffle

from floating_feature_select import SequentialFloatingForwardSelector
from floating_feature_select.plot import plot_feature_space_2d

wine = load_wine()
X, y = shuffle(wine.data, wine.target, random_state=0)
X_scaled = StandardScaler().fit_transform(X)

# ---------------------------------------------------------------------------
# 1. One search per stopping rule
# ---------------------------------------------------------------------------
print(f"{'stopping rule':<22}{'features':<22}{'accuracy':>10}{'evals':>8}")
for n_select in (1, 2, 3, 5, None):
    sel = SequentialFloatingForwardSelector(n_features_to_select=n_select)
    sel.fit(X_scaled, y)
    rule = f"at most {n_select}" if n_select else "no progress (5)"
    print(f"{rule:<22}{str(sel.selected_features_):<22}"
          f"{sel.accuracy_:>10.4f}{sel.n_evaluations_:>8}")

# ---------------------------------------------------------------------------
# 2. Grid search over the subset size, scored by a downstream 5-NN
# ---------------------------------------------------------------------------
pipe = make_pipeline(
    StandardScaler(),
    SequentialFloatingForwardSelector(),
    KNeighborsClassifier(n_neighbors=5),
)
grid = GridSearchCV(
    pipe,
    {"sequentialfloatingforwardselector__n_features_to_select": [1, 2, 3, 4]},
    cv=5,
)
grid.fit(X, y)

best_sel = grid.best_estimator_.named_steps["sequentialfloatingforwardselector"]
print(f"\nBest subset size : {grid.best_params_}")
print(f"CV accuracy      : {grid.best_score_:.4f}")
print(f"Selected         : {best_sel.get_feature_names_out(wine.feature_names)}")

# ---------------------------------------------------------------------------
# 3. Where the KNN still goes wrong on the two leading features
# ---------------------------------------------------------------------------
if len(best_sel.selected_features_) >= 2:
    plot_feature_space_2d(
        X_scaled, y,
        feature_indices=best_sel.selected_features_[:2],
        feature_names=wine.feature_names,
        title="Wine – leading selected features",
        save_path="example2_feature_space.png",
    )
    print("\nPlot saved: example2_feature_space.png")
