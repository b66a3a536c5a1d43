"""
Example 1 – Breast Cancer (Binary Classification)
==================================================
Runs SFFS with a 3-NN objective on the Wisconsin breast cancer data.

Dataset : Wisconsin Breast Cancer (30 features, 2 classes, 569 samples)
Search  : SFFS, stopping after 5 iterations without progress
Check   : KNN on the selected features, evaluated on a separate test split
"""

from sklearn.datasets import load_breast_cancer
from sklearn.metrics import accuracy_score
from sklearn.model_selection import train_test_split
from sklearn.neighbors import KNeighborsClassifier
from sklearn.preprocessing import StandardScaler

from floating_feature_select import SequentialFloatingForwardSelector
from floating_feature_select.plot import plot_feature_space_2d, plot_search_history

# ---------------------------------------------------------------------------
# 1. Load data
# ---------------------------------------------------------------------------
X, y = load_breast_cancer(return_X_y=True)
feature_names = load_breast_cancer().feature_names.tolist()

X_train, X_test, y_train, y_test = train_test_split(
    X, y, test_size=0.2, random_state=42, stratify=y,
)

# KNN distances are scale sensitive
scaler  = StandardScaler().fit(X_train)
X_train = scaler.transform(X_train)
X_test  = scaler.transform(X_test)

print(f"Dataset: {X.shape[0]} samples, {X.shape[1]} features, 2 classes")

# ---------------------------------------------------------------------------
# 2. Run SFFS
# ---------------------------------------------------------------------------
selector = SequentialFloatingForwardSelector(n_neighbors=3, verbose=1)
selector.fit(X_train, y_train)
print()
print(selector.summary())

# ---------------------------------------------------------------------------
# 3. Evaluate on held-out test set
# ---------------------------------------------------------------------------
clf = KNeighborsClassifier(n_neighbors=3)
clf.fit(selector.transform(X_train), y_train)
acc = accuracy_score(y_test, clf.predict(selector.transform(X_test)))
print(f"\nTest accuracy (3-NN on selected features): {acc:.4f}")

# ---------------------------------------------------------------------------
# 4. Visualise
# ---------------------------------------------------------------------------
plot_search_history(
    selector.history_,
    title="Breast Cancer – SFFS trajectory",
    save_path="example1_history.png",
)

if len(selector.selected_features_) >= 2:
    fi, fj = selector.selected_features_[:2]
    plot_feature_space_2d(
        X_train, y_train,
        feature_indices=(fi, fj),
        feature_names=feature_names,
        title=f"Feature space: {feature_names[fi]} vs {feature_names[fj]}",
        save_path="example1_feature_space.png",
    )

print("Plots saved: example1_history.png, example1_feature_space.png")
