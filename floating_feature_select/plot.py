"""
floating_feature_select.plot
============================
Visualization helpers for the floating feature selector.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from .classifier import DEFAULT_N_NEIGHBORS, DEFAULT_TRAIN_SIZE, KNNClassifier
from .instance import instances_from_arrays
from .search import SearchStep


__all__ = ["plot_search_history", "plot_feature_space_2d"]


def plot_search_history(
    history: Sequence[SearchStep],
    *,
    title: str = "SFFS search trajectory",
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Accuracy and subset size after each outer SFFS iteration.

    Parameters
    ----------
    history : sequence of SearchStep
        ``history_`` of a fitted selector or a finished search.
    title : str
        Plot title.
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    iterations = [step.iteration for step in history]
    accuracies = [step.accuracy for step in history]
    sizes      = [len(step.selected) for step in history]

    if ax is None:
        fig, ax = plt.subplots(figsize=(max(6, len(history) * 0.5), 4))
    else:
        fig = ax.get_figure()

    ax_size = ax.twinx()
    ax_size.bar(iterations, sizes, color="#DDDDDD", width=0.6, zorder=0)
    ax_size.set_ylabel("Selected features", fontsize=11)
    ax.set_zorder(ax_size.get_zorder() + 1)
    ax.patch.set_visible(False)

    ax.plot(iterations, accuracies, marker="o", color="#4C72B0", linewidth=1.5)
    ax.set_xlabel("Iteration", fontsize=12)
    ax.set_ylabel("Hold-out accuracy", fontsize=12)
    ax.set_ylim(0, 1.05)
    ax.set_title(title, fontsize=13)

    handles = []
    if history:
        top = int(np.argmax(accuracies))
        ax.scatter(
            [iterations[top]], [accuracies[top]],
            s=90, color="#C44E52", zorder=4,
        )
        handles.append(mpatches.Patch(
            color="#C44E52", label=f"Best: {history[top].selected}",
        ))
        ax.set_xticks(iterations)
        ax.legend(handles=handles, fontsize=9, loc="lower right")

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig


def plot_feature_space_2d(
    X: np.ndarray,
    y: np.ndarray,
    feature_indices: tuple[int, int],
    *,
    n_neighbors: int = DEFAULT_N_NEIGHBORS,
    train_size: float = DEFAULT_TRAIN_SIZE,
    feature_names: Sequence[str] | None = None,
    title: str = "KNN on the selected features",
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Two features as seen by the KNN objective.

    Rows are split in order exactly as the search splits them.  Training
    rows are drawn as small dots, held-out rows as larger markers, and
    held-out rows that the ``n_neighbors``-NN vote gets wrong (using only
    these two features) are circled in black.

    Parameters
    ----------
    X : array-like, shape (n_samples, n_features)
    y : array-like, shape (n_samples,)
    feature_indices : (int, int)
        Pair of feature indices to plot and classify with.
    n_neighbors : int, default=3
    train_size : float, default=0.7
    feature_names : sequence of str, optional
        Names for all features (for axis labels).
    title : str
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    X_arr = np.asarray(X, dtype=float)
    i, j  = feature_indices

    clf = KNNClassifier.from_instances(
        instances_from_arrays(X_arr, y), k=n_neighbors, train_size=train_size,
    )
    n_train   = len(clf.training)
    y_list    = [inst.label for inst in clf.training + clf.testing]
    truth     = y_list[n_train:]
    predicted = clf.predict((i, j))
    wrong     = np.array([p != t for p, t in zip(predicted, truth)], dtype=bool)

    labels  = list(dict.fromkeys(y_list))
    palette = plt.cm.tab10(np.arange(len(labels)) % 10)
    colours = np.array([palette[labels.index(label)] for label in y_list])

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 6))
    else:
        fig = ax.get_figure()

    train_xy = X_arr[:n_train][:, [i, j]]
    test_xy  = X_arr[n_train:][:, [i, j]]

    ax.scatter(train_xy[:, 0], train_xy[:, 1], c=colours[:n_train], s=12,
               alpha=0.5, zorder=2)
    ax.scatter(test_xy[:, 0], test_xy[:, 1], c=colours[n_train:], s=45,
               marker="D", edgecolors="white", linewidths=0.5, zorder=3)
    if wrong.any():
        ax.scatter(test_xy[wrong, 0], test_xy[wrong, 1], s=140,
                   facecolors="none", edgecolors="black", linewidths=1.3,
                   zorder=4)

    handles = [mpatches.Patch(color=palette[k], label=str(label))
               for k, label in enumerate(labels)]
    handles.append(plt.Line2D([], [], marker="o", linestyle="none",
                              markerfacecolor="none", markeredgecolor="black",
                              label=f"Misclassified ({int(wrong.sum())})"))

    if feature_names is None:
        feature_names = [f"Feature {n}" for n in range(X_arr.shape[1])]
    ax.set_xlabel(feature_names[i], fontsize=12)
    ax.set_ylabel(feature_names[j], fontsize=12)

    accuracy = clf.classify((i, j)) if clf.testing else float("nan")
    ax.set_title(f"{title}\n{n_neighbors}-NN hold-out accuracy = {accuracy:.3f}",
                 fontsize=13)
    ax.legend(handles=handles, fontsize=9, loc="best")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig
