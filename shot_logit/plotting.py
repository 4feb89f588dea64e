from __future__ import annotations

"""
Presentation of the prediction grid: a pivot of probability by distance bin and
defender distance, and a grouped bar chart of the same table.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


def grid_summary(
    grid: pd.DataFrame,
    probs: pd.Series,
    x_column: str = "SHOT_DIST",
    group_column: str = "CLOSE_DEF_DIST",
) -> pd.DataFrame:
    """Rows are x_column bins, columns are group_column values, cells are P(make)."""
    frame = grid.loc[probs.index, [x_column, group_column]].assign(probability=probs.values)
    return frame.pivot_table(index=x_column, columns=group_column, values="probability")


def plot_grouped_probabilities(
    summary: pd.DataFrame,
    path: Path | None = None,
    ax=None,
    title: str = "Predicted make probability",
):
    """
    One bar group per row of `summary`, one colored bar per column. Saves to
    `path` when given and returns the axes.
    """
    own_figure = ax is None
    if own_figure:
        fig, ax = plt.subplots(figsize=(10, 6))

    x = np.arange(len(summary.index))
    n_groups = len(summary.columns)
    width = 0.8 / max(n_groups, 1)

    for i, group in enumerate(summary.columns):
        offset = (i - (n_groups - 1) / 2) * width
        ax.bar(x + offset, summary[group].to_numpy(), width, label=f"{summary.columns.name} = {group:g}")

    ax.set_xticks(x)
    ax.set_xticklabels([f"{v:g}" for v in summary.index])
    ax.set_xlabel(summary.index.name or "")
    ax.set_ylabel("P(FGM = 1)")
    ax.set_title(title)
    ax.legend()
    ax.grid(axis="y", linestyle="--", alpha=0.7)

    if path is not None:
        ax.figure.tight_layout()
        ax.figure.savefig(path)
    if own_figure and path is not None:
        plt.close(ax.figure)
    return ax
