from __future__ import annotations

"""
Data preparation for the shot-log model: CSV loading, synchronized NA filtering,
label coercion and the design matrix shared by fitting and prediction.
"""

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from .constants import (
    FEATURE_COLUMNS,
    GRID_CLOSE_DEF_DISTS,
    GRID_SHOT_CLOCK,
    GRID_SHOT_DISTS,
    LABEL_COLUMN,
)

logger = logging.getLogger(__name__)


def load_shot_log(
    csv_path: Path,
    feature_columns: Sequence[str] = FEATURE_COLUMNS,
    label_column: str = LABEL_COLUMN,
) -> tuple[pd.DataFrame, pd.Series]:
    """
    Read the shot log and return (features, label) as numeric columns.

    Cells that cannot be parsed as numbers (including empty ones) become NaN;
    nothing is dropped here.
    """
    df = pd.read_csv(csv_path)

    wanted = list(feature_columns) + [label_column]
    missing = [col for col in wanted if col not in df.columns]
    if missing:
        raise ValueError(f"Columns not found in {csv_path}: {missing}")

    numeric = df[wanted].apply(pd.to_numeric, errors="coerce")
    logger.info("Loaded %d rows from %s", len(numeric), csv_path)
    return numeric[list(feature_columns)], numeric[label_column]


def drop_missing_rows(X, y=None):
    """
    Drop every row with a missing value in any feature or in the label.

    X and y are aligned by position. The surviving rows keep X's index so callers
    can tell which original rows were dropped. Returns (X, y); y is None when no
    label was given.
    """
    X_df = pd.DataFrame(X)
    mask = X_df.notna().all(axis=1)

    y_ser = None
    if y is not None:
        y_arr = np.asarray(y)
        if len(y_arr) != len(X_df):
            raise ValueError(
                f"Feature rows ({len(X_df)}) and labels ({len(y_arr)}) differ in length"
            )
        y_ser = pd.Series(y_arr, index=X_df.index, name=getattr(y, "name", None))
        mask &= y_ser.notna()

    n_dropped = int((~mask).sum())
    if n_dropped:
        logger.warning(
            "Dropped %d of %d rows with missing values", n_dropped, len(X_df)
        )

    X_kept = X_df.loc[mask]
    y_kept = y_ser.loc[mask] if y_ser is not None else None
    return X_kept, y_kept


def coerce_labels(y) -> np.ndarray:
    """Return labels as a float vector of 0/1, rejecting anything else."""
    y_arr = np.asarray(y, dtype=float).ravel()
    bad = ~np.isin(y_arr, (0.0, 1.0))
    if bad.any():
        raise ValueError(
            f"Labels must be 0 or 1; found {sorted(set(y_arr[bad].tolist()))[:5]}"
        )
    return y_arr


def build_design_matrix(X) -> np.ndarray:
    """Prepend the bias column; feature columns keep their order after it."""
    X_arr = np.asarray(X, dtype=float)
    if X_arr.ndim == 1:
        X_arr = X_arr.reshape(-1, 1)
    return np.hstack([np.ones((X_arr.shape[0], 1)), X_arr])


def build_prediction_grid(
    shot_clock: float = GRID_SHOT_CLOCK,
    shot_dists: Sequence[float] = GRID_SHOT_DISTS,
    close_def_dists: Sequence[float] = GRID_CLOSE_DEF_DISTS,
    feature_columns: Sequence[str] = FEATURE_COLUMNS,
) -> pd.DataFrame:
    """
    Cartesian grid of shot distance x defender distance at a fixed shot clock.

    feature_columns names the shot-clock, shot-distance and defender-distance
    columns, in that order; the grid uses those names so it can go straight
    into predict_logistic().
    """
    if len(feature_columns) != 3:
        raise ValueError(
            f"Expected shot-clock, shot-distance and defender-distance columns, got {list(feature_columns)}"
        )
    clock_col, dist_col, def_col = feature_columns
    rows = [
        {clock_col: shot_clock, dist_col: dist, def_col: def_dist}
        for def_dist in close_def_dists
        for dist in shot_dists
    ]
    return pd.DataFrame(rows, columns=list(feature_columns), dtype=float)
