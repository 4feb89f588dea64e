from __future__ import annotations

"""
Metric helpers: in-sample classification summary, coefficient table with odds
ratios, and the mean-probability-by-label sanity check.
"""

import numpy as np
import pandas as pd
from sklearn import metrics


def compute_classification_metrics(
    y_true: np.ndarray | pd.Series, probs: np.ndarray | pd.Series, threshold: float = 0.5
):
    """
    Binary metrics for make (1) vs miss (0) given P(make) and a threshold, plus
    the observed and mean predicted make rates.
    """
    probs = np.asarray(probs, dtype=float)
    preds = (probs >= threshold).astype(int)
    precision, recall, f1, _ = metrics.precision_recall_fscore_support(
        y_true, preds, average="binary", zero_division=0
    )
    try:
        roc_auc = metrics.roc_auc_score(y_true, probs)
    except ValueError:
        roc_auc = float("nan")

    return {
        "accuracy": metrics.accuracy_score(y_true, preds),
        "precision": precision,
        "recall": recall,
        "f1": f1,
        "roc_auc": roc_auc,
        "confusion_matrix": metrics.confusion_matrix(y_true, preds, labels=[0, 1]),
        "observed_make_rate": float(np.mean(y_true)),
        "predicted_make_rate": float(probs.mean()),
    }


def summarize_coefficients(coef: np.ndarray, feature_names: list[str]) -> pd.DataFrame:
    names = ["(Intercept)"] + list(feature_names)
    coef = np.asarray(coef, dtype=float)
    return pd.DataFrame({"coef": coef, "odds_ratio": np.exp(coef)}, index=names)


def mean_probability_by_label(y: np.ndarray | pd.Series, probs: np.ndarray | pd.Series) -> pd.Series:
    """
    Mean predicted probability per observed label. With any real signal the
    label-1 mean sits above the label-0 mean.
    """
    frame = pd.DataFrame(
        {"label": np.asarray(y, dtype=int), "probability": np.asarray(probs, dtype=float)}
    )
    return frame.groupby("label")["probability"].mean()
