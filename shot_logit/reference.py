from __future__ import annotations

"""
Independent fits used to validate the from-scratch coefficients: a statsmodels
Binomial GLM (logit link) and an unpenalized scikit-learn LogisticRegression.
"""

import numpy as np
import pandas as pd
import statsmodels.api as sm
from sklearn.linear_model import LogisticRegression

from .data_prep import build_design_matrix, coerce_labels, drop_missing_rows


def fit_glm_reference(X, y) -> np.ndarray:
    """GLM coefficients on the same rows and design matrix as fit_logistic (bias first)."""
    X_kept, y_kept = drop_missing_rows(X, y)
    model = sm.GLM(
        coerce_labels(y_kept), build_design_matrix(X_kept), family=sm.families.Binomial()
    )
    return np.asarray(model.fit().params, dtype=float)


def fit_sklearn_reference(X, y, max_iter: int = 10000) -> np.ndarray:
    """Unpenalized sklearn fit, returned as [intercept, coef...]."""
    X_kept, y_kept = drop_missing_rows(X, y)
    lr = LogisticRegression(penalty=None, max_iter=max_iter, tol=1e-10)
    lr.fit(X_kept.to_numpy(dtype=float), coerce_labels(y_kept))
    return np.concatenate((lr.intercept_, lr.coef_[0]))


def compare_coefficients(
    ours: np.ndarray,
    reference: np.ndarray,
    names: list[str],
    decimals: int = 3,
) -> pd.DataFrame:
    """
    Side-by-side table; a row matches when both agree to `decimals` places.
    """
    ours = np.asarray(ours, dtype=float)
    reference = np.asarray(reference, dtype=float)
    if ours.shape != reference.shape or len(names) != len(ours):
        raise ValueError(
            f"Cannot compare {len(ours)} coefficients with {len(reference)} ({len(names)} names)"
        )

    abs_diff = np.abs(ours - reference)
    return pd.DataFrame(
        {
            "ours": ours,
            "reference": reference,
            "abs_diff": abs_diff,
            "same_sign": np.sign(ours) == np.sign(reference),
            "matches": abs_diff < 0.5 * 10.0 ** (-decimals),
        },
        index=names,
    )
