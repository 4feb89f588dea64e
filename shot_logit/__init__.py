"""
Logistic regression from scratch on NBA shot logs.

This package contains data preparation helpers, the maximum-likelihood fit
(sigmoid, cost, gradient and a pluggable optimizer), reference GLM fits used
for validation, and the plotting helpers used by main.py.
"""

from .constants import FEATURE_COLUMNS, LABEL_COLUMN
from .data_prep import (
    build_design_matrix,
    build_prediction_grid,
    drop_missing_rows,
    load_shot_log,
)
from .logreg import (
    FitResult,
    LogisticRegressionMLE,
    cost,
    fit_logistic,
    gradient,
    gradient_descent,
    predict_logistic,
    scipy_optimizer,
    sigmoid,
)
from .metrics import compute_classification_metrics, summarize_coefficients
from .reference import compare_coefficients, fit_glm_reference, fit_sklearn_reference

__all__ = [
    "FEATURE_COLUMNS",
    "LABEL_COLUMN",
    "build_design_matrix",
    "build_prediction_grid",
    "drop_missing_rows",
    "load_shot_log",
    "FitResult",
    "LogisticRegressionMLE",
    "cost",
    "fit_logistic",
    "gradient",
    "gradient_descent",
    "predict_logistic",
    "scipy_optimizer",
    "sigmoid",
    "compute_classification_metrics",
    "summarize_coefficients",
    "compare_coefficients",
    "fit_glm_reference",
    "fit_sklearn_reference",
]
