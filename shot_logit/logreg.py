from __future__ import annotations

"""
Logistic regression by maximum likelihood: sigmoid, cost and analytic gradient,
handed to a generic optimizer. Step size and stopping rules belong to the
optimizer, not to this module.
"""

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np
import pandas as pd
from scipy.optimize import minimize

from .constants import DEFAULT_GTOL, DEFAULT_METHOD
from .data_prep import build_design_matrix, coerce_labels, drop_missing_rows

logger = logging.getLogger(__name__)


def sigmoid(z):
    """Inverse logit, elementwise. No clamping."""
    return 1.0 / (1.0 + np.exp(-z))


def cost(theta: np.ndarray, X: np.ndarray, y: np.ndarray) -> float:
    """Mean negative log-likelihood. Non-finite once any h hits exactly 0 or 1."""
    h = sigmoid(X @ theta)
    return float(-(y @ np.log(h) + (1 - y) @ np.log(1 - h)) / len(y))


def gradient(theta: np.ndarray, X: np.ndarray, y: np.ndarray) -> np.ndarray:
    h = sigmoid(X @ theta)
    return X.T @ (h - y) / len(y)


@dataclass
class OptimizerResult:
    x: np.ndarray
    success: bool
    message: str
    nit: int


# (objective, gradient, x0, args) -> OptimizerResult
Optimizer = Callable[[Callable, Callable, np.ndarray, tuple], OptimizerResult]


def scipy_optimizer(
    method: str = DEFAULT_METHOD,
    gtol: float = DEFAULT_GTOL,
    maxiter: int | None = None,
) -> Optimizer:
    """Wrap scipy.optimize.minimize as an Optimizer."""
    options: dict = {"gtol": gtol}
    if maxiter is not None:
        options["maxiter"] = maxiter

    def _run(objective, jac, x0, args):
        res = minimize(objective, x0, args=args, jac=jac, method=method, options=options)
        return OptimizerResult(
            x=np.asarray(res.x, dtype=float),
            success=bool(res.success),
            message=str(res.message),
            nit=int(res.get("nit", 0)),
        )

    return _run


def gradient_descent(lr: float = 0.1, max_iter: int = 5000, tol: float = 1e-6) -> Optimizer:
    """
    Plain full-batch gradient descent with a fixed step. Slow on unscaled
    features, but useful for seeing what the quasi-Newton solver saves you.
    """

    def _run(objective, jac, x0, args):
        theta = np.array(x0, dtype=float)
        for step in range(1, max_iter + 1):
            new_theta = theta - lr * jac(theta, *args)
            if np.linalg.norm(new_theta - theta) < tol:
                return OptimizerResult(new_theta, True, f"Converged after {step} steps", step)
            theta = new_theta

            if step % 500 == 0:
                logger.debug("[GD] step=%d, loss=%.4f", step, objective(theta, *args))

        return OptimizerResult(theta, False, "Maximum number of iterations reached", max_iter)

    return _run


@dataclass(frozen=True)
class FitResult:
    """Fitted coefficients (bias first) plus what the optimizer reported."""

    coef: np.ndarray
    feature_names: list[str]
    n_obs: int
    n_dropped: int
    converged: bool
    message: str
    n_iter: int
    cost: float

    def as_series(self) -> pd.Series:
        return pd.Series(self.coef, index=["(Intercept)"] + self.feature_names)


def fit_logistic(X, y, optimizer: Optimizer | None = None) -> FitResult:
    """
    Fit coefficients by minimizing cost() from a zero start.

    Rows with a missing feature or label are dropped in one pass. Whatever the
    optimizer returns is accepted; non-convergence and non-finite values are
    logged as warnings, never raised.
    """
    optimizer = optimizer or scipy_optimizer()

    n_total = len(X)
    X_kept, y_kept = drop_missing_rows(X, y)
    y_arr = coerce_labels(y_kept)
    X_design = build_design_matrix(X_kept)
    theta0 = np.zeros(X_design.shape[1])

    evals = {"total": 0, "nonfinite": 0}

    def objective(theta, X, y):
        value = cost(theta, X, y)
        evals["total"] += 1
        if not np.isfinite(value):
            evals["nonfinite"] += 1
        return value

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        result = optimizer(objective, gradient, theta0, (X_design, y_arr))
        final_cost = cost(result.x, X_design, y_arr)

    if evals["nonfinite"]:
        logger.warning(
            "Cost was non-finite at %d of %d evaluations", evals["nonfinite"], evals["total"]
        )
    if not result.success:
        logger.warning("Optimizer did not converge after %d iterations: %s", result.nit, result.message)
    if not np.all(np.isfinite(result.x)):
        logger.warning("Fitted coefficients contain non-finite values: %s", result.x)
    if not np.isfinite(final_cost):
        logger.warning("Cost at the fitted coefficients is non-finite (%s)", final_cost)

    return FitResult(
        coef=result.x,
        feature_names=[str(c) for c in X_kept.columns],
        n_obs=len(y_arr),
        n_dropped=n_total - len(X_kept),
        converged=result.success,
        message=result.message,
        n_iter=result.nit,
        cost=final_cost,
    )


def predict_logistic(coef: np.ndarray, X) -> pd.Series:
    """
    P(y=1) for each complete row of X, indexed by the rows that were kept.
    """
    X_kept, _ = drop_missing_rows(X)
    X_design = build_design_matrix(X_kept)
    coef = np.asarray(coef, dtype=float)
    if X_design.shape[1] != len(coef):
        raise ValueError(
            f"Got {len(coef)} coefficients for {X_design.shape[1] - 1} features plus bias"
        )

    with np.errstate(over="ignore"):
        probs = sigmoid(X_design @ coef)
    if not np.all(np.isfinite(probs)):
        logger.warning("Predicted probabilities contain non-finite values")
    return pd.Series(probs, index=X_kept.index, name="probability")


class LogisticRegressionMLE:
    """
    Estimator-style wrapper around fit_logistic/predict_logistic. No scaling,
    no penalty; coefficients are in the units of the input columns.
    """

    def __init__(self, optimizer: Optimizer | None = None):
        self.optimizer = optimizer
        self.result_: FitResult | None = None
        self.weights_: np.ndarray | None = None
        self.n_iter_: int = 0
        self.converged_: bool = False

    def fit(self, X, y):
        self.result_ = fit_logistic(X, y, optimizer=self.optimizer)
        self.weights_ = self.result_.coef
        self.intercept_ = float(self.weights_[0])
        self.coef_ = self.weights_[1:]
        self.n_iter_ = self.result_.n_iter
        self.converged_ = self.result_.converged
        return self

    def predict_proba(self, X) -> pd.Series:
        """Return P(y=1) for each complete row in X."""
        if self.weights_ is None:
            raise RuntimeError("Model is not fitted.")
        return predict_logistic(self.weights_, X)

    def predict(self, X, threshold: float = 0.5) -> pd.Series:
        """Binary predictions using the provided threshold."""
        return (self.predict_proba(X) >= threshold).astype(int)
