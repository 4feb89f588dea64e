from __future__ import annotations

"""
CLI entrypoint: fit the shot-log logistic regression from scratch, compare it
with the GLM and sklearn fits, and tabulate/plot predictions over a grid.
"""

import argparse
import logging
from pathlib import Path

from shot_logit import (
    FEATURE_COLUMNS,
    LABEL_COLUMN,
    build_prediction_grid,
    compare_coefficients,
    compute_classification_metrics,
    drop_missing_rows,
    fit_glm_reference,
    fit_logistic,
    fit_sklearn_reference,
    gradient_descent,
    load_shot_log,
    predict_logistic,
    scipy_optimizer,
    summarize_coefficients,
)
from shot_logit.constants import (
    DEFAULT_CSV_PATH,
    DEFAULT_GTOL,
    GRID_CLOSE_DEF_DISTS,
    GRID_SHOT_CLOCK,
    GRID_SHOT_DISTS,
)
from shot_logit.metrics import mean_probability_by_label
from shot_logit.plotting import grid_summary, plot_grouped_probabilities

logger = logging.getLogger(__name__)


def print_metrics(label: str, metrics: dict):
    """Print make/miss metrics from compute_classification_metrics."""
    cm = metrics["confusion_matrix"]
    print(
        f"[{label}] Acc {metrics['accuracy']:.3f} | "
        f"Prec {metrics['precision']:.3f} | Rec {metrics['recall']:.3f} | "
        f"F1 {metrics['f1']:.3f} | ROC-AUC {metrics['roc_auc']:.3f}"
    )
    print(f"    Confusion matrix [[miss->miss, miss->make], [make->miss, make->make]]: {cm.tolist()}")
    print(
        f"    Make rate: observed {metrics['observed_make_rate']:.3f}, "
        f"mean predicted {metrics['predicted_make_rate']:.3f}"
    )


def build_arg_parser():
    """CLI parser with knobs for the data file, optimizer and prediction grid."""
    parser = argparse.ArgumentParser(
        description="Logistic regression from scratch on NBA shot logs."
    )
    parser.add_argument("--csv-path", type=Path, default=DEFAULT_CSV_PATH)
    parser.add_argument(
        "--optimizer",
        choices=["bfgs", "gd"],
        default="bfgs",
        help="bfgs: scipy quasi-Newton (default); gd: fixed-step gradient descent.",
    )
    parser.add_argument("--max-iter", type=int, default=None, help="Iteration budget for the optimizer.")
    parser.add_argument("--gtol", type=float, default=DEFAULT_GTOL, help="Gradient tolerance for BFGS.")
    parser.add_argument("--lr", type=float, default=1e-3, help="Step size for gradient descent.")
    parser.add_argument(
        "--shot-clock",
        type=float,
        default=GRID_SHOT_CLOCK,
        help="SHOT_CLOCK value held fixed in the prediction grid.",
    )
    parser.add_argument("--plot-path", type=Path, default=None, help="Save the grouped bar chart here.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
    )
    return parser


def make_optimizer(args: argparse.Namespace):
    if args.optimizer == "gd":
        return gradient_descent(lr=args.lr, max_iter=args.max_iter or 100000)
    return scipy_optimizer(gtol=args.gtol, maxiter=args.max_iter)


def run(args: argparse.Namespace):
    """Fit, validate against reference fits, then predict over the grid."""
    X, y = load_shot_log(args.csv_path, FEATURE_COLUMNS, LABEL_COLUMN)

    result = fit_logistic(X, y, optimizer=make_optimizer(args))
    print(f"Rows used: {result.n_obs} (dropped {result.n_dropped} with missing values)")
    print(f"Optimizer: {result.message} after {result.n_iter} iterations, cost {result.cost:.6f}")
    print("\nCoefficients (from scratch):")
    print(summarize_coefficients(result.coef, result.feature_names))

    names = list(result.as_series().index)
    glm_coef = fit_glm_reference(X, y)
    glm_table = compare_coefficients(result.coef, glm_coef, names, decimals=3)
    print("\nComparison with statsmodels GLM (Binomial, logit):")
    print(glm_table)
    if not glm_table["matches"].all():
        logger.warning("Coefficients differ from the GLM fit beyond 3 decimals")

    sk_coef = fit_sklearn_reference(X, y)
    print("\nComparison with sklearn LogisticRegression (no penalty):")
    print(compare_coefficients(result.coef, sk_coef, names, decimals=3))

    X_fit, y_fit = drop_missing_rows(X, y)
    probs = predict_logistic(result.coef, X_fit)
    y_fit = y_fit.astype(int)
    print()
    print_metrics("In-sample, threshold 0.5", compute_classification_metrics(y_fit, probs))
    by_label = mean_probability_by_label(y_fit, probs)
    print(f"    Mean P(make) by outcome: {by_label.round(4).to_dict()}")

    grid = build_prediction_grid(
        shot_clock=args.shot_clock,
        shot_dists=GRID_SHOT_DISTS,
        close_def_dists=GRID_CLOSE_DEF_DISTS,
    )
    summary = grid_summary(grid, predict_logistic(result.coef, grid))
    print(f"\nP(make) at SHOT_CLOCK={args.shot_clock:g} (rows SHOT_DIST, columns CLOSE_DEF_DIST):")
    print(summary.round(4))

    if args.plot_path is not None:
        plot_grouped_probabilities(
            summary,
            path=args.plot_path,
            title=f"Predicted make probability, SHOT_CLOCK = {args.shot_clock:g}",
        )
        print(f"\nSaved chart to {args.plot_path}")

    return result, summary


def main(args: argparse.Namespace | None = None):
    args = args or build_arg_parser().parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="|%(levelname)s|%(name)s|%(message)s|",
    )
    return run(args)


if __name__ == "__main__":
    main()
