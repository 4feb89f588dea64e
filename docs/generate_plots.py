import sys
from pathlib import Path

# Add repo root to sys.path
sys.path.append(str(Path(__file__).resolve().parents[1]))

import matplotlib

matplotlib.use("Agg")

from shot_logit import (
    FEATURE_COLUMNS,
    LABEL_COLUMN,
    build_prediction_grid,
    fit_logistic,
    load_shot_log,
    predict_logistic,
)
from shot_logit.constants import GRID_SHOT_CLOCK
from shot_logit.plotting import grid_summary, plot_grouped_probabilities

# Configuration
CSV_PATH = Path(__file__).resolve().parents[1] / "data" / "shot_logs.csv"
OUT_PATH = Path("shot_probability_grid.png")


def run_shot_grid():
    print("Generating grouped bar chart of P(make) over the shot grid...")
    X, y = load_shot_log(CSV_PATH, FEATURE_COLUMNS, LABEL_COLUMN)
    result = fit_logistic(X, y)

    grid = build_prediction_grid(shot_clock=GRID_SHOT_CLOCK)
    summary = grid_summary(grid, predict_logistic(result.coef, grid))
    plot_grouped_probabilities(
        summary,
        path=OUT_PATH,
        title=f"Predicted make probability, SHOT_CLOCK = {GRID_SHOT_CLOCK:g}",
    )
    print(summary.round(4))


if __name__ == "__main__":
    run_shot_grid()
    print(f"Saved {OUT_PATH}")
