from __future__ import annotations

"""
Column names and defaults shared by the CLI, the plotting script and the tests.
"""

from pathlib import Path

DEFAULT_CSV_PATH = Path("data/shot_logs.csv")

LABEL_COLUMN = "FGM"
FEATURE_COLUMNS = ("SHOT_CLOCK", "SHOT_DIST", "CLOSE_DEF_DIST")

# Prediction grid: shot clock held fixed, distance bins x defender distance groups
GRID_SHOT_CLOCK = 10.0
GRID_SHOT_DISTS = (2.5, 7.5, 12.5, 17.5, 22.5, 27.5, 32.5, 37.5)
GRID_CLOSE_DEF_DISTS = (1.0, 3.0, 5.0, 7.0)

DEFAULT_METHOD = "BFGS"
DEFAULT_GTOL = 1e-6
