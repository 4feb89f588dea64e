import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from shot_logit.constants import FEATURE_COLUMNS, LABEL_COLUMN

TRUE_COEF = np.array([0.2, 0.015, -0.06, 0.12])


@pytest.fixture(scope="session")
def shot_log() -> pd.DataFrame:
    """Synthetic shot log with the reference columns and a few holes."""
    rng = np.random.default_rng(7)
    n = 4000
    df = pd.DataFrame(
        {
            "SHOT_CLOCK": rng.uniform(0, 24, n),
            "SHOT_DIST": rng.uniform(0, 40, n),
            "CLOSE_DEF_DIST": rng.gamma(2.0, 2.0, n),
        }
    )
    eta = TRUE_COEF[0] + df.to_numpy() @ TRUE_COEF[1:]
    df[LABEL_COLUMN] = (rng.uniform(size=n) < 1 / (1 + np.exp(-eta))).astype(float)

    df.loc[rng.choice(n, 150, replace=False), "SHOT_CLOCK"] = np.nan
    df.loc[rng.choice(n, 20, replace=False), LABEL_COLUMN] = np.nan
    return df


@pytest.fixture(scope="session")
def shot_features(shot_log) -> pd.DataFrame:
    return shot_log[list(FEATURE_COLUMNS)]


@pytest.fixture(scope="session")
def shot_labels(shot_log) -> pd.Series:
    return shot_log[LABEL_COLUMN]


@pytest.fixture
def shot_csv(tmp_path, shot_log):
    path = tmp_path / "shot_logs.csv"
    out = shot_log.copy()
    out.insert(0, "PLAYER", "someone")
    out.to_csv(path, index=False)
    return path


@pytest.fixture(scope="session")
def true_coef() -> np.ndarray:
    return TRUE_COEF
