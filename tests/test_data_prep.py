import numpy as np
import pandas as pd
import pytest

from shot_logit.constants import FEATURE_COLUMNS, GRID_CLOSE_DEF_DISTS, GRID_SHOT_DISTS
from shot_logit.data_prep import (
    build_design_matrix,
    build_prediction_grid,
    coerce_labels,
    drop_missing_rows,
    load_shot_log,
)


def test_load_shot_log_treats_bad_cells_as_missing(tmp_path):
    path = tmp_path / "shots.csv"
    path.write_text(
        "GAME_ID,FGM,SHOT_CLOCK,SHOT_DIST,CLOSE_DEF_DIST\n"
        "1,1,10.5,7.7,1.3\n"
        "2,0,,22.0,4.1\n"
        "3,1,3.2,oops,0.8\n"
        "4,0,18.0,25.1,6.0\n"
    )
    X, y = load_shot_log(path)

    assert list(X.columns) == list(FEATURE_COLUMNS)
    assert y.tolist() == [1, 0, 1, 0]
    assert np.isnan(X.loc[1, "SHOT_CLOCK"])
    assert np.isnan(X.loc[2, "SHOT_DIST"])
    assert X.loc[3, "CLOSE_DEF_DIST"] == pytest.approx(6.0)


def test_load_shot_log_missing_column(tmp_path):
    path = tmp_path / "shots.csv"
    path.write_text("FGM,SHOT_DIST\n1,3.0\n")
    with pytest.raises(ValueError, match="SHOT_CLOCK"):
        load_shot_log(path)


def test_drop_missing_rows_is_synchronized(caplog):
    X = pd.DataFrame({"a": [1.0, np.nan, 3.0, 4.0], "b": [1.0, 2.0, 3.0, np.nan]})
    y = pd.Series([1, 0, np.nan, 1], index=[10, 11, 12, 13])

    X_kept, y_kept = drop_missing_rows(X, y)

    assert list(X_kept.index) == [0]
    assert list(y_kept.index) == [0]
    assert y_kept.iloc[0] == 1
    assert "Dropped 3 of 4 rows" in caplog.text


def test_drop_missing_rows_counts_match(shot_features, shot_labels):
    X_kept, y_kept = drop_missing_rows(shot_features, shot_labels)
    incomplete = (shot_features.isna().any(axis=1) | shot_labels.isna()).sum()

    assert len(X_kept) == len(shot_features) - incomplete
    assert X_kept.notna().all().all()
    assert y_kept.notna().all()
    assert X_kept.index.equals(y_kept.index)


def test_drop_missing_rows_length_mismatch():
    with pytest.raises(ValueError, match="differ in length"):
        drop_missing_rows(pd.DataFrame({"a": [1.0, 2.0]}), [1])


def test_drop_missing_rows_without_label(caplog):
    X_kept, y_kept = drop_missing_rows(pd.DataFrame({"a": [1.0, 2.0]}))
    assert y_kept is None
    assert len(X_kept) == 2
    assert caplog.text == ""


def test_build_design_matrix_puts_bias_first():
    X = pd.DataFrame({"b": [5.0, 6.0], "a": [7.0, 8.0]})
    design = build_design_matrix(X)
    np.testing.assert_array_equal(design, [[1.0, 5.0, 7.0], [1.0, 6.0, 8.0]])


def test_build_design_matrix_single_feature_vector():
    assert build_design_matrix(np.array([1.0, 2.0, 3.0])).shape == (3, 2)


def test_coerce_labels():
    np.testing.assert_array_equal(coerce_labels([True, False, 1]), [1.0, 0.0, 1.0])
    with pytest.raises(ValueError, match="0 or 1"):
        coerce_labels([0, 1, 2])


def test_build_prediction_grid_layout():
    grid = build_prediction_grid(shot_clock=10)

    assert list(grid.columns) == list(FEATURE_COLUMNS)
    assert len(grid) == len(GRID_SHOT_DISTS) * len(GRID_CLOSE_DEF_DISTS)
    assert (grid["SHOT_CLOCK"] == 10).all()
    assert sorted(grid["SHOT_DIST"].unique()) == list(GRID_SHOT_DISTS)
    assert sorted(grid["CLOSE_DEF_DIST"].unique()) == list(GRID_CLOSE_DEF_DISTS)


def test_build_prediction_grid_uses_given_column_names():
    grid = build_prediction_grid(
        shot_clock=5, shot_dists=(1.0, 2.0), close_def_dists=(3.0,), feature_columns=("clock", "dist", "defender")
    )

    assert list(grid.columns) == ["clock", "dist", "defender"]
    assert grid.notna().all().all()
    assert grid["dist"].tolist() == [1.0, 2.0]
    assert (grid["defender"] == 3.0).all()


def test_build_prediction_grid_needs_three_columns():
    with pytest.raises(ValueError, match="defender-distance"):
        build_prediction_grid(feature_columns=("SHOT_DIST", "CLOSE_DEF_DIST"))
