"""Checks against the published red wine dataset (skipped when the CSV is absent)."""

import pandas as pd
import pytest

from wine_eda.analysis import ModelRegistry, cumulative_predictor_sets
from wine_eda.data import RedWineDataset, WQCol
from wine_eda.report.config import DEFAULT_NESTED_INCREMENTS


def test_shape_and_quality_levels(red_wine_dataset) -> None:
    """1599 wines, twelve columns, quality observed from 3 to 8."""
    assert red_wine_dataset.df.shape == (1599, 12)
    assert red_wine_dataset.quality_levels == [3, 4, 5, 6, 7, 8]
    assert red_wine_dataset.df[WQCol.TARGET].cat.ordered


def test_values_within_plausible_ranges(red_wine_dataset) -> None:
    """No value falls outside the documented ranges and nothing is missing."""
    assert red_wine_dataset.range_violations().empty
    assert not red_wine_dataset.df.isna().any().any()


def test_citric_acid_zeros(red_wine_dataset) -> None:
    """Citric acid is exactly zero in 132 rows."""
    zeros = red_wine_dataset.make_summary_analyzer().fit().result().zero_counts
    assert zeros[WQCol.CITRIC_ACID] == 132


def test_nested_model_r2(red_wine_dataset) -> None:
    """Volatile acidity alone, then seven and eleven predictors."""
    registry = ModelRegistry()
    results = registry.fit_nested(red_wine_dataset.df_numeric, cumulative_predictor_sets(DEFAULT_NESTED_INCREMENTS))

    assert [res.r2 for res in results] == pytest.approx([0.153, 0.350, 0.361], abs=0.005)
    assert results[0].coefficients[WQCol.VOLATILE_ACIDITY] < 0


def test_loading_is_deterministic(red_wine_dataset) -> None:
    """Reloading the file gives an identical table, summary and correlation matrix."""
    reloaded = RedWineDataset.from_csv()
    pd.testing.assert_frame_equal(reloaded.df, red_wine_dataset.df)

    pd.testing.assert_frame_equal(
        reloaded.make_summary_analyzer().fit().result().describe,
        red_wine_dataset.make_summary_analyzer().fit().result().describe,
    )

    matrix = red_wine_dataset.make_correlation_analyzer(include_target=False).fit().result().matrix
    assert matrix.shape == (11, 11)
    pd.testing.assert_frame_equal(reloaded.make_correlation_analyzer(include_target=False).fit().result().matrix, matrix)
