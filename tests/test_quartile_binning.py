"""Tests for quartile bucketing."""

import numpy as np
import pandas as pd
import pytest

from wine_eda.analysis.quartile_binning import QuartileBinning, add_quartile_column, quartile_bins, quartile_column_name
from wine_eda.data import WQCol


@pytest.fixture
def density() -> pd.Series:
    """Skewed continuous column with ties at the minimum."""
    rng = np.random.default_rng(11)
    values = np.concatenate([[0.990, 0.990], 0.990 + rng.gamma(2.0, 0.001, 98)])
    return pd.Series(values, name="density")


class TestQuartileBins:
    """Bin count, edges and coverage."""

    def test_four_ordered_bins(self, density: pd.Series) -> None:
        """Exactly four ordered categories named after the column."""
        binning = quartile_bins(density)
        assert isinstance(binning, QuartileBinning)
        assert binning.codes.cat.ordered
        assert len(binning.codes.cat.categories) == 4
        assert binning.name == "density_quartiles"
        assert binning.column == "density"

    def test_edges_non_decreasing_and_cover_range(self, density: pd.Series) -> None:
        """Edges span [min, max] at the empirical quartiles."""
        edges = quartile_bins(density).edges
        assert len(edges) == 5
        assert np.all(np.diff(edges) >= 0)
        assert edges[0] == density.min()
        assert edges[-1] == density.max()
        np.testing.assert_allclose(edges[1:4], density.quantile([0.25, 0.5, 0.75]).to_numpy())

    def test_every_value_assigned(self, density: pd.Series) -> None:
        """The minimum lands in the lowest bin and nothing is left unbinned."""
        binning = quartile_bins(density)
        assert not binning.codes.isna().any()
        assert (binning.codes[density == density.min()] == binning.labels[0]).all()
        assert (binning.codes[density == density.max()] == binning.labels[-1]).all()

    def test_roughly_equal_frequency(self, density: pd.Series) -> None:
        """Each bin holds about a quarter of the rows."""
        counts = quartile_bins(density).counts()
        assert counts.sum() == len(density)
        assert counts.between(20, 30).all()

    def test_default_labels(self) -> None:
        """Default labels carry the bin number and bounds."""
        binning = quartile_bins(pd.Series([1.0, 2.0, 3.0, 4.0, 5.0], name="ph"))
        assert binning.labels[0] == "Q1 [1, 2]"
        assert binning.labels[1].startswith("Q2 (")

    def test_custom_labels(self, density: pd.Series) -> None:
        """Custom labels replace the defaults; a wrong count is rejected."""
        binning = quartile_bins(density, labels=["low", "mid-low", "mid-high", "high"])
        assert binning.codes.cat.categories.tolist() == ["low", "mid-low", "mid-high", "high"]
        with pytest.raises(ValueError, match="labels"):
            quartile_bins(density, labels=["low", "high"])

    def test_tied_quality_scores_keep_four_bins(self) -> None:
        """Coinciding edges still give four ordered bins, one of them empty."""
        quality = pd.Series([3] * 10 + [5] * 30 + [6] * 50 + [8] * 10, name="quality")
        binning = quartile_bins(quality)

        assert binning.edges.tolist() == [3.0, 5.0, 6.0, 6.0, 8.0]
        assert len(binning.codes.cat.categories) == 4
        assert binning.counts().tolist() == [40, 50, 0, 10]
        assert not binning.codes.isna().any()

    def test_zero_inflated_column(self) -> None:
        """A column with a quarter of its rows at zero puts all zeros in the lowest bin."""
        values = pd.Series([0.0] * 30 + list(np.linspace(0.1, 1.0, 70)), name="citric_acid")
        binning = quartile_bins(values)

        assert binning.edges[0] == binning.edges[1] == 0.0
        assert np.all(np.diff(binning.edges) >= 0)
        assert (binning.codes[values == 0.0] == binning.labels[0]).all()
        assert binning.counts().iloc[0] == 30
        assert binning.counts().sum() == len(values)

    def test_dataset_quality_column(self, wine_dataset) -> None:
        """The integer quality score of the loaded table bins into four categories."""
        binning = quartile_bins(wine_dataset.df_numeric[WQCol.TARGET])
        assert binning.name == "quality_quartiles"
        assert len(binning.codes.cat.categories) == 4
        assert binning.counts().sum() == wine_dataset.n_rows
        assert not binning.codes.isna().any()

    def test_missing_values_raise(self) -> None:
        """NaN values are rejected."""
        with pytest.raises(ValueError, match="missing"):
            quartile_bins(pd.Series([1.0, np.nan, 3.0, 4.0, 5.0], name="alcohol"))


class TestAddQuartileColumn:
    """Derived columns are added to copies only."""

    def test_source_frame_not_mutated(self, wine_dataset) -> None:
        """The loaded table keeps its columns."""
        before = wine_dataset.df.columns.tolist()
        extended, binning = add_quartile_column(wine_dataset.df, WQCol.DENSITY)

        assert wine_dataset.df.columns.tolist() == before
        assert extended is not wine_dataset.df
        assert binning.name in extended.columns
        assert len(extended) == wine_dataset.n_rows

    def test_named_after_binned_attribute(self, wine_dataset) -> None:
        """Binning density gives density_quartiles, binning pH gives ph_quartiles."""
        df, _ = add_quartile_column(wine_dataset.df, WQCol.DENSITY)
        df, _ = add_quartile_column(df, WQCol.PH)
        assert {"density_quartiles", "ph_quartiles"} <= set(df.columns)
        assert quartile_column_name(WQCol.PH) == "ph_quartiles"

    def test_unknown_column_raises(self, wine_dataset) -> None:
        """Unknown columns raise KeyError."""
        with pytest.raises(KeyError):
            add_quartile_column(wine_dataset.df, "sweetness")
