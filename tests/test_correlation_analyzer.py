"""Tests for CorrelationAnalyzer and pearson_r."""

import numpy as np
import pandas as pd
import pytest

from wine_eda.analysis.correlation_analyzer import CorrelationAnalyzer, CorrelationResult, PearsonResult, pearson_r
from wine_eda.data import WQCol
from wine_eda.data.views import DatasetView


class TestCorrelationAnalyzer:
    """Test CorrelationAnalyzer functionality."""

    @pytest.fixture
    def sample_view(self) -> DatasetView:
        """Create a sample DatasetView for testing."""
        data = pd.DataFrame(
            {
                "fixed_acidity": [1.0, 2.0, 3.0, 4.0, 5.0],
                "density": [2.0, 4.0, 6.0, 8.0, 10.0],  # Perfect positive correlation
                "ph": [5.0, 4.0, 3.0, 2.0, 1.0],  # Perfect negative correlation with fixed_acidity
                "quality": [3, 5, 4, 6, 7],
            },
        )
        return DatasetView(
            df=data,
            pretty_by_col={
                "fixed_acidity": "Fixed Acidity",
                "density": "Density",
                "ph": "pH",
                "quality": "Quality",
            },
            numeric_cols=["fixed_acidity", "density", "ph", "quality"],
            target_col="quality",
        )

    @pytest.fixture
    def view_without_target(self) -> DatasetView:
        """Create a DatasetView without a target column."""
        data = pd.DataFrame(
            {
                "alcohol": [9.0, 10.0, 11.0, 12.0],
                "density": [0.999, 0.997, 0.996, 0.993],
            },
        )
        return DatasetView(
            df=data,
            pretty_by_col={"alcohol": "Alcohol", "density": "Density"},
            numeric_cols=["alcohol", "density"],
            target_col=None,
        )

    def test_get_correlation_matrix(self, sample_view: DatasetView) -> None:
        """Test getting correlation matrix."""
        corr_matrix = CorrelationAnalyzer(sample_view).get_correlation_matrix()

        assert corr_matrix.shape == (4, 4)
        assert np.allclose(np.diag(corr_matrix), 1.0)
        assert np.allclose(corr_matrix, corr_matrix.T)
        assert np.isclose(corr_matrix.loc["fixed_acidity", "density"], 1.0)
        assert np.isclose(corr_matrix.loc["fixed_acidity", "ph"], -1.0)

    def test_get_top_correlated_pairs(self, sample_view: DatasetView) -> None:
        """Pairs come from the upper triangle, strongest first."""
        top_pairs = CorrelationAnalyzer(sample_view).get_top_correlated_pairs(n=3)

        assert len(top_pairs) == 3
        assert {"feature_a", "feature_b", "correlation", "abs_correlation", "pair"} <= set(top_pairs.columns)
        assert np.isclose(top_pairs.iloc[0]["abs_correlation"], 1.0)
        assert top_pairs["abs_correlation"].is_monotonic_decreasing
        assert not (top_pairs["feature_a"] == top_pairs["feature_b"]).any()

    def test_all_pairs_are_unique(self, sample_view: DatasetView) -> None:
        """Four columns give six unordered pairs."""
        pairs = CorrelationAnalyzer(sample_view).get_top_correlated_pairs(n=100)
        assert len(pairs) == 6
        assert len({frozenset(p) for p in pairs[["feature_a", "feature_b"]].itertuples(index=False)}) == 6

    def test_get_target_correlations(self, sample_view: DatasetView) -> None:
        """Test getting correlations with target."""
        target_corrs = CorrelationAnalyzer(sample_view).get_target_correlations()

        assert len(target_corrs) == 3
        assert "quality" not in target_corrs["feature"].tolist()
        assert target_corrs["correlation"].is_monotonic_decreasing

    def test_get_target_correlations_no_target(self, view_without_target: DatasetView) -> None:
        """Test get_target_correlations raises error without target."""
        analyzer = CorrelationAnalyzer(view_without_target)

        with pytest.raises(ValueError, match=r"Dataset view has no target column"):
            analyzer.get_target_correlations()

    def test_result_before_fit_raises(self, sample_view: DatasetView) -> None:
        """result() requires fit()."""
        with pytest.raises(ValueError, match="fit"):
            CorrelationAnalyzer(sample_view).result()

    def test_fit_returns_self_and_result(self, sample_view: DatasetView) -> None:
        """fit() returns the analyzer; result() packages all outputs."""
        analyzer = CorrelationAnalyzer(sample_view)
        fitted = analyzer.fit()
        result = analyzer.result()

        assert fitted is analyzer
        assert isinstance(result, CorrelationResult)
        assert result.target_correlations is not None
        assert result.matrix_pretty().loc["pH", "Fixed Acidity"] == pytest.approx(-1.0)

    def test_compute_without_target(self, view_without_target: DatasetView) -> None:
        """Test compute works without target column."""
        result = CorrelationAnalyzer(view_without_target).fit().result()

        assert isinstance(result, CorrelationResult)
        assert result.matrix.shape == (2, 2)
        assert result.target_correlations is None

    def test_constant_column_yields_nan(self) -> None:
        """Zero-variance columns give NaN correlations instead of raising."""
        data = pd.DataFrame({"alcohol": [9.0, 10.0, 11.0], "chlorides": [0.08, 0.08, 0.08]})
        view = DatasetView(df=data, pretty_by_col={}, numeric_cols=["alcohol", "chlorides"])

        matrix = CorrelationAnalyzer(view).get_correlation_matrix()
        assert np.isnan(matrix.loc["alcohol", "chlorides"])
        assert np.isnan(matrix.loc["chlorides", "chlorides"])
        assert matrix.loc["alcohol", "alcohol"] == pytest.approx(1.0)

    def test_correlation_with_missing_values(self) -> None:
        """Correlations use pairwise complete observations."""
        data = pd.DataFrame(
            {
                "alcohol": [1.0, 2.0, np.nan, 4.0, 5.0],
                "sulphates": [2.0, 4.0, 6.0, 8.0, 10.0],
            },
        )
        view = DatasetView(df=data, pretty_by_col={}, numeric_cols=["alcohol", "sulphates"])

        result = CorrelationAnalyzer(view).fit().result()
        assert not result.matrix.isna().all().all()


class TestPearsonR:
    """Tests for the pairwise Pearson helper."""

    def test_perfect_correlation(self) -> None:
        """A linear relationship gives r = 1."""
        res = pearson_r(pd.Series([1.0, 2.0, 3.0, 4.0]), pd.Series([2.0, 4.0, 6.0, 8.0]))
        assert isinstance(res, PearsonResult)
        assert res.r == pytest.approx(1.0)
        assert res.n == 4
        assert str(res) == "r = 1.000"

    def test_matches_numpy(self) -> None:
        """Agrees with numpy's correlation coefficient."""
        rng = np.random.default_rng(3)
        x = pd.Series(rng.normal(size=50))
        y = pd.Series(0.5 * x + rng.normal(size=50))
        assert pearson_r(x, y).r == pytest.approx(np.corrcoef(x, y)[0, 1])
        assert 0 <= pearson_r(x, y).p_value <= 1

    def test_constant_input_is_nan(self) -> None:
        """Constant input has no defined correlation."""
        res = pearson_r(pd.Series([1.0, 2.0, 3.0]), pd.Series([5.0, 5.0, 5.0]))
        assert np.isnan(res.r)
        assert np.isnan(res.p_value)
        assert str(res) == "r = nan"

    def test_missing_values_dropped_pairwise(self) -> None:
        """Rows with a NaN in either series are ignored."""
        res = pearson_r(pd.Series([1.0, 2.0, np.nan, 4.0]), pd.Series([1.0, 2.0, 3.0, np.nan]))
        assert res.n == 2


def test_correlation_matrix_on_dataset_subsets(wine_dataset) -> None:
    """The matrix is symmetric with unit diagonal for any column subset."""
    for columns in (WQCol.input_columns(), [WQCol.ALCOHOL, WQCol.DENSITY, WQCol.PH], WQCol.numeric_columns()):
        matrix = wine_dataset.make_correlation_analyzer(columns=columns).fit().result().matrix
        assert matrix.shape == (len(columns), len(columns))
        np.testing.assert_allclose(matrix.to_numpy(), matrix.to_numpy().T)
        np.testing.assert_allclose(np.diag(matrix), 1.0)
        assert ((matrix >= -1) & (matrix <= 1)).all().all()
