"""Tests for OLS helpers and the nested model registry."""

import numpy as np
import pandas as pd
import pytest

from wine_eda.analysis.model_registry import ModelRegistry, cumulative_predictor_sets
from wine_eda.analysis.ols_helper import (
    MetricsResult,
    compare_models,
    compute_vif,
    fit_ols_design,
    fit_ols_formula,
    fit_ols_predictors,
)
from wine_eda.data import WQCol


@pytest.fixture(scope="module")
def wine_df(wine_dataset) -> pd.DataFrame:
    """Numeric table with integer quality."""
    return wine_dataset.df_numeric


@pytest.fixture(scope="module")
def nested_sets() -> list[list[str]]:
    """The three documented nested predictor sets."""
    return cumulative_predictor_sets(
        [
            [WQCol.VOLATILE_ACIDITY],
            [WQCol.CITRIC_ACID, WQCol.SULPHATES, WQCol.ALCOHOL, WQCol.CHLORIDES, WQCol.DENSITY, WQCol.PH],
            [WQCol.FIXED_ACIDITY, WQCol.RESIDUAL_SUGAR, WQCol.FREE_SULFUR_DIOXIDE, WQCol.TOTAL_SULFUR_DIOXIDE],
        ],
    )


class TestFitHelpers:
    """Single-model fitting."""

    def test_fit_ols_formula(self, wine_df) -> None:
        """Formula fit packages metrics, residuals and VIFs."""
        result = fit_ols_formula(wine_df, rhs=f"{WQCol.ALCOHOL} + {WQCol.VOLATILE_ACIDITY}", cv_folds=5)

        assert isinstance(result.metrics, MetricsResult)
        assert 0 < result.r2 < 1
        assert result.adj_r2 <= result.r2
        assert result.metrics.cv_scores is not None
        assert len(result.metrics.cv_scores) == 5
        assert result.predictions.shape[0] == len(wine_df)
        np.testing.assert_allclose(result.residuals + result.fitted, result.y)
        assert set(result.vif.index) == {WQCol.ALCOHOL, WQCol.VOLATILE_ACIDITY}
        assert "cv" in repr(result.metrics).lower()

    def test_quality_effects_have_expected_sign(self, wine_df) -> None:
        """Alcohol raises quality and volatile acidity lowers it in the synthetic table."""
        coefs = fit_ols_predictors(wine_df, [WQCol.ALCOHOL, WQCol.VOLATILE_ACIDITY]).coefficients
        assert coefs[WQCol.ALCOHOL] > 0
        assert coefs[WQCol.VOLATILE_ACIDITY] < 0

    def test_coefficients_ordered_intercept_first(self, wine_df) -> None:
        """Coefficients follow the predictor order after the intercept."""
        result = fit_ols_predictors(wine_df, [WQCol.SULPHATES, WQCol.ALCOHOL])
        assert result.coefficients.index.tolist() == ["Intercept", WQCol.SULPHATES, WQCol.ALCOHOL]
        assert result.predictors == [WQCol.SULPHATES, WQCol.ALCOHOL]
        table = result.coefficient_table()
        assert list(table.columns) == ["coef", "std_err", "t", "p_value"]

    def test_formula_and_design_agree(self, wine_df) -> None:
        """Matrix and formula helpers yield the same fit."""
        df = wine_df[[WQCol.TARGET, WQCol.ALCOHOL, WQCol.DENSITY]]

        model_matrix = fit_ols_design(df, target_col=WQCol.TARGET)
        model_formula = fit_ols_formula(df, rhs=f"{WQCol.ALCOHOL} + {WQCol.DENSITY}")

        assert np.isclose(model_matrix.r2, model_formula.r2, atol=1e-8)
        assert model_matrix.model.params.index.tolist()[0] in {"const", "Intercept"}

    def test_r2_matches_definition(self, wine_df) -> None:
        """R² equals 1 - SS_res / SS_tot."""
        result = fit_ols_predictors(wine_df, [WQCol.ALCOHOL])
        y = wine_df[WQCol.TARGET].astype(float)
        expected = 1 - (result.residuals**2).sum() / ((y - y.mean()) ** 2).sum()
        assert result.r2 == pytest.approx(expected)

    def test_empty_predictors_raise(self, wine_df) -> None:
        """At least one predictor is needed."""
        with pytest.raises(ValueError, match="predictor"):
            fit_ols_predictors(wine_df, [])

    def test_unknown_predictor_raises(self, wine_df) -> None:
        """Unknown predictor names raise KeyError."""
        with pytest.raises(KeyError, match="sweetness"):
            fit_ols_predictors(wine_df, [WQCol.ALCOHOL, "sweetness"])

    def test_categorical_target_rejected(self, wine_dataset) -> None:
        """Fitting on the categorical table is refused with a hint."""
        with pytest.raises(ValueError, match="numeric"):
            fit_ols_predictors(wine_dataset.df, [WQCol.ALCOHOL])

    def test_vif_of_single_predictor(self) -> None:
        """A lone regressor has VIF 1."""
        design = pd.DataFrame({"const": 1.0, "alcohol": [9.0, 10.0, 11.0, 12.5]})
        assert compute_vif(design).to_dict() == {"alcohol": 1.0}

    def test_vif_detects_collinearity(self) -> None:
        """Nearly collinear regressors get large VIFs."""
        rng = np.random.default_rng(0)
        x = rng.normal(size=200)
        design = pd.DataFrame({"a": x, "b": x + rng.normal(scale=0.05, size=200), "c": rng.normal(size=200)})
        vif = compute_vif(design)
        assert vif["a"] > 10
        assert vif["c"] < 2

    def test_compare_models(self, wine_df) -> None:
        """Comparison table lists every model in insertion order."""
        models = {
            "small": fit_ols_predictors(wine_df, [WQCol.ALCOHOL]),
            "large": fit_ols_predictors(wine_df, [WQCol.ALCOHOL, WQCol.SULPHATES]),
        }
        table = compare_models(models)
        assert table.index.tolist() == ["small", "large"]
        assert table.loc["large", "n_predictors"] == 2


class TestModelRegistry:
    """Nested model fitting and comparison."""

    def test_cumulative_predictor_sets(self, nested_sets) -> None:
        """Increments accumulate into nested lists."""
        assert [len(s) for s in nested_sets] == [1, 7, 11]
        assert nested_sets[1][:1] == nested_sets[0]
        assert set(nested_sets[2]) == set(WQCol.input_columns())

    def test_nested_r2_is_monotone(self, wine_df, nested_sets) -> None:
        """Each extension can only raise in-sample R²."""
        registry = ModelRegistry()
        results = registry.fit_nested(wine_df, nested_sets)
        r2 = [res.r2 for res in results]

        assert list(registry.models) == ["m1", "m2", "m3"]
        assert r2[0] <= r2[1] <= r2[2]

    def test_non_nested_sets_raise(self, wine_df) -> None:
        """A set that drops a predictor of its predecessor is rejected."""
        registry = ModelRegistry()
        with pytest.raises(ValueError, match="does not extend"):
            registry.fit_nested(wine_df, [[WQCol.ALCOHOL], [WQCol.SULPHATES, WQCol.DENSITY]])
        assert len(registry) == 0

    def test_repeated_set_raises(self, wine_df) -> None:
        """Each model must add at least one predictor."""
        with pytest.raises(ValueError):
            ModelRegistry().fit_nested(wine_df, [[WQCol.ALCOHOL], [WQCol.ALCOHOL]])

    def test_names_must_match_sets(self, wine_df, nested_sets) -> None:
        """One name per predictor set."""
        with pytest.raises(ValueError, match="names"):
            ModelRegistry().fit_nested(wine_df, nested_sets, names=["only_one"])

    def test_compare_and_coefficients(self, wine_df, nested_sets) -> None:
        """The comparison lists added predictors; absent terms are NaN in the coefficient table."""
        registry = ModelRegistry()
        registry.fit_nested(wine_df, nested_sets, names=["base", "chem", "full"], cv_folds=3)

        comparison = registry.compare()
        assert comparison.index.tolist() == ["base", "chem", "full"]
        assert comparison.loc["base", "added"] == WQCol.VOLATILE_ACIDITY
        assert comparison.loc["full", "n_predictors"] == 11
        assert comparison["cv_rmse"].notna().all()

        coefs = registry.coefficients()
        assert list(coefs.columns) == ["base", "chem", "full"]
        assert np.isnan(coefs.loc[WQCol.ALCOHOL, "base"])
        assert not np.isnan(coefs.loc[WQCol.ALCOHOL, "chem"])

    def test_fit_caches_by_name(self, wine_df) -> None:
        """Refitting under an existing name returns the cached result unless refit is requested."""
        registry = ModelRegistry()
        first = registry.fit(wine_df, [WQCol.ALCOHOL], name="alc")
        assert registry.fit(wine_df, [WQCol.DENSITY], name="alc") is first
        assert registry.fit(wine_df, [WQCol.DENSITY], name="alc", refit=True) is not first
        with pytest.raises(KeyError):
            registry.get("missing")
