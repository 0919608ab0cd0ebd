"""Analysis modules for dataset processing and statistical methods."""

from .correlation_analyzer import CorrelationAnalyzer, CorrelationResult, PearsonResult, pearson_r
from .model_registry import ModelEntry, ModelRegistry, cumulative_predictor_sets
from .ols_helper import (
    MetricsResult,
    RegressionResult,
    compare_models,
    fit_ols_design,
    fit_ols_formula,
    fit_ols_predictors,
)
from .quartile_binning import QuartileBinning, add_quartile_column, quartile_bins, quartile_column_name
from .summary_analyzer import SummaryAnalyzer, SummaryResult


__all__ = [
    "CorrelationAnalyzer",
    "CorrelationResult",
    "MetricsResult",
    "ModelEntry",
    "ModelRegistry",
    "PearsonResult",
    "QuartileBinning",
    "RegressionResult",
    "SummaryAnalyzer",
    "SummaryResult",
    "add_quartile_column",
    "compare_models",
    "cumulative_predictor_sets",
    "fit_ols_design",
    "fit_ols_formula",
    "fit_ols_predictors",
    "pearson_r",
    "quartile_bins",
    "quartile_column_name",
]
