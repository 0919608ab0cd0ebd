"""Plotting utilities for data visualization."""

from .bivariate_plots import plot_box_by_quality, plot_boxes_by_quality, plot_jitter_scatter, plot_pair_scatters
from .correlation_plots import plot_correlation_heatmap, plot_target_correlations, plot_top_correlated_pairs
from .multivariate_plots import plot_colored_scatter, plot_colored_scatter_plotly
from .regression_plots import plot_qq, plot_r2_by_model, plot_regression_diagnostics, plot_residuals_vs_fitted
from .univariate_plots import (
    default_histogram_spec,
    plot_histogram,
    plot_histograms,
    plot_quality_counts,
    plot_standardization_comparison,
)


__all__ = [
    "default_histogram_spec",
    "plot_box_by_quality",
    "plot_boxes_by_quality",
    "plot_colored_scatter",
    "plot_colored_scatter_plotly",
    "plot_correlation_heatmap",
    "plot_histogram",
    "plot_histograms",
    "plot_jitter_scatter",
    "plot_pair_scatters",
    "plot_qq",
    "plot_quality_counts",
    "plot_r2_by_model",
    "plot_regression_diagnostics",
    "plot_residuals_vs_fitted",
    "plot_standardization_comparison",
    "plot_target_correlations",
    "plot_top_correlated_pairs",
]
