"""Plotting helpers for regression diagnostics and nested-model comparison."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import seaborn as sns
from statsmodels.graphics.gofplots import qqplot

from ._layout import axes_grid, figure_and_axes


if TYPE_CHECKING:
    import matplotlib.pyplot as plt
    from matplotlib.figure import Figure

    from wine_eda.analysis.ols_helper import RegressionResult


def plot_residuals_vs_fitted(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
    figsize: tuple[float, float] = (7, 4.5),
) -> Figure:
    """Residuals vs fitted values with LOWESS smooth.

    Wraps [:func:`seaborn.residplot`](https://seaborn.pydata.org/generated/seaborn.residplot.html)
    on the statsmodels OLS residuals contained in ``RegressionResult``.
    """
    fig, ax = figure_and_axes(ax, figsize)
    sns.residplot(
        x=result.fitted,
        y=result.residuals,
        lowess=True,
        ax=ax,
        scatter_kws={"alpha": 0.3, "s": 10},
        line_kws={"color": "tab:red"},
    )
    ax.set_xlabel("Fitted quality")
    ax.set_ylabel("Residual")
    ax.set_title("Residuals vs Fitted")
    fig.tight_layout()
    return fig


def plot_qq(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
    figsize: tuple[float, float] = (5, 5),
) -> Figure:
    """QQ plot of studentized residuals to assess normality."""
    fig, ax = figure_and_axes(ax, figsize)
    stud_resid = result.model.get_influence().resid_studentized_internal
    qqplot(stud_resid, line="45", fit=True, ax=ax, markersize=3, alpha=0.5)
    ax.set_title("QQ plot (studentized residuals)")
    fig.tight_layout()
    return fig


def plot_regression_diagnostics(
    result: RegressionResult,
    *,
    figsize: tuple[float, float] = (11, 4.5),
) -> Figure:
    """Residuals-vs-fitted and QQ panels side by side."""
    fig, (ax_resid, ax_qq) = axes_grid(2, ncols=2, figsize=figsize)
    plot_residuals_vs_fitted(result, ax=ax_resid)
    plot_qq(result, ax=ax_qq)
    fig.tight_layout()
    return fig


def plot_r2_by_model(
    comparison: pd.DataFrame,
    *,
    ax: plt.Axes | None = None,
    figsize: tuple[float, float] = (7, 4),
) -> Figure:
    """Bar chart of :math:`R^2` and adjusted :math:`R^2` per nested model.

    Args:
        comparison: Table from ``ModelRegistry.compare`` (index = model names,
            columns include ``r2``, ``adj_r2`` and ``n_predictors``).
        ax: Optional axes to draw into.
        figsize: Figure size when no ``ax`` is given.
    """
    missing = {"r2", "adj_r2", "n_predictors"} - set(comparison.columns)
    if missing:
        raise KeyError(f"Comparison table lacks column(s) {sorted(missing)}")

    fig, ax = figure_and_axes(ax, figsize)
    labels = [f"{name}\n({n} predictors)" for name, n in zip(comparison.index, comparison["n_predictors"], strict=True)]
    positions = np.arange(len(comparison))
    width = 0.38

    bars_r2 = ax.bar(positions - width / 2, comparison["r2"], width, label="R²", color="tab:blue")
    bars_adj = ax.bar(positions + width / 2, comparison["adj_r2"], width, label="Adjusted R²", color="tab:gray")
    ax.bar_label(bars_r2, fmt="%.3f", padding=2, fontsize=8)
    ax.bar_label(bars_adj, fmt="%.3f", padding=2, fontsize=8)

    ax.set_xticks(positions, labels)
    ax.set_ylim(0, max(0.05, float(comparison["r2"].max()) * 1.25))
    ax.set_ylabel("Share of quality variance explained")
    ax.set_title("Nested Linear Models")
    ax.legend(loc="upper left")
    fig.tight_layout()
    return fig
