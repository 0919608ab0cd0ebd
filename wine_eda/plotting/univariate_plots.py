"""Univariate visualization functions (one attribute at a time)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import seaborn as sns

from wine_eda.data.base_columns import HistogramSpec
from wine_eda.data.red_wine_columns import RedWineColumn
from wine_eda.utils.plotting_config import DEFAULT_PLOT_CFG

from ._layout import axes_grid, figure_and_axes


if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from wine_eda.data.base_dataset import BaseDataset
    from wine_eda.data.views import DatasetView


def default_histogram_spec(column: str) -> HistogramSpec:
    """Histogram preset from the column catalogue (plain ``auto`` bins for unknown columns)."""
    try:
        return RedWineColumn(column).histogram
    except ValueError:
        return HistogramSpec()


def plot_histogram(
    view: DatasetView,
    column: str,
    spec: HistogramSpec | None = None,
    *,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (7, 4),
    color: str = "tab:blue",
    **kwargs: object,
) -> Figure:
    """Histogram of a single attribute.

    Args:
        view: Dataset view holding ``column``.
        column: Column to plot.
        spec: Binning, log scale and axis limits (defaults to the column preset).
        ax: Optional axes to draw into.
        figsize: Figure size when no ``ax`` is given.
        color: Bar colour.
        **kwargs: Forwarded to :func:`seaborn.histplot`.

    Returns:
        matplotlib Figure containing the histogram.

    Raises:
        KeyError: If ``column`` is not in the view.
    """
    view.require(column)
    spec = spec or default_histogram_spec(column)
    fig, ax = figure_and_axes(ax, figsize)

    sns.histplot(
        data=view.df,
        x=column,
        bins=spec.bins,
        binwidth=spec.binwidth,
        log_scale=spec.log_scale,
        color=color,
        ax=ax,
        **kwargs,  # type: ignore[arg-type]
    )

    label = view.pretty(column)
    ax.set_xlabel(f"{label} (log scale)" if spec.log_scale else label)
    ax.set_ylabel("Count")
    ax.set_title(f"Distribution of {label}")

    if spec.xlim is not None:
        ax.set_xlim(*spec.xlim)
        values = view.df[column]
        n_hidden = int((~values.between(*spec.xlim)).sum())
        if n_hidden:
            ax.annotate(
                f"{n_hidden} value(s) outside shown range",
                xy=(0.98, 0.95),
                xycoords="axes fraction",
                ha="right",
                va="top",
                fontsize=9,
                color="dimgray",
            )

    fig.tight_layout()
    return fig


def plot_histograms(
    view: DatasetView,
    columns: Sequence[str] | None = None,
    *,
    specs: Mapping[str, HistogramSpec] | None = None,
    ncols: int = 3,
    figsize: tuple[float, float] | None = None,
) -> Figure:
    """Grid of histograms, one panel per column, each with its own preset.

    Args:
        view: Dataset view.
        columns: Columns to plot (defaults to the view's numeric columns without the target).
        specs: Optional per-column overrides of the histogram presets.
        ncols: Panels per row.
        figsize: Overall figure size (derived from the panel count when omitted).
    """
    columns = list(columns) if columns is not None else [c for c in view.numeric_cols if c != view.target_col]
    view.require(*columns)
    specs = specs or {}

    fig, axes = axes_grid(len(columns), ncols=ncols, figsize=figsize)
    for ax, column in zip(axes, columns, strict=True):
        plot_histogram(view, column, specs.get(column), ax=ax)
        ax.set_title(view.pretty(column))
    fig.tight_layout()
    return fig


def plot_quality_counts(
    view: DatasetView,
    column: str | None = None,
    *,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (7, 4),
) -> Figure:
    """Bar chart of rows per quality score, annotated with the counts."""
    column = column or view.target_col
    if column is None:
        raise ValueError("Dataset view has no target column configured.")
    view.require(column)
    fig, ax = figure_and_axes(ax, figsize)

    palette = sns.color_palette(DEFAULT_PLOT_CFG.quality_palette, n_colors=view.df[column].nunique())
    sns.countplot(data=view.df, x=column, hue=column, palette=palette, legend=False, ax=ax)
    for container in ax.containers:
        ax.bar_label(container, fontsize=9)
    ax.set_xlabel(view.pretty(column))
    ax.set_ylabel("Count")
    ax.set_title(f"Distribution of {view.pretty(column)}")
    fig.tight_layout()
    return fig


def plot_standardization_comparison(
    dataset: BaseDataset,
    columns: Sequence[str] | None = None,
    figsize: tuple[int, int] = (14, 9),
) -> Figure:
    """Plot boxplots comparing raw vs standardized attributes.

    Raw scales differ by orders of magnitude (density vs total SO₂), so the raw
    panel mainly shows the scale problem; the standardized panel makes spread and
    outliers comparable across attributes.

    Args:
        dataset: Dataset instance with data to visualize
        columns: Columns to compare (defaults to the input attributes)
        figsize: Figure size (width, height)

    Returns:
        matplotlib Figure object
    """
    columns = list(columns) if columns is not None else dataset.feature_columns()
    labels = dataset.get_pretty_names(columns)

    fig, axs = plt.subplots(2, 1, figsize=figsize)

    sns.boxplot(data=dataset.df_numeric[columns].set_axis(labels, axis=1), ax=axs[0])
    axs[0].tick_params(axis="x", rotation=45)
    axs[0].set_title("Raw")

    sns.boxplot(data=dataset.df_standardized[columns].set_axis(labels, axis=1), ax=axs[1])
    axs[1].tick_params(axis="x", rotation=45)
    axs[1].set_title("Standardized")

    fig.tight_layout()

    return fig
