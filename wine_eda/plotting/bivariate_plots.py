"""Two-attribute plots: attribute-by-quality boxplots and jittered scatter plots."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import seaborn as sns

from wine_eda.analysis.correlation_analyzer import pearson_r
from wine_eda.utils.plotting_config import DEFAULT_PLOT_CFG

from ._layout import as_float, axes_grid, figure_and_axes


if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from wine_eda.data.views import DatasetView


def plot_box_by_quality(
    view: DatasetView,
    column: str,
    *,
    target: str | None = None,
    show_points: bool = True,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (7, 4.5),
) -> Figure:
    """Boxplot of ``column`` for every quality score, with the group means marked.

    Args:
        view: Plot view (categorical quality, see ``BaseDataset.plot_view``).
        column: Attribute on the y axis.
        target: Grouping column (defaults to the view's target).
        show_points: Overlay the raw observations as a light strip plot.
        ax: Optional axes to draw into.
        figsize: Figure size when no ``ax`` is given.

    Raises:
        KeyError: If ``column`` or ``target`` is not in the view.
        ValueError: If no grouping column is available.
    """
    target = target or view.target_col
    if target is None:
        raise ValueError("Dataset view has no target column configured.")
    view.require(column, target)
    fig, ax = figure_and_axes(ax, figsize)

    n_levels = view.df[target].nunique()
    palette = sns.color_palette(DEFAULT_PLOT_CFG.quality_palette, n_colors=n_levels)
    sns.boxplot(
        data=view.df,
        x=target,
        y=column,
        hue=target,
        palette=palette,
        legend=False,
        showmeans=True,
        meanprops={"marker": "D", "markerfacecolor": "white", "markeredgecolor": "black", "markersize": 5},
        fliersize=0 if show_points else 3,
        ax=ax,
    )
    if show_points:
        sns.stripplot(data=view.df, x=target, y=column, color="black", alpha=0.15, size=2, jitter=0.25, ax=ax)

    ax.set_xlabel(view.pretty(target))
    ax.set_ylabel(view.pretty(column))
    ax.set_title(f"{view.pretty(column)} by {view.pretty(target)}")
    fig.tight_layout()
    return fig


def plot_boxes_by_quality(
    view: DatasetView,
    columns: Sequence[str] | None = None,
    *,
    ncols: int = 3,
    figsize: tuple[float, float] | None = None,
) -> Figure:
    """Grid of :func:`plot_box_by_quality` panels, one per attribute."""
    columns = list(columns) if columns is not None else [c for c in view.numeric_cols if c != view.target_col]
    view.require(*columns)

    fig, axes = axes_grid(len(columns), ncols=ncols, figsize=figsize)
    for ax, column in zip(axes, columns, strict=True):
        plot_box_by_quality(view, column, show_points=False, ax=ax)
        ax.set_title(view.pretty(column))
    fig.tight_layout()
    return fig


def _jitter(values: pd.Series, amount: float, rng: np.random.Generator) -> np.ndarray:
    if amount <= 0:
        return values.to_numpy()
    return values.to_numpy() + rng.uniform(-amount, amount, size=len(values))


def plot_jitter_scatter(
    view: DatasetView,
    x: str,
    y: str,
    *,
    x_jitter: float = 0.0,
    y_jitter: float = 0.0,
    seed: int | None = 0,
    alpha: float = 0.35,
    trend: bool = True,
    annotate: bool = True,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (7, 5),
) -> Figure:
    """Scatter plot of ``y`` against ``x`` with optional jitter and the Pearson r.

    Jitter is uniform noise in ``[-amount, amount]`` added to the drawn points
    only; the trend line and the correlation use the unjittered values. Quality
    is discrete, so ``y_jitter≈0.3`` separates the overlapping rows of a
    ``quality`` scatter.

    Args:
        view: Dataset view holding both columns.
        x: Column on the x axis.
        y: Column on the y axis.
        x_jitter: Half-width of the horizontal jitter.
        y_jitter: Half-width of the vertical jitter.
        seed: Seed for the jitter generator (same seed, same figure).
        alpha: Point opacity.
        trend: Overlay a least-squares line.
        annotate: Print ``r`` and ``n`` in the plot corner.
        ax: Optional axes to draw into.
        figsize: Figure size when no ``ax`` is given.

    Raises:
        KeyError: If ``x`` or ``y`` is not in the view.
    """
    view.require(x, y)
    xs, ys = as_float(view.df[x]), as_float(view.df[y])
    fig, ax = figure_and_axes(ax, figsize)

    rng = np.random.default_rng(seed)
    ax.scatter(_jitter(xs, x_jitter, rng), _jitter(ys, y_jitter, rng), s=10, alpha=alpha, color="tab:purple")
    if trend:
        sns.regplot(x=xs, y=ys, scatter=False, ci=None, color="black", line_kws={"linewidth": 1.5}, ax=ax)

    pearson = pearson_r(xs, ys)
    if annotate:
        ax.text(
            0.02,
            0.97,
            f"Pearson {pearson}\nn = {pearson.n}",
            transform=ax.transAxes,
            ha="left",
            va="top",
            fontsize=9,
            bbox={"boxstyle": "round", "facecolor": "white", "alpha": 0.8},
        )

    ax.set_xlabel(view.pretty(x))
    ax.set_ylabel(view.pretty(y))
    ax.set_title(f"{view.pretty(y)} vs {view.pretty(x)}")
    fig.tight_layout()
    return fig


def plot_pair_scatters(
    view: DatasetView,
    pairs: Sequence[tuple[str, str]] | pd.DataFrame,
    *,
    ncols: int = 2,
    x_jitter: float = 0.0,
    y_jitter: float = 0.0,
    seed: int | None = 0,
    figsize: tuple[float, float] | None = None,
) -> Figure:
    """Grid of annotated scatter plots, one per ``(x, y)`` pair.

    ``pairs`` may also be the ``feature_pairs`` table of a correlation result,
    in which case its ``feature_a``/``feature_b`` columns are used in order.
    """
    if isinstance(pairs, pd.DataFrame):
        pairs = list(pairs[["feature_a", "feature_b"]].itertuples(index=False, name=None))
    pairs = list(pairs)
    if not pairs:
        raise ValueError("At least one column pair is required")

    fig, axes = axes_grid(len(pairs), ncols=ncols, panel_size=(5.5, 4.0), figsize=figsize)
    for ax, (x, y) in zip(axes, pairs, strict=True):
        plot_jitter_scatter(view, x, y, x_jitter=x_jitter, y_jitter=y_jitter, seed=seed, ax=ax)
    fig.tight_layout()
    return fig
