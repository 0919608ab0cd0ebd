"""Three-attribute plots: scatter of two attributes coloured by a third."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import plotly.express as px
import seaborn as sns

from wine_eda.analysis.quartile_binning import add_quartile_column
from wine_eda.utils.plotting_config import DEFAULT_PLOT_CFG

from ._layout import as_float, figure_and_axes


if TYPE_CHECKING:
    import plotly.graph_objects as go
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from wine_eda.data.views import DatasetView


def _colour_frame(
    view: DatasetView,
    x: str,
    y: str,
    hue: str | None,
    *,
    hue_quartiles: bool,
) -> tuple[pd.DataFrame, str, str, str]:
    """Return ``(frame, hue_col, legend_title, palette)`` for a coloured scatter.

    Continuous hues are replaced by their quartile bins; categorical hues
    (quality) are used as-is.
    """
    hue = hue or view.target_col
    if hue is None:
        raise ValueError("No colour column given and the dataset view has no target column.")
    view.require(x, y, hue)

    frame = view.df[list(dict.fromkeys([x, y, hue]))].copy()
    if hue_quartiles:
        frame, binning = add_quartile_column(frame, hue)
        return frame, binning.name, f"{view.pretty(hue)} (quartiles)", DEFAULT_PLOT_CFG.quartile_palette
    if not isinstance(frame[hue].dtype, pd.CategoricalDtype) and frame[hue].nunique() > 12:
        raise ValueError(f"Column '{hue}' is continuous; pass hue_quartiles=True to colour by its quartiles")
    return frame, hue, view.pretty(hue), DEFAULT_PLOT_CFG.quality_palette


def plot_colored_scatter(
    view: DatasetView,
    x: str,
    y: str,
    hue: str | None = None,
    *,
    hue_quartiles: bool = False,
    trend_lines: bool = False,
    x_jitter: float = 0.0,
    seed: int | None = 0,
    alpha: float = 0.6,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 5.5),
) -> Figure:
    """Scatter of ``y`` against ``x`` coloured by quality or by the quartiles of a third attribute.

    Args:
        view: Plot view (categorical quality).
        x: Column on the x axis.
        y: Column on the y axis.
        hue: Colour column (defaults to the view's target).
        hue_quartiles: Bin ``hue`` into quartiles first (needed for continuous attributes).
        trend_lines: Overlay a least-squares line per colour group.
        x_jitter: Half-width of horizontal jitter (drawn points only).
        seed: Seed for the jitter generator.
        alpha: Point opacity.
        ax: Optional axes to draw into.
        figsize: Figure size when no ``ax`` is given.

    Raises:
        KeyError: If a column is missing from the view.
        ValueError: If ``hue`` is continuous and ``hue_quartiles`` is False.
    """
    frame, hue_col, legend_title, palette = _colour_frame(view, x, y, hue, hue_quartiles=hue_quartiles)
    fig, ax = figure_and_axes(ax, figsize)

    levels = list(frame[hue_col].cat.categories) if isinstance(frame[hue_col].dtype, pd.CategoricalDtype) else None
    colors = sns.color_palette(palette, n_colors=len(levels) if levels else frame[hue_col].nunique())

    plot_df = frame.assign(_x=as_float(frame[x]))
    if x_jitter > 0:
        rng = np.random.default_rng(seed)
        plot_df["_x"] = plot_df["_x"] + rng.uniform(-x_jitter, x_jitter, size=len(plot_df))

    sns.scatterplot(
        data=plot_df,
        x="_x",
        y=y,
        hue=hue_col,
        hue_order=levels,
        palette=colors,
        alpha=alpha,
        s=18,
        edgecolor="none",
        ax=ax,
    )
    if trend_lines:
        for level, color in zip(levels or sorted(frame[hue_col].unique()), colors, strict=False):
            group = frame[frame[hue_col] == level]
            if len(group) < 2:
                continue
            sns.regplot(
                x=as_float(group[x]),
                y=as_float(group[y]),
                scatter=False,
                ci=None,
                color=color,
                line_kws={"linewidth": 1.2},
                ax=ax,
            )

    sns.move_legend(ax, "best", title=legend_title, fontsize=8, title_fontsize=9)
    ax.set_xlabel(view.pretty(x))
    ax.set_ylabel(view.pretty(y))
    ax.set_title(f"{view.pretty(y)} vs {view.pretty(x)} by {legend_title}")
    fig.tight_layout()
    return fig


def plot_colored_scatter_plotly(
    view: DatasetView,
    x: str,
    y: str,
    hue: str | None = None,
    *,
    hue_quartiles: bool = False,
    width: int = 850,
    height: int = 560,
) -> go.Figure:
    """Interactive Plotly version of :func:`plot_colored_scatter` with hover labels."""
    frame, hue_col, legend_title, palette = _colour_frame(view, x, y, hue, hue_quartiles=hue_quartiles)
    category_orders = {}
    if isinstance(frame[hue_col].dtype, pd.CategoricalDtype):
        levels = list(frame[hue_col].cat.categories)
        frame[hue_col] = frame[hue_col].astype(str)
        category_orders[hue_col] = [str(level) for level in levels]
        colors = sns.color_palette(palette, n_colors=len(levels)).as_hex()
    else:
        colors = None

    fig = px.scatter(
        frame.reset_index(names="row"),
        x=x,
        y=y,
        color=hue_col,
        category_orders=category_orders,
        color_discrete_sequence=colors,
        hover_data=["row"],
        labels={x: view.pretty(x), y: view.pretty(y), hue_col: legend_title},
        opacity=0.7,
        template=DEFAULT_PLOT_CFG.plotly_template,
        width=width,
        height=height,
        title=f"{view.pretty(y)} vs {view.pretty(x)} by {legend_title}",
    )
    fig.update_traces(marker={"size": 6})
    return fig
