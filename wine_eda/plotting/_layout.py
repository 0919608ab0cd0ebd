"""Figure/axes helpers shared by the plotting modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure


def figure_and_axes(ax: Axes | None, figsize: tuple[float, float]) -> tuple[Figure, Axes]:
    """Return ``(fig, ax)``, creating a new figure only when ``ax`` is not given."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
        return fig, ax
    return ax.figure, ax


def axes_grid(
    n_panels: int,
    *,
    ncols: int = 3,
    panel_size: tuple[float, float] = (4.5, 3.5),
    figsize: tuple[float, float] | None = None,
) -> tuple[Figure, list[Axes]]:
    """Create a grid with at least ``n_panels`` axes; surplus axes are hidden."""
    ncols = max(1, min(ncols, n_panels))
    nrows = int(np.ceil(n_panels / ncols))
    if figsize is None:
        figsize = (panel_size[0] * ncols, panel_size[1] * nrows)
    fig, axes = plt.subplots(nrows, ncols, figsize=figsize, squeeze=False)
    axes_list = list(axes.ravel())
    for ax in axes_list[n_panels:]:
        ax.set_visible(False)
    return fig, axes_list[:n_panels]


def as_float(series: pd.Series) -> pd.Series:
    """Numeric copy of ``series``; ordered categorical scores map to their values."""
    if isinstance(series.dtype, pd.CategoricalDtype):
        return series.astype(series.cat.categories.dtype).astype(float)
    return series.astype(float)
