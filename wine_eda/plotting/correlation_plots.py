"""Correlation analysis visualization functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns


if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from wine_eda.analysis.correlation_analyzer import CorrelationResult


_POSITIVE_COLOR = "#d62728"
_NEGATIVE_COLOR = "#1f77b4"


def plot_correlation_heatmap(
    result: CorrelationResult,
    figsize: tuple[int, int] = (11, 9),
    *,
    mask_upper: bool = True,
    **kwargs: object,
) -> Figure:
    """Plot the annotated Pearson correlation heatmap of all columns in the result.

    Args:
        result: CorrelationResult from CorrelationAnalyzer.
        figsize: Figure size.
        mask_upper: Hide the redundant upper triangle (the matrix is symmetric).
        **kwargs: Forwarded to :func:`seaborn.heatmap`.
    """
    fig, ax = plt.subplots(figsize=figsize)

    label_map = {col: result.pretty_by_col.get(col, col) for col in result.matrix.columns}
    matrix = result.matrix.rename(index=label_map, columns=label_map)
    mask = np.triu(np.ones(matrix.shape, dtype=bool), k=1) if mask_upper else None

    sns.heatmap(
        matrix,
        mask=mask,
        annot=True,
        fmt=".2f",
        annot_kws={"size": 8},
        cmap="coolwarm",
        vmin=-1,
        vmax=1,
        ax=ax,
        square=True,
        cbar_kws={"shrink": 0.8, "label": "Pearson r"},
        **kwargs,  # type: ignore[arg-type]
    )

    ax.set_xticklabels(
        ax.get_xticklabels(),
        rotation=45,
        ha="right",
        rotation_mode="anchor",
    )
    ax.tick_params(axis="y", rotation=0)
    ax.set_title("Pearson Correlation Matrix")
    fig.tight_layout()

    return fig


def _prettify_pair_columns(
    pairs: pd.DataFrame,
    pretty_by_col: dict[str, str],
) -> pd.DataFrame:
    """Attach pretty labels for plotting convenience."""

    def _pretty_pair(row: pd.Series) -> str:
        a = pretty_by_col.get(row["feature_a"], row["feature_a"])
        b = pretty_by_col.get(row["feature_b"], row["feature_b"])
        return f"{a} vs {b}"

    return pairs.assign(
        pretty_pair=lambda d: d.apply(_pretty_pair, axis=1),
    )


def _sign_colors(values: pd.Series) -> list[str]:
    return [_POSITIVE_COLOR if v > 0 else _NEGATIVE_COLOR for v in values]


def plot_top_correlated_pairs(
    result: CorrelationResult,
    n: int = 10,
    threshold: float | None = None,
    figsize: tuple[int, int] = (10, 6),
) -> Figure:
    """Plot the ``n`` attribute pairs with the strongest absolute correlation.

    Bars are coloured by sign (red positive, blue negative).

    Args:
        result: CorrelationResult from CorrelationAnalyzer.
        n: Number of pairs to display.
        threshold: Optional absolute correlation marked with dashed lines at ``±threshold``.
        figsize: Figure size.
    """
    pairs = _prettify_pair_columns(result.feature_pairs, result.pretty_by_col).nlargest(n, "abs_correlation")

    fig, ax = plt.subplots(figsize=figsize)
    ax.barh(pairs["pretty_pair"], pairs["correlation"], color=_sign_colors(pairs["correlation"]))
    ax.invert_yaxis()
    ax.set_title(f"Top {len(pairs)} Correlated Attribute Pairs")
    ax.set_xlabel("Pearson Correlation")
    ax.set_xlim(-1, 1)
    ax.axvline(0, color="black", linewidth=1, linestyle="--")
    if threshold is not None:
        for x in (-threshold, threshold):
            ax.axvline(x, color="tab:orange", linewidth=2, linestyle="--")
    fig.tight_layout()

    return fig


def plot_target_correlations(
    result: CorrelationResult,
    figsize: tuple[int, int] = (9, 5),
) -> Figure:
    """Plot each attribute's correlation with the target, strongest positive first."""
    if result.target_correlations is None:
        msg = "CorrelationResult does not include target correlations."
        raise ValueError(msg)

    target_corr = result.target_correlations.assign(
        pretty_feature=lambda d: d["feature"].map(lambda c: result.pretty_by_col.get(c, c)),
    )

    fig, ax = plt.subplots(figsize=figsize)
    ax.barh(target_corr["pretty_feature"], target_corr["correlation"], color=_sign_colors(target_corr["correlation"]))
    ax.invert_yaxis()
    ax.bar_label(ax.containers[0], fmt="%.2f", padding=3, fontsize=8)
    ax.set_title("Correlation with Quality")
    ax.set_xlabel("Pearson Correlation")
    ax.axvline(0, color="black", linewidth=1, linestyle="--")
    fig.tight_layout()

    return fig
