"""Quartile bucketing of numeric columns for three-attribute plots."""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd


_QUARTILES = (0.0, 0.25, 0.5, 0.75, 1.0)


@dataclass(frozen=True)
class QuartileBinning:
    """Equal-frequency partition of a column into four bins.

    Attributes:
        column: Name of the attribute that was binned.
        codes: Ordered categorical Series named ``<column>_quartiles``, aligned with the input.
        edges: The five bin edges ``[min, Q1, Q2, Q3, max]`` (non-decreasing).
        labels: Category labels, lowest bin first.
    """

    column: str
    codes: pd.Series
    edges: np.ndarray
    labels: list[str]

    @property
    def name(self) -> str:
        """Name of the derived column."""
        return str(self.codes.name)

    def counts(self) -> pd.Series:
        """Rows per bin, lowest bin first."""
        return self.codes.value_counts(sort=False)


def quartile_column_name(column: str) -> str:
    """Derived column name for the quartile bins of ``column``."""
    return f"{column}_quartiles"


def _default_labels(edges: np.ndarray, precision: int) -> list[str]:
    labels = []
    for i, (lo, hi) in enumerate(zip(edges[:-1], edges[1:], strict=True), start=1):
        left = "[" if i == 1 else "("
        labels.append(f"Q{i} {left}{lo:.{precision}g}, {hi:.{precision}g}]")
    return labels


def quartile_bins(
    series: pd.Series,
    *,
    labels: Sequence[str] | None = None,
    precision: int = 4,
) -> QuartileBinning:
    r"""Bucket ``series`` into four bins at its empirical quartiles.

    Bins are right-closed, :math:`(q_{i-1}, q_i]`, except the lowest which is
    closed on both sides so the minimum is included. Every value therefore falls
    into exactly one of the four bins and the bins cover ``[min, max]``.

    Heavily tied columns can have coinciding edges (quality on the red wine data
    has quartiles ``[3, 5, 6, 6, 8]``). The four categories are kept regardless
    and a bin whose bounds coincide with the previous edge simply stays empty.

    Args:
        series: Numeric column to bin (no missing values).
        labels: Optional four labels, lowest bin first. Defaults to ``"Q1 [lo, hi]"`` style labels.
        precision: Significant digits used in default labels.

    Returns:
        QuartileBinning with codes, edges and labels.

    Raises:
        ValueError: If the series has missing values or the labels are not four.
    """
    if series.isna().any():
        raise ValueError(f"Cannot bin '{series.name}': series contains missing values")

    values = series.astype(float)
    edges = values.quantile(_QUARTILES).to_numpy()

    bin_labels = list(labels) if labels is not None else _default_labels(edges, precision)
    if len(bin_labels) != len(edges) - 1:
        raise ValueError(f"Expected {len(edges) - 1} labels, got {len(bin_labels)}")

    column = str(series.name)
    # number of inner edges strictly below the value: right-closed bins, minimum in the first
    bin_codes = np.searchsorted(edges[1:-1], values.to_numpy(), side="left")
    codes = pd.Series(
        pd.Categorical.from_codes(bin_codes, categories=bin_labels, ordered=True),
        index=series.index,
        name=quartile_column_name(column),
    )

    return QuartileBinning(column=column, codes=codes, edges=edges, labels=bin_labels)


def add_quartile_column(
    df: pd.DataFrame,
    column: str,
    **kwargs: object,
) -> tuple[pd.DataFrame, QuartileBinning]:
    """Return a copy of ``df`` with the quartile bins of ``column`` appended.

    The derived column is named after the attribute actually binned
    (``density`` → ``density_quartiles``). ``df`` itself is left untouched.

    Raises:
        KeyError: If ``column`` is not in ``df``.
    """
    if column not in df.columns:
        raise KeyError(f"Column '{column}' not found (available: {df.columns.to_list()})")

    binning = quartile_bins(df[column], **kwargs)  # type: ignore[arg-type]
    return df.assign(**{binning.name: binning.codes}), binning
