"""Descriptive statistics for the loaded table."""

from dataclasses import dataclass
from typing import Self

import pandas as pd

from wine_eda.data.views import DatasetView

from .base_analyser import BaseAnalyser


@dataclass(frozen=True)
class SummaryResult:
    """Descriptive statistics of a dataset view.

    Attributes:
        shape: ``(rows, columns)`` of the view.
        describe: One row per column with ``count``, ``mean``, ``std``, ``min``,
            ``25%``, ``50%``, ``75%`` and ``max`` (categorical scores as numbers).
        zero_counts: Number of exact zeros per column.
        quality_counts: Rows per target level in category order (``None`` without target).
        dtypes: Column dtypes as strings.
        pretty_by_col: Mapping from raw column names to presentation labels.
    """

    shape: tuple[int, int]
    describe: pd.DataFrame
    zero_counts: pd.Series
    quality_counts: pd.Series | None
    dtypes: pd.Series
    pretty_by_col: dict[str, str]

    @property
    def n_rows(self) -> int:
        return self.shape[0]

    def describe_pretty(self, decimals: int = 3) -> pd.DataFrame:
        """``describe`` rounded and indexed by pretty column names."""
        return self.describe.round(decimals).rename(index=lambda c: self.pretty_by_col.get(c, c))


class SummaryAnalyzer(BaseAnalyser):
    """Per-column summary statistics (count, mean, quartiles, min, max).

    Example:
        >>> from wine_eda.data import RedWineDataset, WQCol
        >>> ds = RedWineDataset.from_csv()
        >>> summary = ds.make_summary_analyzer().fit().result()
        >>> summary.zero_counts[WQCol.CITRIC_ACID]
        132
    """

    def __init__(self, view: DatasetView) -> None:
        self._view = view
        self._numeric: pd.DataFrame | None = None

    def _as_numeric(self) -> pd.DataFrame:
        """Copy of the view with categorical scores mapped back to their numeric values."""
        return self._view.df.apply(
            lambda s: s.astype(s.cat.categories.dtype) if isinstance(s.dtype, pd.CategoricalDtype) else s,
        )

    def fit(self) -> Self:
        """Coerce the view to numbers once; statistics are derived in :meth:`result`."""
        self._numeric = self._as_numeric()
        return self

    def result(self) -> SummaryResult:
        if self._numeric is None:
            raise ValueError("Must call fit() before result()")

        numeric = self._numeric.select_dtypes(include=["number"])
        target = self._view.target_col
        quality_counts = (
            self._view.df[target].value_counts(sort=False).rename("count")
            if target is not None and target in self._view.df.columns
            else None
        )

        return SummaryResult(
            shape=self._view.df.shape,
            describe=numeric.describe().T,
            zero_counts=numeric.eq(0).sum(),
            quality_counts=quality_counts,
            dtypes=self._view.df.dtypes.astype(str),
            pretty_by_col=dict(self._view.pretty_by_col),
        )
