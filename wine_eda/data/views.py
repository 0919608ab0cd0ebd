"""Task-specific views over dataset content."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class DatasetView:
    """Immutable snapshot of dataset data and related metadata.

    Attributes:
        df: Dataframe slice containing the relevant columns.
        pretty_by_col: Mapping from normalized column names to display-friendly labels.
        numeric_cols: Ordered list of numeric feature names present in ``data``.
        target_col: Optional name of the target variable used for analysis.
        is_standardized: Indicates if numeric features have been standardized (zero mean, unit variance).
    """

    df: pd.DataFrame
    """Dataframe slice containing the relevant columns."""
    pretty_by_col: Mapping[str, str]
    """Mapping from normalized column names to display-friendly labels."""
    numeric_cols: list[str]
    target_col: str | None = None
    is_standardized: bool | None = None
    """Indicates if numeric features have been standardized (zero mean, unit variance)."""

    @property
    def features(self) -> pd.DataFrame:
        """Return view over numeric feature columns."""
        cols = self.numeric_cols or self.df.columns.tolist()
        return self.df.loc[:, cols]

    def pretty(self, column: str) -> str:
        """Display label for ``column`` (falls back to the raw name)."""
        return self.pretty_by_col.get(column, column)

    def require(self, *columns: str | Iterable[str]) -> None:
        """Raise ``KeyError`` if any of ``columns`` is missing from the view."""
        names: list[str] = []
        for col in columns:
            names.extend([col] if isinstance(col, str) else col)
        missing = [name for name in names if name not in self.df.columns]
        if missing:
            raise KeyError(f"Column(s) {missing} not found in dataset view (available: {list(self.df.columns)})")
