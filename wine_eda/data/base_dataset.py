"""Base dataset class for all dataset implementations."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd
from sklearn.preprocessing import StandardScaler


if TYPE_CHECKING:
    from wine_eda.analysis.correlation_analyzer import CorrelationAnalyzer
    from wine_eda.analysis.summary_analyzer import SummaryAnalyzer

from .base_columns import BaseColumn
from .views import DatasetView


class BaseDataset(ABC):
    """Abstract base class for dataset handlers used throughout the toolbox."""

    Col: type[BaseColumn]

    def __init__(self, df: pd.DataFrame | None = None) -> None:
        """Initialize the base dataset.

        Args:
            df: Pre-loaded and cleaned DataFrame (optional)
        """
        self._df: pd.DataFrame | None = df
        self._scaler: StandardScaler | None = None
        self._df_standardized: pd.DataFrame | None = None

    @classmethod
    @abstractmethod
    def from_csv(cls, csv_path: str | Path | None = None, **kwargs: object) -> "BaseDataset":
        """Load dataset from CSV file.

        Args:
            csv_path: Path to the CSV file
            **kwargs: Additional loading parameters

        Returns:
            Dataset instance with loaded data
        """
        ...

    @property
    def df(self) -> pd.DataFrame:
        """Get the cleaned DataFrame as loaded.

        Raises:
            ValueError: If dataset not loaded
        """
        if self._df is None:
            raise ValueError("Dataset not loaded. Use from_csv() to load data.")
        return self._df

    @property
    def df_numeric(self) -> pd.DataFrame:
        """Get the DataFrame with every analysis column in a numeric dtype.

        Subclasses with categorical targets override this to coerce them back.
        """
        return self.df

    @property
    def n_rows(self) -> int:
        """Number of observations."""
        return len(self.df)

    @property
    def numeric_cols(self) -> pd.Index:
        """Get numeric column names of :attr:`df_numeric`.

        Default implementation filters columns by numeric dtypes.
        """
        return self.df_numeric.select_dtypes(include=["number"]).columns

    @property
    def df_standardized(self) -> pd.DataFrame:
        """Get the standardized DataFrame.

        X <- (X - E[X]) / sd(X)
        """
        if self._df_standardized is None:
            self._df_standardized = self.standardize()
        return self._df_standardized

    def standardize(self, df: pd.DataFrame | None = None) -> pd.DataFrame:
        """Compute standardized version of the dataset using [sklearn's StandardScaler](https://scikit-learn.org/stable/modules/generated/sklearn.preprocessing.StandardScaler.html).

        Returns:
            Standardized DataFrame with numeric columns scaled to mean=0, std=1
        """
        if df is None:
            df = self.df_numeric

        self._scaler = StandardScaler()
        scaled_data = self._scaler.fit_transform(df[self.numeric_cols])

        return pd.DataFrame(
            scaled_data,
            columns=self.numeric_cols,
            index=df.index,
        )

    def get_pretty_names(self, column_names: list[str] | None = None) -> list[str]:
        """Convert multiple column names to pretty names.

        Args:
            column_names: List of cleaned column names

        Returns:
            List of pretty names suitable for plot labels
        """
        return [self.get_pretty_name(name) for name in column_names or self.df.columns.to_list()]

    def view(
        self,
        columns: Iterable[str] | None = None,
        standardized: bool = False,
        target_col: str | None = None,
        categorical_target: bool = False,
    ) -> DatasetView:
        """Build an immutable dataset view for analyzers and plotting layers.

        Args:
            columns: Columns to include in the view (defaults to all)
            standardized: Use standardized dataframe
            target_col: Optional target column reference
            categorical_target: Keep the target in its loaded (categorical) dtype
                instead of the numeric one. Plotting layers group and colour by it.

        Returns:
            DatasetView containing selected data and metadata

        Raises:
            KeyError: If a requested column does not exist.
        """
        if standardized:
            frame = self.df_standardized
        elif categorical_target:
            frame = self.df
        else:
            frame = self.df_numeric

        selected_cols = list(columns if columns is not None else frame.columns.to_list())
        missing = [col for col in selected_cols if col not in frame.columns]
        if missing:
            raise KeyError(f"Column(s) {missing} not found in dataset (available: {frame.columns.to_list()})")

        frame = frame.loc[:, selected_cols]
        target_col = target_col or self.Col.TARGET

        return DatasetView(
            df=frame,
            pretty_by_col={col: self.get_pretty_name(col) for col in selected_cols},
            numeric_cols=[col for col in selected_cols if col in self.numeric_cols],
            target_col=target_col if target_col in selected_cols else None,
            is_standardized=standardized,
        )

    def plot_view(self, columns: Iterable[str] | None = None) -> DatasetView:
        """Build a view for plotting layers (target kept categorical)."""
        return self.view(columns=columns, categorical_target=True)

    def feature_columns(
        self,
        include_target: bool = False,
        extra_exclude: Iterable[str] | None = None,
    ) -> list[str]:
        """Return numeric feature columns, optionally excluding identifiers and target."""
        exclude = set(self.Col.identifier_columns())
        if extra_exclude:
            exclude.update(extra_exclude)
        if not include_target and self.Col.TARGET:
            exclude.add(self.Col.TARGET)
        return [col for col in self.numeric_cols if col not in exclude]

    def analyzer_view(
        self,
        columns: Iterable[str] | None = None,
        standardized: bool = False,
        include_target: bool = True,
    ) -> DatasetView:
        """Build a dataset view tailored for downstream analyzers."""
        view = self.view(
            columns=columns if columns is not None else self.feature_columns(include_target=include_target),
            standardized=standardized,
        )
        if not include_target and view.target_col is not None:
            return replace(view, target_col=None)
        return view

    def get_pretty_name(self, column_name: str) -> str:
        """Convert column name to pretty name for visualization.

        Args:
            column_name: The cleaned column name

        Returns:
            Pretty name suitable for plot labels and titles
        """
        try:
            col_enum = self.Col(column_name)
        except ValueError:
            # Fallback: capitalize and replace underscores if not in enum
            return column_name.replace("_", " ").title()
        else:
            return str(col_enum.pretty_name)

    def make_summary_analyzer(self, columns: Iterable[str] | None = None) -> "SummaryAnalyzer":
        """Instantiate a summary-statistics analyzer over the loaded table."""
        from wine_eda.analysis.summary_analyzer import SummaryAnalyzer

        return SummaryAnalyzer(self.view(columns=columns, categorical_target=True))

    def make_correlation_analyzer(
        self,
        columns: Iterable[str] | None = None,
        standardized: bool = False,
        include_target: bool = True,
    ) -> "CorrelationAnalyzer":
        """Instantiate a correlation analyzer configured for this dataset."""
        from wine_eda.analysis.correlation_analyzer import CorrelationAnalyzer

        return CorrelationAnalyzer(
            self.analyzer_view(columns=columns, standardized=standardized, include_target=include_target),
        )
