"""Correlation analysis for dataset features."""

from dataclasses import dataclass
from typing import Self

import numpy as np
import pandas as pd
from scipy import stats

from wine_eda.data.views import DatasetView

from .base_analyser import BaseAnalyser


@dataclass(frozen=True)
class PearsonResult:
    """Pearson correlation between two columns.

    Attributes:
        r: Correlation coefficient in ``[-1, 1]`` (NaN if either input is constant).
        p_value: Two-sided p-value for ``H0: r = 0`` (NaN if ``r`` is undefined).
        n: Number of paired observations.
    """

    r: float
    p_value: float
    n: int

    def __str__(self) -> str:
        return f"r = {self.r:.3f}"


def pearson_r(x: pd.Series, y: pd.Series) -> PearsonResult:
    """Pearson correlation with p-value via :func:`scipy.stats.pearsonr`.

    Rows with a missing value in either series are dropped. A constant input
    yields NaN rather than raising.
    """
    paired = pd.concat([x.astype(float), y.astype(float)], axis=1).dropna()
    n = len(paired)
    col_x, col_y = paired.iloc[:, 0], paired.iloc[:, 1]
    if n < 2 or col_x.nunique() < 2 or col_y.nunique() < 2:
        return PearsonResult(r=float("nan"), p_value=float("nan"), n=n)

    res = stats.pearsonr(col_x, col_y)
    return PearsonResult(r=float(res.statistic), p_value=float(res.pvalue), n=n)


@dataclass(frozen=True)
class CorrelationResult:
    """Correlation analysis outputs grouped for plotting and reporting.

    Attributes:
        matrix: Full Pearson correlation matrix (DataFrame; rows/cols = features in view).
        pretty_by_col: Mapping from raw feature names to presentation labels.
        feature_pairs: DataFrame with columns `feature_a`, `feature_b`, `correlation`,
            `abs_correlation`, `pair`; sorted by strongest absolute correlations.
        target_correlations: Optional DataFrame with columns `feature`, `correlation`
            for feature-vs-target correlations (sorted descending).
    """

    matrix: pd.DataFrame
    pretty_by_col: dict[str, str]
    feature_pairs: pd.DataFrame
    target_correlations: pd.DataFrame | None = None

    def matrix_pretty(self, decimals: int = 2) -> pd.DataFrame:
        """Rounded matrix labelled with pretty names."""
        label_map = {col: self.pretty_by_col.get(col, col) for col in self.matrix.columns}
        return self.matrix.round(decimals).rename(index=label_map, columns=label_map)


class CorrelationAnalyzer(BaseAnalyser):
    """Analyzer for computing feature correlations.

    Example:
        >>> from wine_eda.data import RedWineDataset
        >>> from wine_eda.plotting import plot_correlation_heatmap
        >>> ds = RedWineDataset.from_csv()
        >>> corr_res = ds.make_correlation_analyzer(include_target=True).fit().result()
        >>> corr_res.feature_pairs.head(3)[["feature_a", "feature_b", "correlation"]]
        >>> fig = plot_correlation_heatmap(corr_res, figsize=(10, 10))
    """

    def __init__(self, view: DatasetView):
        """Initialize the correlation analyzer with a dataset view."""
        self._view = view
        self._corr_mat: pd.DataFrame | None = None

    def get_correlation_matrix(self) -> pd.DataFrame:
        """Compute the Pearson correlation matrix via :meth:`pandas.DataFrame.corr`.

        Zero-variance columns produce NaN rows/columns (diagonal included); they are
        left as-is for the caller to report.
        """
        if self._corr_mat is None:
            self._corr_mat = self._view.df.corr(method="pearson", numeric_only=True)
        return self._corr_mat

    def get_top_correlated_pairs(self, n: int = 20) -> pd.DataFrame:
        """Return the strongest absolute Pearson correlations between feature pairs.

        The implementation vectorizes the symmetric matrix by masking the upper triangle
        (excluding the diagonal) using :func:`np.triu`, then stacks the remaining
        values for efficient sorting.
        """
        corr_matrix = self.get_correlation_matrix()
        mask = np.triu(np.ones(corr_matrix.shape, dtype=bool), k=1)

        pairs = (
            corr_matrix.where(mask)
            .melt(ignore_index=False, var_name="feature_b", value_name="correlation")
            .dropna()
            .rename_axis("feature_a")
            .reset_index()
            .assign(
                abs_correlation=lambda d: d.correlation.abs(),
                pair=lambda d: d.feature_a + " vs " + d.feature_b,
            )
            .sort_values("abs_correlation", ascending=False)
            .head(n)
            .reset_index(drop=True)
        )
        return pairs

    def get_target_correlations(self) -> pd.DataFrame:
        """Return Pearson correlations between each feature and the configured target.

        Returns:
            DataFrame of features and their correlation with the target variable.
        """
        if not self._view.target_col:
            raise ValueError("Dataset view has no target column configured.")

        corr_matrix = self.get_correlation_matrix()

        if self._view.target_col not in corr_matrix.index:
            raise ValueError(f"Target column '{self._view.target_col}' not found in data")

        return (
            corr_matrix.loc[self._view.target_col]
            .drop(self._view.target_col)
            .sort_values(ascending=False)
            .to_frame(name="correlation")
            .assign(feature=lambda d: d.index)
            .reset_index(drop=True)
        )

    def fit(self) -> Self:
        """Compute correlation matrix."""
        self.get_correlation_matrix()

        return self

    def result(self, *, top_n_pairs: int = 20) -> CorrelationResult:
        if self._corr_mat is None:
            raise ValueError("Must call fit() before result()")

        matrix = self._corr_mat
        target_corr = (
            self.get_target_correlations() if self._view.target_col and self._view.target_col in matrix.index else None
        )

        return CorrelationResult(
            matrix=matrix,
            pretty_by_col=dict(self._view.pretty_by_col),
            feature_pairs=self.get_top_correlated_pairs(n=top_n_pairs),
            target_correlations=target_corr,
        )
