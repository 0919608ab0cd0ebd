"""Loading and type coercion for the red wine quality dataset."""

import logging
from pathlib import Path

import pandas as pd

from wine_eda.utils.paths import get_dataset_path

from .base_dataset import BaseDataset
from .red_wine_columns import RedWineColumn as Col


logger = logging.getLogger(__name__)

_INDEX_COLUMN_PATTERN = r"^Unnamed: \d+$"


class RedWineDataset(BaseDataset):
    """Loading and type coercion for the [red wine quality dataset](https://archive.ics.uci.edu/dataset/186/wine+quality).

    The table is loaded once and treated as read-only afterwards: derived columns
    (e.g. quartile bins) are always added to copies of :attr:`df`.

    **Example workflow**:
    >>> from wine_eda.data import RedWineDataset, WQCol
    >>> ds = RedWineDataset.from_csv()
    >>> summary = ds.make_summary_analyzer().fit().result()
    >>> corr = ds.make_correlation_analyzer(include_target=False).fit().result()
    >>> summary.shape, corr.matrix.shape
    ((1599, 12), (11, 11))
    >>> ds.df[WQCol.QUALITY].cat.categories.tolist()
    [3, 4, 5, 6, 7, 8]
    """

    Col = Col

    def __init__(self, df: pd.DataFrame | None = None) -> None:
        super().__init__(df)
        self._df_numeric: pd.DataFrame | None = None

    @classmethod
    def from_csv(cls, csv_path: str | Path | None = None) -> "RedWineDataset":
        """Load the red wine dataset from a CSV file.

        - Discard the row-index column written by R/pandas exports
        - Normalize column names
        - Validate that all twelve columns are present and fully numeric
        - Convert ``quality`` to an ordered categorical

        Args:
            csv_path: Path to the CSV file (defaults to ``wineQualityReds.csv`` in the data directory)

        Returns:
            RedWineDataset instance with loaded and cleaned data

        Raises:
            FileNotFoundError: If the CSV file does not exist.
            ValueError: If the file lacks required columns or holds non-numeric/missing values.
        """
        csv_path = get_dataset_path("red_wine") if csv_path is None else Path(csv_path)

        wine_df = (
            pd.read_csv(csv_path)
            .pipe(cls._drop_index_column)
            .pipe(cls._normalize_col_names)
            .pipe(cls._select_known_columns)
            .pipe(cls._convert_data_types)
        )
        logger.info("Loaded %d rows x %d columns from %s", *wine_df.shape, csv_path)

        return cls(df=wine_df)

    @staticmethod
    def _drop_index_column(df: pd.DataFrame) -> pd.DataFrame:
        """Drop unnamed leading index columns (header cell left empty in the CSV)."""
        index_cols = df.columns[df.columns.astype(str).str.match(_INDEX_COLUMN_PATTERN)]
        return df.drop(columns=index_cols).reset_index(drop=True)

    @staticmethod
    def _normalize_col_names(df: pd.DataFrame) -> pd.DataFrame:
        """Standardize column names to match RedWineColumn enum.

        Strip whitespace, convert to lowercase, replace dots/spaces/slashes/hyphens with underscores, collapse multiple underscores
        """
        return df.set_axis(
            df.columns.astype(str)
            .str.strip()
            .str.lower()
            .str.replace(r"[\s./\-]+", "_", regex=True)
            .str.replace(r"_+", "_", regex=True),
            axis=1,
        )

    @staticmethod
    def _select_known_columns(df: pd.DataFrame) -> pd.DataFrame:
        """Reorder to CSV column order, fail on missing columns and drop unknown ones."""
        expected = Col.numeric_columns()
        missing = [col for col in expected if col not in df.columns]
        if missing:
            raise ValueError(f"Malformed wine CSV: missing column(s) {missing}; found {df.columns.to_list()}")

        extra = df.columns.difference(expected).to_list()
        if extra:
            logger.warning("Ignoring unexpected column(s): %s", extra)
        return df.loc[:, expected]

    @staticmethod
    def _convert_data_types(df: pd.DataFrame) -> pd.DataFrame:
        """Coerce inputs to float and ``quality`` to an ordered categorical.

        The categories are the observed scores, sorted ascending.
        """
        converted = df.apply(pd.to_numeric, errors="coerce")

        n_invalid = converted.isna().sum()
        if n_invalid.any():
            bad = n_invalid[n_invalid > 0].to_dict()
            raise ValueError(f"Malformed wine CSV: missing or non-numeric values per column {bad}")

        quality = converted[Col.TARGET]
        if not (quality % 1 == 0).all():
            raise ValueError("Malformed wine CSV: quality scores must be integers")

        quality = quality.astype(int)
        quality_dtype = pd.CategoricalDtype(sorted(quality.unique()), ordered=True)

        return converted.astype(dict.fromkeys(Col.input_columns(), "float64")).assign(
            **{Col.TARGET: quality.astype(quality_dtype)},
        )

    @property
    def df_numeric(self) -> pd.DataFrame:
        """The table with ``quality`` coerced back to ``int`` for correlation and regression."""
        if self._df_numeric is None:
            self._df_numeric = self.df.assign(**{Col.TARGET: self.quality_numeric})
        return self._df_numeric

    @property
    def quality_numeric(self) -> pd.Series:
        """Quality scores as integers."""
        return self.df[Col.TARGET].astype(int)

    @property
    def quality_levels(self) -> list[int]:
        """Observed quality scores in ascending order."""
        return [int(level) for level in self.df[Col.TARGET].cat.categories]

    def range_violations(self) -> pd.DataFrame:
        """List values that fall outside each column's plausible range.

        Returns:
            DataFrame with columns ``column``, ``row``, ``value``, ``lower`` and ``upper``;
            empty when every value is plausible.
        """
        frames = []
        numeric = self.df_numeric
        for col in Col.numeric_columns():
            lower, upper = Col(col).plausible_range
            values = numeric[col]
            outside = values[~values.between(lower, upper)]
            if not outside.empty:
                frames.append(
                    pd.DataFrame(
                        {"column": col, "row": outside.index, "value": outside.to_numpy(), "lower": lower, "upper": upper},
                    ),
                )
        if not frames:
            return pd.DataFrame(columns=["column", "row", "value", "lower", "upper"])

        violations = pd.concat(frames, ignore_index=True)
        logger.warning("%d value(s) outside plausible ranges", len(violations))
        return violations
