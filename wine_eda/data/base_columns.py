"""Base column definitions and metadata structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


@dataclass(frozen=True)
class HistogramSpec:
    """Default histogram settings for a column.

    Attributes:
        bins: Number of bins or a numpy binning rule (ignored when ``binwidth`` is set).
        binwidth: Width of each bin in data units (log10 units when ``log_scale`` is set).
        log_scale: Draw the x axis on a log10 scale.
        xlim: Optional ``(lower, upper)`` axis limits used to cut off long tails.
    """

    bins: int | str = "auto"
    binwidth: float | None = None
    log_scale: bool = False
    xlim: tuple[float, float] | None = None


@dataclass(frozen=True)
class ColumnMetadata:
    """Metadata for a dataset column.

    Attributes:
        cleaned_name: Standardized column name used in DataFrames.
        dtype: Expected Python/pandas data type as a string.
        pretty_name: Human-readable name for use in plots and visualizations.
        unit: Measurement unit (empty for unitless columns).
        plausible_range: Inclusive ``(lower, upper)`` bounds a valid measurement falls into.
        histogram: Default histogram settings for univariate plots.
    """

    original_name: str
    """Column name as it appears in the raw CSV file."""
    cleaned_name: str
    dtype: str
    pretty_name: str
    unit: str = ""
    plausible_range: tuple[float, float] | None = None
    histogram: HistogramSpec = field(default_factory=HistogramSpec)


class BaseColumn(StrEnum):
    """Base class for dataset column enums.

    All derived column enums must define a TARGET member to specify
    the target variable for the dataset.

    Subclasses must implement:
    - metadata(): Return ColumnMetadata for each enum member
    - numeric_columns(): Return list of numeric column names
    - identifier_columns(): Return list of identifier column names
    """

    TARGET: str

    def metadata(self) -> ColumnMetadata:
        """Get metadata for this column.

        Raises:
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement metadata() method")

    @classmethod
    def numeric_columns(cls) -> list[str]:
        """Get all numeric column names (target included).

        Raises:
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError(f"{cls.__name__} must implement numeric_columns() method")

    @classmethod
    def identifier_columns(cls) -> list[str]:
        """Get identifier column names.

        Raises:
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError(f"{cls.__name__} must implement identifier_columns() method")

    @classmethod
    def feature_columns(cls, *, exclude_target: bool = False) -> list[str]:
        """Get all feature column names.

        Args:
            exclude_target: If True, exclude the target from features.

        Returns:
            List of feature column names.
        """
        features = cls.numeric_columns()
        if exclude_target:
            features = list(filter(lambda f: f != cls.TARGET, features))
        return features

    @property
    def pretty_name(self) -> str:
        """Get the human-readable name for plots and visualizations."""
        return self.metadata().pretty_name

    @property
    def original_name(self) -> str:
        """Get the original column name from the CSV file."""
        return self.metadata().original_name

    @property
    def dtype_name(self) -> str:
        """Get the expected data type as a string."""
        return self.metadata().dtype

    @property
    def unit(self) -> str:
        """Get the measurement unit."""
        return self.metadata().unit

    @property
    def plausible_range(self) -> tuple[float, float] | None:
        """Get the inclusive plausible value range."""
        return self.metadata().plausible_range

    @property
    def histogram(self) -> HistogramSpec:
        """Get the default histogram settings for this column."""
        return self.metadata().histogram
