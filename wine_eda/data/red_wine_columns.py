"""Column definitions for the red wine quality dataset."""

from .base_columns import BaseColumn, ColumnMetadata, HistogramSpec


class RedWineColumn(BaseColumn):
    """Column names for the red variant of the [Wine Quality dataset](https://archive.ics.uci.edu/dataset/186/wine+quality) (Cortez et al., 2009).

    Columns:
    - ``fixed_acidity``: float - Non-volatile acids, tartaric acid (g/dm³)
    - ``volatile_acidity``: float - Acetic acid, too much leads to a vinegar taste (g/dm³)
    - ``citric_acid``: float - Minor fixed acid adding freshness (g/dm³)
    - ``residual_sugar``: float - Sugar remaining after fermentation stops (g/dm³)
    - ``chlorides``: float - Sodium chloride (g/dm³)
    - ``free_sulfur_dioxide``: float - Free form of SO2, prevents microbial growth and oxidation (mg/dm³)
    - ``total_sulfur_dioxide``: float - Free plus bound SO2 (mg/dm³)
    - ``density``: float - Density of the wine (g/cm³)
    - ``ph``: float - Acidity on the pH scale
    - ``sulphates``: float - Potassium sulphate, antimicrobial and antioxidant additive (g/dm³)
    - ``alcohol``: float - Alcohol content (% vol.)
    - ``quality``: category - Median sensory score of at least three experts, 0 (very bad) to 10 (excellent)
    """

    # Target variable
    TARGET = "quality"
    """Median sensory score (ordinal, observed 3-8)."""
    QUALITY = TARGET

    # Acids
    FIXED_ACIDITY = "fixed_acidity"
    VOLATILE_ACIDITY = "volatile_acidity"
    CITRIC_ACID = "citric_acid"
    PH = "ph"

    # Sugar and salt
    RESIDUAL_SUGAR = "residual_sugar"
    CHLORIDES = "chlorides"

    # Preservatives
    FREE_SULFUR_DIOXIDE = "free_sulfur_dioxide"
    TOTAL_SULFUR_DIOXIDE = "total_sulfur_dioxide"
    SULPHATES = "sulphates"

    # Body
    DENSITY = "density"
    ALCOHOL = "alcohol"

    def metadata(self) -> ColumnMetadata:
        """Get metadata for this column.

        Returns:
            ColumnMetadata instance with original name, cleaned name, dtype, pretty name and plotting defaults.
        """
        return _COLUMN_METADATA_RED_WINE[self]

    @classmethod
    def numeric_columns(cls) -> list[str]:
        return [*cls.input_columns(), cls.TARGET.value]

    @classmethod
    def input_columns(cls) -> list[str]:
        """The eleven physicochemical input attributes in CSV order."""
        return [col.value for col in _CSV_ORDER if col is not cls.TARGET]

    @classmethod
    def identifier_columns(cls) -> list[str]:
        return []


_CSV_ORDER: tuple[RedWineColumn, ...] = (
    RedWineColumn.FIXED_ACIDITY,
    RedWineColumn.VOLATILE_ACIDITY,
    RedWineColumn.CITRIC_ACID,
    RedWineColumn.RESIDUAL_SUGAR,
    RedWineColumn.CHLORIDES,
    RedWineColumn.FREE_SULFUR_DIOXIDE,
    RedWineColumn.TOTAL_SULFUR_DIOXIDE,
    RedWineColumn.DENSITY,
    RedWineColumn.PH,
    RedWineColumn.SULPHATES,
    RedWineColumn.ALCOHOL,
    RedWineColumn.TARGET,
)

# Column metadata mapping
_COLUMN_METADATA_RED_WINE: dict[RedWineColumn, ColumnMetadata] = {
    RedWineColumn.TARGET: ColumnMetadata(
        original_name="quality",
        cleaned_name="quality",
        dtype="category",
        pretty_name="Quality (score)",
        plausible_range=(0, 10),
        histogram=HistogramSpec(binwidth=1),
    ),
    RedWineColumn.FIXED_ACIDITY: ColumnMetadata(
        original_name="fixed.acidity",
        cleaned_name="fixed_acidity",
        dtype="float64",
        pretty_name="Fixed Acidity (g/dm³)",
        unit="g/dm³",
        plausible_range=(4.0, 16.0),
        histogram=HistogramSpec(binwidth=0.25),
    ),
    RedWineColumn.VOLATILE_ACIDITY: ColumnMetadata(
        original_name="volatile.acidity",
        cleaned_name="volatile_acidity",
        dtype="float64",
        pretty_name="Volatile Acidity (g/dm³)",
        unit="g/dm³",
        plausible_range=(0.1, 1.6),
        histogram=HistogramSpec(binwidth=0.02),
    ),
    RedWineColumn.CITRIC_ACID: ColumnMetadata(
        original_name="citric.acid",
        cleaned_name="citric_acid",
        dtype="float64",
        pretty_name="Citric Acid (g/dm³)",
        unit="g/dm³",
        plausible_range=(0.0, 1.0),
        histogram=HistogramSpec(binwidth=0.01),
    ),
    RedWineColumn.RESIDUAL_SUGAR: ColumnMetadata(
        original_name="residual.sugar",
        cleaned_name="residual_sugar",
        dtype="float64",
        pretty_name="Residual Sugar (g/dm³)",
        unit="g/dm³",
        plausible_range=(0.5, 16.0),
        # long right tail
        histogram=HistogramSpec(bins=50, log_scale=True),
    ),
    RedWineColumn.CHLORIDES: ColumnMetadata(
        original_name="chlorides",
        cleaned_name="chlorides",
        dtype="float64",
        pretty_name="Chlorides (g/dm³)",
        unit="g/dm³",
        plausible_range=(0.01, 0.62),
        histogram=HistogramSpec(bins=50, log_scale=True),
    ),
    RedWineColumn.FREE_SULFUR_DIOXIDE: ColumnMetadata(
        original_name="free.sulfur.dioxide",
        cleaned_name="free_sulfur_dioxide",
        dtype="float64",
        pretty_name="Free SO₂ (mg/dm³)",
        unit="mg/dm³",
        plausible_range=(1.0, 72.0),
        histogram=HistogramSpec(binwidth=1),
    ),
    RedWineColumn.TOTAL_SULFUR_DIOXIDE: ColumnMetadata(
        original_name="total.sulfur.dioxide",
        cleaned_name="total_sulfur_dioxide",
        dtype="float64",
        pretty_name="Total SO₂ (mg/dm³)",
        unit="mg/dm³",
        plausible_range=(6.0, 289.0),
        # two extreme values above 280 flatten the histogram
        histogram=HistogramSpec(binwidth=5, xlim=(0, 200)),
    ),
    RedWineColumn.DENSITY: ColumnMetadata(
        original_name="density",
        cleaned_name="density",
        dtype="float64",
        pretty_name="Density (g/cm³)",
        unit="g/cm³",
        plausible_range=(0.98, 1.05),
        histogram=HistogramSpec(binwidth=0.0005),
    ),
    RedWineColumn.PH: ColumnMetadata(
        original_name="pH",
        cleaned_name="ph",
        dtype="float64",
        pretty_name="pH",
        plausible_range=(2.5, 4.5),
        histogram=HistogramSpec(binwidth=0.02),
    ),
    RedWineColumn.SULPHATES: ColumnMetadata(
        original_name="sulphates",
        cleaned_name="sulphates",
        dtype="float64",
        pretty_name="Sulphates (g/dm³)",
        unit="g/dm³",
        plausible_range=(0.3, 2.0),
        histogram=HistogramSpec(bins=50, log_scale=True),
    ),
    RedWineColumn.ALCOHOL: ColumnMetadata(
        original_name="alcohol",
        cleaned_name="alcohol",
        dtype="float64",
        pretty_name="Alcohol (% vol.)",
        unit="% vol.",
        plausible_range=(8.0, 15.0),
        histogram=HistogramSpec(binwidth=0.1),
    ),
}
