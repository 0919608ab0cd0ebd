"""Configuration of the EDA report run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from wine_eda.data.red_wine_columns import RedWineColumn as Col
from wine_eda.utils.plotting_config import PlottingConfig


DEFAULT_NESTED_INCREMENTS: tuple[tuple[str, ...], ...] = (
    (Col.VOLATILE_ACIDITY,),
    (Col.CITRIC_ACID, Col.SULPHATES, Col.ALCOHOL, Col.CHLORIDES, Col.DENSITY, Col.PH),
    (Col.FIXED_ACIDITY, Col.RESIDUAL_SUGAR, Col.FREE_SULFUR_DIOXIDE, Col.TOTAL_SULFUR_DIOXIDE),
)
"""Predictors added by each nested model (m1 ⊂ m2 ⊂ m3)."""

DEFAULT_SCATTER_PAIRS: tuple[tuple[str, str], ...] = (
    (Col.FIXED_ACIDITY, Col.CITRIC_ACID),
    (Col.FIXED_ACIDITY, Col.DENSITY),
    (Col.FIXED_ACIDITY, Col.PH),
    (Col.ALCOHOL, Col.DENSITY),
    (Col.VOLATILE_ACIDITY, Col.CITRIC_ACID),
    (Col.FREE_SULFUR_DIOXIDE, Col.TOTAL_SULFUR_DIOXIDE),
)
"""Attribute pairs drawn as annotated scatter plots in the bivariate section."""

DEFAULT_QUALITY_SCATTERS: tuple[str, ...] = (Col.ALCOHOL, Col.VOLATILE_ACIDITY, Col.SULPHATES, Col.CITRIC_ACID)
"""Attributes plotted against (jittered) quality."""


@dataclass(frozen=True)
class ColoredScatterSpec:
    """One three-attribute scatter: ``y`` against ``x`` coloured by ``hue``."""

    x: str
    y: str
    hue: str = Col.TARGET
    hue_quartiles: bool = False


DEFAULT_COLORED_SCATTERS: tuple[ColoredScatterSpec, ...] = (
    ColoredScatterSpec(Col.ALCOHOL, Col.VOLATILE_ACIDITY),
    ColoredScatterSpec(Col.ALCOHOL, Col.SULPHATES),
    ColoredScatterSpec(Col.CITRIC_ACID, Col.VOLATILE_ACIDITY),
    ColoredScatterSpec(Col.ALCOHOL, Col.SULPHATES, hue=Col.DENSITY, hue_quartiles=True),
    ColoredScatterSpec(Col.CITRIC_ACID, Col.FIXED_ACIDITY, hue=Col.PH, hue_quartiles=True),
    ColoredScatterSpec(Col.FIXED_ACIDITY, Col.DENSITY, hue=Col.ALCOHOL, hue_quartiles=True),
)


@dataclass
class ReportConfig:
    """Inputs, outputs and tunables of :func:`wine_eda.report.pipeline.build_report`.

    Attributes:
        csv_path: Input CSV (``None`` resolves the bundled ``red_wine`` dataset).
        output_path: Destination of the rendered HTML document.
        title: Document title.
        nested_increments: Predictors added by each nested regression model.
        model_names: Names of the nested models (same length as ``nested_increments``).
        scatter_pairs: Attribute pairs for the annotated scatter plots.
        n_top_pairs: Number of most-correlated pairs additionally drawn as scatters.
        quality_scatters: Attributes plotted against jittered quality.
        colored_scatters: Scatter plots coloured by quality or by quartiles of a third attribute.
        quality_jitter: Half-width of the vertical jitter applied to quality.
        seed: Seed of every jitter generator in the run.
        cv_folds: K-fold CV for the regression metrics (``None`` disables CV).
        interactive: Embed an interactive Plotly version of the first coloured scatter.
        figure_dpi: Resolution of the embedded PNG figures.
        plot_cfg: Plot styling applied before any figure is drawn.
    """

    csv_path: Path | None = None
    output_path: Path = Path("red_wine_eda_report.html")
    title: str = "Red Wine Quality: Exploratory Data Analysis"
    nested_increments: tuple[tuple[str, ...], ...] = DEFAULT_NESTED_INCREMENTS
    model_names: tuple[str, ...] = ("m1", "m2", "m3")
    scatter_pairs: tuple[tuple[str, str], ...] = DEFAULT_SCATTER_PAIRS
    n_top_pairs: int = 4
    quality_scatters: tuple[str, ...] = DEFAULT_QUALITY_SCATTERS
    colored_scatters: tuple[ColoredScatterSpec, ...] = DEFAULT_COLORED_SCATTERS
    quality_jitter: float = 0.3
    seed: int = 42
    cv_folds: int | None = 5
    interactive: bool = False
    figure_dpi: int = 110
    plot_cfg: PlottingConfig = field(default_factory=PlottingConfig)

    def __post_init__(self) -> None:
        if self.csv_path is not None:
            self.csv_path = Path(self.csv_path)
        self.output_path = Path(self.output_path)

        if not self.nested_increments or any(not step for step in self.nested_increments):
            raise ValueError("nested_increments must contain at least one non-empty predictor step")
        if len(self.model_names) != len(self.nested_increments):
            raise ValueError(
                f"Got {len(self.model_names)} model names for {len(self.nested_increments)} nested models",
            )
        if self.cv_folds is not None and self.cv_folds < 2:
            raise ValueError(f"cv_folds must be >= 2 or None, got {self.cv_folds}")
        if self.n_top_pairs < 0:
            raise ValueError(f"n_top_pairs must be non-negative, got {self.n_top_pairs}")
        if self.quality_jitter < 0:
            raise ValueError(f"quality_jitter must be non-negative, got {self.quality_jitter}")
