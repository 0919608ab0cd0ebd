"""End-to-end EDA report: load, summarise, plot, regress, render.

Every stage works on the same loaded-once :class:`RedWineDataset`; none of them
mutates it. Sections are assembled in memory and the HTML is written only after
all stages succeeded, so a failing stage aborts the run without output.
"""

from __future__ import annotations

import logging
from pathlib import Path

from wine_eda.analysis import (
    CorrelationResult,
    ModelRegistry,
    SummaryResult,
    cumulative_predictor_sets,
    quartile_bins,
)
from wine_eda.data import RedWineDataset, WQCol
from wine_eda.plotting import (
    plot_boxes_by_quality,
    plot_colored_scatter,
    plot_colored_scatter_plotly,
    plot_correlation_heatmap,
    plot_histograms,
    plot_pair_scatters,
    plot_quality_counts,
    plot_r2_by_model,
    plot_regression_diagnostics,
    plot_standardization_comparison,
    plot_target_correlations,
    plot_top_correlated_pairs,
)

from .config import ReportConfig
from .renderer import ReportFigure, ReportRenderer, ReportSection, ReportTable


logger = logging.getLogger(__name__)


def _fmt_range(lo: float, hi: float) -> str:
    return f"{lo:.4g} to {hi:.4g}"


def _join(items: list[str]) -> str:
    if len(items) <= 1:
        return "".join(items)
    return ", ".join(items[:-1]) + f" and {items[-1]}"


# ---------------------------------------------------------------------------- stages
def summary_section(dataset: RedWineDataset, summary: SummaryResult) -> ReportSection:
    """Dataset shape, descriptive statistics, zero counts and plausibility checks."""
    n_rows, n_cols = summary.shape
    inputs = WQCol.input_columns()
    levels = dataset.quality_levels
    counts = summary.quality_counts

    paragraphs = [
        f"The table holds {n_rows} red wines described by {len(inputs)} physicochemical "
        f"attributes and one sensory quality score ({n_cols} columns in total).",
    ]
    if counts is not None and counts.sum() > 0:
        mid = counts[counts.index.isin([5, 6])].sum()
        paragraphs.append(
            f"Quality is an ordinal score; the observed values range from {levels[0]} to {levels[-1]} "
            f"(nominal scale 0 to 10). Scores 5 and 6 account for {mid / counts.sum():.1%} of the wines, "
            f"so very poor and excellent wines are rare.",
        )

    zeros = summary.zero_counts[summary.zero_counts > 0]
    if not zeros.empty:
        paragraphs.append(
            "Exact zeros occur in "
            + _join([f"{summary.pretty_by_col.get(col, col)} ({n} rows)" for col, n in zeros.items()])
            + ".",
        )

    violations = dataset.range_violations()
    if violations.empty:
        paragraphs.append("Every value lies within the plausible range documented for its attribute.")
    else:
        paragraphs.append(
            f"{len(violations)} value(s) lie outside the documented plausible ranges; "
            "they are kept in all analyses and listed below.",
        )

    tables = [
        ReportTable.from_frame(summary.describe_pretty(), "Descriptive statistics per attribute"),
    ]
    if counts is not None:
        tables.append(
            ReportTable.from_frame(
                counts.rename("wines").rename_axis("quality").to_frame().T,
                "Wines per quality score",
                float_format="{:.0f}",
            ),
        )
    if not violations.empty:
        tables.append(ReportTable.from_frame(violations, "Values outside plausible ranges", index=False))

    return ReportSection("Dataset Summary", paragraphs, tables)


def univariate_section(dataset: RedWineDataset, config: ReportConfig) -> ReportSection:
    """Histograms of every attribute using the column presets, plus quality counts."""
    view = dataset.plot_view()
    inputs = WQCol.input_columns()
    skew = dataset.df_numeric[inputs].skew()
    log_scaled = [WQCol(col).pretty_name for col in inputs if WQCol(col).histogram.log_scale]
    skewed = [WQCol(col).pretty_name for col, s in skew.sort_values(ascending=False).items() if s > 1]

    paragraphs = [
        "Each attribute is shown with its own binning. "
        + (f"{_join(skewed)} are strongly right-skewed (skewness above 1). " if skewed else "")
        + (f"{_join(log_scaled)} are drawn on a logarithmic x axis, " if log_scaled else "")
        + "which reveals the shape of the bulk of the distribution instead of the long tail.",
        f"Alcohol ranges {_fmt_range(*dataset.df[WQCol.ALCOHOL].agg(['min', 'max']))} % by volume and "
        f"density {_fmt_range(*dataset.df[WQCol.DENSITY].agg(['min', 'max']))} g/cm³; the median pH is "
        f"{dataset.df[WQCol.PH].median():.2f} with skewness {skew[WQCol.PH]:.2f}.",
    ]
    figures = [
        ReportFigure.from_matplotlib(plot_quality_counts(view), "Number of wines per quality score", dpi=config.figure_dpi),
        ReportFigure.from_matplotlib(
            plot_histograms(view, inputs),
            "Histograms of the input attributes (per-attribute bins, log scale where noted)",
            dpi=config.figure_dpi,
        ),
        ReportFigure.from_matplotlib(
            plot_standardization_comparison(dataset, inputs),
            "Boxplots on the raw and the standardized scale",
            dpi=config.figure_dpi,
        ),
    ]
    return ReportSection("Univariate Analysis", paragraphs, figures=figures)


def _scatter_pairs(config: ReportConfig, correlation: CorrelationResult) -> list[tuple[str, str]]:
    """Configured pairs followed by the strongest input pairs not already present."""
    pairs = [tuple(pair) for pair in config.scatter_pairs]
    seen = {frozenset(pair) for pair in pairs}
    top = correlation.feature_pairs
    for a, b in top[["feature_a", "feature_b"]].head(config.n_top_pairs).itertuples(index=False, name=None):
        if frozenset((a, b)) not in seen:
            pairs.append((a, b))
            seen.add(frozenset((a, b)))
    return pairs


def bivariate_section(
    dataset: RedWineDataset,
    correlation: CorrelationResult,
    target_correlation: CorrelationResult,
    config: ReportConfig,
) -> ReportSection:
    """Attribute-by-quality boxplots, correlation matrix and annotated scatter plots.

    ``correlation`` covers the 11 inputs only and feeds the matrix table, the
    heatmap and the pair plots. ``target_correlation`` includes quality and
    feeds the correlation-with-quality figure and narrative.
    """
    plot_view = dataset.plot_view()
    numeric_view = dataset.view()
    pretty = correlation.pretty_by_col

    input_pairs = correlation.feature_pairs
    paragraphs = []
    if not input_pairs.empty:
        strongest = input_pairs.iloc[0]
        paragraphs.append(
            f"The strongest linear relationship between two inputs links {pretty[strongest.feature_a]} and "
            f"{pretty[strongest.feature_b]} (r = {strongest.correlation:.2f}). Correlated inputs carry overlapping "
            "information, which matters for the regression models below.",
        )

    target_corr = target_correlation.target_correlations
    if target_corr is not None and not target_corr.empty:
        best, worst = target_corr.iloc[0], target_corr.iloc[-1]
        paragraphs.append(
            f"Among the inputs, {pretty[best.feature]} correlates most positively with quality "
            f"(r = {best.correlation:.2f}) and {pretty[worst.feature]} most negatively "
            f"(r = {worst.correlation:.2f}). No single attribute explains quality on its own.",
        )
    nan_cols = [col for col in correlation.matrix.columns if correlation.matrix[col].isna().all()]
    if nan_cols:
        paragraphs.append(
            f"{_join([pretty.get(c, c) for c in nan_cols])} has zero variance; its correlations are undefined (NaN).",
        )
    paragraphs.append(
        "Scatter plots below print the Pearson coefficient of each pair; quality is jittered vertically "
        f"by ±{config.quality_jitter} so that wines with identical scores do not overlap.",
    )

    figures = [
        ReportFigure.from_matplotlib(
            plot_boxes_by_quality(plot_view, WQCol.input_columns()),
            "Attribute distributions per quality score (diamonds mark the group means)",
            dpi=config.figure_dpi,
        ),
        ReportFigure.from_matplotlib(plot_correlation_heatmap(correlation), "Pearson correlation matrix", dpi=config.figure_dpi),
        ReportFigure.from_matplotlib(
            plot_top_correlated_pairs(correlation),
            "Attribute pairs with the strongest absolute correlation",
            dpi=config.figure_dpi,
        ),
    ]
    if target_corr is not None:
        figures.append(
            ReportFigure.from_matplotlib(plot_target_correlations(target_correlation), "Correlation of each attribute with quality", dpi=config.figure_dpi),
        )
    if config.quality_scatters:
        figures.append(
            ReportFigure.from_matplotlib(
                plot_pair_scatters(
                    numeric_view,
                    [(col, WQCol.TARGET) for col in config.quality_scatters],
                    y_jitter=config.quality_jitter,
                    seed=config.seed,
                ),
                "Quality against selected attributes (quality jittered)",
                dpi=config.figure_dpi,
            ),
        )
    pairs = _scatter_pairs(config, correlation)
    if pairs:
        figures.append(
            ReportFigure.from_matplotlib(
                plot_pair_scatters(numeric_view, pairs, seed=config.seed),
                "Scatter plots of correlated attribute pairs",
                dpi=config.figure_dpi,
            ),
        )

    return ReportSection(
        "Bivariate Analysis",
        paragraphs,
        tables=[ReportTable.from_frame(correlation.matrix_pretty(), "Pearson correlation matrix", float_format="{:.2f}")],
        figures=figures,
    )


def multivariate_section(dataset: RedWineDataset, config: ReportConfig) -> ReportSection:
    """Scatter plots of two attributes coloured by quality or by quartiles of a third."""
    view = dataset.plot_view()
    levels = dataset.quality_levels
    means = dataset.df_numeric.groupby(WQCol.TARGET)[[WQCol.ALCOHOL, WQCol.VOLATILE_ACIDITY, WQCol.SULPHATES]].mean()
    lo, hi = means.loc[levels[0]], means.loc[levels[-1]]
    paragraphs = [
        f"Wines scoring {levels[-1]} average {hi[WQCol.ALCOHOL]:.2f} % alcohol, "
        f"{hi[WQCol.VOLATILE_ACIDITY]:.2f} g/dm³ volatile acidity and {hi[WQCol.SULPHATES]:.2f} g/dm³ sulphates, "
        f"against {lo[WQCol.ALCOHOL]:.2f} %, {lo[WQCol.VOLATILE_ACIDITY]:.2f} and {lo[WQCol.SULPHATES]:.2f} "
        f"for wines scoring {levels[0]}. The coloured scatter plots show how these attributes combine; "
        "the quality groups still overlap in every pair.",
    ]
    binned = list(dict.fromkeys(spec.hue for spec in config.colored_scatters if spec.hue_quartiles))
    for col in binned:
        binning = quartile_bins(dataset.df[col])
        paragraphs.append(
            f"{view.pretty(col)} is split at its quartiles into four groups: "
            + "; ".join(binning.labels)
            + ".",
        )

    figures = []
    for spec in config.colored_scatters:
        hue_label = f"{view.pretty(spec.hue)} quartiles" if spec.hue_quartiles else view.pretty(spec.hue)
        figures.append(
            ReportFigure.from_matplotlib(
                plot_colored_scatter(view, spec.x, spec.y, spec.hue, hue_quartiles=spec.hue_quartiles, seed=config.seed),
                f"{view.pretty(spec.y)} vs {view.pretty(spec.x)}, coloured by {hue_label}",
                dpi=config.figure_dpi,
            ),
        )
    if config.interactive and config.colored_scatters:
        spec = config.colored_scatters[0]
        figures.append(
            ReportFigure.from_plotly(
                plot_colored_scatter_plotly(view, spec.x, spec.y, spec.hue, hue_quartiles=spec.hue_quartiles),
                f"Interactive: {view.pretty(spec.y)} vs {view.pretty(spec.x)}",
            ),
        )
    return ReportSection("Multivariate Analysis", paragraphs, figures=figures)


def regression_section(dataset: RedWineDataset, config: ReportConfig) -> tuple[ReportSection, ModelRegistry]:
    """Fit the nested OLS models against numeric quality and report R², coefficients and diagnostics."""
    registry = ModelRegistry(target_col=WQCol.TARGET)
    registry.fit_nested(
        dataset.df_numeric,
        cumulative_predictor_sets(config.nested_increments),
        names=config.model_names,
        cv_folds=config.cv_folds,
        shuffle_cv=True,
        random_state=config.seed,
    )
    comparison = registry.compare()
    final = list(registry)[-1]

    paragraphs = [
        "Quality is treated as a numeric response and regressed on nested predictor sets, each model "
        "adding attributes to the previous one, so R² can only grow along the sequence.",
    ]
    for entry in registry:
        added = comparison.loc[entry.name, "added"]
        paragraphs.append(
            f"Model {entry.name} ({len(entry.predictors)} predictors, adds {added}): "
            f"R² = {entry.metrics.r2:.3f}, adjusted R² = {entry.metrics.adj_r2:.3f}, RMSE = {entry.metrics.rmse:.3f}.",
        )
    high_vif = final.diag.vif[final.diag.vif > 5].sort_values(ascending=False)
    if not high_vif.empty:
        paragraphs.append(
            f"In {final.name}, "
            + _join([f"{dataset.get_pretty_name(col)} (VIF {v:.1f})" for col, v in high_vif.items()])
            + " are strongly collinear with other predictors, so their individual coefficients are unstable.",
        )
    paragraphs.append(
        f"Even the full model leaves {1 - final.metrics.r2:.0%} of the variance in quality unexplained; "
        "the residuals show stripes because quality only takes integer values.",
    )

    display = comparison.drop(columns=["cv_rmse"]) if comparison["cv_rmse"].isna().all() else comparison
    figures = [
        ReportFigure.from_matplotlib(plot_r2_by_model(comparison), "R² of the nested models", dpi=config.figure_dpi),
        ReportFigure.from_matplotlib(
            plot_regression_diagnostics(final.diag),
            f"Residual diagnostics of {final.name}",
            dpi=config.figure_dpi,
        ),
    ]
    section = ReportSection(
        "Linear Regression",
        paragraphs,
        tables=[
            ReportTable.from_frame(display, "Nested model comparison"),
            ReportTable.from_frame(registry.coefficients(), "Coefficients per model (NaN: term not in model)", float_format="{:.4f}"),
        ],
        figures=figures,
    )
    return section, registry


# ---------------------------------------------------------------------------- driver
def build_sections(dataset: RedWineDataset, config: ReportConfig) -> list[ReportSection]:
    """Run every analysis stage in order and return the report sections."""
    logger.info("Stage 1/5: summary statistics")
    summary = dataset.make_summary_analyzer().fit().result()
    sections = [summary_section(dataset, summary)]

    logger.info("Stage 2/5: univariate plots")
    sections.append(univariate_section(dataset, config))

    logger.info("Stage 3/5: bivariate analysis")
    n_inputs = len(WQCol.input_columns())
    correlation = (
        dataset.make_correlation_analyzer(include_target=False).fit().result(top_n_pairs=n_inputs * (n_inputs - 1) // 2)
    )
    target_correlation = dataset.make_correlation_analyzer(include_target=True).fit().result()
    sections.append(bivariate_section(dataset, correlation, target_correlation, config))

    logger.info("Stage 4/5: multivariate plots")
    sections.append(multivariate_section(dataset, config))

    logger.info("Stage 5/5: nested regression models")
    regression, registry = regression_section(dataset, config)
    sections.append(regression)
    for entry in registry:
        logger.debug("%s: %r", entry.name, entry.metrics)

    return sections


def build_report(config: ReportConfig | None = None, dataset: RedWineDataset | None = None) -> Path:
    """Build the full HTML report.

    Args:
        config: Report settings (defaults to :class:`ReportConfig`).
        dataset: Already loaded dataset; loaded from ``config.csv_path`` when omitted.

    Returns:
        Path of the written HTML document.

    Raises:
        FileNotFoundError: If the input CSV does not exist.
        ValueError: If the input is malformed or the configuration is inconsistent.
        KeyError: If the configuration references an unknown column.
    """
    config = config or ReportConfig()
    config.plot_cfg.apply_global()

    if dataset is None:
        logger.info("Loading dataset")
        dataset = RedWineDataset.from_csv(config.csv_path)

    sections = build_sections(dataset, config)
    return ReportRenderer(config.title).render(sections, config.output_path)
