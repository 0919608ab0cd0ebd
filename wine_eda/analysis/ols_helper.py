"""OLS model-fitting helpers and fit metrics.

The helpers in this module fit classical linear regression models with
ordinary least squares (OLS) through statsmodels, one closed-form solve per
model, and package the coefficients together with standard fit metrics
(:math:`R^2`, adjusted :math:`R^2`, RMSE, AIC/BIC) and variance inflation
factors. Quality is an ordinal score, so the regression treats it as numeric;
callers must pass the numeric table (``RedWineDataset.df_numeric``).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf
from sklearn.linear_model import LinearRegression
from sklearn.metrics import mean_absolute_error, mean_squared_error
from sklearn.model_selection import KFold, cross_val_score
from statsmodels.stats.outliers_influence import variance_inflation_factor

from ..data import WQCol


if TYPE_CHECKING:
    from matplotlib.figure import Figure


_INTERCEPT_COLS = ("Intercept", "const")


@dataclass(frozen=True)
class MetricsResult:
    r"""Fit and generalization metrics for OLS models.

    Key equations (with :math:`n` observations and :math:`p` predictors):

    - :math:`R^2 = 1 - \frac{SS_{res}}{SS_{tot}}`
    - :math:`\bar{R}^2 = 1 - (1 - R^2)\frac{n-1}{n-p-1}`
    - :math:`\text{RMSE} = \sqrt{\frac{1}{n}\sum_i (y_i - \hat{y}_i)^2}`
    - :math:`\text{AIC} = 2k - 2\log L`, :math:`\text{BIC} = k\log n - 2\log L`

    Information criteria are most meaningful for *relative* comparisons across
    models fit on the same response and dataset (lower is better).
    """

    r2: float
    """Coefficient of determination: :math:`1 - SS_{res}/SS_{tot}`.

    The fraction of quality variance explained by the model. NaN when the
    response has zero variance.
    """

    adj_r2: float | None
    """Adjusted :math:`R^2` penalising extra predictors."""

    rmse: float
    """Root mean squared error (in quality points)."""

    mae: float
    """Mean absolute error (in quality points)."""

    aic: float | None
    """Akaike Information Criterion."""

    bic: float | None
    """Bayesian Information Criterion."""

    n_obs: float | None
    """Number of observations used in the fit (:math:`n`)."""

    cv_scores: list[float] | None = None
    """Raw cross-validation RMSE scores (if enabled)."""

    cv_rmse: float | None = None
    """Mean CV RMSE when cross-validation is configured (lower is better)."""

    def __repr__(self) -> str:
        def fmt(value: float | None, decimals: int = 3) -> str:
            if value is None:
                return "nan"
            return f"{value:.{decimals}f}"

        fit_block = (
            "Fit["
            f"r2={fmt(self.r2)}, "
            f"adj_r2={fmt(self.adj_r2)}, "
            f"rmse={fmt(self.rmse)}, "
            f"mae={fmt(self.mae)}, "
            f"aic={fmt(self.aic)}, "
            f"bic={fmt(self.bic)}"
            "]"
        )
        cv_block = ""
        if self.cv_rmse is not None or self.cv_scores is not None:
            folds = len(self.cv_scores) if self.cv_scores is not None else 0
            cv_block = f" CV[rmse={fmt(self.cv_rmse)}, folds={folds}]"
        n_obs = f" n={int(self.n_obs)}" if self.n_obs is not None else ""
        return f"MetricsResult({fit_block}{cv_block}{n_obs})"


@dataclass(frozen=True)
class RegressionResult:
    """Packaged OLS fit and metrics for reporting.

    Encapsulates the fitted statsmodels result, the design matrix used for the
    fit, residuals, VIFs and convenience plotting helpers.
    """

    model: sm.regression.linear_model.RegressionResultsWrapper
    design_matrix: pd.DataFrame
    y: pd.Series
    metrics: MetricsResult
    residuals: pd.Series
    predictions: pd.Series
    vif: pd.Series

    @property
    def fitted(self) -> pd.Series:
        """Alias for fitted values aligned with ``residuals``."""
        return self.predictions

    @property
    def r2(self) -> float:
        """Coefficient of determination :math:`R^2` of the fitted model."""
        return self.metrics.r2

    @property
    def adj_r2(self) -> float:
        """Adjusted :math:`R^2` correcting for the number of regressors."""
        return self.metrics.adj_r2 if self.metrics.adj_r2 is not None else float("nan")

    @property
    def coefficients(self) -> pd.Series:
        """Fitted coefficients in design order, intercept first."""
        return self.model.params.copy()

    @property
    def predictors(self) -> list[str]:
        """Predictor names (intercept excluded)."""
        return [col for col in self.design_matrix.columns if col not in _INTERCEPT_COLS]

    def coefficient_table(self) -> pd.DataFrame:
        """Coefficients with standard errors, t statistics and p-values."""
        return pd.DataFrame(
            {
                "coef": self.model.params,
                "std_err": self.model.bse,
                "t": self.model.tvalues,
                "p_value": self.model.pvalues,
            },
        ).rename_axis("term")

    # ------------------------------------------------------------------ plotting shortcuts
    def plot_residuals_vs_fitted(self, **kwargs: object) -> Figure:
        r"""Plot residuals :math:`e_i = y_i - \hat{y}_i` against fitted values.

        Quality takes only integer values, so the cloud shows diagonal stripes
        (one per score); a flat LOWESS smooth still indicates no missing
        non-linear structure.
        """
        from wine_eda.plotting.regression_plots import plot_residuals_vs_fitted  # noqa: PLC0415

        return plot_residuals_vs_fitted(self, **kwargs)

    def plot_qq(self, **kwargs: object) -> Figure:
        """Plot a normal Q-Q plot of studentized residuals."""
        from wine_eda.plotting.regression_plots import plot_qq  # noqa: PLC0415

        return plot_qq(self, **kwargs)


def _require_numeric_target(df: pd.DataFrame, target_col: str) -> None:
    if target_col not in df.columns:
        raise KeyError(f"Target column '{target_col}' not found in data")
    if not pd.api.types.is_numeric_dtype(df[target_col]):
        raise ValueError(
            f"Target column '{target_col}' must be numeric (got {df[target_col].dtype}); "
            "fit on the numeric table, e.g. RedWineDataset.df_numeric",
        )


def fit_ols_formula(
    df: pd.DataFrame,
    *,
    rhs: str,
    target_col: str = WQCol.TARGET,
    cv_folds: int | None = None,
    shuffle_cv: bool = False,
    random_state: int | None = None,
) -> RegressionResult:
    """Fit OLS using a Patsy formula and return the packaged result.

    This uses ``statsmodels.formula.api.ols`` with a formula like
    ``"{target} ~ {rhs}"``.
    """
    _require_numeric_target(df, target_col)
    model = smf.ols(f"{target_col} ~ {rhs}", data=df).fit()
    return diagnose_ols(
        model,
        cv_folds=cv_folds,
        shuffle_cv=shuffle_cv,
        random_state=random_state,
    )


def fit_ols_predictors(
    df: pd.DataFrame,
    predictors: Sequence[str],
    *,
    target_col: str = WQCol.TARGET,
    cv_folds: int | None = None,
    shuffle_cv: bool = False,
    random_state: int | None = None,
) -> RegressionResult:
    """Fit ``target ~ p1 + p2 + ...`` for an ordered list of predictor columns.

    Raises:
        KeyError: If a predictor is not a column of ``df``.
        ValueError: If ``predictors`` is empty or the target is not numeric.
    """
    if not predictors:
        raise ValueError("At least one predictor is required")
    missing = [p for p in predictors if p not in df.columns]
    if missing:
        raise KeyError(f"Predictor column(s) {missing} not found in data")

    return fit_ols_formula(
        df,
        rhs=" + ".join(str(p) for p in predictors),
        target_col=target_col,
        cv_folds=cv_folds,
        shuffle_cv=shuffle_cv,
        random_state=random_state,
    )


def fit_ols_design(
    design_matrix_Xy: pd.DataFrame,
    *,
    target_col: str = WQCol.TARGET,
    add_intercept: bool | None = None,
    cv_folds: int | None = None,
    shuffle_cv: bool = False,
    random_state: int | None = None,
) -> RegressionResult:
    """Fit OLS on a design matrix (including target) and return the packaged result.

    Args:
        design_matrix_Xy: DataFrame containing predictors and the target column.
        target_col: Name of the target column contained in ``design_matrix_Xy``.
        add_intercept: Whether to add an intercept column. If ``None``, the
            function adds one only when no intercept column is present.
    """
    _require_numeric_target(design_matrix_Xy, target_col)
    x_matrix = design_matrix_Xy.drop(columns=[target_col]).copy()
    y = design_matrix_Xy[target_col].copy()
    if add_intercept is None:
        add_intercept = not any(col in x_matrix.columns for col in _INTERCEPT_COLS)
    if add_intercept:
        x_matrix = sm.add_constant(x_matrix, has_constant="add")

    model = sm.OLS(y.astype(float), x_matrix.astype(float)).fit()
    return diagnose_ols(
        model,
        cv_folds=cv_folds,
        shuffle_cv=shuffle_cv,
        random_state=random_state,
    )


def diagnose_ols(
    model: sm.regression.linear_model.RegressionResultsWrapper,
    *,
    cv_folds: int | None = None,
    shuffle_cv: bool = False,
    random_state: int | None = None,
) -> RegressionResult:
    """Package fitted values, residuals, metrics and VIFs of an already-fitted OLS model."""
    design_matrix = design_matrix_from_model(model)
    predictions = pd.Series(model.fittedvalues, index=design_matrix.index)
    residuals = pd.Series(model.resid, index=design_matrix.index)
    y = pd.Series(model.model.endog, index=design_matrix.index, name=getattr(model.model, "endog_names", None))

    metrics = compute_metrics(
        model=model,
        y_true=y,
        y_pred=predictions,
        design_matrix=design_matrix,
        cv_folds=cv_folds,
        shuffle_cv=shuffle_cv,
        random_state=random_state,
    )

    return RegressionResult(
        model=model,
        design_matrix=design_matrix,
        y=y,
        metrics=metrics,
        residuals=residuals,
        predictions=predictions,
        vif=compute_vif(design_matrix),
    )


def design_matrix_from_model(
    model: sm.regression.linear_model.RegressionResultsWrapper,
) -> pd.DataFrame:
    """Return the fitted design matrix used by a statsmodels OLS result."""
    row_labels = getattr(getattr(model.model, "data", None), "row_labels", None)
    return pd.DataFrame(model.model.exog, columns=model.model.exog_names, index=row_labels)


def _drop_intercept_cols(design_matrix: pd.DataFrame) -> pd.DataFrame:
    cols_to_drop = [col for col in _INTERCEPT_COLS if col in design_matrix.columns]
    return design_matrix.drop(columns=cols_to_drop) if cols_to_drop else design_matrix


def compute_vif(design_matrix: pd.DataFrame) -> pd.Series:
    r"""Compute VIF per regressor (intercept excluded).

    :math:`VIF_j = \frac{1}{1 - R_j^2}`, where :math:`R_j^2` comes from regressing
    predictor :math:`j` on all other predictors (intercept included). For a
    single regressor VIF is defined as 1.0.
    """
    x = _drop_intercept_cols(design_matrix)
    if x.shape[1] == 0:
        return pd.Series(dtype=float)
    if x.shape[1] == 1:
        return pd.Series({x.columns[0]: 1.0})
    with_const = sm.add_constant(x, has_constant="add")
    return pd.Series(
        {
            col: float(variance_inflation_factor(with_const.values, idx))
            for idx, col in enumerate(with_const.columns)
            if col != "const"
        },
    )


def compute_cv_scores(
    design_matrix: pd.DataFrame,
    y: pd.Series,
    *,
    cv_folds: int,
    shuffle: bool = False,
    random_state: int | None = None,
) -> list[float]:
    """Compute cross-validation RMSE scores for a linear regression baseline."""
    has_intercept = any(col in design_matrix.columns for col in _INTERCEPT_COLS)
    splitter = KFold(
        n_splits=cv_folds,
        shuffle=shuffle,
        random_state=(random_state if shuffle else None),
    )
    scores = cross_val_score(
        LinearRegression(fit_intercept=not has_intercept),
        design_matrix,
        y,
        cv=splitter,
        scoring="neg_root_mean_squared_error",
        error_score="raise",
    )
    return [float(s) for s in -np.asarray(scores)]


def compute_metrics(
    model: sm.regression.linear_model.RegressionResultsWrapper,
    y_true: pd.Series,
    y_pred: pd.Series,
    design_matrix: pd.DataFrame,
    *,
    cv_folds: int | None = None,
    shuffle_cv: bool = False,
    random_state: int | None = None,
) -> MetricsResult:
    """Compute fit, information criteria, and optional CV scores.

    Metrics are computed on in-sample residuals, with optional K-fold CV to
    estimate generalization (mean over folds).
    """
    cv_scores: list[float] | None = None
    cv_rmse: float | None = None
    if cv_folds and cv_folds > 1:
        cv_scores = compute_cv_scores(
            design_matrix,
            y_true,
            cv_folds=cv_folds,
            shuffle=shuffle_cv,
            random_state=random_state,
        )
        cv_rmse = float(np.mean(cv_scores))

    return MetricsResult(
        r2=float(model.rsquared),
        adj_r2=float(model.rsquared_adj) if hasattr(model, "rsquared_adj") else None,
        rmse=float(np.sqrt(mean_squared_error(y_true, y_pred))),
        mae=float(mean_absolute_error(y_true, y_pred)),
        aic=float(model.aic) if hasattr(model, "aic") else None,
        bic=float(model.bic) if hasattr(model, "bic") else None,
        n_obs=float(model.nobs) if hasattr(model, "nobs") else None,
        cv_scores=cv_scores,
        cv_rmse=cv_rmse,
    )


def compare_models(models: dict[str, RegressionResult]) -> pd.DataFrame:
    """Tabulate predictor count, R², adj. R², AIC/BIC and RMSE for fitted models (insertion order)."""
    rows = [
        {
            "model": name,
            "n_predictors": len(res.predictors),
            "r2": res.r2,
            "adj_r2": res.adj_r2,
            "aic": res.metrics.aic,
            "bic": res.metrics.bic,
            "rmse": res.metrics.rmse,
        }
        for name, res in models.items()
    ]
    return pd.DataFrame(rows).set_index("model")
