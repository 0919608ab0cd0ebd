import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import pandas as pd

from ..data import WQCol
from .ols_helper import MetricsResult, RegressionResult, fit_ols_predictors


logger = logging.getLogger(__name__)


@dataclass
class ModelEntry:
    """Typed model registry entry for reporting workflows."""

    name: str
    predictors: list[str]
    diag: RegressionResult

    @property
    def metrics(self) -> MetricsResult:
        return self.diag.metrics


def cumulative_predictor_sets(increments: Sequence[Sequence[str]]) -> list[list[str]]:
    """Turn predictor increments into successively extended predictor lists.

    >>> cumulative_predictor_sets([["a"], ["b", "c"], ["d"]])
    [['a'], ['a', 'b', 'c'], ['a', 'b', 'c', 'd']]
    """
    sets: list[list[str]] = []
    current: list[str] = []
    for step in increments:
        current = [*current, *(str(p) for p in step)]
        sets.append(current)
    return sets


@dataclass
class ModelRegistry:
    """Registry to cache fitted models and compare their fits."""

    target_col: str = WQCol.TARGET
    models: dict[str, ModelEntry] = field(default_factory=dict)

    def add(self, entry: ModelEntry, *, overwrite: bool = False) -> None:
        """Add an entry to the registry (optionally overwriting by name)."""
        name = entry.name
        if name in self.models and not overwrite:
            raise KeyError(f"Model '{name}' already exists in registry.")
        self.models[name] = entry

    def get(self, name: str) -> ModelEntry:
        """Retrieve a model entry by name."""
        if name not in self.models:
            raise KeyError(f"Unknown model '{name}'.")
        return self.models[name]

    def fit(
        self,
        df: pd.DataFrame,
        predictors: Sequence[str],
        *,
        name: str | None = None,
        cv_folds: int | None = None,
        shuffle_cv: bool = False,
        random_state: int | None = None,
        refit: bool = False,
    ) -> RegressionResult:
        """Fit ``target ~ predictors`` by OLS and cache it by name.

        Args:
            df: Numeric DataFrame including all predictors and the target.
            predictors: Ordered predictor column names.
            name: Unique name for the model in the registry.
            cv_folds: Number of CV folds for metrics (if None, no CV).
            shuffle_cv: Whether to shuffle data before CV splitting.
            random_state: Random state for reproducibility.
            refit: If True, refit even if model with `name` exists.
        """
        name = name or f"model_{len(self.models) + 1}"
        if name in self.models and not refit:
            return self.models[name].diag

        diag = fit_ols_predictors(
            df,
            predictors,
            target_col=self.target_col,
            cv_folds=cv_folds,
            shuffle_cv=shuffle_cv,
            random_state=random_state,
        )
        self.add(ModelEntry(name=name, predictors=[str(p) for p in predictors], diag=diag), overwrite=True)
        logger.info("Fitted %s (%d predictors): R2=%.3f", name, len(predictors), diag.r2)

        return diag

    def fit_nested(
        self,
        df: pd.DataFrame,
        predictor_sets: Sequence[Sequence[str]],
        *,
        names: Sequence[str] | None = None,
        cv_folds: int | None = None,
        shuffle_cv: bool = False,
        random_state: int | None = None,
    ) -> list[RegressionResult]:
        """Fit a sequence of nested models, each extending the previous predictor set.

        Because every model contains its predecessor's predictors, in-sample
        :math:`R^2` is non-decreasing along the sequence.

        Raises:
            ValueError: If a predictor set does not strictly extend its predecessor,
                or ``names`` does not match ``predictor_sets`` in length.
        """
        names = list(names) if names is not None else [f"m{i}" for i in range(1, len(predictor_sets) + 1)]
        if len(names) != len(predictor_sets):
            raise ValueError(f"Got {len(names)} names for {len(predictor_sets)} predictor sets")

        previous: set[str] = set()
        for name, predictors in zip(names, predictor_sets, strict=True):
            current = {str(p) for p in predictors}
            if not previous < current:
                raise ValueError(
                    f"Predictor set of '{name}' does not extend the previous model: "
                    f"missing {sorted(previous - current)}, adds {sorted(current - previous)}",
                )
            previous = current

        return [
            self.fit(
                df,
                predictors,
                name=name,
                cv_folds=cv_folds,
                shuffle_cv=shuffle_cv,
                random_state=random_state,
                refit=True,
            )
            for name, predictors in zip(names, predictor_sets, strict=True)
        ]

    def compare(self) -> pd.DataFrame:
        """Return a comparison table for all cached models (insertion order).

        ``added`` lists the predictors each model adds to the previous one.
        """
        rows = []
        seen: list[str] = []
        for entry in self.models.values():
            added = [p for p in entry.predictors if p not in seen]
            seen = entry.predictors
            rows.append(
                {
                    "model": entry.name,
                    "n_predictors": len(entry.predictors),
                    "added": ", ".join(added),
                    "r2": entry.metrics.r2,
                    "adj_r2": entry.metrics.adj_r2,
                    "aic": entry.metrics.aic,
                    "bic": entry.metrics.bic,
                    "rmse": entry.metrics.rmse,
                    "cv_rmse": entry.metrics.cv_rmse,
                },
            )
        return pd.DataFrame(rows).set_index("model")

    def coefficients(self) -> pd.DataFrame:
        """Coefficients per model (columns) and term (rows); NaN where a term is absent."""
        return pd.concat({entry.name: entry.diag.coefficients for entry in self.models.values()}, axis=1, sort=False)

    def __iter__(self) -> Iterator[ModelEntry]:
        return iter(self.models.values())

    def __len__(self) -> int:
        return len(self.models)
