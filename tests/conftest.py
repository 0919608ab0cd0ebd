"""Test configuration for the wine EDA package."""

from pathlib import Path
import sys

import matplotlib
import numpy as np
import pandas as pd
import pytest


matplotlib.use("Agg")

# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


ORIGINAL_COLUMNS = [
    "fixed.acidity",
    "volatile.acidity",
    "citric.acid",
    "residual.sugar",
    "chlorides",
    "free.sulfur.dioxide",
    "total.sulfur.dioxide",
    "density",
    "pH",
    "sulphates",
    "alcohol",
    "quality",
]

N_CITRIC_ZEROS = 12


def make_wine_frame(n_rows: int = 240, seed: int = 7) -> pd.DataFrame:
    """Synthetic red-wine table with the original CSV column names.

    Values stay inside the plausible ranges, quality rises with alcohol and
    sulphates and falls with volatile acidity, every score 3-8 occurs and
    citric acid is exactly zero in the first ``N_CITRIC_ZEROS`` rows.
    """
    rng = np.random.default_rng(seed)
    fixed = rng.uniform(5.0, 12.0, n_rows)
    volatile = rng.uniform(0.15, 1.4, n_rows)
    citric = rng.uniform(0.01, 0.9, n_rows)
    citric[:N_CITRIC_ZEROS] = 0.0
    sugar = np.exp(rng.normal(0.85, 0.35, n_rows)).clip(0.9, 15.0)
    chlorides = np.exp(rng.normal(-2.5, 0.3, n_rows)).clip(0.012, 0.6)
    free_so2 = rng.uniform(2.0, 60.0, n_rows)
    total_so2 = free_so2 + rng.uniform(5.0, 120.0, n_rows)
    density = 0.990 + 0.0007 * fixed + rng.normal(0, 0.0008, n_rows)
    ph = 3.9 - 0.06 * fixed + rng.normal(0, 0.08, n_rows)
    sulphates = rng.uniform(0.35, 1.5, n_rows)
    alcohol = rng.uniform(8.5, 14.5, n_rows)

    latent = 5.6 + 0.35 * (alcohol - 11.5) - 1.2 * (volatile - 0.78) + 0.6 * (sulphates - 0.9)
    quality = np.clip(np.rint(latent + rng.normal(0, 0.5, n_rows)), 3, 8).astype(int)
    quality[:6] = [3, 4, 5, 6, 7, 8]

    values = [fixed, volatile, citric, sugar, chlorides, free_so2, total_so2, density, ph, sulphates, alcohol, quality]
    return pd.DataFrame(dict(zip(ORIGINAL_COLUMNS, values, strict=True)))


@pytest.fixture(scope="session")
def wine_frame() -> pd.DataFrame:
    """Raw synthetic table (original column names)."""
    return make_wine_frame()


@pytest.fixture(scope="session")
def wine_csv(tmp_path_factory, wine_frame) -> Path:
    """Synthetic table written like the published CSV (leading unnamed index column)."""
    path = tmp_path_factory.mktemp("data") / "wineQualityReds.csv"
    wine_frame.set_axis(range(1, len(wine_frame) + 1)).to_csv(path, index=True)
    return path


@pytest.fixture(scope="session")
def wine_dataset(wine_csv):
    """Synthetic dataset loaded through the regular loader."""
    from wine_eda.data import RedWineDataset

    return RedWineDataset.from_csv(wine_csv)


@pytest.fixture(scope="session")
def red_wine_dataset():
    """Load the real red wine dataset once per test session (skipped when absent)."""
    from wine_eda.data import RedWineDataset
    from wine_eda.utils.paths import get_dataset_path

    try:
        csv_path = get_dataset_path("red_wine")
    except FileNotFoundError:
        pytest.skip("wineQualityReds.csv is not available in the data directory")
    return RedWineDataset.from_csv(csv_path)


@pytest.fixture(autouse=True)
def _close_figures():
    """Close figures created by a test."""
    yield
    import matplotlib.pyplot as plt

    plt.close("all")
