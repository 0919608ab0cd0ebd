"""Utility path resolution tests."""

import pytest

from wine_eda.utils.paths import get_data_dir, get_dataset_path


def test_data_dir_location() -> None:
    """The data directory sits in the project root next to the package."""
    data_dir = get_data_dir()

    assert data_dir.name == "_data"
    assert (data_dir.parent / "wine_eda").is_dir()


def test_unknown_dataset_raises() -> None:
    """Missing files raise FileNotFoundError naming the file."""
    with pytest.raises(FileNotFoundError, match="no_such_file.csv"):
        get_dataset_path("no_such_file.csv")


def test_get_dataset_path_red_wine() -> None:
    """Ensure real dataset path resolution works."""
    try:
        path = get_dataset_path("red_wine")
    except FileNotFoundError:
        pytest.skip("wineQualityReds.csv is not available in the data directory")

    assert path.exists()
    assert path.parent == get_data_dir()
    assert path.name == "wineQualityReds.csv"
