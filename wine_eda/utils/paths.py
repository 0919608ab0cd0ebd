from pathlib import Path
from typing import Literal


__all__ = ["get_data_dir", "get_dataset_path"]


_DATASET_MAP: dict[str, str] = {
    "red_wine": "wineQualityReds.csv",
}


def get_data_dir() -> Path:
    """Get the path to the data directory (``_data`` next to the package).

    Returns:
        Path to the data directory (may not exist yet)
    """
    return (Path(__file__).parents[2] / "_data").resolve()


def get_dataset_path(filename: Literal["red_wine"] | str) -> Path:  # noqa: PYI051
    """Get the full path to a dataset file in the data directory.

    Args:
        filename: Key to known dataset or custom filename

    Returns:
        Full path to the dataset file relative to the data directory of the project

    Raises:
        FileNotFoundError: If the file is not present in the data directory.

    Supported: wineQualityReds.csv
    """
    data_dir = get_data_dir()
    ds_path = data_dir / _DATASET_MAP.get(filename, filename)
    if not ds_path.exists():
        available = sorted(p.name for p in data_dir.iterdir() if p.is_file()) if data_dir.is_dir() else []
        raise FileNotFoundError(f"Dataset file '{filename}' not found at {ds_path}. Available files: {available}")

    return ds_path
