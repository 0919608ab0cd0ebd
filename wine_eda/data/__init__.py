"""Data module for dataset classes."""

from .red_wine_columns import RedWineColumn as WQCol
from .red_wine_dataset import RedWineDataset


__all__ = ["RedWineDataset", "WQCol"]
