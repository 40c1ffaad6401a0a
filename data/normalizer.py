"""Min-max normalization of feature columns."""

from __future__ import annotations

import pandas as pd

from data.loader import Dataset
from utils.errors import DegenerateColumnError
from utils.logger import get_logger

log = get_logger(__name__)


def min_max_normalize(column: pd.Series) -> pd.Series:
    """Rescale a numeric column to [0, 1] using its own min and max.

    Each value ``v`` maps to ``(v - min) / (max - min)``.

    Args:
        column: Numeric column.

    Returns:
        A new series with the same index and name.

    Raises:
        DegenerateColumnError: If the column is constant (or empty).
    """
    lo, hi = column.min(), column.max()
    if pd.isna(lo) or hi == lo:
        raise DegenerateColumnError(str(column.name))
    return (column - lo) / (hi - lo)


def column_ranges(dataset: Dataset) -> pd.DataFrame:
    """Observed ``min`` and ``max`` of every feature column."""
    return dataset.features.agg(["min", "max"]).T


def normalize(dataset: Dataset) -> Dataset:
    """Min-max normalize every feature column of *dataset*.

    The label column is left untouched and *dataset* is not modified.

    Raises:
        DegenerateColumnError: For the first constant feature column found.
    """
    scaled = dataset.features.apply(min_max_normalize, axis=0)
    log.debug("Normalized %d feature columns", dataset.n_features)
    return dataset.with_features(scaled)
