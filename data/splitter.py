"""Order-preserving train/test partitioning.

Rows are split at a fixed boundary index; nothing here reorders rows, so the
class ordering of the source file carries into both halves.  Callers that
want a random partition shuffle first with :func:`shuffle_rows`.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral

import numpy as np

from data.loader import Dataset
from utils.errors import InvalidArgument
from utils.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Split:
    """Disjoint train/test halves of one dataset."""

    train: Dataset
    test: Dataset
    boundary: int


def split_at(dataset: Dataset, boundary: int) -> Split:
    """Split *dataset* into rows ``[0, boundary)`` and ``[boundary, N)``.

    Args:
        dataset: Source dataset.
        boundary: First test-row index; must satisfy ``0 < boundary < N``.

    Returns:
        A :class:`Split`.

    Raises:
        InvalidArgument: If *boundary* is not an integer strictly inside
            ``(0, N)``.
    """
    n = len(dataset)
    if isinstance(boundary, bool) or not isinstance(boundary, Integral):
        raise InvalidArgument(f"Split boundary must be an integer, got {boundary!r}")
    if not 0 < boundary < n:
        raise InvalidArgument(f"Split boundary {boundary} must lie strictly between 0 and {n}")

    boundary = int(boundary)
    split = Split(
        train=dataset.take(slice(0, boundary)),
        test=dataset.take(slice(boundary, n)),
        boundary=boundary,
    )
    log.info("Split %d rows → %d train / %d test", n, len(split.train), len(split.test))
    return split


def split_by_ratio(dataset: Dataset, train_ratio: float = 0.65) -> Split:
    """Split with the boundary at ``round(N * train_ratio)``.

    Args:
        dataset: Source dataset.
        train_ratio: Share of rows in the training half, in ``(0, 1)``.

    Raises:
        InvalidArgument: If the ratio is outside ``(0, 1)`` or rounds to an
            empty half.
    """
    if not 0.0 < train_ratio < 1.0:
        raise InvalidArgument(f"train_ratio must lie in (0, 1), got {train_ratio}")
    return split_at(dataset, int(round(len(dataset) * train_ratio)))


def shuffle_rows(dataset: Dataset, seed: int) -> Dataset:
    """Return *dataset* with rows in a seeded random order."""
    order = np.random.default_rng(seed).permutation(len(dataset))
    log.debug("Shuffled %d rows with seed %d", len(dataset), seed)
    return dataset.take(order)
