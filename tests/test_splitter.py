"""Tests for data.splitter module."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from conftest import make_dataset
from data.splitter import shuffle_rows, split_at, split_by_ratio
from utils.errors import InvalidArgument


@pytest.fixture()
def dataset():
    features = np.arange(40, dtype=float).reshape(20, 2)
    labels = ["A"] * 12 + ["B"] * 8
    return make_dataset(features, labels)


class TestSplitAt:
    def test_sizes_add_up(self, dataset) -> None:
        split = split_at(dataset, 7)
        assert len(split.train) == 7
        assert len(split.test) == 13
        assert len(split.train) + len(split.test) == len(dataset)
        assert split.boundary == 7

    def test_order_preserved(self, dataset) -> None:
        split = split_at(dataset, 7)
        rejoined = pd.concat([split.train.features, split.test.features], ignore_index=True)
        pd.testing.assert_frame_equal(rejoined, dataset.features)
        assert list(split.train.labels) + list(split.test.labels) == list(dataset.labels)

    def test_no_stratification(self, dataset) -> None:
        split = split_at(dataset, 12)
        assert set(split.train.labels) == {"A"}
        assert set(split.test.labels) == {"B"}

    @pytest.mark.parametrize("boundary", [0, 20, -1, 25])
    def test_boundary_out_of_range(self, dataset, boundary: int) -> None:
        with pytest.raises(InvalidArgument):
            split_at(dataset, boundary)

    @pytest.mark.parametrize("boundary", [2.5, True, "3"])
    def test_boundary_must_be_integer(self, dataset, boundary) -> None:
        with pytest.raises(InvalidArgument):
            split_at(dataset, boundary)


class TestSplitByRatio:
    def test_source_ratio(self) -> None:
        ds = make_dataset(np.arange(200, dtype=float).reshape(100, 2), ["A", "B"] * 50)
        split = split_by_ratio(ds, 0.65)
        assert (len(split.train), len(split.test)) == (65, 35)

    def test_default_ratio(self, dataset) -> None:
        split = split_by_ratio(dataset)
        assert len(split.train) == 13

    @pytest.mark.parametrize("ratio", [0.0, 1.0, -0.2, 1.5])
    def test_ratio_out_of_range(self, dataset, ratio: float) -> None:
        with pytest.raises(InvalidArgument):
            split_by_ratio(dataset, ratio)

    def test_ratio_rounding_to_empty_half(self) -> None:
        ds = make_dataset([[0.0], [1.0], [2.0]], ["A", "B", "A"])
        with pytest.raises(InvalidArgument):
            split_by_ratio(ds, 0.1)


class TestShuffleRows:
    def test_seeded_and_reproducible(self, dataset) -> None:
        a = shuffle_rows(dataset, seed=3)
        b = shuffle_rows(dataset, seed=3)
        pd.testing.assert_frame_equal(a.features, b.features)
        assert list(a.labels) == list(b.labels)

    def test_is_a_permutation(self, dataset) -> None:
        shuffled = shuffle_rows(dataset, seed=1)
        assert sorted(shuffled.features["f0"]) == sorted(dataset.features["f0"])
        assert sorted(shuffled.labels) == sorted(dataset.labels)
        # rows keep their labels
        original = dict(zip(dataset.features["f0"], dataset.labels))
        assert all(original[f] == lab for f, lab in zip(shuffled.features["f0"], shuffled.labels))

    def test_source_untouched(self, dataset) -> None:
        before = list(dataset.features["f0"])
        shuffle_rows(dataset, seed=9)
        assert list(dataset.features["f0"]) == before
