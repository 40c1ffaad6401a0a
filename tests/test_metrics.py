"""Tests for models.metrics (confusion matrix and accuracy)."""

from __future__ import annotations

import pytest

from sklearn.metrics import f1_score, precision_score, recall_score

from models.metrics import ConfusionMatrix, confusion_matrix
from utils.errors import InvalidArgument, SchemaError

ACTUAL = ["M", "M", "B", "B", "M"]
PREDICTED = ["M", "B", "B", "M", "M"]


class TestAccuracy:
    """Accuracy is the share of matching positions."""

    def test_all_agree(self) -> None:
        assert confusion_matrix(["A", "B", "A"], ["A", "B", "A"], ["A", "B"]).accuracy == 1.0

    def test_all_disagree(self) -> None:
        assert confusion_matrix(["A", "B", "A"], ["B", "A", "B"], ["A", "B"]).accuracy == 0.0

    def test_partial(self) -> None:
        assert confusion_matrix(ACTUAL, PREDICTED, ["B", "M"]).accuracy == pytest.approx(0.6)

    def test_empty(self) -> None:
        with pytest.raises(InvalidArgument):
            confusion_matrix([], [], ["A", "B"])


class TestConfusionMatrix:
    @pytest.fixture()
    def matrix(self) -> ConfusionMatrix:
        return confusion_matrix(ACTUAL, PREDICTED, labels=["B", "M"], positive="M")

    def test_counts_indexed_actual_predicted(self, matrix: ConfusionMatrix) -> None:
        assert matrix.counts.tolist() == [[1, 1], [1, 2]]

    def test_named_cells(self, matrix: ConfusionMatrix) -> None:
        assert matrix.true_positive == 2
        assert matrix.true_negative == 1
        assert matrix.false_positive == 1
        assert matrix.false_negative == 1
        assert matrix.total == 5

    def test_derived_metrics(self, matrix: ConfusionMatrix) -> None:
        assert matrix.accuracy == pytest.approx(0.6)
        assert matrix.precision == pytest.approx(2 / 3)
        assert matrix.recall == pytest.approx(2 / 3)
        assert matrix.f1 == pytest.approx(2 / 3)

    def test_positive_class_swaps_cells(self) -> None:
        matrix = confusion_matrix(ACTUAL, PREDICTED, labels=["B", "M"], positive="B")
        assert matrix.true_positive == 1
        assert matrix.true_negative == 2
        assert matrix.accuracy == pytest.approx(0.6)

    def test_default_positive_is_second_label(self) -> None:
        matrix = confusion_matrix(ACTUAL, PREDICTED, labels=["B", "M"])
        assert matrix.positive == "M"

    def test_perfect_and_inverted(self) -> None:
        assert confusion_matrix(ACTUAL, ACTUAL, ["B", "M"]).accuracy == 1.0
        flipped = ["B" if v == "M" else "M" for v in ACTUAL]
        assert confusion_matrix(ACTUAL, flipped, ["B", "M"]).accuracy == 0.0

    @pytest.mark.parametrize("positive", ["B", "M"])
    def test_scores_agree_with_sklearn(self, positive: str) -> None:
        actual = ["M", "M", "B", "B", "M", "B", "M", "M"]
        predicted = ["M", "B", "B", "M", "M", "B", "B", "M"]
        matrix = confusion_matrix(actual, predicted, ["B", "M"], positive=positive)
        assert matrix.precision == pytest.approx(
            precision_score(actual, predicted, pos_label=positive, zero_division=0)
        )
        assert matrix.recall == pytest.approx(
            recall_score(actual, predicted, pos_label=positive, zero_division=0)
        )
        assert matrix.f1 == pytest.approx(
            f1_score(actual, predicted, pos_label=positive, zero_division=0)
        )

    def test_undefined_precision_is_zero(self) -> None:
        matrix = confusion_matrix(["B", "B"], ["B", "B"], ["B", "M"])
        assert matrix.precision == 0.0
        assert matrix.recall == 0.0
        assert matrix.f1 == 0.0

    def test_as_dict(self, matrix: ConfusionMatrix) -> None:
        metrics = matrix.as_dict()
        assert set(metrics) == {"accuracy", "precision", "recall", "f1", "tp", "tn", "fp", "fn"}
        assert metrics["tp"] == 2

    def test_to_frame(self, matrix: ConfusionMatrix) -> None:
        frame = matrix.to_frame()
        assert frame.index.name == "actual"
        assert frame.columns.name == "predicted"
        assert frame.loc["M", "M"] == 2
        assert frame.loc["B", "M"] == 1
        assert "predicted" in str(matrix)

    def test_label_outside_domain(self) -> None:
        with pytest.raises(SchemaError):
            confusion_matrix(["B", "X"], ["B", "M"], ["B", "M"])

    def test_unknown_positive(self) -> None:
        with pytest.raises(InvalidArgument):
            confusion_matrix(ACTUAL, PREDICTED, ["B", "M"], positive="X")

    @pytest.mark.parametrize("labels", [["B"], ["B", "B"], ["B", "M", "X"]])
    def test_domain_must_be_two_values(self, labels: list) -> None:
        with pytest.raises(InvalidArgument):
            confusion_matrix(ACTUAL, PREDICTED, labels)

    def test_length_mismatch(self) -> None:
        with pytest.raises(InvalidArgument):
            confusion_matrix(["B"], ["B", "M"], ["B", "M"])
