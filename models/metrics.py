"""Confusion-matrix evaluation for two-class predictions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix as _sk_confusion_matrix
from sklearn.metrics import f1_score, precision_score, recall_score

from utils.errors import InvalidArgument, SchemaError


def _as_labels(values: Any, name: str) -> np.ndarray:
    labels = np.asarray(values, dtype=object)
    if labels.ndim != 1:
        raise InvalidArgument(f"{name} must be 1-D, got shape {labels.shape}")
    return labels


def _check_pair(actual: Any, predicted: Any) -> tuple[np.ndarray, np.ndarray]:
    y_true = _as_labels(actual, "actual")
    y_pred = _as_labels(predicted, "predicted")
    if len(y_true) != len(y_pred):
        raise InvalidArgument(
            f"actual has {len(y_true)} labels but predicted has {len(y_pred)}"
        )
    if len(y_true) == 0:
        raise InvalidArgument("Cannot evaluate an empty prediction set")
    return y_true, y_pred


@dataclass(frozen=True, eq=False)
class ConfusionMatrix:
    """2×2 count table indexed ``counts[actual, predicted]``.

    Rows and columns follow ``labels`` order.  The TP/TN/FP/FN cells are
    named with respect to ``positive``; precision, recall and F1 are
    scored for that class (0.0 when undefined).
    """

    labels: tuple
    positive: Any
    counts: np.ndarray
    precision: float = 0.0
    recall: float = 0.0
    f1: float = 0.0

    @property
    def _pos(self) -> int:
        return self.labels.index(self.positive)

    @property
    def _neg(self) -> int:
        return 1 - self._pos

    @property
    def true_positive(self) -> int:
        return int(self.counts[self._pos, self._pos])

    @property
    def true_negative(self) -> int:
        return int(self.counts[self._neg, self._neg])

    @property
    def false_positive(self) -> int:
        return int(self.counts[self._neg, self._pos])

    @property
    def false_negative(self) -> int:
        return int(self.counts[self._pos, self._neg])

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    @property
    def accuracy(self) -> float:
        return (self.true_positive + self.true_negative) / self.total

    def as_dict(self) -> Dict[str, float]:
        """Metric dictionary in the shape used by the reports."""
        return {
            "accuracy": float(self.accuracy),
            "precision": float(self.precision),
            "recall": float(self.recall),
            "f1": float(self.f1),
            "tp": self.true_positive,
            "tn": self.true_negative,
            "fp": self.false_positive,
            "fn": self.false_negative,
        }

    def to_frame(self) -> pd.DataFrame:
        """Labelled table: actual classes as rows, predicted as columns."""
        return pd.DataFrame(
            self.counts,
            index=pd.Index(self.labels, name="actual"),
            columns=pd.Index(self.labels, name="predicted"),
        )

    def __str__(self) -> str:
        return self.to_frame().to_string()


def confusion_matrix(
    actual: Any,
    predicted: Any,
    labels: Sequence,
    positive: Optional[Any] = None,
) -> ConfusionMatrix:
    """Cross-tabulate *actual* against *predicted* labels.

    Args:
        actual: True labels.
        predicted: Predicted labels, aligned by position with *actual*.
        labels: The two-value label domain; fixes row/column order.
        positive: Class treated as "positive" for TP/FP/FN/TN.  Defaults to
            the second label of the domain.

    Returns:
        A :class:`ConfusionMatrix`.

    Raises:
        InvalidArgument: On length mismatch, empty input, a domain that is
            not two distinct values, or an unknown *positive* class.
        SchemaError: If a label falls outside the domain.
    """
    domain = tuple(labels)
    if len(domain) != 2 or domain[0] == domain[1]:
        raise InvalidArgument(f"labels must be two distinct values, got {list(labels)}")
    if positive is None:
        positive = domain[1]
    elif positive not in domain:
        raise InvalidArgument(f"positive class {positive!r} is not in {list(domain)}")

    y_true, y_pred = _check_pair(actual, predicted)
    unknown = (set(y_true.tolist()) | set(y_pred.tolist())) - set(domain)
    if unknown:
        raise SchemaError(f"Labels {sorted(map(str, unknown))} are outside {list(domain)}")

    position = {label: i for i, label in enumerate(domain)}
    true_codes = [position[v] for v in y_true.tolist()]
    pred_codes = [position[v] for v in y_pred.tolist()]
    pos_code = position[positive]

    return ConfusionMatrix(
        labels=domain,
        positive=positive,
        counts=_sk_confusion_matrix(true_codes, pred_codes, labels=[0, 1]),
        precision=float(precision_score(true_codes, pred_codes, labels=[0, 1],
                                        pos_label=pos_code, zero_division=0)),
        recall=float(recall_score(true_codes, pred_codes, labels=[0, 1],
                                  pos_label=pos_code, zero_division=0)),
        f1=float(f1_score(true_codes, pred_codes, labels=[0, 1],
                          pos_label=pos_code, zero_division=0)),
    )
