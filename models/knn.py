"""From-scratch k-nearest-neighbours classification.

Tie-break policy
----------------
* Neighbours: equal distances are ordered by training-row position, so the
  earlier training row is selected first (stable sort).
* Vote: when two labels collect the same number of neighbour votes, the label
  listed first in the label domain wins.  Without an explicit domain the
  order of first appearance in the training labels is used.
"""

from __future__ import annotations

from numbers import Integral
from typing import Any, Optional, Sequence

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.utils.validation import check_is_fitted

from utils.errors import InvalidArgument, SchemaError


def _as_matrix(values: Any, name: str) -> np.ndarray:
    try:
        matrix = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name} must be numeric: {exc}") from exc
    if matrix.ndim != 2:
        raise InvalidArgument(f"{name} must be 2-D, got shape {matrix.shape}")
    return matrix


def _resolve_domain(labels: np.ndarray, label_domain: Optional[Sequence]) -> list:
    if label_domain is None:
        return list(dict.fromkeys(labels.tolist()))
    domain = list(label_domain)
    unknown = set(labels.tolist()) - set(domain)
    if unknown:
        raise SchemaError(f"Training labels {sorted(map(str, unknown))} are not in {domain}")
    return domain


def _check_k(k: Any, n_train: int) -> int:
    if isinstance(k, bool) or not isinstance(k, Integral) or k <= 0:
        raise InvalidArgument(f"k must be a positive integer, got {k!r}")
    if k > n_train:
        raise InvalidArgument(f"k={k} exceeds the training set size ({n_train})")
    return int(k)


def neighbour_votes(
    train_features: Any,
    train_labels: Any,
    test_features: Any,
    k: int,
    label_domain: Optional[Sequence] = None,
) -> tuple[np.ndarray, list]:
    """Count the labels of the *k* nearest training rows for each test row.

    Returns:
        ``(votes, domain)`` where ``votes[i, j]`` is the number of the k
        nearest neighbours of test row ``i`` labelled ``domain[j]``.

    Raises:
        InvalidArgument: On shape, length or *k* violations.
        SchemaError: If a training label lies outside *label_domain*.
    """
    X_train = _as_matrix(train_features, "train_features")
    X_test = _as_matrix(test_features, "test_features")
    y_train = np.asarray(train_labels)
    if y_train.ndim != 1:
        raise InvalidArgument(f"train_labels must be 1-D, got shape {y_train.shape}")

    k = _check_k(k, len(X_train))
    if len(X_train) != len(y_train):
        raise InvalidArgument(
            f"train_features has {len(X_train)} rows but train_labels has {len(y_train)}"
        )
    if X_train.shape[1] != X_test.shape[1]:
        raise InvalidArgument(
            f"Feature dimensionality differs: train={X_train.shape[1]}, test={X_test.shape[1]}"
        )

    domain = _resolve_domain(y_train, label_domain)
    position = {label: i for i, label in enumerate(domain)}
    codes = np.array([position[label] for label in y_train.tolist()], dtype=int)

    votes = np.zeros((len(X_test), len(domain)), dtype=int)
    for i, row in enumerate(X_test):
        distances = np.sqrt(((X_train - row) ** 2).sum(axis=1))
        nearest = np.argsort(distances, kind="stable")[:k]
        votes[i] = np.bincount(codes[nearest], minlength=len(domain))
    return votes, domain


def classify(
    train_features: Any,
    train_labels: Any,
    test_features: Any,
    k: int,
    label_domain: Optional[Sequence] = None,
) -> np.ndarray:
    """Predict a label for every test row by majority vote of its k nearest
    training rows (Euclidean distance over the full feature vector).

    Args:
        train_features: ``(n_train, d)`` feature matrix.
        train_labels: ``n_train`` labels.
        test_features: ``(n_test, d)`` feature matrix.
        k: Number of neighbours, ``1 <= k <= n_train``.
        label_domain: Label ordering used to break vote ties.

    Returns:
        1-D array of ``n_test`` predicted labels, in test-row order.
    """
    votes, domain = neighbour_votes(train_features, train_labels, test_features, k, label_domain)
    # argmax returns the first maximal column, i.e. the earliest domain label
    winners = votes.argmax(axis=1)
    return np.array([domain[w] for w in winners.tolist()], dtype=object)


class KNNClassifier(ClassifierMixin, BaseEstimator):
    """scikit-learn compatible wrapper around :func:`classify`.

    Args:
        k: Number of neighbours.
        label_domain: Label ordering for vote ties; also the column order
            of :meth:`predict_proba` (exposed as ``classes_``).
    """

    def __init__(self, k: int = 10, label_domain: Optional[Sequence] = None) -> None:
        self.k = k
        self.label_domain = label_domain

    def fit(self, X: Any, y: Any) -> "KNNClassifier":
        X_ = _as_matrix(X, "X")
        y_ = np.asarray(y)
        if len(X_) != len(y_):
            raise InvalidArgument(f"X has {len(X_)} rows but y has {len(y_)}")
        _check_k(self.k, len(X_))
        self.classes_ = np.array(_resolve_domain(y_, self.label_domain), dtype=object)
        self.X_train_ = X_
        self.y_train_ = y_
        self.n_features_in_ = X_.shape[1]
        return self

    def predict(self, X: Any) -> np.ndarray:
        check_is_fitted(self)
        return classify(self.X_train_, self.y_train_, X, self.k, list(self.classes_))

    def predict_proba(self, X: Any) -> np.ndarray:
        """Neighbour vote fractions, columns ordered as ``classes_``."""
        check_is_fitted(self)
        votes, _ = neighbour_votes(self.X_train_, self.y_train_, X, self.k, list(self.classes_))
        return votes / float(self.k)
