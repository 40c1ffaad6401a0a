"""Abstract base class for all classifiers in the prostate-cancer pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import joblib
import numpy as np
import pandas as pd

from models.metrics import ConfusionMatrix, confusion_matrix
from utils.logger import get_logger

log = get_logger(__name__)


class BaseModel(ABC):
    """Abstract base class that every concrete model must inherit from.

    Subclasses must implement :meth:`_build_estimator` which returns an
    unfitted sklearn-compatible estimator.

    Attributes:
        name: Human-readable model name (e.g. ``"Random Forest"``).
        params: Hyperparameter dictionary drawn from *config.yaml*.
        estimator: The underlying sklearn estimator.
    """

    name: str = "BaseModel"

    def __init__(self, params: Optional[Dict[str, Any]] = None) -> None:
        self.params: Dict[str, Any] = params or {}
        self.estimator: Any = self._build_estimator()

    @abstractmethod
    def _build_estimator(self) -> Any:
        """Return an **unfitted** sklearn-compatible estimator."""
        ...

    @property
    def slug(self) -> str:
        """File-name friendly model name."""
        return self.name.lower().replace(" ", "_").replace("-", "_")

    def fit(
        self,
        X_train: pd.DataFrame | np.ndarray,
        y_train: pd.Series | np.ndarray,
    ) -> "BaseModel":
        """Fit the model on the training data.

        Returns:
            ``self`` for chaining.
        """
        self.estimator.fit(X_train, y_train)
        return self

    def predict(self, X: pd.DataFrame | np.ndarray) -> np.ndarray:
        """Generate class predictions, one per row of *X*."""
        return self.estimator.predict(X)

    def confusion(
        self,
        X_test: pd.DataFrame | np.ndarray,
        y_test: pd.Series | np.ndarray,
        labels: Sequence,
        positive: Optional[Any] = None,
    ) -> ConfusionMatrix:
        """Confusion matrix of this model's predictions on *X_test*."""
        return confusion_matrix(y_test, self.predict(X_test), labels, positive)

    def evaluate(
        self,
        X_test: pd.DataFrame | np.ndarray,
        y_test: pd.Series | np.ndarray,
        labels: Sequence,
        positive: Optional[Any] = None,
    ) -> Dict[str, float]:
        """Compute a dictionary of evaluation metrics.

        Args:
            X_test: Test feature matrix.
            y_test: True labels.
            labels: Two-value label domain.
            positive: Positive class for precision/recall.

        Returns:
            Dictionary with accuracy, precision, recall, f1 and the four
            confusion-matrix cells.
        """
        return self.confusion(X_test, y_test, labels, positive).as_dict()

    def save(self, path: Path) -> None:
        """Serialise the fitted estimator to disk (typically ``*.pkl``)."""
        path.parent.mkdir(parents=True, exist_ok=True)
        joblib.dump(self.estimator, path)
        log.info("Saved %s → %s", self.name, path)

    @classmethod
    def load(cls, path: Path) -> Any:
        """Deserialise a previously saved estimator."""
        return joblib.load(path)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(params={self.params})"
