"""XGBoost wrapper."""

from __future__ import annotations

from pathlib import Path

import joblib
import numpy as np
import pandas as pd
from sklearn.preprocessing import LabelEncoder
from xgboost import XGBClassifier

from models.base_model import BaseModel
from utils.logger import get_logger

log = get_logger(__name__)


class XGBoostModel(BaseModel):
    """XGBoost gradient-boosted tree baseline.

    XGBoost only accepts integer class codes, so string labels are encoded
    on :meth:`fit` and decoded again on :meth:`predict`.
    """

    name: str = "XGBoost"

    def _build_estimator(self) -> XGBClassifier:
        self.encoder = LabelEncoder()
        return XGBClassifier(
            n_estimators=self.params.get("n_estimators", 100),
            learning_rate=self.params.get("learning_rate", 0.1),
            max_depth=self.params.get("max_depth", 3),
            eval_metric=self.params.get("eval_metric", "logloss"),
            random_state=self.params.get("random_state", 42),
            verbosity=0,
        )

    def fit(
        self,
        X_train: pd.DataFrame | np.ndarray,
        y_train: pd.Series | np.ndarray,
    ) -> "XGBoostModel":
        codes = self.encoder.fit_transform(np.asarray(y_train))
        self.estimator.fit(X_train, codes)
        return self

    def predict(self, X: pd.DataFrame | np.ndarray) -> np.ndarray:
        codes = self.estimator.predict(X)
        return self.encoder.inverse_transform(np.asarray(codes, dtype=int))

    def save(self, path: Path) -> None:
        """Serialise the estimator together with its label encoder."""
        path.parent.mkdir(parents=True, exist_ok=True)
        joblib.dump({"estimator": self.estimator, "encoder": self.encoder}, path)
        log.info("Saved %s → %s", self.name, path)

    @classmethod
    def load(cls, path: Path) -> "XGBoostModel":
        """Rebuild a fitted wrapper from a file written by :meth:`save`.

        Unlike the other wrappers this returns the model rather than the bare
        estimator, since predictions must be decoded through the encoder.
        """
        bundle = joblib.load(path)
        model = cls()
        model.estimator = bundle["estimator"]
        model.encoder = bundle["encoder"]
        return model
