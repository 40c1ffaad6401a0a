"""Support Vector Machine wrapper."""

from __future__ import annotations

from sklearn.svm import SVC

from models.base_model import BaseModel


class SVMModel(BaseModel):
    """Support Vector Machine baseline (SVC)."""

    name: str = "SVM"

    def _build_estimator(self) -> SVC:
        return SVC(
            C=self.params.get("C", 1.0),
            kernel=self.params.get("kernel", "rbf"),
            probability=self.params.get("probability", False),
            random_state=self.params.get("random_state", 42),
        )
