"""Random Forest wrapper."""

from __future__ import annotations

from sklearn.ensemble import RandomForestClassifier

from models.base_model import BaseModel


class RandomForestModel(BaseModel):
    """Random Forest baseline.

    ``class_weight`` may be set to ``"balanced"`` in config because the
    prostate dataset is skewed towards malignant rows.
    """

    name: str = "Random Forest"

    def _build_estimator(self) -> RandomForestClassifier:
        return RandomForestClassifier(
            n_estimators=self.params.get("n_estimators", 100),
            max_depth=self.params.get("max_depth", None),
            min_samples_split=self.params.get("min_samples_split", 2),
            class_weight=self.params.get("class_weight"),
            random_state=self.params.get("random_state", 42),
        )
