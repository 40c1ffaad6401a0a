"""k-nearest-neighbours wrapper around the from-scratch classifier."""

from __future__ import annotations

from typing import Any, Dict, Optional

from models.base_model import BaseModel
from models.knn import KNNClassifier


class KNNModel(BaseModel):
    """k-NN classifier with first-seen tie-breaking.

    Args:
        params: ``k`` (default 10) and ``label_domain`` forwarded to
            :class:`models.knn.KNNClassifier`.
    """

    name: str = "k-NN"

    def __init__(self, params: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(params)

    def _build_estimator(self) -> KNNClassifier:
        return KNNClassifier(
            k=self.params.get("k", 10),
            label_domain=self.params.get("label_domain"),
        )
