"""Small feed-forward neural network wrapper."""

from __future__ import annotations

from sklearn.neural_network import MLPClassifier

from models.base_model import BaseModel


class MLPModel(BaseModel):
    """Multi-layer perceptron baseline.

    Args:
        params: ``hidden_layer_sizes``, ``max_iter``, ``alpha`` and
            ``random_state`` forwarded to
            :class:`sklearn.neural_network.MLPClassifier`.
    """

    name: str = "Neural Network"

    def _build_estimator(self) -> MLPClassifier:
        return MLPClassifier(
            hidden_layer_sizes=tuple(self.params.get("hidden_layer_sizes", (16, 8))),
            max_iter=self.params.get("max_iter", 2000),
            alpha=self.params.get("alpha", 1e-4),
            random_state=self.params.get("random_state", 42),
        )
