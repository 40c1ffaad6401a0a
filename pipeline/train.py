"""Training pipeline — fit k-NN and the library baselines on one split.

Usage:
    python -m pipeline.train
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

# Ensure project root is on sys.path so relative imports work.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from data.loader import load_config  # noqa: E402
from models.base_model import BaseModel  # noqa: E402
from models.knn_model import KNNModel  # noqa: E402
from models.mlp import MLPModel  # noqa: E402
from models.random_forest import RandomForestModel  # noqa: E402
from models.svm import SVMModel  # noqa: E402
from models.xgboost_model import XGBoostModel  # noqa: E402
from pipeline.evaluate import plot_confusion_matrix, prepare_split  # noqa: E402
from utils.errors import PipelineError  # noqa: E402
from utils.logger import configure_logging, get_logger  # noqa: E402

log = get_logger(__name__)


def _build_models(config: dict, label_domain: tuple) -> List[BaseModel]:
    """Instantiate all model wrappers using config hyperparameters.

    Args:
        config: Parsed config.yaml.
        label_domain: Label ordering passed to the k-NN tie-break.

    Returns:
        List of unfitted :class:`BaseModel` subclasses.
    """
    model_cfgs: dict = config.get("models", {})
    rs = config.get("random_state", 42)
    k = config.get("knn", {}).get("k", 10)

    return [
        KNNModel({"k": k, "label_domain": list(label_domain)}),
        RandomForestModel({**model_cfgs.get("random_forest", {}), "random_state": rs}),
        SVMModel({**model_cfgs.get("svm", {}), "random_state": rs}),
        XGBoostModel({**model_cfgs.get("xgboost", {}), "random_state": rs}),
        MLPModel({**model_cfgs.get("mlp", {}), "random_state": rs}),
    ]


def train_all(
    config: dict | None = None,
    data_path: Optional[Path | str] = None,
    save: bool = True,
    plots: bool = False,
) -> Tuple[List[BaseModel], pd.DataFrame]:
    """Train every registered model and score it on the held-out rows.

    Args:
        config: Configuration dictionary.
        data_path: Dataset CSV; defaults to ``data.path`` from the config.
        save: Whether to persist estimators and the results CSV.
        plots: Whether to save a confusion-matrix heatmap per model.

    Returns:
        Tuple of (list of fitted models, DataFrame of test metrics).
    """
    if config is None:
        config = load_config()

    split = prepare_split(config, data_path)
    domain = split.train.label_domain
    positive = config.get("evaluation", {}).get("positive_label", domain[1])
    models = _build_models(config, domain)

    paths: dict = config.get("paths", {})
    models_dir = ROOT / paths.get("models", "outputs/models")
    reports_dir = ROOT / paths.get("reports", "outputs/reports")
    plots_dir = ROOT / paths.get("plots", "outputs/plots")

    X_train, y_train = split.train.features, split.train.labels.to_numpy(dtype=object)
    X_test, y_test = split.test.features, split.test.labels.to_numpy(dtype=object)

    results_rows: list[dict] = []

    print("── Training Pipeline ─────────────────────────────")
    for model in models:
        print(f"\n▸ {model.name}")
        model.fit(X_train, y_train)

        matrix = model.confusion(X_test, y_test, domain, positive)
        metrics = matrix.as_dict()
        for key in ("accuracy", "precision", "recall", "f1"):
            print(f"    {key:<12s}: {metrics[key]:.4f}")
        log.info("%s accuracy %.4f", model.name, metrics["accuracy"])

        if save:
            model.save(models_dir / f"{model.slug}.pkl")
        if plots:
            plot_confusion_matrix(matrix, model.name, plots_dir / f"confusion_matrix_{model.slug}.png")

        results_rows.append({"model": model.name, **metrics})

    results_df = pd.DataFrame(results_rows)
    if save:
        reports_dir.mkdir(parents=True, exist_ok=True)
        csv_path = reports_dir / "model_comparison.csv"
        results_df.to_csv(csv_path, index=False)
        print(f"\n  ✓ Results → {csv_path}")
    print("── Done ──────────────────────────────────────────\n")

    return models, results_df


# ── CLI ──────────────────────────────────────────────────────────
def main(argv: Optional[list[str]] = None) -> int:
    """Parse CLI arguments and train all models."""
    parser = argparse.ArgumentParser(description="Fit k-NN and baseline classifiers.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--data", type=Path, default=None, help="Dataset CSV (overrides config)")
    parser.add_argument("--plot", action="store_true", help="Save confusion-matrix heatmaps")
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else load_config()
    configure_logging(ROOT / config.get("paths", {}).get("logs", "logs"))
    try:
        train_all(config, args.data, plots=args.plot)
    except (PipelineError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
