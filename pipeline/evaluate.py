"""k-NN evaluation pipeline — load, normalize, split, classify, score.

Usage:
    python -m pipeline.evaluate --data data/Prostate_Cancer.csv --k 10
    python -m pipeline.evaluate --sweep --plot
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from data.loader import load_config, load_dataset_from_config  # noqa: E402
from data.normalizer import normalize  # noqa: E402
from data.splitter import Split, shuffle_rows, split_by_ratio  # noqa: E402
from models.knn import classify  # noqa: E402
from models.metrics import ConfusionMatrix, confusion_matrix  # noqa: E402
from utils.errors import PipelineError  # noqa: E402
from utils.logger import configure_logging, get_logger  # noqa: E402

log = get_logger(__name__)

DPI = 150
sns.set_theme(style="whitegrid", palette="muted", font_scale=1.05)


@dataclass
class KNNReport:
    """Outcome of one k-NN run on the test split."""

    k: int
    n_train: int
    n_test: int
    actual: np.ndarray
    predicted: np.ndarray
    matrix: ConfusionMatrix

    @property
    def accuracy(self) -> float:
        return self.matrix.accuracy


# ─────────────────────────────────────────────────────────────────
#  Data preparation
# ─────────────────────────────────────────────────────────────────
def prepare_split(
    config: dict,
    data_path: Optional[Path | str] = None,
    train_ratio: Optional[float] = None,
    shuffle: Optional[bool] = None,
    seed: Optional[int] = None,
) -> Split:
    """Load, normalize and split the configured dataset.

    Explicit arguments override the ``split`` section of *config*.
    Shuffling is off unless requested and is always seeded.
    """
    split_cfg: dict = config.get("split", {})
    train_ratio = split_cfg.get("train_ratio", 0.65) if train_ratio is None else train_ratio
    shuffle = split_cfg.get("shuffle", False) if shuffle is None else shuffle
    seed = config.get("random_state", 42) if seed is None else seed

    dataset = normalize(load_dataset_from_config(config, data_path))
    if shuffle:
        dataset = shuffle_rows(dataset, seed)
    return split_by_ratio(dataset, train_ratio)


def _positive_label(config: dict, split: Split) -> str:
    return config.get("evaluation", {}).get("positive_label", split.train.label_domain[1])


# ─────────────────────────────────────────────────────────────────
#  Classification runs
# ─────────────────────────────────────────────────────────────────
def evaluate_split(split: Split, k: int, positive: Optional[str] = None) -> KNNReport:
    """Classify every test row of *split* with k-NN and score the result."""
    domain = split.train.label_domain
    predicted = classify(
        split.train.features.to_numpy(),
        split.train.labels.to_numpy(),
        split.test.features.to_numpy(),
        k,
        label_domain=domain,
    )
    actual = split.test.labels.to_numpy(dtype=object)
    matrix = confusion_matrix(actual, predicted, domain, positive)
    log.info("k=%d → accuracy %.2f%% on %d test rows", k, 100 * matrix.accuracy, len(actual))
    return KNNReport(
        k=k,
        n_train=len(split.train),
        n_test=len(split.test),
        actual=actual,
        predicted=predicted,
        matrix=matrix,
    )


def sweep_k(split: Split, ks: Iterable[int], positive: Optional[str] = None) -> pd.DataFrame:
    """Accuracy, precision, recall and F1 of k-NN for each k in *ks*.

    Raises:
        InvalidArgument: If any k is not a valid neighbour count for the
            training half.
    """
    rows: list[dict] = []
    for k in ks:
        report = evaluate_split(split, k, positive)
        rows.append({"k": k, **report.matrix.as_dict()})
    return pd.DataFrame(rows)


def run_knn(
    config: Optional[dict] = None,
    data_path: Optional[Path | str] = None,
    k: Optional[int] = None,
    train_ratio: Optional[float] = None,
) -> KNNReport:
    """Run the full k-NN pipeline and print the confusion matrix.

    Args:
        config: Configuration dictionary.  Loaded from disk when *None*.
        data_path: Dataset CSV; defaults to ``data.path`` from the config.
        k: Neighbour count; defaults to ``knn.k``.
        train_ratio: Training share; defaults to ``split.train_ratio``.

    Returns:
        A :class:`KNNReport`.
    """
    if config is None:
        config = load_config()
    k = config.get("knn", {}).get("k", 10) if k is None else k

    split = prepare_split(config, data_path, train_ratio)
    report = evaluate_split(split, k, _positive_label(config, split))

    print(f"\n── k-NN (k={report.k}, {report.n_train} train / {report.n_test} test) ──")
    print(report.matrix)
    print(f"  Accuracy : {100 * report.accuracy:.2f}%")
    return report


# ─────────────────────────────────────────────────────────────────
#  Confusion matrix plot
# ─────────────────────────────────────────────────────────────────
def plot_confusion_matrix(matrix: ConfusionMatrix, title: str, save_path: Path) -> Path:
    """Save a confusion-matrix heatmap as PNG and return its path."""
    save_path.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=(6, 5))
    sns.heatmap(
        matrix.to_frame(),
        annot=True,
        fmt="d",
        cmap="Blues",
        ax=ax,
        linewidths=0.5,
    )
    ax.set_xlabel("Predicted")
    ax.set_ylabel("Actual")
    ax.set_title(f"Confusion Matrix — {title}", fontsize=13, fontweight="bold")
    fig.tight_layout()
    fig.savefig(save_path, dpi=DPI)
    plt.close(fig)
    return save_path


# ── CLI ──────────────────────────────────────────────────────────
def main(argv: Optional[list[str]] = None) -> int:
    """Parse CLI arguments and run the k-NN evaluation."""
    parser = argparse.ArgumentParser(
        description="Classify a labeled CSV dataset with k-nearest-neighbours."
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--data", type=Path, default=None, help="Dataset CSV (overrides config)")
    parser.add_argument("--k", type=int, default=None, help="Number of neighbours")
    parser.add_argument(
        "--train-ratio", type=float, default=None, help="Share of rows used for training"
    )
    parser.add_argument("--sweep", action="store_true", help="Also report accuracy for knn.sweep")
    parser.add_argument("--plot", action="store_true", help="Save a confusion-matrix heatmap")
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else load_config()
    configure_logging(ROOT / config.get("paths", {}).get("logs", "logs"))

    try:
        report = run_knn(config, args.data, args.k, args.train_ratio)
        if args.sweep:
            split = prepare_split(config, args.data, args.train_ratio)
            ks = config.get("knn", {}).get("sweep", [1, 3, 5, 7, 9])
            table = sweep_k(split, ks, _positive_label(config, split))
            print("\n── k sweep ──")
            print(table[["k", "accuracy", "precision", "recall", "f1"]].to_string(index=False))
    except (PipelineError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.plot:
        plots_dir = ROOT / config.get("paths", {}).get("plots", "outputs/plots")
        path = plot_confusion_matrix(
            report.matrix, f"k-NN (k={report.k})", plots_dir / f"confusion_matrix_knn_k{report.k}.png"
        )
        print(f"  ✓ Plot → {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
