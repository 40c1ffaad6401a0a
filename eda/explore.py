"""Exploratory Data Analysis for the prostate cancer dataset.

Generates:
    - Class balance table and bar chart
    - Per-feature ranges and per-class means
    - Per-feature correlation with the (binary-coded) label
    - Correlation heatmap of the feature columns

Figures are saved as PNG under ``outputs/plots/``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

from data.loader import ROOT, Dataset, load_config, load_dataset_from_config  # noqa: E402
from data.normalizer import column_ranges  # noqa: E402


# ── styling defaults ─────────────────────────────────────────────
sns.set_theme(style="whitegrid", palette="muted", font_scale=1.1)
FIGSIZE_SQUARE = (10, 8)
DPI = 150


def class_balance(dataset: Dataset) -> pd.Series:
    """Row count per label, in label-domain order."""
    return dataset.labels.value_counts().reindex(list(dataset.label_domain), fill_value=0)


def class_means(dataset: Dataset, label_column: str = "label") -> pd.DataFrame:
    """Mean of every feature per class, rows in label-domain order."""
    frame = dataset.to_frame(label_column)
    return frame.groupby(label_column).mean().reindex(list(dataset.label_domain))


def feature_correlations(dataset: Dataset, positive: Optional[str] = None) -> pd.Series:
    """Absolute correlation of each feature with the label, descending.

    The label is coded 1 for *positive* (default: second domain label) and
    0 otherwise.
    """
    positive = dataset.label_domain[1] if positive is None else positive
    target = (dataset.labels == positive).astype(float)
    return dataset.features.corrwith(target).abs().sort_values(ascending=False)


def plot_class_distribution(dataset: Dataset, save_dir: Path) -> Path:
    """Bar chart of class balance."""
    counts = class_balance(dataset)

    fig, ax = plt.subplots(figsize=(8, 5))
    bars = ax.bar(counts.index, counts.values, color=["#2ecc71", "#e74c3c"],
                  edgecolor="white", width=0.55)
    for bar, count in zip(bars, counts.values):
        ax.text(
            bar.get_x() + bar.get_width() / 2,
            bar.get_height(),
            str(count),
            ha="center",
            va="bottom",
            fontweight="bold",
        )
    ax.set_title("Class Distribution", fontsize=16, fontweight="bold")
    ax.set_ylabel("Count")
    sns.despine()
    fig.tight_layout()
    path = save_dir / "class_distribution.png"
    fig.savefig(path, dpi=DPI)
    plt.close(fig)
    return path


def plot_correlation_heatmap(dataset: Dataset, save_dir: Path) -> Path:
    """Lower-triangle heatmap of pairwise feature correlations."""
    corr = dataset.features.corr()

    fig, ax = plt.subplots(figsize=FIGSIZE_SQUARE)
    mask = np.triu(np.ones_like(corr, dtype=bool))
    sns.heatmap(
        corr,
        mask=mask,
        annot=True,
        fmt=".2f",
        cmap="RdBu_r",
        center=0,
        square=True,
        linewidths=0.5,
        cbar_kws={"shrink": 0.75},
        ax=ax,
    )
    ax.set_title("Feature Correlation Heatmap", fontsize=14, fontweight="bold")
    fig.tight_layout()
    path = save_dir / "correlation_heatmap.png"
    fig.savefig(path, dpi=DPI)
    plt.close(fig)
    return path


def run_eda(config: Optional[dict] = None, data_path: Optional[Path] = None) -> None:
    """Execute the full EDA pipeline on the raw (unnormalized) dataset."""
    if config is None:
        config = load_config()

    plots_dir = ROOT / config.get("paths", {}).get("plots", "outputs/plots")
    plots_dir.mkdir(parents=True, exist_ok=True)
    dataset = load_dataset_from_config(config, data_path)
    positive = config.get("evaluation", {}).get("positive_label")

    print("── Exploratory Data Analysis ─────────────────────")
    print(class_balance(dataset).to_string())
    print(column_ranges(dataset).round(3).to_string())
    print(class_means(dataset).round(3).to_string())
    print(feature_correlations(dataset, positive).round(3).to_string())
    print(f"  ✓ Saved {plot_class_distribution(dataset, plots_dir).name}")
    print(f"  ✓ Saved {plot_correlation_heatmap(dataset, plots_dir).name}")
    print("── Done ──────────────────────────────────────────\n")


# ── CLI ──────────────────────────────────────────────────────────
if __name__ == "__main__":
    run_eda()
