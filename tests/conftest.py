"""Shared fixtures for the k-NN pipeline test suite."""

from __future__ import annotations

import copy
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from data.loader import Dataset, load_config  # noqa: E402

FEATURES: list[str] = [
    "radius", "texture", "perimeter", "area",
    "smoothness", "compactness", "symmetry", "fractal_dimension",
]


def make_prostate_frame(n: int = 40, seed: int = 0) -> pd.DataFrame:
    """Synthetic frame shaped like the prostate cancer CSV.

    Malignant rows are shifted upwards on the first four features so that
    the classes are well separated.
    """
    rng = np.random.RandomState(seed)
    labels = np.array(["M" if i % 3 else "B" for i in range(n)])
    is_malignant = (labels == "M").astype(float)
    df = pd.DataFrame({"id": np.arange(1, n + 1), "diagnosis_result": labels})
    for j, name in enumerate(FEATURES):
        shift = 20.0 * is_malignant if j < 4 else 0.0
        df[name] = np.round(rng.uniform(1, 10, n) + shift, 4)
    return df


def make_dataset(features, labels, domain=("A", "B"), names=None) -> Dataset:
    """Build a :class:`Dataset` directly from arrays."""
    features = np.asarray(features, dtype=float)
    names = names or [f"f{i}" for i in range(features.shape[1])]
    return Dataset(
        features=pd.DataFrame(features, columns=names),
        labels=pd.Series(list(labels), name="label"),
        feature_names=list(names),
        label_domain=tuple(domain),
    )


@pytest.fixture()
def prostate_csv(tmp_path: Path) -> Path:
    """40-row prostate-like CSV on disk."""
    path = tmp_path / "Prostate_Cancer.csv"
    make_prostate_frame().to_csv(path, index=False)
    return path


@pytest.fixture()
def config(tmp_path: Path, prostate_csv: Path) -> dict:
    """Project config redirected to the temporary dataset and output dirs."""
    cfg = copy.deepcopy(load_config())
    cfg["data"]["path"] = str(prostate_csv)
    cfg["paths"] = {
        "outputs": str(tmp_path / "outputs"),
        "models": str(tmp_path / "outputs" / "models"),
        "plots": str(tmp_path / "outputs" / "plots"),
        "reports": str(tmp_path / "outputs" / "reports"),
        "logs": str(tmp_path / "logs"),
    }
    return cfg


@pytest.fixture()
def four_points() -> tuple[np.ndarray, np.ndarray]:
    """Two tight clusters: A near the origin, B near (10, 10)."""
    X = np.array([[0.0, 0.0], [0.0, 1.0], [10.0, 10.0], [10.0, 11.0]])
    y = np.array(["A", "A", "B", "B"])
    return X, y
