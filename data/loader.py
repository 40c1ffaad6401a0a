"""Data loader for labeled tabular CSV datasets.

Reads a header-row CSV into a :class:`Dataset`, validating it against an
explicit named schema (label column, two-value label domain, feature
columns) so that a reordered or malformed file fails fast.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import pandas as pd
import yaml

from utils.errors import SchemaError
from utils.logger import get_logger


# ── project root (two levels up from this file) ──────────────────
ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT / "config" / "config.yaml"

log = get_logger(__name__)


def load_config(path: Path = CONFIG_PATH) -> dict:
    """Load the YAML configuration file.

    Args:
        path: Filesystem path to config.yaml.

    Returns:
        Parsed configuration dictionary.
    """
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh)


@dataclass(frozen=True, eq=False)
class Dataset:
    """An ordered, labeled table of numeric observations.

    Rows are identified by position only.  Derived stages (normalization,
    splitting, shuffling) build new instances instead of mutating this one.

    Attributes:
        features: Float feature matrix, columns in ``feature_names`` order.
        labels: One label per row, each a member of ``label_domain``.
        feature_names: Ordered feature schema.
        label_domain: The two admissible label values, in tie-break order.
    """

    features: pd.DataFrame
    labels: pd.Series
    feature_names: list[str]
    label_domain: tuple[str, str]

    def __len__(self) -> int:
        return len(self.labels)

    @property
    def n_features(self) -> int:
        return len(self.feature_names)

    def take(self, rows: slice | Sequence[int] | np.ndarray) -> "Dataset":
        """Return a new dataset holding the selected rows, index reset."""
        return Dataset(
            features=self.features.iloc[rows].reset_index(drop=True),
            labels=self.labels.iloc[rows].reset_index(drop=True),
            feature_names=list(self.feature_names),
            label_domain=self.label_domain,
        )

    def with_features(self, features: pd.DataFrame) -> "Dataset":
        """Return a new dataset sharing labels and schema with new features."""
        return Dataset(
            features=features,
            labels=self.labels.copy(),
            feature_names=list(self.feature_names),
            label_domain=self.label_domain,
        )

    def to_frame(self, label_column: str = "label") -> pd.DataFrame:
        """Features and labels as a single DataFrame."""
        df = self.features.copy()
        df[label_column] = self.labels.values
        return df


def _normalise_domain(label_values: Sequence) -> tuple[str, str]:
    domain = tuple(str(v).strip() for v in label_values)
    if len(domain) != 2 or domain[0] == domain[1]:
        raise SchemaError(
            f"Label domain must hold exactly two distinct values, got {list(label_values)}"
        )
    return domain  # type: ignore[return-value]


def _read_csv(path: Path) -> pd.DataFrame:
    try:
        return pd.read_csv(path, skipinitialspace=True)
    except pd.errors.EmptyDataError as exc:
        raise SchemaError(f"{path} contains no header row") from exc
    except pd.errors.ParserError as exc:
        raise SchemaError(f"{path} has rows with inconsistent field counts: {exc}") from exc


def _coerce_features(df: pd.DataFrame, feature_columns: list[str]) -> pd.DataFrame:
    """Convert feature columns to float, rejecting missing, non-numeric or infinite cells."""
    out = pd.DataFrame(index=df.index)
    for col in feature_columns:
        raw = df[col]
        if raw.isna().any():
            bad = int(raw.isna().to_numpy().nonzero()[0][0])
            raise SchemaError(f"Missing value in feature column {col!r} at row {bad}")
        numeric = pd.to_numeric(raw, errors="coerce")
        if numeric.isna().any():
            bad = int(numeric.isna().to_numpy().nonzero()[0][0])
            raise SchemaError(
                f"Non-numeric value {raw.iloc[bad]!r} in feature column {col!r} at row {bad}"
            )
        finite = np.isfinite(numeric.to_numpy(dtype=float))
        if not finite.all():
            bad = int((~finite).nonzero()[0][0])
            raise SchemaError(
                f"Non-finite value {raw.iloc[bad]!r} in feature column {col!r} at row {bad}"
            )
        out[col] = numeric.astype(float)
    return out.reset_index(drop=True)


def load_dataset(
    path: Path | str,
    label_column: str,
    label_values: Sequence,
    feature_columns: Optional[Sequence[str]] = None,
    id_column: Optional[str] = None,
) -> Dataset:
    """Load and validate a labeled CSV file.

    Args:
        path: CSV file with a header row.
        label_column: Name of the categorical label column.
        label_values: The two admissible label values.  Their order is the
            tie-break order used by the classifier.
        feature_columns: Feature names, in the order they form the feature
            vector.  When *None*, every column other than the label and id
            columns is used, in file order.
        id_column: Optional row-identifier column that is dropped.

    Returns:
        A validated :class:`Dataset`.

    Raises:
        FileNotFoundError: If *path* does not exist.
        SchemaError: If columns are missing, rows are ragged, a feature cell
            is missing, non-numeric or infinite, or a label is outside the
            domain.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")

    domain = _normalise_domain(label_values)
    df = _read_csv(path)
    df.columns = [str(c).strip() for c in df.columns]

    required = [label_column] + ([id_column] if id_column else [])
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise SchemaError(f"{path} is missing required column(s): {missing}")

    if feature_columns is None:
        features = [c for c in df.columns if c not in (label_column, id_column)]
    else:
        features = list(feature_columns)
        absent = [c for c in features if c not in df.columns]
        if absent:
            raise SchemaError(f"{path} is missing feature column(s): {absent}")
    if not features:
        raise SchemaError(f"{path} has no feature columns")
    if len(set(features)) != len(features):
        raise SchemaError(f"Duplicate feature columns in schema: {features}")
    if label_column in features or (id_column and id_column in features):
        raise SchemaError("Label and id columns cannot also be feature columns")

    if df.empty:
        raise SchemaError(f"{path} contains no data rows")

    labels = df[label_column].astype(str).str.strip().reset_index(drop=True)
    outside = sorted(set(labels) - set(domain))
    if outside:
        raise SchemaError(
            f"Labels {outside} in column {label_column!r} are outside the domain {list(domain)}"
        )

    dataset = Dataset(
        features=_coerce_features(df, features),
        labels=labels.rename(label_column),
        feature_names=features,
        label_domain=domain,
    )
    log.info(
        "Loaded %d rows × %d features from %s (labels: %s)",
        len(dataset), dataset.n_features, path.name,
        dataset.labels.value_counts().to_dict(),
    )
    return dataset


def load_dataset_from_config(config: dict, path: Optional[Path | str] = None) -> Dataset:
    """Load the dataset described by the ``data`` section of *config*.

    Args:
        config: Parsed configuration dictionary.
        path: Overrides ``data.path``.  Relative config paths resolve
            against the project root.

    Returns:
        A validated :class:`Dataset`.
    """
    data_cfg: dict = config.get("data", {})
    if path is None:
        path = ROOT / data_cfg["path"]
    return load_dataset(
        path,
        label_column=data_cfg["label_column"],
        label_values=data_cfg["label_values"],
        feature_columns=data_cfg.get("feature_columns"),
        id_column=data_cfg.get("id_column"),
    )


# ── CLI convenience ──────────────────────────────────────────────
if __name__ == "__main__":
    dataset = load_dataset_from_config(load_config())
    print(f"Rows      : {len(dataset)}")
    print(f"Features  : {dataset.feature_names}")
    print(f"Classes   : {list(dataset.label_domain)}")
