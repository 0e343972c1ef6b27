from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.preprocessing import StandardScaler


@dataclass(frozen=True)
class DataTableSpec:
    feature_columns: list[str] | None = None
    id_column: str | None = None
    standardize: bool = False


@dataclass(frozen=True)
class LoadedData:
    X: np.ndarray
    feature_columns: list[str]
    ids: pd.Series


def load_data_table(path: str, spec: DataTableSpec) -> LoadedData:
    df = pd.read_csv(path)

    required = list(spec.feature_columns or [])
    if spec.id_column:
        required.append(spec.id_column)
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Data table is missing required columns: {missing}")

    if spec.feature_columns:
        features = list(spec.feature_columns)
    else:
        features = [c for c in df.select_dtypes(include="number").columns if c != spec.id_column]
    if not features:
        raise ValueError("Data table has no numeric feature columns")

    df = df.dropna(subset=features).reset_index(drop=True)
    if df.empty:
        raise ValueError("Data table has no complete rows")

    X = df[features].to_numpy(dtype=float)
    if spec.standardize:
        X = StandardScaler().fit_transform(X)

    ids = df[spec.id_column] if spec.id_column else pd.Series(np.arange(len(df)), name="row")
    return LoadedData(X=X, feature_columns=features, ids=ids.reset_index(drop=True))
