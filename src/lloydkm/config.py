from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from lloydkm.clustering.init import INIT_METHODS
from lloydkm.clustering.kmeans import DEF_K, DEF_MAX_ITER, DEF_TOLERANCE
from lloydkm.metrics.pairwise import available_metrics


class DataConfig(BaseModel):
    input_csv: str
    feature_columns: list[str] | None = None
    id_column: str | None = None
    standardize: bool = False


class ClusteringConfig(BaseModel):
    k: int = Field(default=DEF_K, ge=1)
    max_iter: int = Field(default=DEF_MAX_ITER, ge=1)
    tolerance: float = Field(default=DEF_TOLERANCE, ge=0)
    metric: str = "euclidean"
    metric_params: dict[str, float] = Field(default_factory=dict)
    init: str = "kmeans++"

    @field_validator("metric")
    @classmethod
    def _known_metric(cls, v: str) -> str:
        key = v.strip().lower()
        if key not in available_metrics():
            raise ValueError(f"unknown metric {v!r}; expected one of {available_metrics()}")
        return key

    @field_validator("init")
    @classmethod
    def _known_init(cls, v: str) -> str:
        if v not in INIT_METHODS:
            raise ValueError(f"unknown init {v!r}; expected one of {list(INIT_METHODS)}")
        return v


class PathsConfig(BaseModel):
    results_dir: str = "results"


class ReportingConfig(BaseModel):
    output_tag: str = "kmeans"
    plot_cost_trajectory: bool = False


class ProjectConfig(BaseModel):
    random_seed: int = 42
    data: DataConfig
    clustering: ClusteringConfig = Field(default_factory=ClusteringConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)


def load_config(path: str | Path) -> ProjectConfig:
    config_path = Path(path)
    data: dict[str, Any] = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    return ProjectConfig.model_validate(data)
