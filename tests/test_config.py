from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from lloydkm.config import ProjectConfig, load_config


def test_load_config_applies_defaults(tmp_path: Path) -> None:
    cfg_path = tmp_path / "project.yaml"
    cfg_path.write_text("data:\n  input_csv: points.csv\nclustering:\n  k: 4\n  metric: Manhattan\n", encoding="utf-8")

    cfg = load_config(cfg_path)
    assert cfg.random_seed == 42
    assert cfg.clustering.k == 4
    assert cfg.clustering.metric == "manhattan"
    assert cfg.clustering.max_iter == 100
    assert cfg.clustering.tolerance == pytest.approx(0.005)
    assert cfg.paths.results_dir == "results"


@pytest.mark.parametrize(
    "clustering",
    [
        {"k": 0},
        {"tolerance": -0.1},
        {"metric": "hamming-ish"},
        {"init": "farthest"},
    ],
)
def test_invalid_clustering_config_is_rejected(clustering: dict) -> None:
    with pytest.raises(ValidationError):
        ProjectConfig.model_validate({"data": {"input_csv": "x.csv"}, "clustering": clustering})


def test_shipped_example_config_is_valid() -> None:
    project_root = Path(__file__).resolve().parents[1]
    cfg = load_config(project_root / "configs" / "project.yaml")
    assert cfg.data.feature_columns == ["x", "y"]
