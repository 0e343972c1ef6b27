from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from lloydkm.config import ProjectConfig
from lloydkm.io.data import DataTableSpec, load_data_table
from lloydkm.pipeline.fit import run_fit


def _write_points(path: Path) -> None:
    rng = np.random.default_rng(0)
    a = rng.normal(loc=0.0, scale=0.5, size=(20, 2))
    b = rng.normal(loc=8.0, scale=0.5, size=(20, 2))
    xy = np.vstack([a, b])
    pd.DataFrame({"point_id": [f"p{i}" for i in range(len(xy))], "x": xy[:, 0], "y": xy[:, 1]}).to_csv(
        path, index=False
    )


def _config(**clustering: object) -> ProjectConfig:
    return ProjectConfig.model_validate(
        {
            "data": {"input_csv": "points.csv", "id_column": "point_id"},
            "clustering": {"k": 2, **clustering},
            "paths": {"results_dir": "results"},
        }
    )


def test_run_fit_writes_outputs(tmp_path: Path) -> None:
    _write_points(tmp_path / "points.csv")
    meta = run_fit(_config(), config_path=tmp_path / "project.yaml", run_id="test")

    outputs = meta["outputs"]
    for key in ["labels", "centroids", "wss", "fit_summary", "report", "run_meta"]:
        assert Path(outputs[key]).exists(), key
    assert "snapshots" in outputs["labels"]

    labels = pd.read_csv(outputs["labels"])
    assert labels.columns.tolist() == ["point_id", "Cluster"]
    assert len(labels) == 40
    assert labels["Cluster"].nunique() == 2
    assert labels["Cluster"].iloc[0] == 0

    summary = pd.read_csv(outputs["fit_summary"])
    assert summary.columns.tolist() == ["Iter. #", "Converged", "Max TSS", "Min TSS", "End WSS", "End BSS", "Wall"]

    saved = json.loads(Path(outputs["run_meta"]).read_text(encoding="utf-8"))
    assert saved["result"]["converged"] is True
    assert saved["result"]["k"] == 2
    assert saved["result"]["bss"] + sum(saved["result"]["wss"]) == pytest.approx(saved["result"]["tss"])


def test_run_fit_plots_cost_trajectory(tmp_path: Path) -> None:
    pytest.importorskip("matplotlib")
    _write_points(tmp_path / "points.csv")
    cfg = _config()
    cfg.reporting.plot_cost_trajectory = True

    meta = run_fit(cfg, config_path=tmp_path / "project.yaml", run_id="plot")
    assert Path(meta["outputs"]["cost_trajectory"]).exists()


def test_load_data_table_requires_columns(tmp_path: Path) -> None:
    path = tmp_path / "points.csv"
    _write_points(path)

    loaded = load_data_table(str(path), DataTableSpec(id_column="point_id"))
    assert loaded.feature_columns == ["x", "y"]
    assert loaded.X.shape == (40, 2)

    with pytest.raises(ValueError):
        load_data_table(str(path), DataTableSpec(feature_columns=["x", "z"]))


def test_load_data_table_standardizes(tmp_path: Path) -> None:
    path = tmp_path / "points.csv"
    _write_points(path)

    loaded = load_data_table(str(path), DataTableSpec(standardize=True))
    assert np.allclose(loaded.X.mean(axis=0), 0.0)
    assert loaded.ids.tolist() == list(range(40))
