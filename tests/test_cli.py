from __future__ import annotations

from pathlib import Path

import pandas as pd
from typer.testing import CliRunner

from lloydkm.cli import app

runner = CliRunner()


def _write_project(tmp_path: Path, k: int = 2) -> Path:
    pd.DataFrame({"x": [0.0, 0.0, 10.0, 10.0], "y": [0.0, 1.0, 0.0, 1.0]}).to_csv(tmp_path / "points.csv", index=False)
    cfg = tmp_path / "project.yaml"
    cfg.write_text(
        f"data:\n  input_csv: points.csv\nclustering:\n  k: {k}\n  init: random\n",
        encoding="utf-8",
    )
    return cfg


def test_cli_fit_writes_snapshot(tmp_path: Path) -> None:
    cfg = _write_project(tmp_path)
    result = runner.invoke(app, ["fit", "--config", str(cfg), "--run-id", "cli"])

    assert result.exit_code == 0, result.output
    assert "OK" in result.output
    assert (tmp_path / "results" / "snapshots" / "cli" / "kmeans" / "tables" / "labels.csv").exists()


def test_cli_validate_config_reports_errors(tmp_path: Path) -> None:
    cfg = _write_project(tmp_path, k=0)
    result = runner.invoke(app, ["validate-config", "--config", str(cfg)])
    assert result.exit_code == 1
    assert "INVALID" in result.output


def test_cli_lists_metrics() -> None:
    result = runner.invoke(app, ["metrics"])
    assert result.exit_code == 0
    assert "euclidean" in result.output
