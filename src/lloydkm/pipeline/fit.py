from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
import pandas as pd

from lloydkm.clustering.kmeans import KMeans
from lloydkm.config import ProjectConfig
from lloydkm.io.data import DataTableSpec, load_data_table
from lloydkm.metrics.pairwise import get_metric
from lloydkm.reporting.report import write_fit_markdown_report
from lloydkm.utils.paths import ensure_dir, project_root_from_config_path, resolve_path, sanitize_tag
from lloydkm.utils.seed import set_global_seed

_LOG = logging.getLogger(__name__)


def build_model(config: ProjectConfig, X: np.ndarray) -> KMeans:
    cc = config.clustering
    return KMeans(
        X,
        cc.k,
        init=cc.init,
        metric=get_metric(cc.metric, **cc.metric_params),
        max_iter=cc.max_iter,
        tolerance=cc.tolerance,
        random_seed=config.random_seed,
    )


def run_fit(
    config: ProjectConfig,
    *,
    config_path: Path,
    run_id: str | None = None,
) -> dict[str, object]:
    """Load the configured table, fit KMeans and write result tables into a run snapshot."""
    project_root = project_root_from_config_path(config_path)
    set_global_seed(config.random_seed)

    input_csv = resolve_path(project_root, config.data.input_csv)
    results_dir = ensure_dir(resolve_path(project_root, config.paths.results_dir))

    run_id = run_id or datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    tag = sanitize_tag(config.reporting.output_tag)
    run_dir = ensure_dir(results_dir / "snapshots" / run_id / tag)
    tables_dir = ensure_dir(run_dir / "tables")

    spec = DataTableSpec(
        feature_columns=config.data.feature_columns,
        id_column=config.data.id_column,
        standardize=config.data.standardize,
    )
    loaded = load_data_table(str(input_csv), spec)
    _LOG.info("Loaded %d rows x %d features from %s", loaded.X.shape[0], loaded.X.shape[1], input_csv)

    model = build_model(config, loaded.X).fit()

    id_col = config.data.id_column or "row"
    labels_path = tables_dir / "labels.csv"
    pd.DataFrame({id_col: loaded.ids, "Cluster": model.labels}).to_csv(labels_path, index=False)

    centroids_path = tables_dir / "centroids.csv"
    df_centroids = pd.DataFrame(model.centroids, columns=loaded.feature_columns)
    df_centroids.insert(0, "Cluster", np.arange(model.k))
    df_centroids.to_csv(centroids_path, index=False)

    sizes = np.bincount(model.labels, minlength=model.k)
    wss_path = tables_dir / "wss.csv"
    pd.DataFrame({"Cluster": np.arange(model.k), "size": sizes, "wss": model.wss}).to_csv(wss_path, index=False)

    summary_df = model.summary.to_frame()
    summary_path = tables_dir / "fit_summary.csv"
    summary_df.to_csv(summary_path, index=False)

    report_path = write_fit_markdown_report(
        run_id=run_id,
        k=model.k,
        metric=model.metric.name,
        converged=model.converged,
        n_iter=model.n_iter,
        tss=model.tss,
        bss=model.bss,
        wss=model.wss,
        cluster_sizes=sizes,
        summary=summary_df,
        out_path=run_dir / "report.md",
    )

    outputs: dict[str, str] = {
        "labels": str(labels_path),
        "centroids": str(centroids_path),
        "wss": str(wss_path),
        "fit_summary": str(summary_path),
        "report": str(report_path),
    }

    if config.reporting.plot_cost_trajectory:
        from lloydkm.reporting.plots import plot_cost_trajectory

        fig_path = plot_cost_trajectory(
            summary_df,
            out_path=ensure_dir(run_dir / "figures") / "cost_trajectory.png",
            title=f"KMeans cost (k={model.k})",
        )
        outputs["cost_trajectory"] = str(fig_path)

    meta = {
        "run_id": run_id,
        "created_utc": datetime.now(timezone.utc).isoformat(),
        "config_path": str(config_path),
        "input_csv": str(input_csv),
        "n_rows": int(loaded.X.shape[0]),
        "feature_columns": loaded.feature_columns,
        "config": config.model_dump(),
        "result": {
            "k": model.k,
            "requested_k": config.clustering.k,
            "converged": model.converged,
            "n_iter": model.n_iter,
            "tss": model.tss,
            "max_cost": model.max_cost,
            "bss": model.bss,
            "wss": [float(w) for w in model.wss],
        },
        "outputs": outputs,
    }
    meta_path = run_dir / "run_meta.json"
    meta_path.write_text(json.dumps(meta, indent=2), encoding="utf-8")
    meta["outputs"]["run_meta"] = str(meta_path)
    return meta
