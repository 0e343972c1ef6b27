from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import pandas as pd


def _fmt_float(x: float, ndigits: int = 4) -> str:
    if math.isnan(x):
        return "NA"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    return f"{x:.{ndigits}f}"


def write_fit_markdown_report(
    *,
    run_id: str,
    k: int,
    metric: str,
    converged: bool,
    n_iter: int,
    tss: float,
    bss: float,
    wss: np.ndarray,
    cluster_sizes: np.ndarray,
    summary: pd.DataFrame,
    out_path: Path,
) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append(f"# lloydkm run report ({run_id})")
    lines.append("")
    lines.append("## Fit")
    lines.append("")
    lines.append(f"- k={k}, metric={metric}")
    lines.append(f"- converged={converged} after {n_iter} iteration(s)")
    lines.append(f"- TSS={_fmt_float(tss)}, WSS sum={_fmt_float(float(np.sum(wss)))}, BSS={_fmt_float(bss)}")
    lines.append("")
    lines.append("## Clusters")
    lines.append("")
    lines.append("| Cluster | Size | WSS |")
    lines.append("|---:|---:|---:|")
    for c, (size, w) in enumerate(zip(cluster_sizes, wss)):
        lines.append(f"| {c} | {int(size)} | {_fmt_float(float(w))} |")
    lines.append("")
    lines.append("## Iterations")
    lines.append("")
    lines.append("| " + " | ".join(summary.columns) + " |")
    lines.append("|" + "---:|" * len(summary.columns))
    for _, r in summary.iterrows():
        cells = []
        for v in r.tolist():
            if isinstance(v, (bool, np.bool_)):
                cells.append(str(bool(v)))
            elif isinstance(v, (int, np.integer)):
                cells.append(str(int(v)))
            else:
                cells.append(_fmt_float(float(v)))
        lines.append("| " + " | ".join(cells) + " |")
    lines.append("")

    out_path.write_text("\n".join(lines), encoding="utf-8")
    return out_path
