from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd


def _require_matplotlib() -> None:
    try:
        import matplotlib  # noqa: F401
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "Missing plotting dependencies. Install with `pip install lloydkm[plot]`."
        ) from exc


def plot_cost_trajectory(
    summary: pd.DataFrame,
    *,
    out_path: Path,
    title: str,
) -> Path:
    """Line plot of the per-iteration TSS recorded in a fit summary."""
    _require_matplotlib()
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    df = summary[np.isfinite(summary["Min TSS"].astype(float))]
    x = df["Iter. #"].astype(int).to_numpy()
    y = df["Min TSS"].astype(float).to_numpy()

    fig, ax = plt.subplots(figsize=(6, 3.2))
    ax.plot(x, y, marker="o", color="black", linewidth=1)
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Total sum of squares")
    ax.set_title(title)
    ax.grid(True, linestyle=":", linewidth=0.6)
    fig.tight_layout()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return out_path
