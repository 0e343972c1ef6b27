from __future__ import annotations

import math

import numpy as np
import pandas as pd
from rich.table import Table

from lloydkm.clustering.summary import FitSummary


def _cell(v: object) -> str:
    if isinstance(v, (bool, np.bool_)):
        return "yes" if v else "no"
    if isinstance(v, (int, np.integer)):
        return str(int(v))
    x = float(v)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    return f"{x:.4g}"


def summary_table_from_frame(df: pd.DataFrame, *, title: str = "KMeans fit summary") -> Table:
    table = Table(title=title)
    for header in df.columns:
        table.add_column(str(header), justify="right")
    for row in df.itertuples(index=False):
        table.add_row(*(_cell(v) for v in row))
    return table


def summary_table(summary: FitSummary, *, title: str = "KMeans fit summary") -> Table:
    return summary_table_from_frame(summary.to_frame(), title=title)
