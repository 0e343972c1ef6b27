"""Reporting helpers (summary tables, Markdown report, figures)."""

from .plots import plot_cost_trajectory
from .report import write_fit_markdown_report
from .table import summary_table, summary_table_from_frame

__all__ = ["plot_cost_trajectory", "summary_table", "summary_table_from_frame", "write_fit_markdown_report"]
