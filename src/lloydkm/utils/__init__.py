"""Shared utilities (seeding, paths, matrix reductions)."""

from .matrix import group_sums, mean_record, per_cluster_sq_cost, squared_distance_sum
from .paths import ensure_dir, project_root_from_config_path, resolve_path, sanitize_tag
from .seed import set_global_seed

__all__ = [
    "ensure_dir",
    "group_sums",
    "mean_record",
    "per_cluster_sq_cost",
    "project_root_from_config_path",
    "resolve_path",
    "sanitize_tag",
    "set_global_seed",
    "squared_distance_sum",
]
