"""Input loading for data tables."""

from .data import DataTableSpec, LoadedData, load_data_table

__all__ = ["DataTableSpec", "LoadedData", "load_data_table"]
