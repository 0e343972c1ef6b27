"""Pipeline implementations (config-driven fit runs)."""

from .fit import build_model, run_fit

__all__ = ["build_model", "run_fit"]
