from __future__ import annotations

import inspect
import logging
from pathlib import Path

import click
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from lloydkm.config import load_config
from lloydkm.metrics.pairwise import available_metrics
from lloydkm.pipeline.fit import run_fit

# Typer + Click 8.2 compatibility: Typer rich help calls `make_metavar()`
# without a Context, but Click 8.2 requires it. Patch to keep `--help` working.
_make_metavar_sig = inspect.signature(click.core.Parameter.make_metavar)
if len(_make_metavar_sig.parameters) == 2:  # (self, ctx) -> str
    _orig_make_metavar = click.core.Parameter.make_metavar

    def _make_metavar_compat(self: click.Parameter, ctx: click.Context | None = None) -> str:  # type: ignore[misc]
        if ctx is None:
            ctx = click.get_current_context(silent=True)
        if ctx is None:
            ctx = click.Context(click.Command("lloydkm"))
        return _orig_make_metavar(self, ctx)

    click.core.Parameter.make_metavar = _make_metavar_compat  # type: ignore[assignment]

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-iteration costs."),
) -> None:
    """Lloyd-style K-Means clustering."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    logging.captureWarnings(True)


@app.command("fit")
def fit(
    config: str = typer.Option(..., "--config", "-c", help="Path to configs/project.yaml"),
    run_id: str | None = typer.Option(None, "--run-id", help="Snapshot id (default: UTC timestamp)."),
    show_summary: bool = typer.Option(True, "--summary/--no-summary", help="Print the per-iteration table."),
) -> None:
    """Fit KMeans on the configured data table and write result tables."""
    config_path = Path(config).resolve()
    cfg = load_config(config_path)
    meta = run_fit(cfg, config_path=config_path, run_id=run_id)
    result = meta["result"]

    if show_summary:
        import pandas as pd

        from lloydkm.reporting.table import summary_table_from_frame

        console.print(summary_table_from_frame(pd.read_csv(meta["outputs"]["fit_summary"])))

    status = "[green]OK[/green]" if result["converged"] else "[yellow]NOT CONVERGED[/yellow]"
    console.print(f"{status} run {meta['run_id']}: k={result['k']}, iterations={result['n_iter']}")
    console.print(f"TSS={result['tss']:.6g}, BSS={result['bss']:.6g}")
    console.print(f"Outputs: {meta['outputs']}")


@app.command("validate-config")
def validate_config(
    config: str = typer.Option(..., "--config", "-c", help="Path to configs/project.yaml"),
) -> None:
    """Parse and validate a project config without fitting."""
    config_path = Path(config).resolve()
    try:
        cfg = load_config(config_path)
    except ValidationError as exc:
        console.print(f"[red]INVALID[/red] {config_path}")
        console.print(str(exc))
        raise typer.Exit(code=1)
    cc = cfg.clustering
    console.print(f"[green]OK[/green] {config_path}")
    console.print(f"k={cc.k}, metric={cc.metric}, init={cc.init}, max_iter={cc.max_iter}, tolerance={cc.tolerance}")


@app.command("metrics")
def metrics() -> None:
    """List the metric names accepted by `clustering.metric`."""
    for name in available_metrics():
        console.print(name)
