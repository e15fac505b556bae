"""Command-line interface for the pooled vs. two-component experiment."""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from poolornot.config import default_config, load_config
from poolornot.evidence import METHODS
from poolornot.experiments.pool_or_not import (
    format_selection_report,
    run_pool_or_not,
    tallies_to_frame,
)
from poolornot.utils import setup_environment

# Status typer exits with on bad arguments, and the conventional
# "command line usage error" status (sysexits.h) reported instead.
TYPER_USAGE_STATUS = 2
EX_USAGE = 64

app = typer.Typer(
    name="poolornot",
    help="Bayesian model selection: one Gaussian component or two?",
    add_completion=False,
)


Method = Enum("Method", {name: name for name in METHODS}, type=str)


@app.command()
def run(
    num_datasets: Optional[int] = typer.Argument(
        None,
        min=1,
        help="Number of datasets per generating model (default: 10).",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration YAML file.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        "-s",
        help="Random seed (overrides config and $POOLORNOT_SEED).",
    ),
    method: Optional[list[Method]] = typer.Option(
        None,
        "--method",
        "-m",
        help="Evidence estimation method; repeat for several (default: both).",
    ),
    log_domain: bool = typer.Option(
        False,
        "--log-domain",
        help="Accumulate log-likelihoods to avoid underflow.",
    ),
    show_data: bool = typer.Option(
        False,
        "--show-data",
        help="Print the sorted data of every trial.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print the final summary.",
    ),
) -> None:
    """Estimate the evidence of both models on synthetic datasets.

    Half of the datasets come from one Gaussian, half from a two-component
    mixture; the summary counts how often each method picks the generator.
    """
    setup_environment()

    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if config is not None:
        typer.echo(f"Loading configuration from {config}")
        try:
            cfg = load_config(config)
        except (OSError, ValueError) as e:
            raise typer.BadParameter(str(e), param_hint="--config") from e
    else:
        cfg = default_config()

    if seed is not None:
        cfg.seed = seed
    if num_datasets is not None:
        cfg.experiment.n_datasets = num_datasets
    if method:
        cfg.experiment.methods = list(dict.fromkeys(m.value for m in method))
    if log_domain:
        cfg.experiment.log_domain = True

    typer.echo(f"Starting computation for {cfg.experiment.n_datasets} datasets each. ...")
    if not quiet:
        typer.echo(f"Seed: {cfg.seed}")
        typer.echo(f"Methods: {', '.join(cfg.experiment.methods)}")
        typer.echo(f"Monte Carlo draws per estimate: {cfg.experiment.sample_repeat_num}")

    results = run_pool_or_not(cfg, verbose=not quiet, show_data=show_data)

    typer.echo()
    typer.echo(format_selection_report(results["tallies"]))

    if not quiet:
        typer.echo()
        typer.echo(tallies_to_frame(results["tallies"]).to_string(index=False))


def main() -> None:
    """Console entry point; usage errors exit with status 64."""
    try:
        app()
    except SystemExit as e:
        if e.code == TYPER_USAGE_STATUS:
            raise SystemExit(EX_USAGE) from None
        raise


if __name__ == "__main__":
    main()
