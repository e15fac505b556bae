"""Pooled vs. two-component model-selection experiment.

For each trial:
- Sample true parameters from the prior of the generating model
- Generate a dataset from those parameters
- Estimate the evidence of both models with every configured method
- Count whether the generating model has the larger evidence

Half of the trials use one-component data, the other half two-component
data.
"""

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
from tqdm import tqdm

from poolornot.config import Config, ExperimentConfig
from poolornot.evidence import (
    METHODS,
    evidence_one_component_by_quadrature,
    evidence_one_component_by_sampling,
    evidence_two_component_by_quadrature,
    evidence_two_component_by_sampling,
    favors_pooled,
)
from poolornot.grid import QuantileGrid, precompute
from poolornot.metrics import (
    compute_accuracy,
    compute_accuracy_interval,
    compute_stderr_accuracy,
    sample_mean,
    sample_variance,
)
from poolornot.priors import GaussParams, MixtureParams, PriorModel
from poolornot.simulate import generate_one_component, generate_two_component
from poolornot.utils import make_rng

logger = logging.getLogger(__name__)

GENERATORS = ("pooled", "differ")


@dataclass
class TrialResult:
    """Outcome of one trial."""
    generator: str  # "pooled" or "differ"
    trial_idx: int
    params: GaussParams | MixtureParams
    data: np.ndarray
    sample_mean: float
    sample_variance: float
    evidence: dict[str, tuple[float, float]]  # method -> (pooled, differ)

    def favors_pooled(self, method: str) -> bool:
        pooled, differ = self.evidence[method]
        return favors_pooled(pooled, differ)

    def is_correct(self, method: str) -> bool:
        """Whether the generating model was selected by the given method."""
        if self.generator == "pooled":
            return self.favors_pooled(method)
        return not self.favors_pooled(method)


@dataclass
class SelectionTally:
    """Correct selections for one (method, generator) combination."""
    method: str
    generator: str
    correct: int = 0
    total: int = 0

    def record(self, correct: bool) -> None:
        self.total += 1
        if correct:
            self.correct += 1

    @property
    def accuracy(self) -> float:
        return compute_accuracy(self.correct, self.total)


def estimate_evidence(
    data: np.ndarray,
    methods: list[str],
    prior: PriorModel,
    grid: QuantileGrid | None,
    experiment: ExperimentConfig,
) -> dict[str, tuple[float, float]]:
    """Estimate the evidence of both models with each method.

    Args:
        data: Observations.
        methods: Methods to run ("sampling" and/or "quadrature").
        prior: Prior model, used by the sampling method.
        grid: Quantile grid, required by the quadrature method.
        experiment: Sample counts and accumulation settings.

    Returns:
        Dictionary mapping method to (pooled, differ) evidence.

    Raises:
        ValueError: If a method is unknown or the grid is missing.
    """
    log_domain = experiment.log_domain
    evidence = {}

    for method in methods:
        if method == "sampling":
            evidence[method] = (
                evidence_one_component_by_sampling(
                    data, prior, experiment.sample_repeat_num, experiment.batch_size, log_domain
                ),
                evidence_two_component_by_sampling(
                    data, prior, experiment.sample_repeat_num, experiment.batch_size, log_domain
                ),
            )
        elif method == "quadrature":
            if grid is None:
                raise ValueError("The quadrature method needs a precomputed grid")
            evidence[method] = (
                evidence_one_component_by_quadrature(data, grid, log_domain),
                evidence_two_component_by_quadrature(data, grid, log_domain),
            )
        else:
            raise ValueError(f"Unknown method: {method}. Available: {list(METHODS)}")

    return evidence


def run_pool_or_not(
    config: Config,
    rng: np.random.Generator | None = None,
    verbose: bool = True,
    show_data: bool = False,
) -> dict[str, Any]:
    """Run the model-selection trials.

    Args:
        config: Experiment configuration.
        rng: Random generator (seeded from config.seed if None).
        verbose: If True, show progress and per-trial reports.
        show_data: If True, include the sorted data in per-trial reports.

    Returns:
        Dictionary with 'trials', 'tallies' and 'log_domain'.
    """
    if rng is None:
        rng = make_rng(config.seed)

    experiment = config.experiment
    methods = list(experiment.methods)
    prior = PriorModel(config.prior, rng)

    grid = None
    if "quadrature" in methods:
        grid = precompute(config.prior, config.grid)

    tallies = {
        (method, generator): SelectionTally(method, generator)
        for generator in GENERATORS
        for method in methods
    }
    trials: list[TrialResult] = []

    n_datasets = experiment.n_datasets
    logger.info("Starting computation for %d datasets each", n_datasets)

    pbar = tqdm(total=len(GENERATORS) * n_datasets, disable=not verbose, desc="Trials")

    for generator in GENERATORS:
        if verbose:
            label = "one component" if generator == "pooled" else "two components"
            tqdm.write(f"\nData generated with {label}")

        for trial_idx in range(n_datasets):
            if generator == "pooled":
                params = prior.sample_gauss_params()
                data = generate_one_component(params, experiment.data_n, rng)
            else:
                params = prior.sample_mixture_params()
                data = generate_two_component(params, experiment.data_n, rng)

            result = TrialResult(
                generator=generator,
                trial_idx=trial_idx,
                params=params,
                data=data,
                sample_mean=sample_mean(data),
                sample_variance=sample_variance(data),
                evidence=estimate_evidence(data, methods, prior, grid, experiment),
            )
            trials.append(result)

            for method in methods:
                tallies[(method, generator)].record(result.is_correct(method))

            if verbose:
                tqdm.write(format_trial(result, log_domain=experiment.log_domain, show_data=show_data))
            pbar.update(1)

    pbar.close()

    return {
        "trials": trials,
        "tallies": tallies,
        "log_domain": experiment.log_domain,
    }


def format_params(params: GaussParams | MixtureParams) -> str:
    """Describe generating parameters."""
    if isinstance(params, MixtureParams):
        c1, c2 = params.component1, params.component2
        return (
            f"m; (μ1,σ1); (μ2,σ2) = {params.mix_coef:5.3f}; "
            f"({c1.mean:4.2f},{c1.stddev:4.2f}); ({c2.mean:4.2f},{c2.stddev:4.2f})"
        )
    return f"(μ,σ) = ({params.mean:4.2f},{params.stddev:4.2f})"


def format_trial(result: TrialResult, log_domain: bool = False, show_data: bool = False) -> str:
    """Describe one trial: generating parameters, data and evidence values."""
    lines = [f"generating data with: {format_params(result.params)}"]

    if show_data:
        lines.append(" ".join(f"{x:+5.3f}" for x in np.sort(result.data)))
    lines.append(f"sample mean={result.sample_mean:.3f}  sample variance={result.sample_variance:.3f}")

    label = "Log integrals" if log_domain else "Integrals"
    integrals = "  ".join(
        f"by {method}: ({pooled:g},{differ:g})"
        for method, (pooled, differ) in result.evidence.items()
    )
    lines.append(f"{label} {integrals}")
    return "\n".join(lines) + "\n"


def format_selection_report(tallies: dict[tuple[str, str], SelectionTally]) -> str:
    """Describe correct selections per method and generating model."""
    methods = list(dict.fromkeys(method for method, _ in tallies))
    width = max(len(f"By {method}:") for method in methods) + 1

    lines = []
    for method in methods:
        for generator in GENERATORS:
            tally = tallies.get((method, generator))
            if tally is None:
                continue
            prefix = f"By {method}:" if generator == GENERATORS[0] else ""
            model = "Model1" if generator == "pooled" else "Model2"
            lines.append(
                f"{prefix:<{width}}{model} data, correct selection {tally.correct}/{tally.total}"
            )
    return "\n".join(lines)


def trials_to_frame(trials: list[TrialResult]) -> pd.DataFrame:
    """One row per trial with evidence values and selections per method."""
    rows = []
    for result in trials:
        row: dict[str, Any] = {
            "generator": result.generator,
            "trial": result.trial_idx,
            "sample_mean": result.sample_mean,
            "sample_variance": result.sample_variance,
        }
        for method, (pooled, differ) in result.evidence.items():
            row[f"pooled_by_{method}"] = pooled
            row[f"differ_by_{method}"] = differ
            row[f"correct_by_{method}"] = result.is_correct(method)
        rows.append(row)
    return pd.DataFrame(rows)


def tallies_to_frame(tallies: dict[tuple[str, str], SelectionTally]) -> pd.DataFrame:
    """Accuracy summary per (method, generator)."""
    rows = []
    for tally in tallies.values():
        lower, upper = compute_accuracy_interval(tally.correct, tally.total)
        rows.append({
            "method": tally.method,
            "generator": tally.generator,
            "correct": tally.correct,
            "total": tally.total,
            "accuracy": tally.accuracy,
            "stderr": compute_stderr_accuracy(tally.correct, tally.total),
            "ci_lower": lower,
            "ci_upper": upper,
        })
    return pd.DataFrame(rows)
