#!/usr/bin/env python3
"""Quick run: fewer Monte Carlo draws, linear vs. log-domain accumulation.

Runs the same seeded trials twice and reports where the two accumulation
schemes pick different models (underflow in the linear sums).
"""

from poolornot.config import default_config
from poolornot.experiments.pool_or_not import format_selection_report, run_pool_or_not
from poolornot.utils import setup_environment


def main():
    setup_environment()
    config = default_config()
    config.experiment.n_datasets = 5
    config.experiment.sample_repeat_num = 100_000

    print("Running quick comparison of linear and log-domain evidence")
    print()

    runs = {}
    for log_domain in (False, True):
        config.experiment.log_domain = log_domain
        runs[log_domain] = run_pool_or_not(config, verbose=False)

    label = {False: "linear", True: "log-domain"}
    for log_domain, results in runs.items():
        print(f"[{label[log_domain]}]")
        print(format_selection_report(results["tallies"]))
        print()

    disagreements = 0
    for linear, logged in zip(runs[False]["trials"], runs[True]["trials"]):
        for method in linear.evidence:
            if linear.favors_pooled(method) != logged.favors_pooled(method):
                disagreements += 1
                print(
                    f"{linear.generator} trial {linear.trial_idx} ({method}): "
                    f"linear={linear.evidence[method]} log={logged.evidence[method]}"
                )

    print(f"Decisions that differ between accumulation schemes: {disagreements}")


if __name__ == "__main__":
    main()
