# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retainly - Resident Cohort Retention Analytics

Measures how long residents stay: monthly lease-start cohorts scored at
fixed month checkpoints, a portfolio survival curve, and churn broken down
by city, property and benefit adoption.

Key Entry Points:
- retainly.analysis.run() - Every retention view for one snapshot
- retainly.analysis.aggregate_cohorts() - Monthly cohort retention
- retainly.analysis.survival_curve() - Portfolio survival curve
- retainly.data.load_residents_csv() - Snapshot loading

Example Usage:
    ```python
    from datetime import date

    from retainly.analysis import run
    from retainly.data import load_residents_csv

    residents = load_residents_csv("residents.csv")
    result = run(residents, as_of_date=date(2024, 7, 15))
    print(result.reporting.cohort_retention())
    print(f"Skipped records: {result.skipped_ids}")
    ```
"""

import importlib
import logging

# Applications configure handlers; the library only emits records.
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "analysis",
    "core",
    "data",
    "reporting",
]


_LAZY_MODULES = {
    "analysis": "retainly.analysis",
    "core": "retainly.core",
    "data": "retainly.data",
    "reporting": "retainly.reporting",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'retainly' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
