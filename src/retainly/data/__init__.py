# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Snapshot loading: CSV files and DataFrames to record models.
"""

from .loaders import (
    city_lookup,
    enrollments_from_frame,
    load_enrollments_csv,
    load_properties_csv,
    load_residents_csv,
    manager_lookup,
    properties_from_frame,
    residents_from_frame,
)

__all__ = [
    "city_lookup",
    "enrollments_from_frame",
    "load_enrollments_csv",
    "load_properties_csv",
    "load_residents_csv",
    "manager_lookup",
    "properties_from_frame",
    "residents_from_frame",
]
