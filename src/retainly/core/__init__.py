# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retainly Core

Input records and the primitives every retention view is built from.
"""

from .base import BenefitEnrollment, PropertyRecord, Resident
from .primitives import GlobalSettings, Model

__all__ = [
    "BenefitEnrollment",
    "GlobalSettings",
    "Model",
    "PropertyRecord",
    "Resident",
]
