# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Input records read from the portfolio snapshot.
"""

from .enrollment import BenefitEnrollment
from .property import PropertyRecord
from .resident import Resident

__all__ = [
    "BenefitEnrollment",
    "PropertyRecord",
    "Resident",
]
