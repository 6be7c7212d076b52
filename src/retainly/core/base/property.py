# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date
from typing import Optional

from ..primitives.model import Model
from ..primitives.types import PositiveInt


class PropertyRecord(Model):
    """A managed property. Only ``property_id`` is required."""

    property_id: str
    property_name: Optional[str] = None
    city: Optional[str] = None
    unit_count: Optional[PositiveInt] = None
    property_manager_name: Optional[str] = None
    onboarding_date: Optional[date] = None
