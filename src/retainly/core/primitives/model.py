# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Records, summaries and settings are immutable snapshots. Mutable runtime
    state (such as the skipped-record collector) lives in plain dataclasses.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,  # pd.Period cohort keys
        frozen=True,
        extra="forbid",  # Catches typos and missing field definitions immediately
    )
