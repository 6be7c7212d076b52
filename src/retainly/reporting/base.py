# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Base reporting classes.

Reports turn a ``RetentionAnalysisResult`` into presentation-ready tables
with the column names used by the dashboard extracts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..analysis.results import RetentionAnalysisResult


class BaseReport(ABC):
    """
    Abstract base class for all report formatters.

    Reports operate on final RetentionAnalysisResult objects and transform
    them into presentation-ready formats. Reports should only format
    and present data, never perform calculations.
    """

    def __init__(self, results: "RetentionAnalysisResult"):
        """
        Initialize report with analysis results.

        Args:
            results: Complete RetentionAnalysisResult from retainly.analysis.run()
        """
        # Import at runtime to avoid circular dependencies
        from ..analysis.results import RetentionAnalysisResult  # noqa: PLC0415

        if not isinstance(results, RetentionAnalysisResult):
            raise TypeError("BaseReport requires a RetentionAnalysisResult object")
        self._results = results

    @abstractmethod
    def generate(self, **kwargs) -> Any:
        """Generate the formatted report output."""
        pass
