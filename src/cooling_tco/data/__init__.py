# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Data models and input limits for the TCO calculator."""

from cooling_tco.data.models import (
    AnalysisParameters,
    ComparisonResult,
    CoolingArchitecture,
    CoolingSystemConfig,
    CostProfile,
    EnvironmentalEquivalents,
    TCOResult,
    YearProjection,
)
from cooling_tco.data.limits import DEFAULT_REQUEST, REQUEST_FIELDS, FieldLimit

__all__ = [
    "AnalysisParameters",
    "ComparisonResult",
    "CoolingArchitecture",
    "CoolingSystemConfig",
    "CostProfile",
    "DEFAULT_REQUEST",
    "EnvironmentalEquivalents",
    "FieldLimit",
    "REQUEST_FIELDS",
    "TCOResult",
    "YearProjection",
]
