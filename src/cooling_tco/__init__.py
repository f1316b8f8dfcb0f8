# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Cooling TCO - Air vs. Immersion Cooling Total Cost of Ownership Calculator."""

__version__ = "0.1.0"

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
from cooling_tco.config import EngineConstants, ScenarioConfig, load_scenario
from cooling_tco.engine import TCOEngine
from cooling_tco.errors import MalformedInputError, TCOError, ValidationError

__all__ = [
    "AnalysisParameters",
    "ComparisonResult",
    "CoolingArchitecture",
    "CoolingSystemConfig",
    "CostProfile",
    "EngineConstants",
    "EnvironmentalEquivalents",
    "MalformedInputError",
    "ScenarioConfig",
    "TCOEngine",
    "TCOError",
    "TCOResult",
    "ValidationError",
    "YearProjection",
    "load_scenario",
]
