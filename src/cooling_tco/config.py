# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Engine constants and YAML scenario loader."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from cooling_tco.data.limits import (
    CAR_TONS_CO2_PER_YEAR,
    CARBON_KG_PER_KWH,
    HOME_MWH_PER_YEAR,
    HOURS_PER_YEAR,
    TREES_PER_TON_CO2,
)


# ---------------------------------------------------------------------------
# Engine constants
# ---------------------------------------------------------------------------

class EngineConstants(BaseModel):
    """Physical and equivalence constants used by the calculation stages.

    Override these for other grid regions or leap-year horizons instead of
    editing the calculation code.
    """

    model_config = {"frozen": True}

    hours_per_year: float = Field(default=HOURS_PER_YEAR, gt=0)
    carbon_kg_per_kwh: float = Field(
        default=CARBON_KG_PER_KWH, ge=0, description="Grid carbon intensity"
    )
    home_mwh_per_year: float = Field(default=HOME_MWH_PER_YEAR, gt=0)
    trees_per_ton_co2: float = Field(default=TREES_PER_TON_CO2, ge=0)
    car_tons_co2_per_year: float = Field(default=CAR_TONS_CO2_PER_YEAR, gt=0)


# ---------------------------------------------------------------------------
# Scenario file
# ---------------------------------------------------------------------------

class ScenarioConfig(BaseModel):
    """A saved comparison scenario.

    ``inputs`` uses the same camelCase keys as the REST request body and
    is validated by the engine, not here.
    """

    name: str = Field(default="Unnamed scenario")
    description: str = Field(default="")
    inputs: dict[str, Any] = Field(default_factory=dict)
    constants: EngineConstants = Field(default_factory=EngineConstants)


def load_scenario(path: str | Path) -> ScenarioConfig:
    """Load a ScenarioConfig from a YAML file."""
    scenario_path = Path(path)
    if not scenario_path.exists():
        raise FileNotFoundError(f"Scenario file not found: {scenario_path}")

    with open(scenario_path) as f:
        raw = yaml.safe_load(f) or {}

    return ScenarioConfig.model_validate(raw)
