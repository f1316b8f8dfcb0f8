# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Core Pydantic v2 data models for the cooling TCO calculator.

This module defines the data contract shared by the calculation stages,
the engine, the REST API, and the reporting layers.  Derived records are
frozen: once a stage has produced one it is never mutated.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CoolingArchitecture(str, Enum):
    """Cooling methodology being costed."""

    air = "air"
    immersion = "immersion"

    @property
    def unit_label(self) -> str:
        """Equipment description used in reports."""
        if self is CoolingArchitecture.air:
            return "42U racks"
        return "Immersion tanks"

    @property
    def display_name(self) -> str:
        return "Air Cooling" if self is CoolingArchitecture.air else "Immersion Cooling"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class CoolingSystemConfig(BaseModel):
    """Equipment layout for one cooling architecture.

    Architecture-specific bounds are enforced by the input validator;
    the field constraints here only guard against nonsensical values.
    """

    model_config = {"frozen": True}

    architecture: CoolingArchitecture = Field(..., description="Cooling methodology")
    unit_count: int = Field(..., ge=1, description="Number of racks or tanks")
    power_per_unit_kw: float = Field(
        ..., gt=0, description="Nameplate IT power per unit in kW"
    )
    unit_cost_usd: float = Field(..., gt=0, description="Capital cost per unit in USD")
    pue: float = Field(..., ge=1.0, description="Power Usage Effectiveness")


class AnalysisParameters(BaseModel):
    """Financial parameters shared by both architectures."""

    model_config = {"frozen": True}

    analysis_years: int = Field(..., ge=1, description="Analysis horizon in years")
    electricity_price_usd_per_kwh: float = Field(
        ..., gt=0, description="Electricity price in USD per kWh"
    )
    discount_rate_percent: float = Field(
        ..., ge=0, description="Annual discount rate in percent"
    )
    maintenance_cost_percent: float = Field(
        ..., ge=0, description="Annual maintenance as a percentage of CAPEX"
    )
    opex_escalation_percent: float = Field(
        default=0.0, ge=0,
        description="Annual OPEX growth in percent (0 keeps OPEX flat)",
    )


# ---------------------------------------------------------------------------
# Derived records
# ---------------------------------------------------------------------------

class CostProfile(BaseModel):
    """Capital and operating costs for one architecture.

    ``total_tco_usd`` is ``None`` until the cost projector has discounted
    the operating costs over the analysis horizon.
    """

    model_config = {"frozen": True}

    config: CoolingSystemConfig
    it_power_kw: float = Field(..., ge=0, description="Total IT load in kW")
    facility_power_kw: float = Field(
        ..., ge=0, description="IT load including cooling overhead (IT x PUE)"
    )
    capex_usd: float = Field(..., ge=0)
    annual_electricity_usd: float = Field(..., ge=0)
    annual_maintenance_usd: float = Field(..., ge=0)
    annual_opex_usd: float = Field(..., ge=0)
    annual_energy_consumption_mwh: float = Field(..., ge=0)
    total_tco_usd: Optional[float] = Field(
        default=None, description="CAPEX plus NPV of OPEX over the horizon"
    )

    @property
    def architecture(self) -> CoolingArchitecture:
        return self.config.architecture

    @property
    def pue(self) -> float:
        return self.config.pue


class ComparisonResult(BaseModel):
    """Financial and efficiency comparison of air vs. immersion cooling.

    Positive savings mean immersion cooling is cheaper.
    """

    model_config = {"frozen": True}

    total_savings_usd: float
    annual_savings_usd: float
    capex_difference_usd: float
    payback_years: Optional[float] = Field(
        default=None,
        description="Years to recover the CAPEX difference; None when annual savings are zero",
    )
    roi_percent: float
    pue_improvement_percent: float
    annual_energy_savings_mwh: float
    annual_carbon_reduction_tons: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def immersion_wins(self) -> bool:
        """Whether immersion cooling has the lower total cost of ownership."""
        return self.total_savings_usd > 0


class YearProjection(BaseModel):
    """One row of the year-by-year discounted cost projection."""

    model_config = {"frozen": True}

    year: int = Field(..., ge=0)
    air_discounted_opex_usd: float
    immersion_discounted_opex_usd: float
    air_cumulative_cost_usd: float
    immersion_cumulative_cost_usd: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cumulative_savings_usd(self) -> float:
        """Running savings of immersion over air (may be negative early on)."""
        return self.air_cumulative_cost_usd - self.immersion_cumulative_cost_usd


class EnvironmentalEquivalents(BaseModel):
    """Everyday equivalents of the annual energy and carbon savings."""

    model_config = {"frozen": True}

    homes_powered: float = Field(..., description="Average homes powered for a year")
    trees_planted: float = Field(..., description="Trees absorbing the same CO2")
    cars_removed: float = Field(..., description="Passenger cars taken off the road")


class TCOResult(BaseModel):
    """Complete output of one TCO calculation.

    This is the top-level object consumed by the API serializer, the
    terminal renderer, and the PDF report.
    """

    model_config = {"frozen": True}

    calculation_id: str = Field(..., description="Unique calculation identifier")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the calculation ran (UTC)",
    )
    parameters: AnalysisParameters
    air: CostProfile
    immersion: CostProfile
    comparison: ComparisonResult
    yearly_projection: list[YearProjection] = Field(default_factory=list)
    environmental: EnvironmentalEquivalents
