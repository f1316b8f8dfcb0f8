# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""API response Pydantic models and the result serializer.

Responses use camelCase keys.  Currency figures are rounded to the
nearest dollar; payback, ROI, and PUE improvement to one decimal.
These models import only Pydantic, so the CLI reuses them for JSON
export without needing FastAPI.
"""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, Field

from cooling_tco.data.models import CostProfile, TCOResult


class _ApiModel(BaseModel):
    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Per-architecture blocks
# ---------------------------------------------------------------------------

class EquipmentBlock(_ApiModel):
    count: int = Field(..., description="Number of racks or tanks")
    type: str = Field(..., description="Equipment description")
    total_power_kw: float = Field(..., alias="totalPowerKW", description="IT load in kW")
    facility_power_kw: float = Field(
        ..., alias="facilityPowerKW", description="IT load including cooling overhead"
    )
    pue: float


class CostsBlock(_ApiModel):
    capex: int
    annual_opex: int = Field(..., alias="annualOpex")
    annual_electricity: int = Field(..., alias="annualElectricity")
    annual_maintenance: int = Field(..., alias="annualMaintenance")
    total_tco: int = Field(..., alias="totalTCO")


class EnergyBlock(_ApiModel):
    annual_consumption_mwh: int = Field(..., alias="annualConsumptionMWh")


class ArchitectureBlock(_ApiModel):
    equipment: EquipmentBlock
    costs: CostsBlock
    energy: EnergyBlock


# ---------------------------------------------------------------------------
# Comparison blocks
# ---------------------------------------------------------------------------

class SavingsBlock(_ApiModel):
    total_savings: int = Field(..., alias="totalSavings")
    annual_savings: int = Field(..., alias="annualSavings")
    capex_difference: int = Field(..., alias="capexDifference")
    payback_years: Optional[float] = Field(
        ..., alias="paybackYears", description="null when annual savings are zero"
    )
    roi_percent: float = Field(..., alias="roiPercent")


class EfficiencyBlock(_ApiModel):
    pue_improvement: float = Field(..., alias="pueImprovement")
    annual_energy_savings_mwh: int = Field(..., alias="annualEnergySavingsMWh")
    annual_carbon_reduction_tons: int = Field(..., alias="annualCarbonReductionTons")


class EnvironmentalBlock(_ApiModel):
    homes_powered: int = Field(..., alias="homesPowered")
    trees_planted: int = Field(..., alias="treesPlanted")
    cars_removed: int = Field(..., alias="carsRemoved")


class ComparisonBlock(_ApiModel):
    savings: SavingsBlock
    efficiency: EfficiencyBlock
    environmental: EnvironmentalBlock


class ParametersBlock(_ApiModel):
    analysis_years: int = Field(..., alias="analysisYears")
    electricity_price: float = Field(..., alias="electricityPrice")
    discount_rate: float = Field(..., alias="discountRate")
    maintenance_cost: float = Field(..., alias="maintenanceCost")
    opex_escalation: float = Field(..., alias="opexEscalation")


class YearBlock(_ApiModel):
    year: int
    air_discounted_opex: int = Field(..., alias="airDiscountedOpex")
    immersion_discounted_opex: int = Field(..., alias="immersionDiscountedOpex")
    air_cumulative_cost: int = Field(..., alias="airCumulativeCost")
    immersion_cumulative_cost: int = Field(..., alias="immersionCumulativeCost")
    cumulative_savings: int = Field(..., alias="cumulativeSavings")


# ---------------------------------------------------------------------------
# Top-level responses
# ---------------------------------------------------------------------------

class CalculationResponse(_ApiModel):
    """Response body returned by ``POST /api/v1/calculate``."""

    timestamp: str = Field(..., description="ISO-8601 calculation time (UTC)")
    calculation_id: str = Field(..., alias="calculationId")
    parameters: ParametersBlock
    air_cooling: ArchitectureBlock = Field(..., alias="airCooling")
    immersion_cooling: ArchitectureBlock = Field(..., alias="immersionCooling")
    comparison: ComparisonBlock
    yearly_projection: list[YearBlock] = Field(
        default_factory=list, alias="yearlyProjection"
    )


class HealthResponse(_ApiModel):
    """Response body returned by ``GET /api/v1/health``."""

    status: str = Field(..., description="Service health status (e.g. 'ok')")
    version: str = Field(..., description="Application version string")
    uptime_seconds: float = Field(..., alias="uptimeSeconds")
    request_count: int = Field(..., alias="requestCount")
    error_count: int = Field(..., alias="errorCount")


class ErrorResponse(_ApiModel):
    """Body returned for rejected requests."""

    error: str = Field(..., description="Error kind: malformed_input or validation_error")
    detail: str
    field: Optional[str] = Field(default=None, description="Offending request field")


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------

def round_half_up(value: float, ndigits: int = 0) -> float | int:
    """Round with ties toward +infinity, like JavaScript `Math.round`.

    Returns an ``int`` when *ndigits* is 0.  Python's built-in ``round``
    sends ties to the even neighbour, so 0.25 would become 0.2 instead of 0.3.
    """
    scale = 10 ** ndigits
    rounded = math.floor(value * scale + 0.5)
    return rounded if ndigits == 0 else rounded / scale


def _architecture_block(profile: CostProfile) -> ArchitectureBlock:
    return ArchitectureBlock(
        equipment=EquipmentBlock(
            count=profile.config.unit_count,
            type=profile.architecture.unit_label,
            total_power_kw=round_half_up(profile.it_power_kw, 2),
            facility_power_kw=round_half_up(profile.facility_power_kw, 2),
            pue=profile.pue,
        ),
        costs=CostsBlock(
            capex=round_half_up(profile.capex_usd),
            annual_opex=round_half_up(profile.annual_opex_usd),
            annual_electricity=round_half_up(profile.annual_electricity_usd),
            annual_maintenance=round_half_up(profile.annual_maintenance_usd),
            total_tco=round_half_up(profile.total_tco_usd or 0.0),
        ),
        energy=EnergyBlock(
            annual_consumption_mwh=round_half_up(profile.annual_energy_consumption_mwh),
        ),
    )


def build_response(result: TCOResult) -> CalculationResponse:
    """Convert a :class:`TCOResult` into the public response shape."""
    comp = result.comparison
    params = result.parameters
    env = result.environmental

    return CalculationResponse(
        timestamp=result.timestamp.isoformat(),
        calculation_id=result.calculation_id,
        parameters=ParametersBlock(
            analysis_years=params.analysis_years,
            electricity_price=params.electricity_price_usd_per_kwh,
            discount_rate=params.discount_rate_percent,
            maintenance_cost=params.maintenance_cost_percent,
            opex_escalation=params.opex_escalation_percent,
        ),
        air_cooling=_architecture_block(result.air),
        immersion_cooling=_architecture_block(result.immersion),
        comparison=ComparisonBlock(
            savings=SavingsBlock(
                total_savings=round_half_up(comp.total_savings_usd),
                annual_savings=round_half_up(comp.annual_savings_usd),
                capex_difference=round_half_up(comp.capex_difference_usd),
                payback_years=(
                    round_half_up(comp.payback_years, 1)
                    if comp.payback_years is not None else None
                ),
                roi_percent=round_half_up(comp.roi_percent, 1),
            ),
            efficiency=EfficiencyBlock(
                pue_improvement=round_half_up(comp.pue_improvement_percent, 1),
                annual_energy_savings_mwh=round_half_up(comp.annual_energy_savings_mwh),
                annual_carbon_reduction_tons=round_half_up(comp.annual_carbon_reduction_tons),
            ),
            environmental=EnvironmentalBlock(
                homes_powered=round_half_up(env.homes_powered),
                trees_planted=round_half_up(env.trees_planted),
                cars_removed=round_half_up(env.cars_removed),
            ),
        ),
        yearly_projection=[
            YearBlock(
                year=row.year,
                air_discounted_opex=round_half_up(row.air_discounted_opex_usd),
                immersion_discounted_opex=round_half_up(row.immersion_discounted_opex_usd),
                air_cumulative_cost=round_half_up(row.air_cumulative_cost_usd),
                immersion_cumulative_cost=round_half_up(row.immersion_cumulative_cost_usd),
                cumulative_savings=round_half_up(row.cumulative_savings_usd),
            )
            for row in result.yearly_projection
        ],
    )


def response_dict(result: TCOResult) -> dict:
    """JSON-ready dict of the response with camelCase keys."""
    return build_response(result).model_dump(by_alias=True, mode="json")
