# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Facility cost model.

Computes equipment CAPEX, facility power draw, and annual OPEX for a
single cooling architecture.
"""

from __future__ import annotations

import math

from cooling_tco.data.limits import HOURS_PER_YEAR
from cooling_tco.data.models import AnalysisParameters, CoolingSystemConfig, CostProfile


def compute_cost_profile(
    config: CoolingSystemConfig,
    params: AnalysisParameters,
    hours_per_year: float = HOURS_PER_YEAR,
) -> CostProfile:
    """Compute the cost profile of one validated cooling configuration.

    - ``it_power_kw`` -- unit count x nameplate power per unit
    - ``facility_power_kw`` -- IT load x PUE (cooling overhead included)
    - ``capex_usd`` -- unit count x unit cost
    - ``annual_electricity_usd`` -- facility energy over a year x price
    - ``annual_maintenance_usd`` -- maintenance percentage of CAPEX
    - ``annual_opex_usd`` -- electricity + maintenance

    The returned profile has no ``total_tco_usd`` yet; see
    :func:`cooling_tco.analysis.cost_projector.with_total_tco`.
    """
    it_power_kw = config.unit_count * config.power_per_unit_kw
    facility_power_kw = it_power_kw * config.pue
    capex = config.unit_count * config.unit_cost_usd

    annual_energy_kwh = facility_power_kw * hours_per_year
    annual_electricity = annual_energy_kwh * params.electricity_price_usd_per_kwh
    annual_maintenance = capex * params.maintenance_cost_percent / 100

    return CostProfile(
        config=config,
        it_power_kw=it_power_kw,
        facility_power_kw=facility_power_kw,
        capex_usd=capex,
        annual_electricity_usd=annual_electricity,
        annual_maintenance_usd=annual_maintenance,
        annual_opex_usd=annual_electricity + annual_maintenance,
        annual_energy_consumption_mwh=annual_energy_kwh / 1000,
    )


def recommended_tank_count(
    air_racks: int,
    air_power_per_rack_kw: float,
    immersion_power_per_tank_kw: float,
) -> int:
    """Smallest number of immersion tanks that carries the air IT load."""
    if immersion_power_per_tank_kw <= 0:
        raise ValueError("Immersion power per tank must be positive")
    total_kw = air_racks * air_power_per_rack_kw
    return max(1, math.ceil(total_kw / immersion_power_per_tank_kw))
