# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Comparison and efficiency analysis of air vs. immersion cooling."""

from __future__ import annotations

from cooling_tco.data.limits import CARBON_KG_PER_KWH, HOURS_PER_YEAR, SAVINGS_EPSILON_USD
from cooling_tco.data.models import ComparisonResult, CostProfile


def payback_period(capex_difference_usd: float, annual_savings_usd: float) -> float | None:
    """Years for annual savings to offset the CAPEX difference.

    Returns ``None`` when annual savings are zero, since payback is then
    undefined.
    """
    if abs(annual_savings_usd) < SAVINGS_EPSILON_USD:
        return None
    return abs(capex_difference_usd / annual_savings_usd)


def compare_profiles(
    air: CostProfile,
    immersion: CostProfile,
    hours_per_year: float = HOURS_PER_YEAR,
    carbon_kg_per_kwh: float = CARBON_KG_PER_KWH,
) -> ComparisonResult:
    """Derive savings, ROI, payback, and efficiency figures.

    Both profiles must already carry ``total_tco_usd``.  Savings are
    expressed as air minus immersion, so a positive value means
    immersion cooling is cheaper.
    """
    if air.total_tco_usd is None or immersion.total_tco_usd is None:
        raise ValueError("Both cost profiles need a projected TCO before comparison")

    total_savings = air.total_tco_usd - immersion.total_tco_usd
    annual_savings = air.annual_opex_usd - immersion.annual_opex_usd
    capex_difference = immersion.capex_usd - air.capex_usd

    roi = total_savings / immersion.capex_usd * 100
    pue_improvement = (air.pue - immersion.pue) / air.pue * 100

    energy_savings_mwh = (
        (air.facility_power_kw - immersion.facility_power_kw) * hours_per_year / 1000
    )
    # MWh -> kWh, times kg/kWh, -> metric tons
    carbon_tons = energy_savings_mwh * 1000 * carbon_kg_per_kwh / 1000

    return ComparisonResult(
        total_savings_usd=total_savings,
        annual_savings_usd=annual_savings,
        capex_difference_usd=capex_difference,
        payback_years=payback_period(capex_difference, annual_savings),
        roi_percent=roi,
        pue_improvement_percent=pue_improvement,
        annual_energy_savings_mwh=energy_savings_mwh,
        annual_carbon_reduction_tons=carbon_tons,
    )
