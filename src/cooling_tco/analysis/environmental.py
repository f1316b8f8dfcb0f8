# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Everyday equivalents of energy and carbon savings."""

from __future__ import annotations

from cooling_tco.config import EngineConstants
from cooling_tco.data.models import ComparisonResult, EnvironmentalEquivalents


def environmental_equivalents(
    comparison: ComparisonResult,
    constants: EngineConstants | None = None,
) -> EnvironmentalEquivalents:
    """Translate annual savings into homes, trees, and cars.

    Negative savings (immersion uses more energy) produce negative
    equivalents rather than being clamped to zero.
    """
    c = constants or EngineConstants()
    energy_mwh = comparison.annual_energy_savings_mwh
    carbon_tons = comparison.annual_carbon_reduction_tons

    return EnvironmentalEquivalents(
        homes_powered=energy_mwh / c.home_mwh_per_year,
        trees_planted=carbon_tons * c.trees_per_ton_co2,
        cars_removed=carbon_tons / c.car_tons_co2_per_year,
    )
