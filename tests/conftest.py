# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Shared test fixtures for the cooling TCO test suite."""

from __future__ import annotations

import pytest

from cooling_tco.analysis.cost_model import compute_cost_profile
from cooling_tco.analysis.cost_projector import with_total_tco
from cooling_tco.analysis.validator import parse_request
from cooling_tco.data.models import CostProfile, TCOResult
from cooling_tco.engine import TCOEngine


@pytest.fixture()
def engine() -> TCOEngine:
    """An engine with the default constants."""
    return TCOEngine()


@pytest.fixture()
def baseline_request() -> dict:
    """The reference scenario: 10 air racks at 20 kW against 9 tanks at 23 kW."""
    return {
        "airRacks": 10,
        "airPowerPerRack": 20,
        "airRackCost": 50000,
        "airPUE": 1.8,
        "immersionTanks": 9,
        "immersionPowerPerTank": 23,
        "immersionTankCost": 80000,
        "immersionPUE": 1.1,
        "analysisYears": 5,
        "electricityPrice": 0.12,
        "discountRate": 5,
        "maintenanceCost": 3,
    }


@pytest.fixture()
def baseline_result(engine: TCOEngine, baseline_request: dict) -> TCOResult:
    """Full engine result for the reference scenario."""
    return engine.calculate(baseline_request)


@pytest.fixture()
def baseline_profiles(baseline_request: dict) -> tuple[CostProfile, CostProfile]:
    """Air and immersion profiles for the reference scenario, TCO included."""
    air_config, immersion_config, params = parse_request(baseline_request)
    air = with_total_tco(compute_cost_profile(air_config, params), params)
    immersion = with_total_tco(compute_cost_profile(immersion_config, params), params)
    return air, immersion
