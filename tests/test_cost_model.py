# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the per-architecture facility cost model."""

from __future__ import annotations

import pytest

from cooling_tco.analysis.cost_model import compute_cost_profile, recommended_tank_count
from cooling_tco.analysis.validator import parse_request


class TestComputeCostProfile:
    """Reference scenario: 10 racks x 20 kW at PUE 1.8, 9 tanks x 23 kW at PUE 1.1."""

    def test_air_profile(self, baseline_request):
        air_config, _, params = parse_request(baseline_request)
        air = compute_cost_profile(air_config, params)
        assert air.it_power_kw == pytest.approx(200.0)
        assert air.facility_power_kw == pytest.approx(360.0)
        assert air.capex_usd == pytest.approx(500_000.0)
        assert air.annual_electricity_usd == pytest.approx(378_432.0)
        assert air.annual_maintenance_usd == pytest.approx(15_000.0)
        assert air.annual_opex_usd == pytest.approx(393_432.0)
        assert air.annual_energy_consumption_mwh == pytest.approx(3153.6)

    def test_immersion_profile(self, baseline_request):
        _, immersion_config, params = parse_request(baseline_request)
        immersion = compute_cost_profile(immersion_config, params)
        assert immersion.it_power_kw == pytest.approx(207.0)
        assert immersion.facility_power_kw == pytest.approx(227.7)
        assert immersion.capex_usd == pytest.approx(720_000.0)
        assert immersion.annual_electricity_usd == pytest.approx(239_358.24)
        assert immersion.annual_maintenance_usd == pytest.approx(21_600.0)
        assert immersion.annual_opex_usd == pytest.approx(260_958.24)
        assert immersion.annual_energy_consumption_mwh == pytest.approx(1994.652)

    def test_no_tco_until_projected(self, baseline_request):
        air_config, _, params = parse_request(baseline_request)
        assert compute_cost_profile(air_config, params).total_tco_usd is None

    def test_opex_is_electricity_plus_maintenance(self):
        air_config, _, params = parse_request({"airRacks": 37, "maintenanceCost": 7.5})
        air = compute_cost_profile(air_config, params)
        assert air.annual_opex_usd == pytest.approx(
            air.annual_electricity_usd + air.annual_maintenance_usd
        )

    def test_zero_maintenance(self):
        air_config, _, params = parse_request({"maintenanceCost": 0})
        air = compute_cost_profile(air_config, params)
        assert air.annual_maintenance_usd == 0.0
        assert air.annual_opex_usd == pytest.approx(air.annual_electricity_usd)

    def test_custom_hours_per_year(self, baseline_request):
        air_config, _, params = parse_request(baseline_request)
        leap = compute_cost_profile(air_config, params, hours_per_year=8784)
        assert leap.annual_energy_consumption_mwh == pytest.approx(360 * 8784 / 1000)


class TestRecommendedTankCount:
    def test_reference_layout(self):
        # 200 kW / 23 kW = 8.7 -> 9 tanks
        assert recommended_tank_count(10, 20, 23) == 9

    def test_exact_fit(self):
        assert recommended_tank_count(10, 20, 25) == 8

    def test_at_least_one_tank(self):
        assert recommended_tank_count(1, 1, 200) == 1

    def test_non_positive_tank_power(self):
        with pytest.raises(ValueError):
            recommended_tank_count(10, 20, 0)
