# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""End-to-end tests for the TCO engine."""

from __future__ import annotations

import pytest

from cooling_tco.config import EngineConstants
from cooling_tco.data.models import TCOResult
from cooling_tco.engine import TCOEngine, new_calculation_id
from cooling_tco.errors import MalformedInputError, ValidationError


class TestCalculationId:
    def test_format(self):
        calc_id = new_calculation_id()
        assert calc_id.startswith("calc_")
        assert len(calc_id) == len("calc_") + 16

    def test_unique(self):
        assert len({new_calculation_id() for _ in range(100)}) == 100


class TestReferenceScenario:
    def test_tco(self, baseline_result: TCOResult):
        assert baseline_result.air.total_tco_usd == pytest.approx(2_203_354.665480)
        assert baseline_result.immersion.total_tco_usd == pytest.approx(1_849_812.612089)

    def test_opex(self, baseline_result: TCOResult):
        assert baseline_result.air.annual_opex_usd == pytest.approx(393_432.0)
        assert baseline_result.immersion.annual_opex_usd == pytest.approx(260_958.24)

    def test_comparison(self, baseline_result: TCOResult):
        comp = baseline_result.comparison
        assert comp.total_savings_usd == pytest.approx(353_542.053391)
        assert comp.payback_years == pytest.approx(1.66, abs=0.01)
        assert comp.roi_percent == pytest.approx(49.10, abs=0.01)
        assert comp.pue_improvement_percent == pytest.approx(38.89, abs=0.01)

    def test_defaults_match_reference(self, engine: TCOEngine, baseline_result: TCOResult):
        defaults = engine.calculate({})
        assert defaults.air.total_tco_usd == pytest.approx(baseline_result.air.total_tco_usd)
        assert defaults.immersion.total_tco_usd == pytest.approx(
            baseline_result.immersion.total_tco_usd
        )

    def test_projection_and_environmental_attached(self, baseline_result: TCOResult):
        assert len(baseline_result.yearly_projection) == 6
        assert baseline_result.environmental.cars_removed == pytest.approx(100.778, abs=0.001)

    def test_parameters_echoed(self, baseline_result: TCOResult):
        assert baseline_result.parameters.analysis_years == 5
        assert baseline_result.parameters.electricity_price_usd_per_kwh == 0.12


class TestInvariants:
    @pytest.mark.parametrize(
        "request_body",
        [
            {},
            {"discountRate": 0},
            {"discountRate": 30, "analysisYears": 20},
            {"airRacks": 1000, "airPowerPerRack": 100, "airPUE": 3},
            {"immersionTanks": 1, "immersionPowerPerTank": 5, "electricityPrice": 0.01},
            {"maintenanceCost": 15, "opexEscalation": 20},
        ],
    )
    def test_tco_not_below_capex(self, engine: TCOEngine, request_body):
        result = engine.calculate(request_body)
        assert result.air.total_tco_usd >= result.air.capex_usd
        assert result.immersion.total_tco_usd >= result.immersion.capex_usd

    def test_equal_running_costs_give_no_payback(self, engine: TCOEngine):
        result = engine.calculate({
            "airRacks": 10, "airPowerPerRack": 20, "airRackCost": 50000, "airPUE": 1.1,
            "immersionTanks": 10, "immersionPowerPerTank": 20,
            "immersionTankCost": 50000, "immersionPUE": 1.1,
        })
        assert result.comparison.payback_years is None
        assert result.comparison.total_savings_usd == 0.0

    def test_results_are_independent(self, engine: TCOEngine):
        first = engine.calculate({"airRacks": 50})
        second = engine.calculate({"airRacks": 5})
        assert first.air.capex_usd == 2_500_000
        assert second.air.capex_usd == 250_000
        assert first.calculation_id != second.calculation_id


class TestErrors:
    def test_validation_error_propagates(self, engine: TCOEngine):
        with pytest.raises(ValidationError) as exc_info:
            engine.calculate({"airRacks": 0})
        assert exc_info.value.field == "airRacks"

    def test_malformed_input_propagates(self, engine: TCOEngine):
        with pytest.raises(MalformedInputError):
            engine.calculate(["airRacks", 10])


class TestConstants:
    def test_carbon_intensity(self, baseline_request):
        engine = TCOEngine(EngineConstants(carbon_kg_per_kwh=0.2))
        result = engine.calculate(baseline_request)
        assert result.comparison.annual_carbon_reduction_tons == pytest.approx(231.7896)

    def test_hours_per_year(self, baseline_request):
        engine = TCOEngine(EngineConstants(hours_per_year=8784))
        result = engine.calculate(baseline_request)
        assert result.air.annual_electricity_usd == pytest.approx(360 * 8784 * 0.12)
