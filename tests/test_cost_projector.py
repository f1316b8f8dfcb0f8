"""Tests for the discounted cost projection."""

from __future__ import annotations

import pytest

from cooling_tco.analysis.cost_projector import project_tco, project_yearly
from cooling_tco.analysis.validator import parse_request

# Present value of 1 USD per year for 5 years at 5%
ANNUITY_5Y_5PCT = 4.329476670631


class TestProjectTCO:
    def test_reference_air_tco(self):
        assert project_tco(500_000, 393_432, 5, 5) == pytest.approx(2_203_354.665480)

    def test_reference_immersion_tco(self):
        assert project_tco(720_000, 260_958.24, 5, 5) == pytest.approx(1_849_812.612089)

    def test_annuity_factor(self):
        assert project_tco(0, 1, 5, 5) == pytest.approx(ANNUITY_5Y_5PCT)

    def test_zero_discount_is_undiscounted_sum(self):
        assert project_tco(500_000, 393_432, 5, 0) == pytest.approx(2_467_160.0)

    def test_tco_at_least_capex(self):
        for rate in (0, 5, 30):
            assert project_tco(100_000, 50_000, 10, rate) >= 100_000

    def test_zero_opex_is_capex(self):
        assert project_tco(250_000, 0, 20, 7) == 250_000

    def test_longer_horizon_costs_more(self):
        totals = [project_tco(100_000, 40_000, years, 5) for years in range(1, 21)]
        assert totals == sorted(totals)
        assert len(set(totals)) == len(totals)

    def test_higher_discount_costs_less(self):
        low = project_tco(100_000, 40_000, 10, 2)
        high = project_tco(100_000, 40_000, 10, 12)
        assert high < low


class TestEscalation:
    def test_zero_escalation_matches_flat(self):
        assert project_tco(1, 1000, 8, 6, 0) == project_tco(1, 1000, 8, 6)

    def test_escalation_increases_tco(self):
        flat = project_tco(500_000, 393_432, 5, 5)
        grown = project_tco(500_000, 393_432, 5, 5, escalation_percent=3)
        assert grown > flat

    def test_escalation_equal_to_discount_rate(self):
        # Growth and discounting cancel except for one year of discount
        expected = 500_000 + 5 * 393_432 / 1.05
        assert project_tco(500_000, 393_432, 5, 5, escalation_percent=5) == pytest.approx(expected)

    def test_first_year_not_escalated(self):
        assert project_tco(0, 1000, 1, 0, escalation_percent=20) == pytest.approx(1000)


class TestProjectYearly:
    def test_row_count(self, baseline_profiles, baseline_request):
        air, immersion = baseline_profiles
        _, _, params = parse_request(baseline_request)
        rows = project_yearly(air, immersion, params)
        assert [r.year for r in rows] == [0, 1, 2, 3, 4, 5]

    def test_year_zero_is_capex(self, baseline_profiles, baseline_request):
        air, immersion = baseline_profiles
        _, _, params = parse_request(baseline_request)
        first = project_yearly(air, immersion, params)[0]
        assert first.air_cumulative_cost_usd == air.capex_usd
        assert first.immersion_cumulative_cost_usd == immersion.capex_usd
        assert first.cumulative_savings_usd == pytest.approx(-220_000.0)

    def test_final_row_matches_tco(self, baseline_profiles, baseline_request):
        air, immersion = baseline_profiles
        _, _, params = parse_request(baseline_request)
        last = project_yearly(air, immersion, params)[-1]
        assert last.air_cumulative_cost_usd == pytest.approx(air.total_tco_usd)
        assert last.immersion_cumulative_cost_usd == pytest.approx(immersion.total_tco_usd)

    def test_cumulative_costs_increase(self, baseline_profiles, baseline_request):
        air, immersion = baseline_profiles
        _, _, params = parse_request(baseline_request)
        rows = project_yearly(air, immersion, params)
        for prev, cur in zip(rows, rows[1:]):
            assert cur.air_cumulative_cost_usd > prev.air_cumulative_cost_usd
            assert cur.immersion_cumulative_cost_usd > prev.immersion_cumulative_cost_usd

    def test_discounted_opex_shrinks(self, baseline_profiles, baseline_request):
        air, immersion = baseline_profiles
        _, _, params = parse_request(baseline_request)
        rows = project_yearly(air, immersion, params)[1:]
        assert rows[0].air_discounted_opex_usd == pytest.approx(393_432 / 1.05)
        for prev, cur in zip(rows, rows[1:]):
            assert cur.air_discounted_opex_usd < prev.air_discounted_opex_usd

    def test_immersion_breaks_even_in_year_two(self, baseline_profiles, baseline_request):
        air, immersion = baseline_profiles
        _, _, params = parse_request(baseline_request)
        rows = project_yearly(air, immersion, params)
        assert rows[1].cumulative_savings_usd < 0
        assert rows[2].cumulative_savings_usd > 0
