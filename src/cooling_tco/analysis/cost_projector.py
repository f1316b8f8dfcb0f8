"""Discounted cost projection.

Rolls annual operating costs forward over the analysis horizon and
discounts them to present value, giving a total cost of ownership per
cooling architecture.
"""

from __future__ import annotations

from cooling_tco.data.models import AnalysisParameters, CostProfile, YearProjection


def _discounted_opex(
    annual_opex_usd: float,
    year: int,
    discount_rate_percent: float,
    escalation_percent: float = 0.0,
) -> float:
    """Present value of the OPEX paid at the end of *year* (1-based)."""
    nominal = annual_opex_usd * (1 + escalation_percent / 100) ** (year - 1)
    return nominal / (1 + discount_rate_percent / 100) ** year


def project_tco(
    capex_usd: float,
    annual_opex_usd: float,
    analysis_years: int,
    discount_rate_percent: float,
    escalation_percent: float = 0.0,
) -> float:
    """Project total cost of ownership over the analysis horizon.

    ``tco = capex + sum(opex_y / (1 + r)^y for y in 1..years)``

    CAPEX is paid up front and is not discounted.  Each year's OPEX is
    paid at the end of the year.  With the default zero escalation the
    OPEX is flat, so this is the NPV of a constant annuity; a positive
    *escalation_percent* grows OPEX by that rate each year after the
    first.
    """
    tco = capex_usd
    for year in range(1, analysis_years + 1):
        tco += _discounted_opex(annual_opex_usd, year, discount_rate_percent, escalation_percent)
    return tco


def with_total_tco(profile: CostProfile, params: AnalysisParameters) -> CostProfile:
    """Return a copy of *profile* carrying its projected total TCO."""
    total = project_tco(
        profile.capex_usd,
        profile.annual_opex_usd,
        params.analysis_years,
        params.discount_rate_percent,
        params.opex_escalation_percent,
    )
    return profile.model_copy(update={"total_tco_usd": total})


def project_yearly(
    air: CostProfile,
    immersion: CostProfile,
    params: AnalysisParameters,
) -> list[YearProjection]:
    """Year-by-year discounted costs for both architectures.

    Row 0 holds CAPEX only.  Each later row adds that year's discounted
    OPEX, so the cumulative cost in the final row equals the projected
    TCO returned by :func:`project_tco`.
    """
    air_cumulative = air.capex_usd
    immersion_cumulative = immersion.capex_usd
    rows = [
        YearProjection(
            year=0,
            air_discounted_opex_usd=0.0,
            immersion_discounted_opex_usd=0.0,
            air_cumulative_cost_usd=air_cumulative,
            immersion_cumulative_cost_usd=immersion_cumulative,
        )
    ]

    for year in range(1, params.analysis_years + 1):
        air_opex = _discounted_opex(
            air.annual_opex_usd, year,
            params.discount_rate_percent, params.opex_escalation_percent,
        )
        immersion_opex = _discounted_opex(
            immersion.annual_opex_usd, year,
            params.discount_rate_percent, params.opex_escalation_percent,
        )
        air_cumulative += air_opex
        immersion_cumulative += immersion_opex
        rows.append(
            YearProjection(
                year=year,
                air_discounted_opex_usd=air_opex,
                immersion_discounted_opex_usd=immersion_opex,
                air_cumulative_cost_usd=air_cumulative,
                immersion_cumulative_cost_usd=immersion_cumulative,
            )
        )

    return rows
