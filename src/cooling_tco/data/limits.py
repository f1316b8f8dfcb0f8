# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Input bounds, request defaults, and physical constants.

Every request field is listed once in :data:`REQUEST_FIELDS`, in the order
the validator checks them.  The bounds reflect physical plausibility for
each cooling architecture rather than hard physical laws.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Physical constants
# ---------------------------------------------------------------------------
HOURS_PER_YEAR = 8760           # no leap-year adjustment
CARBON_KG_PER_KWH = 0.4         # grid carbon intensity, kg CO2 per kWh

# ---------------------------------------------------------------------------
# Environmental equivalence factors
# ---------------------------------------------------------------------------
HOME_MWH_PER_YEAR = 10.812      # average US household consumption
TREES_PER_TON_CO2 = 16.5
CAR_TONS_CO2_PER_YEAR = 4.6

# Annual savings below this magnitude are treated as zero for payback.
SAVINGS_EPSILON_USD = 1e-9


@dataclass(frozen=True)
class FieldLimit:
    """Bounds and default for a single request field."""

    key: str
    label: str
    minimum: float
    maximum: float
    default: float
    integer: bool = False
    unit: str = ""

    def describe_range(self) -> str:
        """Human-readable range, e.g. ``between 1 and 1000``."""
        low = _fmt(self.minimum, self.unit)
        high = _fmt(self.maximum, self.unit)
        return f"between {low} and {high}"


def _fmt(value: float, unit: str) -> str:
    text = f"{value:,.0f}" if float(value).is_integer() and value >= 1000 else f"{value:g}"
    if unit == "$":
        return f"${text}"
    if unit:
        return f"{text}{unit}"
    return text


# ---------------------------------------------------------------------------
# Air cooling
# ---------------------------------------------------------------------------
AIR_RACKS = FieldLimit("airRacks", "Air racks", 1, 1000, 10, integer=True)
AIR_POWER_PER_RACK = FieldLimit(
    "airPowerPerRack", "Air power per rack", 1, 100, 20, unit=" kW"
)
AIR_RACK_COST = FieldLimit("airRackCost", "Air rack cost", 10_000, 500_000, 50_000, unit="$")
AIR_PUE = FieldLimit("airPUE", "Air PUE", 1.0, 3.0, 1.8)

# ---------------------------------------------------------------------------
# Immersion cooling
# ---------------------------------------------------------------------------
IMMERSION_TANKS = FieldLimit("immersionTanks", "Immersion tanks", 1, 500, 9, integer=True)
IMMERSION_POWER_PER_TANK = FieldLimit(
    "immersionPowerPerTank", "Immersion power per tank", 5, 200, 23, unit=" kW"
)
IMMERSION_TANK_COST = FieldLimit(
    "immersionTankCost", "Immersion tank cost", 20_000, 1_000_000, 80_000, unit="$"
)
IMMERSION_PUE = FieldLimit("immersionPUE", "Immersion PUE", 1.0, 2.0, 1.1)

# ---------------------------------------------------------------------------
# Shared analysis parameters
# ---------------------------------------------------------------------------
ANALYSIS_YEARS = FieldLimit("analysisYears", "Analysis years", 1, 20, 5, integer=True)
ELECTRICITY_PRICE = FieldLimit(
    "electricityPrice", "Electricity price", 0.01, 1.00, 0.12, unit="$"
)
DISCOUNT_RATE = FieldLimit("discountRate", "Discount rate", 0, 30, 5, unit="%")
MAINTENANCE_COST = FieldLimit("maintenanceCost", "Maintenance cost", 0, 15, 3, unit="%")
OPEX_ESCALATION = FieldLimit("opexEscalation", "OPEX escalation", 0, 20, 0, unit="%")

REQUEST_FIELDS: tuple[FieldLimit, ...] = (
    AIR_RACKS,
    AIR_POWER_PER_RACK,
    AIR_RACK_COST,
    AIR_PUE,
    IMMERSION_TANKS,
    IMMERSION_POWER_PER_TANK,
    IMMERSION_TANK_COST,
    IMMERSION_PUE,
    ANALYSIS_YEARS,
    ELECTRICITY_PRICE,
    DISCOUNT_RATE,
    MAINTENANCE_COST,
    OPEX_ESCALATION,
)

FIELDS_BY_KEY: dict[str, FieldLimit] = {f.key: f for f in REQUEST_FIELDS}

DEFAULT_REQUEST: dict[str, float] = {
    f.key: (int(f.default) if f.integer else float(f.default)) for f in REQUEST_FIELDS
}
