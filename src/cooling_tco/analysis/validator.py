# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Input validation for TCO calculation requests.

Checks every present request field against the bounds in
:mod:`cooling_tco.data.limits` before any arithmetic runs.  Values are
never clamped: the first offending field raises :class:`ValidationError`.
Defaults apply only to fields the request omits entirely.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from cooling_tco.data.limits import (
    AIR_PUE,
    AIR_POWER_PER_RACK,
    AIR_RACK_COST,
    AIR_RACKS,
    ANALYSIS_YEARS,
    DISCOUNT_RATE,
    ELECTRICITY_PRICE,
    FIELDS_BY_KEY,
    IMMERSION_POWER_PER_TANK,
    IMMERSION_PUE,
    IMMERSION_TANK_COST,
    IMMERSION_TANKS,
    MAINTENANCE_COST,
    OPEX_ESCALATION,
    REQUEST_FIELDS,
    FieldLimit,
)
from cooling_tco.data.models import (
    AnalysisParameters,
    CoolingArchitecture,
    CoolingSystemConfig,
)
from cooling_tco.errors import MalformedInputError, ValidationError

logger = logging.getLogger(__name__)


def _check_field(limit: FieldLimit, value: Any) -> float:
    """Validate a single value and return it as a number."""
    # bool is an int subclass; JSON true/false is never a valid quantity
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            limit.key,
            f"{limit.label} must be a number {limit.describe_range()}",
            minimum=limit.minimum,
            maximum=limit.maximum,
            value=value,
        )
    try:
        number = float(value)
    except OverflowError:
        # integers beyond float range, e.g. a 400-digit JSON literal
        number = math.inf
    if not math.isfinite(number):
        raise ValidationError(
            limit.key,
            f"{limit.label} must be a finite number {limit.describe_range()}",
            minimum=limit.minimum,
            maximum=limit.maximum,
            value=value,
        )
    if limit.integer and not number.is_integer():
        raise ValidationError(
            limit.key,
            f"{limit.label} must be an integer {limit.describe_range()} (got {value})",
            minimum=limit.minimum,
            maximum=limit.maximum,
            value=value,
        )
    if value < limit.minimum or value > limit.maximum:
        kind = "an integer " if limit.integer else ""
        raise ValidationError(
            limit.key,
            f"{limit.label} must be {kind}{limit.describe_range()} (got {value})",
            minimum=limit.minimum,
            maximum=limit.maximum,
            value=value,
        )
    return int(value) if limit.integer else float(value)


def validate_request(raw: Any) -> Mapping[str, Any]:
    """Validate a raw request mapping and return it unchanged.

    Raises:
        MalformedInputError: If *raw* is not a mapping.
        ValidationError: For the first field (in table order) that is out
            of bounds, non-numeric, or non-integral where an integer is
            required.
    """
    if not isinstance(raw, Mapping):
        raise MalformedInputError(
            f"Request body must be a JSON object, got {type(raw).__name__}"
        )

    unknown = sorted(k for k in raw if k not in FIELDS_BY_KEY)
    if unknown:
        logger.debug("Ignoring unknown request fields: %s", ", ".join(map(str, unknown)))

    for limit in REQUEST_FIELDS:
        if limit.key in raw:
            _check_field(limit, raw[limit.key])

    return raw


def _value(raw: Mapping[str, Any], limit: FieldLimit) -> float:
    if limit.key not in raw:
        return int(limit.default) if limit.integer else float(limit.default)
    value = raw[limit.key]
    return int(value) if limit.integer else float(value)


def parse_request(
    raw: Any,
) -> tuple[CoolingSystemConfig, CoolingSystemConfig, AnalysisParameters]:
    """Validate *raw* and build the typed pipeline inputs.

    Returns:
        ``(air_config, immersion_config, parameters)`` with documented
        defaults substituted for omitted fields.
    """
    validate_request(raw)

    air = CoolingSystemConfig(
        architecture=CoolingArchitecture.air,
        unit_count=_value(raw, AIR_RACKS),
        power_per_unit_kw=_value(raw, AIR_POWER_PER_RACK),
        unit_cost_usd=_value(raw, AIR_RACK_COST),
        pue=_value(raw, AIR_PUE),
    )
    immersion = CoolingSystemConfig(
        architecture=CoolingArchitecture.immersion,
        unit_count=_value(raw, IMMERSION_TANKS),
        power_per_unit_kw=_value(raw, IMMERSION_POWER_PER_TANK),
        unit_cost_usd=_value(raw, IMMERSION_TANK_COST),
        pue=_value(raw, IMMERSION_PUE),
    )
    params = AnalysisParameters(
        analysis_years=_value(raw, ANALYSIS_YEARS),
        electricity_price_usd_per_kwh=_value(raw, ELECTRICITY_PRICE),
        discount_rate_percent=_value(raw, DISCOUNT_RATE),
        maintenance_cost_percent=_value(raw, MAINTENANCE_COST),
        opex_escalation_percent=_value(raw, OPEX_ESCALATION),
    )
    return air, immersion, params
