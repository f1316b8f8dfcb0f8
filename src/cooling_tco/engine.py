# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""TCO calculation orchestrator.

Runs the pipeline stages in order: validation, per-architecture cost
model, discounted projection, and comparison.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from cooling_tco.analysis.comparison import compare_profiles
from cooling_tco.analysis.cost_model import compute_cost_profile
from cooling_tco.analysis.cost_projector import project_yearly, with_total_tco
from cooling_tco.analysis.environmental import environmental_equivalents
from cooling_tco.analysis.validator import parse_request
from cooling_tco.config import EngineConstants
from cooling_tco.data.models import (
    AnalysisParameters,
    CoolingSystemConfig,
    TCOResult,
)

logger = logging.getLogger(__name__)


def new_calculation_id() -> str:
    """Unique identifier attached to each result for traceability."""
    return f"calc_{uuid.uuid4().hex[:16]}"


class TCOEngine:
    """Compares air and immersion cooling over a multi-year horizon.

    The engine holds only its constants, so one instance can serve any
    number of concurrent requests.

    Usage::

        engine = TCOEngine()
        result = engine.calculate({"airRacks": 10, "immersionTanks": 9})
    """

    def __init__(self, constants: EngineConstants | None = None) -> None:
        self.constants = constants or EngineConstants()

    def calculate(self, raw: Mapping[str, Any]) -> TCOResult:
        """Validate a raw request mapping and run the full pipeline.

        Raises:
            MalformedInputError: If *raw* is not a mapping.
            ValidationError: If any field is out of bounds.
        """
        air_config, immersion_config, params = parse_request(raw)
        return self.compare(air_config, immersion_config, params)

    def compare(
        self,
        air_config: CoolingSystemConfig,
        immersion_config: CoolingSystemConfig,
        params: AnalysisParameters,
    ) -> TCOResult:
        """Run the pipeline on already validated inputs."""
        logger.debug(
            "Comparing %d air units against %d immersion units over %d years",
            air_config.unit_count, immersion_config.unit_count, params.analysis_years,
        )
        hours = self.constants.hours_per_year

        air = with_total_tco(compute_cost_profile(air_config, params, hours), params)
        immersion = with_total_tco(compute_cost_profile(immersion_config, params, hours), params)

        comparison = compare_profiles(
            air, immersion,
            hours_per_year=hours,
            carbon_kg_per_kwh=self.constants.carbon_kg_per_kwh,
        )

        result = TCOResult(
            calculation_id=new_calculation_id(),
            parameters=params,
            air=air,
            immersion=immersion,
            comparison=comparison,
            yearly_projection=project_yearly(air, immersion, params),
            environmental=environmental_equivalents(comparison, self.constants),
        )
        logger.debug(
            "Calculation %s: total savings %.2f USD", result.calculation_id,
            comparison.total_savings_usd,
        )
        return result
