# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Calculation stages of the TCO pipeline."""

from cooling_tco.analysis.validator import parse_request, validate_request
from cooling_tco.analysis.cost_model import compute_cost_profile, recommended_tank_count
from cooling_tco.analysis.cost_projector import project_tco, project_yearly, with_total_tco
from cooling_tco.analysis.comparison import compare_profiles, payback_period
from cooling_tco.analysis.environmental import environmental_equivalents

__all__ = [
    "compare_profiles",
    "compute_cost_profile",
    "environmental_equivalents",
    "parse_request",
    "payback_period",
    "project_tco",
    "project_yearly",
    "recommended_tank_count",
    "validate_request",
    "with_total_tco",
]
