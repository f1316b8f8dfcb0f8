"""Matplotlib chart generators for the TCO PDF report.

This module provides a ``ChartGenerator`` class that transforms a
``TCOResult`` into Matplotlib figures suitable for embedding in a
ReportLab PDF or saving as standalone PNG images.

The Agg backend is selected unconditionally so that chart rendering works
in headless / server environments without a display.
"""

from __future__ import annotations

import os

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from cooling_tco.data.models import TCOResult  # noqa: E402

# ---------------------------------------------------------------------------
# Style / palette constants
# ---------------------------------------------------------------------------

_STYLE_CANDIDATES = ["seaborn-v0_8-whitegrid", "seaborn-whitegrid"]

_BLUE = "#2196F3"
_GREEN = "#4CAF50"
_ORANGE = "#FF9800"
_RED = "#F44336"

_DPI = 150


def _apply_style() -> None:
    """Apply the best available Matplotlib style."""
    for style in _STYLE_CANDIDATES:
        if style in plt.style.available:
            plt.style.use(style)
            return


_apply_style()


class ChartGenerator:
    """Generate the charts embedded in the TCO PDF report.

    Each public method returns a :class:`matplotlib.figure.Figure`.

    Parameters
    ----------
    result:
        A ``TCOResult`` produced by :class:`cooling_tco.engine.TCOEngine`.
    """

    def __init__(self, result: TCOResult) -> None:
        self.result = result

    # -- 1. Stacked CAPEX + discounted OPEX bars ---------------------------

    def tco_comparison_bar(self) -> Figure:
        """Stacked bars of CAPEX and discounted OPEX per architecture."""
        air, imm = self.result.air, self.result.immersion
        labels = ["Air Cooling", "Immersion Cooling"]
        capex = np.array([air.capex_usd, imm.capex_usd])
        tco = np.array([air.total_tco_usd or 0.0, imm.total_tco_usd or 0.0])
        opex_npv = tco - capex

        fig, ax = plt.subplots(figsize=(10, 6), dpi=_DPI)
        x_pos = np.arange(len(labels))
        ax.bar(x_pos, capex, width=0.5, color=_BLUE, label="CAPEX")
        ax.bar(x_pos, opex_npv, width=0.5, bottom=capex, color=_ORANGE,
               label=f"OPEX (NPV, {self.result.parameters.analysis_years} yr)")

        for x, total in zip(x_pos, tco):
            ax.text(x, total, f"${total:,.0f}", ha="center", va="bottom",
                    fontsize=13, fontweight="bold")

        ax.set_xticks(x_pos)
        ax.set_xticklabels(labels, fontsize=12)
        ax.set_ylabel("Cost (USD)", fontsize=12)
        ax.set_title("Total Cost of Ownership", fontsize=16, fontweight="bold")
        ax.set_ylim(0, max(tco.max(), 1.0) * 1.18)
        ax.legend(loc="upper right")

        fig.tight_layout()
        return fig

    # -- 2. Cumulative cost timeline ---------------------------------------

    def cumulative_cost_line(self) -> Figure:
        """Cumulative discounted cost of both architectures by year."""
        rows = self.result.yearly_projection
        years = [r.year for r in rows]
        air = [r.air_cumulative_cost_usd for r in rows]
        imm = [r.immersion_cumulative_cost_usd for r in rows]

        fig, ax = plt.subplots(figsize=(10, 6), dpi=_DPI)
        ax.plot(years, air, color=_RED, linewidth=2.5, marker="o", label="Air Cooling")
        ax.plot(years, imm, color=_GREEN, linewidth=2.5, marker="o", label="Immersion Cooling")
        ax.fill_between(years, air, imm, color=_GREEN, alpha=0.12)

        ax.set_xticks(years)
        ax.set_xlabel("Year", fontsize=12)
        ax.set_ylabel("Cumulative Cost (USD)", fontsize=12)
        ax.set_title("Cumulative Discounted Cost", fontsize=16, fontweight="bold")
        ax.legend(loc="upper left")

        fig.tight_layout()
        return fig

    # -- 3. Annual OPEX breakdown ------------------------------------------

    def opex_breakdown_bar(self) -> Figure:
        """Grouped bars of annual electricity and maintenance costs."""
        air, imm = self.result.air, self.result.immersion
        categories = ["Electricity", "Maintenance"]
        air_values = [air.annual_electricity_usd, air.annual_maintenance_usd]
        imm_values = [imm.annual_electricity_usd, imm.annual_maintenance_usd]

        x_pos = np.arange(len(categories))
        width = 0.35

        fig, ax = plt.subplots(figsize=(10, 6), dpi=_DPI)
        ax.bar(x_pos - width / 2, air_values, width, color=_RED, label="Air Cooling")
        ax.bar(x_pos + width / 2, imm_values, width, color=_GREEN, label="Immersion Cooling")

        ax.set_xticks(x_pos)
        ax.set_xticklabels(categories, fontsize=12)
        ax.set_ylabel("Annual Cost (USD)", fontsize=12)
        ax.set_title("Annual Operating Cost Breakdown", fontsize=16, fontweight="bold")
        ax.legend(loc="upper right")

        fig.tight_layout()
        return fig

    # -- Convenience methods ----------------------------------------------

    def generate_all(self) -> dict[str, Figure]:
        """Generate all charts and return as a name -> figure dict."""
        return {
            "tco_comparison_bar": self.tco_comparison_bar(),
            "cumulative_cost_line": self.cumulative_cost_line(),
            "opex_breakdown_bar": self.opex_breakdown_bar(),
        }

    def save_all(self, output_dir: str) -> dict[str, str]:
        """Save all charts as PNG files.

        Parameters
        ----------
        output_dir:
            Directory where PNG files will be written. Created if it does
            not already exist.

        Returns
        -------
        dict[str, str]
            Mapping of chart name to the absolute file path of the saved PNG.
        """
        os.makedirs(output_dir, exist_ok=True)
        charts = self.generate_all()
        paths: dict[str, str] = {}
        for name, fig in charts.items():
            filepath = os.path.join(output_dir, f"{name}.png")
            fig.savefig(filepath, dpi=_DPI, bbox_inches="tight", facecolor="white")
            plt.close(fig)
            paths[name] = os.path.abspath(filepath)
        return paths
