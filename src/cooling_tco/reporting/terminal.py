"""Rich terminal report renderer.

Composes Rich tables, panels, and ASCII charts into the user-facing
terminal output for a TCO comparison.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from cooling_tco.data.models import CostProfile, TCOResult
from cooling_tco.reporting.ascii_charts import horizontal_bar, signed_amount, sparkline


class TerminalRenderer:
    """Renders TCO results to the terminal using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, result: TCOResult, show_projection: bool = True) -> None:
        """Render the full comparison report to the terminal."""
        self._render_header(result)
        self._render_cost_table(result)
        self._render_tco_bars(result)
        self._render_comparison(result)
        self._render_environmental(result)
        if show_projection:
            self._render_projection(result)
        self._render_footer(result)

    # ------------------------------------------------------------------
    # Private rendering methods
    # ------------------------------------------------------------------

    def _render_header(self, result: TCOResult) -> None:
        params = result.parameters
        header_text = Text()
        header_text.append("COOLING TCO", style="bold cyan")
        header_text.append(" | ", style="dim")
        header_text.append(f"{params.analysis_years}-year horizon", style="bold")
        header_text.append(" | ", style="dim")
        header_text.append(f"${params.electricity_price_usd_per_kwh:.3f}/kWh")
        header_text.append(f" | {params.discount_rate_percent:g}% discount")
        header_text.append(f" | {params.maintenance_cost_percent:g}% maintenance")
        if params.opex_escalation_percent:
            header_text.append(f" | {params.opex_escalation_percent:g}% OPEX growth")

        self.console.print()
        self.console.print(Panel(header_text, title="Air vs. Immersion Cooling"))

    def _render_cost_table(self, result: TCOResult) -> None:
        table = Table(title="Cost Breakdown", show_lines=False)
        table.add_column("Metric", style="bold")
        table.add_column("Air Cooling", justify="right")
        table.add_column("Immersion Cooling", justify="right")

        air, imm = result.air, result.immersion
        rows: list[tuple[str, str, str]] = [
            ("Equipment", _equipment(air), _equipment(imm)),
            ("IT Load", f"{air.it_power_kw:,.1f} kW", f"{imm.it_power_kw:,.1f} kW"),
            ("PUE", f"{air.pue:.2f}", f"{imm.pue:.2f}"),
            ("Facility Power", f"{air.facility_power_kw:,.1f} kW", f"{imm.facility_power_kw:,.1f} kW"),
            ("CAPEX", _usd(air.capex_usd), _usd(imm.capex_usd)),
            ("Annual Electricity", _usd(air.annual_electricity_usd), _usd(imm.annual_electricity_usd)),
            ("Annual Maintenance", _usd(air.annual_maintenance_usd), _usd(imm.annual_maintenance_usd)),
            ("Annual OPEX", _usd(air.annual_opex_usd), _usd(imm.annual_opex_usd)),
            (
                "Annual Energy",
                f"{air.annual_energy_consumption_mwh:,.0f} MWh",
                f"{imm.annual_energy_consumption_mwh:,.0f} MWh",
            ),
            ("Total TCO", _usd(air.total_tco_usd or 0.0), _usd(imm.total_tco_usd or 0.0)),
        ]
        for row in rows:
            table.add_row(*row)

        self.console.print()
        self.console.print(table)

    def _render_tco_bars(self, result: TCOResult) -> None:
        air_tco = result.air.total_tco_usd or 0.0
        imm_tco = result.immersion.total_tco_usd or 0.0
        top = max(air_tco, imm_tco)

        self.console.print()
        self.console.print(Rule("[bold]TOTAL COST OF OWNERSHIP[/bold]", style="cyan"))
        self.console.print(horizontal_bar("Air Cooling", air_tco, top, width=30, color="red"))
        self.console.print(horizontal_bar("Immersion Cooling", imm_tco, top, width=30, color="green"))

    def _render_comparison(self, result: TCOResult) -> None:
        comp = result.comparison
        payback = (
            f"{comp.payback_years:.1f} years" if comp.payback_years is not None else "N/A"
        )

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Total Savings", signed_amount(comp.total_savings_usd))
        table.add_row("Annual Savings", signed_amount(comp.annual_savings_usd))
        table.add_row("CAPEX Difference", f"${comp.capex_difference_usd:,.0f}")
        table.add_row("Payback Period", payback)
        table.add_row("ROI", f"{comp.roi_percent:.1f}%")
        table.add_row("PUE Improvement", f"{comp.pue_improvement_percent:.1f}%")
        table.add_row("Energy Savings", f"{comp.annual_energy_savings_mwh:,.0f} MWh/yr")
        table.add_row("Carbon Reduction", f"{comp.annual_carbon_reduction_tons:,.0f} t CO2/yr")

        verdict = (
            "[bold green]Immersion cooling has the lower TCO[/]"
            if comp.immersion_wins
            else "[bold yellow]Air cooling has the lower TCO[/]"
        )

        self.console.print()
        self.console.print(Panel(table, title="COMPARISON", subtitle=verdict, border_style="cyan"))

    def _render_environmental(self, result: TCOResult) -> None:
        env = result.environmental
        self.console.print(
            f"  [bold]Equivalent to:[/bold] {env.homes_powered:,.0f} homes powered, "
            f"{env.trees_planted:,.0f} trees planted, "
            f"{env.cars_removed:,.0f} cars off the road per year"
        )

    def _render_projection(self, result: TCOResult) -> None:
        rows = result.yearly_projection
        if not rows:
            return

        table = Table(title="Cumulative Discounted Cost")
        table.add_column("Year", justify="right")
        table.add_column("Air", justify="right")
        table.add_column("Immersion", justify="right")
        table.add_column("Savings", justify="right")
        for row in rows:
            table.add_row(
                str(row.year),
                _usd(row.air_cumulative_cost_usd),
                _usd(row.immersion_cumulative_cost_usd),
                signed_amount(row.cumulative_savings_usd),
            )

        self.console.print()
        self.console.print(table)
        trend = sparkline([r.cumulative_savings_usd for r in rows])
        self.console.print(f"  Savings trend: [cyan]{trend}[/]")

    def _render_footer(self, result: TCOResult) -> None:
        self.console.print()
        self.console.print(
            f"  [dim]Calculation {result.calculation_id} | "
            f"{result.timestamp.strftime('%Y-%m-%d %H:%M:%S UTC')}[/dim]"
        )
        self.console.print()


def _usd(value: float) -> str:
    return f"${value:,.0f}"


def _equipment(profile: CostProfile) -> str:
    return f"{profile.config.unit_count} {profile.architecture.unit_label}"
