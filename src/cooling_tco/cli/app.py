# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Main CLI application for cooling-tco."""

from __future__ import annotations

import json
import logging
from typing import Any, NoReturn

import click
import pydantic
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

import cooling_tco
from cooling_tco.analysis.cost_model import recommended_tank_count
from cooling_tco.analysis.validator import validate_request
from cooling_tco.api.models import response_dict
from cooling_tco.config import EngineConstants, load_scenario
from cooling_tco.data.limits import (
    AIR_POWER_PER_RACK,
    AIR_RACKS,
    DEFAULT_REQUEST,
    IMMERSION_POWER_PER_TANK,
    IMMERSION_TANKS,
)
from cooling_tco.data.models import TCOResult
from cooling_tco.engine import TCOEngine
from cooling_tco.errors import TCOError
from cooling_tco.reporting.terminal import TerminalRenderer

logger = logging.getLogger(__name__)

# Command-line flag for each request key.  Values left unset fall back to
# the scenario file, then to the documented defaults.
REQUEST_OPTIONS: tuple[tuple[str, str, type, str], ...] = (
    ("--air-racks", "airRacks", int, "Number of 42U air-cooled racks"),
    ("--air-power-per-rack", "airPowerPerRack", float, "IT load per air rack in kW"),
    ("--air-rack-cost", "airRackCost", float, "Purchase cost per air rack in USD"),
    ("--air-pue", "airPUE", float, "PUE of the air-cooled facility"),
    ("--immersion-tanks", "immersionTanks", int, "Number of immersion tanks"),
    ("--immersion-power-per-tank", "immersionPowerPerTank", float, "IT load per tank in kW"),
    ("--immersion-tank-cost", "immersionTankCost", float, "Purchase cost per tank in USD"),
    ("--immersion-pue", "immersionPUE", float, "PUE of the immersion-cooled facility"),
    ("--years", "analysisYears", int, "Analysis horizon in years"),
    ("--electricity-price", "electricityPrice", float, "Electricity price in USD per kWh"),
    ("--discount-rate", "discountRate", float, "Annual discount rate in percent"),
    ("--maintenance", "maintenanceCost", float, "Annual maintenance as percent of CAPEX"),
    ("--opex-escalation", "opexEscalation", float, "Annual OPEX growth in percent"),
)


def request_options(func):
    """Attach one option per request field to a Click command."""
    for flag, key, kind, help_text in reversed(REQUEST_OPTIONS):
        func = click.option(
            flag, key, type=kind, default=None,
            help=f"{help_text} [default: {DEFAULT_REQUEST[key]:g}]",
        )(func)
    return func


def _fail(console: Console, exc: object, code: int = 2) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise SystemExit(code)


@click.group()
@click.version_option(version=cooling_tco.__version__)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, no_color: bool, verbose: bool) -> None:
    """cooling-tco: Air vs. Immersion Cooling TCO Calculator

    Compare the total cost of ownership of air-cooled racks and
    immersion-cooled tanks for the same data center workload.

    \b
      calculate  Full cost comparison with savings, ROI, and payback
      size       Immersion tanks needed to carry an air rack layout
      serve      Run the REST API
    """
    ctx.ensure_object(dict)
    console = Console(no_color=no_color)
    ctx.obj["console"] = console

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )


@cli.command()
@request_options
@click.option(
    "--config", "-c", type=click.Path(exists=True, dir_okay=False), default=None,
    help="Scenario YAML file with request inputs and constant overrides",
)
@click.option(
    "--auto-tanks", is_flag=True, default=False,
    help="Size the immersion tank count to carry the air IT load",
)
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print the API response JSON instead of tables")
@click.option(
    "--export-pdf", type=click.Path(), default=None,
    help="Export results to PDF at this path",
)
@click.option(
    "--export-json", type=click.Path(), default=None,
    help="Export raw results as JSON at this path",
)
@click.option("--projection/--no-projection", default=True,
              help="Show the year-by-year cumulative cost table")
@click.pass_context
def calculate(
    ctx: click.Context,
    config: str | None,
    auto_tanks: bool,
    as_json: bool,
    export_pdf: str | None,
    export_json: str | None,
    projection: bool,
    **inputs: Any,
) -> None:
    """Compare air and immersion cooling over the analysis horizon."""
    console: Console = ctx.obj["console"]
    if auto_tanks and inputs.get(IMMERSION_TANKS.key) is not None:
        raise click.UsageError("--auto-tanks cannot be combined with --immersion-tanks")

    request: dict[str, Any] = {}
    constants: EngineConstants | None = None
    if config:
        try:
            scenario = load_scenario(config)
        except (yaml.YAMLError, pydantic.ValidationError) as exc:
            _fail(console, f"Invalid scenario file {config}: {exc}", code=1)
        logger.debug("Loaded scenario '%s' from %s", scenario.name, config)
        request.update(scenario.inputs)
        constants = scenario.constants

    request.update({k: v for k, v in inputs.items() if v is not None})

    try:
        if auto_tanks:
            if IMMERSION_TANKS.key in request:
                logger.info(
                    "--auto-tanks replaces the scenario tank count of %s",
                    request[IMMERSION_TANKS.key],
                )
            request[IMMERSION_TANKS.key] = _auto_tank_count(request)
            logger.debug("Auto-sized immersion tanks: %d", request[IMMERSION_TANKS.key])
        result = TCOEngine(constants).calculate(request)
    except TCOError as exc:
        _fail(console, exc)

    if as_json:
        click.echo(json.dumps(response_dict(result), indent=2))
    else:
        TerminalRenderer(console).render(result, show_projection=projection)

    if export_pdf:
        _export_pdf(result, export_pdf, console)

    if export_json:
        _export_json(result, export_json, console)


@cli.command()
@click.option("--air-racks", "airRacks", type=int, default=AIR_RACKS.default,
              show_default=True, help="Number of 42U air-cooled racks")
@click.option("--air-power-per-rack", "airPowerPerRack", type=float,
              default=AIR_POWER_PER_RACK.default, show_default=True,
              help="IT load per air rack in kW")
@click.option("--immersion-power-per-tank", "immersionPowerPerTank", type=float,
              default=IMMERSION_POWER_PER_TANK.default, show_default=True,
              help="IT load per immersion tank in kW")
@click.pass_context
def size(ctx: click.Context, **inputs: Any) -> None:
    """Recommend how many immersion tanks replace an air rack layout."""
    console: Console = ctx.obj["console"]
    try:
        tanks = _auto_tank_count(inputs)
    except TCOError as exc:
        _fail(console, exc)

    it_load = inputs[AIR_RACKS.key] * inputs[AIR_POWER_PER_RACK.key]
    console.print(
        f"  [bold]{tanks}[/bold] immersion tanks at "
        f"{inputs[IMMERSION_POWER_PER_TANK.key]:g} kW carry "
        f"{it_load:,.1f} kW of IT load "
        f"({inputs[AIR_RACKS.key]} racks x {inputs[AIR_POWER_PER_RACK.key]:g} kW)"
    )


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind host")
@click.option("--port", default=8000, type=int, help="Bind port")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Start the REST API server."""
    from cooling_tco.api import check_dependency
    check_dependency("fastapi", "pip install -e '.[api]'")
    check_dependency("uvicorn", "pip install -e '.[api]'")

    console: Console = ctx.obj["console"]
    console.print(f"[bold cyan]Starting API server on {host}:{port}...[/]")

    from cooling_tco.api.server import create_app
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)


def _auto_tank_count(request: dict[str, Any]) -> int:
    """Validate the sizing inputs and return the recommended tank count."""
    validate_request(request)
    return recommended_tank_count(
        request.get(AIR_RACKS.key, DEFAULT_REQUEST[AIR_RACKS.key]),
        request.get(AIR_POWER_PER_RACK.key, DEFAULT_REQUEST[AIR_POWER_PER_RACK.key]),
        request.get(
            IMMERSION_POWER_PER_TANK.key, DEFAULT_REQUEST[IMMERSION_POWER_PER_TANK.key]
        ),
    )


def _export_pdf(result: TCOResult, path: str, console: Console) -> None:
    """Export to PDF."""
    try:
        from cooling_tco.reporting.pdf_report import PDFReportGenerator

        with console.status("[bold cyan]Generating PDF report..."):
            generator = PDFReportGenerator()
            generator.generate(result, path)
        console.print(f"  [green]PDF report exported to:[/green] {path}")
    except ImportError:
        console.print(
            "[red]PDF export requires reportlab and matplotlib. "
            "Install with: pip install -e '.[report]'[/red]"
        )


def _export_json(result: TCOResult, path: str, console: Console) -> None:
    """Export to JSON."""
    with open(path, "w") as f:
        f.write(result.model_dump_json(indent=2))
    console.print(f"  [green]JSON report exported to:[/green] {path}")
