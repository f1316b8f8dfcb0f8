"""ReportLab-based PDF report generator for TCO comparisons.

Produces a short PDF covering the cost breakdown, comparison metrics,
embedded Matplotlib charts, the year-by-year projection, and a
methodology appendix.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from typing import Dict, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image,
    KeepTogether,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from cooling_tco.data.models import TCOResult
from cooling_tco.reporting.charts import ChartGenerator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Color palette
# ---------------------------------------------------------------------------
DARK_BLUE = colors.HexColor('#1565C0')
SAVINGS_GREEN = '#4CAF50'
LOSS_RED = '#F44336'
LIGHT_GRAY = colors.HexColor('#F5F5F5')
WHITE = colors.white


def _usd(value: float) -> str:
    return f"${value:,.0f}"


class PDFReportGenerator:
    """Generates a multi-page PDF report from a :class:`TCOResult`."""

    def __init__(self) -> None:
        self._styles = getSampleStyleSheet()
        self._register_custom_styles()

    def _register_custom_styles(self) -> None:
        """Add project-specific paragraph styles to the stylesheet."""
        self._styles.add(ParagraphStyle(
            'CoverTitle',
            parent=self._styles['Title'],
            fontSize=28,
            leading=34,
            textColor=DARK_BLUE,
            spaceAfter=12,
            alignment=1,  # center
        ))
        self._styles.add(ParagraphStyle(
            'CoverSubtitle',
            parent=self._styles['Normal'],
            fontSize=16,
            leading=20,
            textColor=colors.HexColor('#333333'),
            spaceAfter=8,
            alignment=1,
        ))
        self._styles.add(ParagraphStyle(
            'SectionTitle',
            parent=self._styles['Heading1'],
            fontSize=20,
            leading=24,
            textColor=DARK_BLUE,
            spaceAfter=12,
            spaceBefore=6,
        ))
        self._styles.add(ParagraphStyle(
            'BodyText2',
            parent=self._styles['Normal'],
            fontSize=10,
            leading=14,
            spaceAfter=6,
        ))
        self._styles.add(ParagraphStyle(
            'Headline',
            parent=self._styles['Normal'],
            fontSize=22,
            leading=28,
            alignment=1,
            spaceAfter=6,
        ))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, result: TCOResult, output_path: str) -> None:
        """Generate a complete PDF report and save to *output_path*."""
        chart_paths: Dict[str, str] = {}
        tmpdir: Optional[str] = None
        try:
            tmpdir = tempfile.mkdtemp(prefix='cooling_tco_charts_')
            try:
                chart_paths = ChartGenerator(result).save_all(tmpdir)
            except Exception:
                logger.warning(
                    "Chart generation failed; PDF will be produced without charts.",
                    exc_info=True,
                )

            doc = SimpleDocTemplate(
                output_path,
                pagesize=letter,
                topMargin=0.75 * inch,
                bottomMargin=0.75 * inch,
                leftMargin=0.75 * inch,
                rightMargin=0.75 * inch,
            )

            elements = []
            elements.extend(self._build_cover(result))
            elements.append(PageBreak())
            elements.extend(self._build_costs(result, chart_paths))
            elements.append(PageBreak())
            elements.extend(self._build_projection(result, chart_paths))
            elements.append(PageBreak())
            elements.extend(self._build_methodology(result))

            doc.build(elements, onFirstPage=self._add_page_number,
                      onLaterPages=self._add_page_number)
        finally:
            if tmpdir and os.path.isdir(tmpdir):
                shutil.rmtree(tmpdir, ignore_errors=True)

    @staticmethod
    def _add_page_number(canvas, doc) -> None:
        """Draw the page number in the footer of every page."""
        canvas.saveState()
        canvas.setFont('Helvetica', 8)
        canvas.setFillColor(colors.HexColor('#999999'))
        canvas.drawCentredString(letter[0] / 2.0, 0.5 * inch, f"Page {canvas.getPageNumber()}")
        canvas.restoreState()

    # ------------------------------------------------------------------
    # Page 1: Cover with headline savings
    # ------------------------------------------------------------------

    def _build_cover(self, result: TCOResult) -> list:
        comp = result.comparison
        elements: list = [
            Spacer(1, 1.5 * inch),
            Paragraph("Cooling TCO Report", self._styles['CoverTitle']),
            Paragraph("Air Cooling vs. Immersion Cooling", self._styles['CoverSubtitle']),
            Paragraph(result.timestamp.strftime('%B %d, %Y'), self._styles['CoverSubtitle']),
            Spacer(1, 0.6 * inch),
        ]

        colour = SAVINGS_GREEN if comp.total_savings_usd >= 0 else LOSS_RED
        elements.append(Paragraph(
            f'<font color="{colour}">{_usd(comp.total_savings_usd)}</font>',
            self._styles['Headline'],
        ))
        elements.append(Paragraph(
            f"total savings over {result.parameters.analysis_years} years "
            f"(net present value)",
            self._styles['CoverSubtitle'],
        ))
        payback = (
            f"{comp.payback_years:.1f} years" if comp.payback_years is not None else "N/A"
        )
        elements.append(Spacer(1, 0.3 * inch))
        elements.append(self._key_value_table([
            ("ROI", f"{comp.roi_percent:.1f}%"),
            ("Payback period", payback),
            ("PUE improvement", f"{comp.pue_improvement_percent:.1f}%"),
            ("Energy savings", f"{comp.annual_energy_savings_mwh:,.0f} MWh / year"),
            ("Carbon reduction", f"{comp.annual_carbon_reduction_tons:,.0f} t CO2 / year"),
        ]))
        elements.append(Spacer(1, 0.4 * inch))
        elements.append(Paragraph(
            f"Calculation ID: {result.calculation_id}", self._styles['BodyText2'],
        ))
        return elements

    # ------------------------------------------------------------------
    # Page 2: Cost breakdown
    # ------------------------------------------------------------------

    def _build_costs(self, result: TCOResult, chart_paths: Dict[str, str]) -> list:
        air, imm = result.air, result.immersion
        elements: list = [Paragraph("Cost Breakdown", self._styles['SectionTitle'])]

        data = [
            ["Metric", "Air Cooling", "Immersion Cooling"],
            ["Units", f"{air.config.unit_count} {air.architecture.unit_label}",
             f"{imm.config.unit_count} {imm.architecture.unit_label}"],
            ["IT load", f"{air.it_power_kw:,.1f} kW", f"{imm.it_power_kw:,.1f} kW"],
            ["PUE", f"{air.pue:.2f}", f"{imm.pue:.2f}"],
            ["CAPEX", _usd(air.capex_usd), _usd(imm.capex_usd)],
            ["Annual electricity", _usd(air.annual_electricity_usd), _usd(imm.annual_electricity_usd)],
            ["Annual maintenance", _usd(air.annual_maintenance_usd), _usd(imm.annual_maintenance_usd)],
            ["Annual OPEX", _usd(air.annual_opex_usd), _usd(imm.annual_opex_usd)],
            ["Total TCO", _usd(air.total_tco_usd or 0.0), _usd(imm.total_tco_usd or 0.0)],
        ]
        elements.append(self._grid_table(data, [2.3 * inch, 2.3 * inch, 2.3 * inch]))
        elements.append(Spacer(1, 0.2 * inch))
        self._maybe_add_chart(elements, chart_paths, 'tco_comparison_bar', 6.5 * inch, 3.9 * inch)
        self._maybe_add_chart(elements, chart_paths, 'opex_breakdown_bar', 6.5 * inch, 3.9 * inch)
        return elements

    # ------------------------------------------------------------------
    # Page 3: Year-by-year projection
    # ------------------------------------------------------------------

    def _build_projection(self, result: TCOResult, chart_paths: Dict[str, str]) -> list:
        elements: list = [Paragraph("Discounted Cost Projection", self._styles['SectionTitle'])]
        self._maybe_add_chart(elements, chart_paths, 'cumulative_cost_line', 6.5 * inch, 3.9 * inch)

        data = [["Year", "Air (cumulative)", "Immersion (cumulative)", "Savings"]]
        for row in result.yearly_projection:
            data.append([
                str(row.year),
                _usd(row.air_cumulative_cost_usd),
                _usd(row.immersion_cumulative_cost_usd),
                _usd(row.cumulative_savings_usd),
            ])
        elements.append(self._grid_table(data, [0.8 * inch, 2.0 * inch, 2.0 * inch, 2.0 * inch]))
        return elements

    # ------------------------------------------------------------------
    # Page 4: Methodology
    # ------------------------------------------------------------------

    def _build_methodology(self, result: TCOResult) -> list:
        params = result.parameters
        body = self._styles['BodyText2']
        paragraphs = [
            "<b>Facility power.</b> IT load is the unit count times the nameplate "
            "power per unit. Facility power multiplies IT load by the PUE of each "
            "cooling architecture.",
            "<b>Operating cost.</b> Annual electricity is facility power over a "
            f"full year at ${params.electricity_price_usd_per_kwh:.3f}/kWh. Annual "
            f"maintenance is {params.maintenance_cost_percent:g}% of CAPEX.",
            "<b>Total cost of ownership.</b> CAPEX is paid up front. Each year's "
            f"OPEX is discounted at {params.discount_rate_percent:g}% per year over "
            f"{params.analysis_years} years"
            + (
                f", growing {params.opex_escalation_percent:g}% per year."
                if params.opex_escalation_percent else "; OPEX is held flat."
            ),
            "<b>Comparison.</b> Savings are air minus immersion. ROI divides total "
            "savings by immersion CAPEX. Payback divides the CAPEX difference by "
            "annual OPEX savings and is reported as N/A when those savings are zero.",
        ]
        elements: list = [Paragraph("Methodology", self._styles['SectionTitle'])]
        for text in paragraphs:
            elements.append(Paragraph(text, body))
        return elements

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _key_value_table(self, rows: list[tuple[str, str]]) -> Table:
        tbl = Table([list(r) for r in rows], colWidths=[2.5 * inch, 2.5 * inch])
        tbl.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
            ('LINEBELOW', (0, 0), (-1, -1), 0.25, colors.HexColor('#DDDDDD')),
        ]))
        return tbl

    def _grid_table(self, data: list[list[str]], col_widths: list[float]) -> Table:
        tbl = Table(data, colWidths=col_widths, repeatRows=1)
        style_commands = [
            ('BACKGROUND', (0, 0), (-1, 0), DARK_BLUE),
            ('TEXTCOLOR', (0, 0), (-1, 0), WHITE),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
            ('GRID', (0, 0), (-1, -1), 0.25, colors.HexColor('#CCCCCC')),
        ]
        for i in range(1, len(data)):
            if i % 2 == 0:
                style_commands.append(('BACKGROUND', (0, i), (-1, i), LIGHT_GRAY))
        tbl.setStyle(TableStyle(style_commands))
        return tbl

    def _maybe_add_chart(self, elements: list, chart_paths: Dict[str, str],
                         chart_key: str, width: float, height: float) -> None:
        """Add a chart image if available, otherwise skip silently."""
        path = chart_paths.get(chart_key)
        if path and os.path.isfile(path):
            try:
                img = Image(path, width=width, height=height)
                elements.append(KeepTogether([img]))
            except Exception:
                logger.warning(
                    "Failed to embed chart '%s'; skipping.", chart_key,
                    exc_info=True,
                )
        elif chart_key in chart_paths:
            logger.warning(
                "Chart file for '%s' not found at '%s'; skipping.",
                chart_key, path,
            )
