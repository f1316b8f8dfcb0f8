# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Terminal-friendly visualizations using Unicode characters.

These functions return Rich-markup strings that render as bar charts
and sparklines in the terminal via the Rich library.
"""

from __future__ import annotations


def horizontal_bar(
    label: str,
    value: float,
    max_value: float,
    width: int = 40,
    color: str = "green",
) -> str:
    """Render a horizontal bar using Unicode block characters.

    Returns a Rich-markup string like:
        Air Cooling............ [red]████████████░░░░░░░░[/] $2,203,355
    """
    if max_value <= 0:
        return f"  {label:.<24} [dim]no data[/]"
    ratio = max(0.0, min(value / max_value, 1.0))
    filled = int(ratio * width)
    bar = "█" * filled + "░" * (width - filled)
    return f"  {label:.<24} [{color}]{bar}[/] ${value:>12,.0f}"


def sparkline(values: list[float], width: int | None = None) -> str:
    """Render a sparkline using Unicode block characters.

    Each value maps to one of 9 block heights: \" ▁▂▃▄▅▆▇█\"
    If width is given and len(values) > width, values are downsampled.
    """
    if not values:
        return ""

    blocks = " ▁▂▃▄▅▆▇█"

    if width and len(values) > width:
        step = len(values) / width
        sampled = []
        for i in range(width):
            start = int(i * step)
            end = int((i + 1) * step)
            sampled.append(sum(values[start:end]) / (end - start))
        values = sampled

    min_v = min(values)
    max_v = max(values)
    range_v = max_v - min_v or 1

    return "".join(
        blocks[int((v - min_v) / range_v * 8)] for v in values
    )


def signed_amount(value: float) -> str:
    """Dollar amount colored green when positive and red when negative."""
    color = "green" if value > 0 else "red" if value < 0 else "dim"
    sign = "-" if value < 0 else ""
    return f"[{color}]{sign}${abs(value):,.0f}[/]"
