"""Markdown summary of a dashboard render pass.

Produces the same information the dashboard shows (global summary, the
sidebar's region list, predicted events) as a Markdown document, for
sharing a snapshot without the map.

Usage::

    from quakecompass import run_pipeline
    from quakecompass.report import generate_report

    print(generate_report(run_pipeline(rows)))
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from quakecompass.formatting import fmt, fmt_coord, fmt_date_range, fmt_mag, fmt_num
from quakecompass.pipeline import DashboardData, ranked_regions


def md_table(
    headers: Sequence[str],
    rows: Sequence[Sequence],
    alignments: Sequence[str] | None = None,
) -> str:
    """Build a Markdown table; ``alignments`` holds ``'l'``/``'r'`` per column.

    Returns ``""`` if *rows* is empty. Pipe characters in cells are escaped.
    """
    if not rows:
        return ""
    alignments = alignments or ["l"] * len(headers)
    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join("---:" if a == "r" else "---" for a in alignments) + " |",
    ]
    for row in rows:
        cells = [str(c).replace("|", "\\|") for c in row]
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines)


def generate_report(
    dashboard: DashboardData,
    title: str = "Quake Compass",
    generated_at: datetime | None = None,
) -> str:
    """Render *dashboard* as a Markdown document."""
    generated_at = generated_at or datetime.now(timezone.utc)

    lines = []
    lines.append(f"# {title}")
    lines.append("")
    lines.append(f"*Generated: {generated_at.strftime('%Y-%m-%d %H:%M UTC')}*")
    lines.append("")
    lines.extend(global_section(dashboard))
    lines.append("")
    lines.extend(region_section(dashboard))
    if dashboard.overlays:
        lines.append("")
        lines.extend(prediction_section(dashboard))
    return "\n".join(lines) + "\n"


def global_section(dashboard: DashboardData) -> list[str]:
    g = dashboard.global_stats
    return [
        "## Global Summary",
        "",
        md_table(
            ["Total Earthquakes", "Regions Affected", "Avg Magnitude", "Max Magnitude", "Min Magnitude"],
            [[
                fmt_num(g.total_valid_events),
                fmt_num(g.regions_affected),
                fmt_mag(g.avg_magnitude),
                fmt_mag(g.max_magnitude),
                fmt_mag(g.min_magnitude),
            ]],
            ["r"] * 5,
        ),
    ]


def region_section(dashboard: DashboardData) -> list[str]:
    rows = []
    for marker in ranked_regions(dashboard):
        s = marker.stats
        rows.append([
            s.region,
            fmt_num(s.record_count),
            fmt_mag(s.avg_magnitude),
            fmt_mag(s.max_magnitude),
            fmt_mag(s.min_magnitude),
            s.risk_tier.value if s.risk_tier else "—",
            f"{fmt(s.centroid_lat, 2)}, {fmt(s.centroid_lon, 2)}",
            fmt_date_range(s.date_range.start, s.date_range.end),
        ])
    return [
        "## Regions",
        "",
        md_table(
            ["Region", "Events", "Avg Mag", "Max Mag", "Min Mag", "Risk", "Centroid", "Dates"],
            rows,
            ["l", "r", "r", "r", "r", "l", "l", "l"],
        ),
    ]


def prediction_section(dashboard: DashboardData) -> list[str]:
    lines = ["## Predicted Events", ""]
    for a in dashboard.overlays:
        note = f" ({a.basis})" if a.basis else ""
        lines.append(
            f"- **{a.label}** ({fmt_coord(a.latitude, a.longitude)}): "
            f"M{fmt_mag(a.magnitude)} expected in {a.year}{note}"
        )
    return lines
