from __future__ import annotations

from xml.sax.saxutils import escape, quoteattr

from dentchart.core.schemas.chart import ChartRow, ChartView, ToothGlyph

GLYPH_WIDTH = 32
GLYPH_HEIGHT = 40
GLYPH_GAP = 4
MIDLINE_GAP = 24
ROW_GAP = 36
MARGIN = 24
HEADER_HEIGHT = 44
LEGEND_ROW_HEIGHT = 18
LEGEND_COLUMNS = 4
LEGEND_COLUMN_WIDTH = 150

HIGHLIGHT_STROKE = "#facc15"
OUTLINE_STROKE = "#9ca3af"
MIDLINE_STROKE = "#d1d5db"
GUMLINE_STROKE = "#9ca3af"
MOBILITY_FILL = "#ef4444"


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


def _half_width(row: ChartRow) -> int:
    count = max(len(row.right), len(row.left))
    return count * GLYPH_WIDTH + max(count - 1, 0) * GLYPH_GAP


def _glyph_svg(glyph: ToothGlyph, x: float, y: float) -> list[str]:
    stroke = HIGHLIGHT_STROKE if glyph.highlighted else OUTLINE_STROKE
    stroke_width = 2 if glyph.highlighted else 1
    lines = [f'<g class="tooth" data-tooth="{glyph.tooth_number}" data-condition="{glyph.condition.value}">']
    lines.append(f"<title>{escape(' | '.join(glyph.tooltip.lines()))}</title>")
    lines.append(
        f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{GLYPH_WIDTH}" height="{GLYPH_HEIGHT}" rx="6" '
        f'fill="{glyph.color}" fill-opacity="0.35" stroke="{stroke}" stroke-width="{stroke_width}"/>'
    )
    for zone in glyph.zones:
        fill = zone.overlay_color or "transparent"
        border = ' stroke="#f87171" stroke-width="1"' if zone.overlay_color else ""
        lines.append(
            f'<rect class="surface" data-tooth="{glyph.tooth_number}" data-surface="{zone.surface.value}" '
            f'x="{_fmt(x + zone.left * GLYPH_WIDTH)}" y="{_fmt(y + zone.top * GLYPH_HEIGHT)}" '
            f'width="{_fmt((zone.right - zone.left) * GLYPH_WIDTH)}" '
            f'height="{_fmt((zone.bottom - zone.top) * GLYPH_HEIGHT)}" fill="{fill}"{border}>'
            f"<title>{escape(zone.label)}</title></rect>"
        )
    if glyph.display_number is not None:
        text_fill = "#9ca3af" if glyph.label_muted else "#1f2937"
        lines.append(
            f'<text x="{_fmt(x + GLYPH_WIDTH / 2)}" y="{_fmt(y + GLYPH_HEIGHT / 2 + 4)}" '
            f'text-anchor="middle" font-size="11" font-weight="bold" fill="{text_fill}" '
            f'pointer-events="none">{escape(glyph.display_number)}</text>'
        )
    for index, marker in enumerate(glyph.surface_markers):
        lines.append(
            f'<circle cx="{_fmt(x + 3 + index * 6)}" cy="{_fmt(y - 4)}" r="2.5" fill="{marker.color}" '
            f'stroke="#ffffff"><title>{marker.surface.value} - {marker.condition.value}</title></circle>'
        )
    if glyph.indicator_color:
        lines.append(
            f'<circle cx="{_fmt(x + GLYPH_WIDTH)}" cy="{_fmt(y)}" r="4" '
            f'fill="{glyph.indicator_color}" stroke="#ffffff"/>'
        )
    if glyph.mobility_badge:
        lines.append(
            f'<rect x="{_fmt(x - 2)}" y="{_fmt(y + GLYPH_HEIGHT - 4)}" width="16" height="9" rx="2" '
            f'fill="{MOBILITY_FILL}"/>'
        )
        lines.append(
            f'<text x="{_fmt(x + 6)}" y="{_fmt(y + GLYPH_HEIGHT + 3)}" text-anchor="middle" '
            f'font-size="7" fill="#ffffff">{glyph.mobility_badge}</text>'
        )
    lines.append("</g>")
    return lines


def _row_svg(row: ChartRow, y: float, center_x: float, half_width: int) -> list[str]:
    lines = []
    start_right = center_x - MIDLINE_GAP / 2 - half_width
    for index, glyph in enumerate(row.right):
        lines.extend(_glyph_svg(glyph, start_right + index * (GLYPH_WIDTH + GLYPH_GAP), y))
    start_left = center_x + MIDLINE_GAP / 2
    for index, glyph in enumerate(row.left):
        lines.extend(_glyph_svg(glyph, start_left + index * (GLYPH_WIDTH + GLYPH_GAP), y))
    lines.append(
        f'<line x1="{_fmt(center_x)}" y1="{_fmt(y)}" x2="{_fmt(center_x)}" '
        f'y2="{_fmt(y + GLYPH_HEIGHT)}" stroke="{MIDLINE_STROKE}"/>'
    )
    return lines


def render_chart_svg(view: ChartView) -> str:
    half_width = max(_half_width(view.upper), _half_width(view.lower))
    chart_width = 2 * half_width + MIDLINE_GAP
    legend_rows = (len(view.legend) + LEGEND_COLUMNS - 1) // LEGEND_COLUMNS
    width = max(chart_width, LEGEND_COLUMNS * LEGEND_COLUMN_WIDTH) + 2 * MARGIN
    center_x = width / 2

    upper_y = MARGIN + HEADER_HEIGHT
    lower_y = upper_y + GLYPH_HEIGHT + ROW_GAP
    legend_y = lower_y + GLYPH_HEIGHT + ROW_GAP
    height = legend_y + legend_rows * LEGEND_ROW_HEIGHT + MARGIN

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(width)}" height="{_fmt(height)}" '
        f'viewBox="0 0 {_fmt(width)} {_fmt(height)}" font-family="sans-serif">'
    ]
    lines.append(
        f'<text x="{MARGIN}" y="{MARGIN + 4}" font-size="16" font-weight="bold">{escape(view.title)}</text>'
    )
    lines.append(f'<text x="{MARGIN}" y="{MARGIN + 22}" font-size="11" fill="#6b7280">{escape(view.subtitle)}</text>')
    if view.patient is not None:
        banner = (
            f"Patient: {view.patient.patient_name} (Age: {view.patient.age if view.patient.age is not None else 'N/A'})"
            f" | Type: {view.patient.dentition} | Version: {view.patient.version}"
        )
        lines.append(
            f'<text x="{_fmt(width - MARGIN)}" y="{MARGIN + 22}" font-size="10" text-anchor="end" '
            f'fill="#6b7280">{escape(banner)}</text>'
        )

    lines.extend(_row_svg(view.upper, upper_y, center_x, half_width))
    gum_y = upper_y + GLYPH_HEIGHT + ROW_GAP / 2
    lines.append(
        f'<line x1="{_fmt(center_x - half_width)}" y1="{_fmt(gum_y)}" x2="{_fmt(center_x + half_width)}" '
        f'y2="{_fmt(gum_y)}" stroke="{GUMLINE_STROKE}"/>'
    )
    lines.extend(_row_svg(view.lower, lower_y, center_x, half_width))

    for index, entry in enumerate(view.legend):
        column = index % LEGEND_COLUMNS
        row = index // LEGEND_COLUMNS
        x = MARGIN + column * LEGEND_COLUMN_WIDTH
        y = legend_y + row * LEGEND_ROW_HEIGHT
        lines.append(
            f'<rect x="{x}" y="{y}" width="10" height="10" rx="2" fill="{entry.color}" stroke="{entry.color}"/>'
        )
        lines.append(
            f"<text x=\"{x + 14}\" y=\"{y + 9}\" font-size=\"10\" fill=\"#4b5563\" "
            f"data-condition={quoteattr(entry.condition.value)}>{escape(entry.label)}</text>"
        )

    lines.append("</svg>")
    return "\n".join(lines) + "\n"


__all__ = ["render_chart_svg"]
