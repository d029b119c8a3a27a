"""
Plain-text rendering of audit results and submission history.
"""
import textwrap
from typing import List

from .models import AuditEntry, AuditResult

REPORT_WIDTH = 72

# Lower bounds of each band; matches the red/amber/green score colors
SCORE_BANDS = [
    (75, "good"),
    (40, "fair"),
    (0, "poor"),
]


def score_band(score: int) -> str:
    """Map a 0-100 score to "poor", "fair" or "good"."""
    for minimum, band in SCORE_BANDS:
        if score >= minimum:
            return band
    return "poor"


def _wrap(text: str, indent: str) -> List[str]:
    return textwrap.wrap(text, width=REPORT_WIDTH, initial_indent=indent, subsequent_indent=indent) or [indent]


def render_audit_report(result: AuditResult, business_name: str) -> str:
    lines = []
    lines.append("=" * REPORT_WIDTH)
    lines.append("GOOGLE BUSINESS PROFILE AUDIT")
    lines.append(f"Prepared for: {business_name}")
    lines.append("=" * REPORT_WIDTH)
    lines.append("")
    lines.append(f"OVERALL SCORE: {result.overall_score}/100 ({score_band(result.overall_score)})")

    lines.append("")
    lines.append("AUDIT BREAKDOWN")
    lines.append("-" * 30)
    for item in result.audit_breakdown:
        lines.append(f"  [{item.score:>3}] {item.category} ({score_band(item.score)})")
        lines.extend(_wrap(item.comment, "        "))

    lines.append("")
    lines.append("RECOMMENDATIONS")
    lines.append("-" * 30)
    for i, rec in enumerate(result.recommendations, 1):
        lines.append(f"  {i}. {rec.title}")
        lines.extend(_wrap(rec.description, "     "))

    lines.append("")
    return "\n".join(lines)


def render_history(entries: List[AuditEntry]) -> str:
    if not entries:
        return "No audit history. Perform an audit to see data here."

    headers = ["Timestamp", "Email", "Business Name", "Location", "Phone Number"]
    rows = [
        [
            entry.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
            entry.email,
            entry.business_name,
            entry.location,
            entry.phone_number or "",
        ]
        for entry in entries
    ]
    widths = [max(len(row[i]) for row in [headers] + rows) for i in range(len(headers))]

    def fmt(row):
        return "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()

    lines = [fmt(headers), fmt(["-" * w for w in widths])]
    lines.extend(fmt(row) for row in rows)
    return "\n".join(lines)
