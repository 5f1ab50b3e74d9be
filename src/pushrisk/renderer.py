"""Markdown renderer for push risk summaries.

Produces a compact GitHub/Slack-flavored markdown block with:
  - Impact badge (color-coded)
  - Risk flags and change types
  - Hotspot files in review order, with the flags each one raised
  - Explanations
"""

from __future__ import annotations

from pushrisk.engine.risk import matches_flag
from pushrisk.models import ScoreResponse, severity_for_score


def render_push_summary(response: ScoreResponse, title: str = "") -> str:
    """Render a scoring result as markdown."""
    sections: list[str] = []

    sections.append(f"## Push Impact{': ' + title if title else ''}")
    sections.append("")

    emoji, label = _impact_badge(response.impact_score)
    flags = ", ".join(f"`{f.value}`" for f in response.risk_flags) or "none"
    tags = ", ".join(t.value for t in response.change_type_tags) or "none"

    sections.append("| Impact | Risk Flags | Change Type |")
    sections.append("|:---:|:---|:---|")
    sections.append(
        f"| {emoji} **{label}** ({response.impact_score}/100) | {flags} | {tags} |"
    )
    sections.append("")

    if response.hotspot_files:
        sections.append("### Hotspots")
        sections.append("")
        sections.extend(_render_hotspots(response))
        sections.append("")

    if response.explanations:
        sections.append("### Why")
        sections.append("")
        for line in response.explanations:
            sections.append(f"- {line}")
        sections.append("")

    return "\n".join(sections)


def _impact_badge(score: int) -> tuple[str, str]:
    """Return (emoji, label) for an impact score."""
    severity = severity_for_score(score)
    if severity == "critical":
        return ("🔴", "CRITICAL")
    if severity == "error":
        return ("🟠", "ELEVATED")
    if score >= 10:
        return ("🟡", "LOW")
    return ("🟢", "MINIMAL")


def _render_hotspots(response: ScoreResponse) -> list[str]:
    """Numbered hotspot list, most severe first, tagged with the flags each path raised."""
    lines: list[str] = []
    for rank, path in enumerate(response.hotspot_files, 1):
        hits = [f.value for f in response.risk_flags if matches_flag(f, path)]
        suffix = f" ({', '.join(hits)})" if hits else ""
        lines.append(f"{rank}. `{path}`{suffix}")
    return lines
