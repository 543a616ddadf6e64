"""
ASCII terminal formatters for the CLI.

All formatters accept advisory models and return plain multi-line strings
suitable for ``typer.echo()``. No third-party dependencies.

Status badges
-------------
Species verdicts are shown with a fixed-width tag so they line up::

  [OK]       safe
  [CAUTION]  warning
  [BLOCKED]  blocked
"""

from __future__ import annotations

from rotation_advisor.models.advice import RotationAdvice, SpeciesAdvice
from rotation_advisor.models.planting import FamilyReference
from rotation_advisor.taxonomy.rotation_taxonomy import AdviceStatus

_BADGES: dict[AdviceStatus, str] = {
    AdviceStatus.SAFE:    "[OK]",
    AdviceStatus.WARNING: "[CAUTION]",
    AdviceStatus.BLOCKED: "[BLOCKED]",
}


def format_status_badge(status: AdviceStatus) -> str:
    """Return the bracketed tag for a species verdict."""
    return _BADGES[status]


def format_species_advice(advice: SpeciesAdvice) -> str:
    """Format a species verdict as a headline plus indented details."""
    lines = [
        f"  {format_status_badge(advice.status)} {advice.species_id}: {advice.message}"
    ]
    for detail in advice.details:
        lines.append(f"      - {detail}")
    return "\n".join(lines)


def format_rotation_advice(advice: RotationAdvice) -> str:
    """Format the full advisory as an ASCII report.

    Sections: soil estimate, blocked families, recommended families,
    recent history and (when present) species verdict.

    Returns:
        Multi-line string.
    """
    soil = advice.soil_analysis
    lines: list[str] = []
    lines.append("")
    lines.append("=== Rotation Advice ===")
    lines.append(f"  Plot:        {advice.plot_id}")
    lines.append(f"  Target year: {advice.target_year}")

    lines.append("")
    lines.append("  [SOIL]")
    lines.append(
        f"    N: {soil.estimated_n:<9} P: {soil.estimated_p:<9} K: {soil.estimated_k:<9}"
    )
    if soil.last_heavy_feeder is not None:
        hf = soil.last_heavy_feeder
        lines.append(f"    Last heavy feeder: {hf.species_id} ({hf.year})")
    lines.append(f"    {soil.suggestion}")

    lines.append("")
    lines.append("  [BLOCKED]")
    if not advice.blocked_families:
        lines.append("    (none)")
    else:
        lines.append(f"    {'Family':<18}  {'Last':>4}  {'Int.':>4}  {'Left':>4}  {'From':>4}")
        lines.append("    " + "-" * 42)
        for b in advice.blocked_families:
            lines.append(
                f"    {b.family_id:<18}  {b.last_year:>4}  {b.min_interval_years:>4}  "
                f"{b.years_remaining:>4}  {b.eligible_year:>4}"
            )

    lines.append("")
    lines.append("  [RECOMMENDED]")
    if not advice.recommended_families:
        lines.append("    (none)")
    else:
        lines.append(f"    {'Rank':>4}  {'Family':<18}  {'Score':>5}  Reason")
        lines.append("    " + "-" * 60)
        for rank, r in enumerate(advice.recommended_families, start=1):
            lines.append(f"    {rank:>4}  {r.family_id:<18}  {r.score:>5}  {r.reason}")

    lines.append("")
    lines.append("  [RECENT HISTORY]")
    if not advice.recent_history:
        lines.append("    (no plantings recorded)")
    else:
        for p in advice.recent_history:
            need = "-" if p.nitrogen_need is None else f"{p.nitrogen_need}/5"
            lines.append(
                f"    {p.year}  {p.species_id:<20}  {p.family_id or '-':<18}  N {need}"
            )

    if advice.species_advice is not None:
        lines.append("")
        lines.append("  [SPECIES]")
        lines.append(format_species_advice(advice.species_advice))

    return "\n".join(lines)


def format_catalogue_table(families: list[FamilyReference]) -> str:
    """Format the family catalogue as a table."""
    lines = [
        "",
        "=== Family Catalogue ===",
        f"  {'Family':<18}  {'Interval':>8}  {'Colour':<8}  Description",
        "  " + "-" * 70,
    ]
    for f in families:
        lines.append(
            f"  {f.id:<18}  {f.min_interval_years:>7}y  {f.color_hint or '-':<8}  "
            f"{f.description or ''}"
        )
    if not families:
        lines.append("  (empty catalogue)")
    return "\n".join(lines)
