"""
Export helpers for rotation advice.

``advice_to_dict()`` is the JSON payload shape an HTTP handler returns to
the planner UI: camelCase keys, enum values as plain strings, and
``speciesAdvice`` omitted entirely when no species was checked.

All ``export_*`` functions write to disk and return the written ``Path``.
CSV exports are flat (one row per family) so they load directly in a
spreadsheet.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from rotation_advisor.models.advice import RotationAdvice


def advice_to_dict(advice: RotationAdvice) -> dict[str, Any]:
    """Serialise ``advice`` to a JSON-ready camelCase dict."""
    soil = advice.soil_analysis
    heavy = soil.last_heavy_feeder

    payload: dict[str, Any] = {
        "plotId": advice.plot_id,
        "targetYear": advice.target_year,
        "recentHistory": [
            {
                "year": r.year,
                "familyId": r.family_id,
                "speciesId": r.species_id,
                "nitrogenNeed": r.nitrogen_need,
            }
            for r in advice.recent_history
        ],
        "blockedFamilies": [
            {
                "familyId": b.family_id,
                "colorHint": b.color_hint,
                "lastYear": b.last_year,
                "minIntervalYears": b.min_interval_years,
                "yearsRemaining": b.years_remaining,
                "eligibleYear": b.eligible_year,
                "reason": b.reason,
            }
            for b in advice.blocked_families
        ],
        "recommendedFamilies": [
            {
                "familyId": r.family_id,
                "colorHint": r.color_hint,
                "reason": r.reason,
                "score": r.score,
            }
            for r in advice.recommended_families
        ],
        "soilAnalysis": {
            "estimatedN": str(soil.estimated_n),
            "estimatedP": str(soil.estimated_p),
            "estimatedK": str(soil.estimated_k),
            "lastHeavyFeeder": (
                {"year": heavy.year, "speciesId": heavy.species_id} if heavy else None
            ),
            "suggestion": soil.suggestion,
        },
    }

    if advice.species_advice is not None:
        sa = advice.species_advice
        payload["speciesAdvice"] = {
            "speciesId": sa.species_id,
            "familyId": sa.family_id,
            "status": str(sa.status),
            "message": sa.message,
            "details": list(sa.details),
        }

    return payload


def flatten_advice_for_export(advice: RotationAdvice) -> list[dict]:
    """One flat row per blocked or recommended family.

    Columns: ``plot_id``, ``target_year``, ``family_id``, ``state``
    (``"blocked"`` / ``"recommended"``), ``rank``, ``score``,
    ``years_remaining``, ``eligible_year``, ``reason``.
    """
    rows: list[dict] = []
    for b in advice.blocked_families:
        rows.append({
            "plot_id":         advice.plot_id,
            "target_year":     advice.target_year,
            "family_id":       b.family_id,
            "state":           "blocked",
            "rank":            "",
            "score":           "",
            "years_remaining": b.years_remaining,
            "eligible_year":   b.eligible_year,
            "reason":          b.reason,
        })
    for rank, r in enumerate(advice.recommended_families, start=1):
        rows.append({
            "plot_id":         advice.plot_id,
            "target_year":     advice.target_year,
            "family_id":       r.family_id,
            "state":           "recommended",
            "rank":            rank,
            "score":           r.score,
            "years_remaining": "",
            "eligible_year":   "",
            "reason":          r.reason,
        })
    return rows


EXPORT_CSV_FIELDS = [
    "plot_id", "target_year", "family_id", "state", "rank", "score",
    "years_remaining", "eligible_year", "reason",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed UTF-8 JSON file.

    Args:
        data: Dict or list to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=2, default=str, ensure_ascii=False), encoding="utf-8"
    )
    return path
