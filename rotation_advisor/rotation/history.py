"""
Planting-history reductions shared by the rotation modules.

All helpers are plain group-by passes over the caller's records into
``dict`` lookups keyed by family id. Records without a ``family_id`` are
ignored by the family reductions.
"""

from __future__ import annotations

from typing import Iterable

from rotation_advisor.models.advice import RecentPlanting
from rotation_advisor.models.planting import PlantingRecord


def latest_year_by_family(history: Iterable[PlantingRecord]) -> dict[str, int]:
    """Return ``{family_id: most recent year planted}``."""
    latest: dict[str, int] = {}
    for planting in history:
        family_id = planting.family_id
        if family_id is None:
            continue
        existing = latest.get(family_id)
        if existing is None or planting.year > existing:
            latest[family_id] = planting.year
    return latest


def recent_plantings(
    history: Iterable[PlantingRecord],
    target_year: int,
    years: int,
) -> list[RecentPlanting]:
    """Project plantings with ``year >= target_year - years``, newest first.

    The sort is stable: plantings from the same year keep their input order.
    Plantings after ``target_year`` are kept; the lower bound is the only
    filter.
    """
    since = target_year - years
    projected = [
        RecentPlanting(
            year=p.year,
            family_id=p.family_id,
            species_id=p.species_id,
            nitrogen_need=p.nitrogen_need,
        )
        for p in history
        if p.year >= since
    ]
    return sorted(projected, key=lambda r: -r.year)
