"""
Family blocking: which botanical families are still resting on a plot.

For each family ever planted on the plot, only the most recent planting
matters::

    years_remaining = last_year + interval - target_year

A family is blocked iff ``years_remaining > 0``. The interval comes from the
catalogue; families missing from it fall back to
``RotationSettings.default_interval_years`` (4).

Ordering: most restricted first (``years_remaining`` descending), ties
broken by ``family_id`` ascending so the output is deterministic.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from rotation_advisor.config import RotationSettings
from rotation_advisor.models.advice import BlockedFamily
from rotation_advisor.models.planting import FamilyReference, PlantingRecord
from rotation_advisor.rotation.history import latest_year_by_family

logger = logging.getLogger(__name__)


def compute_blocked_families(
    history: Iterable[PlantingRecord],
    catalogue: Iterable[FamilyReference],
    target_year: int,
    settings: Optional[RotationSettings] = None,
) -> list[BlockedFamily]:
    """Return the families that may not be planted in ``target_year``.

    Args:
        history:     Full, unwindowed planting history of the plot.
        catalogue:   Botanical family reference data.
        target_year: Season being planned.
        settings:    Heuristic constants; defaults to ``RotationSettings()``.

    Returns:
        ``BlockedFamily`` list, most restricted first.
    """
    settings = settings or RotationSettings()
    families = {f.id: f for f in catalogue}

    blocked: list[BlockedFamily] = []
    for family_id, last_year in latest_year_by_family(history).items():
        reference = families.get(family_id)
        if reference is None:
            interval = settings.default_interval_years
            logger.debug(
                "Family '%s' not in catalogue, using fallback interval %d",
                family_id, interval,
            )
        else:
            interval = reference.min_interval_years

        eligible_year = last_year + interval
        years_remaining = eligible_year - target_year
        if years_remaining <= 0:
            continue

        blocked.append(
            BlockedFamily(
                family_id=family_id,
                color_hint=reference.color_hint if reference else None,
                last_year=last_year,
                min_interval_years=interval,
                years_remaining=years_remaining,
                eligible_year=eligible_year,
                reason=f"{family_id} planted in {last_year}, wait until {eligible_year}",
            )
        )

    return sorted(blocked, key=lambda b: (-b.years_remaining, b.family_id))
