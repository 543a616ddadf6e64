"""
Family recommendation: ranks the families that may go onto a plot.

Rules (applied in order; a family is scored at most once)
---------------------------------------------------------
1. Nitrogen fixer first:
       soil N depleted AND "Fabacées" not blocked
       → insert it at score 95, even if absent from the catalogue.

2. Every other catalogue family that is not blocked:
       years_since_use = target_year - last_used     (100 if never used)
       score           = min(100, years_since_use * 15)
   Never used          → score 80, reason "Never used on this plot".
   years_since_use >= 5 → reason "Not used for N years".
   otherwise           → reason "Last used in YYYY".

3. Rich-soil bonus:
       soil N enriched AND family in the heavy-feeder set
       → score + 10 (capped at 100), reason gets " - rich soil, ideal".

Scores are clamped to [0, 100]. They rank families; they are not
probabilities.

Ordering: score descending, ties broken by ``family_id`` ascending.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from rotation_advisor.config import RotationSettings
from rotation_advisor.models.advice import BlockedFamily, RecommendedFamily, SoilAnalysis
from rotation_advisor.models.planting import FamilyReference, PlantingRecord
from rotation_advisor.rotation.history import latest_year_by_family
from rotation_advisor.taxonomy.rotation_taxonomy import SoilStatus

logger = logging.getLogger(__name__)

NITROGEN_FIXER_REASON = "Fixes nitrogen - ideal after heavy feeders"
NEVER_USED_REASON = "Never used on this plot"
RICH_SOIL_NOTE = " - rich soil, ideal"


def score_family(
    family_id: str,
    last_used: Optional[int],
    target_year: int,
    soil: SoilAnalysis,
    settings: RotationSettings,
) -> tuple[int, str]:
    """Score one non-blocked family.

    Args:
        family_id:   Family being scored.
        last_used:   Most recent year on this plot, or ``None`` if never.
        target_year: Season being planned.
        soil:        Soil estimate for the plot.
        settings:    Heuristic constants.

    Returns:
        ``(score, reason)`` with score in [0, 100].
    """
    if last_used is None:
        score = settings.never_used_score
        reason = NEVER_USED_REASON
    else:
        years_since_use = target_year - last_used
        score = min(100, years_since_use * settings.years_since_use_weight)
        if years_since_use >= settings.long_rest_years:
            reason = f"Not used for {years_since_use} years"
        else:
            reason = f"Last used in {last_used}"

    if (
        soil.estimated_n == SoilStatus.ENRICHED
        and family_id in settings.heavy_feeder_families
    ):
        score = min(100, score + settings.rich_soil_bonus)
        reason += RICH_SOIL_NOTE

    return _clamp(score, 0, 100), reason


def recommend_families(
    history: Iterable[PlantingRecord],
    catalogue: Iterable[FamilyReference],
    blocked: Iterable[BlockedFamily],
    soil: SoilAnalysis,
    target_year: int,
    settings: Optional[RotationSettings] = None,
) -> list[RecommendedFamily]:
    """Rank every family that is allowed on the plot in ``target_year``.

    Args:
        history:     Full planting history of the plot.
        catalogue:   Botanical family reference data.
        blocked:     Output of ``compute_blocked_families()``.
        soil:        Output of ``estimate_soil_status()``.
        target_year: Season being planned.
        settings:    Heuristic constants; defaults to ``RotationSettings()``.

    Returns:
        ``RecommendedFamily`` list, best first. Never contains a blocked family.
    """
    settings = settings or RotationSettings()
    catalogue = list(catalogue)
    blocked_ids = {b.family_id for b in blocked}
    last_used_by_family = latest_year_by_family(history)

    recommended: list[RecommendedFamily] = []
    seen: set[str] = set()

    fixer = settings.nitrogen_fixer_family
    if soil.estimated_n == SoilStatus.DEPLETED and fixer not in blocked_ids:
        fixer_ref = next((f for f in catalogue if f.id == fixer), None)
        color = fixer_ref.color_hint if fixer_ref else None
        recommended.append(
            RecommendedFamily(
                family_id=fixer,
                color_hint=color or settings.nitrogen_fixer_color,
                reason=NITROGEN_FIXER_REASON,
                score=settings.nitrogen_fixer_score,
            )
        )
        seen.add(fixer)

    for family in catalogue:
        if family.id in blocked_ids or family.id in seen:
            continue

        score, reason = score_family(
            family_id=family.id,
            last_used=last_used_by_family.get(family.id),
            target_year=target_year,
            soil=soil,
            settings=settings,
        )
        recommended.append(
            RecommendedFamily(
                family_id=family.id,
                color_hint=family.color_hint,
                reason=reason,
                score=score,
            )
        )
        seen.add(family.id)

    logger.debug(
        "Recommended %d families (%d blocked) for %d",
        len(recommended), len(blocked_ids), target_year,
    )
    return sorted(recommended, key=lambda r: (-r.score, r.family_id))


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))
