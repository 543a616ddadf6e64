"""
Soil status estimation from recently grown crops.

No soil is measured here. The estimate is a heuristic: crops with a high
nutrient "need" score draw the soil down, light feeders leave it rich.

Window
------
    target_year - soil_lookback_years <= year < target_year

The target year itself is excluded. An empty window is not an error: N, P
and K are all reported ``normal`` with a fixed "no recent history"
suggestion.

Classification (per nutrient, independently)
--------------------------------------------
    mean = average need over the window, missing needs counted as 3
    mean > 4  → depleted
    mean < 2  → enriched
    otherwise → normal

The suggestion text depends on nitrogen only.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from rotation_advisor.config import RotationSettings
from rotation_advisor.models.advice import HeavyFeeder, SoilAnalysis
from rotation_advisor.models.planting import PlantingRecord
from rotation_advisor.taxonomy.rotation_taxonomy import SoilStatus

logger = logging.getLogger(__name__)

NO_HISTORY_SUGGESTION = "No recent history - every crop is possible"


def select_window(
    history: Iterable[PlantingRecord],
    target_year: int,
    lookback_years: int,
) -> list[PlantingRecord]:
    """Return plantings in ``[target_year - lookback_years, target_year)``, input order kept."""
    start = target_year - lookback_years
    return [p for p in history if start <= p.year < target_year]


def classify_need(mean_need: float, settings: RotationSettings) -> SoilStatus:
    """Map a mean nutrient need onto a ``SoilStatus``."""
    if mean_need > settings.depleted_above:
        return SoilStatus.DEPLETED
    if mean_need < settings.enriched_below:
        return SoilStatus.ENRICHED
    return SoilStatus.NORMAL


def find_last_heavy_feeder(
    window: list[PlantingRecord],
    settings: RotationSettings,
) -> Optional[HeavyFeeder]:
    """Most recent planting with ``nitrogen_need >= heavy_feeder_min_need``.

    A missing need never qualifies. On equal years the earliest record in
    the input wins.
    """
    heavy = [
        p for p in window
        if (p.nitrogen_need or 0) >= settings.heavy_feeder_min_need
    ]
    if not heavy:
        return None
    latest = max(heavy, key=lambda p: p.year)
    return HeavyFeeder(year=latest.year, species_id=latest.species_id)


def build_suggestion(estimated_n: SoilStatus, settings: RotationSettings) -> str:
    """One-line guidance keyed on the nitrogen estimate."""
    if estimated_n == SoilStatus.DEPLETED:
        return (
            "Nitrogen-depleted soil - favour legumes "
            f"({settings.nitrogen_fixer_family}) to regenerate it"
        )
    if estimated_n == SoilStatus.ENRICHED:
        feeders = ", ".join(settings.heavy_feeder_families[:2])
        return f"Nitrogen-rich soil - ideal for heavy feeders ({feeders})"
    return "Balanced soil - keep rotations varied"


def estimate_soil_status(
    history: Iterable[PlantingRecord],
    target_year: int,
    settings: Optional[RotationSettings] = None,
) -> SoilAnalysis:
    """Estimate N/P/K status of a plot for ``target_year``.

    Args:
        history:     Full planting history of the plot (any order).
        target_year: Season being planned.
        settings:    Heuristic constants; defaults to ``RotationSettings()``.

    Returns:
        ``SoilAnalysis`` for the plot.
    """
    settings = settings or RotationSettings()
    window = select_window(history, target_year, settings.soil_lookback_years)

    if not window:
        return SoilAnalysis(
            estimated_n=SoilStatus.NORMAL,
            estimated_p=SoilStatus.NORMAL,
            estimated_k=SoilStatus.NORMAL,
            last_heavy_feeder=None,
            suggestion=NO_HISTORY_SUGGESTION,
        )

    neutral = settings.neutral_nutrient_need
    count = len(window)
    avg_n = sum(_need(p.nitrogen_need, neutral) for p in window) / count
    avg_p = sum(_need(p.phosphorus_need, neutral) for p in window) / count
    avg_k = sum(_need(p.potassium_need, neutral) for p in window) / count

    estimated_n = classify_need(avg_n, settings)
    logger.debug(
        "Soil window %d-%d: %d plantings, mean N=%.2f P=%.2f K=%.2f",
        target_year - settings.soil_lookback_years, target_year - 1,
        count, avg_n, avg_p, avg_k,
    )

    return SoilAnalysis(
        estimated_n=estimated_n,
        estimated_p=classify_need(avg_p, settings),
        estimated_k=classify_need(avg_k, settings),
        last_heavy_feeder=find_last_heavy_feeder(window, settings),
        suggestion=build_suggestion(estimated_n, settings),
    )


# ── Helper ────────────────────────────────────────────────────────────────────

def _need(value: Optional[int], neutral: int) -> int:
    return neutral if value is None else value
