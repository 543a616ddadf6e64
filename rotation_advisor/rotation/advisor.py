"""
Rotation advisory entry point: composes soil, blocking, recommendation and
species advice into a single ``RotationAdvice``.

Usage flow
----------
1. estimate_soil_status(history, target_year)          -> SoilAnalysis
2. compute_blocked_families(history, catalogue, year)  -> list[BlockedFamily]
3. recommend_families(..., blocked, soil, year)        -> list[RecommendedFamily]
4. advise_species(candidate, blocked, soil)            -> SpeciesAdvice (optional)

Each step only consumes outputs of earlier steps. The call holds no state
between invocations and may run concurrently from any number of threads.
"""

from __future__ import annotations

import logging
from typing import Optional

from rotation_advisor.config import RotationSettings
from rotation_advisor.models.advice import RotationAdvice
from rotation_advisor.models.planting import RotationRequest
from rotation_advisor.rotation.blocking import compute_blocked_families
from rotation_advisor.rotation.history import recent_plantings
from rotation_advisor.rotation.recommender import recommend_families
from rotation_advisor.rotation.soil import estimate_soil_status
from rotation_advisor.rotation.species import advise_species

logger = logging.getLogger(__name__)


def calculate_rotation_advice(
    request: RotationRequest,
    settings: Optional[RotationSettings] = None,
) -> RotationAdvice:
    """Produce the full rotation advisory for one plot and target year.

    Args:
        request:  Plot id, target year, history, catalogue and optional
                  candidate species.
        settings: Heuristic constants; defaults to ``RotationSettings()``.

    Returns:
        ``RotationAdvice``. ``species_advice`` is ``None`` unless
        ``request.candidate_species`` was set.
    """
    settings = settings or RotationSettings()
    history = request.planting_history
    catalogue = request.family_catalogue
    target_year = request.target_year

    soil = estimate_soil_status(history, target_year, settings)
    blocked = compute_blocked_families(history, catalogue, target_year, settings)
    recommended = recommend_families(
        history, catalogue, blocked, soil, target_year, settings
    )

    species_advice = None
    if request.candidate_species is not None:
        species_advice = advise_species(
            request.candidate_species, blocked, soil, settings
        )

    advice = RotationAdvice(
        plot_id=request.plot_id,
        target_year=target_year,
        recent_history=recent_plantings(
            history, target_year, settings.recent_history_years
        ),
        blocked_families=blocked,
        recommended_families=recommended,
        soil_analysis=soil,
        species_advice=species_advice,
    )

    logger.info(
        "Rotation advice | plot=%s | year=%d | history=%d | blocked=%d | "
        "recommended=%d | soil_n=%s%s",
        request.plot_id, target_year, len(history), len(blocked),
        len(recommended), soil.estimated_n,
        f" | species={species_advice.species_id}:{species_advice.status}"
        if species_advice else "",
    )
    return advice
