"""
Species advice: classifies one candidate species for the target year.

Rules (evaluated in order, first match wins):
    1. BLOCKED : the species' family is in the blocked list
    2. WARNING : nitrogen_need >= 4 AND soil N depleted
    3. SAFE    : everything else

A missing ``nitrogen_need`` counts as 0 for rules 2 and 3, so an unknown
species is never flagged as a heavy feeder.
"""

from __future__ import annotations

from typing import Iterable, Optional

from rotation_advisor.config import RotationSettings
from rotation_advisor.models.advice import BlockedFamily, SoilAnalysis, SpeciesAdvice
from rotation_advisor.models.planting import CandidateSpecies
from rotation_advisor.taxonomy.rotation_taxonomy import AdviceStatus, SoilStatus


def advise_species(
    candidate: CandidateSpecies,
    blocked: Iterable[BlockedFamily],
    soil: SoilAnalysis,
    settings: Optional[RotationSettings] = None,
) -> SpeciesAdvice:
    """Classify ``candidate`` as safe, warning or blocked.

    Args:
        candidate: Species to check.
        blocked:   Output of ``compute_blocked_families()``.
        soil:      Output of ``estimate_soil_status()``.
        settings:  Heuristic constants; defaults to ``RotationSettings()``.

    Returns:
        ``SpeciesAdvice`` with a status, a headline message and detail lines.
    """
    settings = settings or RotationSettings()
    need = candidate.nitrogen_need or 0
    is_heavy_feeder = need >= settings.heavy_feeder_min_need

    blocked_family = None
    if candidate.family_id is not None:
        blocked_family = next(
            (b for b in blocked if b.family_id == candidate.family_id), None
        )

    if blocked_family is not None:
        return SpeciesAdvice(
            species_id=candidate.species_id,
            family_id=candidate.family_id,
            status=AdviceStatus.BLOCKED,
            message=f"Rotation not respected for {blocked_family.family_id}",
            details=[
                f"Last {blocked_family.family_id} crop in {blocked_family.last_year}",
                f"Required interval: {blocked_family.min_interval_years} years",
                f"Wait until {blocked_family.eligible_year}",
            ],
        )

    if is_heavy_feeder and soil.estimated_n == SoilStatus.DEPLETED:
        return SpeciesAdvice(
            species_id=candidate.species_id,
            family_id=candidate.family_id,
            status=AdviceStatus.WARNING,
            message="Heavy feeder on depleted soil",
            details=[
                f"{candidate.species_id} has a high nitrogen need ({candidate.nitrogen_need}/5)",
                "Soil is estimated to be nitrogen-depleted",
                "Consider fertilising or growing a legume cover crop first",
            ],
        )

    details = ["Rotation respected"]
    if candidate.family_id is not None:
        details.append(f"Family: {candidate.family_id}")
    if soil.estimated_n == SoilStatus.ENRICHED and is_heavy_feeder:
        details.append("Nitrogen-rich soil - ideal conditions")

    return SpeciesAdvice(
        species_id=candidate.species_id,
        family_id=candidate.family_id,
        status=AdviceStatus.SAFE,
        message="Recommended crop",
        details=details,
    )
