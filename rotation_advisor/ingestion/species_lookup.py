"""
Species catalogue lookups: fill in what the grower did not type.

A history row or a ``--species`` argument only needs a species id. The
family and nutrient needs come from the species catalogue
(``config/species.json``). Values given explicitly always win; the
catalogue only fills ``None`` fields. Species missing from the catalogue
pass through unchanged.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from rotation_advisor.models.planting import (
    CandidateSpecies,
    PlantingRecord,
    SpeciesReference,
)

logger = logging.getLogger(__name__)

_NEED_FIELDS = ("nitrogen_need", "phosphorus_need", "potassium_need")


def index_species(species: Iterable[SpeciesReference]) -> dict[str, SpeciesReference]:
    """Return ``{species_id: SpeciesReference}``."""
    return {s.id: s for s in species}


def enrich_plantings(
    history: Iterable[PlantingRecord],
    species: Iterable[SpeciesReference],
) -> list[PlantingRecord]:
    """Fill missing ``family_id`` and needs from the species catalogue.

    Args:
        history: Parsed plantings, e.g. from ``parse_history_csv()``.
        species: Species reference data.

    Returns:
        New list in input order; records are copied, never mutated.
    """
    by_id = index_species(species)
    enriched: list[PlantingRecord] = []
    unknown: set[str] = set()

    for planting in history:
        ref = by_id.get(planting.species_id)
        if ref is None:
            unknown.add(planting.species_id)
            enriched.append(planting)
            continue
        update = {
            field: getattr(ref, field)
            for field in ("family_id", *_NEED_FIELDS)
            if getattr(planting, field) is None and getattr(ref, field) is not None
        }
        enriched.append(planting.model_copy(update=update) if update else planting)

    if unknown:
        logger.debug("Species not in catalogue: %s", ", ".join(sorted(unknown)))
    return enriched


def resolve_candidate(
    species_id: str,
    species: Iterable[SpeciesReference],
    family_id: Optional[str] = None,
    nitrogen_need: Optional[int] = None,
) -> CandidateSpecies:
    """Build a ``CandidateSpecies``, taking missing fields from the catalogue.

    Raises:
        pydantic.ValidationError: If the resulting candidate is invalid.
    """
    ref = index_species(species).get(species_id.strip())
    if ref is not None:
        if family_id is None:
            family_id = ref.family_id
        if nitrogen_need is None:
            nitrogen_need = ref.nitrogen_need
    else:
        logger.debug("Candidate species '%s' not in catalogue", species_id)

    return CandidateSpecies(
        species_id=species_id,
        family_id=family_id,
        nitrogen_need=nitrogen_need,
    )
