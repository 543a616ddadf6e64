from rotation_advisor.models.advice import (
    BlockedFamily,
    HeavyFeeder,
    RecentPlanting,
    RecommendedFamily,
    RotationAdvice,
    SoilAnalysis,
    SpeciesAdvice,
)
from rotation_advisor.models.planting import (
    CandidateSpecies,
    FamilyReference,
    PlantingRecord,
    RotationRequest,
    SpeciesReference,
)

__all__ = [
    "BlockedFamily",
    "CandidateSpecies",
    "FamilyReference",
    "HeavyFeeder",
    "PlantingRecord",
    "RecentPlanting",
    "RecommendedFamily",
    "RotationAdvice",
    "RotationRequest",
    "SoilAnalysis",
    "SpeciesAdvice",
    "SpeciesReference",
]
