"""
Output models produced by the rotation advisory engine.

Every model here is derived data: recomputed from caller-supplied history
on each call and never persisted by the engine. ``RotationAdvice`` is the
aggregate that leaves the engine; the others are its parts.

Invariants enforced at construction:
  - ``BlockedFamily.years_remaining > 0`` and
    ``eligible_year == last_year + min_interval_years``.
  - ``RecommendedFamily.score`` is in [0, 100].
  - A family never appears both blocked and recommended in one
    ``RotationAdvice``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from rotation_advisor.taxonomy.rotation_taxonomy import AdviceStatus, SoilStatus


class HeavyFeeder(BaseModel):
    """Most recent nitrogen-hungry planting inside the soil lookback window."""

    model_config = ConfigDict(frozen=True)

    year: int
    species_id: str


class SoilAnalysis(BaseModel):
    """Heuristic N/P/K estimate for a plot.

    Attributes:
        estimated_n: Nitrogen status.
        estimated_p: Phosphorus status.
        estimated_k: Potassium status.
        last_heavy_feeder: Latest heavy feeder in the window, or ``None``.
        suggestion: One-line guidance driven by ``estimated_n`` alone.
    """

    model_config = ConfigDict(frozen=True)

    estimated_n: SoilStatus
    estimated_p: SoilStatus
    estimated_k: SoilStatus
    last_heavy_feeder: Optional[HeavyFeeder] = None
    suggestion: str


class BlockedFamily(BaseModel):
    """A family still inside its mandatory rest interval for the target year.

    Attributes:
        family_id: Botanical family id.
        color_hint: Display colour from the catalogue, or ``None``.
        last_year: Most recent year the family occupied the plot.
        min_interval_years: Interval applied (catalogue value or fallback).
        years_remaining: ``last_year + min_interval_years - target_year``.
        eligible_year: First year the family may return.
        reason: Human-readable explanation.
    """

    model_config = ConfigDict(frozen=True)

    family_id: str
    color_hint: Optional[str] = None
    last_year: int
    min_interval_years: int
    years_remaining: int
    eligible_year: int
    reason: str

    @model_validator(mode="after")
    def validate_interval_arithmetic(self) -> "BlockedFamily":
        if self.years_remaining <= 0:
            raise ValueError(
                f"years_remaining must be > 0 for a blocked family, got {self.years_remaining}."
            )
        if self.eligible_year != self.last_year + self.min_interval_years:
            raise ValueError(
                f"eligible_year ({self.eligible_year}) must equal last_year + "
                f"min_interval_years ({self.last_year + self.min_interval_years})."
            )
        return self


class RecommendedFamily(BaseModel):
    """A family that may be planted, with an advisory rank score."""

    model_config = ConfigDict(frozen=True)

    family_id: str
    color_hint: Optional[str] = None
    reason: str
    score: int

    @field_validator("score")
    @classmethod
    def validate_score_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"score must be in [0, 100], got {v}.")
        return v

    @field_validator("reason")
    @classmethod
    def validate_reason_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("reason must not be empty.")
        return v.strip()


class SpeciesAdvice(BaseModel):
    """Verdict for one candidate species."""

    model_config = ConfigDict(frozen=True)

    species_id: str
    family_id: Optional[str] = None
    status: AdviceStatus
    message: str
    details: list[str] = []


class RecentPlanting(BaseModel):
    """Display projection of a planting from the last few seasons."""

    model_config = ConfigDict(frozen=True)

    year: int
    family_id: Optional[str] = None
    species_id: str
    nitrogen_need: Optional[int] = None


class RotationAdvice(BaseModel):
    """Full advisory result for one (plot, target year) pair.

    ``species_advice`` is ``None`` when the caller did not ask about a
    specific species.
    """

    model_config = ConfigDict(frozen=True)

    plot_id: str
    target_year: int
    recent_history: list[RecentPlanting] = []
    blocked_families: list[BlockedFamily] = []
    recommended_families: list[RecommendedFamily] = []
    soil_analysis: SoilAnalysis
    species_advice: Optional[SpeciesAdvice] = None

    @model_validator(mode="after")
    def validate_disjoint_families(self) -> "RotationAdvice":
        blocked = {b.family_id for b in self.blocked_families}
        overlap = blocked.intersection(r.family_id for r in self.recommended_families)
        if overlap:
            raise ValueError(
                f"Families cannot be both blocked and recommended: {sorted(overlap)}."
            )
        return self

    @property
    def blocked_family_ids(self) -> frozenset[str]:
        """Ids of all blocked families."""
        return frozenset(b.family_id for b in self.blocked_families)
