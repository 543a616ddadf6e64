"""
Input models for the rotation advisory engine.

``PlantingRecord`` is one crop that occupied a plot in a given year.
``FamilyReference`` is one entry of the botanical family catalogue with its
mandatory rotation interval. ``SpeciesReference`` is one entry of the species
catalogue with its family and default nutrient needs. ``CandidateSpecies`` is
the optional species a grower wants checked. ``RotationRequest`` bundles them
into the single argument the engine accepts.

All models are frozen: history and reference data are supplied by the
caller's storage layer and are never mutated by the engine. Structurally
invalid records (negative years, needs outside the 0–5 scale) are rejected
here with a ``pydantic.ValidationError`` before any computation starts.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

NEED_SCALE_MIN = 0
NEED_SCALE_MAX = 5


def _check_need(v: Optional[int]) -> Optional[int]:
    if v is not None and not NEED_SCALE_MIN <= v <= NEED_SCALE_MAX:
        raise ValueError(
            f"nutrient need must be in [{NEED_SCALE_MIN}, {NEED_SCALE_MAX}], got {v}."
        )
    return v


def _check_id(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("identifier must not be empty.")
    return v.strip()


class PlantingRecord(BaseModel):
    """One historical crop on a plot.

    Attributes:
        year: Season the crop occupied the plot.
        species_id: Species identifier, e.g. ``"Tomate"``.
        family_id: Botanical family id, or ``None`` for unclassified species
            (green manures such as phacelia have no family in the catalogue).
        nitrogen_need: Nitrogen demand on the 0–5 scale, ``None`` if unknown.
        phosphorus_need: Phosphorus demand on the 0–5 scale, ``None`` if unknown.
        potassium_need: Potassium demand on the 0–5 scale, ``None`` if unknown.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    species_id: str
    family_id: Optional[str] = None
    nitrogen_need: Optional[int] = None
    phosphorus_need: Optional[int] = None
    potassium_need: Optional[int] = None

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"year must be non-negative, got {v}.")
        return v

    @field_validator("species_id")
    @classmethod
    def validate_species_id(cls, v: str) -> str:
        return _check_id(v)

    @field_validator("family_id")
    @classmethod
    def validate_family_id(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("nitrogen_need", "phosphorus_need", "potassium_need")
    @classmethod
    def validate_need(cls, v: Optional[int]) -> Optional[int]:
        return _check_need(v)


class FamilyReference(BaseModel):
    """A botanical family and its minimum rotation interval.

    Attributes:
        id: Family identifier, e.g. ``"Solanacées"``.
        min_interval_years: Years that must pass before the family may
            return to the same plot.
        color_hint: Display colour for UIs (hex string), or ``None``.
        description: Free-form note, e.g. example crops.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    min_interval_years: int
    color_hint: Optional[str] = None
    description: Optional[str] = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        return _check_id(v)

    @field_validator("min_interval_years")
    @classmethod
    def validate_interval(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"min_interval_years must be non-negative, got {v}.")
        return v


class SpeciesReference(BaseModel):
    """A species from the reference catalogue with its default needs.

    Used to fill in what a history row or a ``--species`` lookup leaves out:
    the grower names the crop, the catalogue supplies family and needs.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    family_id: Optional[str] = None
    nitrogen_need: Optional[int] = None
    phosphorus_need: Optional[int] = None
    potassium_need: Optional[int] = None
    color_hint: Optional[str] = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        return _check_id(v)

    @field_validator("family_id")
    @classmethod
    def validate_family_id(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("nitrogen_need", "phosphorus_need", "potassium_need")
    @classmethod
    def validate_need(cls, v: Optional[int]) -> Optional[int]:
        return _check_need(v)


class CandidateSpecies(BaseModel):
    """A species the caller wants classified for the target year."""

    model_config = ConfigDict(frozen=True)

    species_id: str
    family_id: Optional[str] = None
    nitrogen_need: Optional[int] = None

    @field_validator("species_id")
    @classmethod
    def validate_species_id(cls, v: str) -> str:
        return _check_id(v)

    @field_validator("family_id")
    @classmethod
    def validate_family_id(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("nitrogen_need")
    @classmethod
    def validate_need(cls, v: Optional[int]) -> Optional[int]:
        return _check_need(v)


class RotationRequest(BaseModel):
    """Everything the engine needs for one (plot, target year) advisory.

    Attributes:
        plot_id: Plot (garden bed / field) identifier, echoed in the result.
        target_year: Season being planned.
        planting_history: Every known planting on this plot, any order.
        family_catalogue: Global botanical family reference data.
        candidate_species: Optional species to classify.
    """

    model_config = ConfigDict(frozen=True)

    plot_id: str
    target_year: int
    planting_history: list[PlantingRecord] = []
    family_catalogue: list[FamilyReference] = []
    candidate_species: Optional[CandidateSpecies] = None

    @field_validator("plot_id")
    @classmethod
    def validate_plot_id(cls, v: str) -> str:
        return _check_id(v)

    @field_validator("target_year")
    @classmethod
    def validate_target_year(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"target_year must be non-negative, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_unique_families(self) -> "RotationRequest":
        seen: set[str] = set()
        for family in self.family_catalogue:
            if family.id in seen:
                raise ValueError(f"Duplicate family id in catalogue: '{family.id}'.")
            seen.add(family.id)
        return self
