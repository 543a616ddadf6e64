"""
Tests for rotation_advisor/models/planting.py.

What we test
------------
PlantingRecord:
  - Valid records construct; identifiers are stripped.
  - Negative year and out-of-scale needs are rejected.
  - Blank family_id becomes None.
  - Frozen.

FamilyReference:
  - Negative interval and empty id are rejected.

RotationRequest:
  - Defaults to empty history/catalogue and no candidate.
  - Duplicate family ids in the catalogue are rejected.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rotation_advisor.models.planting import (
    CandidateSpecies,
    FamilyReference,
    PlantingRecord,
    RotationRequest,
)


class TestPlantingRecord:
    def test_valid(self):
        p = PlantingRecord(
            year=2022, species_id=" Tomate ", family_id="Solanacées",
            nitrogen_need=5, phosphorus_need=0, potassium_need=3,
        )
        assert p.species_id == "Tomate"
        assert p.nitrogen_need == 5

    def test_negative_year_rejected(self):
        with pytest.raises(ValidationError, match="year must be non-negative"):
            PlantingRecord(year=-1, species_id="Tomate")

    @pytest.mark.parametrize("field", ["nitrogen_need", "phosphorus_need", "potassium_need"])
    @pytest.mark.parametrize("value", [-1, 6])
    def test_need_out_of_scale_rejected(self, field, value):
        with pytest.raises(ValidationError, match="nutrient need"):
            PlantingRecord(year=2022, species_id="Tomate", **{field: value})

    def test_empty_species_rejected(self):
        with pytest.raises(ValidationError):
            PlantingRecord(year=2022, species_id="   ")

    def test_blank_family_is_none(self):
        assert PlantingRecord(year=2022, species_id="Phacélie", family_id="  ").family_id is None

    def test_frozen(self):
        p = PlantingRecord(year=2022, species_id="Tomate")
        with pytest.raises(ValidationError):
            p.year = 2023


class TestFamilyReference:
    def test_negative_interval_rejected(self):
        with pytest.raises(ValidationError, match="min_interval_years"):
            FamilyReference(id="Solanacées", min_interval_years=-1)

    def test_zero_interval_allowed(self):
        assert FamilyReference(id="Engrais verts", min_interval_years=0).min_interval_years == 0

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            FamilyReference(id="", min_interval_years=3)


class TestCandidateSpecies:
    def test_need_checked(self):
        with pytest.raises(ValidationError):
            CandidateSpecies(species_id="Tomate", nitrogen_need=9)

    def test_family_optional(self):
        assert CandidateSpecies(species_id="Phacélie").family_id is None


class TestRotationRequest:
    def test_defaults(self):
        req = RotationRequest(plot_id="P-01", target_year=2023)
        assert req.planting_history == []
        assert req.family_catalogue == []
        assert req.candidate_species is None

    def test_duplicate_family_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate family id"):
            RotationRequest(
                plot_id="P-01",
                target_year=2023,
                family_catalogue=[
                    FamilyReference(id="Fabacées", min_interval_years=2),
                    FamilyReference(id="Fabacées", min_interval_years=3),
                ],
            )

    def test_negative_target_year_rejected(self):
        with pytest.raises(ValidationError):
            RotationRequest(plot_id="P-01", target_year=-5)
