"""
Tests for rotation_advisor/ingestion/catalogue.py.

What we test
------------
  - The shipped config/families.json loads with nine unique families.
  - Missing file, malformed JSON, non-array document -> errors.
  - Invalid entries and duplicate ids are reported together.
  - The species catalogue follows the same rules; shipped species only
    reference catalogued families.
"""

from __future__ import annotations

import json

import pytest

from rotation_advisor.ingestion.catalogue import load_family_catalogue, load_species_catalogue


class TestShippedCatalogue:
    def test_loads_nine_families(self, shipped_catalogue_path):
        families = load_family_catalogue(shipped_catalogue_path)
        assert len(families) == 9
        assert len({f.id for f in families}) == 9

    def test_contains_nitrogen_fixer(self, shipped_catalogue_path):
        families = {f.id: f for f in load_family_catalogue(shipped_catalogue_path)}
        assert families["Fabacées"].min_interval_years == 2
        assert families["Solanacées"].min_interval_years == 4


class TestCatalogueErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_family_catalogue(tmp_path / "missing.json")

    def test_bad_json(self, tmp_path):
        path = tmp_path / "families.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_family_catalogue(path)

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "families.json"
        path.write_text(json.dumps({"id": "Fabacées"}), encoding="utf-8")
        with pytest.raises(ValueError, match="JSON array"):
            load_family_catalogue(path)

    def test_invalid_and_duplicate_entries(self, tmp_path):
        path = tmp_path / "families.json"
        path.write_text(
            json.dumps([
                {"id": "Fabacées", "min_interval_years": 2},
                {"id": "Apiacées", "min_interval_years": -3},
                {"id": "Fabacées", "min_interval_years": 2},
                "Rosacées",
            ]),
            encoding="utf-8",
        )
        with pytest.raises(ValueError) as exc_info:
            load_family_catalogue(path)
        message = str(exc_info.value)
        assert message.startswith("3 family")
        assert "duplicate family id 'Fabacées'" in message
        assert "Entry #3" in message

    def test_empty_array(self, tmp_path):
        path = tmp_path / "families.json"
        path.write_text("[]", encoding="utf-8")
        assert load_family_catalogue(path) == []


class TestSpeciesCatalogue:
    def test_shipped_species(self, shipped_species_path):
        species = {s.id: s for s in load_species_catalogue(shipped_species_path)}
        assert len(species) == 38
        assert species["Tomate"].family_id == "Solanacées"
        assert species["Tomate"].nitrogen_need == 4
        assert species["Phacélie"].family_id is None

    def test_shipped_species_families_are_catalogued(
        self, shipped_species_path, shipped_catalogue_path
    ):
        family_ids = {f.id for f in load_family_catalogue(shipped_catalogue_path)}
        species = load_species_catalogue(shipped_species_path)
        assert {s.family_id for s in species if s.family_id} <= family_ids

    def test_duplicate_species(self, tmp_path):
        path = tmp_path / "species.json"
        path.write_text(
            json.dumps([{"id": "Tomate"}, {"id": "Tomate", "nitrogen_need": 4}]),
            encoding="utf-8",
        )
        with pytest.raises(ValueError, match="duplicate species id 'Tomate'"):
            load_species_catalogue(path)

    def test_need_out_of_scale(self, tmp_path):
        path = tmp_path / "species.json"
        path.write_text(json.dumps([{"id": "Tomate", "nitrogen_need": 7}]), encoding="utf-8")
        with pytest.raises(ValueError, match="1 species entr"):
            load_species_catalogue(path)
