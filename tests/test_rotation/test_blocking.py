"""
Tests for rotation_advisor/rotation/blocking.py.

What we test
------------
compute_blocked_families():
  - A family is blocked iff target_year < last_year + interval, with
    years_remaining == last_year + interval - target_year.
  - Only the most recent planting of each family counts.
  - Unknown families fall back to the 4-year interval (overridable).
  - Plantings without a family are ignored.
  - Sorted by years_remaining desc, ties by family_id asc.
  - Reason text names the family, the year and the eligible year.
"""

from __future__ import annotations

from rotation_advisor.config import RotationSettings
from rotation_advisor.models.planting import FamilyReference
from rotation_advisor.rotation.blocking import compute_blocked_families


class TestBlockingInvariant:
    def test_solanaceae_two_years_remaining(self, planting):
        catalogue = [FamilyReference(id="Solanaceae", min_interval_years=4)]
        history = [planting(2021, "Tomato", "Solanaceae")]
        blocked = compute_blocked_families(history, catalogue, 2023)

        assert len(blocked) == 1
        b = blocked[0]
        assert b.family_id == "Solanaceae"
        assert b.years_remaining == 2
        assert b.last_year == 2021
        assert b.min_interval_years == 4
        assert b.eligible_year == 2025

    def test_interval_elapsed_exactly_is_not_blocked(self, planting, catalogue):
        history = [planting(2019, "Tomate", "Solanacées")]
        assert compute_blocked_families(history, catalogue, 2023) == []

    def test_blocked_iff_target_before_eligible_year(self, planting):
        target = 2023
        for last_year in range(2014, 2024):
            for interval in range(0, 7):
                catalogue = [FamilyReference(id="F", min_interval_years=interval)]
                blocked = compute_blocked_families(
                    [planting(last_year, "S", "F")], catalogue, target
                )
                if target < last_year + interval:
                    assert len(blocked) == 1, (last_year, interval)
                    assert blocked[0].years_remaining == last_year + interval - target
                else:
                    assert blocked == [], (last_year, interval)

    def test_most_recent_planting_wins(self, planting, catalogue):
        history = [
            planting(2022, "Tomate", "Solanacées"),
            planting(2018, "Pomme de terre", "Solanacées"),
        ]
        blocked = compute_blocked_families(history, catalogue, 2023)
        assert blocked[0].last_year == 2022
        assert blocked[0].years_remaining == 3

    def test_empty_history(self, catalogue):
        assert compute_blocked_families([], catalogue, 2023) == []


class TestFallbacks:
    def test_unknown_family_uses_four_years(self, planting, catalogue):
        blocked = compute_blocked_families(
            [planting(2022, "Mystère", "Inconnues")], catalogue, 2023
        )
        assert blocked[0].min_interval_years == 4
        assert blocked[0].years_remaining == 3
        assert blocked[0].color_hint is None

    def test_fallback_interval_override(self, planting, catalogue):
        blocked = compute_blocked_families(
            [planting(2022, "Mystère", "Inconnues")],
            catalogue,
            2023,
            RotationSettings(default_interval_years=1),
        )
        assert blocked == []

    def test_planting_without_family_is_ignored(self, planting, catalogue):
        history = [planting(2022, "Phacélie", None)]
        assert compute_blocked_families(history, catalogue, 2023) == []

    def test_color_hint_from_catalogue(self, planting, catalogue):
        blocked = compute_blocked_families(
            [planting(2022, "Tomate", "Solanacées")], catalogue, 2023
        )
        assert blocked[0].color_hint == "#e74c3c"


class TestOrdering:
    def test_most_restricted_first(self, planting, catalogue):
        history = [
            planting(2022, "Haricot vert", "Fabacées"),      # 2 -> 1 left
            planting(2022, "Tomate", "Solanacées"),          # 4 -> 3 left
            planting(2022, "Courgette", "Cucurbitacées"),    # 3 -> 2 left
        ]
        blocked = compute_blocked_families(history, catalogue, 2023)
        assert [b.family_id for b in blocked] == ["Solanacées", "Cucurbitacées", "Fabacées"]
        assert [b.years_remaining for b in blocked] == [3, 2, 1]

    def test_ties_broken_by_family_id(self, planting, catalogue):
        history = [
            planting(2022, "Courgette", "Cucurbitacées"),
            planting(2022, "Carotte", "Apiacées"),
        ]
        blocked = compute_blocked_families(history, catalogue, 2023)
        assert [b.family_id for b in blocked] == ["Apiacées", "Cucurbitacées"]


class TestReason:
    def test_reason_text(self, planting, catalogue):
        blocked = compute_blocked_families(
            [planting(2022, "Tomate", "Solanacées")], catalogue, 2023
        )
        assert blocked[0].reason == "Solanacées planted in 2022, wait until 2026"
