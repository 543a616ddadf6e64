"""
Shared pytest fixtures for the rotation advisor test suite.

Provides:
  - ``shipped_catalogue_path`` / ``shipped_species_path``: committed catalogues.
  - ``catalogue``: the nine-family catalogue shipped in ``config/families.json``.
  - ``settings``: default ``RotationSettings``.
  - ``planting``: factory for ``PlantingRecord`` objects with short kwargs.
  - ``depleting_history``: three heavy feeders in 2020–2022 (mean N 4.67).
  - ``depleted_advice`` / ``empty_advice``: ready-made advisories for the
    reporting and export tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest

from rotation_advisor import calculate_rotation_advice
from rotation_advisor.config import RotationSettings
from rotation_advisor.models.advice import RotationAdvice
from rotation_advisor.models.planting import (
    CandidateSpecies,
    FamilyReference,
    PlantingRecord,
    RotationRequest,
)

REPO_ROOT = Path(__file__).resolve().parent.parent
SHIPPED_CATALOGUE = REPO_ROOT / "config" / "families.json"
SHIPPED_SPECIES = REPO_ROOT / "config" / "species.json"


@pytest.fixture
def shipped_catalogue_path() -> Path:
    """Path to the committed default family catalogue."""
    return SHIPPED_CATALOGUE


@pytest.fixture
def shipped_species_path() -> Path:
    """Path to the committed default species catalogue."""
    return SHIPPED_SPECIES


@pytest.fixture
def catalogue() -> list[FamilyReference]:
    """The default nine-family catalogue with French family ids."""
    return [
        FamilyReference(id="Solanacées", min_interval_years=4, color_hint="#e74c3c"),
        FamilyReference(id="Cucurbitacées", min_interval_years=3, color_hint="#f39c12"),
        FamilyReference(id="Brassicacées", min_interval_years=4, color_hint="#27ae60"),
        FamilyReference(id="Fabacées", min_interval_years=2, color_hint="#9b59b6"),
        FamilyReference(id="Apiacées", min_interval_years=3, color_hint="#3498db"),
        FamilyReference(id="Alliacées", min_interval_years=3, color_hint="#1abc9c"),
        FamilyReference(id="Astéracées", min_interval_years=2, color_hint="#e67e22"),
        FamilyReference(id="Chénopodiacées", min_interval_years=3, color_hint="#c0392b"),
        FamilyReference(id="Rosacées", min_interval_years=5, color_hint="#d35400"),
    ]


@pytest.fixture
def settings() -> RotationSettings:
    """Default heuristic constants."""
    return RotationSettings()


@pytest.fixture
def planting() -> Callable[..., PlantingRecord]:
    """Factory: ``planting(2022, "Tomate", "Solanacées", n=4)``."""

    def _make(
        year: int,
        species_id: str = "Tomate",
        family_id: Optional[str] = "Solanacées",
        n: Optional[int] = None,
        p: Optional[int] = None,
        k: Optional[int] = None,
    ) -> PlantingRecord:
        return PlantingRecord(
            year=year,
            species_id=species_id,
            family_id=family_id,
            nitrogen_need=n,
            phosphorus_need=p,
            potassium_need=k,
        )

    return _make


@pytest.fixture
def depleting_history(planting) -> list[PlantingRecord]:
    """Tomato 2020 (N5), cabbage 2021 (N5), courgette 2022 (N4)."""
    return [
        planting(2020, "Tomate", "Solanacées", n=5),
        planting(2021, "Chou pommé", "Brassicacées", n=5),
        planting(2022, "Courgette", "Cucurbitacées", n=4),
    ]


@pytest.fixture
def depleted_advice(depleting_history, catalogue) -> RotationAdvice:
    """Advice for the depleting history with a heavy-feeder candidate."""
    return calculate_rotation_advice(
        RotationRequest(
            plot_id="P-01",
            target_year=2023,
            planting_history=depleting_history,
            family_catalogue=catalogue,
            candidate_species=CandidateSpecies(
                species_id="Poireau", family_id="Alliacées", nitrogen_need=4
            ),
        )
    )


@pytest.fixture
def empty_advice(catalogue) -> RotationAdvice:
    """Advice for a plot with no history and no candidate."""
    return calculate_rotation_advice(
        RotationRequest(plot_id="P-02", target_year=2023, family_catalogue=catalogue)
    )
