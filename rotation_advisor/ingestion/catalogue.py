"""
Reference catalogue loaders: botanical families and species.

Both catalogues are JSON arrays of objects::

    [
      {"id": "Solanacées", "min_interval_years": 4, "color_hint": "#e74c3c",
       "description": "Tomates, poivrons, aubergines, pommes de terre"},
      ...
    ]

    [
      {"id": "Tomate", "family_id": "Solanacées", "nitrogen_need": 4,
       "color_hint": "#e74c3c"},
      ...
    ]

``config/families.json`` and ``config/species.json`` ship the defaults.

Validation rules
----------------
- The top-level value must be an array.
- Every entry must validate as the target model.
- Ids must be unique.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from rotation_advisor.models.planting import FamilyReference, SpeciesReference

logger = logging.getLogger(__name__)

_RefT = TypeVar("_RefT", FamilyReference, SpeciesReference)


def load_family_catalogue(path: Path) -> list[FamilyReference]:
    """Load and validate a family catalogue JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        Validated ``FamilyReference`` list in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On malformed JSON, a non-array document, invalid entries
            or duplicate ids.
    """
    return _load_reference_array(path, FamilyReference, "family")


def load_species_catalogue(path: Path) -> list[SpeciesReference]:
    """Load and validate a species catalogue JSON file.

    Same rules and errors as :func:`load_family_catalogue`.
    """
    return _load_reference_array(path, SpeciesReference, "species")


# ── Private helpers ────────────────────────────────────────────────────────────

def _load_reference_array(path: Path, model: type[_RefT], label: str) -> list[_RefT]:
    """Read a JSON array at ``path`` and validate every entry as ``model``."""
    if not path.exists():
        raise FileNotFoundError(f"{label.capitalize()} catalogue not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path.name}: {exc}") from exc

    if not isinstance(raw, list):
        raise ValueError(
            f"{label.capitalize()} catalogue {path.name} must contain a JSON array."
        )

    entries: list[_RefT] = []
    errors: list[tuple[int, str]] = []
    seen: set[str] = set()

    for i, entry in enumerate(raw):
        try:
            if not isinstance(entry, dict):
                raise ValueError(f"expected an object, got {type(entry).__name__}.")
            ref = model(**entry)
        except (ValueError, ValidationError) as exc:
            errors.append((i, str(exc)))
            continue
        if ref.id in seen:
            errors.append((i, f"duplicate {label} id '{ref.id}'."))
            continue
        seen.add(ref.id)
        entries.append(ref)

    if errors:
        detail = "\n".join(f"  Entry #{idx}: {msg}" for idx, msg in errors[:10])
        raise ValueError(
            f"{len(errors)} {label} entr(y/ies) failed validation in {path.name}:\n{detail}"
        )

    logger.info("Loaded %d %s entries from %s", len(entries), label, path.name)
    return entries
