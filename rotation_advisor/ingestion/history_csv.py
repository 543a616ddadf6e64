"""
CSV import parser for plot planting history.

Format: comma delimited, with a header row.
Required columns:
  year, species_id

Optional columns (empty string → None):
  family_id, nitrogen_need, phosphorus_need, potassium_need

Nutrient needs are integers on the 0–5 scale. Extra columns (plot name,
harvest totals, notes) are ignored so exports from the main application can
be fed in unchanged. A leading UTF-8 BOM (spreadsheet exports) is accepted.
Missing families and needs are filled later from the species catalogue
(``ingestion.species_lookup.enrich_plantings``).
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from rotation_advisor.models.planting import PlantingRecord

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS = frozenset({"year", "species_id"})
OPTIONAL_CSV_COLUMNS = frozenset({
    "family_id", "nitrogen_need", "phosphorus_need", "potassium_need",
})


def parse_history_csv(path: Path) -> list[PlantingRecord]:
    """Parse a CSV file of plantings into validated :class:`PlantingRecord` objects.

    All rows are validated before any are returned. If **any** row fails,
    a single :class:`ValueError` is raised listing the first 10 failures.

    Args:
        path: Path to the CSV file (must exist).

    Returns:
        List of validated records, in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If required columns are missing or any row fails validation.
    """
    if not path.exists():
        raise FileNotFoundError(f"History CSV file not found: {path}")

    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual_cols = {c.strip() for c in reader.fieldnames}
        missing = REQUIRED_CSV_COLUMNS - actual_cols
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )

        rows = [{(k or "").strip(): (v or "") for k, v in row.items()} for row in reader]

    if not rows:
        logger.warning("History CSV is empty (header only): %s", path)
        return []

    records: list[PlantingRecord] = []
    errors: list[tuple[int, str]] = []

    for i, row in enumerate(rows):
        line_no = i + 2  # 1-based, skip header row
        try:
            records.append(_row_to_planting(row))
        except (ValueError, ValidationError) as exc:
            errors.append((line_no, str(exc)))

    if errors:
        max_shown = 10
        detail = "\n".join(f"  Row {ln}: {msg}" for ln, msg in errors[:max_shown])
        suffix = f"\n  … and {len(errors) - max_shown} more" if len(errors) > max_shown else ""
        raise ValueError(
            f"{len(errors)} row(s) failed validation in {path.name}:\n{detail}{suffix}"
        )

    logger.info("Parsed %d plantings from %s", len(records), path.name)
    return records


# ── Private helpers ────────────────────────────────────────────────────────────

def _row_to_planting(row: dict[str, str]) -> PlantingRecord:
    """Convert a CSV row dict to a validated :class:`PlantingRecord`."""
    return PlantingRecord(
        year=_parse_int(row, "year", required=True),
        species_id=_req(row, "species_id"),
        family_id=_opt(row, "family_id"),
        nitrogen_need=_parse_int(row, "nitrogen_need"),
        phosphorus_need=_parse_int(row, "phosphorus_need"),
        potassium_need=_parse_int(row, "potassium_need"),
    )


def _req(row: dict[str, str], key: str) -> str:
    """Return a required string field, stripped; raise if empty."""
    v = row.get(key, "").strip()
    if not v:
        raise ValueError(f"Required field '{key}' is empty.")
    return v


def _opt(row: dict[str, str], key: str) -> Optional[str]:
    """Return an optional string field, or None if absent/empty."""
    v = row.get(key, "").strip()
    return v if v else None


def _parse_int(
    row: dict[str, str],
    key: str,
    required: bool = False,
) -> Optional[int]:
    """Parse an integer field from a CSV row."""
    v = _opt(row, key)
    if v is None:
        if required:
            raise ValueError(f"Required integer field '{key}' is empty.")
        return None
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"Invalid integer for '{key}': '{v}'.") from None
