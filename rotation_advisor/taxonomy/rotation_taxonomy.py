"""
Rotation taxonomy: the two closed vocabularies the advisory engine emits.

  - ``SoilStatus``   — heuristic nutrient state of a plot for one of N, P, K.
  - ``AdviceStatus`` — verdict for a candidate species on a plot.

Both are ``StrEnum`` so they serialise to their plain string values in JSON
payloads without a custom encoder.

This module has NO imports from any other ``rotation_advisor`` package.
"""

from enum import StrEnum


class SoilStatus(StrEnum):
    """Estimated nutrient level derived from recently grown crops."""

    DEPLETED = "depleted"
    """Recent crops drew heavily on this nutrient (mean need > 4)."""

    NORMAL = "normal"
    """Balanced draw, or no recent history to judge from."""

    ENRICHED = "enriched"
    """Recent crops were light feeders (mean need < 2)."""


class AdviceStatus(StrEnum):
    """Verdict for planting a given species on a plot in the target year."""

    SAFE = "safe"
    """Rotation respected and no soil concern."""

    WARNING = "warning"
    """Allowed, but a heavy feeder would go onto nitrogen-depleted soil."""

    BLOCKED = "blocked"
    """The species' family is still inside its mandatory rest interval."""
