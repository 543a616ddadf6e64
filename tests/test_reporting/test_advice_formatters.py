"""
Tests for rotation_advisor/reporting/formatters.py.

What we test
------------
  - Status badges for each verdict.
  - Full report contains every section, with placeholders when empty.
  - Species section appears only when a species was checked.
  - Catalogue table lists every family.
"""

from __future__ import annotations

import pytest

from rotation_advisor.reporting.formatters import (
    format_catalogue_table,
    format_rotation_advice,
    format_status_badge,
)
from rotation_advisor.taxonomy.rotation_taxonomy import AdviceStatus


@pytest.mark.parametrize(
    "status,badge",
    [
        (AdviceStatus.SAFE, "[OK]"),
        (AdviceStatus.WARNING, "[CAUTION]"),
        (AdviceStatus.BLOCKED, "[BLOCKED]"),
    ],
)
def test_status_badge(status, badge):
    assert format_status_badge(status) == badge


class TestRotationReport:
    def test_sections(self, depleted_advice):
        text = format_rotation_advice(depleted_advice)
        for header in ("=== Rotation Advice ===", "[SOIL]", "[BLOCKED]",
                       "[RECOMMENDED]", "[RECENT HISTORY]", "[SPECIES]"):
            assert header in text
        assert "Last heavy feeder: Courgette (2022)" in text
        assert "[CAUTION] Poireau" in text

    def test_empty_plot(self, empty_advice):
        text = format_rotation_advice(empty_advice)
        assert "(none)" in text
        assert "(no plantings recorded)" in text
        assert "[SPECIES]" not in text


class TestCatalogueTable:
    def test_lists_families(self, catalogue):
        text = format_catalogue_table(catalogue)
        assert "=== Family Catalogue ===" in text
        for family in catalogue:
            assert family.id in text

    def test_empty(self):
        assert "(empty catalogue)" in format_catalogue_table([])
