"""Tests for unit conversions."""

from __future__ import annotations

import pytest

from fitplan.profiles.units import (
    cm_to_inches,
    feet_inches_to_cm,
    kg_to_lbs,
    lbs_to_kg,
    to_kg,
)


class TestWeight:
    """Tests for weight conversion."""

    def test_lbs_to_kg(self):
        assert lbs_to_kg(220.462) == pytest.approx(100)

    def test_kg_to_lbs(self):
        assert kg_to_lbs(60) == pytest.approx(132.2772)

    def test_to_kg_by_unit(self):
        """lb and lbs convert, kg and unknown units pass through."""
        assert to_kg(110.231, "lb") == pytest.approx(50)
        assert to_kg(110.231, "LBS") == pytest.approx(50)
        assert to_kg(50, "kg") == 50
        assert to_kg(50, None) == 50

    def test_missing_weight_is_zero(self):
        assert to_kg(None, "lb") == 0


class TestHeight:
    """Tests for height conversion."""

    def test_feet_and_inches(self):
        """5'10" is 177.8 cm."""
        assert feet_inches_to_cm(5, 10) == pytest.approx(177.8)

    def test_cm_to_inches(self):
        assert cm_to_inches(254) == pytest.approx(100)
