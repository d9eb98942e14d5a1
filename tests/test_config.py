"""Tests for printing presets and correlation rules."""

import pytest

from printability.config import (
    CorrelationRules,
    PrintingConstants,
    get_preset,
    validate_constants,
)


def test_default_constants():
    c = PrintingConstants()
    assert c.min_wall_thickness == 1.2
    assert c.min_feature_size == 1.5
    assert c.comparison_tolerance == 0.01
    assert c.axis_ratio == 0.3
    assert c.decimal_places == 3


@pytest.mark.parametrize("name", ["fdm_standard", "fdm_fine", "resin_standard"])
def test_presets_are_valid(name):
    is_valid, warnings = validate_constants(get_preset(name))
    assert is_valid is True, warnings


def test_unknown_preset():
    with pytest.raises(ValueError):
        get_preset("laser_sintering")


def test_validate_constants_out_of_bounds():
    is_valid, warnings = validate_constants(
        PrintingConstants(min_wall_thickness=0.01, axis_ratio=2.0)
    )
    assert is_valid is False
    assert len(warnings) == 3


def test_roles_for_name_patterns():
    rules = CorrelationRules()
    assert rules.roles_for("wallThickness") == ["wall"]
    assert rules.roles_for("holeDiameter") == ["feature", "cavity"]
    assert rules.roles_for("partSpacing") == ["spacing"]
    assert rules.roles_for("height") == []


def test_custom_role_table():
    rules = CorrelationRules(role_patterns={"wall": ["skin"]})
    assert rules.roles_for("skinDepth") == ["wall"]
    assert rules.roles_for("wallThickness") == []
