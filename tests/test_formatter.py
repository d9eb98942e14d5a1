"""Tests for deterministic output formatting."""

import json
import math

import pytest

from printability.formatter import format_output, round_number, to_canonical_dict
from printability.models import (
    AnalysisResult,
    AnalysisStatus,
    AxisAlignment,
    BBox,
    ComponentInfo,
    DisconnectedIssue,
    ErrorType,
    GeometryStats,
    Issues,
    ParameterCorrelation,
    ParameterSuggestion,
    SmallFeatureIssue,
    ThinWallIssue,
)


def _stats():
    return GeometryStats(
        volume=1000.00049,
        surface_area=600.0,
        bbox=BBox(min=(-0.0000001, 0, 0), max=(10, 10, 10)),
        center_of_mass=(5.00001, 5, 5),
        triangle_count=12,
    )


def _thin(x, y=0.0):
    return ThinWallIssue(
        measured=0.123456,
        required=1.2,
        bbox=BBox(min=(x, y, 0), max=(x + 0.5, y + 10, 10)),
        axis_alignment=AxisAlignment.X,
        estimated_volume=50.0004,
    )


def _correlation(name, count):
    return ParameterCorrelation(
        parameter_name=name,
        current_value=1.0,
        correlated_issue_count=count,
        correlated_issue_types=["thinWalls"],
        suggestion=ParameterSuggestion(
            action="increase",
            target_value=1.23456,
            confidence="high",
            reasoning="Walls may be too thin to print.",
        ),
    )


def _fail_result():
    return AnalysisResult(
        status=AnalysisStatus.FAIL,
        stats=_stats(),
        issues=Issues(
            thin_walls=[_thin(20.0), _thin(0.0, 5.0), _thin(0.0)],
            small_features=[
                SmallFeatureIssue(
                    size=1.0,
                    required=1.5,
                    bbox=BBox(min=(3, 0, 0), max=(4, 1, 1)),
                    axis_alignment=AxisAlignment.NONE,
                ),
                SmallFeatureIssue(
                    size=1.0,
                    required=1.5,
                    bbox=BBox(min=(1, 0, 0), max=(2, 1, 1)),
                    axis_alignment=AxisAlignment.NONE,
                ),
            ],
            disconnected=DisconnectedIssue(
                component_count=2,
                components=[
                    ComponentInfo(volume=10, bbox=BBox(min=(50, 0, 0), max=(60, 1, 1)), is_floating=False),
                    ComponentInfo(volume=10, bbox=BBox(min=(0, 0, 5), max=(1, 1, 6)), is_floating=True),
                ],
            ),
        ),
        parameter_correlations=[_correlation("b", 2), _correlation("a", 5), _correlation("c", 5)],
    )


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.23456, 1.235),
        (0.0005, 0.001),
        (-0.0005, -0.001),
        (2.0005, 2.001),
        (1.0004999, 1.0),
        (-2.5, -2.5),
        (1e-12, 0.0),
        (123456789.0, 123456789.0),
    ],
)
def test_round_number(value, expected):
    assert round_number(value) == expected


def test_round_number_never_negative_zero():
    result = round_number(-0.00001)
    assert result == 0
    assert math.copysign(1.0, result) == 1.0


@pytest.mark.parametrize("value", [0.1 + 0.2, -7.77777, 1.0005, 99999.9995, -0.0004])
def test_round_number_idempotent(value):
    once = round_number(value)
    assert round_number(once) == once


def test_round_number_other_precision():
    assert round_number(1.25, decimals=1) == 1.3
    assert round_number(-1.25, decimals=1) == -1.3


def test_issue_lists_resorted_by_coordinate():
    data = to_canonical_dict(_fail_result())

    assert [i["bbox"]["min"] for i in data["issues"]["thinWalls"]] == [
        [0.0, 0.0, 0.0],
        [0.0, 5.0, 0.0],
        [20.0, 0.0, 0.0],
    ]
    assert [i["bbox"]["min"][0] for i in data["issues"]["smallFeatures"]] == [1.0, 3.0]


def test_disconnected_components_keep_order():
    data = to_canonical_dict(_fail_result())
    components = data["issues"]["disconnected"]["components"]
    assert [c["bbox"]["min"][0] for c in components] == [50.0, 0.0]


def test_correlations_sorted_by_count_then_name():
    data = to_canonical_dict(_fail_result())
    assert [c["parameterName"] for c in data["parameterCorrelations"]] == ["a", "c", "b"]


def test_floats_are_rounded():
    data = to_canonical_dict(_fail_result())

    assert data["stats"]["volume"] == 1000.0
    assert data["stats"]["bbox"]["min"] == [0.0, 0.0, 0.0]
    assert data["stats"]["centerOfMass"] == [5.0, 5.0, 5.0]
    assert data["issues"]["thinWalls"][0]["measured"] == 0.123
    assert data["issues"]["thinWalls"][0]["estimatedVolume"] == 50.0
    assert data["parameterCorrelations"][0]["suggestion"]["targetValue"] == 1.235


def test_negative_zero_never_in_output():
    text = format_output(_fail_result())
    assert "-0.0" not in text


def test_error_field_only_on_error():
    pass_result = AnalysisResult(
        status=AnalysisStatus.PASS,
        stats=_stats(),
        issues=Issues(),
        parameter_correlations=[],
    )
    data = json.loads(format_output(pass_result))
    assert "error" not in data
    assert data["parameterCorrelations"] == []
    assert data["issues"]["disconnected"] is None

    error_result = AnalysisResult.failure(ErrorType.GEOMETRY_CRASH, "bad geometry")
    data = json.loads(format_output(error_result))
    assert data["status"] == "ERROR"
    assert data["stats"] is None
    assert data["issues"] is None
    assert data["parameterCorrelations"] is None
    assert data["error"] == {
        "type": "GEOMETRY_CRASH",
        "message": "bad geometry",
        "recoverable": True,
    }


def test_key_order_is_fixed():
    data = json.loads(format_output(_fail_result()))
    assert list(data.keys()) == ["status", "stats", "issues", "parameterCorrelations"]
    assert list(data["issues"]["thinWalls"][0].keys()) == [
        "measured",
        "required",
        "bbox",
        "axisAlignment",
        "estimatedVolume",
    ]


def test_format_is_byte_identical():
    assert format_output(_fail_result()) == format_output(_fail_result())


def test_input_order_does_not_change_output():
    a = _fail_result()
    b = _fail_result()
    b.issues.thin_walls.reverse()
    b.issues.small_features.reverse()
    b.parameter_correlations.reverse()
    assert format_output(a) == format_output(b)


def test_formatter_does_not_mutate_input():
    result = _fail_result()
    format_output(result)
    assert result.issues.thin_walls[0].bbox.min == (20.0, 0.0, 0.0)
    assert result.stats.volume == 1000.00049


def test_canonical_dict_reads_back():
    data = json.loads(format_output(_fail_result()))
    result = AnalysisResult.from_dict(data)
    assert result.status == AnalysisStatus.FAIL
    assert result.issues.disconnected.component_count == 2
    assert result.parameter_correlations[0].parameter_name == "a"
