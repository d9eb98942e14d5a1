"""
Deterministic JSON serialization of analysis results.

Identical results always produce byte-identical text:
- every float is rounded to a fixed number of decimals
- issue lists are re-sorted by coordinate (X, then Y, then Z)
- parameter correlations are re-sorted by issue count
- keys are emitted in a fixed order
"""

import json
from typing import Any, Dict, List, Optional

from .checks.bounds import sort_by_coordinate
from .correlator import sort_correlations
from .models import (
    AnalysisResult,
    BBox,
    GeometryStats,
    Issues,
    ParameterCorrelation,
)
from .utils import DECIMAL_PLACES, round_number


def _round_vec(values, decimals: int) -> List[float]:
    return [round_number(v, decimals) for v in values]


def _bbox(bbox: BBox, decimals: int) -> Dict[str, Any]:
    return {"min": _round_vec(bbox.min, decimals), "max": _round_vec(bbox.max, decimals)}


def _stats(stats: GeometryStats, decimals: int) -> Dict[str, Any]:
    return {
        "volume": round_number(stats.volume, decimals),
        "surfaceArea": round_number(stats.surface_area, decimals),
        "bbox": _bbox(stats.bbox, decimals),
        "centerOfMass": _round_vec(stats.center_of_mass, decimals),
        "triangleCount": int(stats.triangle_count),
    }


def _issues(issues: Issues, decimals: int) -> Dict[str, Any]:
    thin_walls = [
        {
            "measured": round_number(i.measured, decimals),
            "required": round_number(i.required, decimals),
            "bbox": _bbox(i.bbox, decimals),
            "axisAlignment": i.axis_alignment.value,
            "estimatedVolume": round_number(i.estimated_volume, decimals),
        }
        for i in sort_by_coordinate(issues.thin_walls)
    ]

    small_features = [
        {
            "size": round_number(i.size, decimals),
            "required": round_number(i.required, decimals),
            "bbox": _bbox(i.bbox, decimals),
            "axisAlignment": i.axis_alignment.value,
        }
        for i in sort_by_coordinate(issues.small_features)
    ]

    disconnected: Optional[Dict[str, Any]] = None
    if issues.disconnected is not None:
        # Components stay in decomposition order
        disconnected = {
            "componentCount": int(issues.disconnected.component_count),
            "components": [
                {
                    "volume": round_number(c.volume, decimals),
                    "bbox": _bbox(c.bbox, decimals),
                    "isFloating": bool(c.is_floating),
                }
                for c in issues.disconnected.components
            ],
        }

    return {
        "thinWalls": thin_walls,
        "smallFeatures": small_features,
        "disconnected": disconnected,
    }


def _correlations(correlations: List[ParameterCorrelation], decimals: int) -> List[Dict[str, Any]]:
    return [
        {
            "parameterName": c.parameter_name,
            "currentValue": round_number(c.current_value, decimals),
            "correlatedIssueCount": int(c.correlated_issue_count),
            "correlatedIssueTypes": list(c.correlated_issue_types),
            "suggestion": {
                "action": c.suggestion.action,
                "targetValue": round_number(c.suggestion.target_value, decimals),
                "confidence": c.suggestion.confidence,
                "reasoning": c.suggestion.reasoning,
            },
        }
        for c in sort_correlations(correlations)
    ]


def to_canonical_dict(result: AnalysisResult, decimals: int = DECIMAL_PLACES) -> Dict[str, Any]:
    """Rounded, sorted, JSON-safe dict for an AnalysisResult."""
    data: Dict[str, Any] = {
        "status": result.status.value,
        "stats": _stats(result.stats, decimals) if result.stats is not None else None,
        "issues": _issues(result.issues, decimals) if result.issues is not None else None,
        "parameterCorrelations": (
            _correlations(result.parameter_correlations, decimals)
            if result.parameter_correlations is not None
            else None
        ),
    }

    if result.error is not None:
        data["error"] = result.error.to_dict()

    return data


def format_output(
    result: AnalysisResult,
    indent: Optional[int] = 2,
    decimals: int = DECIMAL_PLACES,
) -> str:
    """
    Format an analysis result as deterministic JSON text.

    Parameters
    ----------
    result : AnalysisResult
        Result to serialize
    indent : int or None
        JSON indentation (cosmetic only)
    decimals : int
        Decimal places kept for every float

    Returns
    -------
    text : str
        JSON document
    """
    return json.dumps(to_canonical_dict(result, decimals), indent=indent, ensure_ascii=False)
