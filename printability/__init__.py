"""
Printability Analysis Package

Checks whether a solid 3D model can be printed and explains why not.
Produces a deterministic JSON report with:
- Global geometry statistics
- Thin wall and small feature detection (per-component bounding boxes)
- Disconnected / floating component detection
- Parameter correlations with directional fix suggestions
"""

from .analyzer import analyze, analyze_solid, analyze_with_timeout
from .formatter import format_output, round_number
from .config import PrintingConstants, CorrelationRules, get_preset
from .parameters import ParameterDef
from .geometry import GeometryKernel, TrimeshKernel
from .models import (
    AnalysisError,
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

__version__ = "0.1.0"

__all__ = [
    "analyze",
    "analyze_solid",
    "analyze_with_timeout",
    "format_output",
    "round_number",
    "PrintingConstants",
    "CorrelationRules",
    "get_preset",
    "ParameterDef",
    "GeometryKernel",
    "TrimeshKernel",
    "AnalysisError",
    "AnalysisResult",
    "AnalysisStatus",
    "AxisAlignment",
    "BBox",
    "ComponentInfo",
    "DisconnectedIssue",
    "ErrorType",
    "GeometryStats",
    "Issues",
    "ParameterCorrelation",
    "ParameterSuggestion",
    "SmallFeatureIssue",
    "ThinWallIssue",
]
