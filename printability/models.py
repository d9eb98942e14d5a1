from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

Vec3 = Tuple[float, float, float]


class AxisAlignment(str, Enum):
    X = "X"
    Y = "Y"
    Z = "Z"
    NONE = "None"


class AnalysisStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"


class ErrorType(str, Enum):
    """Kinds of failure reported in an ERROR result."""
    GEOMETRY_CRASH = "GEOMETRY_CRASH"
    INVALID_INPUT = "INVALID_INPUT"
    TIMEOUT = "TIMEOUT"
    INTERNAL = "INTERNAL"


class IssueCategory(str, Enum):
    THIN_WALLS = "thinWalls"
    SMALL_FEATURES = "smallFeatures"
    DISCONNECTED = "disconnected"


# Output order of categories inside correlatedIssueTypes
CATEGORY_ORDER = (
    IssueCategory.THIN_WALLS,
    IssueCategory.SMALL_FEATURES,
    IssueCategory.DISCONNECTED,
)


def _vec3(values) -> Vec3:
    x, y, z = values
    return (float(x), float(y), float(z))


@dataclass(frozen=True)
class BBox:
    min: Vec3
    max: Vec3

    def __post_init__(self):
        lo = _vec3(self.min)
        hi = _vec3(self.max)
        for axis in range(3):
            if lo[axis] > hi[axis]:
                raise ValueError(
                    f"Invalid bounding box: min {lo} exceeds max {hi} on axis {axis}"
                )
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @property
    def extents(self) -> Vec3:
        return (
            self.max[0] - self.min[0],
            self.max[1] - self.min[1],
            self.max[2] - self.min[2],
        )

    @property
    def center(self) -> Vec3:
        return (
            (self.min[0] + self.max[0]) / 2,
            (self.min[1] + self.max[1]) / 2,
            (self.min[2] + self.max[2]) / 2,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"min": list(self.min), "max": list(self.max)}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BBox":
        return cls(min=_vec3(d["min"]), max=_vec3(d["max"]))


@dataclass
class GeometryStats:
    volume: float
    surface_area: float
    bbox: BBox
    center_of_mass: Vec3
    triangle_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "volume": self.volume,
            "surfaceArea": self.surface_area,
            "bbox": self.bbox.to_dict(),
            "centerOfMass": list(self.center_of_mass),
            "triangleCount": self.triangle_count,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GeometryStats":
        return cls(
            volume=float(d["volume"]),
            surface_area=float(d["surfaceArea"]),
            bbox=BBox.from_dict(d["bbox"]),
            center_of_mass=_vec3(d["centerOfMass"]),
            triangle_count=int(d["triangleCount"]),
        )


@dataclass
class ThinWallIssue:
    measured: float
    required: float
    bbox: BBox
    axis_alignment: AxisAlignment
    estimated_volume: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "measured": self.measured,
            "required": self.required,
            "bbox": self.bbox.to_dict(),
            "axisAlignment": self.axis_alignment.value,
            "estimatedVolume": self.estimated_volume,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ThinWallIssue":
        return cls(
            measured=float(d["measured"]),
            required=float(d["required"]),
            bbox=BBox.from_dict(d["bbox"]),
            axis_alignment=AxisAlignment(d["axisAlignment"]),
            estimated_volume=float(d["estimatedVolume"]),
        )


@dataclass
class SmallFeatureIssue:
    size: float
    required: float
    bbox: BBox
    axis_alignment: AxisAlignment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "required": self.required,
            "bbox": self.bbox.to_dict(),
            "axisAlignment": self.axis_alignment.value,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SmallFeatureIssue":
        return cls(
            size=float(d["size"]),
            required=float(d["required"]),
            bbox=BBox.from_dict(d["bbox"]),
            axis_alignment=AxisAlignment(d["axisAlignment"]),
        )


@dataclass
class ComponentInfo:
    volume: float
    bbox: BBox
    is_floating: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "volume": self.volume,
            "bbox": self.bbox.to_dict(),
            "isFloating": self.is_floating,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ComponentInfo":
        return cls(
            volume=float(d["volume"]),
            bbox=BBox.from_dict(d["bbox"]),
            is_floating=bool(d["isFloating"]),
        )


@dataclass
class DisconnectedIssue:
    component_count: int
    components: List[ComponentInfo]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "componentCount": self.component_count,
            "components": [c.to_dict() for c in self.components],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DisconnectedIssue":
        return cls(
            component_count=int(d["componentCount"]),
            components=[ComponentInfo.from_dict(c) for c in d["components"]],
        )


@dataclass
class Issues:
    thin_walls: List[ThinWallIssue] = field(default_factory=list)
    small_features: List[SmallFeatureIssue] = field(default_factory=list)
    disconnected: Optional[DisconnectedIssue] = None

    def has_issues(self) -> bool:
        return bool(self.thin_walls or self.small_features or self.disconnected is not None)

    def count(self, category: IssueCategory) -> int:
        """Number of issues in a category; a disconnected issue counts once."""
        if category == IssueCategory.THIN_WALLS:
            return len(self.thin_walls)
        if category == IssueCategory.SMALL_FEATURES:
            return len(self.small_features)
        return 1 if self.disconnected is not None else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "thinWalls": [i.to_dict() for i in self.thin_walls],
            "smallFeatures": [i.to_dict() for i in self.small_features],
            "disconnected": self.disconnected.to_dict() if self.disconnected else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Issues":
        return cls(
            thin_walls=[ThinWallIssue.from_dict(i) for i in d.get("thinWalls", [])],
            small_features=[SmallFeatureIssue.from_dict(i) for i in d.get("smallFeatures", [])],
            disconnected=DisconnectedIssue.from_dict(d["disconnected"]) if d.get("disconnected") else None,
        )


@dataclass
class ParameterSuggestion:
    action: str  # "increase" | "decrease"
    target_value: float
    confidence: str  # "high" | "medium" | "low"
    reasoning: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "targetValue": self.target_value,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ParameterSuggestion":
        return cls(
            action=d["action"],
            target_value=float(d["targetValue"]),
            confidence=d["confidence"],
            reasoning=d["reasoning"],
        )


@dataclass
class ParameterCorrelation:
    parameter_name: str
    current_value: float
    correlated_issue_count: int
    correlated_issue_types: List[str]
    suggestion: ParameterSuggestion

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parameterName": self.parameter_name,
            "currentValue": self.current_value,
            "correlatedIssueCount": self.correlated_issue_count,
            "correlatedIssueTypes": list(self.correlated_issue_types),
            "suggestion": self.suggestion.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ParameterCorrelation":
        return cls(
            parameter_name=d["parameterName"],
            current_value=float(d["currentValue"]),
            correlated_issue_count=int(d["correlatedIssueCount"]),
            correlated_issue_types=list(d["correlatedIssueTypes"]),
            suggestion=ParameterSuggestion.from_dict(d["suggestion"]),
        )


@dataclass
class AnalysisError:
    type: ErrorType
    message: str
    recoverable: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "recoverable": self.recoverable,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnalysisError":
        return cls(
            type=ErrorType(d["type"]),
            message=d["message"],
            recoverable=bool(d["recoverable"]),
        )


@dataclass
class AnalysisResult:
    """
    Root artifact of one analysis run.

    stats, issues and parameter_correlations are all None exactly when
    status is ERROR; error is set only in that case.
    """

    status: AnalysisStatus
    stats: Optional[GeometryStats]
    issues: Optional[Issues]
    parameter_correlations: Optional[List[ParameterCorrelation]]
    error: Optional[AnalysisError] = None

    def is_success(self) -> bool:
        return self.status == AnalysisStatus.PASS

    def is_error(self) -> bool:
        return self.status == AnalysisStatus.ERROR

    @classmethod
    def failure(
        cls,
        error_type: ErrorType,
        message: str,
        recoverable: bool = True,
    ) -> "AnalysisResult":
        """Create an ERROR result with all analysis sections nulled."""
        return cls(
            status=AnalysisStatus.ERROR,
            stats=None,
            issues=None,
            parameter_correlations=None,
            error=AnalysisError(type=error_type, message=message, recoverable=recoverable),
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "status": self.status.value,
            "stats": self.stats.to_dict() if self.stats else None,
            "issues": self.issues.to_dict() if self.issues else None,
            "parameterCorrelations": (
                [c.to_dict() for c in self.parameter_correlations]
                if self.parameter_correlations is not None
                else None
            ),
        }
        if self.error is not None:
            d["error"] = self.error.to_dict()
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnalysisResult":
        correlations = d.get("parameterCorrelations")
        return cls(
            status=AnalysisStatus(d["status"]),
            stats=GeometryStats.from_dict(d["stats"]) if d.get("stats") else None,
            issues=Issues.from_dict(d["issues"]) if d.get("issues") else None,
            parameter_correlations=(
                [ParameterCorrelation.from_dict(c) for c in correlations]
                if correlations is not None
                else None
            ),
            error=AnalysisError.from_dict(d["error"]) if d.get("error") else None,
        )
