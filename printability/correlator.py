"""
Map detected printability issues back to generator parameters.

Each numeric parameter is assigned roles (wall, feature, spacing, cavity),
either explicitly through ParameterDef.role or by matching its name against
the CorrelationRules pattern table. Each role links the parameter to one
issue category and yields a directional suggestion sized to fix the worst
violation in that category.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import numpy as np

from .config import (
    CorrelationRules,
    ROLE_CAVITY,
    ROLE_FEATURE,
    ROLE_SPACING,
    ROLE_WALL,
)
from .models import (
    CATEGORY_ORDER,
    DisconnectedIssue,
    IssueCategory,
    Issues,
    ParameterCorrelation,
    ParameterSuggestion,
)
from .parameters import ParameterDef, flatten_parameters, is_number_param, numeric_values
from .utils import round_number

logger = logging.getLogger(__name__)

INCREASE = "increase"
DECREASE = "decrease"

_CONFIDENCE_RANK = {"high": 2, "medium": 1, "low": 0}


@dataclass
class _Finding:
    """Link between one parameter role and one issue category."""
    category: IssueCategory
    count: int
    action: str
    target_value: float
    confidence: str
    reasoning: str


def _fmt(value: float) -> str:
    return np.format_float_positional(round_number(value), trim="-")


def _magnitude_confidence(gaps: Sequence[float], spread: float) -> str:
    """high when all gaps are about the same size, medium when they vary widely."""
    worst = max(gaps)
    if worst <= 0 or (worst - min(gaps)) <= spread * worst:
        return "high"
    return "medium"


def _undersize_finding(
    category: IssueCategory,
    measured: List[float],
    required: List[float],
    current: float,
    rules: CorrelationRules,
    defect: str,
) -> Optional[_Finding]:
    if not measured:
        return None

    threshold = max(required)
    if current >= threshold * rules.relevance_margin:
        return None

    gaps = [max(r - m, 0.0) for m, r in zip(measured, required)]
    worst = max(gaps)

    if current < threshold:
        reasoning = f"Current {_fmt(current)}mm is below minimum {_fmt(threshold)}mm. {defect}"
    else:
        reasoning = f"Current {_fmt(current)}mm is close to minimum {_fmt(threshold)}mm. {defect}"

    return _Finding(
        category=category,
        count=len(measured),
        action=INCREASE,
        target_value=current + worst,
        confidence=_magnitude_confidence(gaps, rules.magnitude_spread),
        reasoning=reasoning,
    )


def _wall_finding(issues: Issues, current: float, rules: CorrelationRules) -> Optional[_Finding]:
    return _undersize_finding(
        IssueCategory.THIN_WALLS,
        [i.measured for i in issues.thin_walls],
        [i.required for i in issues.thin_walls],
        current,
        rules,
        "Walls may be too thin to print.",
    )


def _feature_finding(issues: Issues, current: float, rules: CorrelationRules) -> Optional[_Finding]:
    return _undersize_finding(
        IssueCategory.SMALL_FEATURES,
        [i.size for i in issues.small_features],
        [i.required for i in issues.small_features],
        current,
        rules,
        "Features may be too small to print reliably.",
    )


def worst_separation(disconnected: DisconnectedIssue) -> float:
    """
    Largest distance from any component to its nearest neighbour.

    Distances are measured between bounding boxes: per-axis gaps, combined
    as a Euclidean norm. Overlapping boxes are 0 apart.
    """
    if len(disconnected.components) < 2:
        return 0.0

    lo = np.array([c.bbox.min for c in disconnected.components], dtype=float)
    hi = np.array([c.bbox.max for c in disconnected.components], dtype=float)

    # gaps[i, j, axis] between box i and box j
    gaps = np.maximum(
        0.0,
        np.maximum(lo[:, None, :] - hi[None, :, :], lo[None, :, :] - hi[:, None, :]),
    )
    dist = np.linalg.norm(gaps, axis=2)
    np.fill_diagonal(dist, np.inf)

    return float(dist.min(axis=1).max())


def _disconnect_finding(
    issues: Issues,
    current: float,
    confidence: str,
    cause: str,
) -> Optional[_Finding]:
    if issues.disconnected is None:
        return None

    gap = worst_separation(issues.disconnected)
    floating = sum(1 for c in issues.disconnected.components if c.is_floating)

    reasoning = (
        f"Geometry splits into {issues.disconnected.component_count} pieces "
        f"({floating} floating) up to {_fmt(gap)}mm apart. {cause}"
    )

    return _Finding(
        category=IssueCategory.DISCONNECTED,
        count=1,
        action=DECREASE,
        target_value=max(current - gap, 0.0),
        confidence=confidence,
        reasoning=reasoning,
    )


def _spacing_finding(issues: Issues, current: float, rules: CorrelationRules) -> Optional[_Finding]:
    return _disconnect_finding(
        issues, current, "low",
        "Reducing this spacing may join the separated parts.",
    )


def _cavity_finding(issues: Issues, current: float, rules: CorrelationRules) -> Optional[_Finding]:
    return _disconnect_finding(
        issues, current, "medium",
        "An oversized cut may be splitting the part.",
    )


_ROLE_HANDLERS: Dict[str, Callable[[Issues, float, CorrelationRules], Optional[_Finding]]] = {
    ROLE_WALL: _wall_finding,
    ROLE_FEATURE: _feature_finding,
    ROLE_SPACING: _spacing_finding,
    ROLE_CAVITY: _cavity_finding,
}


def _combine(name: str, current: float, findings: List[_Finding]) -> ParameterCorrelation:
    """Merge the findings of one parameter into a single correlation."""
    votes = {INCREASE: 0, DECREASE: 0}
    for f in findings:
        votes[f.action] += f.count
    action = INCREASE if votes[INCREASE] >= votes[DECREASE] else DECREASE

    chosen = [f for f in findings if f.action == action]
    targets = [f.target_value for f in chosen]
    target = max(targets) if action == INCREASE else min(targets)

    if len(chosen) < len(findings):
        confidence = "low"
    else:
        confidence = min((f.confidence for f in chosen), key=_CONFIDENCE_RANK.__getitem__)

    categories = {f.category for f in findings}

    return ParameterCorrelation(
        parameter_name=name,
        current_value=current,
        correlated_issue_count=sum(f.count for f in findings),
        correlated_issue_types=[c.value for c in CATEGORY_ORDER if c in categories],
        suggestion=ParameterSuggestion(
            action=action,
            target_value=target,
            confidence=confidence,
            reasoning=" ".join(f.reasoning for f in chosen),
        ),
    )


def sort_correlations(correlations: Sequence[ParameterCorrelation]) -> List[ParameterCorrelation]:
    """Most issues first; ties broken by parameter name."""
    return sorted(correlations, key=lambda c: (-c.correlated_issue_count, c.parameter_name))


def correlate_parameters(
    issues: Issues,
    params: Sequence[ParameterDef],
    values: Mapping[str, Any],
    rules: Optional[CorrelationRules] = None,
) -> List[ParameterCorrelation]:
    """
    Correlate detected issues with generator parameters.

    Parameters
    ----------
    issues : Issues
        Detected printability issues
    params : list of ParameterDef
        Generator parameter catalog (nested children included)
    values : mapping
        Current parameter values; non-numeric values are ignored
    rules : CorrelationRules, optional
        Role pattern table and relevance settings

    Returns
    -------
    correlations : list of ParameterCorrelation
        One entry per parameter linked to at least one issue, sorted by
        correlated issue count (descending), then name
    """
    if rules is None:
        rules = CorrelationRules()

    if not issues.has_issues():
        return []

    numbers = numeric_values(values)
    correlations = []
    seen = set()

    for param in flatten_parameters(params):
        if not is_number_param(param) or param.name not in numbers or param.name in seen:
            continue
        seen.add(param.name)

        current = numbers[param.name]
        roles = [param.role] if param.role else rules.roles_for(param.name)

        findings = []
        for role in roles:
            finding = _ROLE_HANDLERS[role](issues, current, rules)
            if finding is not None:
                findings.append(finding)

        if findings:
            correlations.append(_combine(param.name, current, findings))

    logger.debug("Correlated %d parameters with detected issues", len(correlations))
    return sort_correlations(correlations)
