"""
Bounding-box heuristics shared by the thin-wall and small-feature checks.

Each connected component is judged by its smallest bounding extent. This is
conservative: it reliably flags thin or tiny pieces but will not find a thin
section inside an otherwise bulky component.
"""

import logging
from typing import Any, Callable, List, Sequence, Tuple, TypeVar

from ..geometry.adapter import to_bbox
from ..geometry.kernel import GeometryKernel, OwnedComponents
from ..models import AxisAlignment, BBox

logger = logging.getLogger(__name__)

T = TypeVar("T")

_AXES = (AxisAlignment.X, AxisAlignment.Y, AxisAlignment.Z)

# make_issue(component, bbox, smallest_extent, axis_alignment) -> issue
IssueFactory = Callable[[Any, BBox, float, AxisAlignment], T]


def smallest_extent(bbox: BBox) -> float:
    return min(bbox.extents)


def detect_axis_alignment(bbox: BBox, axis_ratio: float = 0.3) -> AxisAlignment:
    """
    Axis owning the smallest extent, if it is markedly smaller than the largest.

    Ties resolve to the first axis in X, Y, Z order.
    """
    dims = bbox.extents
    min_dim = min(dims)
    max_dim = max(dims)

    if min_dim < max_dim * axis_ratio:
        return _AXES[dims.index(min_dim)]

    return AxisAlignment.NONE


def coordinate_key(issue: Any) -> Tuple[float, float, float]:
    return issue.bbox.min


def sort_by_coordinate(issues: Sequence[T]) -> List[T]:
    """
    Sort issues by the minimum bbox corner (x, then y, then z).

    The sort is stable, so issues with equal corners keep their input order.
    """
    return sorted(issues, key=coordinate_key)


def find_bbox_violations(
    kernel: GeometryKernel,
    solid: Any,
    threshold: float,
    make_issue: IssueFactory,
    axis_ratio: float = 0.3,
) -> List[T]:
    """
    Flag components whose smallest bounding extent is below a threshold.

    Parameters
    ----------
    kernel : GeometryKernel
        Kernel used to query the solid
    solid : Any
        Solid to check (borrowed, never released here)
    threshold : float
        A component violates when its smallest extent is strictly below this
    make_issue : callable
        Builds the issue for a violating component. Called while the
        component is still alive.
    axis_ratio : float
        Ratio used by detect_axis_alignment

    Returns
    -------
    issues : list
        Violations sorted by coordinate
    """
    # NaN volume fails this comparison too
    if not kernel.volume(solid) > 0:
        return []

    issues = []

    with OwnedComponents(kernel, solid) as components:
        for component in components:
            bbox = to_bbox(kernel.bounding_box(component))
            smallest = smallest_extent(bbox)

            if smallest < threshold:
                alignment = detect_axis_alignment(bbox, axis_ratio)
                issues.append(make_issue(component, bbox, smallest, alignment))

    logger.debug("%d of %d components below %.3f", len(issues), len(components), threshold)
    return sort_by_coordinate(issues)
