import logging
from typing import Any, Optional

from ..geometry.adapter import to_bbox
from ..geometry.kernel import GeometryKernel, OwnedComponents
from ..models import BBox, ComponentInfo, DisconnectedIssue

logger = logging.getLogger(__name__)


def is_floating(bbox: BBox, tolerance: float = 0.01) -> bool:
    """True if the component does not touch the print bed at Z=0."""
    return bbox.min[2] > tolerance


def check_connectivity(
    kernel: GeometryKernel,
    solid: Any,
    tolerance: float = 0.01,
) -> Optional[DisconnectedIssue]:
    """
    Check a solid for disconnected pieces.

    Components at or below the volume tolerance are cavities or slivers left
    by boolean subtraction; they are discarded without being reported.

    Parameters
    ----------
    kernel : GeometryKernel
        Kernel used to query the solid
    solid : Any
        Solid to check
    tolerance : float
        Comparison tolerance for both component volume and bed contact

    Returns
    -------
    issue : DisconnectedIssue or None
        None if at most one positive-volume component exists. Components are
        listed in decomposition order.
    """
    scope = OwnedComponents(kernel, solid)

    with scope as components:
        positive = []
        for component in components:
            if kernel.volume(component) > tolerance:
                positive.append(component)
            else:
                scope.release(component)

        if len(positive) <= 1:
            return None

        details = []
        for component in positive:
            bbox = to_bbox(kernel.bounding_box(component))
            details.append(
                ComponentInfo(
                    volume=float(kernel.volume(component)),
                    bbox=bbox,
                    is_floating=is_floating(bbox, tolerance),
                )
            )
            scope.release(component)

    logger.debug(
        "Found %d disconnected components (%d floating)",
        len(details),
        sum(1 for d in details if d.is_floating),
    )

    return DisconnectedIssue(component_count=len(details), components=details)
