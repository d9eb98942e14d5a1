from typing import Any, List

from ..geometry.kernel import GeometryKernel
from ..models import ThinWallIssue
from .bounds import find_bbox_violations


def check_thin_walls(
    kernel: GeometryKernel,
    solid: Any,
    min_thickness: float,
    axis_ratio: float = 0.3,
) -> List[ThinWallIssue]:
    """
    Find components too thin to print reliably.

    Each issue records the volume of the offending component, not of the
    whole solid.
    """

    def make_issue(component, bbox, smallest, alignment):
        return ThinWallIssue(
            measured=smallest,
            required=min_thickness,
            bbox=bbox,
            axis_alignment=alignment,
            estimated_volume=float(kernel.volume(component)),
        )

    return find_bbox_violations(kernel, solid, min_thickness, make_issue, axis_ratio)
