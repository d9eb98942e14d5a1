from typing import Any, List

from ..geometry.kernel import GeometryKernel
from ..models import SmallFeatureIssue
from .bounds import find_bbox_violations


def check_small_features(
    kernel: GeometryKernel,
    solid: Any,
    min_feature_size: float,
    axis_ratio: float = 0.3,
) -> List[SmallFeatureIssue]:
    """Find components whose smallest dimension is below the printable feature size."""

    def make_issue(component, bbox, smallest, alignment):
        return SmallFeatureIssue(
            size=smallest,
            required=min_feature_size,
            bbox=bbox,
            axis_alignment=alignment,
        )

    return find_bbox_violations(kernel, solid, min_feature_size, make_issue, axis_ratio)
