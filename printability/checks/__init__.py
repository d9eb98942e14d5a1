from .bounds import (
    detect_axis_alignment,
    smallest_extent,
    sort_by_coordinate,
    find_bbox_violations,
)
from .thin_walls import check_thin_walls
from .small_features import check_small_features
from .connectivity import check_connectivity, is_floating

__all__ = [
    'detect_axis_alignment',
    'smallest_extent',
    'sort_by_coordinate',
    'find_bbox_violations',
    'check_thin_walls',
    'check_small_features',
    'check_connectivity',
    'is_floating',
]
