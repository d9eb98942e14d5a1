from typing import Any

import numpy as np

from ..models import BBox, GeometryStats
from .kernel import GeometryKernel


def to_bbox(bounds: Any) -> BBox:
    """
    Convert kernel-native bounds into a BBox.

    Accepts a (2, 3) array-like of [min, max] rows, a mapping with "min" and
    "max" keys, or an object exposing .min and .max attributes.
    """
    if isinstance(bounds, BBox):
        return bounds
    if isinstance(bounds, dict):
        lo, hi = bounds["min"], bounds["max"]
    elif hasattr(bounds, "min") and hasattr(bounds, "max") and not isinstance(bounds, np.ndarray):
        lo, hi = bounds.min, bounds.max
    else:
        arr = np.asarray(bounds, dtype=float).reshape(2, 3)
        lo, hi = arr[0], arr[1]

    return BBox(
        min=tuple(float(v) for v in lo),
        max=tuple(float(v) for v in hi),
    )


def compute_stats(kernel: GeometryKernel, solid: Any) -> GeometryStats:
    """
    Compute global geometry statistics for a solid.

    The center of mass is approximated by the bounding box midpoint.
    """
    bbox = to_bbox(kernel.bounding_box(solid))

    return GeometryStats(
        volume=float(kernel.volume(solid)),
        surface_area=float(kernel.surface_area(solid)),
        bbox=bbox,
        center_of_mass=bbox.center,
        triangle_count=int(kernel.triangle_count(solid)),
    )
