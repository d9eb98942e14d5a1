from .kernel import GeometryKernel, TrimeshKernel, OwnedComponents
from .adapter import to_bbox, compute_stats

__all__ = [
    'GeometryKernel',
    'TrimeshKernel',
    'OwnedComponents',
    'to_bbox',
    'compute_stats',
]
