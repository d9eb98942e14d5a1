"""
Geometry kernel collaborator.

The engine only queries solids through GeometryKernel. TrimeshKernel is the
default implementation over trimesh.Trimesh solids.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List

import numpy as np
import trimesh

logger = logging.getLogger(__name__)


class GeometryKernel(ABC):
    """Abstract interface to the solid-modeling kernel."""

    @abstractmethod
    def volume(self, solid: Any) -> float:
        """Signed enclosed volume in mm^3."""
        pass

    @abstractmethod
    def surface_area(self, solid: Any) -> float:
        """Surface area in mm^2."""
        pass

    @abstractmethod
    def bounding_box(self, solid: Any) -> Any:
        """Kernel-native axis-aligned bounds (see adapter.to_bbox)."""
        pass

    @abstractmethod
    def triangle_count(self, solid: Any) -> int:
        """Number of triangles in the solid's mesh."""
        pass

    @abstractmethod
    def decompose(self, solid: Any) -> List[Any]:
        """
        Split a solid into maximal connected components.

        Ownership of the returned components passes to the caller, which
        must hand each one back through release().
        """
        pass

    @abstractmethod
    def release(self, solid: Any) -> None:
        """Dispose of a component obtained from decompose()."""
        pass


class TrimeshKernel(GeometryKernel):
    """
    GeometryKernel backed by trimesh.

    Components are the face-connected pieces found by trimesh's graph
    module, returned ordered by their lowest face index so the
    decomposition order only depends on the mesh itself.
    """

    def volume(self, solid: trimesh.Trimesh) -> float:
        if len(solid.faces) == 0:
            return 0.0
        return float(solid.volume)

    def surface_area(self, solid: trimesh.Trimesh) -> float:
        return float(solid.area)

    def bounding_box(self, solid: trimesh.Trimesh) -> np.ndarray:
        if len(solid.vertices) == 0:
            return np.zeros((2, 3), dtype=float)
        return np.asarray(solid.bounds, dtype=float)

    def triangle_count(self, solid: trimesh.Trimesh) -> int:
        return int(solid.faces.shape[0])

    def decompose(self, solid: trimesh.Trimesh) -> List[trimesh.Trimesh]:
        num_faces = int(solid.faces.shape[0])
        if num_faces == 0:
            return []

        # Same graph step as Trimesh.split, which does not keep face order
        groups = trimesh.graph.connected_components(
            edges=solid.face_adjacency,
            nodes=np.arange(num_faces),
            min_len=1,
            engine="networkx",
        )
        groups = sorted((np.sort(np.asarray(g, dtype=np.int64)) for g in groups), key=lambda g: g[0])

        components = solid.submesh(groups, only_watertight=False, repair=False)
        logger.debug("Decomposed %d faces into %d components", num_faces, len(components))
        return components

    def release(self, solid: trimesh.Trimesh) -> None:
        solid._cache.clear()


class OwnedComponents:
    """
    Scope owning the components of one decomposition.

    Every component is released exactly once: either explicitly through
    release(), or when the scope exits, including on exceptions.

    Example
    -------
    >>> with OwnedComponents(kernel, solid) as components:
    ...     for component in components:
    ...         bbox = to_bbox(kernel.bounding_box(component))
    """

    def __init__(self, kernel: GeometryKernel, solid: Any):
        self.kernel = kernel
        self.solid = solid
        self.components: List[Any] = []
        self._released: set = set()

    def __enter__(self) -> List[Any]:
        self.components = list(self.kernel.decompose(self.solid))
        return self.components

    def release(self, component: Any) -> None:
        key = id(component)
        if key in self._released:
            return
        self._released.add(key)
        self.kernel.release(component)

    def __exit__(self, exc_type, exc, tb) -> bool:
        for component in self.components:
            self.release(component)
        return False
