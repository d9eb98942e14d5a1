import pytest
import numpy as np
import trimesh
from pathlib import Path
import tempfile

from printability.geometry import GeometryKernel


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def make_box(extents, min_corner=(0.0, 0.0, 0.0)) -> trimesh.Trimesh:
    """Axis-aligned box mesh with its minimum corner at min_corner."""
    box = trimesh.creation.box(extents=extents)
    box.apply_translation(np.asarray(min_corner, dtype=float) - box.bounds[0])
    return box


@pytest.fixture
def box():
    """Factory for axis-aligned box meshes."""
    return make_box


@pytest.fixture
def cube_mesh():
    """Solid 10mm cube resting on the bed."""
    return make_box([10.0, 10.0, 10.0])


@pytest.fixture
def thin_plate_mesh():
    """0.5mm plate standing up on the bed, thin along X."""
    return make_box([0.5, 20.0, 20.0])


@pytest.fixture
def two_boxes_mesh():
    """One grounded box and one box floating 5mm above the bed, 10mm apart in X."""
    grounded = make_box([10.0, 10.0, 10.0])
    floating = make_box([10.0, 10.0, 10.0], min_corner=(20.0, 0.0, 5.0))
    return trimesh.util.concatenate([grounded, floating])


@pytest.fixture
def hollow_box_mesh():
    """20mm box with a sealed 10mm internal cavity (inverted inner shell)."""
    outer = make_box([20.0, 20.0, 20.0])
    inner = make_box([10.0, 10.0, 10.0], min_corner=(5.0, 5.0, 5.0))
    inner.invert()
    return trimesh.util.concatenate([outer, inner])


class FakeSolid:
    """Solid stand-in with fixed volume and bounds."""

    def __init__(self, volume, bounds, components=None, area=0.0, triangles=12):
        self.volume = volume
        self.bounds = bounds
        self.components = components or []
        self.area = area
        self.triangles = triangles


class FakeKernel(GeometryKernel):
    """
    Kernel over FakeSolid values that records every release.

    A solid without explicit components decomposes into a fresh copy of
    itself, so every decomposed handle is distinct.
    """

    def __init__(self, fail_on=None):
        self.released = []
        self.decomposed = []
        self.fail_on = fail_on

    def _maybe_fail(self, op):
        if self.fail_on == op:
            raise RuntimeError(f"kernel {op} exploded")

    def volume(self, solid):
        self._maybe_fail("volume")
        return solid.volume

    def surface_area(self, solid):
        self._maybe_fail("surface_area")
        return solid.area

    def bounding_box(self, solid):
        self._maybe_fail("bounding_box")
        return solid.bounds

    def triangle_count(self, solid):
        return solid.triangles

    def decompose(self, solid):
        self._maybe_fail("decompose")
        if solid.components:
            parts = [FakeSolid(c.volume, c.bounds, area=c.area) for c in solid.components]
        else:
            parts = [FakeSolid(solid.volume, solid.bounds, area=solid.area)]
        self.decomposed.extend(parts)
        return parts

    def release(self, solid):
        self.released.append(solid)

    def all_released_once(self) -> bool:
        ids = [id(s) for s in self.released]
        return len(ids) == len(set(ids)) and set(ids) == {id(s) for s in self.decomposed}


def fake_box(extents, min_corner=(0.0, 0.0, 0.0), volume=None) -> FakeSolid:
    lo = np.asarray(min_corner, dtype=float)
    hi = lo + np.asarray(extents, dtype=float)
    if volume is None:
        volume = float(np.prod(extents))
    return FakeSolid(volume, np.array([lo, hi]))


@pytest.fixture
def fake_kernel():
    return FakeKernel()
