import json
import logging
from pathlib import Path
from typing import List, Union

import trimesh

from ..errors import CatalogError, MeshLoadError
from ..parameters import ParameterDef

logger = logging.getLogger(__name__)


def load_mesh(path: Union[str, Path], process: bool = True) -> trimesh.Trimesh:
    """
    Load a mesh file (STL, OBJ, PLY, 3MF, ...) into a single Trimesh.

    - Uses trimesh.load (lets trimesh handle file type detection).
    - If a Scene is returned, concatenates all geometries into one mesh.
    """
    path = Path(path)
    if not path.exists():
        raise MeshLoadError(f"Mesh file not found: {path}")

    try:
        mesh = trimesh.load(str(path), force="mesh", process=process)
    except Exception as e:
        raise MeshLoadError(f"Failed to read mesh {path}: {e}") from e

    if isinstance(mesh, trimesh.Scene):
        if not mesh.geometry:
            raise MeshLoadError(f"No geometry found in {path}")
        mesh = trimesh.util.concatenate(mesh.dump())

    if not isinstance(mesh, trimesh.Trimesh):
        raise MeshLoadError(f"Loaded object is not a Trimesh: {type(mesh)}")

    mesh.remove_unreferenced_vertices()
    logger.debug("Loaded %s: %d vertices, %d faces", path, len(mesh.vertices), len(mesh.faces))
    return mesh


def load_parameter_catalog(path: Union[str, Path]) -> List[ParameterDef]:
    """
    Load a generator parameter catalog from JSON.

    The file holds either a list of parameter definitions or an object with
    a "parameters" list.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise CatalogError(f"Parameter catalog not found: {path}")
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in parameter catalog {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("parameters")
    if not isinstance(data, list):
        raise CatalogError(f"Parameter catalog {path} must contain a list of parameters")

    try:
        return [ParameterDef.from_dict(d) for d in data]
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Malformed parameter definition in {path}: {e}") from e
