#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/mesh.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
import numbers
from typing import List, Optional, Sequence, Union

from .errors import InvalidGeometryError
from .geometry import Geometry, ShapeKind, make_shape
from .material import Material
from .math_utils import Vec3
from .node import Node, NodeKind

logger = logging.getLogger(__name__)


class Mesh(Node):
    """
    Scene node carrying local-space polygon geometry.

    Faces are validated on construction: each needs at least 3 indices and
    every index must address an existing vertex. Materials are either one
    Material shared by all faces or a list with exactly one per face.
    """
    kind = NodeKind.MESH

    def __init__(self, vertices: Sequence = (), faces: Sequence[Sequence[int]] = (),
                 materials: Union[Material, Sequence[Material], None] = None,
                 name: str = 'Mesh', shape: ShapeKind = ShapeKind.GENERIC):
        super().__init__(name)
        self.shape = ShapeKind(shape)
        self.vertices: List[Vec3] = _coerce_vertices(vertices)
        self.faces: List[List[int]] = _validate_faces(faces, len(self.vertices))
        self.materials: List[Material] = _coerce_materials(materials, len(self.faces))

    def material_for(self, face_index: int) -> Material:
        if len(self.materials) == 1:
            return self.materials[0]
        return self.materials[face_index]

    def set_material(self, material: Material) -> 'Mesh':
        """Share one material across every face."""
        self.materials = [material]
        return self

    @classmethod
    def from_geometry(cls, geometry: Geometry, materials=None, name: str = 'Mesh',
                      shape: ShapeKind = ShapeKind.GENERIC) -> 'Mesh':
        return cls(geometry.vertices, geometry.faces, materials, name=name, shape=shape)

    @classmethod
    def from_shape(cls, kind, materials=None, name: Optional[str] = None, **params) -> 'Mesh':
        """Factory method to create a mesh from a primitive generator."""
        kind = ShapeKind(kind)
        return cls.from_geometry(make_shape(kind, **params), materials,
                                 name=name or kind.value.capitalize(), shape=kind)

    @classmethod
    def from_obj(cls, filename, materials=None, name: Optional[str] = None) -> 'Mesh':
        """Factory method to create a mesh from a Wavefront OBJ file.

        Only 'v' and 'f' records are read; 'v/vt/vn' face tokens keep the
        position index. Negative indices count back from the last vertex
        read so far. I/O errors propagate unchanged.
        """
        vertices = []
        faces = []
        with open(filename, 'r') as f:
            for lineno, line in enumerate(f, 1):
                try:
                    if line.startswith('v '):
                        vertices.append([float(x) for x in line.split()[1:4]])
                    elif line.startswith('f '):
                        face = []
                        for token in line.split()[1:]:
                            idx = int(token.split('/')[0])
                            face.append(idx - 1 if idx > 0 else len(vertices) + idx)
                        faces.append(face)
                except ValueError as exc:
                    raise InvalidGeometryError(f"{filename}:{lineno}: {exc}") from exc

        if not vertices or not faces:
            raise InvalidGeometryError(f"{filename}: no geometry found")
        logger.debug("Loaded %s: %d vertices, %d faces", filename, len(vertices), len(faces))
        return cls(vertices, faces, materials, name=name or str(filename))


def _coerce_vertices(vertices) -> List[Vec3]:
    result = []
    for i, v in enumerate(vertices):
        try:
            vec = Vec3.of(v)
        except (TypeError, ValueError) as exc:
            raise InvalidGeometryError(f"vertex {i} is not a 3D point: {v!r}") from exc
        if not vec.is_finite():
            raise InvalidGeometryError(f"vertex {i} is not finite: {vec!r}")
        result.append(vec)
    return result


def _validate_faces(faces, vertex_count: int) -> List[List[int]]:
    result = []
    for fi, face in enumerate(faces):
        face = list(face)
        if len(face) < 3:
            raise InvalidGeometryError(f"face {fi} has {len(face)} indices, needs at least 3")
        for idx in face:
            if isinstance(idx, bool) or not isinstance(idx, numbers.Integral):
                raise InvalidGeometryError(f"face {fi} has non-integer index {idx!r}")
            if idx < 0 or idx >= vertex_count:
                raise InvalidGeometryError(
                    f"face {fi} references vertex {idx}, mesh has {vertex_count}")
        result.append([int(idx) for idx in face])
    return result


def _coerce_materials(materials, face_count: int) -> List[Material]:
    if materials is None:
        return [Material()]
    if isinstance(materials, Material):
        return [materials]
    materials = list(materials)
    if len(materials) == 1:
        return materials
    if len(materials) != face_count:
        raise InvalidGeometryError(
            f"{len(materials)} materials given for {face_count} faces")
    return materials
