#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/geometry.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

"""
Primitive shape generators.

Every generator is a pure function returning a Geometry of local-space
vertices and faces. Faces are lists of vertex indices wound so that the
right-hand rule yields an outward normal.
"""

import math
from enum import Enum
from typing import List, NamedTuple

from .math_utils import Vec3, TWO_PI


class ShapeKind(Enum):
    GENERIC = 'generic'
    BOX = 'box'
    SPHERE = 'sphere'
    PYRAMID = 'pyramid'
    PLANE = 'plane'
    CYLINDER = 'cylinder'


class Geometry(NamedTuple):
    vertices: List[Vec3]
    faces: List[List[int]]


def box(width: float = 1.0, height: float = 1.0, depth: float = 1.0) -> Geometry:
    """Axis-aligned box centred at the origin; faces ordered +X, -X, +Y, -Y, +Z, -Z."""
    w2, h2, d2 = width / 2, height / 2, depth / 2
    vertices = [
        Vec3(-w2, -h2, -d2), Vec3( w2, -h2, -d2), Vec3( w2,  h2, -d2), Vec3(-w2,  h2, -d2),
        Vec3(-w2, -h2,  d2), Vec3( w2, -h2,  d2), Vec3( w2,  h2,  d2), Vec3(-w2,  h2,  d2),
    ]
    faces = [
        [1, 2, 6, 5],  # +X
        [0, 4, 7, 3],  # -X
        [3, 7, 6, 2],  # +Y
        [0, 1, 5, 4],  # -Y
        [4, 5, 6, 7],  # +Z
        [0, 3, 2, 1],  # -Z
    ]
    return Geometry(vertices, faces)


def sphere(radius: float = 1.0, lat_segments: int = 12, lon_segments: int = 12) -> Geometry:
    """
    Latitude/longitude sphere with (lat_segments+1)*(lon_segments+1) vertices.

    Pole vertices are duplicated once per longitude, so the first and last
    rows of quads each collapse to a triangle with one repeated vertex.
    """
    lat_segments, lon_segments = int(lat_segments), int(lon_segments)
    if lat_segments < 2 or lon_segments < 3:
        raise ValueError("sphere needs lat_segments >= 2 and lon_segments >= 3")
    vertices = []
    for lat in range(lat_segments + 1):
        polar = lat * math.pi / lat_segments
        sin_p, cos_p = math.sin(polar), math.cos(polar)
        for lon in range(lon_segments + 1):
            azimuth = lon * TWO_PI / lon_segments
            vertices.append(Vec3(radius * sin_p * math.cos(azimuth),
                                 radius * cos_p,
                                 radius * sin_p * math.sin(azimuth)))

    faces = []
    row = lon_segments + 1
    for lat in range(lat_segments):
        for lon in range(lon_segments):
            first = lat * row + lon
            second = first + row
            faces.append([first, first + 1, second + 1, second])
    return Geometry(vertices, faces)


def pyramid(base_size: float = 1.0, height: float = 1.0) -> Geometry:
    """Square pyramid: apex at y = -height/2, base quad at y = +height/2."""
    b2, h2 = base_size / 2, height / 2
    vertices = [
        Vec3(0, -h2, 0),       # apex
        Vec3(-b2, h2, -b2),
        Vec3( b2, h2, -b2),
        Vec3( b2, h2,  b2),
        Vec3(-b2, h2,  b2),
    ]
    faces = [
        [0, 1, 2],     # -Z side
        [0, 2, 3],     # +X side
        [0, 3, 4],     # +Z side
        [0, 4, 1],     # -X side
        [1, 4, 3, 2],  # base
    ]
    return Geometry(vertices, faces)


def plane(width: float = 1.0, height: float = 1.0,
          width_segments: int = 1, height_segments: int = 1,
          orientation: str = 'xy') -> Geometry:
    """
    Regular grid of quads centred at the origin.

    orientation 'xy' faces +Z; 'xz' lies flat (a floor grid) and faces +Y.
    """
    if orientation not in ('xy', 'xz'):
        raise ValueError(f"orientation must be 'xy' or 'xz', got {orientation!r}")
    nx, ny = int(width_segments), int(height_segments)
    if nx < 1 or ny < 1:
        raise ValueError("plane needs at least one segment per axis")
    dx, dy = width / nx, height / ny
    vertices = []
    for j in range(ny + 1):
        for i in range(nx + 1):
            u = -width / 2 + i * dx
            v = -height / 2 + j * dy
            if orientation == 'xy':
                vertices.append(Vec3(u, v, 0.0))
            else:
                # Rows advance towards -Z so the winding faces +Y
                vertices.append(Vec3(u, 0.0, -v))

    faces = []
    row = nx + 1
    for j in range(ny):
        for i in range(nx):
            a = j * row + i
            faces.append([a, a + 1, a + 1 + row, a + row])
    return Geometry(vertices, faces)


def cylinder(radius: float = 0.5, height: float = 1.0, segments: int = 16) -> Geometry:
    """Capped cylinder along Y: quad walls, triangle fans for both caps."""
    segments = int(segments)
    if segments < 3:
        raise ValueError("cylinder needs at least 3 segments")
    h2 = height / 2
    vertices = [Vec3(0, -h2, 0), Vec3(0, h2, 0)]  # bottom centre, top centre
    for i in range(segments):
        angle = i * TWO_PI / segments
        x, z = radius * math.sin(angle), radius * math.cos(angle)
        vertices.append(Vec3(x, -h2, z))
        vertices.append(Vec3(x, h2, z))

    faces = []
    for i in range(segments):
        bottom = 2 + i * 2
        top = bottom + 1
        next_bottom = 2 + ((i + 1) % segments) * 2
        next_top = next_bottom + 1
        faces.append([bottom, next_bottom, next_top, top])
        faces.append([1, top, next_top])
        faces.append([0, next_bottom, bottom])
    return Geometry(vertices, faces)


_GENERATORS = {
    ShapeKind.BOX: box,
    ShapeKind.SPHERE: sphere,
    ShapeKind.PYRAMID: pyramid,
    ShapeKind.PLANE: plane,
    ShapeKind.CYLINDER: cylinder,
}


def make_shape(kind, **params) -> Geometry:
    """Build geometry for a ShapeKind (or its string value)."""
    kind = ShapeKind(kind)
    try:
        generator = _GENERATORS[kind]
    except KeyError:
        raise ValueError(f"No generator for shape kind {kind.value!r}") from None
    return generator(**params)
