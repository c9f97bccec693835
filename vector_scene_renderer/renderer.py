#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/renderer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
import math
import time
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .camera import Camera, Projector
from .config import RenderConfig
from .math_utils import Vec3, newell_normal
from .mesh import Mesh
from .scene import Scene
from .shading import shade

logger = logging.getLogger(__name__)

Point2 = Tuple[float, float]

# Projected polygons with less area than this (square pixels) are collinear
MIN_SCREEN_AREA = 1e-9


@dataclass(frozen=True)
class Polygon:
    """One face ready for a 2D vector drawing surface, in draw order."""
    points: Tuple[Point2, ...]
    fill_color: str
    stroke_color: str
    stroke_width: float
    opacity: float
    owner_id: int
    depth: float


@dataclass
class RenderStats:
    visible_models: int = 0
    rendered_faces: int = 0
    culled_faces: int = 0
    frame_time_ms: float = 0.0

    def summary(self) -> str:
        return (f"OBJ:{self.visible_models} | F:{self.rendered_faces}"
                f" culled:{self.culled_faces} | {self.frame_time_ms:.1f}ms")


class Frame(NamedTuple):
    polygons: List[Polygon]
    stats: RenderStats


def polygon_area(points: Sequence[Point2]) -> float:
    """Signed shoelace area; front faces come out negative on a y-down screen."""
    area = 0.0
    n = len(points)
    for i in range(n):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return area * 0.5


def contains_point(points: Sequence[Point2], x: float, y: float) -> bool:
    """Even-odd point-in-polygon test."""
    inside = False
    n = len(points)
    j = n - 1
    for i in range(n):
        xi, yi = points[i]
        xj, yj = points[j]
        if (yi > y) != (yj > y):
            if x < (xj - xi) * (y - yi) / (yj - yi) + xi:
                inside = not inside
        j = i
    return inside


def pick(polygons: Sequence[Polygon], x: float, y: float) -> Optional[int]:
    """Owner id of the topmost polygon under (x, y), or None."""
    for poly in reversed(polygons):
        if contains_point(poly.points, x, y):
            return poly.owner_id
    return None


class SceneRenderer:
    """
    Painter's-algorithm renderer producing 2D polygon records.

    render(scene, camera) runs one frame:
      1. Snapshot the camera (one Projector per frame)
      2. Walk the scene depth-first, composing world matrices
      3. Per face: world normal → backface cull → visibility →
         degenerate check → shading → depth key
      4. Stable sort of all faces in the scene, farthest first
      5. Keep the nearest max_visible_faces

    A face that faults during processing is logged, counted as culled and
    skipped; one bad mesh never blanks the frame.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config if config is not None else RenderConfig()
        self.stats = RenderStats()

    def render(self, scene: Scene, camera: Camera) -> Frame:
        start_time = time.perf_counter()
        config = self.config
        projector = camera.projector()
        stats = RenderStats()
        polygons: List[Polygon] = []

        for node, world in scene.walk_world():
            if not isinstance(node, Mesh) or not node.faces:
                continue
            try:
                world_vertices = [world.mul_vec3(v) for v in node.vertices]
                projected = [projector.project(v) for v in world_vertices]
            except ArithmeticError as exc:
                logger.warning("Skipping %r: projection failed: %s", node, exc)
                stats.culled_faces += len(node.faces)
                continue

            for face_index, face in enumerate(node.faces):
                material = node.material_for(face_index)
                if not material.visible:
                    continue
                try:
                    poly = self._process_face(node.id, face, material, world_vertices,
                                              projected, projector)
                except (ArithmeticError, IndexError, ValueError) as exc:
                    logger.warning("Dropping face %d of %r: %s", face_index, node, exc)
                    poly = None
                if poly is None:
                    stats.culled_faces += 1
                else:
                    polygons.append(poly)

        if config.depth_sort:
            # list.sort is stable: equal depths keep traversal order
            polygons.sort(key=lambda p: -p.depth)
        limit = config.max_visible_faces
        if limit is not None and len(polygons) > limit:
            stats.culled_faces += len(polygons) - limit
            polygons = polygons[-limit:] if config.depth_sort else polygons[:limit]

        stats.rendered_faces = len(polygons)
        stats.visible_models = len({p.owner_id for p in polygons})
        stats.frame_time_ms = (time.perf_counter() - start_time) * 1000.0
        self.stats = stats
        logger.debug("Frame: %s", stats.summary())
        return Frame(polygons, stats)

    def _process_face(self, owner_id, face, material, world_vertices, projected,
                      projector: Projector) -> Optional[Polygon]:
        config = self.config
        points3 = [world_vertices[i] for i in face]

        normal = newell_normal(points3)
        length = normal.length()
        if length < 1e-12:
            return None
        normal = normal / length

        n = len(points3)
        center = Vec3(sum(p.x for p in points3) / n,
                      sum(p.y for p in points3) / n,
                      sum(p.z for p in points3) / n)
        facing = normal.dot(projector.view_direction(center))
        if config.cull_backfaces and facing >= -config.cull_epsilon:
            return None
        if facing > 0:
            normal = -normal  # back side is showing; light it as seen

        proj = [projected[i] for i in face]
        for p in proj:
            if not p.visible or not (math.isfinite(p.x) and math.isfinite(p.y)):
                return None
        points = tuple((p.x, p.y) for p in proj)
        if abs(polygon_area(points)) < MIN_SCREEN_AREA:
            return None

        if config.depth_key == 'max':
            depth = max(p.z for p in proj)
        else:
            depth = sum(p.z for p in proj) / len(proj)

        color = shade(material.rgb, normal, depth, config)
        if material.wireframe:
            fill, stroke, width = 'none', material.wireframe_color, material.wireframe_width
        elif config.render_mode == 'wireframe':
            fill, stroke, width = 'none', color, config.wireframe_width
        elif config.render_mode == 'solid-wireframe':
            fill, stroke, width = color, config.wireframe_color, config.wireframe_width
        else:
            fill, stroke, width = color, 'none', 0.0

        return Polygon(points, fill, stroke, width, material.opacity, owner_id, depth)
