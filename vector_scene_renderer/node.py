#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/node.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from enum import Enum
from typing import List, Optional

from .math_utils import Vec3, Transform


class NodeKind(Enum):
    SCENE = 'Scene'
    MESH = 'Mesh'
    OBJECT3D = 'Object3D'


class Node:
    """
    Scene graph node.

    Nodes are addressed by the integer id the owning Scene assigns on
    registration. Structure is stored as ids only: `parent` is the parent's
    id (or None) and `children` is the ordered list of child ids. Only the
    Scene mutates these.
    """
    kind = NodeKind.OBJECT3D

    def __init__(self, name: str = 'Object3D', transform: Optional[Transform] = None):
        self.id: Optional[int] = None
        self.name = name
        self.transform = transform if transform is not None else Transform()
        self.parent: Optional[int] = None
        self.children: List[int] = []
        self.visible = True

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id}, name={self.name!r})"

    # ── Local transform setters ─────────────────────────────────────────
    def set_position(self, x, y, z) -> 'Node':
        self.transform.position = Vec3(x, y, z)
        return self

    def set_rotation(self, x, y, z) -> 'Node':
        """Euler angles in radians, applied X then Y then Z."""
        self.transform.rotation = Vec3(x, y, z)
        return self

    def set_scale(self, x, y, z) -> 'Node':
        self.transform.scale = Vec3(x, y, z)
        return self


class SceneRoot(Node):
    kind = NodeKind.SCENE
