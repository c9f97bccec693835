#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/errors.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

"""
Construction-time exceptions.

Per-frame rendering never raises these; they surface from the scene graph and
mesh construction APIs only.
"""


class SceneError(Exception):
    """Base class for scene construction errors."""


class InvalidGeometryError(SceneError, ValueError):
    """A face references a nonexistent vertex or has fewer than 3 indices."""


class CyclicGraphError(SceneError, ValueError):
    """Reparenting would make a node its own ancestor."""


class UnknownNodeError(SceneError, KeyError):
    """A node identifier is not registered in the scene."""
