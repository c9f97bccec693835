#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/material.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from dataclasses import dataclass, replace

from .color import to_rgb, to_hex


@dataclass
class Material:
    """
    Surface attributes for a face or a whole mesh.

    color may be '#RRGGBB', '#RGB', a CSS name or an (r, g, b) tuple; it is
    normalized to lowercase '#rrggbb'. Opacity is clamped to [0, 1]. A
    wireframe material renders its faces as outlines only.
    """
    color: str = '#ffffff'
    opacity: float = 1.0
    wireframe: bool = False
    wireframe_color: str = '#000000'
    wireframe_width: float = 1.0
    visible: bool = True

    def __post_init__(self):
        self.color = to_hex(to_rgb(self.color))
        self.wireframe_color = to_hex(to_rgb(self.wireframe_color))
        self.opacity = max(0.0, min(1.0, float(self.opacity)))

    @property
    def rgb(self):
        return to_rgb(self.color)

    @property
    def transparent(self) -> bool:
        return self.opacity < 1.0

    def set_color(self, color) -> 'Material':
        self.color = to_hex(to_rgb(color))
        return self

    def set_opacity(self, value: float) -> 'Material':
        self.opacity = max(0.0, min(1.0, float(value)))
        return self

    def set_wireframe(self, enabled: bool, color=None, width=None) -> 'Material':
        self.wireframe = bool(enabled)
        if color is not None:
            self.wireframe_color = to_hex(to_rgb(color))
        if width is not None:
            self.wireframe_width = float(width)
        return self

    def clone(self) -> 'Material':
        return replace(self)


# Per-side palette for six-faced primitives: +X, -X, +Y, -Y, +Z, -Z
DEFAULT_FACE_COLORS = ('#ff0000', '#00ff00', '#0000ff', '#ffff00', '#ff00ff', '#00ffff')
