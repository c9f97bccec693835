#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/config.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .color import to_hex, to_rgb
from .math_utils import Vec3
from .shading import DepthCue

DEPTH_KEYS = ('average', 'max')
RENDER_MODES = ('solid', 'wireframe', 'solid-wireframe')
SHADING_MODES = ('flat', 'gradient', 'none')

# Directions the light travels in
LIGHT_PRESETS = {
    'front': (0.0, 0.0, -1.0),
    'top': (0.0, -1.0, 0.0),
    'side': (-1.0, 0.0, 0.0),
}


@dataclass
class RenderConfig:
    """Configuration for the scene rendering pipeline."""
    cull_backfaces: bool = True
    cull_epsilon: float = 1e-3
    depth_sort: bool = True
    depth_key: str = 'average'
    render_mode: str = 'solid'
    shading_mode: str = 'flat'
    ambient_light: float = 0.2
    light_direction: Vec3 = field(default_factory=lambda: Vec3(*LIGHT_PRESETS['front']))
    base_tone: str = '#111111'
    fog_start: float = 6.0
    fog_end: float = 30.0
    fog_exp: float = 0.6
    wireframe_color: str = '#000000'
    wireframe_width: float = 1.0
    max_visible_faces: Optional[int] = 5000

    # Derived from the settings above
    depth_cue: Optional[DepthCue] = field(init=False, repr=False, default=None)
    base_rgb: Tuple[int, int, int] = field(init=False, repr=False, default=(0, 0, 0))

    def __post_init__(self):
        if self.depth_key not in DEPTH_KEYS:
            raise ValueError(f"depth_key must be one of {DEPTH_KEYS}, got {self.depth_key!r}")
        if self.render_mode not in RENDER_MODES:
            raise ValueError(f"render_mode must be one of {RENDER_MODES}, got {self.render_mode!r}")
        if self.shading_mode not in SHADING_MODES:
            raise ValueError(
                f"shading_mode must be one of {SHADING_MODES}, got {self.shading_mode!r}")
        if self.cull_epsilon < 0:
            raise ValueError("cull_epsilon must be non-negative")
        if self.max_visible_faces is not None and self.max_visible_faces < 1:
            raise ValueError("max_visible_faces must be positive or None")
        self.ambient_light = max(0.0, min(1.0, float(self.ambient_light)))
        self.base_tone = to_hex(to_rgb(self.base_tone))
        self.wireframe_color = to_hex(to_rgb(self.wireframe_color))
        self.set_light_direction(self.light_direction)
        self.init_depth_cue()

    def init_depth_cue(self):
        """Update the derived depth cue and base tone after parameter changes."""
        self.depth_cue = DepthCue(self.fog_start, self.fog_end, self.fog_exp)
        self.base_rgb = to_rgb(self.base_tone)

    def set_light_direction(self, direction) -> 'RenderConfig':
        """Accepts 'front', 'top', 'side' or any non-zero 3D vector."""
        if isinstance(direction, str):
            try:
                direction = LIGHT_PRESETS[direction]
            except KeyError:
                raise ValueError(f"Unknown light preset {direction!r}") from None
        vec = Vec3.of(direction).normalize()
        if vec.length() == 0:
            raise ValueError("light_direction must be non-zero")
        self.light_direction = vec
        return self

    def with_overrides(self, **overrides) -> 'RenderConfig':
        """Return a validated copy; unknown keys raise TypeError."""
        return replace(self, **overrides)
