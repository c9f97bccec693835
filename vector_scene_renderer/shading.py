#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/shading.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from .color import adjust_brightness, mix_rgb, to_hex
from .math_utils import Vec3


class DepthCue:
    """
    Maps camera-space depth to a 0..1 fade factor:
    - 0 up to fog_start (pure surface color)
    - (rel ** fog_exp) between fog_start and fog_end
    - 1 beyond fog_end (pure base tone)
    """
    __slots__ = ('fog_start', 'fog_end', 'fog_exp', 'span')

    def __init__(self, fog_start: float, fog_end: float, fog_exp: float):
        self.fog_start = fog_start
        self.fog_end = fog_end
        self.fog_exp = fog_exp
        self.span = fog_end - fog_start
        if self.span <= 0:
            self.span = 1e-9

    def factor(self, depth: float) -> float:
        if depth <= self.fog_start:
            return 0.0
        if depth >= self.fog_end:
            return 1.0
        rel = (depth - self.fog_start) / self.span
        return rel ** self.fog_exp


def lambert(normal: Vec3, light_direction: Vec3, ambient: float) -> float:
    """Flat intensity in [ambient, 1]; light_direction is the direction light travels."""
    diffuse = -normal.dot(light_direction)
    if diffuse < 0.0:
        diffuse = 0.0
    return ambient + (1.0 - ambient) * diffuse


def shade(rgb, normal: Vec3, depth: float, config) -> str:
    """
    Face fill color for a unit normal that faces the camera.

    'flat' scales the color by the Lambert intensity, 'gradient' blends it
    towards the base tone by unlit fraction and then by depth cue, 'none'
    returns the material color unchanged.
    """
    mode = config.shading_mode
    if mode == 'none':
        return to_hex(rgb)
    intensity = lambert(normal, config.light_direction, config.ambient_light)
    if mode == 'flat':
        return to_hex(adjust_brightness(rgb, intensity))
    lit = mix_rgb(rgb, config.base_rgb, 1.0 - intensity)
    return to_hex(mix_rgb(lit, config.base_rgb, config.depth_cue.factor(depth)))
