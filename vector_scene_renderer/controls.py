#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/controls.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
import math
from typing import Optional, Tuple

from .camera import Camera, ProjectionMode, spherical_offset
from .math_utils import Vec3, clamp, lerp, wrap_angle, shortest_angle_delta

logger = logging.getLogger(__name__)

# Key bindings for on_key
VIEW_KEYS = {
    '1': 'front',
    '2': 'back',
    '3': 'top',
    '4': 'bottom',
    '5': 'left',
    '6': 'right',
    '7': 'user',
}
SAVE_USER_VIEW_KEY = '8'
TOGGLE_PROJECTION_KEY = '0'
TOGGLE_AUTO_ROTATE_KEY = ' '


class OrbitController:
    """
    Orbit camera driven by pointer, wheel and keyboard input.

    The camera sits on a sphere around `target`: `phi` is the polar angle
    from +Y, clamped to [min_polar_angle, max_polar_angle] so the up
    direction never flips; `theta` is the azimuth around Y, kept in
    [0, 2π). Auto-rotate advances theta in `update(dt)` and is switched
    off by a drag or a view preset selection.

    The controller owns no timer. The host calls `update(dt)` once per
    frame with the elapsed seconds.
    """

    def __init__(self, camera: Camera, target=(0.0, 0.0, 0.0),
                 distance: float = 8.0, phi: float = math.pi / 2, theta: float = 0.0,
                 min_distance: float = 2.0, max_distance: float = 20.0,
                 min_polar_angle: float = 0.1, max_polar_angle: float = math.pi - 0.1,
                 rotate_speed: float = 0.005, zoom_speed: float = 0.001,
                 min_zoom: float = 0.1, max_zoom: float = 4.0,
                 auto_rotate: bool = True, auto_rotate_speed: float = 1.5,
                 view_transition_speed: float = 8.0):
        if min_distance <= 0 or min_distance > max_distance:
            raise ValueError("need 0 < min_distance <= max_distance")
        if not 0 < min_polar_angle <= max_polar_angle < math.pi:
            raise ValueError("need 0 < min_polar_angle <= max_polar_angle < pi")
        self.camera = camera
        self.target = Vec3.of(target)
        self.min_distance = min_distance
        self.max_distance = max_distance
        self.min_polar_angle = min_polar_angle
        self.max_polar_angle = max_polar_angle
        self.rotate_speed = rotate_speed
        self.zoom_speed = zoom_speed
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.auto_rotate = auto_rotate
        self.auto_rotate_speed = auto_rotate_speed   # degrees per second
        self.view_transition_speed = view_transition_speed

        self.distance = clamp(distance, min_distance, max_distance)
        self.phi = clamp(phi, min_polar_angle, max_polar_angle)
        self.theta = wrap_angle(theta)

        self.is_dragging = False
        self.last_x = 0.0
        self.last_y = 0.0
        self.goal: Optional[Tuple[float, float]] = None

        self._update_camera_position()

    def __repr__(self):
        return (f"OrbitController(distance={self.distance:.2f}, phi={self.phi:.3f}, "
                f"theta={self.theta:.3f}, auto_rotate={self.auto_rotate})")

    # ── Pointer / wheel ─────────────────────────────────────────────────
    def on_pointer_down(self, x: float, y: float, button: int = 0):
        if button != 0:
            return
        self.is_dragging = True
        self.last_x, self.last_y = x, y
        self.auto_rotate = False
        self.goal = None

    def on_pointer_move(self, x: float, y: float):
        if not self.is_dragging:
            return
        dx = x - self.last_x
        dy = y - self.last_y
        if not (math.isfinite(dx) and math.isfinite(dy)):
            return
        self.last_x, self.last_y = x, y
        self.theta = wrap_angle(self.theta - dx * self.rotate_speed)
        self.phi = clamp(self.phi + dy * self.rotate_speed,
                         self.min_polar_angle, self.max_polar_angle)
        self._update_camera_position()

    def on_pointer_up(self, x: float = 0.0, y: float = 0.0, button: int = 0):
        if button == 0:
            self.is_dragging = False

    def on_wheel(self, delta_y: float):
        """Positive delta zooms out: farther in perspective, smaller zoom in orthographic."""
        if not math.isfinite(delta_y):
            return
        if self.camera.mode is ProjectionMode.PERSPECTIVE:
            self.distance = clamp(self.distance * (1.0 + delta_y * self.zoom_speed),
                                  self.min_distance, self.max_distance)
            self._update_camera_position()
        else:
            zoom = clamp(self.camera.zoom * (1.0 - delta_y * self.zoom_speed),
                         self.min_zoom, self.max_zoom)
            self.camera.set_zoom(zoom)

    # ── Keyboard ────────────────────────────────────────────────────────
    def on_key(self, key: str) -> bool:
        """Handle a key press; returns False for keys without a binding."""
        if key == TOGGLE_AUTO_ROTATE_KEY:
            self.set_auto_rotate(not self.auto_rotate)
        elif key in VIEW_KEYS:
            self.set_view(VIEW_KEYS[key])
        elif key == SAVE_USER_VIEW_KEY:
            self.save_user_view()
        elif key == TOGGLE_PROJECTION_KEY:
            self.camera.toggle_projection()
        else:
            return False
        return True

    # ── Views ───────────────────────────────────────────────────────────
    def set_auto_rotate(self, enabled: bool):
        self.auto_rotate = bool(enabled)

    def set_target(self, target):
        self.target = Vec3.of(target)
        self._update_camera_position()

    def set_view(self, name: str) -> bool:
        """
        Start a smooth transition to a named preset.

        Spherical presets become a (phi, theta) goal that `update` eases
        towards; explicit position presets are applied immediately and the
        orbit angles re-derived from the new camera position. A stored
        rotation is kept as is; the orbit re-aims at the target on the next
        drag, wheel or update step that moves the camera.
        """
        preset = self.camera.views.get(name)
        if preset is None:
            logger.warning("View %r not found", name)
            return False
        self.auto_rotate = False
        if preset.is_spherical:
            self.camera.set_view(name, teleport=False)
            self.goal = (clamp(preset.phi, self.min_polar_angle, self.max_polar_angle),
                         wrap_angle(preset.theta))
        else:
            self.goal = None
            self.camera.set_view(name, teleport=True)
            self.sync_from_camera(aim=preset.rotation is None)
        return True

    def save_user_view(self):
        self.camera.save_user_view(self.phi, self.theta)

    def sync_from_camera(self, aim: bool = True):
        """
        Re-derive distance, phi and theta from the camera's current position.

        With aim=False the camera is left where it is, rotation included.
        """
        offset = self.camera.position - self.target
        dist = offset.length()
        if dist == 0:
            return
        self.distance = clamp(dist, self.min_distance, self.max_distance)
        self.phi = clamp(math.acos(clamp(offset.y / dist, -1.0, 1.0)),
                         self.min_polar_angle, self.max_polar_angle)
        self.theta = wrap_angle(math.atan2(offset.x, offset.z))
        if aim:
            self._update_camera_position()

    # ── Per-frame update ────────────────────────────────────────────────
    def update(self, dt: float):
        """Advance a pending view transition or auto-rotate by dt seconds."""
        if not math.isfinite(dt) or dt <= 0:
            return
        if self.goal is not None:
            goal_phi, goal_theta = self.goal
            k = 1.0 - math.exp(-self.view_transition_speed * dt)
            d_phi = goal_phi - self.phi
            d_theta = shortest_angle_delta(self.theta, goal_theta)
            if abs(d_phi) < 1e-4 and abs(d_theta) < 1e-4:
                self.phi, self.theta = goal_phi, goal_theta
                self.goal = None
            else:
                self.phi = clamp(lerp(self.phi, goal_phi, k),
                                 self.min_polar_angle, self.max_polar_angle)
                self.theta = wrap_angle(self.theta + d_theta * k)
        elif self.auto_rotate:
            self.theta = wrap_angle(self.theta + math.radians(self.auto_rotate_speed) * dt)
        else:
            return
        self._update_camera_position()

    def _update_camera_position(self):
        if not math.isfinite(self.distance):
            reset = (self.min_distance + self.max_distance) / 2
            logger.warning("Non-finite orbit distance %r, resetting to %.2f", self.distance, reset)
            self.distance = reset
        self.camera.position = self.target + spherical_offset(self.distance, self.phi, self.theta)
        self.camera.look_at(self.target)
