#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/camera.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional

from .math_utils import Mat4, Vec3

logger = logging.getLogger(__name__)


class ProjectionMode(Enum):
    PERSPECTIVE = 'perspective'
    ORTHOGRAPHIC = 'orthographic'


@dataclass
class PerspectiveProjection:
    fov: float = 50.0             # vertical field of view, degrees
    aspect: Optional[float] = None  # None: follow the viewport width/height
    near: float = 0.1
    far: float = 2000.0


@dataclass
class OrthographicProjection:
    zoom: float = 1.0
    left: float = -5.0
    right: float = 5.0
    top: float = 5.0
    bottom: float = -5.0
    near: float = 0.1
    far: float = 2000.0


class ProjectedVertex(NamedTuple):
    x: float
    y: float
    z: float        # camera-space depth, grows away from the camera
    visible: bool


@dataclass
class ViewPreset:
    """Either a spherical (phi, theta) pair or an explicit position/rotation."""
    phi: Optional[float] = None
    theta: Optional[float] = None
    position: Optional[Vec3] = None
    rotation: Optional[Vec3] = None

    @property
    def is_spherical(self) -> bool:
        return self.phi is not None and self.theta is not None


STANDARD_VIEWS = ('front', 'back', 'top', 'bottom', 'left', 'right', 'user')


def default_views() -> Dict[str, ViewPreset]:
    return {
        'front':  ViewPreset(math.pi / 2, 0.0),
        'back':   ViewPreset(math.pi / 2, math.pi),
        'top':    ViewPreset(0.0, 0.0),
        'bottom': ViewPreset(math.pi, 0.0),
        'left':   ViewPreset(math.pi / 2, math.pi / 2),
        'right':  ViewPreset(math.pi / 2, -math.pi / 2),
        'user':   ViewPreset(math.pi / 4, math.pi / 4),
    }


def spherical_offset(distance: float, phi: float, theta: float) -> Vec3:
    """Offset from the orbit target for polar angle phi and azimuth theta."""
    sin_phi = math.sin(phi)
    return Vec3(distance * sin_phi * math.sin(theta),
                distance * math.cos(phi),
                distance * sin_phi * math.cos(theta))


class ViewSubscription:
    """Handle returned by Camera.subscribe; call unsubscribe() to detach."""
    __slots__ = ('_camera', 'callback')

    def __init__(self, camera: 'Camera', callback):
        self._camera = camera
        self.callback = callback

    @property
    def active(self) -> bool:
        return self._camera is not None

    def unsubscribe(self):
        if self._camera is not None:
            self._camera.unsubscribe(self)
            self._camera = None


class Projector:
    """
    Immutable per-frame snapshot of a camera's view and projection.

    The renderer takes one at the start of a frame so every vertex of the
    frame is projected against the same camera state.
    """
    __slots__ = ('mode', 'view', 'position', 'forward', 'near', 'far',
                 'center_x', 'center_y', 'focal_x', 'focal_y', 'ortho_scale')

    def __init__(self, camera: 'Camera'):
        self.mode = camera.mode
        world = camera.world_matrix()
        self.view = camera.view_matrix()
        self.position = camera.position
        self.forward = world.mul_direction(Vec3(0, 0, -1)).normalize()
        self.center_x = camera.width * 0.5
        self.center_y = camera.height * 0.5
        self.focal_x = self.focal_y = self.ortho_scale = 0.0

        if self.mode is ProjectionMode.PERSPECTIVE:
            p = camera.perspective
            aspect = p.aspect or (camera.width / camera.height)
            f = 1.0 / math.tan(math.radians(p.fov) / 2.0)
            self.focal_x = f * self.center_x / aspect
            self.focal_y = f * self.center_y
            self.near, self.far = p.near, p.far
        else:
            o = camera.orthographic
            span = abs(o.top - o.bottom) or 1.0
            self.ortho_scale = o.zoom * camera.height / span
            self.near, self.far = o.near, o.far

    def project(self, point: Vec3) -> ProjectedVertex:
        v = self.view.mul_vec3(point)
        depth = -v.z
        if self.mode is ProjectionMode.PERSPECTIVE:
            # Points at or behind the near plane never reach the division
            if depth <= self.near or depth > self.far:
                return ProjectedVertex(0.0, 0.0, depth, False)
            inv = 1.0 / depth
            return ProjectedVertex(v.x * inv * self.focal_x + self.center_x,
                                   -v.y * inv * self.focal_y + self.center_y,
                                   depth, True)
        visible = self.near <= depth <= self.far
        return ProjectedVertex(v.x * self.ortho_scale + self.center_x,
                               -v.y * self.ortho_scale + self.center_y,
                               depth, visible)

    def view_direction(self, point: Vec3) -> Vec3:
        """Unit direction from the camera towards a world point."""
        if self.mode is ProjectionMode.ORTHOGRAPHIC:
            return self.forward
        return (point - self.position).normalize()


class Camera:
    """
    Viewport camera.

    Position and Euler rotation (radians, X then Y then Z) place the camera in
    world space; it looks down its local -Z axis with +Y up. Screen space has
    its origin at the top-left of a width x height viewport with Y growing
    downwards, as on a vector drawing surface.

    A registry of named view presets supports one-click navigation. Applying
    a preset notifies every subscribed observer with (name, preset).
    """

    def __init__(self, width: float = 800, height: float = 600,
                 mode=ProjectionMode.PERSPECTIVE,
                 position=(0.0, 0.0, 8.0), target=(0.0, 0.0, 0.0),
                 fov: float = 50.0, near: float = 0.1, far: float = 2000.0):
        if not 0 < fov < 180:
            raise ValueError(f"fov must be in (0, 180) degrees, got {fov}")
        if not 0 < near < far:
            raise ValueError(f"need 0 < near < far, got near={near} far={far}")
        self.set_size(width, height)
        self.mode = ProjectionMode(mode)
        self.perspective = PerspectiveProjection(fov=fov, near=near, far=far)
        self.orthographic = OrthographicProjection(near=near, far=far)
        self.position = Vec3.of(position)
        self.rotation = Vec3(0, 0, 0)
        self.target = Vec3.of(target)
        self.views: Dict[str, ViewPreset] = default_views()
        self.current_view = 'user'
        self._subscriptions: List[ViewSubscription] = []
        self.look_at(self.target)

    def __repr__(self):
        return (f"Camera({self.mode.value}, position={self.position!r}, "
                f"rotation={self.rotation!r})")

    # ── Placement ───────────────────────────────────────────────────────
    def set_position(self, x, y, z) -> 'Camera':
        self.position = Vec3(x, y, z)
        return self

    def set_rotation(self, x, y, z) -> 'Camera':
        self.rotation = Vec3(x, y, z)
        return self

    def look_at(self, target) -> 'Camera':
        """
        Rotate so the forward axis points at target, with zero roll.

        Target equal to the position keeps the previous rotation; looking
        straight up or down keeps the previous yaw.
        """
        target = Vec3.of(target)
        self.target = target
        d = target - self.position
        length = d.length()
        if length < 1e-12:
            return self
        d = d / length
        pitch = math.asin(max(-1.0, min(1.0, d.y)))
        if math.hypot(d.x, d.z) < 1e-12:
            yaw = self.rotation.y
        else:
            yaw = math.atan2(-d.x, -d.z)
        self.rotation = Vec3(pitch, yaw, 0.0)
        return self

    def world_matrix(self) -> Mat4:
        return Mat4.translation(*self.position) @ Mat4.rotation_euler(*self.rotation)

    def view_matrix(self) -> Mat4:
        return self.world_matrix().affine_inverse()

    # ── Projection ──────────────────────────────────────────────────────
    def set_size(self, width: float, height: float) -> 'Camera':
        if not (width > 0 and height > 0):
            raise ValueError(f"viewport must be positive, got {width}x{height}")
        self.width, self.height = float(width), float(height)
        return self

    def set_projection_mode(self, mode) -> 'Camera':
        self.mode = ProjectionMode(mode)
        return self

    def toggle_projection(self) -> 'Camera':
        if self.mode is ProjectionMode.PERSPECTIVE:
            self.mode = ProjectionMode.ORTHOGRAPHIC
        else:
            self.mode = ProjectionMode.PERSPECTIVE
        return self

    @property
    def zoom(self) -> float:
        return self.orthographic.zoom

    def set_zoom(self, zoom: float) -> 'Camera':
        self.orthographic.zoom = max(0.1, float(zoom))
        return self

    def projector(self) -> Projector:
        return Projector(self)

    def project_vertex(self, world_point) -> ProjectedVertex:
        """Project one world-space point to screen space."""
        return self.projector().project(Vec3.of(world_point))

    # ── View presets ────────────────────────────────────────────────────
    def set_view(self, name: str, teleport: bool = True) -> 'Camera':
        """
        Apply a named preset and notify observers.

        With teleport=False only the notification happens; an orbit
        controller uses this to move the camera smoothly itself.
        """
        preset = self.views.get(name)
        if preset is None:
            logger.warning("View %r not found", name)
            return self
        self.current_view = name
        if teleport:
            self._apply_preset(preset)
        for sub in list(self._subscriptions):
            sub.callback(name, preset)
        return self

    def _apply_preset(self, preset: ViewPreset):
        if preset.is_spherical:
            distance = self.position.distance_to(self.target) or 8.0
            self.position = self.target + spherical_offset(distance, preset.phi, preset.theta)
            self.look_at(self.target)
            return
        if preset.position is not None:
            self.position = Vec3.of(preset.position)
        if preset.rotation is not None:
            self.rotation = Vec3.of(preset.rotation)
        else:
            self.look_at(self.target)

    def save_user_view(self, phi: float, theta: float) -> 'Camera':
        self.views['user'] = ViewPreset(phi, theta)
        return self

    def add_view(self, name: str, phi: Optional[float] = None, theta: Optional[float] = None,
                 position=None, rotation=None) -> 'Camera':
        if not isinstance(name, str) or not name.strip():
            raise ValueError("view name must be a non-empty string")
        self.views[name] = ViewPreset(
            phi, theta,
            None if position is None else Vec3.of(position),
            None if rotation is None else Vec3.of(rotation))
        return self

    def remove_view(self, name: str) -> 'Camera':
        if name in STANDARD_VIEWS:
            raise ValueError(f"cannot remove standard view {name!r}")
        self.views.pop(name, None)
        return self

    def available_views(self) -> List[str]:
        return list(self.views)

    # ── Observers ───────────────────────────────────────────────────────
    def subscribe(self, callback: Callable[[str, ViewPreset], None]) -> ViewSubscription:
        if not callable(callback):
            raise TypeError("view change callback must be callable")
        sub = ViewSubscription(self, callback)
        self._subscriptions.append(sub)
        return sub

    register_view_change_callback = subscribe

    def unsubscribe(self, subscription: ViewSubscription):
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass
        subscription._camera = None
