#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
import math
import os
import time

from .camera import Camera, ProjectionMode
from .canvas import SvgCanvas
from .config import RenderConfig
from .controls import OrbitController
from .geometry import ShapeKind
from .material import Material, DEFAULT_FACE_COLORS
from .mesh import Mesh
from .scene import Scene
from .renderer import SceneRenderer

logger = logging.getLogger(__name__)


def build_demo_scene(model_path=None) -> Scene:
    """Box, sphere, pyramid, cylinder, floor grid and a nested spinning group."""
    scene = Scene('Demo')

    if model_path:
        model = Mesh.from_obj(model_path, Material('#d0dd14'), name='Model')
        scene.add(model)
        return scene

    box = Mesh.from_shape(ShapeKind.BOX, [Material(c) for c in DEFAULT_FACE_COLORS],
                          width=1.5, height=1.5, depth=1.5)
    scene.add(box.set_position(-2.2, 0.0, 0.0))

    sphere = Mesh.from_shape(ShapeKind.SPHERE, Material('#3a86ff'),
                             radius=0.9, lat_segments=12, lon_segments=16)
    scene.add(sphere.set_position(0.0, 0.0, 0.0))

    pyramid = Mesh.from_shape(ShapeKind.PYRAMID, Material('orange'), base_size=1.4, height=1.6)
    # Generated apex points down -Y; flip it upright
    scene.add(pyramid.set_position(2.2, 0.0, 0.0).set_rotation(math.pi, 0.0, 0.0))

    floor = Mesh.from_shape(ShapeKind.PLANE,
                            Material('#888888', wireframe=True, wireframe_color='#bbbbbb'),
                            name='Floor', width=10, height=10,
                            width_segments=10, height_segments=10, orientation='xz')
    scene.add(floor.set_position(0.0, -1.2, 0.0))

    group = scene.create_node('Orbiters')
    group.set_position(0.0, 1.8, 0.0)
    cylinder = Mesh.from_shape(ShapeKind.CYLINDER, Material('#2ec4b6', opacity=0.85),
                               radius=0.35, height=0.8, segments=16)
    scene.add(cylinder.set_position(1.5, 0.0, 0.0), parent=group)
    moon = Mesh.from_shape(ShapeKind.BOX, Material('#e71d36'), width=0.4, height=0.4, depth=0.4)
    scene.add(moon.set_position(0.0, 0.7, 0.0), parent=cylinder)
    return scene


class DemoApp:
    """
    Offline demo harness: drives the orbit controller with a fixed time
    step, renders each frame and writes it as an SVG file with a HUD
    caption.
    """

    def __init__(self, args):
        self.args = args

        # ── RenderConfig from CLI options ───────────────────────────────
        self.config = RenderConfig(
            cull_backfaces=not args.no_cull,
            depth_key=args.depth_key,
            render_mode=args.mode,
            shading_mode=args.shading,
            base_tone=args.base_tone,
        )
        if args.light:
            self.config.set_light_direction(args.light)

        self.scene = build_demo_scene(args.model)
        self.orbiters = self.scene.find('Orbiters')

        mode = ProjectionMode.ORTHOGRAPHIC if args.ortho else ProjectionMode.PERSPECTIVE
        self.camera = Camera(width=args.width, height=args.height, mode=mode)
        self.controller = OrbitController(self.camera, phi=math.radians(70),
                                          theta=math.radians(30),
                                          auto_rotate=not args.no_auto_rotate)
        self.camera.subscribe(self._on_view_change)

        self.renderer = SceneRenderer(self.config)
        self.canvas = SvgCanvas(args.width, args.height, background=args.bg_color)
        self.dt = 1.0 / args.fps

        for key in args.keys or '':
            if not self.controller.on_key(key):
                logger.warning("No binding for key %r", key)

    def _on_view_change(self, name, preset):
        logger.info("View changed to %s", name)

    def step(self):
        """Advance one fixed time step and render it."""
        self.controller.update(self.dt)
        if self.orbiters is not None:
            r = self.orbiters.transform.rotation
            self.orbiters.set_rotation(r.x, r.y + 0.5 * self.dt, r.z)
        return self.renderer.render(self.scene, self.camera)

    def run(self):
        os.makedirs(self.args.output, exist_ok=True)
        for frame_no in range(self.args.frames):
            start_time = time.perf_counter()
            frame = self.step()
            hdr = (f"#{frame_no:04d} | {self.camera.mode.value[:5].upper()}"
                   f" | view:{self.camera.current_view}"
                   f" | {frame.stats.summary()}")
            path = os.path.join(self.args.output, f"frame_{frame_no:04d}.svg")
            self.canvas.save(frame.polygons, path, caption=hdr if self.args.hud else None)
            ms = (time.perf_counter() - start_time) * 1000
            print(f"{hdr} | total {ms:.1f}ms -> {path}")
