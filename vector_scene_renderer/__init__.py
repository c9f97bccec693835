#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/__init__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from .math_utils import Vec3, Mat4, Transform
from .errors import SceneError, InvalidGeometryError, CyclicGraphError, UnknownNodeError
from .geometry import ShapeKind, Geometry, box, sphere, pyramid, plane, cylinder, make_shape
from .material import Material
from .node import Node, NodeKind
from .mesh import Mesh
from .scene import Scene
from .camera import Camera, ProjectionMode, ProjectedVertex, ViewPreset
from .controls import OrbitController
from .config import RenderConfig
from .renderer import SceneRenderer, Polygon, RenderStats, Frame, pick
from .canvas import SvgCanvas
from .logging_config import setup_logging
