#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/canvas.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
from typing import Iterable, Optional

import svgwrite

from .color import to_hex, to_rgb
from .renderer import Polygon

logger = logging.getLogger(__name__)


class SvgCanvas:
    """
    SVG drawing surface for polygon records.

    Polygons are drawn in the order given (farthest first from the
    renderer), each tagged with a data-owner attribute carrying its node id.
    """

    def __init__(self, width: float, height: float, background: Optional[str] = '#ffffff'):
        self.width = width
        self.height = height
        self.background = None if background is None else to_hex(to_rgb(background))

    def build(self, polygons: Iterable[Polygon], filename: str = 'frame.svg',
              caption: Optional[str] = None) -> svgwrite.Drawing:
        dwg = svgwrite.Drawing(filename, size=(self.width, self.height),
                               viewBox=f'0 0 {self.width} {self.height}',
                               debug=False)
        if self.background is not None:
            dwg.add(dwg.rect(insert=(0, 0), size=(self.width, self.height),
                             fill=self.background))

        scene_group = dwg.g(id='scene')
        for poly in polygons:
            element = dwg.polygon(points=[(round(x, 3), round(y, 3)) for x, y in poly.points],
                                  fill=poly.fill_color,
                                  stroke=poly.stroke_color,
                                  stroke_width=poly.stroke_width,
                                  stroke_linejoin='round')
            if poly.opacity < 1.0:
                element['opacity'] = poly.opacity
            element['data-owner'] = poly.owner_id
            scene_group.add(element)
        dwg.add(scene_group)

        if caption:
            dwg.add(dwg.text(caption, insert=(8, 16), font_size=12,
                             font_family='monospace', fill='#808080'))
        return dwg

    def to_string(self, polygons: Iterable[Polygon], caption: Optional[str] = None) -> str:
        return self.build(polygons, caption=caption).tostring()

    def save(self, polygons: Iterable[Polygon], filename: str,
             caption: Optional[str] = None) -> str:
        dwg = self.build(polygons, filename, caption)
        dwg.save()
        logger.debug("Saved SVG: %s", filename)
        return filename
