#!/usr/bin/env python3
#
# PROJECT: vector-scene-renderer
# MODULE: client_demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import argparse
import logging
import sys

from vector_scene_renderer.demo import DemoApp
from vector_scene_renderer.logging_config import setup_logging


def parse_args(argv=None):
    """CLI argument parser for the offline SVG demo."""
    epilog = """\
examples:
  %(prog)s                                        Demo scene, 60 frames into ./frames
  %(prog)s --model cobra.obj --frames 1           Single frame of an OBJ model
  %(prog)s --keys 3 --frames 30                   Ease into the top view
  %(prog)s --ortho --mode solid-wireframe         Orthographic, outlined faces
  %(prog)s --shading gradient --base-tone #0E0E2C Depth-cued fill towards dark blue
  %(prog)s --no-cull --depth-key max              Draw back faces, sort by farthest vertex
"""
    parser = argparse.ArgumentParser(
        description="Vector Scene Renderer demo: orbit a 3D scene and write SVG frames",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--model", help="Path to .obj file (replaces the demo scene)")
    parser.add_argument("-o", "--output", default="frames",
                        help="Directory for SVG frames (default: frames)")
    parser.add_argument("--frames", type=int, default=60,
                        help="Number of frames to render (default: 60)")
    parser.add_argument("--fps", type=float, default=30.0,
                        help="Simulated frame rate for update(dt) (default: 30)")
    parser.add_argument("--width", type=int, default=800,
                        help="Viewport width in pixels (default: 800)")
    parser.add_argument("--height", type=int, default=600,
                        help="Viewport height in pixels (default: 600)")
    parser.add_argument("--ortho", action="store_true",
                        help="Start in orthographic projection")
    parser.add_argument("--mode", choices=("solid", "wireframe", "solid-wireframe"),
                        default="solid", help="Render mode (default: solid)")
    parser.add_argument("--shading", choices=("flat", "gradient", "none"),
                        default="flat", help="Shading mode (default: flat)")
    parser.add_argument("--depth-key", choices=("average", "max"), default="average",
                        help="Per-face depth used for sorting (default: average)")
    parser.add_argument("--light", choices=("front", "top", "side"),
                        help="Light direction preset")
    parser.add_argument("--base-tone", default="#111111",
                        help="Gradient shading base tone in hex (default: #111111)")
    parser.add_argument("--bg-color", default="#FFFFFF",
                        help="Background color in hex (default: #FFFFFF)")
    parser.add_argument("--keys", default="",
                        help="Key presses applied before the first frame, e.g. '3' or ' 0'")
    parser.add_argument("--no-cull", action="store_true",
                        help="Disable backface culling")
    parser.add_argument("--no-auto-rotate", action="store_true",
                        help="Start with auto-rotate off")
    parser.add_argument("--no-hud", dest="hud", action="store_false",
                        help="Do not draw the statistics caption into frames")
    parser.add_argument("--log-level", default="WARNING",
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
                        help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    args = parser.parse_args(argv)
    if args.frames < 1:
        parser.error("--frames must be at least 1")
    if args.fps <= 0:
        parser.error("--fps must be positive")
    return args


def main(argv=None):
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    app = DemoApp(args)
    app.run()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
