#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/color.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

# Small CSS subset; anything else must be given as hex or an (r, g, b) tuple.
NAMED_COLORS = {
    'black':   (0, 0, 0),
    'white':   (255, 255, 255),
    'red':     (255, 0, 0),
    'green':   (0, 128, 0),
    'lime':    (0, 255, 0),
    'blue':    (0, 0, 255),
    'yellow':  (255, 255, 0),
    'cyan':    (0, 255, 255),
    'magenta': (255, 0, 255),
    'orange':  (255, 165, 0),
    'purple':  (128, 0, 128),
    'gray':    (128, 128, 128),
    'grey':    (128, 128, 128),
    'silver':  (192, 192, 192),
    'navy':    (0, 0, 128),
    'teal':    (0, 128, 128),
    'maroon':  (128, 0, 0),
    'olive':   (128, 128, 0),
}


def parse_hex_color(hex_str):
    """
    Parse a hex color string to an (r, g, b) tuple.
    Accepts: '#RRGGBB', 'RRGGBB', '#RGB' or 'RGB' (case-insensitive).
    Returns: (r, g, b) tuple with values 0-255, or None on failure.
    """
    if hex_str is None:
        return None
    val = str(hex_str).strip().lstrip('#')
    if len(val) == 3:
        val = ''.join(ch * 2 for ch in val)
    if len(val) != 6:
        return None
    try:
        r = int(val[0:2], 16)
        g = int(val[2:4], 16)
        b = int(val[4:6], 16)
        return (r, g, b)
    except ValueError:
        return None


def to_rgb(color):
    """
    Resolve a color given as hex string, CSS name or (r, g, b) sequence.
    Raises ValueError for anything unrecognised.
    """
    if isinstance(color, str):
        named = NAMED_COLORS.get(color.strip().lower())
        if named is not None:
            return named
        rgb = parse_hex_color(color)
        if rgb is None:
            raise ValueError(f"Unrecognised color: {color!r}")
        return rgb
    try:
        r, g, b = color
    except (TypeError, ValueError):
        raise ValueError(f"Unrecognised color: {color!r}") from None
    return (_channel(r), _channel(g), _channel(b))


def _channel(v):
    return max(0, min(255, int(round(v))))


def to_hex(rgb):
    r, g, b = rgb
    return f"#{_channel(r):02x}{_channel(g):02x}{_channel(b):02x}"


def adjust_brightness(rgb, factor):
    """Scale each channel by factor, clamped to 0-255."""
    r, g, b = rgb
    return (_channel(r * factor), _channel(g * factor), _channel(b * factor))


def mix_rgb(color_a, color_b, t):
    """Interpolate in RGB space; t=0 gives color_a, t=1 gives color_b."""
    r1, g1, b1 = color_a
    r2, g2, b2 = color_b
    return (_channel(r1 + (r2 - r1) * t),
            _channel(g1 + (g2 - g1) * t),
            _channel(b1 + (b2 - b1) * t))

