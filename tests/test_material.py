"""Tests for materials and color helpers."""

import pytest

from vector_scene_renderer.color import (
    parse_hex_color, to_rgb, to_hex, adjust_brightness, mix_rgb,
)
from vector_scene_renderer.material import Material, DEFAULT_FACE_COLORS


class TestColor:

    @pytest.mark.parametrize('text,expected', [
        ('#FF8800', (255, 136, 0)),
        ('ff8800', (255, 136, 0)),
        ('#f80', (255, 136, 0)),
        ('#12345', None),
        ('zzzzzz', None),
        (None, None),
    ])
    def test_parse_hex_color(self, text, expected):
        assert parse_hex_color(text) == expected

    def test_to_rgb_accepts_names_and_tuples(self):
        assert to_rgb('Red') == (255, 0, 0)
        assert to_rgb((300, -5, 12.4)) == (255, 0, 12)

    def test_to_rgb_rejects_garbage(self):
        with pytest.raises(ValueError):
            to_rgb('bogus')
        with pytest.raises(ValueError):
            to_rgb(42)

    def test_to_hex(self):
        assert to_hex((255, 136, 0)) == '#ff8800'

    def test_brightness_and_mix(self):
        assert adjust_brightness((100, 200, 50), 2) == (200, 255, 100)
        assert mix_rgb((0, 0, 0), (255, 255, 255), 0.5) == (128, 128, 128)


class TestMaterial:

    def test_defaults(self):
        m = Material()
        assert m.color == '#ffffff'
        assert m.opacity == 1.0
        assert not m.wireframe
        assert not m.transparent

    def test_color_normalized(self):
        assert Material('#ABC').color == '#aabbcc'
        assert Material((0, 128, 255)).color == '#0080ff'
        assert Material('navy').rgb == (0, 0, 128)

    def test_opacity_clamped(self):
        assert Material(opacity=3).opacity == 1.0
        m = Material().set_opacity(-1)
        assert m.opacity == 0.0
        assert m.transparent

    def test_invalid_color(self):
        with pytest.raises(ValueError):
            Material('nope')

    def test_setters_chain(self):
        m = Material().set_color('blue').set_wireframe(True, color='red', width=3)
        assert m.color == '#0000ff'
        assert m.wireframe
        assert m.wireframe_color == '#ff0000'
        assert m.wireframe_width == 3.0

    def test_clone_is_independent(self):
        m = Material('red')
        c = m.clone().set_color('blue')
        assert m.color == '#ff0000'
        assert c.color == '#0000ff'

    def test_default_face_colors(self):
        assert len(DEFAULT_FACE_COLORS) == 6
        assert all(Material(c).color == c for c in DEFAULT_FACE_COLORS)
