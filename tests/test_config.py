"""Tests for render configuration and shading."""

import pytest

from vector_scene_renderer.config import RenderConfig
from vector_scene_renderer.math_utils import Vec3
from vector_scene_renderer.shading import DepthCue, lambert, shade


class TestRenderConfig:

    def test_defaults(self):
        config = RenderConfig()
        assert config.cull_backfaces is True
        assert config.depth_key == 'average'
        assert config.render_mode == 'solid'
        assert config.light_direction == Vec3(0, 0, -1)
        assert config.base_rgb == (0x11, 0x11, 0x11)
        assert config.depth_cue is not None

    @pytest.mark.parametrize('kwargs', [
        {'depth_key': 'median'},
        {'render_mode': 'points'},
        {'shading_mode': 'phong'},
        {'cull_epsilon': -1},
        {'max_visible_faces': 0},
        {'light_direction': (0, 0, 0)},
        {'base_tone': 'not-a-color'},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            RenderConfig(**kwargs)

    def test_light_direction_normalized(self):
        config = RenderConfig(light_direction=(0, 0, -5))
        assert config.light_direction == Vec3(0, 0, -1)

    def test_light_presets(self):
        config = RenderConfig()
        config.set_light_direction('top')
        assert config.light_direction == Vec3(0, -1, 0)
        with pytest.raises(ValueError):
            config.set_light_direction('moon')

    def test_ambient_clamped(self):
        assert RenderConfig(ambient_light=3).ambient_light == 1.0

    def test_with_overrides_returns_validated_copy(self):
        base = RenderConfig()
        other = base.with_overrides(render_mode='wireframe', fog_end=50.0)
        assert other.render_mode == 'wireframe'
        assert other.depth_cue.fog_end == 50.0
        assert base.render_mode == 'solid'
        with pytest.raises(ValueError):
            base.with_overrides(depth_key='min')

    def test_with_overrides_unknown_key(self):
        with pytest.raises(TypeError):
            RenderConfig().with_overrides(use_braille=True)

    def test_unlimited_faces(self):
        assert RenderConfig(max_visible_faces=None).max_visible_faces is None


class TestShading:

    def test_depth_cue_zones(self):
        cue = DepthCue(fog_start=5, fog_end=15, fog_exp=1.0)
        assert cue.factor(1) == 0.0
        assert cue.factor(10) == pytest.approx(0.5)
        assert cue.factor(100) == 1.0

    def test_depth_cue_monotone(self):
        cue = DepthCue(2, 20, 0.6)
        values = [cue.factor(d) for d in range(0, 30)]
        assert values == sorted(values)

    def test_degenerate_fog_range(self):
        cue = DepthCue(5, 5, 1.0)
        assert cue.factor(4) == 0.0
        assert cue.factor(6) == 1.0

    def test_lambert(self):
        light = Vec3(0, 0, -1)
        assert lambert(Vec3(0, 0, 1), light, 0.2) == pytest.approx(1.0)
        assert lambert(Vec3(0, 0, -1), light, 0.2) == pytest.approx(0.2)
        assert lambert(Vec3(1, 0, 0), light, 0.0) == pytest.approx(0.0)

    def test_shade_none_returns_material_color(self):
        config = RenderConfig(shading_mode='none')
        assert shade((10, 20, 30), Vec3(0, 0, 1), 8.0, config) == '#0a141e'

    def test_gradient_fades_to_base_tone_with_depth(self):
        config = RenderConfig(shading_mode='gradient', base_tone='#000000',
                              fog_start=5, fog_end=10)
        lit = Vec3(0, 0, 1)
        assert shade((200, 100, 50), lit, 1.0, config) == '#c86432'
        assert shade((200, 100, 50), lit, 50.0, config) == '#000000'

    def test_gradient_unlit_side_moves_to_base_tone(self):
        config = RenderConfig(shading_mode='gradient', base_tone='#000000', ambient_light=0.0)
        assert shade((200, 200, 200), Vec3(1, 0, 0), 1.0, config) == '#000000'
