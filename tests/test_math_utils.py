"""Tests for vector and matrix helpers."""

import math

import pytest

from vector_scene_renderer.math_utils import (
    Vec3, Mat4, Transform, clamp, wrap_angle, shortest_angle_delta, newell_normal, TWO_PI,
)


def approx_vec(v, expected, abs_tol=1e-9):
    return all(a == pytest.approx(b, abs=abs_tol) for a, b in zip(v, expected))


class TestVec3:

    def test_is_immutable(self):
        v = Vec3(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 5.0

    def test_arithmetic(self):
        a, b = Vec3(1, 2, 3), Vec3(4, 5, 6)
        assert a + b == Vec3(5, 7, 9)
        assert b - a == Vec3(3, 3, 3)
        assert a * 2 == Vec3(2, 4, 6)
        assert 2 * a == Vec3(2, 4, 6)
        assert a.dot(b) == 32
        assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)

    def test_named_operations(self):
        a = Vec3(1, 2, 3)
        assert a.add(Vec3(1, 1, 1)) == Vec3(2, 3, 4)
        assert a.sub(Vec3(1, 1, 1)) == Vec3(0, 1, 2)
        assert a.scale(-1) == -a
        assert Vec3(3, 4, 0).length() == 5
        assert Vec3(0, 0, 0).distance_to(Vec3(0, 3, 4)) == 5

    def test_normalize_zero_vector_is_zero(self):
        assert Vec3(0, 0, 0).normalize() == Vec3(0, 0, 0)

    def test_normalize_unit_length(self):
        assert Vec3(3, 4, 12).normalize().length() == pytest.approx(1.0)

    def test_of_accepts_sequences(self):
        assert Vec3.of((1, 2, 3)) == Vec3(1, 2, 3)
        v = Vec3(1, 1, 1)
        assert Vec3.of(v) is v

    def test_is_finite(self):
        assert Vec3(1, 2, 3).is_finite()
        assert not Vec3(float('nan'), 0, 0).is_finite()


class TestMat4:

    def test_translation_moves_points_not_directions(self):
        m = Mat4.translation(1, 2, 3)
        assert m.mul_vec3(Vec3(0, 0, 0)) == Vec3(1, 2, 3)
        assert m.mul_direction(Vec3(1, 0, 0)) == Vec3(1, 0, 0)

    def test_euler_order_x_then_y(self):
        # X first turns +Y into +Z, then Y turns +Z into +X
        m = Mat4.rotation_euler(math.pi / 2, math.pi / 2, 0)
        assert approx_vec(m.mul_direction(Vec3(0, 1, 0)), (1, 0, 0))

    def test_compose_applies_scale_then_rotation_then_translation(self):
        m = Mat4.compose(Vec3(10, 0, 0), Vec3(0, 0, math.pi / 2), Vec3(2, 2, 2))
        assert approx_vec(m.mul_vec3(Vec3(1, 0, 0)), (10, 2, 0))

    def test_affine_inverse_round_trip(self):
        m = Mat4.compose(Vec3(1, -2, 3), Vec3(0.3, -1.1, 2.0), Vec3(2, 0.5, 3))
        p = Vec3(0.7, 4.2, -1.5)
        assert approx_vec(m.affine_inverse().mul_vec3(m.mul_vec3(p)), p)

    def test_affine_inverse_of_singular_matrix_does_not_raise(self):
        m = Mat4.scale(0, 1, 1)
        inv = m.affine_inverse()
        assert all(math.isfinite(v) for row in inv.m for v in row)

    def test_transform_matrix(self):
        t = Transform(position=(1, 2, 3))
        assert t.matrix().get_translation() == Vec3(1, 2, 3)
        assert t.scale == Vec3(1, 1, 1)


class TestAngles:

    @pytest.mark.parametrize('angle', [-0.1, -1e-20, 0.0, 7.0, -100.0, TWO_PI, 1e6])
    def test_wrap_angle_range(self, angle):
        wrapped = wrap_angle(angle)
        assert 0.0 <= wrapped < TWO_PI

    def test_shortest_angle_delta_crosses_zero(self):
        assert shortest_angle_delta(0.1, TWO_PI - 0.1) == pytest.approx(-0.2)
        assert shortest_angle_delta(TWO_PI - 0.1, 0.1) == pytest.approx(0.2)

    def test_clamp(self):
        assert clamp(5, 0, 1) == 1
        assert clamp(-5, 0, 1) == 0
        assert clamp(0.5, 0, 1) == 0.5


class TestNewellNormal:

    def test_square_normal(self):
        pts = [Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(1, 1, 0), Vec3(0, 1, 0)]
        assert newell_normal(pts).normalize() == Vec3(0, 0, 1)

    def test_quad_with_repeated_vertex(self):
        apex = Vec3(0, 1, 0)
        pts = [apex, apex, Vec3(0, 0, 1), Vec3(1, 0, 0)]
        n = newell_normal(pts)
        assert n.length() > 0
        assert n.dot(Vec3(1, 1, 1)) > 0

    def test_collinear_points_give_zero(self):
        pts = [Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(2, 0, 0)]
        assert newell_normal(pts).length() == pytest.approx(0.0)
