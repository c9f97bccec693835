"""Tests for the orbit controller."""

import logging
import math
import random

import pytest

from vector_scene_renderer.camera import Camera, ProjectionMode
from vector_scene_renderer.controls import OrbitController
from vector_scene_renderer.math_utils import Vec3, TWO_PI

EPS = 0.1


@pytest.fixture
def camera():
    return Camera(width=800, height=600)


@pytest.fixture
def controller(camera):
    return OrbitController(camera, auto_rotate=False)


def drag(controller, dx, dy, steps=1):
    controller.on_pointer_down(0, 0)
    x = y = 0.0
    for _ in range(steps):
        x += dx
        y += dy
        controller.on_pointer_move(x, y)
    controller.on_pointer_up(x, y)


class TestPlacement:

    def test_default_position(self, controller, camera):
        assert controller.distance == 8
        assert camera.position.x == pytest.approx(0, abs=1e-12)
        assert camera.position.y == pytest.approx(0, abs=1e-12)
        assert camera.position.z == pytest.approx(8)

    def test_camera_looks_at_target(self, controller, camera):
        p = camera.project_vertex(controller.target)
        assert p.visible
        assert (p.x, p.y) == (pytest.approx(400), pytest.approx(300))

    @pytest.mark.parametrize('phi,theta,distance,target', [
        (0.3, 0.0, 2.0, (0, 0, 0)),
        (math.pi / 2, 1.0, 8.0, (1, 2, 3)),
        (2.9, 5.5, 19.0, (-4, 0.5, 10)),
        (1.2, 3.3, 12.5, (0, -7, 0)),
    ])
    def test_distance_from_target(self, camera, phi, theta, distance, target):
        OrbitController(camera, target=target, distance=distance, phi=phi, theta=theta)
        assert camera.position.distance_to(Vec3.of(target)) == pytest.approx(distance)

    def test_set_target(self, controller, camera):
        controller.set_target((0, 1, 0))
        assert camera.position.y == pytest.approx(1)
        assert camera.position.distance_to(Vec3(0, 1, 0)) == pytest.approx(8)

    @pytest.mark.parametrize('kwargs', [
        {'min_polar_angle': 0.0},
        {'max_polar_angle': math.pi},
        {'min_polar_angle': 1.0, 'max_polar_angle': 0.5},
    ])
    def test_polar_limits_exclude_poles(self, camera, kwargs):
        with pytest.raises(ValueError):
            OrbitController(camera, **kwargs)


class TestDrag:

    def test_drag_changes_angles_and_stops_auto_rotate(self, camera):
        c = OrbitController(camera)
        assert c.auto_rotate
        drag(c, 20, 10)
        assert not c.auto_rotate
        assert c.theta == pytest.approx(TWO_PI - 20 * 0.005)
        assert c.phi == pytest.approx(math.pi / 2 + 10 * 0.005)

    def test_move_without_press_is_ignored(self, controller):
        controller.on_pointer_move(500, 500)
        assert controller.theta == 0.0
        assert controller.phi == pytest.approx(math.pi / 2)

    def test_secondary_button_does_not_drag(self, controller):
        controller.on_pointer_down(0, 0, button=2)
        controller.on_pointer_move(100, 100)
        assert controller.theta == 0.0

    def test_phi_clamped_after_huge_drags(self, controller):
        drag(controller, 0, 1e6)
        assert controller.phi == pytest.approx(math.pi - EPS)
        drag(controller, 0, -1e9)
        assert controller.phi == pytest.approx(EPS)

    def test_random_drag_sequences_keep_invariants(self, controller, camera):
        rng = random.Random(1234)
        controller.on_pointer_down(0, 0)
        x = y = 0.0
        for _ in range(500):
            x += rng.uniform(-5000, 5000)
            y += rng.uniform(-5000, 5000)
            controller.on_pointer_move(x, y)
            assert EPS <= controller.phi <= math.pi - EPS
            assert 0.0 <= controller.theta < TWO_PI
            assert camera.position.distance_to(controller.target) == pytest.approx(8)

    def test_non_finite_delta_ignored(self, controller):
        controller.on_pointer_down(0, 0)
        controller.on_pointer_move(float('nan'), 0)
        controller.on_pointer_move(float('inf'), 0)
        assert controller.theta == 0.0
        assert camera_is_finite(controller.camera)


def camera_is_finite(camera):
    return camera.position.is_finite() and camera.rotation.is_finite()


class TestWheel:

    def test_positive_delta_zooms_out_in_perspective(self, controller, camera):
        controller.on_wheel(100)
        assert controller.distance == pytest.approx(8 * 1.1)
        assert camera.position.distance_to(controller.target) == pytest.approx(8.8)

    def test_distance_clamped(self, controller):
        controller.on_wheel(1e6)
        assert controller.distance == 20
        controller.on_wheel(-1e6)
        assert controller.distance == 2

    def test_positive_delta_decreases_ortho_zoom(self, controller, camera):
        camera.set_projection_mode(ProjectionMode.ORTHOGRAPHIC)
        controller.on_wheel(100)
        assert camera.zoom == pytest.approx(0.9)
        assert controller.distance == 8

    def test_ortho_zoom_clamped(self, controller, camera):
        camera.set_projection_mode(ProjectionMode.ORTHOGRAPHIC)
        controller.on_wheel(-1e6)
        assert camera.zoom == 4
        controller.on_wheel(1e6)
        assert camera.zoom == pytest.approx(0.1)

    def test_non_finite_wheel_ignored(self, controller):
        controller.on_wheel(float('nan'))
        assert controller.distance == 8

    def test_non_finite_distance_reset(self, controller, camera, caplog):
        controller.distance = float('nan')
        with caplog.at_level(logging.WARNING):
            controller.on_wheel(10)
        assert controller.distance == pytest.approx(11)
        assert camera_is_finite(camera)
        assert 'Non-finite orbit distance' in caplog.text


class TestUpdate:

    def test_auto_rotate_advances_theta(self, camera):
        c = OrbitController(camera)
        c.update(2.0)
        assert c.theta == pytest.approx(math.radians(3.0))

    def test_theta_wraps(self, camera):
        c = OrbitController(camera, theta=TWO_PI - 0.001)
        c.update(1.0)
        assert 0.0 <= c.theta < TWO_PI
        assert c.theta == pytest.approx(math.radians(1.5) - 0.001)

    def test_no_auto_rotate_is_static(self, controller, camera):
        before = camera.position
        controller.update(1.0)
        assert camera.position == before

    def test_bad_dt_ignored(self, camera):
        c = OrbitController(camera)
        c.update(float('nan'))
        c.update(-1.0)
        c.update(0.0)
        assert c.theta == 0.0

    def test_set_auto_rotate(self, controller):
        controller.set_auto_rotate(True)
        controller.update(1.0)
        assert controller.theta > 0


class TestViews:

    def test_set_view_transitions_smoothly(self, camera):
        c = OrbitController(camera)
        c.set_view('left')
        assert not c.auto_rotate
        assert camera.current_view == 'left'
        c.update(1 / 60)
        assert 0 < c.theta < math.pi / 2
        for _ in range(300):
            c.update(1 / 60)
        assert c.goal is None
        assert c.theta == pytest.approx(math.pi / 2)
        assert camera.position.x == pytest.approx(8)

    def test_transition_takes_shortest_arc(self, controller):
        controller.set_view('right')
        controller.update(1 / 60)
        # theta goes 0 -> 3π/2 through 2π, not through π
        assert controller.theta > 3 * math.pi / 2

    def test_top_view_clamped_to_polar_limit(self, controller):
        controller.set_view('top')
        for _ in range(300):
            controller.update(1 / 60)
        assert controller.phi == pytest.approx(EPS)

    def test_drag_cancels_transition(self, controller):
        controller.set_view('back')
        drag(controller, 1, 0)
        assert controller.goal is None

    def test_observer_notified_through_controller(self, controller, camera):
        seen = []
        camera.subscribe(lambda name, preset: seen.append(name))
        controller.set_view('bottom')
        assert seen == ['bottom']

    def test_unknown_view(self, controller):
        assert controller.set_view('nowhere') is False

    def test_save_and_recall_user_view(self, controller, camera):
        drag(controller, -40, 30)
        phi, theta = controller.phi, controller.theta
        controller.save_user_view()
        controller.set_view('front')
        for _ in range(300):
            controller.update(1 / 60)
        controller.set_view('user')
        for _ in range(300):
            controller.update(1 / 60)
        assert controller.phi == pytest.approx(phi)
        assert controller.theta == pytest.approx(theta)

    def test_explicit_view_syncs_angles(self, controller, camera):
        camera.add_view('above', position=(0, 5, 0.0001))
        controller.set_view('above')
        assert controller.phi == pytest.approx(EPS)
        assert controller.distance == pytest.approx(5.0)
        assert camera.position.distance_to(controller.target) == pytest.approx(5.0)

    def test_explicit_view_keeps_stored_rotation(self, controller, camera):
        camera.add_view('tilt', position=(0, 0, 5), rotation=(0, 0.3, 0))
        assert controller.set_view('tilt')
        assert camera.rotation == Vec3(0, 0.3, 0)
        assert camera.position == Vec3(0, 0, 5)
        assert controller.distance == pytest.approx(5.0)
        controller.update(1 / 60)
        assert camera.rotation == Vec3(0, 0.3, 0)

    def test_drag_after_explicit_view_re_aims(self, controller, camera):
        camera.add_view('tilt', position=(0, 0, 5), rotation=(0, 0.3, 0))
        controller.set_view('tilt')
        drag(controller, 10, 0)
        assert camera.rotation.y == pytest.approx(-0.05)
        p = camera.project_vertex(controller.target)
        assert (p.x, p.y) == (pytest.approx(400), pytest.approx(300))


class TestKeys:

    def test_space_toggles_auto_rotate(self, controller):
        assert controller.on_key(' ')
        assert controller.auto_rotate
        controller.on_key(' ')
        assert not controller.auto_rotate

    @pytest.mark.parametrize('key,view', [
        ('1', 'front'), ('2', 'back'), ('3', 'top'), ('4', 'bottom'),
        ('5', 'left'), ('6', 'right'), ('7', 'user'),
    ])
    def test_number_keys_select_views(self, controller, camera, key, view):
        controller.on_key(key)
        assert camera.current_view == view

    def test_eight_saves_user_view(self, controller, camera):
        drag(controller, 10, 10)
        controller.on_key('8')
        assert camera.views['user'].phi == pytest.approx(controller.phi)
        assert camera.views['user'].theta == pytest.approx(controller.theta)

    def test_zero_toggles_projection(self, controller, camera):
        controller.on_key('0')
        assert camera.mode is ProjectionMode.ORTHOGRAPHIC

    def test_unbound_key(self, controller):
        assert controller.on_key('x') is False
