"""Tests for arcball.py: sphere mapping, drag composition, momentum."""

import math
import pytest

from arcball import (
    Arcball, map_mouse_to_arcball_vec, rotate_drag, MOMENTUM_DECAY,
)
from mathutil import (
    identity, length, mat3_determinant, mat4_multiply, rotate,
    transform_point,
)
from params import ArcballState

W, H = 400, 400


# ---------------------------------------------------------------------------
# map_mouse_to_arcball_vec
# ---------------------------------------------------------------------------

class TestMapMouse:
    def test_center_is_pole(self):
        assert map_mouse_to_arcball_vec(200, 200, W, H) == pytest.approx((0, 0, 1))

    def test_y_axis_flipped(self):
        x, y, z = map_mouse_to_arcball_vec(200, 100, W, H)
        assert y == pytest.approx(0.5)
        assert x == pytest.approx(0.0)

    def test_inside_on_unit_sphere(self):
        p = map_mouse_to_arcball_vec(260, 150, W, H)
        assert length(p) == pytest.approx(1.0)
        assert p[2] > 0

    def test_outside_clamped_to_rim(self):
        p = map_mouse_to_arcball_vec(400, 0, W, H)
        s = math.sqrt(0.5)
        assert p == pytest.approx((s, s, 0.0))

    def test_right_edge_is_rim(self):
        assert map_mouse_to_arcball_vec(400, 200, W, H) == \
            pytest.approx((1, 0, 0), abs=1e-12)

    def test_non_square_viewport(self):
        assert map_mouse_to_arcball_vec(800, 150, 800, 300) == \
            pytest.approx((1, 0, 0), abs=1e-12)


# ---------------------------------------------------------------------------
# rotate_drag
# ---------------------------------------------------------------------------

class TestRotateDrag:
    def test_quarter_arc(self):
        axis, angle = rotate_drag((1, 0, 0), (0, 1, 0))
        assert axis == pytest.approx((0, 0, 1))
        assert angle == pytest.approx(math.pi / 2)

    def test_same_point_skipped(self):
        assert rotate_drag((0, 0, 1), (0, 0, 1)) is None

    def test_opposite_points_skipped(self):
        assert rotate_drag((1, 0, 0), (-1, 0, 0)) is None

    def test_rotation_carries_p1_to_p2(self):
        p1 = map_mouse_to_arcball_vec(180, 210, W, H)
        p2 = map_mouse_to_arcball_vec(250, 140, W, H)
        axis, angle = rotate_drag(p1, p2)
        assert transform_point(rotate(angle, axis), p1) == pytest.approx(p2)


# ---------------------------------------------------------------------------
# Arcball state machine
# ---------------------------------------------------------------------------

class TestDrag:
    def test_starts_at_identity(self):
        assert Arcball().rotation == identity()

    def test_press_starts_drag(self):
        ball = Arcball()
        ball.press(200, 200, W, H)
        assert ball.dragging
        assert ball.state.p1 == pytest.approx((0, 0, 1))

    def test_drag_without_press_ignored(self):
        ball = Arcball()
        assert not ball.drag(300, 200, W, H)
        assert ball.rotation == identity()

    def test_drag_right_rotates_about_y(self):
        ball = Arcball()
        ball.press(200, 200, W, H)
        assert ball.drag(300, 200, W, H)
        assert ball.state.last_axis == pytest.approx((0, 1, 0))
        # The front pole follows the mouse to the right.
        assert transform_point(ball.rotation, (0, 0, 1))[0] > 0

    def test_tiny_move_skipped_and_state_kept(self):
        ball = Arcball()
        ball.press(200, 200, W, H)
        p1 = ball.state.p1
        assert not ball.drag(200, 200, W, H)
        assert ball.state.p1 == p1
        assert ball.rotation == identity()

    def test_steps_left_multiply(self):
        ball = Arcball()
        ball.press(200, 200, W, H)
        ball.drag(260, 200, W, H)
        first = ball.rotation
        ball.drag(260, 150, W, H)
        step = rotate(ball.state.last_angle, ball.state.last_axis)
        assert ball.rotation == pytest.approx(mat4_multiply(step, first))

    def test_accumulated_stays_proper(self):
        ball = Arcball()
        ball.press(200, 200, W, H)
        for x, y in [(230, 210), (260, 190), (250, 150), (190, 120), (150, 170)]:
            ball.drag(x, y, W, H)
        assert mat3_determinant(ball.rotation) == pytest.approx(1.0)


class TestMomentum:
    def _spun(self, dt=0.016):
        ball = Arcball()
        ball.press(200, 200, W, H)
        ball.drag(240, 200, W, H)
        ball.release(dt)
        return ball

    def test_release_speed_is_last_angle_over_dt(self):
        ball = self._spun(0.02)
        assert not ball.dragging
        assert ball.state.angular_speed == pytest.approx(
            ball.state.last_angle / 0.02)

    def test_release_with_zero_dt_has_no_spin(self):
        ball = Arcball()
        ball.press(200, 200, W, H)
        ball.drag(240, 200, W, H)
        ball.release(0.0)
        assert ball.state.angular_speed == 0.0

    def test_idle_rotates_and_decays(self):
        ball = self._spun()
        before = ball.rotation
        speed = ball.state.angular_speed
        ball.update(0.016)
        expected = mat4_multiply(
            rotate(speed * 0.016, ball.state.last_axis), before)
        assert ball.rotation == pytest.approx(expected)
        assert ball.state.angular_speed == pytest.approx(speed * MOMENTUM_DECAY)

    def test_decay_is_geometric(self):
        ball = self._spun()
        speed = ball.state.angular_speed
        for _ in range(100):
            ball.update(0.016)
        assert ball.state.angular_speed == pytest.approx(
            speed * MOMENTUM_DECAY ** 100)
        assert ball.state.angular_speed > 0

    def test_no_momentum_while_dragging(self):
        ball = self._spun()
        ball.press(200, 200, W, H)
        before = ball.rotation
        ball.update(0.016)
        assert ball.rotation == before

    def test_press_cancels_spin(self):
        ball = self._spun()
        ball.press(200, 200, W, H)
        ball.release(0.016)
        assert ball.state.angular_speed == 0.0

    def test_idle_without_spin_is_noop(self):
        ball = Arcball(ArcballState())
        ball.update(0.016)
        assert ball.rotation == identity()
