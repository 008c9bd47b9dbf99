"""Tests for projection.py: clip rejection and screen mapping."""

import math
import pytest

from camera import OrbitCamera
from mathutil import identity, perspective, look_at, mat4_mul_vec4
from projection import (
    OFFSCREEN, ndc_to_screen, to_screen_h, to_screen_clipped, view_depth,
    orthographic,
)

W, H = 800, 600


@pytest.fixture
def proj():
    return perspective(60.0, W / H, 0.1, 100.0)


@pytest.fixture
def view():
    return look_at((0, 0, 5), (0, 0, 0), (0, 1, 0))


class TestNdcToScreen:
    def test_center(self):
        assert ndc_to_screen(0, 0, W, H) == pytest.approx((400, 300))

    def test_top_left_corner(self):
        assert ndc_to_screen(-1, 1, W, H) == pytest.approx((0, 0))

    def test_bottom_right_corner(self):
        assert ndc_to_screen(1, -1, W, H) == pytest.approx((800, 600))


class TestToScreenH:
    def test_target_projects_to_center(self, proj, view):
        assert to_screen_h((0, 0, 0), proj, view, W, H) == pytest.approx((400, 300))

    def test_up_is_screen_up(self, proj, view):
        _, y = to_screen_h((0, 1, 0), proj, view, W, H)
        assert y < 300

    def test_behind_camera_is_offscreen(self, proj, view):
        assert to_screen_h((0, 0, 10), proj, view, W, H) == OFFSCREEN

    def test_on_camera_plane_is_offscreen(self, proj, view):
        result = to_screen_h((1, 1, 5), proj, view, W, H)
        assert result == OFFSCREEN
        assert all(math.isfinite(c) for c in result)

    def test_outside_frustum_still_projected(self, proj, view):
        x, _ = to_screen_h((100, 0, 0), proj, view, W, H)
        assert x > W

    def test_identity_pipeline_is_ndc(self):
        assert to_screen_h((0.5, 0.5, 0), identity(), identity(), W, H) == \
            pytest.approx((600, 150))


class TestToScreenClipped:
    def test_visible_point(self, proj, view):
        ok, p = to_screen_clipped((0, 0, 0), proj, view, W, H)
        assert ok
        assert p == pytest.approx((400, 300))

    def test_behind_camera_rejected(self, proj, view):
        assert to_screen_clipped((0, 0, 10), proj, view, W, H) == (False, None)

    def test_outside_side_plane_rejected(self, proj, view):
        ok, p = to_screen_clipped((100, 0, 0), proj, view, W, H)
        assert not ok
        assert p is None

    def test_beyond_far_plane_rejected(self, proj, view):
        ok, _ = to_screen_clipped((0, 0, -200), proj, view, W, H)
        assert not ok

    def test_agrees_with_unclipped_when_visible(self, proj, view):
        point = (0.3, -0.4, 0.2)
        ok, p = to_screen_clipped(point, proj, view, W, H)
        assert ok
        assert p == pytest.approx(to_screen_h(point, proj, view, W, H))


class TestViewDepth:
    def test_in_front_is_negative(self, view):
        assert view_depth((0, 0, 0), view) == pytest.approx(-5.0)

    def test_behind_is_positive(self, view):
        assert view_depth((0, 0, 7), view) == pytest.approx(2.0)


class TestOrthographic:
    def test_scales(self):
        m = orthographic(5.0, 2.0, 0.1, 100.0)
        assert m[0] == pytest.approx(1 / 10.0)
        assert m[5] == pytest.approx(1 / 5.0)

    def test_depth_range(self):
        near, far = 0.5, 20.0
        m = orthographic(1.0, 1.0, near, far)
        assert mat4_mul_vec4(m, (0, 0, -near, 1))[2] == pytest.approx(-1.0)
        assert mat4_mul_vec4(m, (0, 0, -far, 1))[2] == pytest.approx(1.0)

    def test_w_stays_one(self):
        m = orthographic(3.0, 1.5, 0.1, 50.0)
        assert mat4_mul_vec4(m, (4, -2, -7, 1))[3] == pytest.approx(1.0)

    def test_size_independent_of_distance(self):
        m = orthographic(2.0, 1.0, 0.1, 100.0)
        cam = OrbitCamera(radius=5.0)
        near_p = to_screen_h((1, 0, 0), m, cam.view_matrix(), W, H)
        cam.radius = 50.0
        far_p = to_screen_h((1, 0, 0), m, cam.view_matrix(), W, H)
        assert near_p == pytest.approx(far_p)
