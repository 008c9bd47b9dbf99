"""Tests for rotation.py: align-to-Z axis rotation vs. quaternions."""

import math
import pytest

from mathutil import (
    identity, rotate, mat4_multiply, mat4_transpose, mat3_determinant,
    transform_point, transform_direction, normalize,
)
from quaternion import from_axis_angle, quat_to_mat4
from rotation import align_to_z, build_axis_rotation

TEST_POINTS = [(1, 0, 0), (0, 1, 0), (0, 0, 1), (1, 1, 1), (-1, 2, 0.5)]


def _apply_all(m, points):
    return [transform_point(m, p) for p in points]


class TestAlignToZ:
    @pytest.mark.parametrize("axis", [
        (1, 1, 1), (0, 0, 1), (1, 0, 0), (0, -3, 0), (-2, 5, 0.5), (0, 0, -1),
    ])
    def test_axis_lands_on_z(self, axis):
        a, _, w_z = align_to_z(axis)
        assert transform_direction(a, normalize(axis)) == \
            pytest.approx((0, 0, 1), abs=1e-9)
        assert w_z == pytest.approx((0, 0, 1), abs=1e-9)

    def test_x_step_zeroes_y_component(self):
        _, w_x, _ = align_to_z((1, 2, 3))
        assert w_x[1] == pytest.approx(0.0, abs=1e-12)
        assert math.hypot(*w_x) == pytest.approx(1.0)

    def test_x_axis_skips_x_step(self):
        _, w_x, _ = align_to_z((4, 0, 0))
        assert w_x == pytest.approx((1, 0, 0))

    def test_alignment_is_orthonormal(self):
        a, _, _ = align_to_z((1, -2, 0.3))
        assert mat4_multiply(mat4_transpose(a), a) == \
            pytest.approx(identity(), abs=1e-12)


class TestBuildAxisRotation:
    def test_zero_axis_gives_identity(self):
        assert build_axis_rotation((0, 0, 0), 1.0) == identity()

    def test_zero_axis_steps_are_zero(self):
        r, w_x, w_z = build_axis_rotation((0, 0, 0), 1.0, return_steps=True)
        assert r == identity()
        assert w_x == (0.0, 0.0, 0.0)
        assert w_z == (0.0, 0.0, 0.0)

    def test_zero_angle_gives_identity(self):
        assert build_axis_rotation((1, 2, 3), 0.0) == \
            pytest.approx(identity(), abs=1e-12)

    def test_90_about_z(self):
        r = build_axis_rotation((0, 0, 1), math.pi / 2)
        assert transform_point(r, (1, 0, 0)) == pytest.approx((0, 1, 0), abs=1e-9)

    def test_axis_is_fixed(self):
        axis = (-2, 5, 0.5)
        r = build_axis_rotation(axis, 1.7)
        assert transform_point(r, axis) == pytest.approx(axis)

    @pytest.mark.parametrize("axis", [(1, 2, 3), (0, 1, 0), (-1, 0, 0), (1, 1, 1)])
    def test_proper_rotation(self, axis):
        r = build_axis_rotation(axis, 0.77)
        assert mat3_determinant(r) == pytest.approx(1.0)
        assert mat4_multiply(r, mat4_transpose(r)) == \
            pytest.approx(identity(), abs=1e-9)

    @pytest.mark.parametrize("axis, theta", [
        ((1, 1, 1), math.pi / 3),
        ((1, 0, 0), math.pi / 2),
        ((0, 1, 0), math.pi / 4),
        ((1, 2, 3), 1.23),
        ((0, 0, -1), 2.5),
    ])
    def test_matches_quaternion(self, axis, theta):
        r_mat = build_axis_rotation(axis, theta)
        r_quat = quat_to_mat4(from_axis_angle(axis, theta))
        for a, b in zip(_apply_all(r_mat, TEST_POINTS),
                        _apply_all(r_quat, TEST_POINTS)):
            assert a == pytest.approx(b, abs=1e-5)

    def test_matches_rodrigues(self):
        r = build_axis_rotation((3, -1, 2), 0.6)
        assert r == pytest.approx(rotate(0.6, (3, -1, 2)), abs=1e-9)
