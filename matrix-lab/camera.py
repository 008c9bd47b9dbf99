"""
Orbit camera: a point on a sphere around a target, looking at it.
"""

import math

from mathutil import (
    identity, look_at, mat4_multiply, translate, normalize, sub, cross,
)


def look_at_matrix(pos, target, up):
    """
    View matrix built step by step: rotation rows (right, true_up, -n)
    times a translation by -pos.  Matches ``look_at`` numerically.
    """
    n = normalize(sub(target, pos))
    right = normalize(cross(n, up))
    true_up = normalize(cross(right, n))

    r = identity()
    r[0], r[4], r[8] = right
    r[1], r[5], r[9] = true_up
    r[2], r[6], r[10] = -n[0], -n[1], -n[2]

    t = translate(-pos[0], -pos[1], -pos[2])
    return mat4_multiply(r, t)


class OrbitCamera:
    """Camera orbiting *target* at *radius*, angles in radians."""

    def __init__(self, target=(0.0, 0.0, 0.0), up=(0.0, 1.0, 0.0),
                 yaw=0.0, pitch=0.0, radius=8.0):
        self.target = tuple(target)
        self.up = tuple(up)
        self.yaw = yaw
        self.pitch = pitch
        self.radius = radius

    def position(self):
        cp = math.cos(self.pitch)
        return (
            self.target[0] + self.radius * cp * math.sin(self.yaw),
            self.target[1] + self.radius * math.sin(self.pitch),
            self.target[2] + self.radius * cp * math.cos(self.yaw),
        )

    def view_matrix(self, use_custom=False):
        """Library-style lookAt, or the step-by-step one when *use_custom*."""
        if use_custom:
            return look_at_matrix(self.position(), self.target, self.up)
        return look_at(self.position(), self.target, self.up)

    def reset(self):
        self.yaw = 0.0
        self.pitch = 0.0
        self.radius = 8.0
        self.target = (0.0, 0.0, 0.0)
