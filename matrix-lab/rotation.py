"""
Axis-angle rotation built from elementary rotations.

To rotate about an arbitrary axis the axis is first aligned with +Z
(a rotation about X drops it into the X-Z plane, a rotation about Y then
lays it on Z), the rotation about Z is applied, and the alignment is
undone with its transpose:

    R = A^T * Rz(theta) * A,   A = Ry * Rx
"""

import logging
import math

from mathutil import (
    identity, rotation_y, rotation_z, mat4_chain, mat4_transpose,
    transform_direction,
)

log = logging.getLogger(__name__)

_AXIS_EPS = 1e-6


def _align_x(m_w):
    """Rotation about X taking unit vector *m_w* into the X-Z plane."""
    d = math.sqrt(m_w[1] * m_w[1] + m_w[2] * m_w[2])
    rx = identity()
    if d <= _AXIS_EPS:
        # Already on the X axis.
        return rx
    c = m_w[2] / d
    s = m_w[1] / d
    rx[5] = c
    rx[9] = -s
    rx[6] = s
    rx[10] = c
    return rx


def align_to_z(axis):
    """
    Return ``(A, w_x, w_z)``: the orthonormal alignment A taking the unit
    axis onto +Z, the axis after the X step and after the Y step.
    A zero axis gives the identity and two zero vectors.
    """
    ax, ay, az = axis
    al = math.sqrt(ax * ax + ay * ay + az * az)
    if al <= _AXIS_EPS:
        log.debug("near-zero rotation axis %r, using identity", axis)
        return identity(), (0.0, 0.0, 0.0), (0.0, 0.0, 0.0)

    m_w = (ax / al, ay / al, az / al)
    rx = _align_x(m_w)
    w_x = transform_direction(rx, m_w)

    theta_y = math.atan2(-w_x[0], w_x[2])
    ry = rotation_y(theta_y)
    w_z = transform_direction(ry, w_x)

    return mat4_chain(ry, rx), w_x, w_z


def build_axis_rotation(axis, theta, return_steps=False):
    """
    Rotation of *theta* radians about *axis* as a 4x4 matrix.

    With ``return_steps=True`` returns ``(R, w_x, w_z)`` so the two
    intermediate alignment vectors can be drawn.
    """
    a, w_x, w_z = align_to_z(axis)
    if w_z == (0.0, 0.0, 0.0):
        r = identity()
    else:
        r = mat4_chain(mat4_transpose(a), rotation_z(theta), a)
    if return_steps:
        return r, w_x, w_z
    return r
