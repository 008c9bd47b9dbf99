"""
Quaternion rotations.

Quaternions are ``Quat(w, x, y, z)`` named tuples.  A unit quaternion
for a rotation of theta about unit axis n is
``(cos(theta/2), sin(theta/2) * n)``.
"""

import logging
import math
from collections import namedtuple

from mathutil import identity

log = logging.getLogger(__name__)

Quat = namedtuple("Quat", "w x y z")

IDENTITY = Quat(1.0, 0.0, 0.0, 0.0)

_AXIS_EPS = 1e-8


def norm(q):
    return math.sqrt(q.w * q.w + q.x * q.x + q.y * q.y + q.z * q.z)


def normalize(q):
    """Scale *q* to unit norm; a near-zero quaternion becomes the identity."""
    n = norm(q)
    if n < _AXIS_EPS:
        return IDENTITY
    return Quat(q.w / n, q.x / n, q.y / n, q.z / n)


def conjugate(q):
    return Quat(q.w, -q.x, -q.y, -q.z)


def multiply(q1, q2):
    """Hamilton product q1 * q2 (not commutative)."""
    return Quat(
        q1.w * q2.w - q1.x * q2.x - q1.y * q2.y - q1.z * q2.z,
        q1.w * q2.x + q1.x * q2.w + q1.y * q2.z - q1.z * q2.y,
        q1.w * q2.y - q1.x * q2.z + q1.y * q2.w + q1.z * q2.x,
        q1.w * q2.z + q1.x * q2.y - q1.y * q2.x + q1.z * q2.w,
    )


def from_axis_angle(axis, theta):
    """Unit quaternion rotating *theta* radians about *axis*."""
    ax, ay, az = axis
    al = math.sqrt(ax * ax + ay * ay + az * az)
    if al < _AXIS_EPS:
        log.debug("near-zero quaternion axis %r, using identity", axis)
        return IDENTITY

    half = theta * 0.5
    s = math.sin(half)
    return Quat(math.cos(half), s * ax / al, s * ay / al, s * az / al)


def quat_to_mat4(q):
    """
    Rotation matrix for *q* (column-major flat list).

    The quaternion is used as given, so a non-unit input also scales.
    """
    w, x, y, z = q
    m = identity()
    m[0] = 1.0 - 2.0 * (y * y + z * z)
    m[1] = 2.0 * (x * y + w * z)
    m[2] = 2.0 * (x * z - w * y)
    m[4] = 2.0 * (x * y - w * z)
    m[5] = 1.0 - 2.0 * (x * x + z * z)
    m[6] = 2.0 * (y * z + w * x)
    m[8] = 2.0 * (x * z + w * y)
    m[9] = 2.0 * (y * z - w * x)
    m[10] = 1.0 - 2.0 * (x * x + y * y)
    return m


def rotate_vector(q, v):
    """Rotate Vec3 *v* by unit quaternion *q* via q * v * q^-1."""
    p = Quat(0.0, v[0], v[1], v[2])
    r = multiply(multiply(q, p), conjugate(q))
    return (r.x, r.y, r.z)
