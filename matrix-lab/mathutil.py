"""
Shared linear algebra utilities for the matrix lab.

All matrices are 4x4, stored as column-major flat lists of 16 floats
(OpenGL convention): element (row, col) lives at index ``col * 4 + row``.
Vectors are plain tuples.  No external dependencies beyond the stdlib.
"""

import math


# ---------------------------------------------------------------------------
# Vec3 helpers
# ---------------------------------------------------------------------------

def add(a, b):
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a, b):
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def mul(v, s):
    return (v[0] * s, v[1] * s, v[2] * s)


def dot(a, b):
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a, b):
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(v):
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def normalize(v):
    """Return *v* scaled to unit length.  The zero vector stays zero."""
    vl = length(v)
    if vl == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / vl, v[1] / vl, v[2] / vl)


def reflect(i, n):
    """Reflect incident direction *i* about normal *n* (GLSL reflect)."""
    return sub(i, mul(n, 2.0 * dot(n, i)))


# ---------------------------------------------------------------------------
# Mat4 construction
# ---------------------------------------------------------------------------

def identity():
    """Return the 4x4 identity matrix."""
    return [
        1.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ]


def translate(x, y, z):
    m = identity()
    m[12], m[13], m[14] = x, y, z
    return m


def scale(sx, sy, sz):
    m = identity()
    m[0], m[5], m[10] = sx, sy, sz
    return m


def rotation_x(angle):
    c, s = math.cos(angle), math.sin(angle)
    return [
        1.0, 0.0, 0.0, 0.0,
        0.0, c,   s,   0.0,
        0.0, -s,  c,   0.0,
        0.0, 0.0, 0.0, 1.0,
    ]


def rotation_y(angle):
    c, s = math.cos(angle), math.sin(angle)
    return [
        c,   0.0, -s,  0.0,
        0.0, 1.0, 0.0, 0.0,
        s,   0.0, c,   0.0,
        0.0, 0.0, 0.0, 1.0,
    ]


def rotation_z(angle):
    c, s = math.cos(angle), math.sin(angle)
    return [
        c,   s,   0.0, 0.0,
        -s,  c,   0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ]


def rotate(angle, axis):
    """
    Rotation of *angle* radians about *axis* (right-handed), built with the
    Rodrigues formula.  A zero-length axis yields the identity.
    """
    ax, ay, az = axis
    al = math.sqrt(ax * ax + ay * ay + az * az)
    if al == 0.0:
        return identity()
    ax /= al; ay /= al; az /= al

    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    return [
        t * ax * ax + c,      t * ax * ay + s * az, t * ax * az - s * ay, 0.0,
        t * ax * ay - s * az, t * ay * ay + c,      t * ay * az + s * ax, 0.0,
        t * ax * az + s * ay, t * ay * az - s * ax, t * az * az + c,      0.0,
        0.0,                  0.0,                  0.0,                  1.0,
    ]


def perspective(fov_deg, aspect, near, far):
    """Build a 4x4 perspective projection matrix (column-major flat list)."""
    f = 1.0 / math.tan(math.radians(fov_deg) / 2.0)
    nf = near - far
    return [
        f / aspect, 0.0, 0.0,                       0.0,
        0.0,        f,   0.0,                       0.0,
        0.0,        0.0, (far + near) / nf,        -1.0,
        0.0,        0.0, (2.0 * far * near) / nf,   0.0,
    ]


def look_at(eye, center, up):
    """Build a 4x4 look-at view matrix (column-major flat list)."""
    fx, fy, fz = normalize(sub(center, eye))
    sx, sy, sz = normalize(cross((fx, fy, fz), up))
    ux, uy, uz = cross((sx, sy, sz), (fx, fy, fz))

    return [
        sx,  ux, -fx, 0.0,
        sy,  uy, -fy, 0.0,
        sz,  uz, -fz, 0.0,
        -(sx * eye[0] + sy * eye[1] + sz * eye[2]),
        -(ux * eye[0] + uy * eye[1] + uz * eye[2]),
        (fx * eye[0] + fy * eye[1] + fz * eye[2]),
        1.0,
    ]


# ---------------------------------------------------------------------------
# Mat4 operations
# ---------------------------------------------------------------------------

def mat4_multiply(a, b):
    """Multiply two column-major 4x4 matrices."""
    result = [0.0] * 16
    for row in range(4):
        for col in range(4):
            s = 0.0
            for k in range(4):
                s += a[k * 4 + row] * b[col * 4 + k]
            result[col * 4 + row] = s
    return result


def mat4_chain(*matrices):
    """Multiply left to right: ``mat4_chain(a, b, c) == a * b * c``."""
    result = identity()
    for m in matrices:
        result = mat4_multiply(result, m)
    return result


def mat4_transpose(m):
    return [m[row * 4 + col] for col in range(4) for row in range(4)]


def mat4_inverse(m):
    """Invert a 4x4 column-major matrix.  Returns None if singular."""
    inv = [0.0] * 16

    inv[0] = (m[5]*m[10]*m[15] - m[5]*m[11]*m[14] - m[9]*m[6]*m[15]
              + m[9]*m[7]*m[14] + m[13]*m[6]*m[11] - m[13]*m[7]*m[10])
    inv[4] = (-m[4]*m[10]*m[15] + m[4]*m[11]*m[14] + m[8]*m[6]*m[15]
              - m[8]*m[7]*m[14] - m[12]*m[6]*m[11] + m[12]*m[7]*m[10])
    inv[8] = (m[4]*m[9]*m[15] - m[4]*m[11]*m[13] - m[8]*m[5]*m[15]
              + m[8]*m[7]*m[13] + m[12]*m[5]*m[11] - m[12]*m[7]*m[9])
    inv[12] = (-m[4]*m[9]*m[14] + m[4]*m[10]*m[13] + m[8]*m[5]*m[14]
               - m[8]*m[6]*m[13] - m[12]*m[5]*m[10] + m[12]*m[6]*m[9])

    inv[1] = (-m[1]*m[10]*m[15] + m[1]*m[11]*m[14] + m[9]*m[2]*m[15]
              - m[9]*m[3]*m[14] - m[13]*m[2]*m[11] + m[13]*m[3]*m[10])
    inv[5] = (m[0]*m[10]*m[15] - m[0]*m[11]*m[14] - m[8]*m[2]*m[15]
              + m[8]*m[3]*m[14] + m[12]*m[2]*m[11] - m[12]*m[3]*m[10])
    inv[9] = (-m[0]*m[9]*m[15] + m[0]*m[11]*m[13] + m[8]*m[1]*m[15]
              - m[8]*m[3]*m[13] - m[12]*m[1]*m[11] + m[12]*m[3]*m[9])
    inv[13] = (m[0]*m[9]*m[14] - m[0]*m[10]*m[13] - m[8]*m[1]*m[14]
               + m[8]*m[2]*m[13] + m[12]*m[1]*m[10] - m[12]*m[2]*m[9])

    inv[2] = (m[1]*m[6]*m[15] - m[1]*m[7]*m[14] - m[5]*m[2]*m[15]
              + m[5]*m[3]*m[14] + m[13]*m[2]*m[7] - m[13]*m[3]*m[6])
    inv[6] = (-m[0]*m[6]*m[15] + m[0]*m[7]*m[14] + m[4]*m[2]*m[15]
              - m[4]*m[3]*m[14] - m[12]*m[2]*m[7] + m[12]*m[3]*m[6])
    inv[10] = (m[0]*m[5]*m[15] - m[0]*m[7]*m[13] - m[4]*m[1]*m[15]
               + m[4]*m[3]*m[13] + m[12]*m[1]*m[7] - m[12]*m[3]*m[5])
    inv[14] = (-m[0]*m[5]*m[14] + m[0]*m[6]*m[13] + m[4]*m[1]*m[14]
               - m[4]*m[2]*m[13] - m[12]*m[1]*m[6] + m[12]*m[2]*m[5])

    inv[3] = (-m[1]*m[6]*m[11] + m[1]*m[7]*m[10] + m[5]*m[2]*m[11]
              - m[5]*m[3]*m[10] - m[9]*m[2]*m[7] + m[9]*m[3]*m[6])
    inv[7] = (m[0]*m[6]*m[11] - m[0]*m[7]*m[10] - m[4]*m[2]*m[11]
              + m[4]*m[3]*m[10] + m[8]*m[2]*m[7] - m[8]*m[3]*m[6])
    inv[11] = (-m[0]*m[5]*m[11] + m[0]*m[7]*m[9] + m[4]*m[1]*m[11]
               - m[4]*m[3]*m[9] - m[8]*m[1]*m[7] + m[8]*m[3]*m[5])
    inv[15] = (m[0]*m[5]*m[10] - m[0]*m[6]*m[9] - m[4]*m[1]*m[10]
               + m[4]*m[2]*m[9] + m[8]*m[1]*m[6] - m[8]*m[2]*m[5])

    det = m[0]*inv[0] + m[1]*inv[4] + m[2]*inv[8] + m[3]*inv[12]
    if abs(det) < 1e-12:
        return None

    det = 1.0 / det
    return [x * det for x in inv]


def mat3_determinant(m):
    """Determinant of the upper-left 3x3 block."""
    c0 = (m[0], m[1], m[2])
    c1 = (m[4], m[5], m[6])
    c2 = (m[8], m[9], m[10])
    return dot(c0, cross(c1, c2))


def mat4_mul_vec4(m, v):
    """Multiply column-major 4x4 matrix by a 4-vector."""
    x, y, z, w = v
    return (
        m[0]*x + m[4]*y + m[8]*z  + m[12]*w,
        m[1]*x + m[5]*y + m[9]*z  + m[13]*w,
        m[2]*x + m[6]*y + m[10]*z + m[14]*w,
        m[3]*x + m[7]*y + m[11]*z + m[15]*w,
    )


def transform_point(m, p):
    """Apply *m* to a point (w=1) and return the xyz part, no divide."""
    x, y, z, _ = mat4_mul_vec4(m, (p[0], p[1], p[2], 1.0))
    return (x, y, z)


def transform_direction(m, d):
    """Apply *m* to a direction (w=0); translation is ignored."""
    x, y, z, _ = mat4_mul_vec4(m, (d[0], d[1], d[2], 0.0))
    return (x, y, z)
