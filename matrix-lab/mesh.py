"""
Reference cube geometry.

Vertex layout (z = -half is the "near" face):

      0 ---- 1        4 ---- 5
      |      |        |      |
      3 ---- 2        7 ---- 6
     z = -half        z = +half
"""

from collections import namedtuple

CubeMesh = namedtuple("CubeMesh", "vertices faces edges")

FACE_NAMES = ("near", "far", "top", "bottom", "right", "left")

_FACES = (
    (0, 1, 2, 3),  # near
    (4, 5, 6, 7),  # far
    (0, 1, 5, 4),  # top
    (3, 2, 6, 7),  # bottom
    (1, 2, 6, 5),  # right
    (0, 3, 7, 4),  # left
)

_EDGES = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


def make_cube(half_size=0.5):
    """Axis-aligned cube centred on the origin with edge 2 * half_size."""
    h = float(half_size)
    z_near, z_far = -h, h
    vertices = (
        (-h,  h, z_near), ( h,  h, z_near),
        ( h, -h, z_near), (-h, -h, z_near),
        (-h,  h, z_far),  ( h,  h, z_far),
        ( h, -h, z_far),  (-h, -h, z_far),
    )
    return CubeMesh(vertices, _FACES, _EDGES)


def face_center(vertices, face):
    """Average of the four corners of quad *face*."""
    sx = sy = sz = 0.0
    for idx in face:
        x, y, z = vertices[idx]
        sx += x; sy += y; sz += z
    return (sx / 4.0, sy / 4.0, sz / 4.0)
