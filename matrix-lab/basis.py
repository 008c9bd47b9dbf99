"""
Change of basis: express a vector in an arbitrary (non-orthogonal) basis.

Coordinates are extracted with Cramer's rule written as scalar triple
products, so the only division is by the basis determinant
``e1 . (e2 x e3)``.
"""

import logging

from mathutil import add, mul, dot, cross

log = logging.getLogger(__name__)

DEGENERATE_EPS = 1e-6


def max_abs_component(v):
    """Largest absolute component of *v*; used to fit vectors in a unit box."""
    return max(abs(v[0]), abs(v[1]), abs(v[2]))


def triple_product(e1, e2, e3):
    """Signed volume of the parallelepiped spanned by e1, e2, e3."""
    return dot(e1, cross(e2, e3))


def coords_in_basis(e1, e2, e3, w):
    """
    Return c = (c1, c2, c3) with w = c1*e1 + c2*e2 + c3*e3.

    A degenerate basis (|det| < 1e-6) yields (0, 0, 0).
    """
    e2xe3 = cross(e2, e3)
    e3xe1 = cross(e3, e1)
    e1xe2 = cross(e1, e2)

    det = dot(e1, e2xe3)
    if abs(det) < DEGENERATE_EPS:
        log.debug("degenerate basis (det=%g), returning zero coords", det)
        return (0.0, 0.0, 0.0)

    return (
        dot(w, e2xe3) / det,
        dot(w, e3xe1) / det,
        dot(w, e1xe2) / det,
    )


def from_coords(e1, e2, e3, c):
    """Rebuild w = c1*e1 + c2*e2 + c3*e3."""
    return add(add(mul(e1, c[0]), mul(e2, c[1])), mul(e3, c[2]))
