"""
Face normals, Phong lighting and planar shadows.
"""

from mathutil import (
    sub, mul, dot, cross, normalize, reflect, identity, translate,
    mat4_chain, transform_direction,
)
from mesh import face_center


def face_normal(vertices, face, model):
    """
    World-space unit normal of quad *face*.

    The local normal (v1 - v0) x (v3 - v0) is flipped to point away from
    the object origin, so the mesh must be convex and centred near it.
    """
    v0 = vertices[face[0]]
    v1 = vertices[face[1]]
    v3 = vertices[face[3]]

    normal = normalize(cross(sub(v1, v0), sub(v3, v0)))
    if dot(normal, face_center(vertices, face)) < 0.0:
        normal = mul(normal, -1.0)

    return normalize(transform_direction(model, normal))


def phong(n, l, v, ka, kd, ks, shininess, la=1.0, ld=1.0, ls=1.0):
    """
    Scalar Phong intensity.  *n*, *l* (towards the light) and *v* (towards
    the viewer) must be unit vectors.
    """
    ia = ka * la
    id_ = kd * max(dot(l, n), 0.0) * ld
    r = reflect(mul(l, -1.0), n)
    is_ = ks * max(dot(v, r), 0.0) ** shininess * ls
    return ia + id_ + is_


def phong_color(n, l, v, material_color, ka, kd, ks, shininess, light_color):
    """
    Per-channel Phong: ambient and diffuse are tinted by the material,
    the specular highlight takes the light colour only.
    """
    diffuse = max(dot(l, n), 0.0)
    r = reflect(mul(l, -1.0), n)
    spec = max(dot(v, r), 0.0) ** shininess

    return tuple(
        (ka + kd * diffuse) * m * c + ks * spec * c
        for m, c in zip(material_color, light_color)
    )


def shadow_from(light_pos):
    """
    Matrix flattening points onto the y = 0 plane along rays from the point
    light at *light_pos*.  The light must not sit on the plane.
    """
    lx, ly, lz = light_pos
    m = identity()
    m[15] = 0.0
    m[7] = 1.0 / -ly
    return mat4_chain(translate(lx, ly, lz), m, translate(-lx, -ly, -lz))


def to_rgb255(color):
    """Clamp a linear [0, 1] colour to 8-bit channels."""
    return tuple(int(round(max(0.0, min(1.0, c)) * 255)) for c in color)
