"""
World -> clip -> NDC -> screen.

Both projection helpers reject points with clip w <= 1e-6 (on or behind
the camera plane).  ``to_screen_h`` then divides unconditionally;
``to_screen_clipped`` additionally applies the GPU clip box
-w <= x, y, z <= w.
"""

from mathutil import identity, mat4_multiply, mat4_mul_vec4

W_EPS = 1e-6

# Screen position used for points that cannot be projected.
OFFSCREEN = (-99999.0, -99999.0)


def ndc_to_screen(ndc_x, ndc_y, width, height):
    """NDC to pixels, origin top-left (Y flipped)."""
    return (
        (ndc_x + 1.0) * 0.5 * width,
        (1.0 - (ndc_y + 1.0) * 0.5) * height,
    )


def to_clip(world, proj, mv):
    return mat4_mul_vec4(mat4_multiply(proj, mv),
                         (world[0], world[1], world[2], 1.0))


def to_screen_h(world, proj, mv, width, height):
    """Project *world*; returns OFFSCREEN when clip w <= 1e-6."""
    x, y, _, w = to_clip(world, proj, mv)
    if w <= W_EPS:
        return OFFSCREEN
    return ndc_to_screen(x / w, y / w, width, height)


def to_screen_clipped(world, proj, mv, width, height):
    """
    Clip-tested projection.  Returns ``(True, screen)`` when the point is in
    front of the camera and inside the clip box, else ``(False, None)``.
    """
    x, y, z, w = to_clip(world, proj, mv)
    if w <= W_EPS:
        return False, None
    if abs(x) > w or abs(y) > w or abs(z) > w:
        return False, None
    return True, ndc_to_screen(x / w, y / w, width, height)


def view_depth(point, mv):
    """View-space z of *point* (negative in front of a -Z-forward camera)."""
    return mat4_mul_vec4(mv, (point[0], point[1], point[2], 1.0))[2]


def orthographic(ortho_size, aspect, near, far):
    """
    Parallel projection of a box ``ortho_size * aspect`` wide and
    ``ortho_size`` high (half extents), depth mapped to [-1, 1].
    """
    right = ortho_size * aspect
    top = ortho_size

    m = identity()
    m[0] = 1.0 / right
    m[5] = 1.0 / top
    m[10] = -2.0 / (far - near)
    m[14] = -(far + near) / (far - near)
    return m
