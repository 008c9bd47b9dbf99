"""
Frame assembly: turns the current parameters into screen-space primitives.

Nothing here draws.  ``LabScene.build_frame`` returns a list of
``Primitive(kind, vertices)`` where *vertices* is a list of
``((x, y), (r, g, b))`` pairs in pixel space; any backend that can draw
points, line lists and triangle lists can consume it.  Everything is
rebuilt from scratch every frame.

Frame order:
  1. ground lattice (lines)
  2. shadow of the cube (triangles)
  3. cube faces, painter-sorted (triangles)
  4. wireframe, clip-tested (lines)      [optional]
  5. basis / axis vectors (lines)
  6. vector tips and origin (points)
"""

import math
from collections import namedtuple

from arcball import Arcball
from basis import max_abs_component
from camera import OrbitCamera
from mathutil import (
    add, sub, mul, cross, length, normalize, perspective,
    translate, rotation_x, rotation_y, mat4_chain, mat4_multiply,
    mat4_inverse, transform_point, transform_direction,
)
from mesh import make_cube, face_center
from params import (
    TransformParams, ViewParams, ControlSettings, MaterialParams,
    SceneGeometry,
)
from controls import apply_controls
from projection import (
    OFFSCREEN, to_screen_h, to_screen_clipped, view_depth, orthographic,
)
from rotation import build_axis_rotation
from shading import face_normal, phong_color, shadow_from, to_rgb255


POINTS = "points"
LINES = "lines"
TRIANGLES = "triangles"

Primitive = namedtuple("Primitive", "kind vertices")

WHITE = (255, 255, 255)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
CYAN = (0, 255, 255)
MAGENTA = (255, 0, 255)
GRID_COLOR = (90, 90, 90)
SHADOW_COLOR = (25, 25, 25)

# Two triangles per quad: (0, 1, 2) and (0, 2, 3).
_TRI_PATTERN = (0, 1, 2, 0, 2, 3)

_HALF_BOX = 0.5


# ---------------------------------------------------------------------------
# Matrices
# ---------------------------------------------------------------------------

def compute_scene_scale(geometry):
    """Scale fitting every scene vector inside a box of half-size 0.5."""
    max_val = 0.0
    for v in geometry.scene_vectors():
        max_val = max(max_val, max_abs_component(v))
    return _HALF_BOX / max_val if max_val > 0.0 else 1.0


def effective_fov(view):
    """
    Field of view after zooming by the focal length: the half-angle
    tangent shrinks by ``focal_length``, so 1 leaves ``fov_deg`` unchanged.
    """
    half = math.tan(math.radians(view.fov_deg) * 0.5) / view.focal_length
    return math.degrees(2.0 * math.atan(half))


def projection_matrix(view, aspect):
    if view.use_parallel_proj:
        return orthographic(view.ortho_size / view.focal_length, aspect,
                            view.near, view.far)
    return perspective(effective_fov(view), aspect, view.near, view.far)


def model_matrices(transform, axis, arcball_rotation=None):
    """
    Return ``(model_plane, model_cube)``.

    The cube is translated, pitched and yawed in its own frame, then the
    arcball rotation and the axis-angle rotation act in world space.
    """
    base = translate(0.0, transform.y_trans, -transform.distance)
    model_plane = mat4_multiply(base, rotation_x(transform.pitch_plane))

    model_cube = mat4_chain(
        base, rotation_x(transform.pitch), rotation_y(transform.yaw))
    if arcball_rotation is not None:
        model_cube = mat4_multiply(arcball_rotation, model_cube)
    axis_rot = build_axis_rotation(axis, transform.axis_angle)
    return model_plane, mat4_multiply(axis_rot, model_cube)


# ---------------------------------------------------------------------------
# Primitive builders
# ---------------------------------------------------------------------------

def add_vector_line(vertices, origin, vec, proj, mv, width, height, color):
    """Append the segment origin -> origin + vec to a line list."""
    head = add(origin, vec)
    vertices.append((to_screen_h(origin, proj, mv, width, height), color))
    vertices.append((to_screen_h(head, proj, mv, width, height), color))


def build_wireframe(mesh, proj, mv, width, height, color=WHITE):
    """Cube edges; an edge with either endpoint clipped is sent off-screen."""
    vertices = []
    for a_idx, b_idx in mesh.edges:
        ok_a, a = to_screen_clipped(mesh.vertices[a_idx], proj, mv, width, height)
        ok_b, b = to_screen_clipped(mesh.vertices[b_idx], proj, mv, width, height)
        if ok_a and ok_b:
            vertices.append((a, color))
            vertices.append((b, color))
        else:
            vertices.append((OFFSCREEN, color))
            vertices.append((OFFSCREEN, color))
    return Primitive(LINES, vertices)


def sort_faces_by_depth(mesh, mv):
    """
    Painter's order: ``[(face_index, avg_view_z), ...]`` ascending in z, so
    the farthest face (most negative z) comes first.  Ties keep mesh order.
    """
    order = []
    for face_idx, quad in enumerate(mesh.faces):
        zsum = 0.0
        for vidx in quad:
            zsum += view_depth(mesh.vertices[vidx], mv)
        order.append((face_idx, zsum / 4.0))
    return sorted(order, key=lambda item: item[1])


def default_face_color(face_idx):
    return (80 + face_idx * 20, 140 + face_idx * 20, 220)


def shade_face(mesh, face_idx, model, eye, light_pos, material):
    """Phong colour of one face, lit at its world-space centre."""
    quad = mesh.faces[face_idx]
    n = face_normal(mesh.vertices, quad, model)
    center = transform_point(model, face_center(mesh.vertices, quad))
    l = normalize(sub(light_pos, center))
    v = normalize(sub(eye, center))
    rgb = phong_color(
        n, l, v, material.material_color,
        material.ka, material.kd, material.ks, material.shininess,
        material.light_color,
    )
    return to_rgb255(rgb)


def build_faces(mesh, proj, view_matrix, model, width, height,
                light_pos=None, material=None):
    """
    Filled cube faces, farthest first.  Without a light/material the faces
    get fixed per-face colours.
    """
    mv = mat4_multiply(view_matrix, model)
    eye = None
    if light_pos is not None and material is not None:
        inv_view = mat4_inverse(view_matrix)
        if inv_view is not None:
            eye = transform_point(inv_view, (0.0, 0.0, 0.0))

    vertices = []
    for face_idx, _ in sort_faces_by_depth(mesh, mv):
        if eye is None:
            color = default_face_color(face_idx)
        else:
            color = shade_face(mesh, face_idx, model, eye, light_pos, material)
        quad = mesh.faces[face_idx]
        for k in _TRI_PATTERN:
            p = to_screen_h(mesh.vertices[quad[k]], proj, mv, width, height)
            vertices.append((p, color))
    return Primitive(TRIANGLES, vertices)


def build_shadow(mesh, proj, view_matrix, model, light_pos, width, height,
                 color=SHADOW_COLOR):
    """The cube flattened onto y = 0 from the point light."""
    if light_pos[1] == 0.0:
        return Primitive(TRIANGLES, [])
    mv = mat4_chain(view_matrix, shadow_from(light_pos), model)
    vertices = []
    for quad in mesh.faces:
        for k in _TRI_PATTERN:
            p = to_screen_h(mesh.vertices[quad[k]], proj, mv, width, height)
            vertices.append((p, color))
    return Primitive(TRIANGLES, vertices)


def build_vector_lines(axis, axis_angle, proj, mv_cube, mv_plane,
                       width, height):
    """
    Rotation axis (blue, cube frame), the axis after the X alignment step
    (green) and after the Y step (red), a test vector (cyan) and that
    vector rotated about the axis (magenta).
    """
    vertices = []
    o = (0.0, 0.0, 0.0)
    if length(axis) > 0.0:
        add_vector_line(vertices, o, normalize(axis), proj, mv_cube,
                        width, height, BLUE)

    r, w_x, w_z = build_axis_rotation(axis, axis_angle, return_steps=True)

    test = (0.0, 1.0, 0.0)
    if length(cross(test, normalize(axis))) < 1e-6:
        test = (1.0, 0.0, 0.0)
    rotated = transform_direction(r, test)

    add_vector_line(vertices, o, w_x, proj, mv_plane, width, height, GREEN)
    add_vector_line(vertices, o, w_z, proj, mv_plane, width, height, RED)
    add_vector_line(vertices, o, test, proj, mv_plane, width, height, CYAN)
    add_vector_line(vertices, o, rotated, proj, mv_plane, width, height,
                    MAGENTA)
    return Primitive(LINES, vertices)


def build_basis_lines(geometry, scene_scale, proj, mv, width, height):
    """Both bases and w, scaled to the display box."""
    vertices = []
    o = geometry.origin
    v_colors = (RED, GREEN, BLUE)
    u_colors = ((255, 140, 140), (140, 255, 140), (140, 140, 255))
    for vec, color in zip(geometry.v_basis, v_colors):
        add_vector_line(vertices, o, mul(vec, scene_scale), proj, mv,
                        width, height, color)
    for vec, color in zip(geometry.u_basis, u_colors):
        add_vector_line(vertices, o, mul(vec, scene_scale), proj, mv,
                        width, height, color)
    add_vector_line(vertices, o, mul(geometry.w, scene_scale), proj, mv,
                    width, height, WHITE)
    return Primitive(LINES, vertices)


def build_tips(points, proj, mv, width, height, color=WHITE):
    return Primitive(POINTS, [
        (to_screen_h(p, proj, mv, width, height), color) for p in points
    ])


def build_grid_lines(grid, proj, mv, width, height, color=GRID_COLOR):
    """The ground quad corners as two line segments."""
    return Primitive(LINES, [
        (to_screen_h(p, proj, mv, width, height), color) for p in grid
    ])


def bilinear_lattice(grid, n):
    """
    ``{(i, j): point}`` for the (n+1) x (n+1) bilinear interpolation of the
    corners A, B, C, D (A at (0,0), B at (1,0), C at (0,1), D at (1,1)).
    """
    a, b, c, d = grid
    lattice = {}
    if n <= 0:
        return lattice
    for i in range(n + 1):
        for j in range(n + 1):
            u = i / n
            v = j / n
            p = add(add(mul(a, (1 - u) * (1 - v)), mul(b, u * (1 - v))),
                    add(mul(c, (1 - u) * v), mul(d, u * v)))
            lattice[(i, j)] = p
    return lattice


def build_grid_mesh(grid, proj, mv, width, height, n=10, color=GRID_COLOR):
    """Ground lattice: each node joined to its +i and +j neighbours."""
    screen = {
        key: to_screen_h(p, proj, mv, width, height)
        for key, p in bilinear_lattice(grid, n).items()
    }
    vertices = []
    for (i, j), pos in screen.items():
        for nb in ((i + 1, j), (i, j + 1)):
            other = screen.get(nb)
            if other is not None:
                vertices.append((pos, color))
                vertices.append((other, color))
    return Primitive(LINES, vertices)


def barycentric_grid(a, b, c, n, proj, mv, width, height):
    """
    Screen positions of the triangle lattice u*a + v*b + w*c with
    u + v + w = 1 sampled in steps of 1/n, keyed by (i, j).
    """
    result = {}
    if n <= 0:
        return result
    for i in range(n + 1):
        for j in range(n - i + 1):
            k = n - i - j
            u, v, w = i / n, j / n, k / n
            p = add(add(mul(a, u), mul(b, v)), mul(c, w))
            result[(i, j)] = to_screen_h(p, proj, mv, width, height)
    return result


# ---------------------------------------------------------------------------
# Scene
# ---------------------------------------------------------------------------

class LabScene:
    """All per-frame state of the lab plus the frame builder."""

    def __init__(self, geometry=None, view=None):
        self.geometry = geometry or SceneGeometry.book_example()
        self.transform = TransformParams()
        self.view = view or ViewParams()
        self.controls = ControlSettings()
        self.material = MaterialParams()
        self.camera = OrbitCamera()
        self.arcball = Arcball()
        self.cube = make_cube(0.5)
        self.show_wireframe = False
        self.show_shadow = True
        self.show_faces = True
        self._pointer = None
        self._release_pending = False

    # -- Arcball input ------------------------------------------------------
    # Mouse events only record state; ``tick`` integrates it once per frame.

    def press(self, x, y, width, height):
        self.arcball.press(x, y, width, height)
        self._pointer = None
        self._release_pending = False

    def move_pointer(self, x, y, width, height):
        """Remember the latest drag position for the next tick."""
        if self.arcball.dragging:
            self._pointer = (x, y, width, height)

    def release(self):
        if self.arcball.dragging:
            self._release_pending = True

    def reset_view(self):
        self.camera.reset()
        self.arcball = Arcball()
        self._pointer = None
        self._release_pending = False

    def tick(self, keys, dt):
        """
        One frame of input: held keys, then the pending drag step, then
        either the release (spin speed = last step / dt) or idle momentum.
        """
        apply_controls(keys, dt, self.transform, self.view, self.camera,
                       self.controls)
        if self._pointer is not None:
            self.arcball.drag(*self._pointer)
            self._pointer = None
        if self._release_pending:
            self._release_pending = False
            self.arcball.release(dt)
        else:
            self.arcball.update(dt)

    def matrices(self, width, height):
        """Return ``(proj, view, model_plane, model_cube)``."""
        aspect = width / max(height, 1)
        proj = projection_matrix(self.view, aspect)
        view = self.camera.view_matrix(self.view.use_custom_look_at)
        model_plane, model_cube = model_matrices(
            self.transform, self.geometry.w, self.arcball.rotation)
        return proj, view, model_plane, model_cube

    def build_frame(self, width, height):
        width = max(int(width), 1)
        height = max(int(height), 1)
        proj, view, model_plane, model_cube = self.matrices(width, height)
        mv_plane = mat4_multiply(view, model_plane)
        mv_cube = mat4_multiply(view, model_cube)
        geo = self.geometry

        frame = [build_grid_mesh(geo.grid, proj, mv_plane, width, height)]
        if self.show_shadow:
            frame.append(build_shadow(self.cube, proj, view, model_cube,
                                      geo.light_pos, width, height))
        if self.show_faces:
            frame.append(build_faces(self.cube, proj, view, model_cube,
                                     width, height, geo.light_pos,
                                     self.material))
        if self.show_wireframe:
            frame.append(build_wireframe(self.cube, proj, mv_cube,
                                         width, height))
        frame.append(build_vector_lines(geo.w, self.transform.axis_angle,
                                        proj, mv_cube, mv_plane,
                                        width, height))
        frame.append(build_basis_lines(geo, compute_scene_scale(geo), proj,
                                       mv_plane, width, height))
        frame.append(build_tips(geo.v_basis, proj, mv_plane, width, height))
        frame.append(build_tips([geo.origin], proj, mv_plane, width, height))
        return frame
