"""
Per-frame parameter blocks.

These replace window-global state: the frame loop owns one instance of
each and passes them into the update and frame-building calls.  They are
mutated only between frames.
"""

from dataclasses import dataclass, field

from basis import from_coords, coords_in_basis
from mathutil import add, identity


@dataclass
class TransformParams:
    """Object rotation/translation driven by the keyboard."""
    yaw: float = 0.0
    pitch: float = 0.0
    pitch_plane: float = 0.0
    axis_angle: float = 0.0
    y_trans: float = 0.0
    distance: float = 0.0


@dataclass
class ViewParams:
    """Projection settings."""
    fov_deg: float = 40.0
    focal_length: float = 1.0
    use_custom_look_at: bool = False
    use_parallel_proj: bool = False
    ortho_size: float = 5.0
    near: float = 0.01
    far: float = 100.0


@dataclass
class ControlSettings:
    turn_speed: float = 1.0
    focal_speed: float = 30.0


@dataclass
class MaterialParams:
    """Phong coefficients and colours for the shaded cube faces."""
    ka: float = 0.2
    kd: float = 0.7
    ks: float = 0.4
    shininess: float = 16.0
    material_color: tuple = (0.31, 0.55, 0.86)
    light_color: tuple = (1.0, 1.0, 1.0)


@dataclass
class ArcballState:
    """Rotation accumulated by mouse drags, plus release momentum."""
    rotation: list = field(default_factory=identity)
    p1: tuple = (0.0, 0.0, 1.0)
    last_axis: tuple = (0.0, 1.0, 0.0)
    last_angle: float = 0.0
    angular_speed: float = 0.0
    dragging: bool = False


def _ground_grid(size=10.0):
    half = size * 0.5
    return (
        (+half, 0.0, -half),
        (-half, 0.0, -half),
        (+half, 0.0, +half),
        (-half, 0.0, +half),
    )


@dataclass
class SceneGeometry:
    """Vectors and reference geometry shown in the lab."""
    grid: tuple = field(default_factory=_ground_grid)
    v_basis: tuple = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
    u_basis: tuple = ((1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (1.0, 1.0, 1.0))
    a: tuple = (1.0, 2.0, 3.0)
    b: tuple = (0.0, 0.0, 0.0)
    w: tuple = (1.0, 1.0, 1.0)
    origin: tuple = (0.0, 0.0, 0.0)
    light_pos: tuple = (2.0, 6.0, 3.0)

    @classmethod
    def book_example(cls):
        """
        a = (1, 2, 3) in the standard basis v, re-expressed in
        u1 = v1, u2 = v1 + v2, u3 = v1 + v2 + v3.  Expected b = (-1, -1, 3).
        """
        v1, v2, v3 = (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)
        a = (1.0, 2.0, 3.0)
        w = from_coords(v1, v2, v3, a)
        u1 = v1
        u2 = add(v1, v2)
        u3 = add(u2, v3)
        b = coords_in_basis(u1, u2, u3, w)
        return cls(v_basis=(v1, v2, v3), u_basis=(u1, u2, u3), a=a, b=b, w=w)

    def scene_vectors(self):
        """The seven vectors the display box is scaled to fit."""
        return tuple(self.v_basis) + tuple(self.u_basis) + (self.w,)
