"""
Arcball (virtual trackball) rotation.

Mouse positions are lifted onto the unit hemisphere facing the viewer.
Dragging from p1 to p2 rotates by the great-circle arc between them:
axis p1 x p2, angle acos(p1 . p2).  Each step is left-multiplied onto the
accumulated rotation so it acts in world space.  After release the last
step keeps spinning with exponentially decaying speed.

Pipeline per frame (exactly one of):
  1. drag(): integrate the mouse delta
  2. idle(): advance momentum
"""

import logging
import math

from mathutil import cross, dot, length, mat4_multiply, rotate
from params import ArcballState

log = logging.getLogger(__name__)

DRAG_AXIS_EPS = 1e-4
MOMENTUM_DECAY = 0.9975


def map_mouse_to_arcball_vec(x, y, width, height):
    """
    Map pixel (x, y) in a width x height viewport (origin top-left) to a
    point on the unit sphere.  Outside the unit circle the point is pulled
    onto the rim (z = 0).
    """
    px = 2.0 * x / width - 1.0
    py = -(2.0 * y / height - 1.0)

    d2 = px * px + py * py
    if d2 > 1.0:
        d = math.sqrt(d2)
        return (px / d, py / d, 0.0)
    return (px, py, math.sqrt(1.0 - d2))


def rotate_drag(p1, p2):
    """
    Axis and angle carrying sphere point *p1* to *p2*, or None when the
    points are (anti)parallel and the axis is undefined.
    """
    axis = cross(p1, p2)
    al = length(axis)
    if al <= DRAG_AXIS_EPS:
        return None
    axis = (axis[0] / al, axis[1] / al, axis[2] / al)
    angle = math.acos(max(-1.0, min(1.0, dot(p1, p2))))
    return axis, angle


class Arcball:
    """Drag/release/momentum state machine around an ArcballState."""

    def __init__(self, state=None):
        self.state = state if state is not None else ArcballState()

    @property
    def rotation(self):
        return self.state.rotation

    @property
    def dragging(self):
        return self.state.dragging

    def press(self, x, y, width, height):
        st = self.state
        st.dragging = True
        st.angular_speed = 0.0
        st.last_angle = 0.0
        st.p1 = map_mouse_to_arcball_vec(x, y, width, height)

    def drag(self, x, y, width, height):
        """Integrate a mouse move.  Returns True if the rotation changed."""
        st = self.state
        if not st.dragging:
            return False
        p2 = map_mouse_to_arcball_vec(x, y, width, height)
        step = rotate_drag(st.p1, p2)
        if step is None:
            log.debug("arcball drag skipped, points nearly parallel")
            return False
        axis, angle = step
        st.rotation = mat4_multiply(rotate(angle, axis), st.rotation)
        st.last_axis = axis
        st.last_angle = angle
        st.p1 = p2
        return True

    def release(self, dt):
        """End the drag; the last step's rate becomes the spin speed."""
        st = self.state
        st.dragging = False
        st.angular_speed = st.last_angle / dt if dt > 0.0 else 0.0

    def idle(self, dt):
        """Advance release momentum by one frame."""
        st = self.state
        if st.angular_speed == 0.0:
            return
        st.rotation = mat4_multiply(
            rotate(st.angular_speed * dt, st.last_axis), st.rotation)
        st.angular_speed *= MOMENTUM_DECAY

    def update(self, dt):
        if not self.state.dragging:
            self.idle(dt)
