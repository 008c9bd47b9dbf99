"""
Keyboard bindings: held keys -> parameter increments.

Keys are named the way ``Gdk.keyval_name`` reports them ("a", "Left",
"KP_0", ...).  Letter keys match case-insensitively.
"""

import math

# key -> (target, attribute, sign, rate)
#   target: "transform", "view" or "camera"
#   rate:   "turn" or "focal"
BINDINGS = {
    "a":     ("view", "focal_length", -1, "turn"),
    "d":     ("view", "focal_length", +1, "turn"),
    "w":     ("transform", "distance", -1, "turn"),
    "s":     ("transform", "distance", +1, "turn"),
    "Left":  ("transform", "yaw", -1, "turn"),
    "Right": ("transform", "yaw", +1, "turn"),
    "Up":    ("transform", "pitch", -1, "turn"),
    "Down":  ("transform", "pitch", +1, "turn"),
    "q":     ("view", "fov_deg", -1, "focal"),
    "e":     ("view", "fov_deg", +1, "focal"),
    "z":     ("transform", "y_trans", -1, "turn"),
    "x":     ("transform", "y_trans", +1, "turn"),
    "f":     ("transform", "pitch_plane", -1, "turn"),
    "g":     ("transform", "pitch_plane", +1, "turn"),
    "p":     ("camera", "yaw", -1, "turn"),
    "o":     ("camera", "yaw", +1, "turn"),
    "l":     ("camera", "pitch", -1, "turn"),
    "k":     ("camera", "pitch", +1, "turn"),
    "0":     ("transform", "axis_angle", +1, "turn"),
    "KP_0":  ("transform", "axis_angle", +1, "turn"),
    "9":     ("transform", "axis_angle", -1, "turn"),
    "KP_9":  ("transform", "axis_angle", -1, "turn"),
}

# Pitch stays just inside +-90 degrees so the orbit camera never looks
# along its up vector.
PITCH_LIMIT = math.radians(89.0)

# (target, attribute) -> (min, max)
LIMITS = {
    ("camera", "pitch"): (-PITCH_LIMIT, PITCH_LIMIT),
    ("view", "focal_length"): (0.1, 10.0),
    ("view", "fov_deg"): (1.0, 179.0),
}


def _normalize_key(key):
    return key.lower() if len(key) == 1 else key


def apply_controls(keys, dt, transform, view, camera, settings):
    """
    Apply one frame of held *keys* to the parameter blocks in place.
    Unbound keys are ignored.  A key and its numpad twin count once.
    Bounded parameters are clamped to ``LIMITS``.
    """
    targets = {"transform": transform, "view": view, "camera": camera}
    rates = {
        "turn": settings.turn_speed * dt,
        "focal": settings.focal_speed * dt,
    }

    applied = set()
    for key in keys:
        binding = BINDINGS.get(_normalize_key(key))
        if binding is None or binding in applied:
            continue
        applied.add(binding)
        target, attr, sign, rate = binding
        obj = targets[target]
        value = getattr(obj, attr) + sign * rates[rate]
        limits = LIMITS.get((target, attr))
        if limits is not None:
            value = max(limits[0], min(limits[1], value))
        setattr(obj, attr, value)
