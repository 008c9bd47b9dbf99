#!/usr/bin/env python3
"""
Interactive matrix lab window.

Usage:
    python standalone_lab.py                 # open the lab window
    python standalone_lab.py --ortho         # start in parallel projection
    python standalone_lab.py --report        # print the change-of-basis
                                             # example and exit

Keys: arrows yaw/pitch the cube, W/S distance, Z/X height, F/G plane pitch,
Q/E field of view, A/D zoom (focal length), O/P and K/L orbit the camera,
9/0 spin about the axis, T wireframe, H shadow, V parallel projection,
C custom lookAt, R reset.  Left-drag: arcball.
"""

import argparse
import logging
import os
import sys
import time
import traceback

LAB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "matrix-lab")
sys.path.insert(0, LAB_DIR)

from params import SceneGeometry, ViewParams
from scene import LabScene, POINTS, LINES, TRIANGLES
from projection import OFFSCREEN

log = logging.getLogger("matrix-lab")

_LOG_PATH = os.path.join(os.path.expanduser("~"), ".config", "matrix-lab",
                         "matrix-lab.log")

FRAME_MS = 16


def setup_logging(verbose=False):
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler()]
    try:
        os.makedirs(os.path.dirname(_LOG_PATH), exist_ok=True)
        handlers.append(logging.FileHandler(_LOG_PATH))
    except OSError as exc:
        print(f"Log file unavailable: {exc}", file=sys.stderr)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )


def report(geometry):
    """Log the change-of-basis example."""
    log.info("Book example: a=%s in v-basis", _fmt(geometry.a))
    log.info("Computed w = %s", _fmt(geometry.w))
    log.info("Computed b in u-basis ~ %s", _fmt(geometry.b))


def _fmt(v):
    return "(" + ", ".join(f"{c:.4g}" for c in v) + ")"


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------

def _visible(p):
    return p != OFFSCREEN


def draw_primitives(cr, frame):
    """Paint a list of scene primitives on a cairo context."""
    for prim in frame:
        verts = prim.vertices
        if prim.kind == TRIANGLES:
            for i in range(0, len(verts) - 2, 3):
                tri = verts[i:i + 3]
                if not all(_visible(p) for p, _ in tri):
                    continue
                r, g, b = tri[0][1]
                cr.set_source_rgb(r / 255.0, g / 255.0, b / 255.0)
                cr.move_to(*tri[0][0])
                cr.line_to(*tri[1][0])
                cr.line_to(*tri[2][0])
                cr.close_path()
                cr.fill()
        elif prim.kind == LINES:
            cr.set_line_width(1.5)
            for i in range(0, len(verts) - 1, 2):
                (a, color), (b, _) = verts[i], verts[i + 1]
                if not (_visible(a) and _visible(b)):
                    continue
                r, g, bl = color
                cr.set_source_rgb(r / 255.0, g / 255.0, bl / 255.0)
                cr.move_to(*a)
                cr.line_to(*b)
                cr.stroke()
        elif prim.kind == POINTS:
            for p, (r, g, b) in verts:
                if not _visible(p):
                    continue
                cr.set_source_rgb(r / 255.0, g / 255.0, b / 255.0)
                cr.rectangle(p[0] - 2, p[1] - 2, 4, 4)
                cr.fill()


# ---------------------------------------------------------------------------
# Lab window
# ---------------------------------------------------------------------------

def run_window(scene, width, height):
    import gi

    gi.require_version("Gtk", "3.0")
    gi.require_version("Gdk", "3.0")
    from gi.repository import Gtk, Gdk, GLib

    class LabWindow(Gtk.Window):

        def __init__(self):
            super().__init__(title="Matrix Lab")
            self.set_default_size(width, height)
            self.scene = scene
            self._held = set()
            self._last_tick = time.monotonic()
            self._build_ui()
            self.connect("destroy", Gtk.main_quit)
            self.connect("key-press-event", self._on_key_press)
            self.connect("key-release-event", self._on_key_release)
            GLib.timeout_add(FRAME_MS, self._on_tick)

        def _build_ui(self):
            vbox = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=0)
            self.add(vbox)

            self.area = Gtk.DrawingArea()
            self.area.set_can_focus(True)
            self.area.add_events(
                Gdk.EventMask.BUTTON_PRESS_MASK
                | Gdk.EventMask.BUTTON_RELEASE_MASK
                | Gdk.EventMask.POINTER_MOTION_MASK
            )
            self.area.connect("draw", self._on_draw)
            self.area.connect("button-press-event", self._on_button_press)
            self.area.connect("button-release-event", self._on_button_release)
            self.area.connect("motion-notify-event", self._on_motion)
            vbox.pack_start(self.area, True, True, 0)

            self.status_bar = Gtk.Label(label="")
            self.status_bar.set_xalign(0)
            self.status_bar.set_margin_start(6)
            self.status_bar.set_margin_top(2)
            self.status_bar.set_margin_bottom(2)
            vbox.pack_start(self.status_bar, False, False, 0)

        def _size(self):
            alloc = self.area.get_allocation()
            return max(alloc.width, 1), max(alloc.height, 1)

        # -- Frame loop -----------------------------------------------------

        def _on_tick(self):
            now = time.monotonic()
            dt = now - self._last_tick
            self._last_tick = now
            try:
                self.scene.tick(self._held, dt)
            except Exception as exc:
                log.error("tick failed: %s\n%s", exc, traceback.format_exc())
            self._update_status()
            self.area.queue_draw()
            return True

        def _on_draw(self, area, cr):
            w, h = self._size()
            cr.set_source_rgb(0.0, 0.0, 0.0)
            cr.paint()
            try:
                draw_primitives(cr, self.scene.build_frame(w, h))
            except Exception as exc:
                log.error("frame failed: %s\n%s", exc, traceback.format_exc())
            return True

        def _update_status(self):
            t = self.scene.transform
            v = self.scene.view
            mode = "ortho" if v.use_parallel_proj else f"fov {v.fov_deg:.1f}"
            mode += f"  focal {v.focal_length:.2f}"
            look = "custom" if v.use_custom_look_at else "library"
            self.status_bar.set_text(
                f"yaw {t.yaw:.2f}  pitch {t.pitch:.2f}  axis angle "
                f"{t.axis_angle:.2f}  {mode}  lookAt {look}  "
                f"b = {_fmt(self.scene.geometry.b)}"
            )

        # -- Mouse / keyboard -----------------------------------------------

        def _on_button_press(self, widget, event):
            if event.button == 1:
                w, h = self._size()
                self.scene.press(event.x, event.y, w, h)
                return True
            return False

        def _on_button_release(self, widget, event):
            if event.button == 1:
                self.scene.release()
                return True
            return False

        def _on_motion(self, widget, event):
            if self.scene.arcball.dragging:
                w, h = self._size()
                self.scene.move_pointer(event.x, event.y, w, h)
                return True
            return False

        def _on_key_press(self, widget, event):
            name = Gdk.keyval_name(event.keyval)
            if name is None:
                return False
            if name == "Escape":
                self.destroy()
                return True
            if self._toggle(name.lower()):
                return True
            self._held.add(name)
            return True

        def _on_key_release(self, widget, event):
            name = Gdk.keyval_name(event.keyval)
            self._held.discard(name)
            if name and len(name) == 1:
                self._held.discard(name.swapcase())
            return True

        def _toggle(self, name):
            sc = self.scene
            if name == "t":
                sc.show_wireframe = not sc.show_wireframe
            elif name == "h":
                sc.show_shadow = not sc.show_shadow
            elif name == "v":
                sc.view.use_parallel_proj = not sc.view.use_parallel_proj
            elif name == "c":
                sc.view.use_custom_look_at = not sc.view.use_custom_look_at
            elif name == "r":
                sc.reset_view()
            else:
                return False
            return True

    win = LabWindow()
    win.show_all()
    Gtk.main()


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main():
    parser = argparse.ArgumentParser(
        description="Interactive linear-algebra and projection lab",
    )
    parser.add_argument("--width", type=int, default=1000)
    parser.add_argument("--height", type=int, default=800)
    parser.add_argument("--fov", type=float, default=40.0,
                        help="Vertical field of view in degrees.")
    parser.add_argument("--ortho", action="store_true",
                        help="Start in parallel projection.")
    parser.add_argument("--custom-look-at", action="store_true",
                        help="Use the step-by-step lookAt construction.")
    parser.add_argument("--report", action="store_true",
                        help="Print the change-of-basis example and exit.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)

    geometry = SceneGeometry.book_example()
    report(geometry)
    if args.report:
        return 0

    view = ViewParams(
        fov_deg=args.fov,
        use_parallel_proj=args.ortho,
        use_custom_look_at=args.custom_look_at,
    )
    scene = LabScene(geometry=geometry, view=view)
    try:
        run_window(scene, args.width, args.height)
    except ImportError as exc:
        log.error("GTK is not available (%s); install PyGObject", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
