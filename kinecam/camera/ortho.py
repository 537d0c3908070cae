"""Mouse-driven control of an orthographic 2D camera.

Call:

- ``set_size`` when the window/control size changes
- ``on_mouse_down`` when further ``on_mouse_move`` calls should pan (left)
  or rotate (right); the center button straightens the view around the
  mouse position
- ``on_mouse_move`` every time the mouse moves
- ``on_mouse_up`` when panning/rotating should stop
- ``zoom`` to zoom in/out around the mouse position
- ``viewproj`` to obtain the current view-projection matrix
- ``center`` to center the view onto a world coordinate

Window coordinates share the viewport's origin; y grows the same way as NDC y.
"""
from __future__ import annotations

import logging
import math

import numpy as np

from kinecam.config import (
    DEFAULT_EXTENTS,
    DEFAULT_MIN_ROTATE_WIN_DISTANCE,
    MOUSE_BUTTONS,
    MOUSE_CENTER,
    MOUSE_LEFT,
    MOUSE_RIGHT,
)
from kinecam.util import math as m4


logger = logging.getLogger(__name__)

__all__ = ["MOUSE_CENTER", "MOUSE_LEFT", "MOUSE_RIGHT", "OrthoCameraControl"]


def _check_button(button: int) -> int:
    if button not in MOUSE_BUTTONS:
        raise ValueError(f"unknown mouse button {button!r}")
    return int(button)


class OrthoCameraControl:
    """Pan, zoom and rotate a 2D view with mouse-style events.

    ``view`` maps world coordinates to an aspect-scaled square; ``viewproj``
    adds ``ortho2d(-aspect, aspect, -1, 1)`` for the current viewport and is
    cached together with its inverse after every mutation.
    """

    def __init__(self, extents: float = DEFAULT_EXTENTS) -> None:
        extents = float(extents)
        if extents <= 0.0:
            raise ValueError("extents must be positive")
        self.view = m4.ortho2d(-extents, extents, -extents, extents)
        self._viewproj = m4.identity()
        self._inv_viewproj = m4.identity()
        self.vp = [0, 0, 0, 0]
        self.mouse_x = 0.0
        self.mouse_y = 0.0
        self.mouse_down_x = 0.0
        self.mouse_down_y = 0.0
        self.mouse_down = [False, False, False]
        self._min_rotate_win_distance2 = DEFAULT_MIN_ROTATE_WIN_DISTANCE * DEFAULT_MIN_ROTATE_WIN_DISTANCE

    @property
    def has_size(self) -> bool:
        return self.vp[2] > 0 and self.vp[3] > 0

    def _require_size(self) -> None:
        if not self.has_size:
            raise RuntimeError("viewport size is not set")

    def set_min_rotate_win_distance(self, distance: float) -> None:
        """Minimum distance in pixels between the mouse-down position and the
        current mouse position before dragging with the right button rotates."""
        distance = float(distance)
        self._min_rotate_win_distance2 = distance * distance

    def set_size(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport size must be positive, got {width}x{height}")
        self.vp[:] = [0, 0, int(width), int(height)]
        self.update()

    def viewproj(self) -> np.ndarray:
        self._require_size()
        return self._viewproj

    def inv_viewproj(self) -> np.ndarray:
        self._require_size()
        return self._inv_viewproj

    def update(self, dt: float = 0.0) -> "OrthoCameraControl":
        """Refresh the cached view-projection and its inverse.

        The controller holds no time-dependent state; dt is accepted so it
        can be driven like the other cameras.
        """
        if not self.has_size:
            return self
        aspect = self.vp[2] / self.vp[3]
        self._viewproj = m4.mul_affine(m4.ortho2d(-aspect, aspect, -1.0, 1.0), self.view)
        self._inv_viewproj = m4.invert(self._viewproj)
        return self

    def compose(self, mat: np.ndarray) -> np.ndarray:
        """Post-multiply the view-projection onto mat (in place)."""
        mat[...] = mat @ self.viewproj()
        return mat

    def center(self, x: float, y: float) -> None:
        m4.set_translation(self.view, 0.0, 0.0, 0.0)
        m4.translate(self.view, -x, -y, 0.0)
        self.update()

    def ndc(self, win_x: float, win_y: float) -> np.ndarray:
        """Window coordinates to NDC, with x scaled by the aspect ratio."""
        self._require_size()
        w, h = self.vp[2], self.vp[3]
        x = (win_x / w * 2.0 - 1.0) * (w / h)
        y = win_y / h * 2.0 - 1.0
        return m4.vec3(x, y, 0.0)

    def _rotate_around(self, angle: float, ndc: np.ndarray) -> None:
        m4.translate_local(self.view, -ndc[0], -ndc[1], 0.0)
        m4.rotate_local_z(self.view, angle)
        m4.translate_local(self.view, ndc[0], ndc[1], 0.0)

    def on_mouse_down(self, button: int) -> None:
        button = _check_button(button)
        self.mouse_down_x = self.mouse_x
        self.mouse_down_y = self.mouse_y
        self.mouse_down[button] = True
        if button == MOUSE_CENTER:
            # Reset rotation with the mouse position as center.
            v = -m4.positive_x(self.view)
            ang = math.atan2(v[1], v[0])
            self._rotate_around(ang, self.ndc(self.mouse_down_x, self.mouse_down_y))
            self.update()
            logger.debug("reset rotation by %.4f rad at (%.1f,%.1f)", ang, self.mouse_down_x, self.mouse_down_y)

    def on_mouse_up(self, button: int) -> None:
        self.mouse_down[_check_button(button)] = False

    def on_mouse_move(self, win_x: float, win_y: float) -> None:
        changed = False
        if self.mouse_down[MOUSE_LEFT]:
            # Pan: keep the world point under the cursor.
            self._require_size()
            x0, y0, _ = m4.unproject_inv(self._inv_viewproj, (win_x, win_y, 0.0), self.vp)
            x1, y1, _ = m4.unproject_inv(self._inv_viewproj, (self.mouse_x, self.mouse_y, 0.0), self.vp)
            m4.translate(self.view, x0 - x1, y0 - y1, 0.0)
            changed = True
        elif self.mouse_down[MOUSE_RIGHT]:
            dx0 = win_x - self.mouse_down_x
            dy0 = win_y - self.mouse_down_y
            if dx0 * dx0 + dy0 * dy0 > self._min_rotate_win_distance2:
                dx1 = self.mouse_x - self.mouse_down_x
                dy1 = self.mouse_y - self.mouse_down_y
                ang = math.atan2(dx1 * dy0 - dy1 * dx0, dx1 * dx0 + dy1 * dy0)
                self._rotate_around(ang, self.ndc(self.mouse_down_x, self.mouse_down_y))
                changed = True
        self.mouse_x = float(win_x)
        self.mouse_y = float(win_y)
        if changed:
            self.update()

    def zoom(self, scale: float) -> None:
        """Scale the view around the mouse position; > 1 zooms in, < 1 zooms out."""
        scale = float(scale)
        if scale <= 0.0:
            raise ValueError(f"zoom scale must be positive, got {scale}")
        ndc = self.ndc(self.mouse_x, self.mouse_y)
        m4.scale_around_local(self.view, scale, ndc[0], ndc[1], 0.0)
        self.update()

    def unproject(self, win_x: float, win_y: float) -> np.ndarray:
        """World-space (x, y) under the given window coordinates."""
        p = m4.unproject_inv(self.inv_viewproj(), (win_x, win_y, 0.0), self.vp)
        return p[:2]

    def project(self, x: float, y: float) -> np.ndarray:
        """Window coordinates of the world-space point (x, y)."""
        return m4.project(self.viewproj(), (x, y, 0.0), self.vp)[:2]

    def view_rect(self, out: np.ndarray | None = None) -> np.ndarray:
        """Visible world rectangle as (min_x, min_y, max_x, max_y).

        Written into ``out`` when given, else into a new array.
        """
        inv = self.inv_viewproj()
        corners = np.array(
            [m4.transform_position(inv, (x, y, 0.0)) for y in (-1.0, 1.0) for x in (-1.0, 1.0)]
        )
        lo = corners[:, :2].min(axis=0)
        hi = corners[:, :2].max(axis=0)
        if out is None:
            out = np.empty(4, dtype=np.float64)
        out[:] = (lo[0], lo[1], hi[0], hi[1])
        return out
