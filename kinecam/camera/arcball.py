from __future__ import annotations

import math

import numpy as np

from kinecam.config import (
    ARCBALL_CENTER_ACCELERATION,
    ARCBALL_CENTER_DECELERATION,
    ARCBALL_ZOOM,
    ARCBALL_ZOOM_ACCELERATION,
    ARCBALL_ZOOM_DECELERATION,
)
from kinecam.motion.movers import ArcRotor, ScalarMover, Vector3Mover
from kinecam.util import math as m4


class ArcBallCamera:
    """Camera orbiting a moving center.

    Azimuth (alpha) and elevation (beta) are in degrees and follow the shorter
    arc; they are converted to radians when the view matrix is built. Zoom is
    the distance from the center along the view axis.
    """

    def __init__(
        self,
        *,
        zoom: float = ARCBALL_ZOOM,
        center_accel: float = ARCBALL_CENTER_ACCELERATION,
        center_decel: float = ARCBALL_CENTER_DECELERATION,
        zoom_accel: float = ARCBALL_ZOOM_ACCELERATION,
        zoom_decel: float = ARCBALL_ZOOM_DECELERATION,
    ) -> None:
        self.center_mover = Vector3Mover(
            max_direct_acceleration=center_accel,
            max_direct_deceleration=center_decel,
        )
        self.alpha_mover = ArcRotor()
        self.beta_mover = ArcRotor()
        self.zoom_mover = ScalarMover(
            zoom, zoom,
            max_acceleration=zoom_accel,
            max_deceleration=zoom_decel,
        )

    def alpha(self, alpha: float) -> None:
        self.alpha_mover.target = float(alpha)

    def beta(self, beta: float) -> None:
        self.beta_mover.target = float(beta)

    def zoom(self, zoom: float) -> None:
        self.zoom_mover.target = float(zoom)

    def center(self, x: float, y: float, z: float) -> None:
        self.center_mover.target[:] = (x, y, z)

    def update(self, dt: float) -> "ArcBallCamera":
        self.alpha_mover.update(dt)
        self.beta_mover.update(dt)
        self.zoom_mover.update(dt)
        self.center_mover.update(dt)
        return self

    def view_matrix(self, mat: np.ndarray) -> np.ndarray:
        """Post-multiply the current view transform onto mat (in place)."""
        c = self.center_mover.current
        m4.translate(mat, 0.0, 0.0, -self.zoom_mover.current)
        m4.rotate_x(mat, math.radians(self.beta_mover.current))
        m4.rotate_y(mat, math.radians(self.alpha_mover.current))
        m4.translate(mat, -c[0], -c[1], -c[2])
        return mat

    compose = view_matrix
