from __future__ import annotations

from typing import Sequence

import numpy as np

from kinecam.config import FREE_CAMERA_POSITION
from kinecam.util import math as m4


class FreeCamera:
    """6-DOF free/space camera.

    Linear acceleration and velocity are in world space. Angular acceleration
    and velocity are ALWAYS about the local camera axes:
    x about right, y about up, z about forward (radians).

    Each axis rotation of a step uses the world-space axes cached at the end
    of the previous step, so large ``angular_vel * dt`` is only approximate;
    subdivide dt for fast spins.
    """

    def __init__(self, position: Sequence[float] = FREE_CAMERA_POSITION) -> None:
        self.linear_acc = m4.vec3()
        self.linear_vel = m4.vec3()
        self.angular_acc = m4.vec3()
        self.angular_vel = m4.vec3()

        self.position = np.array(position, dtype=np.float64)
        self.rotation = m4.quat_identity()

        # Computed world-space vectors
        self.forward = m4.vec3(0.0, 0.0, -1.0)
        self.right = m4.vec3(1.0, 0.0, 0.0)
        self.up = m4.vec3(0.0, 1.0, 0.0)

    def update(self, dt: float) -> "FreeCamera":
        dt = float(dt)
        if dt < 0.0:
            raise ValueError(f"dt must be non-negative, got {dt}")

        self.linear_vel += self.linear_acc * dt
        self.angular_vel += self.angular_acc * dt

        m4.quat_rotate_axis(self.rotation, float(self.angular_vel[0]) * dt, self.right)
        m4.quat_rotate_axis(self.rotation, float(self.angular_vel[1]) * dt, self.up)
        m4.quat_rotate_axis(self.rotation, float(self.angular_vel[2]) * dt, self.forward)

        self.position += self.linear_vel * dt

        inv = m4.quat_conjugate(self.rotation)
        self.forward[:] = m4.quat_transform(inv, (0.0, 0.0, -1.0))
        self.up[:] = m4.quat_transform(inv, (0.0, 1.0, 0.0))
        self.right[:] = m4.quat_transform(inv, (1.0, 0.0, 0.0))
        return self

    def apply(self, mat: np.ndarray) -> np.ndarray:
        """Post-multiply the camera's view transform onto mat (in place)."""
        m4.rotate_quat(mat, self.rotation)
        p = self.position
        return m4.translate(mat, -p[0], -p[1], -p[2])

    compose = apply
