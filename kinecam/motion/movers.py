"""Acceleration-limited smoothers.

Every mover drives ``current`` toward ``target`` with bang-bang control: full
acceleration toward the target until the stopping distance under full
deceleration reaches the remaining distance, then full deceleration. The step
that would carry it past the target snaps onto the target and drops the
residual velocity.
"""
from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from kinecam.config import (
    ARC_MAX_ACCELERATION,
    ARC_MAX_DECELERATION,
    SCALAR_MAX_ACCELERATION,
    SCALAR_MAX_DECELERATION,
    VECTOR_MAX_ACCELERATION,
    VECTOR_MAX_DECELERATION,
)


logger = logging.getLogger(__name__)


def _sign(x: float) -> float:
    return 1.0 if x > 0.0 else -1.0 if x < 0.0 else 0.0


def _check_dt(dt: float) -> float:
    dt = float(dt)
    if dt < 0.0:
        raise ValueError(f"dt must be non-negative, got {dt}")
    return dt


def _check_limits(acceleration: float, deceleration: float) -> tuple[float, float]:
    acceleration = float(acceleration)
    deceleration = float(deceleration)
    if acceleration <= 0.0 or deceleration <= 0.0:
        raise ValueError("acceleration and deceleration limits must be positive")
    return acceleration, deceleration


def plan_acceleration(delta: float, speed: float, max_acc: float, max_dec: float) -> float:
    """Signed acceleration for one bang-bang step.

    ``delta`` is the signed remaining distance, ``speed`` the signed velocity
    along the same axis.
    """
    stop_distance = (speed * speed) / (2.0 * max_dec)
    if speed * delta > 0.0 and stop_distance >= abs(delta):
        return -_sign(delta) * max_dec
    return _sign(delta) * max_acc


def overshoots(way: float, delta: float) -> bool:
    """True when moving ``way`` toward the target would pass it."""
    return way * delta > 0.0 and abs(way) > abs(delta)


def wrap_degrees(value: float) -> float:
    """Map an angle into [0, 360); values already in range are returned as is."""
    if 0.0 <= value < 360.0:
        return value
    wrapped = value % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def shortest_arc(current: float, target: float) -> float:
    """Signed shortest angular distance in degrees from current to target.

    Result lies in (-180, 180]; a half turn is taken in the positive
    direction. Near the target this is a plain subtraction, so it reaches
    exactly zero when ``current`` lands on ``target``.
    """
    d = wrap_degrees(target) - wrap_degrees(current)
    if d > 180.0:
        d -= 360.0
    elif d <= -180.0:
        d += 360.0
    return d


class _BangBangMover:
    """Shared 1-DOF control law; subclasses define distance and wrapping."""

    def __init__(self, *, current: float, target: float, velocity: float,
                 max_acceleration: float, max_deceleration: float) -> None:
        self.max_acceleration, self.max_deceleration = _check_limits(max_acceleration, max_deceleration)
        self.current = float(current)
        self.target = float(target)
        self.velocity = float(velocity)

    def _delta(self) -> float:
        raise NotImplementedError

    def _wrap(self, value: float) -> float:
        return value

    def update(self, dt: float) -> None:
        dt = _check_dt(dt)
        delta = self._delta()
        self.velocity += plan_acceleration(delta, self.velocity, self.max_acceleration, self.max_deceleration) * dt
        way = self.velocity * dt
        if overshoots(way, delta):
            # We would move too far.
            self.velocity = 0.0
            way = delta
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s arrived at %.4f", type(self).__name__, self.target)
        self.current = self._wrap(self.current + way)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(current={self.current!r}, target={self.target!r}, "
            f"velocity={self.velocity!r})"
        )


class ScalarMover(_BangBangMover):
    """Moves a value on the real line."""

    def __init__(
        self,
        current: float = 0.0,
        target: float = 0.0,
        velocity: float = 0.0,
        *,
        max_acceleration: float = SCALAR_MAX_ACCELERATION,
        max_deceleration: float = SCALAR_MAX_DECELERATION,
    ) -> None:
        super().__init__(current=current, target=target, velocity=velocity,
                         max_acceleration=max_acceleration, max_deceleration=max_deceleration)

    def _delta(self) -> float:
        return self.target - self.current


class ArcRotor(_BangBangMover):
    """Rotates an angle in degrees toward its target along the shorter arc.

    After each update ``current`` is normalized into [0, 360).
    """

    def __init__(
        self,
        current: float = 0.0,
        target: float = 0.0,
        velocity: float = 0.0,
        *,
        max_acceleration: float = ARC_MAX_ACCELERATION,
        max_deceleration: float = ARC_MAX_DECELERATION,
    ) -> None:
        super().__init__(current=current, target=target, velocity=velocity,
                         max_acceleration=max_acceleration, max_deceleration=max_deceleration)

    def _delta(self) -> float:
        return shortest_arc(self.current, self.target)

    def _wrap(self, value: float) -> float:
        return wrap_degrees(value)


class Vector3Mover:
    """Moves a 3D point toward its target along the connecting line.

    The acceleration vector always points along the line from ``current`` to
    ``target`` and its magnitude is capped by the direct limits, so the point
    behaves like a :class:`ScalarMover` on that line. Velocity across the line,
    which only exists after the target moved mid-flight, is braked out of the
    same acceleration budget. ``current``, ``target`` and ``velocity`` are
    float64 arrays updated in place.
    """

    def __init__(
        self,
        current: Sequence[float] = (0.0, 0.0, 0.0),
        target: Sequence[float] | None = None,
        velocity: Sequence[float] = (0.0, 0.0, 0.0),
        *,
        max_direct_acceleration: float = VECTOR_MAX_ACCELERATION,
        max_direct_deceleration: float = VECTOR_MAX_DECELERATION,
    ) -> None:
        self.max_direct_acceleration, self.max_direct_deceleration = _check_limits(
            max_direct_acceleration, max_direct_deceleration
        )
        self.current = np.array(current, dtype=np.float64)
        self.target = np.array(current if target is None else target, dtype=np.float64)
        self.velocity = np.array(velocity, dtype=np.float64)

    def update(self, dt: float) -> None:
        dt = _check_dt(dt)
        delta = self.target - self.current
        dist = float(np.linalg.norm(delta))
        if dist == 0.0:
            # No direction to plan along: coast.
            self.current += self.velocity * dt
            return
        if dt == 0.0:
            return
        direction = delta / dist
        speed = float(np.dot(self.velocity, direction))
        accel = plan_acceleration(dist, speed, self.max_direct_acceleration, self.max_direct_deceleration)
        cap = self.max_direct_deceleration if accel < 0.0 else self.max_direct_acceleration
        # Brake velocity off the line (left over from a retarget), at most
        # down to zero, sharing the cap with the on-line acceleration.
        perp = self.velocity - direction * speed
        perp_len = float(np.linalg.norm(perp))
        brake = min(perp_len / dt, cap)
        norm = math.sqrt(accel * accel + brake * brake)
        if norm > cap:
            accel *= cap / norm
            brake *= cap / norm
        self.velocity += direction * (accel * dt)
        if perp_len > 0.0:
            self.velocity -= perp * (brake * dt / perp_len)
        step = self.velocity * dt
        # Snap on the post-acceleration step, like the scalar law: a mover
        # starting from rest with a large dt lands on the target instead of
        # overshooting it.
        if overshoots(float(np.dot(step, direction)), dist):
            self.current[:] = self.target
            self.velocity[:] = 0.0
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Vector3Mover arrived at %s", self.target.tolist())
            return
        self.current += step

    def __repr__(self) -> str:
        return (
            f"Vector3Mover(current={self.current.tolist()!r}, target={self.target.tolist()!r}, "
            f"velocity={self.velocity.tolist()!r})"
        )
