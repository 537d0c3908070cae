from __future__ import annotations

from typing import Sequence

import numpy as np

# Matrices are (4, 4) float64 arrays acting on column vectors (m @ p).
# Functions taking a matrix first mutate it in place and return it.
# Plain variants post-multiply (m @ t, applied to points first), *_local
# variants pre-multiply (t @ m, applied to points last).


def normalize(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v)
    if n == 0:
        return v
    return v / n


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    return np.array([x, y, z], dtype=np.float64)


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def translation(x: float, y: float, z: float) -> np.ndarray:
    m = identity()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def scaling(sx: float, sy: float, sz: float) -> np.ndarray:
    m = identity()
    m[0, 0] = sx
    m[1, 1] = sy
    m[2, 2] = sz
    return m


def rotation_x(angle: float) -> np.ndarray:
    c = float(np.cos(angle))
    s = float(np.sin(angle))
    m = identity()
    m[1, 1] = c; m[1, 2] = -s
    m[2, 1] = s; m[2, 2] = c
    return m


def rotation_y(angle: float) -> np.ndarray:
    c = float(np.cos(angle))
    s = float(np.sin(angle))
    m = identity()
    m[0, 0] = c; m[0, 2] = s
    m[2, 0] = -s; m[2, 2] = c
    return m


def rotation_z(angle: float) -> np.ndarray:
    c = float(np.cos(angle))
    s = float(np.sin(angle))
    m = identity()
    m[0, 0] = c; m[0, 1] = -s
    m[1, 0] = s; m[1, 1] = c
    return m


def rotation_axis(angle: float, x: float, y: float, z: float) -> np.ndarray:
    """Rotation about the unit axis (x, y, z) by angle (radians)."""
    # Rodrigues' rotation formula in matrix form.
    a = normalize(vec3(x, y, z))
    c = float(np.cos(angle))
    s = float(np.sin(angle))
    k = np.array(
        [[0.0, -a[2], a[1]],
         [a[2], 0.0, -a[0]],
         [-a[1], a[0], 0.0]]
    )
    m = identity()
    m[:3, :3] = c * np.eye(3) + s * k + (1.0 - c) * np.outer(a, a)
    return m


def ortho2d(left: float, right: float, bottom: float, top: float) -> np.ndarray:
    """glOrtho with near=-1 and far=+1."""
    m = identity()
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -1.0
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    return m


def _post(m: np.ndarray, t: np.ndarray) -> np.ndarray:
    m[...] = m @ t
    return m


def _pre(m: np.ndarray, t: np.ndarray) -> np.ndarray:
    m[...] = t @ m
    return m


def translate(m: np.ndarray, x: float, y: float, z: float) -> np.ndarray:
    return _post(m, translation(x, y, z))


def translate_local(m: np.ndarray, x: float, y: float, z: float) -> np.ndarray:
    return _pre(m, translation(x, y, z))


def rotate_x(m: np.ndarray, angle: float) -> np.ndarray:
    return _post(m, rotation_x(angle))


def rotate_y(m: np.ndarray, angle: float) -> np.ndarray:
    return _post(m, rotation_y(angle))


def rotate_z(m: np.ndarray, angle: float) -> np.ndarray:
    return _post(m, rotation_z(angle))


def rotate_local(m: np.ndarray, angle: float, x: float, y: float, z: float) -> np.ndarray:
    return _pre(m, rotation_axis(angle, x, y, z))


def rotate_local_z(m: np.ndarray, angle: float) -> np.ndarray:
    return _pre(m, rotation_z(angle))


def scale_around_local(m: np.ndarray, s: float, ox: float, oy: float, oz: float) -> np.ndarray:
    """Pre-multiply a uniform scale by s with (ox, oy, oz) as the fixed point."""
    t = translation(ox, oy, oz) @ scaling(s, s, s) @ translation(-ox, -oy, -oz)
    return _pre(m, t)


def rotate_quat(m: np.ndarray, q: np.ndarray) -> np.ndarray:
    return _post(m, quat_to_matrix(q))


def set_translation(m: np.ndarray, x: float, y: float, z: float) -> np.ndarray:
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def mul_affine(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    out = a[:3, :3] @ b[:3, :]
    out[:, 3] += a[:3, 3]
    m = identity()
    m[:3, :] = out
    return m


def invert(m: np.ndarray) -> np.ndarray:
    return np.linalg.inv(m)


def positive_x(m: np.ndarray) -> np.ndarray:
    """Direction of +X before the transformation in m is applied.

    Computed from the first row of the cofactor matrix of the upper 3x3, so
    the result carries the sign of the determinant. For a mirroring matrix
    (negative determinant) the returned direction is flipped.
    """
    a = m[:3, :3]
    d = np.array(
        [
            a[1, 1] * a[2, 2] - a[1, 2] * a[2, 1],
            a[1, 2] * a[2, 0] - a[1, 0] * a[2, 2],
            a[1, 0] * a[2, 1] - a[1, 1] * a[2, 0],
        ]
    )
    return normalize(d)


def transform(m: np.ndarray, x: float, y: float, z: float, w: float) -> np.ndarray:
    return m @ np.array([x, y, z, w], dtype=np.float64)


def transform_position(m: np.ndarray, p: Sequence[float]) -> np.ndarray:
    """Apply m to the point p, ignoring the resulting w."""
    return (m @ np.array([p[0], p[1], p[2], 1.0], dtype=np.float64))[:3]


def unproject_inv(inv: np.ndarray, win: Sequence[float], vp: Sequence[float]) -> np.ndarray:
    """Map window coordinates to world space through an inverted view-projection.

    win is (x, y, z) with z in [0, 1]; vp is (x, y, width, height).
    """
    ndc_x = (win[0] - vp[0]) / vp[2] * 2.0 - 1.0
    ndc_y = (win[1] - vp[1]) / vp[3] * 2.0 - 1.0
    ndc_z = win[2] + win[2] - 1.0
    p = transform(inv, ndc_x, ndc_y, ndc_z, 1.0)
    return p[:3] / p[3]


def project(m: np.ndarray, pos: Sequence[float], vp: Sequence[float]) -> np.ndarray:
    """Map a world-space point to window coordinates (x, y, z)."""
    p = transform(m, pos[0], pos[1], pos[2], 1.0)
    ndc = p[:3] / p[3]
    return np.array(
        [
            (ndc[0] * 0.5 + 0.5) * vp[2] + vp[0],
            (ndc[1] * 0.5 + 0.5) * vp[3] + vp[1],
            (1.0 + ndc[2]) * 0.5,
        ]
    )


# Quaternions are (x, y, z, w) arrays.


def quat_identity() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)


def quat_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array(
        [
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        ]
    )


def quat_conjugate(q: np.ndarray) -> np.ndarray:
    return np.array([-q[0], -q[1], -q[2], q[3]])


def quat_from_axis_angle(angle: float, axis: np.ndarray) -> np.ndarray:
    a = normalize(np.asarray(axis, dtype=np.float64))
    s = float(np.sin(angle * 0.5))
    return np.array([a[0] * s, a[1] * s, a[2] * s, float(np.cos(angle * 0.5))])


def quat_rotate_axis(q: np.ndarray, angle: float, axis: np.ndarray) -> np.ndarray:
    """Post-multiply q by the axis-angle rotation, in place (q := q * r).

    When transforming a vector with the result, the added rotation is
    applied first.
    """
    q[...] = quat_mul(q, quat_from_axis_angle(angle, axis))
    return q


def quat_transform(q: np.ndarray, v: Sequence[float]) -> np.ndarray:
    """Rotate v by the unit quaternion q."""
    u = q[:3]
    w = float(q[3])
    v = np.asarray(v, dtype=np.float64)
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


def quat_to_matrix(q: np.ndarray) -> np.ndarray:
    x, y, z, w = q
    m = identity()
    m[0, 0] = 1.0 - 2.0 * (y * y + z * z)
    m[0, 1] = 2.0 * (x * y - w * z)
    m[0, 2] = 2.0 * (x * z + w * y)
    m[1, 0] = 2.0 * (x * y + w * z)
    m[1, 1] = 1.0 - 2.0 * (x * x + z * z)
    m[1, 2] = 2.0 * (y * z - w * x)
    m[2, 0] = 2.0 * (x * z - w * y)
    m[2, 1] = 2.0 * (y * z + w * x)
    m[2, 2] = 1.0 - 2.0 * (x * x + y * y)
    return m
