"""Tests for the numpy matrix and quaternion helpers."""
from __future__ import annotations

import math

import numpy as np
import pytest

from kinecam.util import math as m4


class TestComposition:
    def test_translate_post_multiplies(self) -> None:
        m = m4.scaling(2.0, 2.0, 2.0)
        m4.translate(m, 1.0, 0.0, 0.0)
        np.testing.assert_allclose(m4.transform_position(m, (0.0, 0.0, 0.0)), (2.0, 0.0, 0.0))

    def test_translate_local_pre_multiplies(self) -> None:
        m = m4.scaling(2.0, 2.0, 2.0)
        m4.translate_local(m, 1.0, 0.0, 0.0)
        np.testing.assert_allclose(m4.transform_position(m, (0.0, 0.0, 0.0)), (1.0, 0.0, 0.0))

    def test_rotate_local_z_matches_axis_form(self) -> None:
        a = m4.translation(1.0, 2.0, 3.0)
        b = a.copy()
        m4.rotate_local_z(a, 0.7)
        m4.rotate_local(b, 0.7, 0.0, 0.0, 1.0)
        np.testing.assert_allclose(a, b, atol=1e-12)

    def test_scale_around_local_fixes_origin(self) -> None:
        m = m4.identity()
        m4.scale_around_local(m, 3.0, 1.0, -2.0, 0.0)
        np.testing.assert_allclose(m4.transform_position(m, (1.0, -2.0, 0.0)), (1.0, -2.0, 0.0))
        np.testing.assert_allclose(m4.transform_position(m, (2.0, -2.0, 0.0)), (4.0, -2.0, 0.0))

    def test_mul_affine_matches_full_product(self) -> None:
        a = m4.translation(1.0, 2.0, 3.0) @ m4.rotation_x(0.3) @ m4.scaling(1.0, 2.0, 0.5)
        b = m4.rotation_y(-1.1) @ m4.translation(-4.0, 0.5, 2.0)
        np.testing.assert_allclose(m4.mul_affine(a, b), a @ b, atol=1e-12)

    def test_set_translation_keeps_linear_part(self) -> None:
        m = m4.rotation_z(0.4) @ m4.translation(3.0, 4.0, 5.0)
        linear = m[:3, :3].copy()
        m4.set_translation(m, 0.0, 0.0, 0.0)
        np.testing.assert_array_equal(m[:3, :3], linear)
        np.testing.assert_array_equal(m[:3, 3], (0.0, 0.0, 0.0))


class TestQueries:
    def test_positive_x_of_rotation(self) -> None:
        m = m4.rotate_z(m4.identity(), 0.5)
        np.testing.assert_allclose(m4.positive_x(m), (math.cos(0.5), -math.sin(0.5), 0.0), atol=1e-12)

    def test_positive_x_carries_mirror_sign(self) -> None:
        np.testing.assert_allclose(m4.positive_x(m4.ortho2d(-2.0, 2.0, -2.0, 2.0)), (-1.0, 0.0, 0.0), atol=1e-12)

    def test_ortho2d_maps_bounds_to_unit_square(self) -> None:
        m = m4.ortho2d(-3.0, 5.0, 1.0, 2.0)
        np.testing.assert_allclose(m4.transform_position(m, (-3.0, 1.0, 0.0)), (-1.0, -1.0, 0.0))
        np.testing.assert_allclose(m4.transform_position(m, (5.0, 2.0, 0.0)), (1.0, 1.0, 0.0))

    def test_unproject_inverts_project(self) -> None:
        vp = (10, 20, 300, 200)
        m = m4.ortho2d(-4.0, 4.0, -2.0, 3.0) @ m4.rotation_z(0.3)
        win = m4.project(m, (0.5, -0.25, 0.0), vp)
        np.testing.assert_allclose(m4.unproject_inv(m4.invert(m), win, vp)[:2], (0.5, -0.25), atol=1e-12)

    def test_unproject_viewport_corner(self) -> None:
        vp = (0, 0, 100, 50)
        p = m4.unproject_inv(m4.identity(), (0.0, 50.0, 0.5), vp)
        np.testing.assert_allclose(p, (-1.0, 1.0, 0.0))


class TestQuaternions:
    def test_identity_transform(self) -> None:
        np.testing.assert_allclose(m4.quat_transform(m4.quat_identity(), (1.0, 2.0, 3.0)), (1.0, 2.0, 3.0))

    def test_rotate_axis_matches_matrix(self) -> None:
        q = m4.quat_identity()
        m4.quat_rotate_axis(q, 0.8, m4.vec3(1.0, 1.0, 0.0))
        v = np.array([0.3, -0.2, 0.9])
        np.testing.assert_allclose(
            m4.quat_transform(q, v),
            m4.rotation_axis(0.8, 1.0, 1.0, 0.0)[:3, :3] @ v,
            atol=1e-12,
        )
        np.testing.assert_allclose(m4.quat_to_matrix(q)[:3, :3] @ v, m4.quat_transform(q, v), atol=1e-12)

    def test_rotate_axis_post_multiplies(self) -> None:
        q = m4.quat_identity()
        m4.quat_rotate_axis(q, math.pi / 2.0, m4.vec3(0.0, 0.0, 1.0))
        m4.quat_rotate_axis(q, math.pi / 2.0, m4.vec3(1.0, 0.0, 0.0))
        # The x rotation was added last, so it acts first: y -> z, then z stays.
        np.testing.assert_allclose(m4.quat_transform(q, (0.0, 1.0, 0.0)), (0.0, 0.0, 1.0), atol=1e-12)

    def test_conjugate_inverts(self) -> None:
        q = m4.quat_from_axis_angle(1.3, np.array([0.2, -0.5, 0.8]))
        v = np.array([1.0, 2.0, -1.0])
        back = m4.quat_transform(m4.quat_conjugate(q), m4.quat_transform(q, v))
        np.testing.assert_allclose(back, v, atol=1e-12)

    @pytest.mark.parametrize("angle", [0.0, 0.4, -2.0])
    def test_rotation_z_matches_quaternion(self, angle: float) -> None:
        q = m4.quat_from_axis_angle(angle, np.array([0.0, 0.0, 1.0]))
        np.testing.assert_allclose(m4.quat_to_matrix(q), m4.rotation_z(angle), atol=1e-12)
