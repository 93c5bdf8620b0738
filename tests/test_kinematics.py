import unittest
import sys
from pathlib import Path

import numpy as np

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / "src"))

from ogden.physics import (
    DomainError,
    biot_strain,
    deformation_gradient,
    green_lagrange_strain,
    log_strain,
    polar_decomposition,
    right_stretch_eig,
    rotation_xyz,
    seth_hill_strain,
)


class TestPolarDecomposition(unittest.TestCase):
    def setUp(self):
        self.stretches = np.array([1.23, 1.05, 0.85])
        self.Q_true = rotation_xyz(np.pi / 4, np.pi / 4, np.pi / 4)
        self.F = deformation_gradient(self.stretches, self.Q_true)

    def test_rotation_is_proper(self):
        np.testing.assert_allclose(self.Q_true @ self.Q_true.T, np.eye(3), atol=1e-12)
        self.assertAlmostEqual(np.linalg.det(self.Q_true), 1.0, places=12)

    def test_rotation_order(self):
        a = np.pi / 6
        Rx = np.array([[1, 0, 0], [0, np.cos(a), -np.sin(a)], [0, np.sin(a), np.cos(a)]])
        Rz = np.array([[np.cos(a), -np.sin(a), 0], [np.sin(a), np.cos(a), 0], [0, 0, 1]])
        np.testing.assert_allclose(rotation_xyz(a, 0.0, a), Rx @ Rz, atol=1e-12)

    def test_svd_recovers_stretches_and_rotation(self):
        pd = polar_decomposition(self.F)
        np.testing.assert_allclose(pd.stretches, self.stretches, atol=1e-12)
        np.testing.assert_allclose(pd.Q, self.Q_true, atol=1e-12)
        np.testing.assert_allclose(pd.U, np.diag(self.stretches), atol=1e-12)

    def test_factorisations(self):
        pd = polar_decomposition(self.F)
        np.testing.assert_allclose(pd.Q @ pd.U, self.F, atol=1e-12)
        np.testing.assert_allclose(pd.V @ pd.Q, self.F, atol=1e-12)
        np.testing.assert_allclose(pd.V, pd.Q @ pd.U @ pd.Q.T, atol=1e-12)
        self.assertAlmostEqual(np.linalg.det(pd.Q), 1.0, places=12)

    def test_principal_directions(self):
        pd = polar_decomposition(self.F)
        np.testing.assert_allclose(pd.U @ pd.n, pd.n @ np.diag(pd.stretches), atol=1e-12)
        np.testing.assert_allclose(pd.V @ pd.m, pd.m @ np.diag(pd.stretches), atol=1e-12)
        np.testing.assert_allclose(pd.Q @ pd.n, pd.m, atol=1e-12)

    def test_eig_route(self):
        stretches, N, U, C = right_stretch_eig(self.F)
        np.testing.assert_allclose(stretches, np.sort(self.stretches), atol=1e-12)
        np.testing.assert_allclose(C, self.F.T @ self.F, atol=1e-12)
        np.testing.assert_allclose(U, polar_decomposition(self.F).U, atol=1e-12)

    def test_invalid_input(self):
        with self.assertRaises(DomainError):
            polar_decomposition(np.diag([1.0, 1.0, -1.0]))
        with self.assertRaises(DomainError):
            deformation_gradient([1.0, 0.0, 1.0], np.eye(3))
        with self.assertRaises(ValueError):
            polar_decomposition(np.eye(2))


class TestStrainMeasures(unittest.TestCase):
    def setUp(self):
        F = deformation_gradient([1.23, 1.05, 0.85], rotation_xyz(0.3, -0.2, 0.5))
        self.stretches, self.N, self.U, _ = right_stretch_eig(F)

    def test_principal_values(self):
        E = green_lagrange_strain(self.stretches, self.N)
        np.testing.assert_allclose(np.linalg.eigvalsh(E), 0.5 * (self.stretches ** 2 - 1.0), atol=1e-12)
        H = log_strain(self.stretches, self.N)
        np.testing.assert_allclose(np.linalg.eigvalsh(H), np.log(self.stretches), atol=1e-12)

    def test_biot_strain(self):
        np.testing.assert_allclose(biot_strain(self.stretches, self.N), self.U - np.eye(3), atol=1e-12)

    def test_seth_hill_family(self):
        np.testing.assert_allclose(seth_hill_strain(self.stretches, self.N, 2),
                                   green_lagrange_strain(self.stretches, self.N), atol=1e-12)
        np.testing.assert_allclose(seth_hill_strain(self.stretches, self.N, 1),
                                   biot_strain(self.stretches, self.N), atol=1e-12)
        np.testing.assert_allclose(seth_hill_strain(self.stretches, self.N, 0),
                                   log_strain(self.stretches, self.N), atol=1e-12)


if __name__ == '__main__':
    unittest.main()
