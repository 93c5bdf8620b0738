import unittest
import sys
from pathlib import Path

import numpy as np

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / "src"))

from ogden.physics import (
    DomainError,
    MaterialParameters,
    OgdenError,
    check_formulation,
    constrained_principal_stress,
    make_lateral_stress_fn,
    make_principal_stress_fn,
    transverse_stretch,
    unconstrained_lateral_stress,
    unconstrained_principal_stress,
    uncoupled_lateral_stress,
    uncoupled_principal_stress,
)


class TestMaterialParameters(unittest.TestCase):
    def test_defaults(self):
        params = MaterialParameters()
        self.assertEqual((params.c1, params.m1, params.k), (1.0, 12.0, 1000.0))

    def test_invalid_parameters(self):
        with self.assertRaises(ValueError):
            MaterialParameters(c1=0.0)
        with self.assertRaises(ValueError):
            MaterialParameters(m1=0.0)
        with self.assertRaises(ValueError):
            MaterialParameters(k=-1.0)

    def test_from_config(self):
        params = MaterialParameters.from_config({"c1": 2, "m1": 8, "k": 500})
        self.assertEqual(params, MaterialParameters(2.0, 8.0, 500.0))

    def test_unknown_formulation(self):
        with self.assertRaises(ValueError):
            check_formulation("compressible")
        self.assertEqual(check_formulation("uncoupled"), "uncoupled")


class TestConstrained(unittest.TestCase):
    def setUp(self):
        self.params = MaterialParameters(c1=1.0, m1=12.0, k=1000.0)

    def test_closed_form_at_applied_stretch(self):
        S1, S2, S3 = constrained_principal_stress(self.params, 1.3)
        expected = (1.0 / 12.0) * (1.3 ** 12 - 1.3 ** -6)
        self.assertAlmostEqual(float(S3), expected, places=12)
        self.assertEqual(float(S1), 0.0)
        self.assertEqual(float(S2), 0.0)

    def test_reference_state_is_stress_free(self):
        _, _, S3 = constrained_principal_stress(self.params, 1.0)
        self.assertEqual(float(S3), 0.0)

    def test_monotonic_in_stretch(self):
        stretches = np.linspace(1.0, 1.3, 50)
        S1, S2, S3 = constrained_principal_stress(self.params, stretches)
        self.assertTrue(np.all(np.diff(np.asarray(S3)) > 0))
        self.assertTrue(np.all(np.asarray(S1) == 0.0))
        self.assertTrue(np.all(np.asarray(S2) == 0.0))

    def test_domain_error(self):
        for bad in (0.0, -1.2):
            with self.assertRaises(DomainError):
                constrained_principal_stress(self.params, bad)


class TestCompressibleForms(unittest.TestCase):
    def setUp(self):
        self.params = MaterialParameters()

    def test_reference_state_is_stress_free(self):
        for law in (unconstrained_principal_stress, uncoupled_principal_stress):
            for S in law(self.params, 1.0, 1.0):
                self.assertAlmostEqual(float(S), 0.0, places=12)
        self.assertAlmostEqual(float(unconstrained_lateral_stress(self.params, 1.0, 1.0)), 0.0, places=12)
        self.assertAlmostEqual(float(uncoupled_lateral_stress(self.params, 1.0, 1.0)), 0.0, places=12)

    def test_lateral_matches_principal(self):
        for J in (0.95, 1.0, 1.0005, 1.05):
            S1, S2, _ = unconstrained_principal_stress(self.params, 1.2, J)
            self.assertAlmostEqual(float(S1), float(unconstrained_lateral_stress(self.params, 1.2, J)), places=9)
            self.assertEqual(float(S1), float(S2))

    def test_uncoupled_lateral_forms_agree(self):
        # Pre-simplified lateral form and per-stretch deviatoric form
        for lambda3 in (1.0, 1.1, 1.3):
            for J in (0.9, 0.999, 1.0, 1.001, 1.1):
                S1, S2, _ = uncoupled_principal_stress(self.params, lambda3, J)
                S_lat = uncoupled_lateral_stress(self.params, lambda3, J)
                self.assertAlmostEqual(float(S1), float(S_lat), places=9)
                self.assertEqual(float(S1), float(S2))

    def test_lateral_stress_increases_with_J(self):
        J = np.linspace(0.9, 1.1, 100)
        for law in (unconstrained_lateral_stress, uncoupled_lateral_stress):
            S = np.asarray(law(self.params, 1.3, J))
            self.assertTrue(np.all(np.diff(S) > 0))

    def test_transverse_stretch(self):
        self.assertAlmostEqual(float(transverse_stretch(1.21, 1.0)), 1.0 / 1.1, places=12)

    def test_domain_error(self):
        laws = (unconstrained_lateral_stress, unconstrained_principal_stress,
                uncoupled_lateral_stress, uncoupled_principal_stress)
        for law in laws:
            with self.assertRaises(DomainError):
                law(self.params, 0.0, 1.0)
            with self.assertRaises(DomainError):
                law(self.params, 1.2, -0.5)
            with self.assertRaises(OgdenError):
                law(self.params, -1.2, 1.0)

    def test_nan_is_outside_domain(self):
        for law in (unconstrained_lateral_stress, uncoupled_principal_stress):
            with self.assertRaises(DomainError):
                law(self.params, float("nan"), 1.0)
            with self.assertRaises(DomainError):
                law(self.params, 1.2, np.array([1.0, np.nan]))
        with self.assertRaises(DomainError):
            constrained_principal_stress(self.params, float("nan"))

    def test_domain_error_is_value_error(self):
        with self.assertRaises(ValueError):
            uncoupled_lateral_stress(self.params, 1.2, 0.0)


class TestLookup(unittest.TestCase):
    def test_principal_stress_fn(self):
        self.assertIs(make_principal_stress_fn("constrained"), constrained_principal_stress)
        self.assertIs(make_principal_stress_fn("unconstrained"), unconstrained_principal_stress)
        self.assertIs(make_principal_stress_fn("uncoupled"), uncoupled_principal_stress)

    def test_lateral_stress_fn(self):
        self.assertIs(make_lateral_stress_fn("uncoupled"), uncoupled_lateral_stress)
        with self.assertRaises(ValueError):
            make_lateral_stress_fn("constrained")
        with self.assertRaises(ValueError):
            make_lateral_stress_fn("unknown")


if __name__ == '__main__':
    unittest.main()
