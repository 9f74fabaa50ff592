#!/usr/bin/env python3

import math
import unittest
import sys
import warnings

import numpy as np
from mpmath import mp

from testutils import TaylorTestCase, slowtest
from .exprs import Add, Mul, Div, Exp, Ln, Pow, PI, X, derive
from .exprs.common import ExpressionWarning
from .taylor import taylor_eval, TaylorSeries, TaylorComparison


def _benchmark_function():
    return Pow(Ln(X), Div(PI, X))


class TestTaylorSeries(TaylorTestCase):
    def test_coefficients(self):
        series = TaylorSeries(Exp(X), 0.0, 5)
        self.assertListAlmostEqual(series.coeffs,
                                   [1.0, 1.0, 0.5, 1/6., 1/24.], places=14)
        self.assertEqual(series.order, 5)
        self.assertEqual(series.a, 0.0)
        self.assertEqual(len(series.chain), 5)

    def test_polynomial_exact(self):
        # x^3 + 2x is reproduced exactly by 4 terms
        expr = Add(Mul(X, Mul(X, X)), Mul(2, X))
        series = TaylorSeries(expr, 1.0, 4)
        for x in [-2.0, 0.0, 1.0, 5.0]:
            with self.subTest(x=x):
                self.assertAlmostEqual(series(x), x**3 + 2*x, places=9)
        self.assertListAlmostEqual(series.coeffs, [3.0, 5.0, 3.0, 1.0], places=12)

    def test_order_one(self):
        self.assertAlmostEqual(taylor_eval(Exp(X), 1.0, 7.0, 1), math.e)

    def test_invalid_order(self):
        for order in [0, -1, 2.5, True, None]:
            with self.subTest(order=order):
                with self.assertRaises(ValueError):
                    TaylorSeries(Exp(X), 0.0, order)
        with self.assertRaises(ValueError):
            taylor_eval(Exp(X), 0.0, 1.0, 0)

    def test_convergence(self):
        for expr, a, x in [(Exp(X), 0.0, 0.5), (Ln(X), 1.0, 1.3),
                           (Div(1, Add(1, X)), 0.0, 0.3)]:
            errors = [abs(taylor_eval(expr, a, x, n) - expr.eval(x))
                      for n in range(1, 7)]
            with self.subTest(expr=expr.str()):
                for e1, e2 in zip(errors[:-1], errors[1:]):
                    self.assertLess(e2, e1)

    def test_single_precision(self):
        series = TaylorSeries(Ln(X), 1.0, 4, precision='single')
        self.assertIsType(series(1.2), np.float32)
        self.assertIsType(series.coeffs[2], np.float32)
        self.assertAlmostEqual(float(series(1.2)), 0.2 - 0.02 + 0.008/3,
                               delta=1e-6)

    def test_mpmath(self):
        series = TaylorSeries(Exp(X), 0, 10, use_mp=True, dps=30)
        value = series(1)
        self.assertIsInstance(value, mp.mpf)
        with mp.workdps(30):
            expected = mp.fsum(1/mp.factorial(n) for n in range(10))
            self.assertTrue(mp.almosteq(value, expected, rel_eps=mp.mpf('1e-25')))
            self.assertLess(abs(value - mp.e), 1e-6)

    @slowtest
    def test_mpmath_high_order(self):
        series = TaylorSeries(Exp(X), 0, 12, use_mp=True, dps=30)
        with mp.workdps(30):
            expected = mp.fsum(1/mp.factorial(n) for n in range(12))
            self.assertTrue(mp.almosteq(series(1), expected, rel_eps=mp.mpf('1e-25')))
            self.assertLess(abs(series(1) - mp.e), 1e-8)
            self.assertLess(abs(series(-1) - 1/mp.e), 1e-8)

    def test_non_finite_coefficients(self):
        with self.assertWarns(ExpressionWarning):
            series = TaylorSeries(Ln(X), 0.0, 3)
        with warnings.catch_warnings():
            warnings.simplefilter('error', RuntimeWarning)
            self.assertFalse(np.isfinite(series(1.0)))
        with self.assertWarns(ExpressionWarning):
            TaylorSeries(Ln(X), -1.0, 2, use_mp=True)


class TestEndToEnd(TaylorTestCase):
    def test_derivative_expansion(self):
        fnd = derive(_benchmark_function())
        near = abs(taylor_eval(fnd, 2.0, 2.5, 5, precision='single')
                   - fnd.eval(2.5, precision='single'))
        far = abs(taylor_eval(fnd, 2.0, 1.25, 5, precision='single')
                  - fnd.eval(1.25, precision='single'))
        self.assertLess(near, 1e-2)
        self.assertGreater(far, near)

    def test_comparison(self):
        fn = _benchmark_function()
        cmp = TaylorComparison(fn, 2.0, 5, diff_order=1, precision='single')
        fnd = derive(fn)
        self.assertEqual(cmp.reference, fnd)
        self.assertEqual(cmp.order, 5)
        self.assertEqual(cmp.expansion_point, 2.0)
        self.assertIsType(cmp.expansion_point, np.float32)
        self.assertEqual(cmp.exact(2.5), fnd.eval(2.5, precision='single'))
        self.assertEqual(cmp.approx(2.5),
                         taylor_eval(fnd, 2.0, 2.5, 5, precision='single'))
        self.assertLess(cmp.error(2.5), 1e-2)
        self.assertEqual(cmp.error(2.0), abs(cmp.approx(2.0) - cmp.exact(2.0)))

    def test_max_error(self):
        cmp = TaylorComparison(_benchmark_function(), 2.0, 4)
        x, delta = cmp.max_error((1.5, 2.5))
        self.assertTrue(1.5 <= x <= 2.5)
        self.assertGreaterEqual(delta, cmp.error(1.5) * 0.999)
        self.assertGreaterEqual(delta, cmp.error(2.5) * 0.999)
        self.assertGreaterEqual(delta, cmp.error(2.2))

    def test_invalid_points(self):
        cmp = TaylorComparison(_benchmark_function(), 2.0, 4)
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            self.assertIsNan(cmp.exact(0.5))
            self.assertIsNan(cmp.exact(-1.0))
            self.assertTrue(np.isfinite(cmp.approx(-1.0)))


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
