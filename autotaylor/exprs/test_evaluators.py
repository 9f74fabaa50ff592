#!/usr/bin/env python3

import threading
import unittest
import sys
import warnings

import numpy as np
from mpmath import mp

from testutils import TaylorTestCase
from .common import is_zero_function, _zero_function
from .context import FloatContext, MpContext, get_context
from .derive import derive, derivative_chain
from .evaluators import NodeEvaluator
from .nodes import Constant, Add, Mul, Div, Exp, Ln, Pow, ZERO, PI, E, X


class TestNodeEvaluator(TaylorTestCase):
    def test_values(self):
        f = Pow(X, 3).evaluator()
        self.assertEqual(f(2.0), 8.0)
        self.assertAlmostEqual(f.diff(2.0), 12.0)
        self.assertAlmostEqual(f.diff(2.0, 2), 12.0)
        self.assertAlmostEqual(f.diff(2.0, 3), 6.0)
        self.assertAlmostEqual(f.diff(2.0, 4), 0.0)
        self.assertEqual(f.diff(2.0, 0), f(2.0))

    def test_derivative_cache(self):
        f = Exp(Mul(2, X)).evaluator()
        self.assertEqual(len(f._nodes), 1)
        f.diff(0.5, 3)
        self.assertEqual(len(f._nodes), 4)
        self.assertEqual(len(f._funcs), 4)
        node = f.derivative_node(2)
        f.diff(0.5, 2)
        self.assertIs(f.derivative_node(2), node)
        self.assertAlmostEqual(f.diff(0.5, 3), 8*np.exp(1.0))
        with self.assertRaises(ValueError):
            f.diff(0.5, -1)

    def test_function(self):
        f = Mul(X, X).evaluator()
        df = f.function(1)
        self.assertAlmostEqual(df(1.5), 3.0)
        self.assertAlmostEqual(f.function()(1.5), 2.25)
        self.assertFalse(is_zero_function(df))

    def test_zero_function(self):
        f = Constant(2.0).evaluator()
        self.assertTrue(f.is_zero_function(1))
        self.assertIs(f.function(1), _zero_function)
        self.assertTrue(is_zero_function(f.function(2)))
        self.assertEqual(f.function(1)(17.0), 0)
        g = X.evaluator()
        self.assertFalse(g.is_zero_function(0))
        self.assertFalse(g.is_zero_function(1))
        self.assertTrue(g.is_zero_function(2))
        self.assertTrue(ZERO.evaluator().is_zero_function())

    def test_precision(self):
        f = Pow(Ln(X), Div(PI, X)).evaluator(precision='single')
        self.assertEqual(f.precision, 'single')
        self.assertFalse(f.use_mp)
        self.assertIsType(f(2.5), np.float32)
        self.assertIsType(f.diff(2.5), np.float32)
        self.assertIsType(f.diff(2.5, 3), np.float32)
        g = Pow(Ln(X), Div(PI, X)).evaluator()
        self.assertEqual(g.precision, 'double')
        self.assertAlmostEqual(float(f.diff(2.5)), float(g.diff(2.5)), delta=1e-5)

    def test_mpmath(self):
        f = Exp(X).evaluator(use_mp=True, dps=40)
        self.assertTrue(f.use_mp)
        self.assertEqual(f.precision, 'mp')
        value = f.diff(1, 5)
        self.assertIsInstance(value, mp.mpf)
        with mp.workdps(40):
            self.assertTrue(mp.almosteq(value, mp.e, rel_eps=mp.mpf('1e-38')))
        self.assertEqual(mp.dps, 15)

    def test_no_warnings(self):
        f = Div(1, Add(X, -1)).evaluator()
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            self.assertEqual(f(1.0), np.inf)
            self.assertEqual(f.diff(1.0), -np.inf)
            self.assertIsNan(Div(Add(X, -1), Add(X, -1)).evaluator()(1.0))

    def test_threads_share_evaluator(self):
        expr = Pow(Ln(X), Div(PI, X))
        expected = [float(derive(expr, n).eval(2.5)) for n in range(5)]
        wrong = []
        for _ in range(10):
            f = expr.evaluator()
            barrier = threading.Barrier(8)
            def work(n):
                barrier.wait()
                value = float(f.diff(2.5, n))
                if value != expected[n]:
                    wrong.append((n, value))
            threads = [threading.Thread(target=work, args=(1 + i % 4,))
                       for i in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
            self.assertEqual(len(f._funcs), 5)
            self.assertEqual(f._nodes[:5], derivative_chain(expr, 5))
        self.assertEqual(wrong, [])

    def test_invalid(self):
        with self.assertRaises(TypeError):
            NodeEvaluator(1.0, get_context())
        self.assertIn("x + -1", repr(Add(X, -1).evaluator()))


class TestContext(TaylorTestCase):
    def test_get_context(self):
        self.assertIsInstance(get_context(), FloatContext)
        self.assertIsInstance(get_context(use_mp=True), MpContext)
        self.assertEqual(get_context(precision='single').dtype, np.float32)
        self.assertEqual(get_context(use_mp=True, precision='single').precision, 'mp')
        with self.assertRaises(ValueError):
            get_context(precision='quad')

    def test_float_convert(self):
        ctx = FloatContext('single')
        self.assertIsType(ctx.convert(2), np.float32)
        self.assertIsType(ctx.convert(mp.mpf('2.5')), np.float32)
        self.assertIsType(ctx.zero, np.float32)

    def test_mp_guards(self):
        ctx = MpContext()
        self.assertIsInstance(ctx.convert(np.float32(1.5)), mp.mpf)
        self.assertEqual(ctx.convert(np.float32(1.5)), mp.mpf('1.5'))
        self.assertEqual(ctx.div(mp.mpf(1), mp.zero), mp.inf)
        self.assertTrue(ctx.isnan(ctx.div(mp.nan, mp.zero)))
        self.assertTrue(ctx.isnan(ctx.log(mp.nan)))
        self.assertTrue(ctx.isnan(ctx.power(mp.nan, mp.one)))
        self.assertFalse(ctx.isfinite(ctx.log(mp.zero)))
        self.assertAlmostEqual(float(ctx.power(mp.mpf(-8), mp.mpf(3))), -512.0)

    def test_mp_named_constants(self):
        value = PI.eval(0, use_mp=True, dps=30)
        with mp.workdps(30):
            self.assertLess(abs(value - mp.pi), mp.mpf('1e-28'))
            value = Mul(E, X).eval(2, use_mp=True, dps=30)
            self.assertLess(abs(value - 2*mp.e), mp.mpf('1e-28'))
        # constants named like pi but of a different value are kept
        self.assertEqual(Constant(3.0, name='pi').eval(0, use_mp=True), 3)
        self.assertEqual(MpContext().constant(2.5), mp.mpf('2.5'))

    def test_infinite_exponents(self):
        mpctx, fctx = MpContext(), FloatContext()
        cases = [(-2.0, np.inf), (-0.5, -np.inf), (-0.5, np.inf),
                 (-2.0, -np.inf), (-1.0, np.inf), (0.0, np.inf), (3.0, np.inf)]
        for a, b in cases:
            with self.subTest(a=a, b=b):
                with fctx.scope():
                    expected = fctx.power(fctx.convert(a), fctx.convert(b))
                value = mpctx.power(mpctx.convert(a), mpctx.convert(b))
                self.assertEqual(float(value), float(expected))
        self.assertEqual(Pow(X, Div(1, ZERO)).eval(-2, use_mp=True), mp.inf)

    def test_mp_scope(self):
        ctx = MpContext(dps=50)
        with ctx.scope():
            self.assertEqual(mp.dps, 50)
        self.assertEqual(mp.dps, 15)
        with MpContext().scope():
            self.assertEqual(mp.dps, 15)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
